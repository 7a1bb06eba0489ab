"""GAC repository commands - root, branch and wip."""

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gac.exceptions import GitError
from gac.git.branches import BranchInspector, BranchSwitcher, parse_branch_names, parse_current_branch
from gac.git.locator import find_root
from gac.logging import get_logger

console = Console()
logger = get_logger("repo")


@click.command()
@click.argument("file", type=click.Path())
@click.pass_context
def root(ctx: click.Context, file: str) -> None:
    """Print the repository root containing FILE."""
    repo_root = find_root(file, timeout=ctx.obj["config"].git.timeout_seconds)
    if repo_root is None:
        console.print(f"[red]Not in a git repository:[/red] {escape(file)}")
        raise SystemExit(1)
    click.echo(str(repo_root))


@click.command()
@click.argument("file", type=click.Path())
@click.pass_context
def branch(ctx: click.Context, file: str) -> None:
    """List the branches of the repository containing FILE."""
    timeout = ctx.obj["config"].git.timeout_seconds
    try:
        raw = BranchInspector(timeout=timeout).list_raw(find_root(file, timeout=timeout))
        if raw is None:
            console.print(f"[red]Not in a git repository:[/red] {escape(file)}")
            raise SystemExit(1)

        current = parse_current_branch(raw)
        table = Table(title="Branches")
        table.add_column("", width=1)
        table.add_column("Branch")
        for name in parse_branch_names(raw):
            marker = "*" if name == current else ""
            style = "green" if name == current else None
            table.add_row(marker, name, style=style)
        console.print(table)

    except GitError as e:
        console.print(f"\n[red]Git error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e


@click.command()
@click.argument("file", type=click.Path())
@click.pass_context
def wip(ctx: click.Context, file: str) -> None:
    """Switch the repository containing FILE to its wip/ branch.

    Creates wip/<current-branch> when it does not exist yet. Does nothing
    when already on a wip/ branch.
    """
    try:
        target = BranchSwitcher(timeout=ctx.obj["config"].git.timeout_seconds).ensure_wip_branch(file)
        if target is None:
            console.print(f"[yellow]No branch to switch from:[/yellow] {escape(file)}")
            raise SystemExit(1)
        console.print(f"On branch [cyan]{escape(target)}[/cyan]")

    except GitError as e:
        console.print(f"\n[red]Git error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e
