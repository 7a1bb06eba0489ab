"""GAC commit and push commands - run one save event by hand."""

import asyncio

import click
from rich.console import Console
from rich.markup import escape

from gac.exceptions import GitError
from gac.git.locator import find_root
from gac.git.push import PushJob, PushWorker
from gac.handler import SaveEventHandler
from gac.logging import get_logger
from gac.session import FileSession, SessionRegistry

console = Console()
logger = get_logger("save")


async def save_once(handler: SaveEventHandler, session: FileSession) -> PushJob | None:
    """Handle one save and wait for the push it started, if any."""
    job = handler.on_save(session)
    if job is not None:
        await job.wait()
    return job


async def push_once(worker: PushWorker, repo_root: str) -> PushJob:
    """Push a repository and wait for the push to finish."""
    job = worker.start_push(repo_root)
    await job.wait()
    return job


@click.command("commit")
@click.argument("file", type=click.Path(dir_okay=False))
@click.option(
    "--push/--no-push",
    default=None,
    help="Push after committing (default: auto_push_default from config)",
)
@click.pass_context
def commit_cmd(ctx: click.Context, file: str, push: bool | None) -> None:
    """Commit FILE as if it had just been saved.

    The commit message is the file's path relative to its repository root.
    """
    config = ctx.obj["config"]
    try:
        registry = SessionRegistry(auto_push_default=config.auto_push_default)
        session = registry.open(file, auto_push=push)
        handler = SaveEventHandler.from_config(config)

        job = asyncio.run(save_once(handler, session))
        console.print(f"[green]Committed[/green] {escape(str(session.path))}")
        if job is not None and job.returncode != 0:
            raise SystemExit(1)

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        raise SystemExit(130) from None
    except GitError as e:
        console.print(f"\n[red]Git error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e


@click.command("push")
@click.argument("file", type=click.Path(dir_okay=False))
@click.pass_context
def push_cmd(ctx: click.Context, file: str) -> None:
    """Push the repository containing FILE, answering credential prompts."""
    config = ctx.obj["config"]
    try:
        root = find_root(file, timeout=config.git.timeout_seconds)
        if root is None:
            console.print(f"[red]Not in a git repository:[/red] {escape(file)}")
            raise SystemExit(1)

        worker = PushWorker(push_args=config.push_args())
        job = asyncio.run(push_once(worker, str(root)))
        raise SystemExit(0 if job.returncode == 0 else 1)

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        raise SystemExit(130) from None
