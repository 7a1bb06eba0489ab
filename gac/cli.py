"""GAC command-line interface."""

import click
from rich.console import Console
from rich.markup import escape

from gac import __version__
from gac.commands import branch, commit_cmd, push_cmd, root, watch, wip
from gac.config import GacConfig
from gac.exceptions import ConfigurationError
from gac.logging import setup_logging

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="gac")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file (default: .gac/config.yaml)",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warn", "error"]),
    default=None,
    help="Override the configured log level",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, log_level: str | None) -> None:
    """GAC - commit files automatically every time they are saved."""
    ctx.ensure_object(dict)

    try:
        config = GacConfig.load(config_path)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise SystemExit(2) from e

    setup_logging(
        level=log_level or config.logging.level,
        log_dir=config.logging.directory,
        json_output=config.logging.json_output,
    )
    ctx.obj["config"] = config


cli.add_command(watch)
cli.add_command(commit_cmd, name="commit")
cli.add_command(push_cmd, name="push")
cli.add_command(root)
cli.add_command(branch)
cli.add_command(wip)


if __name__ == "__main__":
    cli()
