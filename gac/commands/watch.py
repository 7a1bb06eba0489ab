"""GAC watch command - commit files every time they are saved."""

import asyncio
import contextlib
import signal

import click
from rich.console import Console
from rich.markup import escape

from gac.exceptions import GacError
from gac.handler import SaveEventHandler
from gac.logging import get_logger
from gac.session import SessionRegistry
from gac.watcher import SaveWatcher

console = Console()
logger = get_logger("watch")


async def watch_until_stopped(watcher: SaveWatcher) -> None:
    """Run a watcher until SIGINT or SIGTERM."""
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # Not available on Windows; KeyboardInterrupt still ends the loop there
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop_event.set)
    await watcher.run(stop_event)


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option(
    "--push/--no-push",
    default=None,
    help="Push after each commit (default: auto_push_default from config)",
)
@click.pass_context
def watch(ctx: click.Context, files: tuple[str, ...], push: bool | None) -> None:
    """Commit FILES after every save until interrupted.

    Examples:

        gac watch notes.md

        gac watch --push src/app.py README.md
    """
    config = ctx.obj["config"]
    try:
        registry = SessionRegistry(auto_push_default=config.auto_push_default)
        handler = SaveEventHandler.from_config(config)
        watcher = SaveWatcher(
            registry,
            handler,
            debounce_seconds=config.watch.debounce_seconds,
        )
        for file in files:
            session = watcher.watch(file, auto_push=push)
            mode = "commit + push" if session.auto_push_enabled else "commit"
            console.print(f"Watching [cyan]{escape(str(session.path))}[/cyan] ({mode})")

        asyncio.run(watch_until_stopped(watcher))
        console.print("[dim]Stopped watching[/dim]")

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        raise SystemExit(130) from None
    except GacError as e:
        console.print(f"\n[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e
