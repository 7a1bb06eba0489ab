"""Background ``git push`` with an interactive credential-prompt bridge.

The push runs as an asyncio subprocess. Its merged stdout/stderr stream is
read chunk by chunk and every chunk goes through the job's output filter.
When the filter recognizes an ssh passphrase or password prompt, it asks
the user for the secret and writes it to the process's stdin. When the
process exits, the completion callback reports the exit status once.

Both callbacks run on the event loop that started the push, so they never
run concurrently with each other or with save handling.

The child starts in a new session with no controlling terminal, and its
environment disables graphical askpass helpers. ssh and git then write
their credential prompts to the output pipe and read the answer from
stdin, where the filter can reach them.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from gac.constants import (
    PASSPHRASE_PROMPT,
    PASSWORD_PROMPT,
    PUSH_READ_CHUNK_BYTES,
    USER_PASSWORD_PROMPT,
    PushState,
)
from gac.exceptions import PushError
from gac.logging import get_logger

console = Console()
logger = get_logger("git.push")

CredentialPrompt = Callable[[str], str]
Notifier = Callable[[str], None]
OutputFilter = Callable[["PushJob", str], None]
CompletionCallback = Callable[["PushJob", str], None]


def prompt_secret(label: str) -> str:
    """Ask the user for a secret without echoing it."""
    return Prompt.ask(escape(label), password=True, console=console)


def notify(message: str) -> None:
    """Show a status message to the user."""
    console.print(message)


def match_credential_prompt(chunk: str) -> str | None:
    """Recognize a credential prompt in a chunk of push output.

    Args:
        chunk: Decoded output of the push process

    Returns:
        Label to show when asking the user, or None if the chunk holds
        no known prompt
    """
    match = PASSPHRASE_PROMPT.search(chunk)
    if match:
        return f"Passphrase for key {match.group('key')}: "
    match = USER_PASSWORD_PROMPT.search(chunk)
    if match:
        return f"{match.group('user')}'s password: "
    if PASSWORD_PROMPT.search(chunk):
        return "Password: "
    return None


def push_environment() -> dict[str, str]:
    """Environment for the push process, with graphical askpass disabled."""
    env = {k: v for k, v in os.environ.items() if k not in ("DISPLAY", "SSH_ASKPASS")}
    env["SSH_ASKPASS_REQUIRE"] = "never"
    return env


def exit_status(returncode: int) -> str:
    """Describe how the push process ended, newline-terminated."""
    if returncode == 0:
        return "finished\n"
    return f"exited abnormally with code {returncode}\n"


@dataclass
class PushJob:
    """One in-flight background push.

    Owned by the PushWorker that started it. ``on_output`` may run any
    number of times before ``on_complete`` runs exactly once.
    """

    repo_root: Path
    args: list[str]
    on_output: OutputFilter
    on_complete: CompletionCallback
    state: PushState = PushState.SPAWNED
    process: asyncio.subprocess.Process | None = None
    task: asyncio.Task[None] | None = None
    status: str | None = None
    returncode: int | None = None
    error: PushError | None = None
    prompts_answered: int = 0
    output: list[str] = field(default_factory=list)

    @property
    def done(self) -> bool:
        return self.state is PushState.TERMINATED

    async def wait(self) -> str | None:
        """Wait for the push to terminate.

        Returns:
            Final status text without its trailing newline
        """
        if self.task is not None:
            await self.task
        return self.status


class PushWorker:
    """Starts background pushes and bridges their credential prompts."""

    def __init__(
        self,
        prompt: CredentialPrompt | None = None,
        notifier: Notifier | None = None,
        push_args: list[str] | None = None,
    ) -> None:
        """Initialize push worker.

        Args:
            prompt: Masked "ask for a secret" capability
            notifier: User notification channel for completion messages
            push_args: git arguments, defaults to ``["push"]``
        """
        self.prompt = prompt or prompt_secret
        self.notifier = notifier or notify
        self.push_args = list(push_args or ["push"])

    def start_push(self, repo_root: str | Path) -> PushJob:
        """Start ``git push`` in the background.

        Must be called from a running event loop. Returns immediately.

        Args:
            repo_root: Repository to push from

        Returns:
            The PushJob tracking the new process

        Raises:
            RuntimeError: If no event loop is running
        """
        loop = asyncio.get_running_loop()
        job = PushJob(
            repo_root=Path(repo_root),
            args=list(self.push_args),
            on_output=self.filter_output,
            on_complete=self.report_completion,
        )
        job.task = loop.create_task(self._drive(job), name=f"gac-push:{repo_root}")
        logger.info(f"Started git {' '.join(job.args)} in {repo_root}")
        return job

    def filter_output(self, job: PushJob, chunk: str) -> None:
        """Answer a credential prompt found in a chunk of push output.

        Args:
            job: Push the chunk came from
            chunk: Decoded output text
        """
        label = match_credential_prompt(chunk)
        if label is None:
            return

        secret = self.prompt(label)
        if job.process is None or job.process.stdin is None:
            logger.warning("Push process has no stdin, dropping credential")
            return
        job.process.stdin.write(f"{secret}\n".encode())
        job.prompts_answered += 1
        logger.info(f"Answered credential prompt: {label.strip()}")

    def report_completion(self, job: PushJob, status: str) -> None:
        """Notify the user how the push ended."""
        text = status.rstrip("\n")
        self.notifier(f"Git push {escape(text)}")

    async def _drive(self, job: PushJob) -> None:
        """Spawn the push process, feed its output to the filter, then complete."""
        try:
            job.process = await asyncio.create_subprocess_exec(
                "git",
                *job.args,
                cwd=str(job.repo_root),
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                env=push_environment(),
                start_new_session=True,
            )
        except OSError as e:
            logger.error(f"Failed to start git push in {job.repo_root}: {e}")
            self._complete(job, f"failed: {e}\n", None)
            return
        except asyncio.CancelledError:
            self._complete(job, "killed\n", None)
            raise

        job.state = PushState.RUNNING
        process = job.process
        try:
            if process.stdout is None:
                raise RuntimeError("push process has no stdout pipe")
            while True:
                data = await process.stdout.read(PUSH_READ_CHUNK_BYTES)
                if not data:
                    break
                chunk = data.decode(errors="replace")
                job.output.append(chunk)
                logger.debug(f"push output: {chunk.rstrip()}")
                try:
                    job.on_output(job, chunk)
                    if process.stdin is not None:
                        await process.stdin.drain()
                except Exception as e:  # noqa: BLE001 - push failures are reported, never raised
                    logger.error(f"Push output handling failed: {e}")
            returncode = await process.wait()
        except asyncio.CancelledError:
            if process.returncode is None:
                process.kill()
            self._complete(job, "killed\n", process.returncode)
            raise

        self._complete(job, exit_status(returncode), returncode)

    def _complete(self, job: PushJob, status: str, returncode: int | None) -> None:
        """Mark the job terminated and run its completion callback."""
        if job.done:
            return
        job.state = PushState.TERMINATED
        job.status = status.rstrip("\n")
        job.returncode = returncode
        if returncode != 0:
            job.error = PushError(
                f"Push {job.status}",
                command=" ".join(["git", *job.args]),
                exit_code=returncode,
            )
            logger.warning(f"git push {job.status} in {job.repo_root}")
        else:
            logger.info(f"git push finished in {job.repo_root}")

        try:
            job.on_complete(job, status)
        except Exception as e:  # noqa: BLE001 - push failures are reported, never raised
            logger.error(f"Push completion callback failed: {e}")
