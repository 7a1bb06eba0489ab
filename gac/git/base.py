"""GitRunner base class -- low-level git command execution."""

import subprocess
from pathlib import Path

from gac.constants import DEFAULT_GIT_TIMEOUT_SECONDS
from gac.exceptions import GitError
from gac.logging import get_logger

logger = get_logger("git.base")


class GitRunner:
    """Blocking git command runner bound to a working directory.

    Every command is passed to git as an argument list and never through
    a shell. The working directory does not have to be a repository root;
    root discovery itself runs from a file's containing directory.
    """

    def __init__(
        self,
        work_dir: str | Path = ".",
        timeout: int = DEFAULT_GIT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize git runner.

        Args:
            work_dir: Directory git is run from
            timeout: Default timeout in seconds for each command
        """
        self.work_dir = Path(work_dir)
        self.timeout = timeout

    def _run(
        self,
        *args: str,
        check: bool = True,
        timeout: int | None = None,
        error_class: type[GitError] = GitError,
    ) -> subprocess.CompletedProcess[str]:
        """Run a git command.

        Args:
            *args: Git command arguments
            check: Whether to raise on non-zero exit
            timeout: Timeout in seconds, defaults to the runner's timeout
            error_class: GitError subclass raised on failure

        Returns:
            Completed process result

        Raises:
            GitError: If the command fails (when check=True), times out,
                or git cannot be started
        """
        timeout = timeout or self.timeout
        cmd = ["git", *args]
        logger.debug(f"Running: {' '.join(cmd)} (cwd={self.work_dir})")

        try:
            return subprocess.run(
                cmd,
                cwd=self.work_dir,
                capture_output=True,
                text=True,
                check=check,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise error_class(
                f"Git command timed out after {timeout}s: {' '.join(args)}",
                command=" ".join(cmd),
                exit_code=-1,
            ) from e
        except subprocess.CalledProcessError as e:
            output = (e.stderr or "").strip() or (e.stdout or "").strip() or str(e)
            raise error_class(
                f"Git command failed: {output}",
                command=" ".join(cmd),
                exit_code=e.returncode,
            ) from e
        except OSError as e:
            raise error_class(
                f"Could not run git in {self.work_dir}: {e}",
                command=" ".join(cmd),
                exit_code=-1,
            ) from e
