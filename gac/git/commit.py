"""Stage-and-commit of a single saved file."""

from dataclasses import dataclass
from pathlib import Path

from gac.constants import DEFAULT_GIT_TIMEOUT_SECONDS
from gac.exceptions import CommitError, NotInRepositoryError
from gac.git.base import GitRunner
from gac.git.locator import find_root, relative_file_name
from gac.logging import get_logger

logger = get_logger("git.commit")


@dataclass(frozen=True)
class CommitResult:
    """Outcome of committing one file."""

    repo_root: Path
    file_path: Path
    message: str


class CommitExecutor:
    """Commits a file using its repository-relative path as the message."""

    def __init__(self, timeout: int = DEFAULT_GIT_TIMEOUT_SECONDS) -> None:
        self.timeout = timeout

    def commit(self, file_path: str | Path) -> CommitResult:
        """Stage and commit a single file.

        Args:
            file_path: File that was saved

        Returns:
            CommitResult describing the new commit

        Raises:
            NotInRepositoryError: If the file is not inside a repository
            CommitError: If ``git add`` or ``git commit`` fails, e.g. when
                there is nothing to commit
        """
        path = Path(file_path).expanduser().absolute()
        root = find_root(path, timeout=self.timeout)
        if root is None:
            raise NotInRepositoryError(f"Not a git repository: {path.parent}", path=str(path))

        message = relative_file_name(path, root=root)
        runner = GitRunner(root, timeout=self.timeout)
        runner._run("add", "--", str(path), error_class=CommitError)
        runner._run("commit", "-m", message, error_class=CommitError)

        logger.info(f"Committed {message}", extra={"file": str(path), "repo": str(root)})
        return CommitResult(repo_root=root, file_path=path, message=message)
