"""Repository root discovery for arbitrary file paths."""

from pathlib import Path

from gac.constants import DEFAULT_GIT_TIMEOUT_SECONDS, GIT_ERROR_MARKER
from gac.exceptions import GitError
from gac.git.base import GitRunner
from gac.logging import get_logger

logger = get_logger("git.locator")


def chomp(text: str) -> str:
    """Strip surrounding whitespace and newlines from git output."""
    return text.strip()


def find_root(file_path: str | Path, timeout: int = DEFAULT_GIT_TIMEOUT_SECONDS) -> Path | None:
    """Find the root of the repository containing a file.

    Runs ``git rev-parse --show-toplevel`` from the file's directory.

    Args:
        file_path: File whose repository is wanted
        timeout: Timeout in seconds for the git query

    Returns:
        Absolute repository root, or None when the file is not inside
        a repository
    """
    directory = Path(file_path).expanduser().absolute().parent
    if not directory.is_dir():
        logger.debug(f"No such directory: {directory}")
        return None

    try:
        result = GitRunner(directory, timeout=timeout)._run(
            "rev-parse", "--show-toplevel", check=False
        )
    except GitError as e:
        logger.warning(f"Repository lookup failed for {file_path}: {e}")
        return None

    output = result.stdout + result.stderr
    if result.returncode != 0 or GIT_ERROR_MARKER.search(output):
        logger.debug(f"Not in a repository: {file_path}")
        return None

    root = result.stdout.rstrip("\n")
    if not root:
        return None
    return Path(root)


def relative_file_name(
    file_path: str | Path,
    root: Path | None = None,
    timeout: int = DEFAULT_GIT_TIMEOUT_SECONDS,
) -> str | None:
    """Compute a file's path relative to its repository root.

    The root is looked up from the file's own directory unless given.

    Args:
        file_path: File inside a repository
        root: Known repository root
        timeout: Timeout in seconds for the root lookup

    Returns:
        POSIX-style relative path, or None when the file is not inside
        a repository
    """
    if root is None:
        root = find_root(file_path, timeout=timeout)
        if root is None:
            return None

    path = Path(file_path).expanduser().absolute()
    for candidate in (path, path.resolve()):
        try:
            return chomp(candidate.relative_to(root.resolve()).as_posix())
        except ValueError:
            pass
        try:
            return chomp(candidate.relative_to(root).as_posix())
        except ValueError:
            pass

    # Fall back to stripping the textual prefix
    text = str(path)
    prefix = str(root)
    if text.startswith(prefix):
        text = text[len(prefix):]
    return chomp(text.lstrip("/\\").replace("\\", "/"))
