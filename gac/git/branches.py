"""Branch inspection and work-in-progress branch switching."""

from pathlib import Path

from gac.constants import CURRENT_BRANCH_MARKER, DEFAULT_GIT_TIMEOUT_SECONDS, WIP_PREFIX
from gac.git.base import GitRunner
from gac.git.locator import chomp, find_root
from gac.logging import get_logger

logger = get_logger("git.branches")


def parse_current_branch(raw: str | None) -> str | None:
    """Return the branch marked as current in ``git branch`` output.

    Args:
        raw: Output of ``git branch``, or None outside a repository

    Returns:
        Current branch name, or None if no line carries the marker
    """
    if raw is None:
        return None
    for line in raw.splitlines():
        stripped = line.lstrip()
        if stripped.startswith(CURRENT_BRANCH_MARKER) and stripped[1:2].isspace():
            return chomp(stripped[1:])
    return None


def parse_branch_names(raw: str | None) -> list[str]:
    """Split ``git branch`` output into plain branch names.

    Args:
        raw: Output of ``git branch``, or None outside a repository

    Returns:
        Branch names in listing order, without the current-branch marker
    """
    if raw is None:
        return []
    return [token for token in raw.split() if token != CURRENT_BRANCH_MARKER]


def wip_branch_name(branch: str) -> str:
    """Name of the work-in-progress branch for a branch."""
    return f"{WIP_PREFIX}{branch}"


def is_wip_branch(branch: str) -> bool:
    """Check whether a branch follows the work-in-progress convention."""
    return branch.startswith(WIP_PREFIX)


class BranchInspector:
    """Read-only branch queries against a repository root.

    All methods accept None for the root and then report nothing
    instead of raising.
    """

    def __init__(self, timeout: int = DEFAULT_GIT_TIMEOUT_SECONDS) -> None:
        self.timeout = timeout

    def list_raw(self, root: Path | None) -> str | None:
        """Return the raw output of ``git branch``.

        Args:
            root: Repository root

        Returns:
            Branch listing, or None when there is no repository
        """
        if root is None:
            return None
        result = GitRunner(root, timeout=self.timeout)._run("branch")
        return result.stdout

    def current_branch(self, root: Path | None) -> str | None:
        """Get the currently checked-out branch of a repository."""
        return parse_current_branch(self.list_raw(root))

    def branch_names(self, root: Path | None) -> list[str]:
        """Get all local branch names of a repository."""
        return parse_branch_names(self.list_raw(root))


class BranchSwitcher:
    """Moves a repository onto its work-in-progress branch."""

    def __init__(
        self,
        inspector: BranchInspector | None = None,
        timeout: int = DEFAULT_GIT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize branch switcher.

        Args:
            inspector: Branch inspector to query with
            timeout: Timeout in seconds for checkout commands
        """
        self.timeout = timeout
        self.inspector = inspector or BranchInspector(timeout=timeout)

    def ensure_wip_branch(self, file_path: str | Path) -> str | None:
        """Make sure the file's repository is on a ``wip/`` branch.

        Checks out ``wip/<current>`` when the current branch does not
        follow the convention, creating it if it does not exist yet.

        Args:
            file_path: File whose repository is switched

        Returns:
            Name of the wip branch now checked out, or None when the file
            is not in a repository or HEAD is not on a branch
        """
        root = find_root(file_path, timeout=self.timeout)
        raw = self.inspector.list_raw(root)
        current = parse_current_branch(raw)
        if root is None or current is None:
            return None
        if current.startswith("("):
            # "(HEAD detached at ...)"
            logger.warning(f"Not on a branch in {root}: {current}")
            return None

        if is_wip_branch(current):
            logger.debug(f"Already on wip branch {current}")
            return current

        target = wip_branch_name(current)
        runner = GitRunner(root, timeout=self.timeout)
        if target in parse_branch_names(raw):
            runner._run("checkout", target)
            logger.info(f"Checked out {target}")
        else:
            runner._run("checkout", "-b", target)
            logger.info(f"Created branch {target} from {current}")
        return target
