"""GAC git package -- structured git operations.

Re-exports core classes for convenient access:
    from gac.git import CommitExecutor, PushWorker, find_root
"""

from gac.git.base import GitRunner
from gac.git.branches import (
    BranchInspector,
    BranchSwitcher,
    parse_branch_names,
    parse_current_branch,
)
from gac.git.commit import CommitExecutor, CommitResult
from gac.git.locator import chomp, find_root, relative_file_name
from gac.git.push import PushJob, PushWorker, match_credential_prompt

__all__ = [
    "GitRunner",
    "find_root",
    "relative_file_name",
    "chomp",
    "BranchInspector",
    "BranchSwitcher",
    "parse_branch_names",
    "parse_current_branch",
    "CommitExecutor",
    "CommitResult",
    "PushJob",
    "PushWorker",
    "match_credential_prompt",
]
