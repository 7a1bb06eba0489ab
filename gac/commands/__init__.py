"""GAC CLI commands."""

from gac.commands.repo import branch, root, wip
from gac.commands.save_cmd import commit_cmd, push_cmd
from gac.commands.watch import watch

__all__ = [
    "branch",
    "commit_cmd",
    "push_cmd",
    "root",
    "watch",
    "wip",
]
