"""Save event handling: commit every save, push when enabled."""

from __future__ import annotations

from gac.config import GacConfig
from gac.git.branches import BranchSwitcher
from gac.git.commit import CommitExecutor
from gac.git.push import CredentialPrompt, Notifier, PushJob, PushWorker
from gac.logging import clear_file_context, get_logger, set_file_context
from gac.session import FileSession

logger = get_logger("handler")


class SaveEventHandler:
    """Runs the commit/push workflow for one saved file.

    The commit is synchronous and its errors propagate to the caller.
    The push is started in the background and reports through its own
    completion callback.
    """

    def __init__(
        self,
        committer: CommitExecutor | None = None,
        pusher: PushWorker | None = None,
        switcher: BranchSwitcher | None = None,
        wip_on_save: bool = False,
    ) -> None:
        """Initialize save handler.

        Args:
            committer: Commit executor
            pusher: Push worker
            switcher: Branch switcher, used only when wip_on_save is set
            wip_on_save: Move to the wip branch before each commit
        """
        self.committer = committer or CommitExecutor()
        self.pusher = pusher or PushWorker()
        self.switcher = switcher or BranchSwitcher()
        self.wip_on_save = wip_on_save

    @classmethod
    def from_config(
        cls,
        config: GacConfig,
        prompt: CredentialPrompt | None = None,
        notifier: Notifier | None = None,
    ) -> SaveEventHandler:
        """Build a handler wired from configuration."""
        timeout = config.git.timeout_seconds
        return cls(
            committer=CommitExecutor(timeout=timeout),
            pusher=PushWorker(prompt=prompt, notifier=notifier, push_args=config.push_args()),
            switcher=BranchSwitcher(timeout=timeout),
            wip_on_save=config.wip_on_save,
        )

    def on_save(self, session: FileSession) -> PushJob | None:
        """Handle one save of a file.

        Args:
            session: Session of the saved file

        Returns:
            The started push job, or None when auto-push is off

        Raises:
            NotInRepositoryError: If the file is not inside a repository
            CommitError: If the commit fails
        """
        set_file_context(file=session.path)
        try:
            if self.wip_on_save:
                self.switcher.ensure_wip_branch(session.path)

            result = self.committer.commit(session.path)

            if not session.auto_push_enabled:
                return None
            return self.pusher.start_push(result.repo_root)
        finally:
            clear_file_context()
