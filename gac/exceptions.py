"""GAC exception hierarchy."""

from typing import Any


class GacError(Exception):
    """Base exception for all GAC errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(GacError):
    """Error in GAC configuration."""

    pass


class GitError(GacError):
    """Error in git operations."""

    def __init__(
        self,
        message: str,
        command: str | None = None,
        exit_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.command = command
        self.exit_code = exit_code


class NotInRepositoryError(GitError):
    """File is not inside a git working tree."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message, details={"path": path})
        self.path = path


class CommitError(GitError):
    """Staging or committing a saved file failed."""

    pass


class PushError(GitError):
    """Push to the remote failed."""

    pass
