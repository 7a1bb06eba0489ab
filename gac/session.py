"""Per-file sessions carrying the auto-push flag and the mode toggle."""

from dataclasses import dataclass
from pathlib import Path

from gac.logging import get_logger

logger = get_logger("session")


def normalize_path(path: str | Path) -> Path:
    """Absolute, user-expanded form of a path used as a session key."""
    return Path(path).expanduser().absolute()


@dataclass
class FileSession:
    """Settings for one open file.

    Created when the file is opened, discarded when it is closed.
    ``enabled`` controls whether saves of this file are intercepted.
    """

    path: Path
    auto_push_enabled: bool = False
    enabled: bool = True


class SessionRegistry:
    """Owns the FileSession of every open file."""

    def __init__(self, auto_push_default: bool = False) -> None:
        """Initialize registry.

        Args:
            auto_push_default: auto_push_enabled value for newly opened files
        """
        self.auto_push_default = auto_push_default
        self._sessions: dict[Path, FileSession] = {}

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str | Path):
            return False
        return normalize_path(path) in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def open(self, path: str | Path, auto_push: bool | None = None) -> FileSession:
        """Open a file, or return its session if already open.

        Args:
            path: File to open
            auto_push: Per-file override of the default auto-push flag

        Returns:
            The file's session
        """
        key = normalize_path(path)
        session = self._sessions.get(key)
        if session is None:
            session = FileSession(path=key, auto_push_enabled=self.auto_push_default)
            self._sessions[key] = session
            logger.debug(f"Opened session for {key}")
        if auto_push is not None:
            session.auto_push_enabled = auto_push
        return session

    def get(self, path: str | Path) -> FileSession | None:
        """Get the session of an open file."""
        return self._sessions.get(normalize_path(path))

    def close(self, path: str | Path) -> None:
        """Discard a file's session."""
        if self._sessions.pop(normalize_path(path), None) is not None:
            logger.debug(f"Closed session for {path}")

    def enable(self, path: str | Path) -> FileSession:
        """Start intercepting saves of a file, opening it if needed."""
        session = self.open(path)
        session.enabled = True
        logger.info(f"Auto-commit enabled for {session.path}")
        return session

    def disable(self, path: str | Path) -> None:
        """Stop intercepting saves of an open file."""
        session = self.get(path)
        if session is not None:
            session.enabled = False
            logger.info(f"Auto-commit disabled for {session.path}")

    def set_auto_push(self, path: str | Path, enabled: bool) -> FileSession:
        """Override auto-push for one file."""
        return self.open(path, auto_push=enabled)

    def active(self) -> list[FileSession]:
        """Sessions whose saves are intercepted."""
        return [s for s in self._sessions.values() if s.enabled]
