"""Tests for per-file sessions."""

from pathlib import Path

from gac.session import FileSession, SessionRegistry, normalize_path


class TestSessionRegistry:
    """Tests for SessionRegistry."""

    def test_open_uses_default(self, tmp_path: Path) -> None:
        registry = SessionRegistry(auto_push_default=True)
        session = registry.open(tmp_path / "a.txt")
        assert session.auto_push_enabled is True
        assert session.enabled is True

    def test_open_override(self, tmp_path: Path) -> None:
        registry = SessionRegistry(auto_push_default=True)
        session = registry.open(tmp_path / "a.txt", auto_push=False)
        assert session.auto_push_enabled is False

    def test_flag_is_per_file(self, tmp_path: Path) -> None:
        registry = SessionRegistry()
        a = registry.open(tmp_path / "a.txt")
        b = registry.open(tmp_path / "b.txt")
        registry.set_auto_push(tmp_path / "a.txt", True)
        assert a.auto_push_enabled is True
        assert b.auto_push_enabled is False

    def test_open_is_idempotent(self, tmp_path: Path) -> None:
        registry = SessionRegistry()
        first = registry.open(tmp_path / "a.txt")
        first.auto_push_enabled = True
        assert registry.open(str(tmp_path / "a.txt")) is first
        assert len(registry) == 1

    def test_close_discards_session(self, tmp_path: Path) -> None:
        registry = SessionRegistry()
        registry.open(tmp_path / "a.txt", auto_push=True)
        registry.close(tmp_path / "a.txt")
        assert tmp_path / "a.txt" not in registry
        # Reopening starts again from the default
        assert registry.open(tmp_path / "a.txt").auto_push_enabled is False

    def test_close_unknown_is_noop(self, tmp_path: Path) -> None:
        SessionRegistry().close(tmp_path / "never-opened.txt")

    def test_enable_disable(self, tmp_path: Path) -> None:
        registry = SessionRegistry()
        session = registry.enable(tmp_path / "a.txt")
        assert registry.active() == [session]

        registry.disable(tmp_path / "a.txt")
        assert session.enabled is False
        assert registry.active() == []
        assert tmp_path / "a.txt" in registry

    def test_relative_paths_normalized(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        registry = SessionRegistry()
        session = registry.open("a.txt")
        assert session.path == normalize_path(tmp_path / "a.txt")
        assert registry.get(tmp_path / "a.txt") is session

    def test_contains_rejects_other_types(self) -> None:
        assert 42 not in SessionRegistry()


class TestFileSession:
    """Tests for FileSession defaults."""

    def test_defaults(self, tmp_path: Path) -> None:
        session = FileSession(path=tmp_path / "a.txt")
        assert session.auto_push_enabled is False
        assert session.enabled is True
