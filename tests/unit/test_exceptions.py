"""Tests for the GAC exception hierarchy."""

from gac.exceptions import (
    CommitError,
    ConfigurationError,
    GacError,
    GitError,
    NotInRepositoryError,
    PushError,
)


class TestExceptions:
    """Tests for exception formatting and hierarchy."""

    def test_str_without_details(self) -> None:
        assert str(GacError("boom")) == "boom"

    def test_str_with_details(self) -> None:
        assert str(GacError("boom", details={"a": 1})) == "boom: {'a': 1}"

    def test_git_error_fields(self) -> None:
        error = GitError("failed", command="git commit", exit_code=1)
        assert error.command == "git commit"
        assert error.exit_code == 1

    def test_not_in_repository(self) -> None:
        error = NotInRepositoryError("Not a git repository: /x", path="/x/a.txt")
        assert error.path == "/x/a.txt"
        assert "/x/a.txt" in str(error)

    def test_hierarchy(self) -> None:
        for cls in (NotInRepositoryError, CommitError, PushError):
            assert issubclass(cls, GitError)
        assert issubclass(ConfigurationError, GacError)
