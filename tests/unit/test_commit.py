"""Tests for CommitExecutor."""

from pathlib import Path
from unittest.mock import call, patch

import pytest

from gac.exceptions import CommitError, GitError, NotInRepositoryError
from gac.git.commit import CommitExecutor, CommitResult
from tests.conftest import git_output


class TestCommitCommands:
    """Tests for the git commands a commit issues."""

    def test_stage_and_commit_relative_message(self) -> None:
        """Test /repo/src/a.txt is staged and committed as 'src/a.txt'."""
        with (
            patch("gac.git.commit.find_root", return_value=Path("/repo")),
            patch("gac.git.commit.GitRunner._run") as mock_run,
        ):
            result = CommitExecutor().commit("/repo/src/a.txt")

        assert mock_run.call_args_list == [
            call("add", "--", str(Path("/repo/src/a.txt")), error_class=CommitError),
            call("commit", "-m", "src/a.txt", error_class=CommitError),
        ]
        assert result == CommitResult(
            repo_root=Path("/repo"),
            file_path=Path("/repo/src/a.txt"),
            message="src/a.txt",
        )

    def test_not_in_repository(self) -> None:
        """Test no git add/commit runs without a repository root."""
        with (
            patch("gac.git.commit.find_root", return_value=None),
            patch("gac.git.commit.GitRunner._run") as mock_run,
        ):
            with pytest.raises(NotInRepositoryError) as exc_info:
                CommitExecutor().commit("/elsewhere/a.txt")

        mock_run.assert_not_called()
        assert isinstance(exc_info.value, GitError)
        assert exc_info.value.path == str(Path("/elsewhere/a.txt"))

    def test_add_failure_skips_commit(self) -> None:
        """Test a failing git add stops before git commit."""
        with (
            patch("gac.git.commit.find_root", return_value=Path("/repo")),
            patch("gac.git.commit.GitRunner._run", side_effect=CommitError("add failed")) as mock_run,
        ):
            with pytest.raises(CommitError):
                CommitExecutor().commit("/repo/a.txt")

        assert mock_run.call_count == 1


class TestCommitRepository:
    """Commits against a real repository."""

    def test_commit_new_file(self, tmp_repo: Path) -> None:
        path = tmp_repo / "src" / "a.txt"
        path.parent.mkdir()
        path.write_text("hello\n")

        result = CommitExecutor().commit(path)

        assert result.message == "src/a.txt"
        assert result.repo_root == tmp_repo
        assert git_output("log", "-1", "--format=%s", cwd=tmp_repo) == "src/a.txt"
        assert git_output("status", "--porcelain", cwd=tmp_repo) == ""

    def test_commit_only_stages_saved_file(self, tmp_repo: Path) -> None:
        (tmp_repo / "README.md").write_text("changed")
        (tmp_repo / "other.txt").write_text("untracked")

        CommitExecutor().commit(tmp_repo / "README.md")

        assert git_output("show", "--name-only", "--format=", "HEAD", cwd=tmp_repo) == "README.md"
        assert "?? other.txt" in git_output("status", "--porcelain", cwd=tmp_repo)

    def test_nothing_to_commit_raises(self, tmp_repo: Path) -> None:
        """Test an unchanged file surfaces the git failure."""
        with pytest.raises(CommitError) as exc_info:
            CommitExecutor().commit(tmp_repo / "README.md")
        assert exc_info.value.exit_code not in (None, 0)

    def test_outside_repository(self, outside_dir: Path) -> None:
        path = outside_dir / "a.txt"
        path.write_text("x")
        with pytest.raises(NotInRepositoryError):
            CommitExecutor().commit(path)

    def test_file_name_with_spaces(self, tmp_repo: Path) -> None:
        path = tmp_repo / "my notes; today.txt"
        path.write_text("x")
        result = CommitExecutor().commit(path)
        assert git_output("log", "-1", "--format=%s", cwd=tmp_repo) == "my notes; today.txt"
        assert result.message == "my notes; today.txt"
