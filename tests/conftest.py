"""Pytest configuration and fixtures for GAC tests."""

import os
import subprocess
from collections.abc import Generator
from pathlib import Path

import pytest

from gac.session import FileSession


def _run_git(*args: str, cwd: Path | None = None) -> None:
    """Run git command safely without shell=True."""
    subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        check=True,
    )


def git_output(*args: str, cwd: Path) -> str:
    """Run a git command and return its stripped stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def tmp_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary git repository with one commit on main.

    Yields:
        Resolved path to the temporary repository
    """
    repo = (tmp_path / "repo").resolve()
    repo.mkdir()
    orig_dir = os.getcwd()
    os.chdir(repo)

    _run_git("init", "-q", "-b", "main", cwd=repo)
    _run_git("config", "user.email", "test@test.com", cwd=repo)
    _run_git("config", "user.name", "Test", cwd=repo)
    _run_git("config", "commit.gpgsign", "false", cwd=repo)

    (repo / "README.md").write_text("# Test Repo")
    _run_git("add", "-A", cwd=repo)
    _run_git("commit", "-q", "-m", "Initial commit", cwd=repo)

    yield repo

    os.chdir(orig_dir)


@pytest.fixture
def outside_dir(tmp_path: Path) -> Path:
    """A directory that is not inside any git repository.

    GIT_CEILING_DIRECTORIES keeps git from finding a repository above
    the pytest temp directory.
    """
    directory = (tmp_path / "plain").resolve()
    directory.mkdir()
    return directory


@pytest.fixture(autouse=True)
def _git_ceiling(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Stop git repository discovery at the test's temp directory."""
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.resolve()))


@pytest.fixture
def saved_file(tmp_repo: Path) -> FileSession:
    """A modified file inside the temp repository, wrapped in a session."""
    path = tmp_repo / "src" / "a.txt"
    path.parent.mkdir()
    path.write_text("hello\n")
    return FileSession(path=path)
