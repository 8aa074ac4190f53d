"""Pytest fixtures for git_repo_update tests."""

import io
import subprocess
from pathlib import Path

import pytest
from rich.console import Console

from git_repo_update.repository import BranchConfig, RepositoryConfig
from git_repo_update.reporter import Reporter


def run_git(*args: str, cwd: Path) -> str:
    """Run a git command in `cwd` and return its stdout."""
    result = subprocess.run(["git", *args], cwd=cwd, capture_output=True, text=True, check=True)
    return result.stdout.strip()


def commit_file(repo: Path, name: str, content: str, message: str) -> str:
    """Write `name`, commit it and return the new HEAD."""
    (repo / name).write_text(content, encoding="utf-8")
    run_git("add", name, cwd=repo)
    run_git("commit", "-q", "-m", message, cwd=repo)
    return run_git("rev-parse", "HEAD", cwd=repo)


def make_config(remotes=None, branches=()) -> RepositoryConfig:
    return RepositoryConfig(
        remotes=dict(remotes or {}),
        branches={name: BranchConfig(name=name) for name in branches},
    )


@pytest.fixture(autouse=True)
def git_identity(monkeypatch):
    """Commit identity for the git binary, independent of the user's config."""
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@test.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@test.com")


@pytest.fixture
def reporter() -> Reporter:
    """Reporter recording both sinks in memory."""
    return Reporter(
        console=Console(file=io.StringIO(), record=True, soft_wrap=True),
        log_console=Console(file=io.StringIO(), record=True, soft_wrap=True),
    )


@pytest.fixture
def source_repo(tmp_path: Path) -> Path:
    """A non-bare repository on branch `main` with one commit."""
    repo_path = tmp_path / "source"
    repo_path.mkdir()
    run_git("init", "-q", cwd=repo_path)
    run_git("symbolic-ref", "HEAD", "refs/heads/main", cwd=repo_path)
    commit_file(repo_path, "README.md", "# Source\n", "Initial commit")
    return repo_path


@pytest.fixture
def clone_of(tmp_path: Path):
    """Factory cloning a repository into `tmp_path/root/<name>`."""

    def _clone(source: Path, name: str = "A") -> Path:
        target = tmp_path / "root" / name
        target.parent.mkdir(parents=True, exist_ok=True)
        run_git("clone", "-q", str(source), str(target), cwd=tmp_path)
        return target

    return _clone


class FakeWorkingTree:
    def __init__(self, calls: list, checkout_error=None, pull_error=None):
        self.calls = calls
        self.checkout_error = checkout_error
        self.pull_error = pull_error

    def checkout(self, branch, force=True):
        self.calls.append(("checkout", branch, force))
        if self.checkout_error:
            raise self.checkout_error

    def pull(self, remote, branch):
        self.calls.append(("pull", remote, branch))
        if self.pull_error:
            raise self.pull_error
        return "Already up to date."


class FakeRepository:
    """In-memory stand-in for `GitRepository`."""

    def __init__(self, config=None, config_error=None, worktree_error=None, checkout_error=None, pull_error=None):
        self.calls: list = []
        self.closed = False
        self._config = config if config is not None else make_config({"origin": ["https://example/repo.git"]}, ["main"])
        self._config_error = config_error
        self._worktree_error = worktree_error
        self._tree = FakeWorkingTree(self.calls, checkout_error, pull_error)

    def config(self):
        if self._config_error:
            raise self._config_error
        return self._config

    def working_tree(self):
        if self._worktree_error:
            raise self._worktree_error
        return self._tree

    def close(self):
        self.closed = True
