"""
Thin layer over GitPython exposing only what an update needs.

`open_repository` returns a `GitRepository` which can read its own config and
hand out a `WorkingTree` for checkout and pull.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

import git

log = logging.getLogger(__name__)

_SECTION = re.compile(r'^(?P<kind>remote|branch) "(?P<name>.+)"$')


@dataclass
class BranchConfig:
    """A `[branch "<name>"]` section of a git config."""

    name: str
    remote: str | None = None  # branch.<name>.remote
    merge: str | None = None  # branch.<name>.merge


@dataclass
class RepositoryConfig:
    """Remote and branch sections of a repository's own config file."""

    remotes: dict[str, list[str]] = field(default_factory=dict)
    branches: dict[str, BranchConfig] = field(default_factory=dict)

    @classmethod
    def from_reader(cls, reader: git.GitConfigParser) -> "RepositoryConfig":
        """
        Build the config from a GitPython config reader.

        Every `url` line of a remote section is kept, including empty ones.

        Parameters
        ----------
        reader : git.GitConfigParser
            Reader of a repository's config file.

        Returns
        -------
        RepositoryConfig
            The parsed remotes and branches.
        """
        reader.read()
        config = cls()
        for section in reader.sections():
            match = _SECTION.match(section)
            if match is None:
                continue
            name = match.group("name")
            if match.group("kind") == "remote":
                urls = reader.get_values(section, "url") if reader.has_option(section, "url") else []
                config.remotes[name] = [str(url) for url in urls]
            else:
                config.branches[name] = BranchConfig(
                    name=name,
                    remote=_optional_value(reader, section, "remote"),
                    merge=_optional_value(reader, section, "merge"),
                )
        return config


def _optional_value(reader: git.GitConfigParser, section: str, option: str) -> str | None:
    if not reader.has_option(section, option):
        return None
    return str(reader.get_value(section, option))


class WorkingTree:
    """Checked out files of a repository, driven through the git command."""

    def __init__(self, path: Path, command: git.Git):
        self.path = path
        self._git = command

    def checkout(self, branch: str, force: bool = True) -> None:
        """
        Check out `branch`. With `force` local modifications are thrown away.
        """
        log.debug("git checkout %s (force=%s) in %s", branch, force, self.path)
        self._git.checkout(branch, force=force)

    def pull(self, remote: str, branch: str) -> str:
        """
        Fetch `branch` from `remote` and fast-forward the current branch.

        Divergent histories make git fail instead of creating a merge.

        Returns
        -------
        str
            The output of the git pull command
        """
        log.debug("git pull --ff-only %s %s in %s", remote, branch, self.path)
        # Never wait on a credential prompt when running unattended.
        with self._git.custom_environment(GIT_TERMINAL_PROMPT="0"):
            return self._git.pull(remote, branch, ff_only=True)


class GitRepository:
    """An opened repository. Call `close` when done with it."""

    def __init__(self, repo: git.Repo):
        self._repo = repo

    @property
    def path(self) -> Path:
        return Path(self._repo.working_tree_dir or self._repo.git_dir)

    def config(self) -> RepositoryConfig:
        """Read the repository-level config (`.git/config`) only."""
        with self._repo.config_reader("repository") as reader:
            return RepositoryConfig.from_reader(reader)

    def working_tree(self) -> WorkingTree:
        if self._repo.bare or self._repo.working_tree_dir is None:
            raise ValueError(f"{self._repo.git_dir} is a bare repository without a working tree")
        return WorkingTree(Path(self._repo.working_tree_dir), self._repo.git)

    def close(self) -> None:
        self._repo.close()


def open_repository(path: Path) -> GitRepository:
    """
    Open the repository whose working tree is `path`.

    Parent directories are not searched.

    Raises
    ------
    git.InvalidGitRepositoryError
        If `path` is not a git repository.
    git.NoSuchPathError
        If `path` does not exist.
    """
    return GitRepository(git.Repo(path))
