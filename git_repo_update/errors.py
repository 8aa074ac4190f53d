"""
Exceptions raised while updating repositories.

Errors come in three tiers:

- setup errors (`SetupError`) stop the run before any scanning starts,
- repository errors (`RepositoryUpdateError` and its stage subclasses) are
  reported per repository and the batch continues,
- resolution errors (`NoRemoteFound`, `NoMainBranchFound`) are raised by the
  pure resolvers and wrapped by the updater.
"""

from pathlib import Path


class GitRepoUpdateError(Exception):
    """Base class for all errors raised by git_repo_update."""


class SetupError(GitRepoUpdateError):
    """Fatal error raised before scanning begins (home, log file, root)."""


class TraversalError(GitRepoUpdateError):
    """The directory walk itself could not be performed."""


class ResolutionError(GitRepoUpdateError):
    """A remote or branch could not be selected from a repository config."""


class NoRemoteFound(ResolutionError):
    def __init__(self) -> None:
        super().__init__("repository doesn't have an 'upstream' or 'origin' remote URL")


class NoMainBranchFound(ResolutionError):
    def __init__(self) -> None:
        super().__init__("repository doesn't have a 'main' or 'master' branch")


class RepositoryUpdateError(GitRepoUpdateError):
    """
    Failure of a single stage while updating one repository.

    Parameters
    ----------
    path : Path
        The repository that failed.
    cause : BaseException
        The underlying error of the failing stage.
    """

    stage = "update"

    def __init__(self, path: Path, cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{self.stage} failed for repository {self.path}: {cause}")


class OpenError(RepositoryUpdateError):
    stage = "open"


class ConfigError(RepositoryUpdateError):
    stage = "read config"


class WorktreeError(RepositoryUpdateError):
    stage = "get working tree"


class RemoteResolutionError(RepositoryUpdateError):
    stage = "resolve remote"


class BranchResolutionError(RepositoryUpdateError):
    stage = "resolve main branch"


class CheckoutError(RepositoryUpdateError):
    stage = "checkout"


class PullError(RepositoryUpdateError):
    stage = "pull"
