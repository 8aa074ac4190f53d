"""
Update of a single repository: open, resolve remote and branch, force
checkout of the main branch, then pull.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from rich.markup import escape

from .errors import (
    BranchResolutionError,
    CheckoutError,
    ConfigError,
    NoMainBranchFound,
    NoRemoteFound,
    OpenError,
    PullError,
    RemoteResolutionError,
    RepositoryUpdateError,
    WorktreeError,
)
from .repository import GitRepository, open_repository
from .reporter import Reporter
from .resolvers import resolve_main_branch, resolve_remote

log = logging.getLogger(__name__)

RepositoryOpener = Callable[[Path], GitRepository]


@dataclass
class UpdateOutcome:
    """Result of updating one repository; `error` is None on success."""

    path: Path
    error: RepositoryUpdateError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def update_repository(
    repo_path: Path,
    reporter: Reporter,
    opener: RepositoryOpener = open_repository,
) -> None:
    """
    Bring the main branch of the repository at `repo_path` up to date.

    The checkout is forced: uncommitted changes in the working tree are lost.

    Parameters
    ----------
    repo_path : Path
        Working tree root of the repository.
    reporter : Reporter
        Sinks for the per-stage narration (log file only).
    opener : RepositoryOpener, optional
        Opens the repository, by default `open_repository`.

    Raises
    ------
    RepositoryUpdateError
        The subclass names the failing stage.
    """
    try:
        repository = opener(repo_path)
    except Exception as e:
        raise OpenError(repo_path, e) from e

    try:
        _update_opened(repo_path, repository, reporter)
    finally:
        repository.close()


def _update_opened(repo_path: Path, repository: GitRepository, reporter: Reporter) -> None:
    try:
        config = repository.config()
    except Exception as e:
        raise ConfigError(repo_path, e) from e

    try:
        working_tree = repository.working_tree()
    except Exception as e:
        raise WorktreeError(repo_path, e) from e

    try:
        remote_name = resolve_remote(config)
    except NoRemoteFound as e:
        raise RemoteResolutionError(repo_path, e) from e

    try:
        branch_name = resolve_main_branch(config)
    except NoMainBranchFound as e:
        raise BranchResolutionError(repo_path, e) from e

    log.debug("Resolved remote %r and branch %r for %s", remote_name, branch_name, repo_path)

    reporter.detail(f"Checking out '{escape(branch_name)}' branch...")
    try:
        working_tree.checkout(branch_name, force=True)
    except Exception as e:
        raise CheckoutError(repo_path, e) from e

    reporter.detail(
        f"Pulling updates from '{escape(remote_name)}' remote to local '{escape(branch_name)}' branch..."
    )
    try:
        output = working_tree.pull(remote_name, branch_name)
    except Exception as e:
        raise PullError(repo_path, e) from e

    if output:
        reporter.detail(escape(output))


def process_repository(
    repo_path: Path,
    reporter: Reporter,
    opener: RepositoryOpener = open_repository,
) -> UpdateOutcome:
    """
    Update one repository and turn a stage failure into a failed outcome.

    Returns
    -------
    UpdateOutcome
        Success, or the stage error carrying path and cause.
    """
    try:
        update_repository(repo_path, reporter, opener)
    except RepositoryUpdateError as e:
        log.debug("Update of %s failed", repo_path, exc_info=e)
        return UpdateOutcome(path=repo_path, error=e)
    return UpdateOutcome(path=repo_path)
