import logging
from collections.abc import Callable
from pathlib import Path

from rich.markup import escape

from .errors import TraversalError
from .git_common import get_subdirectories, is_git_repository
from .reporter import Reporter
from .updater import UpdateOutcome

log = logging.getLogger(__name__)

RepositoryHandler = Callable[[Path], UpdateOutcome]


def scan(
    root: Path,
    on_repository: RepositoryHandler,
    reporter: Reporter,
) -> tuple[int, int]:
    """
    Walk `root` depth-first and hand every repository root to `on_repository`.

    A directory directly containing a `.git` directory is a repository root;
    its subtree is never visited, so nested clones, vendored repositories and
    submodules are left alone. Directories that cannot be listed are reported
    and skipped. Symbolic links are not followed.

    Parameters
    ----------
    root : Path
        The directory to search for git repositories.
    on_repository : RepositoryHandler
        Called once per repository root.
    reporter : Reporter
        Sinks for progress and errors.

    Returns
    -------
    tuple[int, int]
        A tuple containing (successful_updates, failed_updates)

    Raises
    ------
    TraversalError
        If `root` is not an existing directory.
    """
    if not root.is_dir():
        raise TraversalError(f"{root} is not an existing directory")

    return _walk(root, on_repository, reporter)


def _walk(
    current: Path,
    on_repository: RepositoryHandler,
    reporter: Reporter,
) -> tuple[int, int]:
    try:
        is_repository = is_git_repository(current)
        subdirs = [] if is_repository else get_subdirectories(current)
    except OSError as e:
        reporter.announce(f"[red]Error accessing path {escape(str(current))}: {escape(str(e))}[/red]")
        return 0, 0

    if is_repository:
        return _visit_repository(current, on_repository, reporter)

    log.debug("Descending into %s (%d subdirectories)", current, len(subdirs))
    successful = 0
    failed = 0
    for path in subdirs:
        s, f = _walk(path, on_repository, reporter)
        successful += s
        failed += f
    return successful, failed


def _visit_repository(
    path: Path,
    on_repository: RepositoryHandler,
    reporter: Reporter,
) -> tuple[int, int]:
    reporter.announce(f"\n--- Found repository: [bold]{escape(str(path))}[/bold] ---")

    outcome = on_repository(path)

    if outcome.ok:
        reporter.announce(f"[green]+++[/green] Successfully updated repository: {escape(str(path))}")
        return 1, 0
    reporter.announce(
        f"[red]!!![/red] Failed to update repository {escape(str(path))}: {escape(str(outcome.error))}"
    )
    return 0, 1
