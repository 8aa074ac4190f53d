"""
Command line entry point: update the main branch of every git repository
below a root directory.

Default root is ``~/git``. Every run writes a log file named after its start
time into a ``repo_updates`` directory next to the root.
"""

import functools
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

import click
from rich.console import Console
from rich.markup import escape

from .errors import SetupError, TraversalError
from .reporter import Reporter, file_console
from .scanner import scan
from .updater import process_repository

log = logging.getLogger(__name__)

ROOT_DIR_NAME = "git"
LOG_DIR_NAME = "repo_updates"
LOG_FILE_FORMAT = "%b-%d-%y_%H-%M"  # e.g. Jan-02-06_15-04


def _setup_logging(verbose: bool) -> None:
    """
    Setup logging configuration based on verbosity level.

    Parameters
    ----------
    verbose : bool
        If True, enable debug logging; otherwise only warnings
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")


def default_root() -> Path:
    """Return ``<home>/git``, the root used when no directory is given."""
    try:
        home = Path.home()
    except RuntimeError as e:
        raise SetupError(f"Error getting home directory: {e}") from e
    return home / ROOT_DIR_NAME


def default_log_dir(root: Path) -> Path:
    return root.parent / LOG_DIR_NAME


def log_file_name(moment: datetime) -> str:
    return f"{moment.strftime(LOG_FILE_FORMAT)}.txt"


def open_log_file(log_dir: Path, moment: datetime) -> tuple[Path, TextIO]:
    """
    Create `log_dir` if needed and open the log file for this run in append mode.

    Raises
    ------
    SetupError
        If the directory cannot be created or the file cannot be opened.
    """
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SetupError(f"Error creating log directory '{log_dir}': {e}") from e

    log_path = log_dir / log_file_name(moment)
    try:
        handle = log_path.open("a", encoding="utf-8")
    except OSError as e:
        raise SetupError(f"Error opening log file '{log_path}': {e}") from e
    return log_path, handle


def run_update(root: Path, log_path: Path, reporter: Reporter) -> int:
    """
    Scan `root` and update every repository found, reporting into `reporter`.

    Returns
    -------
    int
        The process exit code: 1 if `root` does not exist, 0 otherwise.
    """
    reporter.announce("Starting Git repository update process...")
    reporter.announce(f"All detailed output will be logged to: {escape(str(log_path))}")

    if not root.is_dir():
        reporter.announce(
            f"[bold red]Error:[/] The directory '{escape(str(root))}' does not exist. "
            "Please ensure your Git repositories are in this folder."
        )
        return 1

    reporter.detail(f"Scanning for Git repositories in: {escape(str(root))}")

    on_repository = functools.partial(process_repository, reporter=reporter)
    successful, failed = 0, 0
    try:
        successful, failed = scan(root, on_repository, reporter)
    except TraversalError as e:
        reporter.announce(f"\n[red]An error occurred during directory traversal:[/red] {escape(str(e))}")

    reporter.summary(successful, failed)
    reporter.announce("\nGit repository update process completed.")
    return 0


@click.command()
@click.argument(
    "directory",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    required=False,
)
@click.option(
    "--log-dir",
    "-l",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Directory for the log files (default: 'repo_updates' next to DIRECTORY)",
)
@click.option("--verbose", "-v", is_flag=True, help="Also show detailed output on the console")
def main(directory: Path | None, log_dir: Path | None, verbose: bool):
    """
    Update the main branch of every git repository below DIRECTORY.

    If no directory is specified, ~/git is used. For each repository the
    'upstream' remote is preferred over 'origin' and 'main' over 'master'.
    The branch is checked out with --force, so local changes are discarded,
    and then pulled fast-forward only.
    """
    _setup_logging(verbose)
    console = Console(soft_wrap=True)
    error_console = Console(stderr=True, soft_wrap=True)

    try:
        root = directory if directory is not None else default_root()
        log_path, handle = open_log_file(log_dir or default_log_dir(root), datetime.now())
    except SetupError as e:
        error_console.print(f"[bold red]{escape(str(e))}[/]")
        sys.exit(1)

    log.debug("Root %s, log file %s", root, log_path)
    with handle:
        reporter = Reporter(console=console, log_console=file_console(handle), verbose=verbose)
        exit_code = run_update(root, log_path, reporter)

    if exit_code:
        sys.exit(exit_code)
