import logging
from dataclasses import dataclass
from typing import TextIO

from rich.console import Console, RenderableType
from rich.table import Table

log = logging.getLogger(__name__)


def file_console(handle: TextIO) -> Console:
    """Console writing plain text (no colours, no wrapping) into `handle`."""
    return Console(file=handle, no_color=True, highlight=False, emoji=False, soft_wrap=True)


@dataclass
class Reporter:
    """
    Pair of output sinks shared by the scanner and the updater.

    `announce` writes to the console and the log file, `detail` writes to the
    log file only (and to the console as well in verbose mode). A failing
    write to the log file is logged and otherwise ignored, so it never stops
    the batch.
    """

    console: Console  # Console object for user-facing output
    log_console: Console  # Console object bound to the log file
    verbose: bool = False

    def announce(self, message: str) -> None:
        self.console.print(message)
        self._write_log(message)

    def detail(self, message: str) -> None:
        self._write_log(message)
        if self.verbose:
            self.console.print(f"[dim]{message}[/dim]")

    def summary(self, successful: int, failed: int) -> None:
        print_summary(successful, failed, self.console)
        self._write_log(summary_table(successful, failed))

    def _write_log(self, renderable: RenderableType) -> None:
        try:
            self.log_console.print(renderable)
        except OSError as e:
            log.warning("Could not write to the log file: %s", e)


def summary_table(successful: int, failed: int) -> Table:
    table = Table(title="Summary")
    table.add_column("Status", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("Successful", f"[green]{successful}[/green]")
    table.add_row("Failed", f"[red]{failed}[/red]")
    table.add_row("Total", f"{successful + failed}")
    return table


def print_summary(successful: int, failed: int, console: Console) -> None:
    """
    Print a summary table of the update operations.

    Parameters
    ----------
    successful : int
        Number of successfully updated repositories.
    failed : int
        Number of repositories that failed to update.
    console : Console
        Rich console for formatted output.
    """
    console.print(summary_table(successful, failed))
