"""Output formatting for the sync log stream.

Every user-facing line is prefixed with ``[sync]``; fatal errors use
``[sync][error]`` and per-item failures ``[sync][warning]``. Other tools may
parse these prefixes, so lines are printed literally (no markup, no
highlighting, no wrapping).
"""

from typing import Optional

from rich.console import Console

PREFIX = "[sync]"


class OutputFormatter:
    """Writes prefixed log lines to stdout/stderr."""

    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
    ):
        """Initialize output formatter.

        Args:
            verbose: Whether detail lines are printed
            quiet: Suppress informational lines (errors are always printed)
            console: Console for informational output (defaults to stdout)
            error_console: Console for warnings and errors (defaults to stderr)
        """
        self.verbose = verbose
        self.quiet = quiet
        self.console = console or Console(
            highlight=False, markup=False, emoji=False, soft_wrap=True
        )
        self.error_console = error_console or Console(
            stderr=True, highlight=False, markup=False, emoji=False, soft_wrap=True
        )

    def info(self, message: str) -> None:
        """Print a top-level progress line."""
        if not self.quiet:
            self.console.print(f"{PREFIX} {message}")

    def detail(self, message: str) -> None:
        """Print a file-level decision line (verbose mode only)."""
        if self.verbose and not self.quiet:
            self.console.print(f"{PREFIX} {message}")

    def success(self, message: str) -> None:
        if not self.quiet:
            self.console.print(f"{PREFIX} {message}")

    def warning(self, message: str) -> None:
        self.error_console.print(f"{PREFIX}[warning] {message}")

    def error(self, message: str) -> None:
        self.error_console.print(f"{PREFIX}[error] {message}")
