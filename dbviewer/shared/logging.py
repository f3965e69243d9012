"""Status messages for the browser CLI.

Rendered pages and listings are written to stdout by the renderers; everything
here goes to stderr so ``--format json`` output stays machine readable.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.theme import Theme
from rich.traceback import install

install(show_locals=False)

_LEVEL_STYLES = {
    "info": "cyan",
    "success": "bold green",
    "warning": "yellow",
    "error": "bold red",
    "debug": "dim",
}

_status_console = Console(stderr=True, theme=Theme(_LEVEL_STYLES), highlight=False)


@dataclass(slots=True)
class Logger:
    """Prints status lines; ``debug`` only when verbose."""

    verbose: bool = False

    def info(self, message: str) -> None:
        self._emit("info", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def debug(self, message: str) -> None:
        if self.verbose:
            self._emit("debug", message)

    def _emit(self, level: str, message: str) -> None:
        # markup off: table names and paths may contain "[...]"
        _status_console.print(message, style=level, markup=False)


def get_logger(verbose: bool = False) -> Logger:
    return Logger(verbose=verbose)
