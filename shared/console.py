"""
Binsight Console Interface
===========================

Rich-powered console abstraction providing a unified presentation layer
for the Binsight command-line front end.

The class wraps :class:`rich.console.Console` and adds convenience methods
for section rules and severity-coloured messages with consistent styling.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

_BINSIGHT_THEME = Theme(
    {
        "binsight.section": "bold bright_magenta",
        "binsight.success": "bold green",
        "binsight.warning": "bold yellow",
        "binsight.error": "bold red",
        "binsight.info": "bold bright_blue",
        "binsight.dim": "dim white",
    }
)


class BinsightConsole:
    """Unified console interface for the Binsight CLI.

    Usage::

        con = BinsightConsole()
        con.section("Heuristics")
        con.success("Analysis complete")
    """

    def __init__(self, *, quiet: bool = False, record: bool = False) -> None:
        """Initialise the console.

        Args:
            quiet:  Suppress all output (useful in library / test mode).
            record: Enable Rich recording for export.
        """
        self._console = Console(
            theme=_BINSIGHT_THEME,
            quiet=quiet,
            record=record,
            highlight=False,
        )

    @property
    def rich(self) -> Console:
        """Direct access to the underlying Rich Console instance."""
        return self._console

    def section(self, title: str) -> None:
        """Print a prominent section header."""
        self._console.rule(f"  {title}  ", style="binsight.section", characters="─")

    # ------------------------------------------------------------------ #
    #  Message helpers (severity-coloured)
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        self._console.print(
            Text.assemble(("[✔] SUCCESS: ", "binsight.success"), message)
        )

    def warning(self, message: str) -> None:
        self._console.print(
            Text.assemble(("[⚠] WARNING: ", "binsight.warning"), message)
        )

    def error(self, message: str) -> None:
        self._console.print(
            Text.assemble(("[✘] ERROR: ", "binsight.error"), message)
        )

    def info(self, message: str) -> None:
        self._console.print(
            Text.assemble(("[ℹ] INFO: ", "binsight.info"), message)
        )

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Proxy to :meth:`rich.console.Console.print`."""
        self._console.print(*args, **kwargs)

    def blank(self, count: int = 1) -> None:
        for _ in range(count):
            self._console.print()
