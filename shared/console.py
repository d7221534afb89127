"""
jdep Console Interface
=======================

Rich-powered console abstraction giving the command-line tool one
consistent look for section headers, status messages, and tables.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import Any, Sequence

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

_JDEP_THEME = Theme(
    {
        "jdep.section": "bold bright_magenta",
        "jdep.success": "bold green",
        "jdep.warning": "bold yellow",
        "jdep.error": "bold red",
        "jdep.info": "bold bright_blue",
        "jdep.dim": "dim white",
    }
)


class JdepConsole:
    """Unified console for jdep output.

    Usage::

        con = JdepConsole()
        con.section("Dependencies")
        con.success("3 rule files written")

    Args:
        stderr: Print to stderr (keeps stdout free for ``--json``).
    """

    def __init__(self, *, stderr: bool = False) -> None:
        self._console = Console(theme=_JDEP_THEME, stderr=stderr, highlight=False)

    def section(self, title: str) -> None:
        self._console.rule(f"  {title}  ", style="jdep.section", characters="─")
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Message helpers
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        self._console.print(f"[jdep.success][✔] SUCCESS:[/jdep.success] {message}")

    def warning(self, message: str) -> None:
        self._console.print(f"[jdep.warning][⚠] WARNING:[/jdep.warning] {message}")

    def error(self, message: str) -> None:
        self._console.print(f"[jdep.error][✘] ERROR:[/jdep.error] {message}")

    def info(self, message: str) -> None:
        self._console.print(f"[jdep.info][ℹ] INFO:[/jdep.info] {message}")

    # ------------------------------------------------------------------ #
    #  Tables
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: str | None = None,
        styles: Sequence[str] | None = None,
    ) -> None:
        """Render a styled Rich table.

        Args:
            title:    Table title.
            columns:  Column header labels.
            rows:     Row tuples; each cell is stringified.
            caption:  Optional footer caption.
            styles:   Optional per-column Rich style strings.
        """
        tbl = Table(
            title=title,
            caption=caption,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=False,
            padding=(0, 1),
        )
        for idx, col_name in enumerate(columns):
            style = styles[idx] if styles and idx < len(styles) else ""
            tbl.add_column(col_name, style=style)

        for row in rows:
            tbl.add_row(*(str(cell) for cell in row))

        self._console.print(tbl)

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Proxy to :meth:`rich.console.Console.print`."""
        self._console.print(*args, **kwargs)

    def blank(self, count: int = 1) -> None:
        for _ in range(count):
            self._console.print()
