"""
jdep Console Output
====================

Terminal rendering of a :class:`~jdep.core.models.RunResult`: a summary
table with one row per target and, in verbose mode, the source files
each rule lists.
"""

from __future__ import annotations

from rich.markup import escape

from shared.console import JdepConsole

from jdep.core.models import DependencyReport, RunResult


class JdepConsoleOutput:
    """Displays run results through a :class:`JdepConsole`."""

    def __init__(self, console: JdepConsole | None = None) -> None:
        self._con = console or JdepConsole()

    def display(self, result: RunResult, verbose: bool = False) -> None:
        self._con.section("Dependency Rules")
        self._con.table(
            "Targets",
            ["Target", "Sources", "Nested", "Rule file"],
            [self._row(r) for r in result.reports],
            styles=["bold bright_white", "bright_cyan", "dim", "jdep.dim"],
        )

        if verbose:
            for report in result.reports:
                self._display_sources(report)

        self._con.blank()
        written = sum(1 for r in result.reports if r.rule_file)
        if written:
            self._con.success(f"{written} rule file(s) written")
        self._con.info(result.summary)
        if result.duration_seconds is not None:
            self._con.info(f"Duration: {result.duration_seconds:.3f}s")

    @staticmethod
    def _row(report: DependencyReport) -> tuple[str, int, int, str]:
        nested = sum(1 for d in report.dependencies if "$" in d)
        return (
            escape(report.target),
            report.source_count,
            nested,
            escape(report.rule_file or "-"),
        )

    def _display_sources(self, report: DependencyReport) -> None:
        self._con.section(escape(report.target))
        for src in report.source_files:
            self._con.print(f"  {escape(src)}")
        if not report.source_files:
            self._con.print("  [jdep.dim](no source dependencies)[/jdep.dim]")
