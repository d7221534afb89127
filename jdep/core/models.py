"""
jdep Data Models
=================

:class:`DependencySet` is the working collection filled during
extraction.  :class:`DependencyReport` is the pydantic value object the
engine hands to output layers once a target is fully resolved, and
:class:`RunResult` aggregates the reports of one batch run.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Iterable, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field


class DependencySet:
    """Insertion-ordered set of internal class names.

    Only grows.  :meth:`add` reports whether the name was new, which is
    what gates nested-class recursion.
    """

    __slots__ = ("_names",)

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: dict[str, None] = dict.fromkeys(names)

    def add(self, name: str) -> bool:
        if name in self._names:
            return False
        self._names[name] = None
        return True

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"DependencySet({list(self._names)!r})"

    def to_list(self) -> list[str]:
        return list(self._names)


class DependencyReport(BaseModel):
    """Resolved dependencies of one target class.

    Attributes:
        target:       Root-relative internal name, e.g. ``com/acme/Widget``.
        class_file:   Path of the compiled class as written in the rule.
        rule_file:    Path of the ``.d`` file written, if any.
        dependencies: Every name collected, nested classes included.
        source_files: Source paths emitted in the rule.
    """
    target: str
    class_file: str = ""
    rule_file: str | None = None
    dependencies: list[str] = Field(default_factory=list)
    source_files: list[str] = Field(default_factory=list)

    @property
    def source_count(self) -> int:
        """Number of source files listed in the rule (nested classes excluded)."""
        return len(self.source_files)


def _utcnow() -> _dt.datetime:
    return _dt.datetime.now(_dt.timezone.utc)


class RunResult(BaseModel):
    """Aggregated result of a single jdep invocation.

    Attributes:
        tool_name:  Name of the tool that produced the result.
        targets:    Target names in the order they were given.
        start_time: UTC timestamp when the run started.
        end_time:   UTC timestamp when the run ended.
        reports:    One report per completed target.
        summary:    Human-readable summary text.
        metadata:   Arbitrary extra data (effective configuration, etc.).
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    tool_name: str = Field(default="jdep", min_length=1)
    targets: list[str] = Field(default_factory=list)
    start_time: _dt.datetime = Field(default_factory=_utcnow)
    end_time: Optional[_dt.datetime] = None
    reports: list[DependencyReport] = Field(default_factory=list)
    summary: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def duration_seconds(self) -> float | None:
        """Elapsed time in seconds, or ``None`` while the run is open."""
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

    @property
    def source_count(self) -> int:
        """Total number of source dependencies across all reports."""
        return sum(r.source_count for r in self.reports)

    def add_report(self, report: DependencyReport) -> None:
        self.reports.append(report)

    def finalize(self, summary: str | None = None) -> RunResult:
        """Set *end_time* and *summary* (a default one when ``None``).

        Returns:
            ``self`` for chaining.
        """
        self.end_time = _utcnow()
        if summary is not None:
            self.summary = summary
        else:
            self.summary = (
                f"Analysed {len(self.reports)} class(es), "
                f"{self.source_count} source dependencies"
            )
        return self
