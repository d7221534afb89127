"""Tests for the dependency set and run result models."""

from __future__ import annotations

from hypothesis import given, strategies

from jdep.core.models import DependencyReport, DependencySet, RunResult

names = strategies.lists(strategies.sampled_from(["a/B", "a/B$C", "a/D", "e/F$G", "h/I"]))


class TestDependencySet:
    def test_add_reports_novelty(self) -> None:
        deps = DependencySet()
        assert deps.add("a/B") is True
        assert deps.add("a/B") is False
        assert len(deps) == 1
        assert "a/B" in deps

    @given(names)
    def test_first_insertion_order_without_duplicates(self, inserted: list[str]) -> None:
        deps = DependencySet()
        for name in inserted:
            deps.add(name)
        assert deps.to_list() == list(dict.fromkeys(inserted))


class TestRunResult:
    def test_finalize_default_summary(self) -> None:
        result = RunResult(targets=["a/B.class"])
        assert result.duration_seconds is None

        result.add_report(
            DependencyReport(target="a/B", source_files=["a/B.java", "a/C.java"])
        )
        result.finalize()

        assert result.summary == "Analysed 1 class(es), 2 source dependencies"
        assert result.duration_seconds is not None
        assert result.duration_seconds >= 0

    def test_source_count_excludes_nested(self) -> None:
        report = DependencyReport(
            target="a/B",
            dependencies=["a/B", "a/B$C", "a/D"],
            source_files=["a/B.java", "a/D.java"],
        )
        result = RunResult()
        result.add_report(report)
        result.add_report(DependencyReport(target="e/F", source_files=["e/F.java"]))

        assert report.source_count == 2
        assert result.source_count == 3

    def test_explicit_summary(self) -> None:
        assert RunResult().finalize("done").summary == "done"

    def test_json_dump(self) -> None:
        result = RunResult(targets=["a/B.class"]).finalize()
        data = result.model_dump(mode="json")
        assert data["tool_name"] == "jdep"
        assert isinstance(data["start_time"], str)
