"""End-to-end tests of the ``jdep`` command through click's runner."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from jdep import __version__
from jdep.cli import jdep_cli
from jdep.core.engine import JdepEngine
from tests.builders import ClassFileBuilder

WIDGET = "classes/com/acme/Widget.class"


def _write_class(root: Path, name: str, *refs: str) -> None:
    b = ClassFileBuilder(name)
    for ref in refs:
        b.pool.class_(ref)
    path = root / f"{name}.class"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b.to_bytes())


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    classes = tmp_path / "classes"
    _write_class(
        classes,
        "com/acme/Widget",
        "com/acme/Gadget",
        "com/acme/test/Fixture",
        "org/other/Thing$Inner",
        "java/util/List",
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _rule(workspace: Path) -> str:
    return (workspace / "deps" / "com" / "acme" / "Widget.d").read_text(encoding="utf-8")


class TestSuccess:
    def test_writes_rule(self, workspace, runner) -> None:
        result = runner.invoke(jdep_cli, ["-c", "classes", "-d", "deps", "-j", "src", WIDGET])

        assert result.exit_code == 0, result.output
        assert _rule(workspace) == (
            "classes/com/acme/Widget.class: \\\n"
            "  src/com/acme/Widget.java\\\n"
            "  src/com/acme/Gadget.java\\\n"
            "  src/com/acme/test/Fixture.java\\\n"
            "  src/org/other/Thing.java\\\n"
            "\n"
        )
        assert "Dependency Rules" in result.output

    def test_all_packages(self, workspace, runner) -> None:
        result = runner.invoke(jdep_cli, ["-a", "-c", "classes", "-d", "deps", WIDGET])

        assert result.exit_code == 0, result.output
        rule = _rule(workspace)
        assert "  java/util/List.java\\\n" in rule
        assert "  java/lang/Object.java\\\n" in rule

    def test_include_exclude(self, workspace, runner) -> None:
        result = runner.invoke(
            jdep_cli,
            ["-i", "com.acme", "-e", "com.acme.test", "-c", "classes", "-d", "deps", WIDGET],
        )

        assert result.exit_code == 0, result.output
        rule = _rule(workspace)
        assert "com/acme/Gadget.java" in rule
        assert "Fixture" not in rule
        assert "org/other" not in rule

    def test_json_output(self, workspace, runner) -> None:
        (workspace / "jdep.toml").write_text(
            '[global]\nlog_level = "WARNING"\n\n[jdep]\nclass_root = "classes"\ndep_root = "deps"\n',
            encoding="utf-8",
        )

        result = runner.invoke(jdep_cli, ["--json", WIDGET])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["tool_name"] == "jdep"
        assert data["targets"] == [WIDGET]
        (report,) = data["reports"]
        assert report["target"] == "com/acme/Widget"
        assert "com/acme/Gadget.java" in report["source_files"]

    def test_no_files(self, workspace, runner) -> None:
        result = runner.invoke(jdep_cli, [])
        assert result.exit_code == 0
        assert "No class files given" in result.output

    def test_version(self, runner) -> None:
        result = runner.invoke(jdep_cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_options(self, runner) -> None:
        result = runner.invoke(jdep_cli, ["-h"])
        assert result.exit_code == 0
        for option in ("--all-packages", "--exclude", "--include", "--class-root",
                       "--dep-root", "--java-root", "--json"):
            assert option in result.output

    def test_unwritable_rule_is_not_fatal(self, workspace, runner) -> None:
        (workspace / "deps").write_text("not a directory", encoding="utf-8")

        result = runner.invoke(jdep_cli, ["-c", "classes", "-d", "deps", WIDGET])

        assert result.exit_code == 0, result.output
        assert (workspace / "deps").is_file()


class TestFailures:
    def test_missing_class(self, workspace, runner) -> None:
        result = runner.invoke(
            jdep_cli, ["-c", "classes", "-d", "deps", "classes/com/acme/Missing.class"]
        )
        assert result.exit_code == 1
        assert "unable to open" in result.output

    def test_root_mismatch(self, workspace, runner) -> None:
        result = runner.invoke(jdep_cli, ["-c", "classes", "other/Widget.class"])
        assert result.exit_code == 1
        assert "does not match" in result.output

    def test_missing_config(self, workspace, runner) -> None:
        result = runner.invoke(jdep_cli, ["--config", "nope.toml", WIDGET])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_interrupt(self, workspace, runner, monkeypatch) -> None:
        def interrupted(self, paths):
            raise KeyboardInterrupt

        monkeypatch.setattr(JdepEngine, "run", interrupted)

        result = runner.invoke(jdep_cli, ["-c", "classes", "-d", "deps", WIDGET])

        assert result.exit_code == 130
        assert "interrupted" in result.output
