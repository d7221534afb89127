"""
jdep Analysis Engine
=====================

Orchestrates a batch run: for every class file named on input the engine
normalises the name, extracts its dependencies, and writes the make-style
rule.

Pipeline per target:
    1. Drop a trailing ``.class`` suffix
    2. Strip the configured class root (``RootMismatch`` if absent)
    3. Extract dependencies, recursing into the target's nested classes
    4. Write ``<dep_root><target>.d``

Targets are processed strictly one after another.  The package filter
is built once before the first target and never changes afterwards.
Any :class:`~jdep.core.errors.JdepError` aborts the run.  A rule file
that cannot be written is logged and the run moves on to the next target.
"""

from __future__ import annotations

from typing import Iterable, Optional

from shared.config import JdepConfig
from shared.logger import JdepLogger

from jdep.analyzers.package_filter import PackageFilter
from jdep.core.errors import JdepError, RootMismatch
from jdep.core.extractor import ClassSource, DependencyExtractor
from jdep.core.models import DependencyReport, RunResult
from jdep.core.resolver import ClassSourceResolver
from jdep.output.rules import RuleWriter

_CLASS_SUFFIX = ".class"


class JdepEngine:
    """Runs dependency extraction over a batch of class files.

    Usage::

        engine = JdepEngine(JdepConfig.load())
        result = engine.run(["build/classes/com/acme/Widget.class"])

    Args:
        config:    Effective configuration.  Defaults are used if omitted.
        logger:    Logger instance.  A new one is created if omitted.
        source:    Class source; defaults to a filesystem resolver rooted
                   at ``config.jdep.class_root``.
        write_rules: Write ``.d`` files (disable for dry runs).
    """

    def __init__(
        self,
        config: JdepConfig | None = None,
        logger: JdepLogger | None = None,
        source: Optional[ClassSource] = None,
        write_rules: bool = True,
    ) -> None:
        self._config: JdepConfig = config or JdepConfig()
        self._logger: JdepLogger = logger or JdepLogger("engine")
        settings = self._config.jdep

        self._filter = PackageFilter.build(
            settings.excluded_packages,
            settings.included_packages,
            all_packages=settings.all_packages,
            library_packages=settings.library_packages,
        )
        self._extractor = DependencyExtractor(
            source or ClassSourceResolver(settings.class_root),
            self._filter,
            logger=self._logger,
        )
        self._writer = RuleWriter(
            class_root=settings.class_root,
            dep_root=settings.dep_root,
            java_root=settings.java_root,
            suffix=settings.rule_suffix,
        )
        self._write_rules = write_rules

    # ------------------------------------------------------------------ #
    #  Name handling
    # ------------------------------------------------------------------ #

    def target_name(self, path: str) -> str:
        """Turn a class file path into a root-relative internal name.

        Raises:
            RootMismatch: If a class root is configured and *path* does
                          not start with it.
        """
        name = path
        if name.endswith(_CLASS_SUFFIX):
            name = name[: -len(_CLASS_SUFFIX)]

        class_root = self._config.jdep.class_root
        if class_root:
            if not name.startswith(class_root):
                raise RootMismatch(name, class_root)
            name = name[len(class_root):]
        return name

    # ------------------------------------------------------------------ #
    #  Analysis
    # ------------------------------------------------------------------ #

    def analyze(self, path: str) -> DependencyReport:
        """Analyse one class file and write its rule."""
        target = self.target_name(path)
        with self._logger.operation(target):
            deps = self._extractor.extract(target)
            self._logger.debug("%s: %d names collected", target, len(deps))

            report = DependencyReport(
                target=target,
                class_file=self._writer.class_file(target),
                dependencies=deps.to_list(),
                source_files=self._writer.source_files(deps),
            )
            if self._write_rules:
                self._write_rule(report, deps)
        return report

    def _write_rule(self, report: DependencyReport, deps: Iterable[str]) -> None:
        # An unwritable rule file is reported and skipped; the batch goes on.
        try:
            path = self._writer.write(report.target, deps)
        except OSError as exc:
            self._logger.error(
                "unable to open output file %s: %s",
                self._writer.rule_path(report.target), exc,
            )
            return
        report.rule_file = str(path)
        self._logger.info(
            "%s -> %s (%d sources)",
            report.target, report.rule_file, report.source_count,
        )

    def run(self, paths: Iterable[str]) -> RunResult:
        """Analyse every class file in *paths*, in order.

        Raises:
            JdepError: The first fatal error; nothing after it is processed.
        """
        paths = list(paths)
        result = RunResult(
            targets=paths,
            metadata={
                "excluded_packages": list(self._filter.excluded),
                "included_packages": list(self._filter.included),
            },
        )

        with self._logger.timed(f"dependency analysis of {len(paths)} file(s)"):
            for path in paths:
                try:
                    result.add_report(self.analyze(path))
                except JdepError as exc:
                    self._logger.error("%s", exc)
                    raise

        return result.finalize()
