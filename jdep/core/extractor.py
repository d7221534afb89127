"""
Dependency Extractor
=====================

Computes the set of classes whose source files a target class's source
file depends on.

Algorithm:
    1. Open and parse the target's class file.
    2. Resolve every ``Class`` constant in the pool to its internal name.
    3. Walk every ``RuntimeVisibleAnnotations`` attribute for the class
       names used by annotations.
    4. Pass each name through the package filter, drop array types, and
       classify it:

       - ``com/acme/Widget``          regular class, kept as is
       - ``com/acme/Widget$Part``     (target ``com/acme/Widget``) the
         target's own nested class: kept, and its class file is analysed
         recursively into the same set, since it is compiled from the
         same source file
       - ``org/other/Thing$Inner``    another class's nested class: the
         enclosing ``org/other/Thing`` is kept instead
"""

from __future__ import annotations

from typing import BinaryIO, Iterator, Optional, Protocol

from shared.logger import JdepLogger

from jdep.analyzers.annotations import RUNTIME_VISIBLE_ANNOTATIONS, AnnotationScanner
from jdep.analyzers.package_filter import PackageFilter
from jdep.core.models import DependencySet
from jdep.parsers.class_file import ClassFileParser, ParsedClass
from jdep.parsers.constant_pool import ClassConstant, class_name_at


class ClassSource(Protocol):
    """Anything that can open a class file by internal name."""

    def open(self, name: str) -> BinaryIO: ...


def outer_class(name: str) -> str:
    """``"a/B$C$D"`` -> ``"a/B"``."""
    return name.split("$", 1)[0]


class DependencyExtractor:
    """Extracts source-level dependencies of compiled classes.

    Usage::

        extractor = DependencyExtractor(
            ClassSourceResolver("build/classes/"),
            PackageFilter.build(),
        )
        deps = extractor.extract("com/acme/Widget")

    Args:
        source:         Opens class files by name.
        package_filter: Decides which names may be recorded.
        logger:         Optional logger; debug records only.
    """

    def __init__(
        self,
        source: ClassSource,
        package_filter: PackageFilter,
        logger: Optional[JdepLogger] = None,
    ) -> None:
        self._source = source
        self._filter = package_filter
        self._logger = logger or JdepLogger.silent("extractor")

    def extract(self, target: str) -> DependencySet:
        """Return the dependency set of *target* (a root-relative name)."""
        deps = DependencySet()
        self._extract_into(target, deps, visited={target})
        return deps

    # ------------------------------------------------------------------ #
    #  Internals
    # ------------------------------------------------------------------ #

    def _extract_into(self, name: str, deps: DependencySet, visited: set[str]) -> None:
        parsed = self._load(name)
        owner = outer_class(name)
        self._logger.debug(
            "%s: %d pool slots, %d attributes",
            name, len(parsed.pool), len(parsed.attributes),
        )

        for ref in self._pool_class_names(parsed):
            self._offer(ref, owner, deps, visited)

        for record in parsed.attributes_named(RUNTIME_VISIBLE_ANNOTATIONS):
            scanner = AnnotationScanner(
                parsed.pool, source_name=parsed.source_name, logger=self._logger
            )
            for ref in scanner.scan(record.payload):
                self._offer(ref, owner, deps, visited)

    def _load(self, name: str) -> ParsedClass:
        with self._source.open(name) as fh:
            source_name = str(getattr(fh, "name", f"{name}.class"))
            return ClassFileParser(fh, source_name=source_name).parse()

    @staticmethod
    def _pool_class_names(parsed: ParsedClass) -> Iterator[str]:
        for index, entry in enumerate(parsed.pool):
            if isinstance(entry, ClassConstant):
                ref = class_name_at(parsed.pool, index)
                if ref is not None:
                    yield ref

    def _offer(self, ref: str, owner: str, deps: DependencySet, visited: set[str]) -> None:
        if ref.startswith("[") or not self._filter.is_included(ref):
            return

        if "$" not in ref:
            deps.add(ref)
            return

        enclosing = outer_class(ref)
        if enclosing != owner:
            deps.add(enclosing)
            return

        if deps.add(ref) and ref not in visited:
            visited.add(ref)
            self._logger.debug("descending into nested class %s", ref)
            self._extract_into(ref, deps, visited)
