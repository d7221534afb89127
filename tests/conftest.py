"""Shared test fixtures: in-memory class sources and quiet loggers."""

from __future__ import annotations

import pytest

from shared.logger import JdepLogger

from jdep.analyzers.package_filter import PackageFilter
from jdep.core.extractor import DependencyExtractor
from tests.builders import InMemoryClassSource


@pytest.fixture
def source() -> InMemoryClassSource:
    return InMemoryClassSource()


@pytest.fixture
def quiet_logger() -> JdepLogger:
    return JdepLogger.silent("tests")


@pytest.fixture
def extractor(source: InMemoryClassSource, quiet_logger: JdepLogger) -> DependencyExtractor:
    """Extractor with the default filter (platform packages excluded)."""
    return DependencyExtractor(source, PackageFilter.build(), logger=quiet_logger)
