"""
jdep Analyzers
===============

Annotation scanning and package filtering used during dependency
extraction.
"""

from jdep.analyzers.annotations import RUNTIME_VISIBLE_ANNOTATIONS, AnnotationScanner
from jdep.analyzers.package_filter import LIBRARY_PACKAGES, PackageFilter, normalize_package

__all__ = [
    "AnnotationScanner",
    "LIBRARY_PACKAGES",
    "PackageFilter",
    "RUNTIME_VISIBLE_ANNOTATIONS",
    "normalize_package",
]
