"""
Package Filter
===============

Prefix-based include/exclude rules deciding which class names may enter
a dependency set.  Package names are accepted in either dotted
(``com.acme``) or slashed (``com/acme``) form and normalised to the
slashed form with a trailing slash, so ``com.acme`` matches
``com/acme/Widget`` but not ``com/acmeco/Widget``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

# Excluded unless the "all packages" switch is given.
LIBRARY_PACKAGES: tuple[str, ...] = ("java", "javax", "com.sun")


def normalize_package(name: str) -> str:
    """``"com.foo"`` -> ``"com/foo/"``; an existing trailing slash is kept."""
    path = name.replace(".", "/")
    if not path.endswith("/"):
        path += "/"
    return path


@dataclass(frozen=True, slots=True)
class PackageFilter:
    """Immutable include/exclude rule set.

    Attributes:
        excluded: Normalised prefixes that are always rejected.
        included: Normalised prefixes; when non-empty, only names under one
                  of them are accepted.
    """

    excluded: tuple[str, ...] = ()
    included: tuple[str, ...] = ()

    @classmethod
    def build(
        cls,
        excluded: Iterable[str] = (),
        included: Iterable[str] = (),
        *,
        all_packages: bool = False,
        library_packages: Iterable[str] = LIBRARY_PACKAGES,
    ) -> PackageFilter:
        """Create a filter from raw package names.

        Unless *all_packages* is set, *library_packages* are appended to
        the exclusions.
        """
        rules = [normalize_package(p) for p in excluded]
        if not all_packages:
            rules.extend(normalize_package(p) for p in library_packages)
        return cls(
            excluded=tuple(dict.fromkeys(rules)),
            included=tuple(dict.fromkeys(normalize_package(p) for p in included)),
        )

    def is_included(self, name: str) -> bool:
        if any(name.startswith(prefix) for prefix in self.excluded):
            return False
        if not self.included:
            return True
        return any(name.startswith(prefix) for prefix in self.included)
