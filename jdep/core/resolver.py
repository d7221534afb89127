"""
Class Source Resolver
======================

Maps a root-relative internal class name (``com/acme/Widget$Part``) to
the compiled file ``<class_root><name>.class`` and opens it.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from jdep.core.errors import ClassNotFound


class ClassSourceResolver:
    """Opens compiled class files below a class root.

    The root is joined by plain concatenation, so it should either be
    empty or end with a slash (see :func:`shared.config.normalize_root`).
    """

    def __init__(self, class_root: str = "") -> None:
        self._class_root = class_root

    def path_for(self, name: str) -> Path:
        return Path(f"{self._class_root}{name}.class")

    def open(self, name: str) -> BinaryIO:
        """Return an open binary file for *name*.

        Raises:
            ClassNotFound: If the class file cannot be opened.
        """
        path = self.path_for(name)
        try:
            return path.open("rb")
        except OSError as exc:
            raise ClassNotFound(name, str(path)) from exc
