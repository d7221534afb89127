"""
Dependency Rule Writer
=======================

Writes one make-style rule per target class::

    build/classes/com/acme/Widget.class: \\
      src/com/acme/Widget.java\\
      src/com/acme/Gadget.java\\

The rule file lives at ``<dep_root><target><suffix>``; missing parent
directories are created.  Dependencies that still contain ``$`` (the
target's own nested classes) are left out because they have no source
file of their own.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class RuleWriter:
    """Renders and writes ``.d`` rule files.

    Args:
        class_root: Prefix of the compiled class path on the rule's left side.
        dep_root:   Prefix of the rule file path.
        java_root:  Prefix of every source path on the right side.
        suffix:     Rule file extension.
    """

    def __init__(
        self,
        class_root: str = "",
        dep_root: str = "",
        java_root: str = "",
        suffix: str = ".d",
    ) -> None:
        self._class_root = class_root
        self._dep_root = dep_root
        self._java_root = java_root
        self._suffix = suffix

    def class_file(self, target: str) -> str:
        return f"{self._class_root}{target}.class"

    def rule_path(self, target: str) -> Path:
        return Path(f"{self._dep_root}{target}{self._suffix}")

    def source_files(self, dependencies: Iterable[str]) -> list[str]:
        return [
            f"{self._java_root}{name}.java"
            for name in dependencies
            if "$" not in name
        ]

    def render(self, target: str, dependencies: Iterable[str]) -> str:
        lines = [f"{self.class_file(target)}: \\\n"]
        lines.extend(f"  {src}\\\n" for src in self.source_files(dependencies))
        lines.append("\n")
        return "".join(lines)

    def write(self, target: str, dependencies: Iterable[str]) -> Path:
        """Write the rule for *target* and return the file path."""
        path = self.rule_path(target)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(target, dependencies), encoding="utf-8")
        return path
