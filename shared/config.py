"""
jdep Configuration Management
==============================

Dataclass-based configuration with TOML persistence.

Example ``jdep.toml``::

    [global]
    log_level = "DEBUG"
    log_file = "build/jdep.log"
    log_json = true

    [jdep]
    class_root = "build/classes"
    dep_root = "build/deps"
    java_root = "src/main/java"
    excluded_packages = ["org.slf4j"]
    included_packages = []
    all_packages = false

References:
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, asdict, replace
from pathlib import Path
from typing import Any, Optional

_DEFAULT_CONFIG_NAME = "jdep.toml"


def normalize_root(path: str) -> str:
    """Ensure a non-empty root ends with ``/``; the empty root stays empty."""
    if path and not path.endswith("/"):
        return path + "/"
    return path


@dataclass(frozen=False, slots=True)
class DependencyConfig:
    """Settings of the dependency analyser (``[jdep]`` table).

    Attributes:
        class_root:        Directory prefix of compiled ``.class`` files.
        dep_root:          Directory prefix for generated ``.d`` rule files.
        java_root:         Directory prefix of ``.java`` sources in rules.
        excluded_packages: Packages never recorded as dependencies.
        included_packages: If non-empty, the only packages recorded.
        all_packages:      Do not exclude :attr:`library_packages`.
        library_packages:  Platform packages excluded by default.
        rule_suffix:       Extension of generated rule files.
    """

    class_root: str = ""
    dep_root: str = ""
    java_root: str = ""
    excluded_packages: list[str] = field(default_factory=list)
    included_packages: list[str] = field(default_factory=list)
    all_packages: bool = False
    library_packages: list[str] = field(
        default_factory=lambda: ["java", "javax", "com.sun"]
    )
    rule_suffix: str = ".d"

    def __post_init__(self) -> None:
        self.class_root = normalize_root(self.class_root)
        self.dep_root = normalize_root(self.dep_root)
        self.java_root = normalize_root(self.java_root)


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Logging and general settings (``[global]`` table)."""

    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_json: bool = False
    debug: bool = False


@dataclass(frozen=False, slots=True)
class JdepConfig:
    """Master configuration.

    Usage:
        >>> config = JdepConfig.load("jdep.toml")
        >>> config.jdep.class_root
        'build/classes/'
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    jdep: DependencyConfig = field(default_factory=DependencyConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> JdepConfig:
        """Load configuration from a TOML file.

        With *path* ``None`` the loader looks for ``jdep.toml`` in the
        working directory and falls back to defaults when it is absent.
        Missing keys take dataclass defaults; unknown keys are ignored.

        Raises:
            FileNotFoundError: If an explicitly given *path* does not exist.
            tomllib.TOMLDecodeError: If the file is not valid TOML.
        """
        config_path = (
            Path(path) if path is not None else Path.cwd() / _DEFAULT_CONFIG_NAME
        )

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            jdep=cls._build_section(DependencyConfig, raw.get("jdep", {})),
        )

    def with_overrides(self, **overrides: Any) -> JdepConfig:
        """Return a copy whose ``[jdep]`` values are replaced by non-``None`` *overrides*."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return JdepConfig(
            global_settings=replace(self.global_settings),
            jdep=replace(self.jdep, **values),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate dataclass *cls* using only the keys it declares."""
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)

