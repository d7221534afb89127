"""
jdep Error Taxonomy
====================

Every failure the dependency analyser can raise.  All of them are fatal
to the current run: jdep is an offline, deterministic batch tool and a
malformed class file or a missing class indicates a build
misconfiguration that has to be fixed upstream.
"""

from __future__ import annotations


class JdepError(Exception):
    """Base class for all jdep failures."""

    pass


class TruncatedInput(JdepError):
    """The binary source ended before an expected field.

    Attributes:
        source:    Name of the byte source (usually a file path).
        offset:    Cursor position at which the read was attempted.
        wanted:    Number of bytes requested.
        available: Number of bytes actually present.
    """

    def __init__(self, source: str, offset: int, wanted: int, available: int) -> None:
        self.source = source
        self.offset = offset
        self.wanted = wanted
        self.available = available
        super().__init__(
            f"truncated input in {source}: wanted {wanted} byte(s) "
            f"at offset {offset}, only {available} available"
        )


class InvalidConstantTag(JdepError):
    """An unrecognised constant pool tag byte was encountered."""

    def __init__(self, tag: int, source: str) -> None:
        self.tag = tag
        self.source = source
        super().__init__(f"invalid constant pool tag {tag} in {source}")


class ClassNotFound(JdepError):
    """The class source resolver could not supply bytes for a class name."""

    def __init__(self, name: str, path: str) -> None:
        self.name = name
        self.path = path
        super().__init__(f"unable to open class file {path}")


class RootMismatch(JdepError):
    """A target class file does not live under the configured class root."""

    def __init__(self, name: str, class_root: str) -> None:
        self.name = name
        self.class_root = class_root
        super().__init__(
            f"{name}.class does not match class root path {class_root}"
        )
