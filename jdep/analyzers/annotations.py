"""
Runtime-Visible Annotation Scanner
===================================

Recursive descent over the payload of a ``RuntimeVisibleAnnotations``
attribute, yielding the internal names of every class the annotations
refer to: annotation types, enum constant types, and class literals.

Grammar::

    RuntimeVisibleAnnotations := num_annotations:u2, Annotation*
    Annotation   := type_index:u2, num_pairs:u2, (name_index:u2, ElementValue)*
    ElementValue := tag:u1, body
        B C D F I J S Z s  -> const_value_index:u2
        c                  -> class_info_index:u2
        e                  -> type_name_index:u2, const_name_index:u2
        @                  -> Annotation
        [                  -> num_values:u2, ElementValue*

Unknown tags carry no payload and are skipped, so newer metadata never
breaks extraction on an otherwise readable file.

References:
    - Oracle. (2023). The Java Virtual Machine Specification, SE 21.
      Section 4.7.16: The RuntimeVisibleAnnotations Attribute.
"""

from __future__ import annotations

from typing import Iterator, Optional

from shared.logger import JdepLogger

from jdep.parsers.constant_pool import ConstantPool, class_name_at
from jdep.parsers.reader import BinaryReader

RUNTIME_VISIBLE_ANNOTATIONS = "RuntimeVisibleAnnotations"

_CONST_VALUE_TAGS = frozenset(b"BCDFIJSZs")
_CLASS_TAG = ord("c")
_ENUM_TAG = ord("e")
_ANNOTATION_TAG = ord("@")
_ARRAY_TAG = ord("[")


class AnnotationScanner:
    """Yields class names referenced by one annotations attribute.

    Usage::

        scanner = AnnotationScanner(parsed.pool)
        for name in scanner.scan(record.payload):
            ...

    Args:
        pool:        Constant pool of the class the attribute belongs to.
        source_name: Used in truncation errors.
        logger:      Optional logger for skipped element tags.
    """

    def __init__(
        self,
        pool: ConstantPool,
        source_name: str = "<annotations>",
        logger: Optional[JdepLogger] = None,
    ) -> None:
        self._pool = pool
        self._source_name = source_name
        self._logger = logger

    def scan(self, payload: bytes) -> Iterator[str]:
        """Walk a full ``RuntimeVisibleAnnotations`` payload."""
        reader = BinaryReader(payload, source_name=self._source_name)
        for _ in range(reader.read_u16()):
            yield from self._annotation(reader)

    def _annotation(self, reader: BinaryReader) -> Iterator[str]:
        name = class_name_at(self._pool, reader.read_u16())
        if name is not None:
            yield name
        for _ in range(reader.read_u16()):
            reader.read_u16()  # element_name_index
            yield from self._element_value(reader)

    def _element_value(self, reader: BinaryReader) -> Iterator[str]:
        tag = reader.read_u8()

        if tag in _CONST_VALUE_TAGS:
            reader.read_u16()
        elif tag == _CLASS_TAG:
            name = class_name_at(self._pool, reader.read_u16())
            if name is not None:
                yield name
        elif tag == _ENUM_TAG:
            name = class_name_at(self._pool, reader.read_u16())
            reader.read_u16()  # const_name_index
            if name is not None:
                yield name
        elif tag == _ANNOTATION_TAG:
            yield from self._annotation(reader)
        elif tag == _ARRAY_TAG:
            for _ in range(reader.read_u16()):
                yield from self._element_value(reader)
        elif self._logger is not None:
            self._logger.debug(
                "skipping unknown element value tag 0x%02x at offset %d in %s",
                tag, reader.position - 1, self._source_name,
            )
