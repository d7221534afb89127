"""
Class File Parser
==================

Walks the layout of a single compiled class record and keeps only what
dependency extraction needs: the constant pool and the raw attribute
records.  Header fields, interfaces, and field/method descriptors are
read and discarded.

Layout::

    u4 magic; u2 minor; u2 major
    u2 constant_pool_count; cp_info constant_pool[count - 1]
    u2 access_flags; u2 this_class; u2 super_class
    u2 interfaces_count; u2 interfaces[interfaces_count]
    u2 fields_count; field_info fields[fields_count]
    u2 methods_count; method_info methods[methods_count]
    u2 attributes_count; attribute_info attributes[attributes_count]

References:
    - Oracle. (2023). The Java Virtual Machine Specification, SE 21.
      Section 4.1: The ClassFile Structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, Optional

from jdep.parsers.constant_pool import (
    ConstantPool,
    ConstantPoolParser,
    utf8_at,
)
from jdep.parsers.reader import BinaryReader


@dataclass(frozen=True, slots=True)
class AttributeRecord:
    """One ``attribute_info`` with its payload kept opaque."""
    name_index: int
    payload: bytes


@dataclass(slots=True)
class ParsedClass:
    """Constant pool plus every attribute found anywhere in the class.

    Field and method attributes are flattened into :attr:`attributes`
    together with the class-level ones.
    """
    pool: ConstantPool
    attributes: list[AttributeRecord] = field(default_factory=list)
    source_name: str = "<bytes>"

    def attribute_name(self, record: AttributeRecord) -> Optional[str]:
        return utf8_at(self.pool, record.name_index)

    def attributes_named(self, name: str) -> list[AttributeRecord]:
        """Return every attribute whose name constant equals *name*."""
        return [a for a in self.attributes if self.attribute_name(a) == name]


class ClassFileParser:
    """Parses one class record into a :class:`ParsedClass`.

    Any read failure propagates: a class file that cannot be walked to
    the end is rejected as a whole.

    Usage::

        with open(path, "rb") as fh:
            parsed = ClassFileParser(fh, source_name=path).parse()
    """

    def __init__(self, source: BinaryIO | bytes, source_name: str = "<bytes>") -> None:
        self._reader = BinaryReader(source, source_name=source_name)
        self._source_name = source_name

    def parse(self) -> ParsedClass:
        reader = self._reader

        reader.read_u32()  # magic
        reader.read_u16()  # minor_version
        reader.read_u16()  # major_version

        pool_count = reader.read_u16()
        pool = ConstantPoolParser(reader).parse(pool_count)

        reader.read_u16()  # access_flags
        reader.read_u16()  # this_class
        reader.read_u16()  # super_class
        reader.skip_u16_array(reader.read_u16())  # interfaces

        attributes: list[AttributeRecord] = []
        self._read_members(reader.read_u16(), attributes)  # fields
        self._read_members(reader.read_u16(), attributes)  # methods
        self._read_attributes(reader.read_u16(), attributes)

        return ParsedClass(
            pool=pool, attributes=attributes, source_name=self._source_name
        )

    def _read_members(self, count: int, out: list[AttributeRecord]) -> None:
        # field_info and method_info share the same shape.
        reader = self._reader
        for _ in range(count):
            reader.read_u16()  # access_flags
            reader.read_u16()  # name_index
            reader.read_u16()  # descriptor_index
            self._read_attributes(reader.read_u16(), out)

    def _read_attributes(self, count: int, out: list[AttributeRecord]) -> None:
        reader = self._reader
        for _ in range(count):
            name_index = reader.read_u16()
            length = reader.read_u32()
            out.append(AttributeRecord(name_index, reader.read_block(length)))


def parse_class_bytes(data: bytes, source_name: str = "<bytes>") -> ParsedClass:
    """Convenience wrapper parsing an in-memory class file."""
    return ClassFileParser(data, source_name=source_name).parse()
