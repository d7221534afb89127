"""
Constant Pool Parser
=====================

Decodes the constant pool of a class file into a list of typed,
immutable entries.  Pool indices are 1-based: slot 0 is always ``None``.

``Long`` and ``Double`` constants take up two pool slots.  The slot
after such an entry is left ``None`` and must never be treated as a
real constant; skipping it is what keeps every later index aligned.

References:
    - Oracle. (2023). The Java Virtual Machine Specification, SE 21.
      Section 4.4: The Constant Pool.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from jdep.core.errors import InvalidConstantTag
from jdep.parsers.reader import BinaryReader


# ---------------------------------------------------------------------------
# Tag values
# ---------------------------------------------------------------------------

class ConstantTag(enum.IntEnum):
    """Constant pool tag bytes understood by the parser."""
    UTF8 = 1
    INTEGER = 3
    FLOAT = 4
    LONG = 5
    DOUBLE = 6
    CLASS = 7
    STRING = 8
    FIELDREF = 9
    METHODREF = 10
    INTERFACE_METHODREF = 11
    NAME_AND_TYPE = 12


# ---------------------------------------------------------------------------
# Entry variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Utf8Constant:
    text: str
    tag: ClassVar[ConstantTag] = ConstantTag.UTF8


@dataclass(frozen=True, slots=True)
class ClassConstant:
    name_index: int
    tag: ClassVar[ConstantTag] = ConstantTag.CLASS


@dataclass(frozen=True, slots=True)
class StringConstant:
    string_index: int
    tag: ClassVar[ConstantTag] = ConstantTag.STRING


@dataclass(frozen=True, slots=True)
class IntegerConstant:
    raw: int
    tag: ClassVar[ConstantTag] = ConstantTag.INTEGER


@dataclass(frozen=True, slots=True)
class FloatConstant:
    raw: int
    tag: ClassVar[ConstantTag] = ConstantTag.FLOAT


@dataclass(frozen=True, slots=True)
class LongConstant:
    high: int
    low: int
    tag: ClassVar[ConstantTag] = ConstantTag.LONG


@dataclass(frozen=True, slots=True)
class DoubleConstant:
    high: int
    low: int
    tag: ClassVar[ConstantTag] = ConstantTag.DOUBLE


@dataclass(frozen=True, slots=True)
class FieldrefConstant:
    class_index: int
    name_and_type_index: int
    tag: ClassVar[ConstantTag] = ConstantTag.FIELDREF


@dataclass(frozen=True, slots=True)
class MethodrefConstant:
    class_index: int
    name_and_type_index: int
    tag: ClassVar[ConstantTag] = ConstantTag.METHODREF


@dataclass(frozen=True, slots=True)
class InterfaceMethodrefConstant:
    class_index: int
    name_and_type_index: int
    tag: ClassVar[ConstantTag] = ConstantTag.INTERFACE_METHODREF


@dataclass(frozen=True, slots=True)
class NameAndTypeConstant:
    name_index: int
    descriptor_index: int
    tag: ClassVar[ConstantTag] = ConstantTag.NAME_AND_TYPE


ConstantPoolEntry = Union[
    Utf8Constant,
    ClassConstant,
    StringConstant,
    IntegerConstant,
    FloatConstant,
    LongConstant,
    DoubleConstant,
    FieldrefConstant,
    MethodrefConstant,
    InterfaceMethodrefConstant,
    NameAndTypeConstant,
]

ConstantPool = list[Optional[ConstantPoolEntry]]

# Member references share one layout: class_index, name_and_type_index.
_MEMBER_REFS: dict[int, type] = {
    ConstantTag.FIELDREF: FieldrefConstant,
    ConstantTag.METHODREF: MethodrefConstant,
    ConstantTag.INTERFACE_METHODREF: InterfaceMethodrefConstant,
}


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class ConstantPoolParser:
    """Reads ``count - 1`` constant pool entries from a :class:`BinaryReader`.

    Usage::

        pool = ConstantPoolParser(reader).parse(count)
        entry = pool[7]
    """

    def __init__(self, reader: BinaryReader) -> None:
        self._reader = reader

    def parse(self, count: int) -> ConstantPool:
        """Decode the pool.

        Args:
            count: The declared ``constant_pool_count`` (one more than the
                   number of usable slots).

        Returns:
            A list of *count* slots.  Slot 0 and the slot following each
            ``Long``/``Double`` entry are ``None``.

        Raises:
            InvalidConstantTag: On an unknown tag byte.
            TruncatedInput: If the input ends inside the pool.
        """
        pool: ConstantPool = [None] * max(count, 1)
        index = 1
        while index < count:
            entry = self._parse_entry()
            pool[index] = entry
            if isinstance(entry, (LongConstant, DoubleConstant)):
                # Eight-byte constants take two slots.
                index += 1
            index += 1
        return pool

    def _parse_entry(self) -> ConstantPoolEntry:
        reader = self._reader
        tag = reader.read_u8()

        if tag == ConstantTag.CLASS:
            return ClassConstant(name_index=reader.read_u16())
        if tag in _MEMBER_REFS:
            class_index = reader.read_u16()
            nat_index = reader.read_u16()
            return _MEMBER_REFS[tag](class_index, nat_index)
        if tag == ConstantTag.STRING:
            return StringConstant(string_index=reader.read_u16())
        if tag == ConstantTag.INTEGER:
            return IntegerConstant(raw=reader.read_u32())
        if tag == ConstantTag.FLOAT:
            return FloatConstant(raw=reader.read_u32())
        if tag == ConstantTag.LONG:
            high = reader.read_u32()
            return LongConstant(high=high, low=reader.read_u32())
        if tag == ConstantTag.DOUBLE:
            high = reader.read_u32()
            return DoubleConstant(high=high, low=reader.read_u32())
        if tag == ConstantTag.NAME_AND_TYPE:
            name_index = reader.read_u16()
            return NameAndTypeConstant(
                name_index=name_index, descriptor_index=reader.read_u16()
            )
        if tag == ConstantTag.UTF8:
            length = reader.read_u16()
            raw = reader.read_block(length)
            return Utf8Constant(text=raw.decode("utf-8", errors="replace"))

        raise InvalidConstantTag(tag, reader.source_name)


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------

def pool_entry(pool: ConstantPool, index: int) -> Optional[ConstantPoolEntry]:
    """Return the entry at *index*, or ``None`` for empty or out-of-range slots."""
    if 0 < index < len(pool):
        return pool[index]
    return None


def utf8_at(pool: ConstantPool, index: int) -> Optional[str]:
    """Return the text of the ``Utf8`` constant at *index*, if it is one."""
    entry = pool_entry(pool, index)
    if isinstance(entry, Utf8Constant):
        return entry.text
    return None


def class_name_at(pool: ConstantPool, index: int) -> Optional[str]:
    """Resolve a class reference to its plain internal name.

    A ``Class`` constant is followed to its ``Utf8`` name.  A ``Utf8``
    constant holding a field descriptor of the form ``L<name>;`` is
    stripped to ``<name>``.  Anything else resolves to ``None``.
    """
    entry = pool_entry(pool, index)
    if isinstance(entry, ClassConstant):
        return utf8_at(pool, entry.name_index)
    if isinstance(entry, Utf8Constant):
        return descriptor_to_name(entry.text)
    return None


def descriptor_to_name(descriptor: str) -> Optional[str]:
    """``"Lcom/foo/Bar;"`` -> ``"com/foo/Bar"``; non-object descriptors -> ``None``."""
    if not descriptor.startswith("L"):
        return None
    end = descriptor.find(";")
    if end < 0:
        return descriptor[1:]
    return descriptor[1:end]
