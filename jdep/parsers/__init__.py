"""
jdep Parsers
=============

Binary decoding for the class-file format: the big-endian reader, the
constant pool, and the whole-record walker.
"""

from jdep.parsers.class_file import (
    AttributeRecord,
    ClassFileParser,
    ParsedClass,
    parse_class_bytes,
)
from jdep.parsers.constant_pool import ConstantPoolParser, ConstantTag
from jdep.parsers.reader import BinaryReader

__all__ = [
    "AttributeRecord",
    "BinaryReader",
    "ClassFileParser",
    "ConstantPoolParser",
    "ConstantTag",
    "ParsedClass",
    "parse_class_bytes",
]
