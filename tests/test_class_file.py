"""Tests for the whole-record class file walker."""

from __future__ import annotations

import io

import pytest

from jdep.core.errors import InvalidConstantTag, TruncatedInput
from jdep.parsers.class_file import AttributeRecord, ClassFileParser, parse_class_bytes
from jdep.parsers.constant_pool import ClassConstant, class_name_at
from tests.builders import ClassFileBuilder


def _widget() -> ClassFileBuilder:
    b = ClassFileBuilder("com/acme/Widget")
    b.add_interface("com/acme/Part")
    b.add_field("size", "I", [b.attribute("ConstantValue", b"\x00\x01")])
    b.add_method("run", "()V", [b.attribute("Code", b"\x00" * 12)])
    b.add_method("stop", "()V")
    b.add_attribute("SourceFile", b"\x00\x02")
    return b


class TestLayout:
    def test_pool_survives(self) -> None:
        b = _widget()
        parsed = parse_class_bytes(b.to_bytes(), source_name="Widget.class")
        assert isinstance(parsed.pool[b.this_index], ClassConstant)
        assert class_name_at(parsed.pool, b.this_index) == "com/acme/Widget"
        assert class_name_at(parsed.pool, b.super_index) == "java/lang/Object"
        assert parsed.source_name == "Widget.class"

    def test_member_attributes_flattened_in_order(self) -> None:
        parsed = parse_class_bytes(_widget().to_bytes())
        names = [parsed.attribute_name(a) for a in parsed.attributes]
        assert names == ["ConstantValue", "Code", "SourceFile"]

    def test_payloads_kept_opaque(self) -> None:
        parsed = parse_class_bytes(_widget().to_bytes())
        (code,) = parsed.attributes_named("Code")
        assert isinstance(code, AttributeRecord)
        assert code.payload == b"\x00" * 12

    def test_reads_from_stream(self) -> None:
        parsed = ClassFileParser(io.BytesIO(_widget().to_bytes())).parse()
        assert len(parsed.attributes) == 3

    def test_no_members(self) -> None:
        parsed = parse_class_bytes(ClassFileBuilder("a/B").to_bytes())
        assert parsed.attributes == []


class TestMalformed:
    def test_truncated_tail(self) -> None:
        data = _widget().to_bytes()
        with pytest.raises(TruncatedInput):
            parse_class_bytes(data[:-1])

    def test_truncated_header(self) -> None:
        with pytest.raises(TruncatedInput):
            parse_class_bytes(b"\xca\xfe\xba")

    def test_bad_pool_tag(self) -> None:
        data = b"\xca\xfe\xba\xbe\x00\x00\x00\x34" + b"\x00\x02" + b"\x63"
        with pytest.raises(InvalidConstantTag) as info:
            parse_class_bytes(data, source_name="Bad.class")
        assert info.value.tag == 0x63
