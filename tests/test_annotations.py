"""Tests for the runtime-visible annotation scanner."""

from __future__ import annotations

import pytest

from jdep.analyzers.annotations import AnnotationScanner
from jdep.core.errors import TruncatedInput
from jdep.parsers.class_file import parse_class_bytes
from tests.builders import (
    ClassFileBuilder,
    annotation,
    annotations_payload,
    ev_annotation,
    ev_array,
    ev_class,
    ev_const,
    ev_enum,
)


def _scan(builder: ClassFileBuilder, payload: bytes) -> list[str]:
    parsed = parse_class_bytes(builder.to_bytes())
    return list(AnnotationScanner(parsed.pool).scan(payload))


class TestAnnotationTypes:
    def test_descriptor_type_index(self) -> None:
        b = ClassFileBuilder("com/acme/Widget")
        ann = annotation(b.pool.utf8("Lcom/foo/Bar;"))
        assert _scan(b, annotations_payload(ann)) == ["com/foo/Bar"]

    def test_class_constant_type_index(self) -> None:
        b = ClassFileBuilder("com/acme/Widget")
        ann = annotation(b.pool.class_("com/foo/Marker"))
        assert _scan(b, annotations_payload(ann)) == ["com/foo/Marker"]

    def test_several_annotations(self) -> None:
        b = ClassFileBuilder("com/acme/Widget")
        first = annotation(b.pool.utf8("Lcom/foo/A;"))
        second = annotation(b.pool.utf8("Lcom/foo/B;"))
        assert _scan(b, annotations_payload(first, second)) == ["com/foo/A", "com/foo/B"]

    def test_empty_payload_list(self) -> None:
        b = ClassFileBuilder("com/acme/Widget")
        assert _scan(b, annotations_payload()) == []


class TestElementValues:
    def test_nested_annotation_array_of_enums(self) -> None:
        b = ClassFileBuilder("com/acme/Widget")
        p = b.pool
        inner = annotation(
            p.utf8("Lcom/acme/Inner;"),
            [(
                p.utf8("value"),
                ev_array([
                    ev_enum(p.utf8("Lcom/acme/Color;"), p.utf8("RED")),
                    ev_enum(p.utf8("Lcom/acme/Size;"), p.utf8("BIG")),
                ]),
            )],
        )
        outer = annotation(p.utf8("Lcom/acme/Outer;"), [(p.utf8("inner"), ev_annotation(inner))])

        assert _scan(b, annotations_payload(outer)) == [
            "com/acme/Outer",
            "com/acme/Inner",
            "com/acme/Color",
            "com/acme/Size",
        ]

    def test_constants_consume_one_index(self) -> None:
        b = ClassFileBuilder("com/acme/Widget")
        p = b.pool
        name = p.utf8("v")
        pairs = [(name, ev_const(tag, p.integer(1))) for tag in "BCDFIJSZs"]
        pairs.append((name, ev_class(p.utf8("Lcom/acme/Target;"))))
        ann = annotation(p.utf8("Lcom/acme/Config;"), pairs)
        assert _scan(b, annotations_payload(ann)) == ["com/acme/Config", "com/acme/Target"]

    def test_class_literal_of_primitive_ignored(self) -> None:
        b = ClassFileBuilder("com/acme/Widget")
        p = b.pool
        ann = annotation(
            p.utf8("Lcom/acme/Returns;"),
            [(p.utf8("value"), ev_class(p.utf8("V")))],
        )
        assert _scan(b, annotations_payload(ann)) == ["com/acme/Returns"]

    def test_unknown_tag_is_skipped(self) -> None:
        b = ClassFileBuilder("com/acme/Widget")
        p = b.pool
        name = p.utf8("v")
        ann = annotation(
            p.utf8("Lcom/acme/Future;"),
            [(name, b"X"), (name, ev_class(p.utf8("Lcom/acme/After;")))],
        )
        assert _scan(b, annotations_payload(ann)) == ["com/acme/Future", "com/acme/After"]

    def test_truncated_payload(self) -> None:
        b = ClassFileBuilder("com/acme/Widget")
        ann = annotation(b.pool.utf8("Lcom/acme/A;"), [(b.pool.utf8("v"), ev_const("I", 1))])
        payload = annotations_payload(ann)[:-1]
        with pytest.raises(TruncatedInput):
            _scan(b, payload)
