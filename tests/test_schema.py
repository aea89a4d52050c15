from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from csvhelper.schema import COLUMN_TAG, ColumnField, column, get_schema


@dataclass
class Person:
    name: str = column("name")
    last_name: str = column("lastname")


@dataclass(frozen=True)
class FrozenPerson:
    name: str = column("name")
    last_name: str = column("lastname")


def test_schema_keeps_declaration_order_and_tags():
    schema = get_schema(Person)

    assert schema.model is Person
    assert schema.fields == (
        ColumnField(name="name", column="name"),
        ColumnField(name="last_name", column="lastname"),
    )
    assert schema.field_names == ("name", "last_name")
    assert schema.columns == ("name", "lastname")
    assert schema.size == 2


def test_schema_is_cached_per_type():
    assert get_schema(Person) is get_schema(Person)
    assert get_schema(Person) is not get_schema(FrozenPerson)


def test_missing_or_empty_tag_is_marked_absent():
    @dataclass
    class Partial:
        a: str = column("a")
        b: str = ""
        c: str = field(default="", metadata={COLUMN_TAG: ""})

    assert get_schema(Partial).columns == ("a", None, None)


def test_init_false_fields_are_not_part_of_schema():
    @dataclass
    class WithComputed:
        a: str = column("a")
        computed: str = field(default="x", init=False)

    assert get_schema(WithComputed).field_names == ("a",)


def test_plain_metadata_declaration_is_recognized():
    @dataclass
    class Raw:
        code: str = field(default="", metadata={COLUMN_TAG: "Code"})

    assert get_schema(Raw).columns == ("Code",)


def test_non_dataclass_is_rejected():
    class NotADataclass:
        name = "x"

    with pytest.raises(TypeError):
        get_schema(NotADataclass)


def test_build_uses_zero_values_for_missing_fields():
    @dataclass
    class WithDefaults:
        a: str = column("a")
        b: str = column("b", default="n/a")
        tags: list = field(default_factory=list, metadata={COLUMN_TAG: "tags"})
        required: str = field(metadata={COLUMN_TAG: "required"}, default="")

    schema = get_schema(WithDefaults)
    assert schema.zero_values() == {"a": "", "b": "n/a", "tags": [], "required": ""}

    obj = schema.build({"a": "1"})
    assert obj == WithDefaults(a="1", b="n/a", tags=[], required="")


def test_field_without_default_gets_empty_string():
    @dataclass
    class NoDefaults:
        a: str = field(metadata={COLUMN_TAG: "a"})
        b: str = field(metadata={COLUMN_TAG: "b"})

    obj = get_schema(NoDefaults).build({"b": "x"})
    assert obj == NoDefaults(a="", b="x")


def test_build_supports_frozen_dataclass():
    obj = get_schema(FrozenPerson).build({"name": "Lucas"})
    assert obj == FrozenPerson(name="Lucas", last_name="")
