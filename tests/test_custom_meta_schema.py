from __future__ import annotations

import pytest

from schema_validator import (
    EnumNamesKeyword,
    MetaSchema,
    SchemaCompileError,
    SchemaFactory,
    SpecVersion,
    get_meta_schema,
)

from .conftest import EXAMPLE_META_SCHEMA_URI

ENUM_NAMES_SCHEMA = """{
  "$schema": "https://github.com/networknt/json-schema-validator/tests/schemas/example01#",
  "enum": ["foo", "bar"],
  "enumNames": ["Foo !", "Bar !"]
}"""


def test_custom_meta_schema_with_enum_names_keyword(enum_names_factory) -> None:
    schema = enum_names_factory.get_schema(ENUM_NAMES_SCHEMA)

    messages = schema.validate("foo")
    assert len(messages) == 1

    message = next(iter(messages))
    assert message.message == "$: enumName is Foo !"
    assert message.path == "$"
    assert message.keyword == "enumNames"
    assert message.message_type == "tests.example.enumNames"
    assert message.arguments == ("$", "Foo !")


def test_enum_names_label_for_second_value(enum_names_factory) -> None:
    schema = enum_names_factory.get_schema(ENUM_NAMES_SCHEMA)

    messages = schema.validate("bar")

    assert [m.message for m in messages] == ["$: enumName is Bar !"]


def test_enum_names_value_outside_enum_is_reported(enum_names_factory) -> None:
    schema = enum_names_factory.get_schema(ENUM_NAMES_SCHEMA)

    messages = sorted(schema.validate("baz"))

    by_keyword = {m.keyword: m for m in messages}
    assert set(by_keyword) == {"enum", "enumNames"}
    assert by_keyword["enumNames"].message_type == "enumNames.unknownValue"
    assert by_keyword["enumNames"].message == "$: value baz has no enumName"


def test_enum_names_object_instance_has_no_label(enum_names_factory) -> None:
    schema = enum_names_factory.get_schema(
        {"$schema": EXAMPLE_META_SCHEMA_URI, "enum": ["", "a"], "enumNames": ["Empty", "A"]}
    )

    messages = schema.validate({"x": 1})

    names = [m for m in messages if m.keyword == "enumNames"]
    assert len(names) == 1
    assert names[0].message_type == "enumNames.unknownValue"


def test_enum_names_length_mismatch_fails_compilation(enum_names_factory) -> None:
    with pytest.raises(SchemaCompileError, match="same length"):
        enum_names_factory.get_schema(
            {"$schema": EXAMPLE_META_SCHEMA_URI, "enum": ["x", "y"], "enumNames": ["A", "B", "C"]}
        )


def test_enum_names_requires_sibling_enum(enum_names_factory) -> None:
    with pytest.raises(SchemaCompileError, match="sibling enum"):
        enum_names_factory.get_schema({"$schema": EXAMPLE_META_SCHEMA_URI, "enumNames": ["A"]})


def test_enum_names_requires_array(enum_names_factory) -> None:
    with pytest.raises(SchemaCompileError, match="needs to receive an array") as excinfo:
        enum_names_factory.get_schema(
            {"$schema": EXAMPLE_META_SCHEMA_URI, "enum": ["x"], "enumNames": "A"}
        )
    assert excinfo.value.schema_path == "#/enumNames"


def test_enum_names_nested_in_properties_reports_property_path(enum_names_factory) -> None:
    schema = enum_names_factory.get_schema(
        {
            "$schema": EXAMPLE_META_SCHEMA_URI,
            "properties": {"color": {"enum": ["r", "g"], "enumNames": ["Red", "Green"]}},
        }
    )

    messages = schema.validate({"color": "g"})

    assert [m.message for m in messages] == ["$.color: enumName is Green"]


def test_base_meta_schema_ignores_enum_names() -> None:
    factory = SchemaFactory.get_instance(SpecVersion.V7)
    schema = factory.get_schema({"enum": ["foo", "bar"], "enumNames": ["Foo !"]})

    assert schema.validate("foo") == set()


def test_extend_meta_schema_through_factory() -> None:
    factory = SchemaFactory.get_instance(SpecVersion.V6)
    extended = factory.extend_meta_schema(SpecVersion.V6.uri, [EnumNamesKeyword()], uri=EXAMPLE_META_SCHEMA_URI)

    assert extended.parent is get_meta_schema(SpecVersion.V6)
    assert factory.get_meta_schema(EXAMPLE_META_SCHEMA_URI) is extended

    schema = factory.get_schema(ENUM_NAMES_SCHEMA)
    assert [m.message for m in schema.validate("foo")] == ["$: enumName is Foo !"]


def test_explicit_meta_schema_argument_wins_over_default() -> None:
    meta_schema = MetaSchema.extend(get_meta_schema(SpecVersion.V7), [EnumNamesKeyword()])
    factory = SchemaFactory.get_instance(SpecVersion.V7)

    schema = factory.get_schema({"enum": ["foo"], "enumNames": ["Foo"]}, meta_schema=meta_schema)

    assert schema.meta_schema is meta_schema
    assert [m.message for m in schema.validate("foo")] == ["$: enumName is Foo"]
