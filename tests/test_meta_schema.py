from __future__ import annotations

import logging

import pytest

from schema_validator import (
    AbstractValidator,
    CustomErrorMessageType,
    DuplicateKeywordError,
    FunctionKeyword,
    KeywordRegistry,
    MetaSchema,
    MetaSchemaNotFoundError,
    MetaSchemaRegistry,
    SchemaFactory,
    SpecVersion,
    UnknownKeywordError,
    UnknownKeywordPolicy,
    ValidatorConfig,
    get_meta_schema,
    get_v4,
    get_v7,
)

ALWAYS_ENUM = CustomErrorMessageType.of("custom.enum", "{0}: custom enum saw {1}")


class _AlwaysViolate(AbstractValidator):
    def validate(self, node, root, at):
        return self.fail(ALWAYS_ENUM, at, node)


def _custom_enum_keyword() -> FunctionKeyword:
    return FunctionKeyword(
        "enum",
        lambda schema_path, schema_node, parent, context: _AlwaysViolate("enum", schema_path, context.formatter),
    )


def test_override_shadows_base_without_mutating_it() -> None:
    base = get_v7()
    custom = MetaSchema.extend(base, [_custom_enum_keyword()], uri="https://example.com/custom-enum")
    factory = SchemaFactory.get_instance(SpecVersion.V7)
    schema_doc = {"enum": ["a", "b"]}

    custom_messages = factory.get_schema(schema_doc, meta_schema=custom).validate("a")
    base_messages = factory.get_schema(schema_doc, meta_schema=base).validate("a")

    assert [m.message for m in custom_messages] == ["$: custom enum saw a"]
    assert base_messages == set()
    assert base.resolve("enum") is not custom.resolve("enum")
    assert type(base.resolve("enum")).__name__ == "EnumKeyword"


def test_lookup_falls_back_to_parent_chain() -> None:
    custom = MetaSchema.extend(get_v7(), [_custom_enum_keyword()])

    assert custom.resolve("minLength") is get_v4().resolve("minLength")
    assert custom.resolve("if") is get_v7().resolve("if")
    assert custom.resolve("doesNotExist") is None
    assert "enum" in custom.keyword_names()


def test_non_validation_keyword_in_child_shadows_parent_keyword() -> None:
    custom = MetaSchema.builder("https://example.com/no-pattern", get_v7()).add_non_validation_keywords(
        ["pattern"]
    ).build()

    assert custom.resolve("pattern") is None
    assert custom.is_non_validation_keyword("pattern")
    schema = SchemaFactory.get_instance(SpecVersion.V7).get_schema({"pattern": "^a"}, meta_schema=custom)
    assert schema.validate("zzz") == set()


def test_draft4_and_draft6_bounds_differ() -> None:
    assert get_meta_schema(SpecVersion.V4).is_non_validation_keyword("exclusiveMinimum")
    assert get_meta_schema(SpecVersion.V6).resolve("exclusiveMinimum") is not None
    assert get_meta_schema(SpecVersion.V4).resolve("const") is None
    assert get_meta_schema(SpecVersion.V6).resolve("const") is not None


def test_dialect_rules_are_inherited() -> None:
    assert get_v4().id_keyword == "id"
    assert get_v7().id_keyword == "$id"
    assert get_v4().integral_floats_are_integers is False
    assert get_v7().integral_floats_are_integers is True
    child = MetaSchema.extend(get_v4(), [])
    assert child.id_keyword == "id"
    assert child.unknown_keyword_policy == UnknownKeywordPolicy.WARN


def test_registry_rejects_duplicates_when_strict() -> None:
    registry = KeywordRegistry(allow_override=False)
    registry.register(_custom_enum_keyword())

    with pytest.raises(DuplicateKeywordError):
        registry.register(_custom_enum_keyword())


def test_registry_last_write_wins_when_lenient() -> None:
    registry = KeywordRegistry(allow_override=True)
    first, second = _custom_enum_keyword(), _custom_enum_keyword()
    registry.register(first)
    registry.register(second)

    assert registry.get("enum") is second
    assert len(registry) == 1


def test_builder_duplicate_keyword_under_strict_policy() -> None:
    builder = (
        MetaSchema.builder("https://example.com/dup")
        .allow_keyword_override(False)
        .add_keyword(_custom_enum_keyword())
        .add_keyword(_custom_enum_keyword())
    )

    with pytest.raises(DuplicateKeywordError):
        builder.build()


def test_unknown_keyword_fail_policy() -> None:
    strict = MetaSchema.builder("https://example.com/strict", get_v7()).unknown_keyword_policy("fail").build()
    factory = SchemaFactory.get_instance(SpecVersion.V7)

    with pytest.raises(UnknownKeywordError) as excinfo:
        factory.get_schema({"type": "string", "bogus": 1}, meta_schema=strict)

    assert excinfo.value.schema_path == "#/bogus"


def test_unknown_keyword_warn_policy_logs(caplog) -> None:
    factory = SchemaFactory.get_instance(SpecVersion.V7)

    with caplog.at_level(logging.WARNING, logger="schema_validator"):
        schema = factory.get_schema({"type": "string", "bogus": 1})

    assert schema.validate("x") == set()
    assert "Unknown keyword 'bogus'" in caplog.text


def test_strict_keywords_config_overrides_policy() -> None:
    factory = SchemaFactory.builder().config(ValidatorConfig(strict_keywords=True)).build()

    with pytest.raises(UnknownKeywordError):
        factory.get_schema({"bogus": True})


def test_meta_schema_registry_lookup_and_extend() -> None:
    registry = MetaSchemaRegistry([get_v7()])

    assert registry.get_meta_schema(SpecVersion.V7.uri + "#") is get_v7()
    with pytest.raises(MetaSchemaNotFoundError):
        registry.get_meta_schema("https://example.com/missing")

    extended = registry.extend_meta_schema(SpecVersion.V7.uri, [_custom_enum_keyword()], uri="https://example.com/x#")
    assert "https://example.com/x" in registry
    assert registry.get_meta_schema("https://example.com/x") is extended
    assert get_v7().resolve("enum") is not extended.resolve("enum")


def test_unknown_schema_dialect_fails() -> None:
    factory = SchemaFactory.get_instance(SpecVersion.V7)

    with pytest.raises(MetaSchemaNotFoundError):
        factory.get_schema({"$schema": "https://example.com/never-registered", "type": "string"})


def test_builder_copies_base_factory_without_sharing_registrations() -> None:
    base = SchemaFactory.get_instance(SpecVersion.V7)
    first = MetaSchema.extend(get_v7(), [_custom_enum_keyword()], uri="https://example.com/first")
    second = MetaSchema.extend(get_v4(), [], uri="https://example.com/second")

    derived = SchemaFactory.builder(base).add_meta_schemas([first, second]).build()

    assert derived.default_meta_schema is base.default_meta_schema
    assert derived.get_meta_schema("https://example.com/first") is first
    assert derived.get_meta_schema("https://example.com/second#") is second
    with pytest.raises(MetaSchemaNotFoundError):
        base.get_meta_schema("https://example.com/first")
