from __future__ import annotations

from schema_validator import CustomErrorMessageType, PositionalMessageFormatter, SchemaFactory, SpecVersion


def test_positional_formatter_only_replaces_numbered_placeholders() -> None:
    formatter = PositionalMessageFormatter()

    assert formatter.format("{0}: {1} vs {name} {2}", ["$", "x"]) == "$: x vs {name} {2}"
    assert formatter.format("{1}{0}{1}", ["a", "b"]) == "bab"


def test_custom_message_type_is_a_value() -> None:
    first = CustomErrorMessageType.of("tests.example.enumNames", "{0}: enumName is {1}")
    second = CustomErrorMessageType.of("tests.example.enumNames", "{0}: enumName is {1}")

    assert first == second
    assert first.code == "tests.example.enumNames"


class _UpperFormatter:
    def format(self, template, arguments):
        return PositionalMessageFormatter().format(template, arguments).upper()


def test_factory_uses_injected_formatter() -> None:
    factory = SchemaFactory.builder().default_meta_schema_uri(SpecVersion.V7.uri).message_formatter(
        _UpperFormatter()
    ).build()

    messages = factory.get_schema({"minLength": 2}).validate("a")

    assert [m.message for m in messages] == ["$: MUST BE AT LEAST 2 CHARACTERS LONG"]
    assert [m.arguments for m in messages] == [("$", "2")]
