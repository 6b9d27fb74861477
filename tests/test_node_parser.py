from __future__ import annotations

import pytest

from schema_validator import SchemaFactory, SchemaParseError, SpecVersion
from schema_validator.parsing import NodeParser


def test_parse_json_and_yaml_strings() -> None:
    parser = NodeParser(cache_enabled=False)

    assert parser.parse_string('{"enum": ["foo"]}').get("enum").get(0).as_text() == "foo"
    yaml_node = parser.parse_string("type: object\nrequired:\n  - name\n")
    assert yaml_node.get("type").as_text() == "object"
    assert [c.as_text() for c in yaml_node.get("required")] == ["name"]


def test_yaml_keys_are_stringified() -> None:
    node = NodeParser(cache_enabled=False).parse_string("1: one\n2020-01-01: date\n")

    assert node.keys() == ["1", "2020-01-01"]


def test_malformed_content_raises_parse_error() -> None:
    parser = NodeParser(cache_enabled=False)

    with pytest.raises(SchemaParseError):
        parser.parse_string("key: [unclosed")
    with pytest.raises(SchemaParseError):
        parser.parse_string(b"{}")


def test_parse_file_errors(tmp_path) -> None:
    parser = NodeParser(cache_enabled=False)

    with pytest.raises(SchemaParseError, match="not found"):
        parser.parse_file(tmp_path / "missing.json")
    with pytest.raises(SchemaParseError, match="not a file"):
        parser.parse_file(tmp_path)


def test_undecodable_file_raises_parse_error(tmp_path) -> None:
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"type": "\xff"}')

    with pytest.raises(SchemaParseError, match="Failed to read document file"):
        NodeParser(cache_enabled=False).parse_file(path)


def test_cache_returns_same_node_until_cleared(tmp_path) -> None:
    path = tmp_path / "schema.yaml"
    path.write_text("type: string\n", encoding="utf-8")
    parser = NodeParser(cache_enabled=True)

    first = parser.parse_file(path)
    path.write_text("type: integer\n", encoding="utf-8")
    assert parser.parse_file(path) is first

    parser.clear_cache()
    assert parser.parse_file(path).get("type").as_text() == "integer"


def test_factory_loads_schema_from_file(tmp_path) -> None:
    path = tmp_path / "person.yaml"
    path.write_text("type: object\nrequired: [name]\n", encoding="utf-8")
    factory = SchemaFactory.get_instance(SpecVersion.V7)

    schema = factory.get_schema_from_file(path)

    assert [m.message for m in schema.validate({})] == ["$.name: is missing but it is required"]
