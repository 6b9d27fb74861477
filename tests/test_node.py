from __future__ import annotations

import pytest

from schema_validator import InstancePath, JsonNode, NodeKind
from schema_validator.models.path import join_pointer, jp_escape, jp_unescape


def test_kinds_keep_booleans_apart_from_numbers() -> None:
    assert JsonNode(True).kind == NodeKind.BOOLEAN
    assert JsonNode(1).kind == NodeKind.NUMBER
    assert JsonNode(None).is_null()
    assert JsonNode({"a": 1}).is_container()
    with pytest.raises(TypeError):
        JsonNode(object())


def test_integral_numbers() -> None:
    assert JsonNode(3).is_integral_number(False)
    assert JsonNode(3.0).is_integral_number()
    assert not JsonNode(3.0).is_integral_number(False)
    assert not JsonNode(float("inf")).is_integral_number()
    assert not JsonNode(True).is_integral_number()


def test_as_text() -> None:
    assert JsonNode("Foo !").as_text() == "Foo !"
    assert JsonNode(1.5).as_text() == "1.5"
    assert JsonNode(False).as_text() == "false"
    assert JsonNode(None).as_text() == "null"
    assert JsonNode([1]).as_text() == ""


def test_structural_access() -> None:
    node = JsonNode({"b": [10, 20], "a": None})

    assert node.keys() == ["b", "a"]
    assert node.get("b").get(1).as_number() == 20
    assert node.get("b").get(2) is None
    assert node.get("missing") is None
    assert node.get("a").is_null()
    assert node.has("a") and not node.has("c")
    assert len(node) == 2
    assert [child.as_number() for child in node.get("b")] == [10, 20]


def test_json_equality() -> None:
    assert JsonNode({"a": [1, 2.0]}) == JsonNode({"a": [1.0, 2]})
    assert JsonNode(1) != JsonNode(True)
    assert hash(JsonNode(1)) == hash(JsonNode(1.0))
    assert JsonNode({"a": 1}).to_json() == '{"a":1}'


def test_instance_path_rendering() -> None:
    root = InstancePath.root()

    assert str(root) == "$"
    assert str(root.child("a").child(0).child("b")) == "$.a[0].b"
    assert str(root.child("a b")) == "$['a b']"
    assert str(root) == "$"


def test_json_pointer_escaping() -> None:
    assert jp_escape("a/b~c") == "a~1b~0c"
    assert jp_unescape("a~1b~0c") == "a/b~c"
    assert join_pointer("#", ["properties", "a/b", 0]) == "#/properties/a~1b/0"
