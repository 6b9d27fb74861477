# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Read-only node view over parsed JSON/YAML data.

Schemas and instances are both handed to the engine as :class:`JsonNode`
trees. A node wraps the plain Python value produced by a parser
(``dict``/``list``/``str``/``int``/``float``/``bool``/``None``) and never
mutates it.
"""

from __future__ import annotations

import json
import math
from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple, Union


class NodeKind(str, Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


def _kind_of(value: Any) -> NodeKind:
    # bool is a subclass of int, so it must be checked first
    if value is None:
        return NodeKind.NULL
    if isinstance(value, bool):
        return NodeKind.BOOLEAN
    if isinstance(value, (int, float)):
        return NodeKind.NUMBER
    if isinstance(value, str):
        return NodeKind.STRING
    if isinstance(value, dict):
        return NodeKind.OBJECT
    if isinstance(value, (list, tuple)):
        return NodeKind.ARRAY
    raise TypeError(f"Unsupported node value type: {type(value).__name__}")


def json_equal(left: Any, right: Any) -> bool:
    """Compare two plain values with JSON semantics (``1 == 1.0``, ``true != 1``)."""
    left_kind = _kind_of(left)
    if left_kind != _kind_of(right):
        return False
    if left_kind == NodeKind.OBJECT:
        if set(left.keys()) != set(right.keys()):
            return False
        return all(json_equal(left[key], right[key]) for key in left)
    if left_kind == NodeKind.ARRAY:
        if len(left) != len(right):
            return False
        return all(json_equal(a, b) for a, b in zip(left, right))
    return left == right


def _number_text(value: Union[int, float]) -> str:
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return str(value)
        return repr(value)
    return str(value)


class JsonNode:
    """Immutable view of one position in a parsed document."""

    __slots__ = ("_value", "_kind")

    def __init__(self, value: Any):
        self._kind = _kind_of(value)
        self._value = value

    @classmethod
    def of(cls, value: Any) -> "JsonNode":
        """Wrap ``value`` unless it already is a node."""
        if isinstance(value, JsonNode):
            return value
        return cls(value)

    @property
    def kind(self) -> NodeKind:
        return self._kind

    def is_object(self) -> bool:
        return self._kind == NodeKind.OBJECT

    def is_array(self) -> bool:
        return self._kind == NodeKind.ARRAY

    def is_string(self) -> bool:
        return self._kind == NodeKind.STRING

    def is_number(self) -> bool:
        return self._kind == NodeKind.NUMBER

    def is_integral_number(self, allow_integral_float: bool = True) -> bool:
        if self._kind != NodeKind.NUMBER:
            return False
        if isinstance(self._value, int):
            return True
        return allow_integral_float and math.isfinite(self._value) and self._value.is_integer()

    def is_boolean(self) -> bool:
        return self._kind == NodeKind.BOOLEAN

    def is_null(self) -> bool:
        return self._kind == NodeKind.NULL

    def is_container(self) -> bool:
        return self._kind in (NodeKind.OBJECT, NodeKind.ARRAY)

    # ---- scalar accessors ---------------------------------------------------

    def as_text(self) -> str:
        """Textual form of a scalar; containers render as an empty string."""
        if self._kind == NodeKind.STRING:
            return self._value
        if self._kind == NodeKind.NUMBER:
            return _number_text(self._value)
        if self._kind == NodeKind.BOOLEAN:
            return "true" if self._value else "false"
        if self._kind == NodeKind.NULL:
            return "null"
        return ""

    def as_number(self) -> Optional[Union[int, float]]:
        if self._kind == NodeKind.NUMBER:
            return self._value
        return None

    def as_bool(self) -> bool:
        if self._kind == NodeKind.BOOLEAN:
            return self._value
        if self._kind == NodeKind.STRING:
            return self._value.strip().lower() == "true"
        return False

    # ---- structural accessors ----------------------------------------------

    def get(self, key: Union[str, int]) -> Optional["JsonNode"]:
        """Child by object key or array index, ``None`` when absent."""
        if self._kind == NodeKind.OBJECT and isinstance(key, str):
            if key in self._value:
                return JsonNode(self._value[key])
            return None
        if self._kind == NodeKind.ARRAY and isinstance(key, int) and not isinstance(key, bool):
            if 0 <= key < len(self._value):
                return JsonNode(self._value[key])
        return None

    def has(self, key: str) -> bool:
        return self._kind == NodeKind.OBJECT and key in self._value

    def size(self) -> int:
        if self.is_container():
            return len(self._value)
        return 0

    def keys(self) -> List[str]:
        if self._kind != NodeKind.OBJECT:
            return []
        return [str(k) for k in self._value.keys()]

    def items(self) -> Iterator[Tuple[str, "JsonNode"]]:
        if self._kind != NodeKind.OBJECT:
            return iter(())
        return ((str(k), JsonNode(v)) for k, v in self._value.items())

    def children(self) -> Iterator["JsonNode"]:
        """Array elements, or object member values, in document order."""
        if self._kind == NodeKind.ARRAY:
            return (JsonNode(v) for v in self._value)
        if self._kind == NodeKind.OBJECT:
            return (JsonNode(v) for v in self._value.values())
        return iter(())

    def __iter__(self) -> Iterator["JsonNode"]:
        return self.children()

    def __len__(self) -> int:
        return self.size()

    # ---- conversion ---------------------------------------------------------

    def to_python(self) -> Any:
        return self._value

    def to_json(self) -> str:
        return json.dumps(self._value, ensure_ascii=False, separators=(",", ":"), default=str)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonNode):
            return NotImplemented
        return json_equal(self._value, other._value)

    def __hash__(self) -> int:
        if self._kind == NodeKind.NUMBER and isinstance(self._value, float) and self._value.is_integer():
            return hash((self._kind, int(self._value)))
        if self.is_container():
            return hash((self._kind, self.size()))
        return hash((self._kind, self._value))

    def __repr__(self) -> str:
        return f"JsonNode({self.to_json()})"

    def __str__(self) -> str:
        return self.to_json()
