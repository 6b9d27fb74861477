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

"""Standard assertion keywords (no nested schemas).

A keyword only inspects instances of the kind it constrains; any other
kind passes (``minLength`` says nothing about numbers).
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation, localcontext
from typing import List, Optional, Tuple

from ..exceptions import SchemaCompileError
from ..models.messages import ErrorMessageType, MessageTypes
from ..node import JsonNode, NodeKind
from .base import AbstractKeyword, AbstractValidator

_NON_NEGATIVE_INTEGER = {"type": "integer", "minimum": 0}
_NUMBER = {"type": "number"}

SIMPLE_TYPES = ("array", "boolean", "integer", "null", "number", "object", "string")


def instance_type_name(node: JsonNode, allow_integral_float: bool = True) -> str:
    if node.is_integral_number(allow_integral_float):
        return "integer"
    return node.kind.value


class TypeValidator(AbstractValidator):
    def __init__(self, schema_path, formatter, types: Tuple[str, ...], allow_integral_float: bool):
        super().__init__("type", schema_path, formatter)
        self.types = types
        self.allow_integral_float = allow_integral_float

    def _matches(self, node: JsonNode, type_name: str) -> bool:
        if type_name == "integer":
            return node.is_integral_number(self.allow_integral_float)
        return node.kind.value == type_name

    def validate(self, node, root, at):
        if any(self._matches(node, t) for t in self.types):
            return set()
        return self.fail(
            MessageTypes.TYPE,
            at,
            instance_type_name(node, self.allow_integral_float),
            ", ".join(self.types),
        )


class TypeKeyword(AbstractKeyword):
    fragment_schema = {
        "anyOf": [
            {"enum": list(SIMPLE_TYPES)},
            {"type": "array", "items": {"enum": list(SIMPLE_TYPES)}, "minItems": 1},
        ]
    }

    def __init__(self):
        super().__init__("type")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        if schema_node.is_string():
            types = (schema_node.as_text(),)
        else:
            types = tuple(child.as_text() for child in schema_node)
        return TypeValidator(
            schema_path, context.formatter, types, context.meta_schema.integral_floats_are_integers
        )


class EnumValidator(AbstractValidator):
    def __init__(self, schema_path, formatter, values: List[JsonNode], rendered: JsonNode):
        super().__init__("enum", schema_path, formatter)
        self.values = values
        self.rendered = rendered

    def validate(self, node, root, at):
        if any(node == value for value in self.values):
            return set()
        return self.fail(MessageTypes.ENUM, at, self.rendered)


class EnumKeyword(AbstractKeyword):
    # An empty enum can never be satisfied
    fragment_schema = {"type": "array", "minItems": 1}

    def __init__(self):
        super().__init__("enum")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        return EnumValidator(schema_path, context.formatter, list(schema_node), schema_node)


class ConstValidator(AbstractValidator):
    def __init__(self, schema_path, formatter, value: JsonNode):
        super().__init__("const", schema_path, formatter)
        self.value = value

    def validate(self, node, root, at):
        if node == self.value:
            return set()
        return self.fail(MessageTypes.CONST, at, self.value.to_json())


class ConstKeyword(AbstractKeyword):
    def __init__(self):
        super().__init__("const")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        return ConstValidator(schema_path, context.formatter, schema_node)


class _BoundValidator(AbstractValidator):
    """Compare one measured quantity of an instance against a fixed bound."""

    def __init__(self, keyword, schema_path, formatter, bound, message_type: ErrorMessageType,
                 kind: NodeKind, measure, accept):
        super().__init__(keyword, schema_path, formatter)
        self.bound = bound
        self.message_type = message_type
        self.kind = kind
        self.measure = measure
        self.accept = accept

    def validate(self, node, root, at):
        if node.kind != self.kind:
            return set()
        if self.accept(self.measure(node), self.bound):
            return set()
        return self.fail(self.message_type, at, self.bound)


class BoundKeyword(AbstractKeyword):
    """Generic size/length/count bound (``minLength``, ``maxItems``...)."""

    fragment_schema = _NON_NEGATIVE_INTEGER

    def __init__(self, name: str, message_type: ErrorMessageType, kind: NodeKind, measure, accept):
        super().__init__(name)
        self.message_type = message_type
        self.kind = kind
        self.measure = measure
        self.accept = accept

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        bound = int(schema_node.as_number())
        return _BoundValidator(self.name, schema_path, context.formatter, bound, self.message_type,
                               self.kind, self.measure, self.accept)


def _ge(value, bound) -> bool:
    return value >= bound


def _le(value, bound) -> bool:
    return value <= bound


def _gt(value, bound) -> bool:
    return value > bound


def _lt(value, bound) -> bool:
    return value < bound


def min_length_keyword() -> BoundKeyword:
    return BoundKeyword("minLength", MessageTypes.MIN_LENGTH, NodeKind.STRING, lambda n: len(n.as_text()), _ge)


def max_length_keyword() -> BoundKeyword:
    return BoundKeyword("maxLength", MessageTypes.MAX_LENGTH, NodeKind.STRING, lambda n: len(n.as_text()), _le)


def min_items_keyword() -> BoundKeyword:
    return BoundKeyword("minItems", MessageTypes.MIN_ITEMS, NodeKind.ARRAY, JsonNode.size, _ge)


def max_items_keyword() -> BoundKeyword:
    return BoundKeyword("maxItems", MessageTypes.MAX_ITEMS, NodeKind.ARRAY, JsonNode.size, _le)


def min_properties_keyword() -> BoundKeyword:
    return BoundKeyword("minProperties", MessageTypes.MIN_PROPERTIES, NodeKind.OBJECT, JsonNode.size, _ge)


def max_properties_keyword() -> BoundKeyword:
    return BoundKeyword("maxProperties", MessageTypes.MAX_PROPERTIES, NodeKind.OBJECT, JsonNode.size, _le)


class MinimumKeyword(AbstractKeyword):
    """``minimum`` / ``maximum``.

    With ``boolean_exclusive`` (draft 4) the sibling ``exclusiveMinimum`` /
    ``exclusiveMaximum`` is a boolean that turns the bound exclusive.
    """

    fragment_schema = _NUMBER

    def __init__(self, name: str = "minimum", boolean_exclusive: bool = False):
        super().__init__(name)
        self.boolean_exclusive = boolean_exclusive
        self.is_minimum = name == "minimum"
        self.exclusive_keyword = "exclusiveMinimum" if self.is_minimum else "exclusiveMaximum"

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        exclusive = False
        if self.boolean_exclusive and parent_schema_node.has(self.exclusive_keyword):
            flag = parent_schema_node.get(self.exclusive_keyword)
            if not flag.is_boolean():
                raise SchemaCompileError(
                    f"Keyword {self.exclusive_keyword} must be a boolean in this dialect",
                    schema_path=schema_path,
                )
            exclusive = flag.as_bool()

        if self.is_minimum:
            message_type = MessageTypes.EXCLUSIVE_MINIMUM if exclusive else MessageTypes.MINIMUM
            accept = _gt if exclusive else _ge
        else:
            message_type = MessageTypes.EXCLUSIVE_MAXIMUM if exclusive else MessageTypes.MAXIMUM
            accept = _lt if exclusive else _le
        return _BoundValidator(self.name, schema_path, context.formatter, schema_node.as_number(),
                               message_type, NodeKind.NUMBER, JsonNode.as_number, accept)


class ExclusiveBoundKeyword(AbstractKeyword):
    """Numeric ``exclusiveMinimum`` / ``exclusiveMaximum`` (draft 6 and later)."""

    fragment_schema = _NUMBER

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        if self.name == "exclusiveMinimum":
            message_type, accept = MessageTypes.EXCLUSIVE_MINIMUM, _gt
        else:
            message_type, accept = MessageTypes.EXCLUSIVE_MAXIMUM, _lt
        return _BoundValidator(self.name, schema_path, context.formatter, schema_node.as_number(),
                               message_type, NodeKind.NUMBER, JsonNode.as_number, accept)


def _to_decimal(value) -> Optional[Decimal]:
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


def is_multiple_of(dividend: Decimal, divisor: Decimal) -> bool:
    """Exact divisibility test for finite decimals of any magnitude."""
    # The integer quotient must fit in the context precision, otherwise
    # the remainder operation is impossible.
    precision = max(28, dividend.adjusted() - divisor.adjusted() + 10)
    with localcontext() as ctx:
        ctx.prec = precision
        return dividend % divisor == 0


class MultipleOfValidator(AbstractValidator):
    def __init__(self, schema_path, formatter, divisor):
        super().__init__("multipleOf", schema_path, formatter)
        self.divisor = divisor
        self._decimal_divisor = _to_decimal(divisor)

    def validate(self, node, root, at):
        value = node.as_number()
        if value is None:
            return set()
        dividend = _to_decimal(value)
        if dividend is None or self._decimal_divisor is None:
            return set()
        if dividend.is_finite() and is_multiple_of(dividend, self._decimal_divisor):
            return set()
        return self.fail(MessageTypes.MULTIPLE_OF, at, self.divisor)


class MultipleOfKeyword(AbstractKeyword):
    fragment_schema = {"type": "number", "exclusiveMinimum": 0}

    def __init__(self):
        super().__init__("multipleOf")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        return MultipleOfValidator(schema_path, context.formatter, schema_node.as_number())


class PatternValidator(AbstractValidator):
    def __init__(self, schema_path, formatter, pattern: str):
        super().__init__("pattern", schema_path, formatter)
        self.pattern = pattern
        self._regex = re.compile(pattern)

    def validate(self, node, root, at):
        if not node.is_string() or self._regex.search(node.as_text()):
            return set()
        return self.fail(MessageTypes.PATTERN, at, self.pattern)


class PatternKeyword(AbstractKeyword):
    fragment_schema = {"type": "string"}

    def __init__(self):
        super().__init__("pattern")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        pattern = schema_node.as_text()
        try:
            return PatternValidator(schema_path, context.formatter, pattern)
        except re.error as exc:
            raise SchemaCompileError(f"Invalid regular expression '{pattern}': {exc}", schema_path=schema_path)


class UniqueItemsValidator(AbstractValidator):
    def validate(self, node, root, at):
        if not node.is_array():
            return set()
        seen: List[JsonNode] = []
        for item in node:
            if any(item == previous for previous in seen):
                return self.fail(MessageTypes.UNIQUE_ITEMS, at)
            seen.append(item)
        return set()


class UniqueItemsKeyword(AbstractKeyword):
    fragment_schema = {"type": "boolean"}

    def __init__(self):
        super().__init__("uniqueItems")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        if not schema_node.as_bool():
            return _PassValidator(self.name, schema_path, context.formatter)
        return UniqueItemsValidator(self.name, schema_path, context.formatter)


class RequiredValidator(AbstractValidator):
    def __init__(self, schema_path, formatter, names: Tuple[str, ...]):
        super().__init__("required", schema_path, formatter)
        self.names = names

    def validate(self, node, root, at):
        if not node.is_object():
            return set()
        violations = set()
        for name in self.names:
            if not node.has(name):
                violations |= self.fail(MessageTypes.REQUIRED, at, name)
        return violations


class RequiredKeyword(AbstractKeyword):
    fragment_schema = {"type": "array", "items": {"type": "string"}}

    def __init__(self):
        super().__init__("required")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        return RequiredValidator(schema_path, context.formatter, tuple(c.as_text() for c in schema_node))


class _PassValidator(AbstractValidator):
    def validate(self, node, root, at):
        return set()
