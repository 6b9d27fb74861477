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

"""Standard keywords that apply nested schemas.

``properties``, ``items`` and the like apply their sub-schemas to child
values. ``allOf``, ``anyOf``, ``oneOf``, ``not`` and ``if`` apply theirs to
the same value and compile them with ``in_place=True``.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Pattern, Set, Tuple

from ..exceptions import SchemaCompileError
from ..models.messages import MessageTypes
from ..models.violation import Violation
from ..node import JsonNode
from .base import AbstractKeyword, AbstractValidator, Validator

_SCHEMA = {"type": ["object", "boolean"]}
_SCHEMA_MAP = {"type": "object", "additionalProperties": _SCHEMA}
_SCHEMA_LIST = {"type": "array", "items": _SCHEMA, "minItems": 1}


def _compile_regex(pattern: str, schema_path: str) -> Pattern:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise SchemaCompileError(f"Invalid regular expression '{pattern}': {exc}", schema_path=schema_path)


def _compile_list(schema_node: JsonNode, context) -> Tuple[Validator, ...]:
    return tuple(
        context.compile_subschema(child, i, in_place=True) for i, child in enumerate(schema_node)
    )


class _ApplicatorValidator(AbstractValidator):
    def __init__(self, keyword, schema_path, context):
        super().__init__(keyword, schema_path, context.formatter)
        self.fail_fast = context.config.fail_fast


class PropertiesValidator(_ApplicatorValidator):
    def __init__(self, schema_path, context, properties: Dict[str, Validator]):
        super().__init__("properties", schema_path, context)
        self.properties = properties

    def validate(self, node, root, at):
        violations: Set[Violation] = set()
        if not node.is_object():
            return violations
        for name, validator in self.properties.items():
            child = node.get(name)
            if child is None:
                continue
            violations |= validator.validate(child, root, at.child(name))
            if violations and self.fail_fast:
                break
        return violations


class PropertiesKeyword(AbstractKeyword):
    fragment_schema = _SCHEMA_MAP

    def __init__(self):
        super().__init__("properties")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        properties = {
            name: context.compile_subschema(child, name)
            for name, child in sorted(schema_node.items())
        }
        return PropertiesValidator(schema_path, context, properties)


class PatternPropertiesValidator(_ApplicatorValidator):
    def __init__(self, schema_path, context, patterns: List[Tuple[Pattern, Validator]]):
        super().__init__("patternProperties", schema_path, context)
        self.patterns = patterns

    def validate(self, node, root, at):
        violations: Set[Violation] = set()
        if not node.is_object():
            return violations
        for name, child in node.items():
            for regex, validator in self.patterns:
                if regex.search(name):
                    violations |= validator.validate(child, root, at.child(name))
            if violations and self.fail_fast:
                break
        return violations


class PatternPropertiesKeyword(AbstractKeyword):
    fragment_schema = _SCHEMA_MAP

    def __init__(self):
        super().__init__("patternProperties")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        patterns = [
            (_compile_regex(pattern, schema_path), context.compile_subschema(child, pattern))
            for pattern, child in sorted(schema_node.items())
        ]
        return PatternPropertiesValidator(schema_path, context, patterns)


class AdditionalPropertiesValidator(_ApplicatorValidator):
    def __init__(self, schema_path, context, declared: Set[str], patterns: List[Pattern],
                 allowed: bool, schema: Optional[Validator]):
        super().__init__("additionalProperties", schema_path, context)
        self.declared = declared
        self.patterns = patterns
        self.allowed = allowed
        self.schema = schema

    def validate(self, node, root, at):
        violations: Set[Violation] = set()
        if not node.is_object():
            return violations
        for name, child in node.items():
            if name in self.declared or any(r.search(name) for r in self.patterns):
                continue
            if not self.allowed:
                violations |= self.fail(MessageTypes.ADDITIONAL_PROPERTIES, at, name)
            elif self.schema is not None:
                violations |= self.schema.validate(child, root, at.child(name))
            if violations and self.fail_fast:
                break
        return violations


class AdditionalPropertiesKeyword(AbstractKeyword):
    """Reads sibling ``properties`` and ``patternProperties`` to know what is declared."""

    fragment_schema = _SCHEMA

    def __init__(self):
        super().__init__("additionalProperties")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        properties = parent_schema_node.get("properties")
        declared = set(properties.keys()) if properties is not None else set()
        pattern_properties = parent_schema_node.get("patternProperties")
        patterns = [
            _compile_regex(pattern, schema_path)
            for pattern in (pattern_properties.keys() if pattern_properties is not None else [])
        ]
        if schema_node.is_boolean():
            return AdditionalPropertiesValidator(
                schema_path, context, declared, patterns, schema_node.as_bool(), None
            )
        schema = context.compile_subschema(schema_node)
        return AdditionalPropertiesValidator(schema_path, context, declared, patterns, True, schema)


class ItemsValidator(_ApplicatorValidator):
    def __init__(self, schema_path, context, schema: Optional[Validator],
                 tuple_schemas: Tuple[Validator, ...], additional_allowed: bool,
                 additional_schema: Optional[Validator]):
        super().__init__("items", schema_path, context)
        self.schema = schema
        self.tuple_schemas = tuple_schemas
        self.additional_allowed = additional_allowed
        self.additional_schema = additional_schema

    def validate(self, node, root, at):
        violations: Set[Violation] = set()
        if not node.is_array():
            return violations
        for index, item in enumerate(node):
            item_path = at.child(index)
            if self.schema is not None:
                violations |= self.schema.validate(item, root, item_path)
            elif index < len(self.tuple_schemas):
                violations |= self.tuple_schemas[index].validate(item, root, item_path)
            elif not self.additional_allowed:
                violations |= self.fail(MessageTypes.ADDITIONAL_ITEMS, at, index)
            elif self.additional_schema is not None:
                violations |= self.additional_schema.validate(item, root, item_path)
            if violations and self.fail_fast:
                break
        return violations


class ItemsKeyword(AbstractKeyword):
    """``items`` in schema form or tuple form; tuple form reads sibling ``additionalItems``."""

    fragment_schema = {"anyOf": [_SCHEMA, {"type": "array", "items": _SCHEMA}]}

    def __init__(self):
        super().__init__("items")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        if not schema_node.is_array():
            return ItemsValidator(schema_path, context, context.compile_subschema(schema_node), (), True, None)

        tuple_schemas = tuple(
            context.compile_subschema(child, index) for index, child in enumerate(schema_node)
        )
        additional = parent_schema_node.get("additionalItems")
        if additional is None:
            return ItemsValidator(schema_path, context, None, tuple_schemas, True, None)
        if additional.is_boolean():
            return ItemsValidator(schema_path, context, None, tuple_schemas, additional.as_bool(), None)
        if not additional.is_object():
            raise SchemaCompileError(
                "Keyword additionalItems must be a schema", schema_path=schema_path
            )
        additional_schema = context.compile_sibling_subschema(additional, "additionalItems")
        return ItemsValidator(schema_path, context, None, tuple_schemas, True, additional_schema)


class ContainsValidator(_ApplicatorValidator):
    def __init__(self, schema_path, context, schema: Validator, rendered: JsonNode):
        super().__init__("contains", schema_path, context)
        self.schema = schema
        self.rendered = rendered

    def validate(self, node, root, at):
        if not node.is_array():
            return set()
        for index, item in enumerate(node):
            if not self.schema.validate(item, root, at.child(index)):
                return set()
        return self.fail(MessageTypes.CONTAINS, at, self.rendered)


class ContainsKeyword(AbstractKeyword):
    fragment_schema = _SCHEMA

    def __init__(self):
        super().__init__("contains")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        return ContainsValidator(schema_path, context, context.compile_subschema(schema_node), schema_node)


class PropertyNamesValidator(_ApplicatorValidator):
    def __init__(self, schema_path, context, schema: Validator):
        super().__init__("propertyNames", schema_path, context)
        self.schema = schema

    def validate(self, node, root, at):
        violations: Set[Violation] = set()
        if not node.is_object():
            return violations
        for name in node.keys():
            violations |= self.schema.validate(JsonNode(name), root, at.child(name))
            if violations and self.fail_fast:
                break
        return violations


class PropertyNamesKeyword(AbstractKeyword):
    fragment_schema = _SCHEMA

    def __init__(self):
        super().__init__("propertyNames")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        return PropertyNamesValidator(schema_path, context, context.compile_subschema(schema_node))


class AllOfValidator(_ApplicatorValidator):
    def __init__(self, schema_path, context, schemas: Tuple[Validator, ...]):
        super().__init__("allOf", schema_path, context)
        self.schemas = schemas

    def validate(self, node, root, at):
        violations: Set[Violation] = set()
        for schema in self.schemas:
            violations |= schema.validate(node, root, at)
            if violations and self.fail_fast:
                break
        return violations


class AllOfKeyword(AbstractKeyword):
    fragment_schema = _SCHEMA_LIST

    def __init__(self):
        super().__init__("allOf")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        return AllOfValidator(schema_path, context, _compile_list(schema_node, context))


class AnyOfValidator(_ApplicatorValidator):
    def __init__(self, schema_path, context, schemas: Tuple[Validator, ...], rendered: JsonNode):
        super().__init__("anyOf", schema_path, context)
        self.schemas = schemas
        self.rendered = rendered

    def validate(self, node, root, at):
        for schema in self.schemas:
            if not schema.validate(node, root, at):
                return set()
        return self.fail(MessageTypes.ANY_OF, at, self.rendered)


class AnyOfKeyword(AbstractKeyword):
    fragment_schema = _SCHEMA_LIST

    def __init__(self):
        super().__init__("anyOf")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        return AnyOfValidator(schema_path, context, _compile_list(schema_node, context), schema_node)


class OneOfValidator(_ApplicatorValidator):
    def __init__(self, schema_path, context, schemas: Tuple[Validator, ...]):
        super().__init__("oneOf", schema_path, context)
        self.schemas = schemas

    def validate(self, node, root, at):
        valid = sum(1 for schema in self.schemas if not schema.validate(node, root, at))
        if valid == 1:
            return set()
        return self.fail(MessageTypes.ONE_OF, at, valid)


class OneOfKeyword(AbstractKeyword):
    fragment_schema = _SCHEMA_LIST

    def __init__(self):
        super().__init__("oneOf")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        return OneOfValidator(schema_path, context, _compile_list(schema_node, context))


class NotValidator(_ApplicatorValidator):
    def __init__(self, schema_path, context, schema: Validator, rendered: JsonNode):
        super().__init__("not", schema_path, context)
        self.schema = schema
        self.rendered = rendered

    def validate(self, node, root, at):
        if self.schema.validate(node, root, at):
            return set()
        return self.fail(MessageTypes.NOT, at, self.rendered)


class NotKeyword(AbstractKeyword):
    fragment_schema = _SCHEMA

    def __init__(self):
        super().__init__("not")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        schema = context.compile_subschema(schema_node, in_place=True)
        return NotValidator(schema_path, context, schema, schema_node)


class IfValidator(_ApplicatorValidator):
    def __init__(self, schema_path, context, condition: Validator,
                 then_schema: Optional[Validator], else_schema: Optional[Validator]):
        super().__init__("if", schema_path, context)
        self.condition = condition
        self.then_schema = then_schema
        self.else_schema = else_schema

    def validate(self, node, root, at):
        branch = self.else_schema if self.condition.validate(node, root, at) else self.then_schema
        if branch is None:
            return set()
        return branch.validate(node, root, at)


class IfKeyword(AbstractKeyword):
    """``if`` with sibling ``then`` / ``else``; both branches are optional."""

    fragment_schema = _SCHEMA

    def __init__(self):
        super().__init__("if")

    def _branch(self, name, parent_schema_node, schema_path, context) -> Optional[Validator]:
        branch = parent_schema_node.get(name)
        if branch is None:
            return None
        if not (branch.is_object() or branch.is_boolean()):
            raise SchemaCompileError(f"Keyword {name} must be a schema", schema_path=schema_path)
        return context.compile_sibling_subschema(branch, name, in_place=True)

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        condition = context.compile_subschema(schema_node, in_place=True)
        then_schema = self._branch("then", parent_schema_node, schema_path, context)
        else_schema = self._branch("else", parent_schema_node, schema_path, context)
        return IfValidator(schema_path, context, condition, then_schema, else_schema)
