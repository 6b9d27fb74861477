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

"""The ``enumNames`` keyword.

Generated UIs use ``enumNames`` to render labels for ``enum`` values. The
keyword is used together with ``enum`` and must have the same length.

It always reports a violation carrying the label of the matched value, so
it is an annotation rather than a constraint: callers decide whether such
messages are warnings or errors.
"""

from typing import List

from ..exceptions import SchemaCompileError
from ..models.messages import CustomErrorMessageType
from .base import AbstractKeyword, AbstractValidator, read_string_list

ENUM_NAME = CustomErrorMessageType.of("tests.example.enumNames", "{0}: enumName is {1}")
UNKNOWN_ENUM_VALUE = CustomErrorMessageType.of("enumNames.unknownValue", "{0}: value {1} has no enumName")


class EnumNamesValidator(AbstractValidator):
    def __init__(self, keyword: str, schema_path: str, formatter,
                 enum_values: List[str], enum_names: List[str]):
        super().__init__(keyword, schema_path, formatter)
        if len(enum_names) != len(enum_values):
            raise SchemaCompileError("enum and enumNames need to be of same length", schema_path=schema_path)
        self.enum_values = tuple(enum_values)
        self.enum_names = tuple(enum_names)

    def validate(self, node, root, at):
        value = node.as_text()
        # Containers render as "" and must not match an empty enum string
        if node.is_container() or value not in self.enum_values:
            return self.fail(UNKNOWN_ENUM_VALUE, at, node)
        return self.fail(ENUM_NAME, at, self.enum_names[self.enum_values.index(value)])


class EnumNamesKeyword(AbstractKeyword):
    """Introduces the keyword ``enumNames``."""

    def __init__(self):
        super().__init__("enumNames")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        if not schema_node.is_array():
            raise SchemaCompileError("Keyword enumNames needs to receive an array", schema_path=schema_path)
        if not parent_schema_node.has("enum"):
            raise SchemaCompileError("Keyword enumNames needs to have a sibling enum keyword", schema_path=schema_path)

        return EnumNamesValidator(
            self.name,
            schema_path,
            context.formatter,
            read_string_list("enum", parent_schema_node.get("enum"), schema_path),
            read_string_list(self.name, schema_node, schema_path),
        )
