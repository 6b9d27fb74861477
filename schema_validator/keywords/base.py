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

"""Keyword and validator protocol.

A keyword is a named factory. At compile time the engine hands it the
keyword's own schema fragment, the full schema object the keyword sits in
(so it can read sibling keywords) and the compilation context. The factory
returns a :class:`Validator` holding everything it needs as plain values;
validators never look at the schema again while validating.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Set

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from ..exceptions import SchemaCompileError
from ..models.messages import ErrorMessageType, MessageFormatter, PositionalMessageFormatter
from ..models.path import InstancePath, join_pointer
from ..models.violation import Violation
from ..node import JsonNode

if TYPE_CHECKING:
    from ..compiler import ValidationContext

_DEFAULT_FORMATTER = PositionalMessageFormatter()


def render_argument(value: Any) -> str:
    """Render a message argument as text."""
    if isinstance(value, JsonNode):
        return value.to_json() if value.is_container() else value.as_text()
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    return str(value)


class Validator(ABC):
    """Executable check bound to one keyword at one schema location."""

    keyword: str = ""
    schema_path: str = "#"

    @abstractmethod
    def validate(self, node: JsonNode, root: JsonNode, at: InstancePath) -> Set[Violation]:
        """Validate ``node`` located at ``at`` inside the instance ``root``.

        Returns:
            Violations found; empty when the keyword has nothing to report.
        """
        pass


class AbstractValidator(Validator):
    """Base class for keyword validators with message helpers."""

    def __init__(
        self,
        keyword: str,
        schema_path: str = "#",
        formatter: Optional[MessageFormatter] = None,
    ):
        self.keyword = keyword
        self.schema_path = schema_path
        self._formatter = formatter or _DEFAULT_FORMATTER

    def violation(self, message_type: ErrorMessageType, at: InstancePath, *arguments: Any) -> Violation:
        rendered = (str(at),) + tuple(render_argument(a) for a in arguments)
        return Violation(
            path=str(at),
            keyword=self.keyword,
            message=self._formatter.format(message_type.template, rendered),
            message_type=message_type.code,
            arguments=rendered,
            schema_path=self.schema_path,
        )

    def fail(self, message_type: ErrorMessageType, at: InstancePath, *arguments: Any) -> Set[Violation]:
        """Single-violation result; ``{0}`` in the template is the instance path."""
        return {self.violation(message_type, at, *arguments)}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(keyword={self.keyword!r}, schema_path={self.schema_path!r})"


class Keyword(ABC):
    """Named factory compiling a schema fragment into a validator."""

    def __init__(self, name: str):
        if not name or not isinstance(name, str):
            raise ValueError(f"Keyword name must be a non-empty string, got: {name!r}")
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def check_fragment(self, schema_path: str, schema_node: JsonNode) -> None:
        """Reject malformed fragments before the factory runs."""
        return None

    @abstractmethod
    def new_validator(
        self,
        schema_path: str,
        schema_node: JsonNode,
        parent_schema_node: JsonNode,
        context: "ValidationContext",
    ) -> Validator:
        """Compile this keyword's fragment into a validator.

        Args:
            schema_path: JSON pointer of the fragment (e.g. ``#/properties/a/enum``)
            schema_node: The keyword's own value
            parent_schema_node: The schema object holding the keyword and its siblings
            context: Compilation context (meta-schema, config, sub-schema compilation)

        Raises:
            SchemaCompileError: If the fragment or its siblings are malformed
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"


class AbstractKeyword(Keyword):
    """Keyword whose fragment shape is declared as a JSON Schema.

    Subclasses may set ``fragment_schema``; the fragment is checked with
    ``jsonschema`` before :meth:`new_validator` is called.
    """

    fragment_schema: Optional[Dict[str, Any]] = None

    def __init__(self, name: str):
        super().__init__(name)
        self._fragment_validator = (
            Draft7Validator(self.fragment_schema) if self.fragment_schema is not None else None
        )

    def check_fragment(self, schema_path: str, schema_node: JsonNode) -> None:
        if self._fragment_validator is None:
            return
        errors: List = list(self._fragment_validator.iter_errors(schema_node.to_python()))
        if not errors:
            return
        error = best_match(errors)
        raise SchemaCompileError(
            f"Invalid value for keyword '{self.name}': {error.message}",
            schema_path=join_pointer(schema_path, error.absolute_path),
        )


ValidatorFactory = Callable[[str, JsonNode, JsonNode, "ValidationContext"], Validator]


class FunctionKeyword(AbstractKeyword):
    """Keyword built from a plain factory function."""

    def __init__(
        self,
        name: str,
        factory: ValidatorFactory,
        fragment_schema: Optional[Dict[str, Any]] = None,
    ):
        self.fragment_schema = fragment_schema
        super().__init__(name)
        self._factory = factory

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        return self._factory(schema_path, schema_node, parent_schema_node, context)


def read_string_list(keyword: str, node: Optional[JsonNode], schema_path: str) -> List[str]:
    """Read an array fragment as a list of texts."""
    if node is None or not node.is_array():
        raise SchemaCompileError(f"Keyword {keyword} needs to receive an array", schema_path=schema_path)
    return [child.as_text() for child in node]
