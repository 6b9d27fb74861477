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

"""Compiled schema and the per-schema-object validator node."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence, Set, Tuple

from .config import ValidatorConfig
from .keywords.base import AbstractValidator, Validator
from .models.messages import MessageTypes
from .models.path import InstancePath
from .models.violation import Violation
from .node import JsonNode

if TYPE_CHECKING:
    from .meta_schema import MetaSchema

logger = logging.getLogger(__name__)


class SchemaNodeValidator(Validator):
    """All keyword validators of one schema object (or boolean schema).

    Keyword validators run in lexical keyword order and their results are
    unioned. With ``fail_fast`` the node stops after the first keyword
    that reports anything.
    """

    keyword = ""

    def __init__(self, schema_path: str, schema_node: JsonNode, fail_fast: bool = False):
        self.schema_path = schema_path
        self.schema_node = schema_node
        self.fail_fast = fail_fast
        self._validators: Tuple[Validator, ...] = ()

    def seal(self, validators: Sequence[Validator]) -> None:
        """Attach compiled keyword validators; called once by the compiler."""
        self._validators = tuple(validators)

    @property
    def validators(self) -> Tuple[Validator, ...]:
        return self._validators

    def validate(self, node: JsonNode, root: JsonNode, at: InstancePath) -> Set[Violation]:
        violations: Set[Violation] = set()
        for validator in self._validators:
            found = validator.validate(node, root, at)
            if found:
                violations |= found
                if self.fail_fast:
                    break
        return violations

    def __repr__(self) -> str:
        keywords = [v.keyword for v in self._validators]
        return f"SchemaNodeValidator(schema_path={self.schema_path!r}, keywords={keywords})"


class FalseSchemaValidator(AbstractValidator):
    """Boolean schema ``false``: every value is rejected."""

    def validate(self, node, root, at):
        return self.fail(MessageTypes.FALSE, at)


class CompiledSchema:
    """Immutable, reusable result of compiling one schema document."""

    def __init__(
        self,
        root_validator: SchemaNodeValidator,
        meta_schema: "MetaSchema",
        schema_id: Optional[str] = None,
        config: Optional[ValidatorConfig] = None,
    ):
        self._root_validator = root_validator
        self._meta_schema = meta_schema
        self._schema_id = schema_id
        self._config = config or ValidatorConfig()

    @property
    def root_validator(self) -> SchemaNodeValidator:
        return self._root_validator

    @property
    def meta_schema(self) -> "MetaSchema":
        return self._meta_schema

    @property
    def schema_id(self) -> Optional[str]:
        return self._schema_id

    @property
    def schema_node(self) -> JsonNode:
        return self._root_validator.schema_node

    @property
    def config(self) -> ValidatorConfig:
        return self._config

    def validate(self, instance: Any) -> Set[Violation]:
        """Validate an instance document.

        Args:
            instance: A :class:`JsonNode` or plain parsed data (dict, list, scalars)

        Returns:
            The set of violations; empty when nothing was reported
        """
        node = JsonNode.of(instance)
        violations = self._root_validator.validate(node, node, InstancePath.root())
        logger.debug(f"Validated instance against {self._schema_id or self._meta_schema.uri}: "
                     f"{len(violations)} violation(s)")
        return violations

    def __repr__(self) -> str:
        return f"CompiledSchema(schema_id={self._schema_id!r}, meta_schema={self._meta_schema.uri!r})"
