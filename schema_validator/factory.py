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

"""Schema factory: meta-schema selection and schema compilation entry point."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from .compiler import compile_schema
from .config import ValidatorConfig, default_config
from .dialects import SpecVersion, bundled_meta_schemas, get_meta_schema
from .exceptions import SchemaCompileError
from .keywords.base import Keyword
from .meta_schema import MetaSchema, MetaSchemaRegistry, normalize_uri
from .models.messages import MessageFormatter, PositionalMessageFormatter
from .node import JsonNode
from .parsing.node_parser import NodeParser, node_parser
from .schema import CompiledSchema

logger = logging.getLogger(__name__)

MetaSchemaSelector = Union[str, SpecVersion, MetaSchema]


class SchemaFactory:
    """Creates compiled schemas.

    A factory knows a set of meta-schemas by URI plus a default one, and
    optionally schema documents that ``$ref`` may point into. Factories are
    safe to share once built; compilations do not share state.
    """

    def __init__(
        self,
        meta_schemas: Optional[MetaSchemaRegistry] = None,
        default_meta_schema_uri: str = SpecVersion.V4.uri,
        documents: Optional[Dict[str, JsonNode]] = None,
        config: Optional[ValidatorConfig] = None,
        formatter: Optional[MessageFormatter] = None,
        parser: Optional[NodeParser] = None,
    ):
        self._meta_schemas = meta_schemas or MetaSchemaRegistry(bundled_meta_schemas().values())
        self._default_meta_schema_uri = normalize_uri(default_meta_schema_uri)
        self._documents: Dict[str, JsonNode] = dict(documents or {})
        self.config = config or default_config
        self.formatter = formatter or PositionalMessageFormatter()
        self.parser = parser or node_parser
        # Fail early on a default that is not registered
        self._meta_schemas.get_meta_schema(self._default_meta_schema_uri)

    @classmethod
    def get_instance(cls, version: SpecVersion = SpecVersion.V4) -> "SchemaFactory":
        """Factory with all bundled dialects and ``version`` as the default."""
        return cls(default_meta_schema_uri=SpecVersion(version).uri)

    @classmethod
    def builder(cls, base: Optional["SchemaFactory"] = None) -> "SchemaFactoryBuilder":
        return SchemaFactoryBuilder(base)

    # ---- meta-schema registration -------------------------------------------

    @property
    def default_meta_schema(self) -> MetaSchema:
        return self._meta_schemas.get_meta_schema(self._default_meta_schema_uri)

    @property
    def meta_schemas(self) -> MetaSchemaRegistry:
        return self._meta_schemas

    @property
    def documents(self) -> Dict[str, JsonNode]:
        return dict(self._documents)

    def register_meta_schema(self, uri: str, meta_schema: MetaSchema) -> None:
        self._meta_schemas.register_meta_schema(uri, meta_schema)

    def get_meta_schema(self, uri: str) -> MetaSchema:
        return self._meta_schemas.get_meta_schema(uri)

    def extend_meta_schema(
        self,
        base_uri: str,
        additional_keywords: Iterable[Keyword],
        uri: Optional[str] = None,
    ) -> MetaSchema:
        return self._meta_schemas.extend_meta_schema(base_uri, additional_keywords, uri=uri)

    # ---- compilation ------------------------------------------------------------

    def _to_node(self, source: Any) -> JsonNode:
        if isinstance(source, JsonNode):
            return source
        if isinstance(source, str):
            return self.parser.parse_string(source)
        return JsonNode(source)

    def _select_meta_schema(self, schema_node: JsonNode, selector: Optional[MetaSchemaSelector]) -> MetaSchema:
        if isinstance(selector, MetaSchema):
            return selector
        if isinstance(selector, SpecVersion):
            return get_meta_schema(selector)
        if selector is not None:
            return self._meta_schemas.get_meta_schema(selector)

        declared = schema_node.get("$schema") if schema_node.is_object() else None
        if declared is None:
            return self.default_meta_schema
        if not declared.is_string():
            raise SchemaCompileError("Keyword $schema must be a string", schema_path="#/$schema")
        return self._meta_schemas.get_meta_schema(declared.as_text())

    def get_schema(
        self,
        source: Any,
        meta_schema: Optional[MetaSchemaSelector] = None,
        schema_uri: Optional[str] = None,
    ) -> CompiledSchema:
        """Compile a schema.

        Args:
            source: Schema as a JsonNode, JSON/YAML text, or plain Python data
            meta_schema: Explicit dialect (URI, SpecVersion or MetaSchema);
                defaults to ``$schema`` in the schema, then the factory default
            schema_uri: URI identifying the schema document for ``$ref``

        Returns:
            The compiled schema

        Raises:
            SchemaCompileError: If the schema cannot be compiled
            SchemaParseError: If schema text cannot be parsed
        """
        schema_node = self._to_node(source)
        selected = self._select_meta_schema(schema_node, meta_schema)

        schema_id = schema_uri
        if schema_id is None and schema_node.is_object():
            declared_id = schema_node.get(selected.id_keyword)
            if declared_id is not None and declared_id.is_string():
                schema_id = declared_id.as_text()

        logger.debug(f"Compiling schema {schema_id or '<anonymous>'} with meta-schema {selected.uri}")
        root_validator = compile_schema(
            schema_node,
            selected,
            config=self.config,
            formatter=self.formatter,
            document_uri=schema_id or "",
            documents=self._documents,
        )
        return CompiledSchema(root_validator, selected, schema_id=schema_id, config=self.config)

    def get_schema_from_file(
        self,
        file_path: Union[str, Path],
        meta_schema: Optional[MetaSchemaSelector] = None,
    ) -> CompiledSchema:
        """Parse and compile a JSON or YAML schema file."""
        return self.get_schema(self.parser.parse_file(file_path), meta_schema=meta_schema)


class SchemaFactoryBuilder:
    """Builder creating a factory, optionally starting from an existing one."""

    def __init__(self, base: Optional[SchemaFactory] = None):
        if base is not None:
            self._meta_schemas = MetaSchemaRegistry()
            for uri, meta_schema in base.meta_schemas.items():
                self._meta_schemas.register_meta_schema(uri, meta_schema)
            self._default_uri = base.default_meta_schema.uri
            self._documents = base.documents
            self._config = base.config
            self._formatter = base.formatter
            self._parser = base.parser
        else:
            self._meta_schemas = MetaSchemaRegistry(bundled_meta_schemas().values())
            self._default_uri = SpecVersion.V4.uri
            self._documents = {}
            self._config = None
            self._formatter = None
            self._parser = None

    def add_meta_schema(self, meta_schema: MetaSchema) -> "SchemaFactoryBuilder":
        self._meta_schemas.register_meta_schema(meta_schema.uri, meta_schema)
        return self

    def add_meta_schemas(self, meta_schemas: Iterable[MetaSchema]) -> "SchemaFactoryBuilder":
        for meta_schema in meta_schemas:
            self.add_meta_schema(meta_schema)
        return self

    def default_meta_schema_uri(self, uri: str) -> "SchemaFactoryBuilder":
        self._default_uri = uri
        return self

    def add_schema_document(self, uri: str, document: Any) -> "SchemaFactoryBuilder":
        """Make an already available schema document reachable from ``$ref``."""
        node = document if isinstance(document, JsonNode) else JsonNode(document)
        self._documents[normalize_uri(uri)] = node
        return self

    def config(self, config: ValidatorConfig) -> "SchemaFactoryBuilder":
        self._config = config
        return self

    def message_formatter(self, formatter: MessageFormatter) -> "SchemaFactoryBuilder":
        self._formatter = formatter
        return self

    def parser(self, parser: NodeParser) -> "SchemaFactoryBuilder":
        self._parser = parser
        return self

    def build(self) -> SchemaFactory:
        return SchemaFactory(
            meta_schemas=self._meta_schemas,
            default_meta_schema_uri=self._default_uri,
            documents=self._documents,
            config=self._config,
            formatter=self._formatter,
            parser=self._parser,
        )
