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

"""Schema compilation: schema nodes -> validator tree."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .config import ValidatorConfig
from .exceptions import SchemaCompileError, UnknownKeywordError, UnresolvedReferenceError
from .keywords.base import Validator
from .meta_schema import MetaSchema, UnknownKeywordPolicy, normalize_uri
from .models.messages import MessageFormatter, PositionalMessageFormatter
from .models.path import PathSegment, join_pointer, jp_unescape
from .node import JsonNode
from .schema import FalseSchemaValidator, SchemaNodeValidator

logger = logging.getLogger(__name__)


class ValidationContext:
    """Per-compilation state passed to every keyword factory.

    Holds the active meta-schema, the configuration, the schema path stack
    and the ``$ref`` memo. A context belongs to a single compilation and is
    not shared between threads.
    """

    def __init__(
        self,
        meta_schema: MetaSchema,
        root_schema_node: JsonNode,
        config: Optional[ValidatorConfig] = None,
        formatter: Optional[MessageFormatter] = None,
        document_uri: str = "",
        documents: Optional[Mapping[str, JsonNode]] = None,
        compiler: Optional["SchemaCompiler"] = None,
    ):
        self.meta_schema = meta_schema
        self.config = config or ValidatorConfig()
        self.formatter = formatter or PositionalMessageFormatter()
        self.compiler = compiler or SchemaCompiler()
        self._root_schema_node = root_schema_node
        self._document_uri = normalize_uri(document_uri) if document_uri else ""
        self._documents: Dict[str, JsonNode] = {
            normalize_uri(uri): node for uri, node in (documents or {}).items()
        }
        self._path: List[str] = []
        self._ref_memo: Dict[Tuple[str, str], SchemaNodeValidator] = {}
        # Instance depth at which each reference still being compiled was entered
        self._refs_in_progress: Dict[Tuple[str, str], int] = {}
        self._instance_depth = 0

    @property
    def schema_path(self) -> str:
        return join_pointer("#", self._path)

    @property
    def root_schema_node(self) -> JsonNode:
        return self._root_schema_node

    @property
    def document_uri(self) -> str:
        return self._document_uri

    @contextmanager
    def descend(self, *segments: PathSegment) -> Iterator[str]:
        """Push path segments for the duration of the block."""
        self._path.extend(str(s) for s in segments)
        try:
            yield self.schema_path
        finally:
            del self._path[len(self._path) - len(segments):]

    def compile_subschema(
        self, schema_node: JsonNode, *segments: PathSegment, in_place: bool = False
    ) -> SchemaNodeValidator:
        """Compile a nested schema found at ``segments`` below the current location.

        Args:
            schema_node: The nested schema
            segments: Schema path segments leading from the keyword to the schema
            in_place: True when the schema is applied to the same instance value
                (``allOf``, ``not``...) rather than to a child value
        """
        depth = 0 if in_place else 1
        self._instance_depth += depth
        try:
            with self.descend(*segments):
                return self.compiler.compile(schema_node, self)
        finally:
            self._instance_depth -= depth

    def compile_sibling_subschema(
        self, schema_node: JsonNode, sibling: str, *segments: PathSegment, in_place: bool = False
    ) -> SchemaNodeValidator:
        """Compile a schema held by a sibling of the keyword being compiled."""
        current = self._path.pop()
        try:
            return self.compile_subschema(schema_node, sibling, *segments, in_place=in_place)
        finally:
            self._path.append(current)

    def resolve_reference(self, ref: str) -> SchemaNodeValidator:
        """Compile (once) the schema a ``$ref`` points at.

        Only the current document and documents registered on the factory
        are searched; nothing is fetched.

        Raises:
            UnresolvedReferenceError: If the document or pointer does not exist
            SchemaCompileError: If the reference loops back to a schema still being
                compiled without applying anything to a child value
        """
        uri, _, fragment = ref.partition("#")
        document_uri = normalize_uri(uri) if uri.strip() else self._document_uri
        if document_uri == self._document_uri:
            document = self._root_schema_node
        elif document_uri in self._documents:
            document = self._documents[document_uri]
        else:
            raise UnresolvedReferenceError(
                f"Cannot resolve reference '{ref}': document '{document_uri}' is not registered",
                schema_path=self.schema_path,
            )

        if fragment and not fragment.startswith("/"):
            raise UnresolvedReferenceError(
                f"Cannot resolve reference '{ref}': only JSON pointer fragments are supported",
                schema_path=self.schema_path,
            )

        tokens = [jp_unescape(t) for t in fragment.split("/")[1:]] if fragment else []
        key = (document_uri, join_pointer("#", tokens))
        if key in self._ref_memo:
            if self._refs_in_progress.get(key) == self._instance_depth:
                raise SchemaCompileError(
                    f"Reference '{ref}' loops back to {key[1]} without descending into the instance",
                    schema_path=self.schema_path,
                )
            return self._ref_memo[key]

        target = document
        for token in tokens:
            child = target.get(int(token)) if target.is_array() and token.isdigit() else target.get(token)
            if child is None:
                raise UnresolvedReferenceError(
                    f"Cannot resolve reference '{ref}': '{token}' not found",
                    schema_path=self.schema_path,
                )
            target = child

        logger.debug(f"Resolving reference '{ref}' -> {document_uri or '<root>'}{key[1]}")
        placeholder = SchemaNodeValidator(key[1], target, fail_fast=self.config.fail_fast)
        self._ref_memo[key] = placeholder
        self._refs_in_progress[key] = self._instance_depth

        saved = (self._root_schema_node, self._document_uri, self._path)
        self._root_schema_node, self._document_uri, self._path = document, document_uri, list(tokens)
        try:
            self.compiler.compile(target, self, target=placeholder)
        finally:
            self._root_schema_node, self._document_uri, self._path = saved
            del self._refs_in_progress[key]
        return placeholder


class SchemaCompiler:
    """Walks schema nodes and builds the validator tree."""

    def compile(
        self,
        schema_node: JsonNode,
        context: ValidationContext,
        target: Optional[SchemaNodeValidator] = None,
    ) -> SchemaNodeValidator:
        """Compile the schema node at the context's current path.

        Raises:
            SchemaCompileError: If any keyword fails to compile
        """
        schema_path = context.schema_path
        if target is None:
            target = SchemaNodeValidator(schema_path, schema_node, fail_fast=context.config.fail_fast)

        validators: List[Validator] = []
        if schema_node.is_boolean():
            if not schema_node.as_bool():
                validators.append(FalseSchemaValidator("false", schema_path, context.formatter))
        elif schema_node.is_object():
            # Lexical order keeps violation ordering reproducible.
            for name in sorted(schema_node.keys()):
                validator = self._compile_keyword(name, schema_node.get(name), schema_node, context)
                if validator is not None:
                    validators.append(validator)
        else:
            raise SchemaCompileError(
                f"Schema must be an object or a boolean, got {schema_node.kind.value}",
                schema_path=schema_path,
            )

        target.seal(validators)
        return target

    def _compile_keyword(
        self,
        name: str,
        fragment: JsonNode,
        schema_node: JsonNode,
        context: ValidationContext,
    ) -> Optional[Validator]:
        meta_schema = context.meta_schema
        with context.descend(name) as keyword_path:
            keyword = meta_schema.resolve(name)
            if keyword is None:
                if not meta_schema.is_non_validation_keyword(name):
                    self._handle_unknown_keyword(name, keyword_path, context)
                return None

            keyword.check_fragment(keyword_path, fragment)
            try:
                return keyword.new_validator(keyword_path, fragment, schema_node, context)
            except SchemaCompileError:
                raise
            except (ValueError, TypeError, KeyError, IndexError) as exc:
                raise SchemaCompileError(
                    f"Failed to compile keyword '{name}': {exc}", schema_path=keyword_path
                ) from exc

    @staticmethod
    def _handle_unknown_keyword(name: str, keyword_path: str, context: ValidationContext) -> None:
        policy = context.meta_schema.unknown_keyword_policy
        if context.config.strict_keywords:
            policy = UnknownKeywordPolicy.FAIL

        if policy == UnknownKeywordPolicy.FAIL:
            raise UnknownKeywordError(
                f"Unknown keyword '{name}' for meta-schema {context.meta_schema.uri}",
                schema_path=keyword_path,
            )
        if policy == UnknownKeywordPolicy.WARN:
            logger.warning(f"Unknown keyword '{name}' ignored (schema_path={keyword_path})")


def compile_schema(
    schema_node: JsonNode,
    meta_schema: MetaSchema,
    *,
    config: Optional[ValidatorConfig] = None,
    formatter: Optional[MessageFormatter] = None,
    document_uri: str = "",
    documents: Optional[Mapping[str, JsonNode]] = None,
) -> SchemaNodeValidator:
    """Compile a whole schema document with a fresh context."""
    document_uri = normalize_uri(document_uri) if document_uri and document_uri.strip("# ") else ""
    compiler = SchemaCompiler()
    context = ValidationContext(
        meta_schema,
        schema_node,
        config=config,
        formatter=formatter,
        document_uri=document_uri,
        documents=documents,
        compiler=compiler,
    )
    # The root goes through the reference memo so that "$ref": "#" reuses it.
    return context.resolve_reference(f"{document_uri}#")
