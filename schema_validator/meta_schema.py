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

"""Meta-schemas (dialects) and their layered composition.

A meta-schema is a value: a URI, a keyword registry and an optional parent.
Keyword lookups that miss locally continue in the parent chain, so a custom
dialect only lists what it adds or overrides and the base is never touched.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple, Union

from .config import default_config
from .exceptions import MetaSchemaNotFoundError
from .keywords.base import Keyword
from .keywords.registry import KeywordRegistry

logger = logging.getLogger(__name__)


class UnknownKeywordPolicy(str, Enum):
    IGNORE = "ignore"
    WARN = "warn"
    FAIL = "fail"


def normalize_uri(uri: str) -> str:
    """Normalize a dialect URI for lookups (``...example01#`` == ``...example01``)."""
    if not isinstance(uri, str) or not uri.strip():
        raise ValueError(f"Meta-schema URI must be a non-empty string, got: {uri!r}")
    return uri.strip().rstrip("#")


_NON_VALIDATION = object()


class MetaSchema:
    """Dialect: URI, keyword registry, compilation rules and optional parent."""

    def __init__(
        self,
        uri: str,
        registry: Optional[KeywordRegistry] = None,
        parent: Optional["MetaSchema"] = None,
        non_validation_keywords: Iterable[str] = (),
        unknown_keyword_policy: Optional[UnknownKeywordPolicy] = None,
        integral_floats_are_integers: Optional[bool] = None,
        id_keyword: Optional[str] = None,
    ):
        self._uri = normalize_uri(uri)
        self._registry = registry.copy() if registry is not None else KeywordRegistry()
        self._parent = parent
        self._non_validation: FrozenSet[str] = frozenset(non_validation_keywords)
        self._unknown_keyword_policy = (
            UnknownKeywordPolicy(unknown_keyword_policy) if unknown_keyword_policy is not None else None
        )
        self._integral_floats_are_integers = integral_floats_are_integers
        self._id_keyword = id_keyword

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def parent(self) -> Optional["MetaSchema"]:
        return self._parent

    def lineage(self) -> Iterator["MetaSchema"]:
        """This meta-schema followed by its ancestors."""
        current: Optional[MetaSchema] = self
        while current is not None:
            yield current
            current = current._parent

    def _lookup(self, name: str):
        for meta_schema in self.lineage():
            keyword = meta_schema._registry.get(name)
            if keyword is not None:
                return keyword
            if name in meta_schema._non_validation:
                return _NON_VALIDATION
        return None

    def resolve(self, name: str) -> Optional[Keyword]:
        """Keyword for ``name``, searching the parent chain; None if unknown."""
        found = self._lookup(name)
        return found if isinstance(found, Keyword) else None

    def is_non_validation_keyword(self, name: str) -> bool:
        return self._lookup(name) is _NON_VALIDATION

    def keyword_names(self) -> List[str]:
        names = set()
        for meta_schema in self.lineage():
            names.update(meta_schema._registry.names())
        return sorted(names)

    def _inherited(self, attribute: str, default):
        for meta_schema in self.lineage():
            value = getattr(meta_schema, attribute)
            if value is not None:
                return value
        return default

    @property
    def unknown_keyword_policy(self) -> UnknownKeywordPolicy:
        return self._inherited("_unknown_keyword_policy", UnknownKeywordPolicy.WARN)

    @property
    def integral_floats_are_integers(self) -> bool:
        return self._inherited("_integral_floats_are_integers", True)

    @property
    def id_keyword(self) -> str:
        return self._inherited("_id_keyword", "$id")

    @classmethod
    def builder(cls, uri: str, base: Optional["MetaSchema"] = None) -> "MetaSchemaBuilder":
        return MetaSchemaBuilder(uri, base)

    @classmethod
    def extend(
        cls,
        base: "MetaSchema",
        keywords: Iterable[Keyword],
        uri: Optional[str] = None,
    ) -> "MetaSchema":
        """New meta-schema layered on ``base``; ``base`` is left unchanged."""
        return cls.builder(uri or f"{base.uri}/extended", base).add_keywords(keywords).build()

    def __repr__(self) -> str:
        parent = self._parent.uri if self._parent is not None else None
        return f"MetaSchema(uri={self._uri!r}, parent={parent!r})"


class MetaSchemaBuilder:
    """Builder for layered meta-schemas."""

    def __init__(self, uri: str, base: Optional[MetaSchema] = None):
        self._uri = uri
        self._base = base
        self._keywords: List[Keyword] = []
        self._non_validation: List[str] = []
        self._unknown_keyword_policy: Optional[UnknownKeywordPolicy] = None
        self._integral_floats_are_integers: Optional[bool] = None
        self._id_keyword: Optional[str] = None
        self._allow_keyword_override: Optional[bool] = None

    def add_keyword(self, keyword: Keyword) -> "MetaSchemaBuilder":
        self._keywords.append(keyword)
        return self

    def add_keywords(self, keywords: Iterable[Keyword]) -> "MetaSchemaBuilder":
        self._keywords.extend(keywords)
        return self

    def add_non_validation_keywords(self, names: Iterable[str]) -> "MetaSchemaBuilder":
        self._non_validation.extend(names)
        return self

    def unknown_keyword_policy(self, policy: Union[UnknownKeywordPolicy, str]) -> "MetaSchemaBuilder":
        self._unknown_keyword_policy = UnknownKeywordPolicy(policy)
        return self

    def integral_floats_are_integers(self, value: bool) -> "MetaSchemaBuilder":
        self._integral_floats_are_integers = value
        return self

    def id_keyword(self, name: str) -> "MetaSchemaBuilder":
        self._id_keyword = name
        return self

    def allow_keyword_override(self, value: bool) -> "MetaSchemaBuilder":
        self._allow_keyword_override = value
        return self

    def build(self) -> MetaSchema:
        """Build the meta-schema.

        Raises:
            DuplicateKeywordError: If a keyword is added twice while overriding is disallowed
        """
        allow_override = self._allow_keyword_override
        if allow_override is None:
            allow_override = default_config.allow_keyword_override
        registry = KeywordRegistry(self._keywords, allow_override=allow_override)
        meta_schema = MetaSchema(
            self._uri,
            registry=registry,
            parent=self._base,
            non_validation_keywords=self._non_validation,
            unknown_keyword_policy=self._unknown_keyword_policy,
            integral_floats_are_integers=self._integral_floats_are_integers,
            id_keyword=self._id_keyword,
        )
        logger.debug(
            f"Built meta-schema {meta_schema.uri} with keywords {registry.names()}"
            + (f" on top of {self._base.uri}" if self._base is not None else "")
        )
        return meta_schema


class MetaSchemaRegistry:
    """Meta-schemas known to a schema factory, by normalized URI."""

    def __init__(self, meta_schemas: Iterable[MetaSchema] = ()):
        self._meta_schemas: Dict[str, MetaSchema] = {}
        self._lock = threading.Lock()
        for meta_schema in meta_schemas:
            self.register_meta_schema(meta_schema.uri, meta_schema)

    def register_meta_schema(self, uri: str, meta_schema: MetaSchema) -> None:
        with self._lock:
            self._meta_schemas[normalize_uri(uri)] = meta_schema

    def get_meta_schema(self, uri: str) -> MetaSchema:
        """Look up a meta-schema.

        Raises:
            MetaSchemaNotFoundError: If nothing is registered under ``uri``
        """
        key = normalize_uri(uri)
        with self._lock:
            meta_schema = self._meta_schemas.get(key)
        if meta_schema is None:
            raise MetaSchemaNotFoundError(f"Unknown meta-schema '{uri}'. Known: {self.uris()}")
        return meta_schema

    def extend_meta_schema(
        self,
        base_uri: str,
        additional_keywords: Iterable[Keyword],
        uri: Optional[str] = None,
    ) -> MetaSchema:
        """Build a meta-schema on top of a registered one and register it."""
        extended = MetaSchema.extend(self.get_meta_schema(base_uri), additional_keywords, uri=uri)
        self.register_meta_schema(extended.uri, extended)
        return extended

    def uris(self) -> List[str]:
        with self._lock:
            return sorted(self._meta_schemas)

    def items(self) -> List[Tuple[str, MetaSchema]]:
        with self._lock:
            return list(self._meta_schemas.items())

    def __contains__(self, uri: str) -> bool:
        with self._lock:
            return normalize_uri(uri) in self._meta_schemas
