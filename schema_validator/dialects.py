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

"""Bundled dialects: JSON Schema draft 4, 6, 7 and 2019-09.

Each later draft is layered on the previous one and only lists what it
adds or changes. The meta-schemas are built once and shared; they are
never mutated.
"""

from enum import Enum
from functools import lru_cache
from typing import Dict, List

from .keywords.applicators import (
    AdditionalPropertiesKeyword,
    AllOfKeyword,
    AnyOfKeyword,
    ContainsKeyword,
    IfKeyword,
    ItemsKeyword,
    NotKeyword,
    OneOfKeyword,
    PatternPropertiesKeyword,
    PropertiesKeyword,
    PropertyNamesKeyword,
)
from .keywords.base import Keyword
from .keywords.constraints import (
    ConstKeyword,
    EnumKeyword,
    ExclusiveBoundKeyword,
    MinimumKeyword,
    MultipleOfKeyword,
    PatternKeyword,
    RequiredKeyword,
    TypeKeyword,
    UniqueItemsKeyword,
    max_items_keyword,
    max_length_keyword,
    max_properties_keyword,
    min_items_keyword,
    min_length_keyword,
    min_properties_keyword,
)
from .keywords.reference import RefKeyword
from .meta_schema import MetaSchema, UnknownKeywordPolicy


class SpecVersion(str, Enum):
    V4 = "http://json-schema.org/draft-04/schema"
    V6 = "http://json-schema.org/draft-06/schema"
    V7 = "http://json-schema.org/draft-07/schema"
    V201909 = "https://json-schema.org/draft/2019-09/schema"

    @property
    def uri(self) -> str:
        return self.value


# Annotation and format-only keywords; they never produce validators.
_COMMON_ANNOTATIONS = ("$schema", "title", "description", "default", "definitions", "format")


def _draft4_keywords() -> List[Keyword]:
    return [
        TypeKeyword(),
        EnumKeyword(),
        min_length_keyword(),
        max_length_keyword(),
        PatternKeyword(),
        MinimumKeyword("minimum", boolean_exclusive=True),
        MinimumKeyword("maximum", boolean_exclusive=True),
        MultipleOfKeyword(),
        min_items_keyword(),
        max_items_keyword(),
        UniqueItemsKeyword(),
        RequiredKeyword(),
        min_properties_keyword(),
        max_properties_keyword(),
        PropertiesKeyword(),
        PatternPropertiesKeyword(),
        AdditionalPropertiesKeyword(),
        ItemsKeyword(),
        AllOfKeyword(),
        AnyOfKeyword(),
        OneOfKeyword(),
        NotKeyword(),
        RefKeyword(),
    ]


@lru_cache(maxsize=None)
def get_v4() -> MetaSchema:
    return (
        MetaSchema.builder(SpecVersion.V4.uri)
        .add_keywords(_draft4_keywords())
        # Read by minimum/maximum and items as siblings
        .add_non_validation_keywords(_COMMON_ANNOTATIONS + ("id", "exclusiveMinimum", "exclusiveMaximum",
                                                            "additionalItems"))
        .unknown_keyword_policy(UnknownKeywordPolicy.WARN)
        .integral_floats_are_integers(False)
        .id_keyword("id")
        .build()
    )


@lru_cache(maxsize=None)
def get_v6() -> MetaSchema:
    return (
        MetaSchema.builder(SpecVersion.V6.uri, get_v4())
        .add_keywords([
            MinimumKeyword("minimum"),
            MinimumKeyword("maximum"),
            ExclusiveBoundKeyword("exclusiveMinimum"),
            ExclusiveBoundKeyword("exclusiveMaximum"),
            ConstKeyword(),
            ContainsKeyword(),
            PropertyNamesKeyword(),
        ])
        .add_non_validation_keywords(("$id", "examples"))
        .integral_floats_are_integers(True)
        .id_keyword("$id")
        .build()
    )


@lru_cache(maxsize=None)
def get_v7() -> MetaSchema:
    return (
        MetaSchema.builder(SpecVersion.V7.uri, get_v6())
        .add_keyword(IfKeyword())
        # then/else are read by "if"
        .add_non_validation_keywords(("$comment", "then", "else", "readOnly", "writeOnly",
                                      "contentMediaType", "contentEncoding"))
        .build()
    )


@lru_cache(maxsize=None)
def get_v201909() -> MetaSchema:
    return (
        MetaSchema.builder(SpecVersion.V201909.uri, get_v7())
        .add_non_validation_keywords(("$defs", "$anchor", "deprecated"))
        .build()
    )


_GETTERS = {
    SpecVersion.V4: get_v4,
    SpecVersion.V6: get_v6,
    SpecVersion.V7: get_v7,
    SpecVersion.V201909: get_v201909,
}


def get_meta_schema(version: SpecVersion) -> MetaSchema:
    """Bundled meta-schema for ``version``."""
    return _GETTERS[SpecVersion(version)]()


def bundled_meta_schemas() -> Dict[SpecVersion, MetaSchema]:
    return {version: getter() for version, getter in _GETTERS.items()}
