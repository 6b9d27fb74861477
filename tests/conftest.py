from __future__ import annotations

import pytest

from schema_validator import EnumNamesKeyword, MetaSchema, SchemaFactory, SpecVersion, get_meta_schema

EXAMPLE_META_SCHEMA_URI = "https://github.com/networknt/json-schema-validator/tests/schemas/example01#"

ALL_VERSIONS = [SpecVersion.V4, SpecVersion.V6, SpecVersion.V7, SpecVersion.V201909]


@pytest.fixture
def factory() -> SchemaFactory:
    return SchemaFactory.get_instance(SpecVersion.V7)


@pytest.fixture(params=ALL_VERSIONS, ids=lambda v: v.name)
def spec_version(request) -> SpecVersion:
    return request.param


@pytest.fixture
def enum_names_factory(spec_version: SpecVersion) -> SchemaFactory:
    meta_schema = (
        MetaSchema.builder(EXAMPLE_META_SCHEMA_URI, get_meta_schema(spec_version))
        .add_keyword(EnumNamesKeyword())
        .build()
    )
    return SchemaFactory.builder(SchemaFactory.get_instance(spec_version)).add_meta_schema(meta_schema).build()
