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

"""Extensible schema validation engine.

Schemas are compiled once into a validator tree and then executed against
any number of instance documents, collecting every violation.
"""

__version__ = "0.1.0"

from .compiler import SchemaCompiler, ValidationContext, compile_schema
from .config import ValidatorConfig, default_config
from .dialects import SpecVersion, get_meta_schema, get_v4, get_v6, get_v7, get_v201909
from .exceptions import (
    ConfigurationError,
    DuplicateKeywordError,
    MetaSchemaNotFoundError,
    SchemaCompileError,
    SchemaParseError,
    SchemaValidatorError,
    UnknownKeywordError,
    UnresolvedReferenceError,
)
from .factory import SchemaFactory, SchemaFactoryBuilder
from .keywords import (
    AbstractKeyword,
    AbstractValidator,
    EnumNamesKeyword,
    FunctionKeyword,
    Keyword,
    KeywordRegistry,
    Validator,
)
from .meta_schema import MetaSchema, MetaSchemaBuilder, MetaSchemaRegistry, UnknownKeywordPolicy
from .models import (
    CustomErrorMessageType,
    ErrorMessageType,
    InstancePath,
    MessageFormatter,
    MessageTypes,
    PositionalMessageFormatter,
    Violation,
    format_violations,
)
from .node import JsonNode, NodeKind
from .schema import CompiledSchema, SchemaNodeValidator
