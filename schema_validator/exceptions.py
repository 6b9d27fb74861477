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

"""Custom exceptions for the schema validator.

Instance problems are never raised; they are reported as violations.
Everything here signals a problem with the schema, the dialect setup or
the input text itself.
"""

from typing import Optional


class SchemaValidatorError(Exception):
    """Base exception for schema validator errors."""
    pass


class SchemaCompileError(SchemaValidatorError):
    """Exception raised when a schema cannot be compiled.

    Compilation is all-or-nothing, so this always aborts the whole schema.
    """

    def __init__(self, message: str, schema_path: Optional[str] = None):
        self.schema_path = schema_path
        if schema_path:
            message = f"{message} (schema_path={schema_path})"
        super().__init__(message)


class DuplicateKeywordError(SchemaCompileError):
    """Exception raised when a keyword is registered twice in a strict registry."""
    pass


class UnknownKeywordError(SchemaCompileError):
    """Exception raised for an unknown keyword under a strict meta-schema."""
    pass


class MetaSchemaNotFoundError(SchemaCompileError):
    """Exception raised when no meta-schema is registered for a URI."""
    pass


class UnresolvedReferenceError(SchemaCompileError):
    """Exception raised when a ``$ref`` target cannot be found."""
    pass


class SchemaParseError(SchemaValidatorError):
    """Exception raised when schema or instance text cannot be parsed."""
    pass


class ConfigurationError(SchemaValidatorError):
    """Exception raised for invalid validator configuration."""
    pass
