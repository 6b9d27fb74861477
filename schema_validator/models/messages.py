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

"""Message types and positional message formatting.

A message type pairs a stable code with a template using ``{N}``
placeholders. Argument ``{0}`` is always the rendered instance path.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol, Sequence

_PLACEHOLDER_RE = re.compile(r"\{(\d+)\}")


class MessageFormatter(Protocol):
    """Renders a template with ordered arguments."""

    def format(self, template: str, arguments: Sequence[str]) -> str:
        ...


class PositionalMessageFormatter:
    """Substitute ``{N}`` placeholders; every other character is kept verbatim."""

    def format(self, template: str, arguments: Sequence[str]) -> str:
        def _replace(match: re.Match) -> str:
            index = int(match.group(1))
            if index < len(arguments):
                return str(arguments[index])
            return match.group(0)

        return _PLACEHOLDER_RE.sub(_replace, template)


@dataclass(frozen=True)
class ErrorMessageType:
    code: str
    template: str


class CustomErrorMessageType(ErrorMessageType):
    """Message type introduced by a custom keyword."""

    @classmethod
    def of(cls, code: str, template: str) -> "CustomErrorMessageType":
        return cls(code=code, template=template)


class MessageTypes:
    """Catalog of message types used by the standard keywords."""

    FALSE = ErrorMessageType("false", "{0}: boolean schema false does not allow any value")
    TYPE = ErrorMessageType("type", "{0}: {1} found, {2} expected")
    ENUM = ErrorMessageType("enum", "{0}: does not have a value in the enumeration {1}")
    CONST = ErrorMessageType("const", "{0}: must be a constant value {1}")
    MIN_LENGTH = ErrorMessageType("minLength", "{0}: must be at least {1} characters long")
    MAX_LENGTH = ErrorMessageType("maxLength", "{0}: may only be {1} characters long")
    PATTERN = ErrorMessageType("pattern", "{0}: does not match the regex pattern {1}")
    MINIMUM = ErrorMessageType("minimum", "{0}: must have a minimum value of {1}")
    EXCLUSIVE_MINIMUM = ErrorMessageType("exclusiveMinimum", "{0}: must have an exclusive minimum value of {1}")
    MAXIMUM = ErrorMessageType("maximum", "{0}: must have a maximum value of {1}")
    EXCLUSIVE_MAXIMUM = ErrorMessageType("exclusiveMaximum", "{0}: must have an exclusive maximum value of {1}")
    MULTIPLE_OF = ErrorMessageType("multipleOf", "{0}: must be multiple of {1}")
    MIN_ITEMS = ErrorMessageType("minItems", "{0}: there must be a minimum of {1} items in the array")
    MAX_ITEMS = ErrorMessageType("maxItems", "{0}: there must be a maximum of {1} items in the array")
    UNIQUE_ITEMS = ErrorMessageType("uniqueItems", "{0}: the items in the array must be unique")
    REQUIRED = ErrorMessageType("required", "{0}.{1}: is missing but it is required")
    MIN_PROPERTIES = ErrorMessageType("minProperties", "{0}: should have a minimum of {1} properties")
    MAX_PROPERTIES = ErrorMessageType("maxProperties", "{0}: may only have a maximum of {1} properties")
    ADDITIONAL_PROPERTIES = ErrorMessageType(
        "additionalProperties",
        "{0}.{1}: is not defined in the schema and the schema does not allow additional properties",
    )
    ADDITIONAL_ITEMS = ErrorMessageType("additionalItems", "{0}[{1}]: no validator found at this index")
    CONTAINS = ErrorMessageType("contains", "{0}: does not contain an element that passes these validations: {1}")
    ANY_OF = ErrorMessageType("anyOf", "{0}: should be valid to any of the schemas {1}")
    ONE_OF = ErrorMessageType("oneOf", "{0}: should be valid to one and only one of the schemas, but {1} are valid")
    NOT = ErrorMessageType("not", "{0}: should not be valid to the schema {1}")
