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

"""Configuration management for the schema validator."""

import os
import logging
from dataclasses import dataclass

from .exceptions import ConfigurationError
from .utils.logging_utils import configure_split_stream_logging

_ENV_PREFIX = "SCHEMA_VALIDATOR_"
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(_ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean value for {_ENV_PREFIX}{name}: '{raw}'")


@dataclass(frozen=True)
class ValidatorConfig:
    """Behavioral flags shared by compilation and execution."""
    # Stop at the first violating keyword instead of collecting all
    fail_fast: bool = False
    # Treat unknown keywords as compile errors regardless of meta-schema policy
    strict_keywords: bool = False
    # Allow a keyword registry to replace an already registered keyword
    allow_keyword_override: bool = True
    log_level: str = "INFO"
    print_level: str = "ERROR"
    # Cache parsed files in the node parser
    cache_enabled: bool = False

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            fail_fast=_env_flag('FAIL_FAST', False),
            strict_keywords=_env_flag('STRICT_KEYWORDS', False),
            allow_keyword_override=_env_flag('ALLOW_KEYWORD_OVERRIDE', True),
            log_level=os.getenv(_ENV_PREFIX + 'LOG_LEVEL', 'INFO'),
            print_level=os.getenv(_ENV_PREFIX + 'PRINT_LEVEL', 'ERROR'),
            cache_enabled=_env_flag('CACHE_ENABLED', False),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        return configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)


# Global configuration instance
default_config = ValidatorConfig.from_env()
