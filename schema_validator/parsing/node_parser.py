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

"""JSON/YAML text parser producing :class:`JsonNode` trees, with caching support."""

import json
import yaml
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..config import default_config
from ..exceptions import SchemaParseError
from ..node import JsonNode

logger = logging.getLogger(__name__)


class NodeParser:
    """Parse schema and instance documents into read-only nodes.

    JSON is tried first; anything that is not valid JSON is parsed as YAML
    with ``yaml.safe_load``. An empty YAML document yields a null node.
    """

    def __init__(self, cache_enabled: Optional[bool] = None):
        """Initialize node parser.

        Args:
            cache_enabled: Whether to cache parsed files. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else default_config.cache_enabled
        self._cache: Dict[Path, JsonNode] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _normalize(data: Any) -> Any:
        # YAML allows non-string mapping keys; JSON documents do not.
        if isinstance(data, dict):
            return {str(k): NodeParser._normalize(v) for k, v in data.items()}
        if isinstance(data, list):
            return [NodeParser._normalize(v) for v in data]
        if isinstance(data, (str, int, float, bool)) or data is None:
            return data
        # Timestamps and other YAML-specific scalars
        return str(data)

    def _load_text(self, content: str) -> Any:
        try:
            return json.loads(content)
        except ValueError:
            pass
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise SchemaParseError(f"Failed to parse document content: {exc}") from exc

    def parse_string(self, content: str) -> JsonNode:
        """Parse JSON or YAML content.

        Args:
            content: Document text

        Returns:
            Root node of the parsed document

        Raises:
            SchemaParseError: If content cannot be parsed
        """
        if not isinstance(content, str):
            raise SchemaParseError(f"Document content must be a string, got {type(content).__name__}")
        return JsonNode(self._normalize(self._load_text(content)))

    def parse_file(self, file_path: Union[str, Path]) -> JsonNode:
        """Parse a JSON or YAML file.

        Args:
            file_path: Path to the document

        Returns:
            Root node of the parsed document

        Raises:
            SchemaParseError: If file cannot be read or parsed
        """
        path = Path(file_path)

        if not path.exists():
            raise SchemaParseError(f"Document file not found: {path}")

        if not path.is_file():
            raise SchemaParseError(f"Path is not a file: {path}")

        if self.cache_enabled:
            with self._lock:
                if path in self._cache:
                    logger.debug(f"Loading document from cache: {path}")
                    return self._cache[path]

        logger.debug(f"Loading document file: {path}")
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SchemaParseError(f"Failed to read document file {path}: {exc}") from exc

        try:
            node = self.parse_string(content)
        except SchemaParseError as exc:
            raise SchemaParseError(f"Failed to parse document file {path}: {exc}") from exc

        if self.cache_enabled:
            with self._lock:
                self._cache[path] = node

        return node

    def clear_cache(self) -> None:
        """Clear the document cache."""
        with self._lock:
            self._cache.clear()
        logger.debug("Document cache cleared")


# Global parser instance
node_parser = NodeParser()
