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

"""Keyword registry: keyword name -> keyword factory."""

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from ..exceptions import DuplicateKeywordError
from .base import Keyword

logger = logging.getLogger(__name__)


class KeywordRegistry:
    """Mapping of keyword names to keywords, local to one meta-schema."""

    def __init__(self, keywords: Iterable[Keyword] = (), allow_override: bool = True):
        self.allow_override = allow_override
        self._keywords: Dict[str, Keyword] = {}
        for keyword in keywords:
            self.register(keyword)

    def register(self, keyword: Keyword) -> None:
        """Register a keyword.

        Raises:
            DuplicateKeywordError: If the name is taken and overriding is disallowed
        """
        existing = self._keywords.get(keyword.name)
        if existing is not None:
            if not self.allow_override:
                raise DuplicateKeywordError(f"Keyword '{keyword.name}' is already registered")
            logger.debug(f"Replacing keyword '{keyword.name}': {existing!r} -> {keyword!r}")
        self._keywords[keyword.name] = keyword

    def get(self, name: str) -> Optional[Keyword]:
        return self._keywords.get(name)

    def names(self) -> List[str]:
        return sorted(self._keywords)

    def copy(self) -> "KeywordRegistry":
        registry = KeywordRegistry(allow_override=self.allow_override)
        registry._keywords = dict(self._keywords)
        return registry

    def __contains__(self, name: str) -> bool:
        return name in self._keywords

    def __iter__(self) -> Iterator[Keyword]:
        return iter(self._keywords.values())

    def __len__(self) -> int:
        return len(self._keywords)
