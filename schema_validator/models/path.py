from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Tuple, Union

PathSegment = Union[str, int]

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$\-]*$")


@dataclass(frozen=True)
class InstancePath:
    """Location inside an instance document, rendered as ``$``, ``$.a``, ``$[0]``.

    Paths are persistent values: :meth:`child` returns a new path and never
    modifies the receiver, so sibling recursions can never observe each
    other's segments.
    """

    segments: Tuple[PathSegment, ...] = ()

    @classmethod
    def root(cls) -> "InstancePath":
        return _ROOT

    def child(self, segment: PathSegment) -> "InstancePath":
        return InstancePath(self.segments + (segment,))

    def __str__(self) -> str:
        parts = ["$"]
        for segment in self.segments:
            if isinstance(segment, int):
                parts.append(f"[{segment}]")
            elif _IDENTIFIER_RE.match(segment):
                parts.append(f".{segment}")
            else:
                escaped = segment.replace("\\", "\\\\").replace("'", "\\'")
                parts.append(f"['{escaped}']")
        return "".join(parts)


_ROOT = InstancePath()


def jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def jp_unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def join_pointer(base: str, tokens: Iterable[PathSegment]) -> str:
    """Append tokens to a ``#``-rooted JSON pointer such as ``#/properties/a``."""
    pointer = base or "#"
    for token in tokens:
        pointer = f"{pointer}/{jp_escape(str(token))}"
    return pointer
