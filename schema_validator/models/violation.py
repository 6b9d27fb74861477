from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple


@dataclass(frozen=True, order=True)
class Violation:
    """One finding produced by a validator.

    Identity (equality, hashing, ordering) is ``(path, keyword, message)``;
    the remaining attributes are descriptive.
    """

    path: str
    keyword: str
    message: str
    message_type: str = field(default="", compare=False)
    arguments: Tuple[str, ...] = field(default=(), compare=False)
    schema_path: Optional[str] = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.message


def format_violations(violations: Iterable[Violation]) -> str:
    return "\n".join(
        f"  - {v.message}" + (f" (schema_path={v.schema_path})" if v.schema_path else "")
        for v in sorted(violations)
    )
