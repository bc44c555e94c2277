"""Core type definitions for fieldcopy."""

from enum import Enum
from typing import Literal


class Missing(Enum):
    """Marker type for the absent-value sentinel."""

    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = Missing.MISSING
"""Sentinel for an absent value: an empty `Ref` chain or `None`.

Distinct from `None` so a resolved value can be told apart from "nothing there".
"""

type Maybe[T] = T | Literal[Missing.MISSING]
"""Type alias for a value that may be the `MISSING` sentinel."""
