"""Copy options: flags recognized by `copy` and the per-call option set.

Usage:
    copy(row, dto, CopyOption.DISABLE_SCANNER)

    options = CopyOptions.from_flags([CopyOption.DISABLE_SCANNER])
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto

DEFAULT_MAX_DEPTH = 64


class CopyOption(Enum):
    """Flags accepted by `copy`."""

    DISABLE_SCANNER = auto()  # Skip the __scan__ decoding fallback


@dataclass(frozen=True, slots=True)
class CopyOptions:
    """Option set evaluated once per copy call and passed down unchanged.

    Attributes:
        disable_scanner: Skip the `Scanner` fallback during coercion.
        max_depth: Maximum nesting depth of recursive record copies.
    """

    disable_scanner: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH

    @classmethod
    def from_flags(
        cls,
        flags: Iterable[CopyOption] = (),
        *,
        disable_scanner: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> CopyOptions:
        """Build an option set from call-site flags.

        Args:
            flags: CopyOption flags; duplicates are harmless.
            disable_scanner: Default for the scanner flag when not given.
            max_depth: Recursion bound.

        Returns:
            Immutable option set.

        Raises:
            TypeError: If a flag is not a CopyOption.
            ValueError: If max_depth is negative.
        """
        for flag in flags:
            if not isinstance(flag, CopyOption):
                raise TypeError(f"Unknown copy option: {flag!r}")
            if flag is CopyOption.DISABLE_SCANNER:
                disable_scanner = True
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}")
        return cls(disable_scanner=disable_scanner, max_depth=max_depth)
