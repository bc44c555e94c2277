"""Reference box: a mutable single-value slot standing in for a pointer.

Usage:
    count = Ref(0)
    copy(count, 7)
    assert count.value == 7

    @dataclass
    class Row:
        parent: Ref[Parent] | None = None
"""

from __future__ import annotations

from typing import Any


class Ref[T]:
    """Mutable box around a single value.

    A `Ref` is the addressable counterpart of a plain value: copying into a
    `Ref` rebinds its content, and a field annotated `Ref[T]` behaves as an
    optional slot that is allocated on first write.
    """

    __slots__ = ("value",)

    def __init__(self, value: T | None = None) -> None:
        self.value = value

    def unwrap(self) -> T | None:
        """Return the boxed value (None if empty)."""
        return self.value

    def set(self, value: T | None) -> None:
        """Replace the boxed value."""
        self.value = value

    def is_empty(self) -> bool:
        """Check if the box holds nothing.

        Returns:
            True if the boxed value is None, False otherwise.
        """
        return self.value is None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Ref):
            return NotImplemented
        return bool(self.value == other.value)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"
