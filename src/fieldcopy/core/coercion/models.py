"""Coercion models: the Scanner protocol and settable slots.

A slot is a location a value can be written to: the content of a `Ref`, a
field of a record, a whole record, or a list. Slots carry the declared
annotation that coercion converts values to.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from fieldcopy.core.fields.core import declared_fields
from fieldcopy.core.fields.models import FieldDescriptor
from fieldcopy.core.reference.models import Ref
from fieldcopy.core.types import MISSING


@runtime_checkable
class Scanner(Protocol):
    """Value that can decode an arbitrary source value into itself.

    Example:
        @dataclass
        class NullString:
            string: str = ""
            valid: bool = False

            def __scan__(self, value: Any) -> None:
                self.valid = value is not None
                self.string = "" if value is None else str(value)
    """

    def __scan__(self, value: Any) -> None: ...


class ScanWarning(RuntimeWarning):
    """Emitted when a destination's `__scan__` raises; the error is not propagated."""


class Slot:
    """Base class for settable locations."""

    __slots__ = ()

    @property
    def declared_type(self) -> Any:
        """Annotation values written to this slot are coerced to."""
        return Any

    def get(self) -> Any:
        """Return the current content of the slot."""
        raise NotImplementedError

    def assign(self, value: Any) -> None:
        """Replace the content of the slot."""
        raise NotImplementedError

    def narrowed(self, declared_type: Any) -> Slot:
        """Same location viewed through a narrower annotation."""
        return NarrowedSlot(self, declared_type)


class NarrowedSlot(Slot):
    """A slot re-typed after stripping an optional wrapper."""

    __slots__ = ("_base", "_declared_type")

    def __init__(self, base: Slot, declared_type: Any) -> None:
        self._base = base
        self._declared_type = declared_type

    @property
    def declared_type(self) -> Any:
        return self._declared_type

    def get(self) -> Any:
        return self._base.get()

    def assign(self, value: Any) -> None:
        self._base.assign(value)


class RefSlot(Slot):
    """The content of a `Ref` box."""

    __slots__ = ("_ref", "_declared_type")

    def __init__(self, ref: Ref[Any], declared_type: Any = None) -> None:
        self._ref = ref
        self._declared_type = declared_type

    @property
    def declared_type(self) -> Any:
        if self._declared_type is not None and self._declared_type is not Any:
            return self._declared_type
        if self._ref.value is not None:
            return type(self._ref.value)
        return Any

    def get(self) -> Any:
        return self._ref.unwrap()

    def assign(self, value: Any) -> None:
        self._ref.set(value)


class FieldSlot(Slot):
    """A field of a record instance, addressed through its descriptor."""

    __slots__ = ("_record", "_field")

    def __init__(self, record: Any, field: FieldDescriptor) -> None:
        self._record = record
        self._field = field

    @property
    def declared_type(self) -> Any:
        return self._field.type

    @property
    def name(self) -> str:
        return self._field.name

    def get(self) -> Any:
        value = self._field.get(self._record)
        return None if value is MISSING else value

    def assign(self, value: Any) -> None:
        self._field.set(self._record, value)


class RecordSlot(Slot):
    """A whole record instance updated in place."""

    __slots__ = ("_record",)

    def __init__(self, record: Any) -> None:
        self._record = record

    @property
    def declared_type(self) -> Any:
        return type(self._record)

    def get(self) -> Any:
        return self._record

    def assign(self, value: Any) -> None:
        """Copy every declared field of value onto the record.

        Fields declared frozen keep their current value.
        """
        for name, _, _, frozen in declared_fields(type(self._record)):
            if not frozen and hasattr(value, name):
                setattr(self._record, name, getattr(value, name))


class ListSlot(Slot):
    """A list updated in place; `item_type` is the element annotation."""

    __slots__ = ("_items", "item_type")

    def __init__(self, items: list[Any], item_type: Any = None) -> None:
        self._items = items
        self.item_type = item_type

    @property
    def declared_type(self) -> Any:
        if self.item_type is None:
            return list
        return list[self.item_type]  # type: ignore[name-defined]

    def get(self) -> list[Any]:
        return self._items

    def assign(self, value: Any) -> None:
        self._items[:] = list(value)
