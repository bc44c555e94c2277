"""Coercion functionality: slots, the Scanner protocol and the value setter."""

from fieldcopy.core.coercion.core import convert, is_instance, is_zero, set_value
from fieldcopy.core.coercion.models import (
    FieldSlot,
    ListSlot,
    NarrowedSlot,
    RecordSlot,
    RefSlot,
    ScanWarning,
    Scanner,
    Slot,
)

__all__ = [
    # Models
    "Scanner",
    "ScanWarning",
    "Slot",
    "NarrowedSlot",
    "RefSlot",
    "FieldSlot",
    "RecordSlot",
    "ListSlot",
    # Core
    "convert",
    "is_instance",
    "is_zero",
    "set_value",
]
