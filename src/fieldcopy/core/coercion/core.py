"""Value setter and coercion engine.

`set_value` walks a fixed decision ladder and reports whether it could write
the value. A False result is an expected outcome for unrelated field types,
not an error; callers decide what to do next (usually a nested copy).
"""

from __future__ import annotations

import numbers
import warnings
from collections.abc import Callable, Collection, Mapping
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Literal, TypeVar, get_args, get_origin

from fieldcopy.core.coercion.models import RefSlot, Scanner, ScanWarning, Slot
from fieldcopy.core.fields.core import deep_fields, is_record, new_instance, zero_value
from fieldcopy.core.options import CopyOptions
from fieldcopy.core.reference.models import Ref
from fieldcopy.core.reference.operations import (
    indirect,
    innermost,
    is_optional,
    is_pointer_type,
    is_ref_type,
    is_union,
    optional_inner,
    ref_inner,
    strip_annotated,
)
from fieldcopy.core.types import MISSING

_NONE_TYPE = type(None)
_NUMERIC_TYPES: tuple[type, ...] = (int, float, complex, Decimal, Fraction)


def is_instance(value: Any, annotation: Any) -> bool:
    """isinstance() that understands typing annotations.

    Parametrized collections are checked item by item; unions match any arm.

    Args:
        value: Value to test.
        annotation: Class or typing annotation.

    Returns:
        True if value can be stored as-is in a slot of that annotation.
    """
    annotation = strip_annotated(annotation)
    if annotation is Any or annotation is object:
        return True
    if annotation is None or annotation is _NONE_TYPE:
        return value is None
    if isinstance(annotation, TypeVar):
        bound = annotation.__bound__
        return bound is None or is_instance(value, bound)
    if is_union(annotation):
        return any(is_instance(value, arm) for arm in get_args(annotation))
    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        # typing.NewType
        return is_instance(value, supertype)
    origin = get_origin(annotation)
    if origin is Literal:
        return value in get_args(annotation)
    if origin is not None:
        return _is_generic_instance(value, annotation, origin)
    if isinstance(annotation, type):
        return isinstance(value, annotation)
    return False


def _is_generic_instance(value: Any, annotation: Any, origin: Any) -> bool:
    args = get_args(annotation)
    if origin is Ref:
        if not isinstance(value, Ref):
            return False
        return value.value is None or not args or is_instance(value.value, args[0])
    if origin is type:
        return isinstance(value, type) and (
            not args or not isinstance(args[0], type) or issubclass(value, args[0])
        )
    if origin is Callable:
        return callable(value)
    if not isinstance(origin, type) or not isinstance(value, origin):
        return False
    if not args or not issubclass(origin, Collection):
        return True
    if isinstance(value, Mapping):
        if len(args) != 2:
            return True
        key_type, value_type = args
        return all(
            is_instance(k, key_type) and is_instance(v, value_type) for k, v in value.items()
        )
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return all(is_instance(item, args[0]) for item in value)
        if args == ((),):
            return len(value) == 0
        return len(value) == len(args) and all(
            is_instance(item, arg) for item, arg in zip(value, args, strict=True)
        )
    return all(is_instance(item, args[0]) for item in value)


def convert(value: Any, annotation: Any) -> tuple[bool, Any]:
    """Convert a value to an annotation's type.

    Rules, in order: values that already fit are kept as-is; unions try each
    arm; enum members convert through their value; enums are looked up by
    value; numbers convert between int, float, complex, Decimal and Fraction
    (bools are not converted); str and bytes convert through UTF-8.

    Args:
        value: Source value.
        annotation: Destination annotation.

    Returns:
        (True, converted) on success, (False, None) if not convertible.
    """
    annotation = strip_annotated(annotation)
    if is_instance(value, annotation):
        return True, value
    if is_union(annotation):
        for arm in get_args(annotation):
            if arm is _NONE_TYPE:
                continue
            ok, converted = convert(value, arm)
            if ok:
                return True, converted
        return False, None
    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        return convert(value, supertype)
    if get_origin(annotation) is not None or not isinstance(annotation, type):
        return False, None

    if isinstance(value, Enum) and not issubclass(annotation, Enum):
        return convert(value.value, annotation)
    if issubclass(annotation, Enum):
        try:
            return True, annotation(value)
        except ValueError:
            return False, None
    if (
        annotation in _NUMERIC_TYPES
        and isinstance(value, numbers.Number)
        and not isinstance(value, bool)
    ):
        try:
            return True, annotation(value)
        except (TypeError, ValueError, ArithmeticError):
            # complex -> real, NaN/inf -> int, invalid Decimal operations
            return False, None
    if annotation is str and isinstance(value, (bytes, bytearray)):
        try:
            return True, bytes(value).decode("utf-8")
        except UnicodeDecodeError:
            return False, None
    if annotation in (bytes, bytearray) and isinstance(value, (str, bytes, bytearray)):
        data = value.encode("utf-8") if isinstance(value, str) else value
        return True, annotation(data)
    return False, None


def _zero_state(value: Any, seen: frozenset[int] = frozenset()) -> bool | None:
    """True/False for comparable values, None for non-comparable ones."""
    if value is None:
        return True
    if isinstance(value, Ref):
        return value.is_empty()
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, numbers.Number):
        return bool(value == 0)
    if isinstance(value, (str, bytes)):
        return len(value) == 0
    if isinstance(value, tuple):
        items: list[Any] = list(value)
    elif is_record(value) and not isinstance(value, type):
        if id(value) in seen:
            return True
        seen = seen | {id(value)}
        items = [field.get(value) for field in deep_fields(type(value))]
    else:
        return None
    for item in items:
        state = True if item is MISSING else _zero_state(item, seen)
        if state is not True:
            return state
    return True


def is_zero(value: Any) -> bool:
    """Check if a value is the zero value of a comparable type.

    Numbers equal to 0, empty strings/bytes, None, empty `Ref` boxes, and
    tuples or records made only of such values are zero. Lists, dicts, sets
    and anything containing them are not comparable and never zero.
    """
    return _zero_state(value) is True


def _allocate(slot: Slot) -> Slot:
    """Allocate storage behind optional / `Ref` slots and redirect into it."""
    while True:
        declared = strip_annotated(slot.declared_type)
        if is_ref_type(declared):
            inner = ref_inner(declared)
            current = slot.get()
            if not isinstance(current, Ref):
                current = Ref()
                slot.assign(current)
            current = innermost(current)
            if current.is_empty():
                current.set(zero_value(inner))
            slot = RefSlot(current, inner)
        elif is_optional(declared):
            inner = optional_inner(declared)
            if slot.get() is None:
                slot.assign(zero_value(inner))
            slot = slot.narrowed(inner)
        else:
            return slot


def _scan(slot: Slot, source: Any) -> bool:
    current = slot.get()
    fresh = current is None
    if fresh:
        target = strip_annotated(slot.declared_type)
        if not (isinstance(target, type) and issubclass(target, Scanner)):
            return False
        try:
            current = new_instance(target) if is_record(target) else target()
        except TypeError:
            return False
    elif not isinstance(current, Scanner):
        return False

    try:
        current.__scan__(source)
    except Exception as exc:  # noqa: BLE001
        warnings.warn(
            f"{type(current).__name__}.__scan__ failed for "
            f"{type(source).__name__} value: {exc}",
            ScanWarning,
            stacklevel=3,
        )
    if fresh:
        slot.assign(current)
    return True


def set_value(slot: Slot, source: Any, options: CopyOptions) -> bool:
    """Try to write a source value into a slot.

    Decision ladder:
    1. MISSING source: nothing to do.
    2. Optional / `Ref` slot: None, empty `Ref` and zero sources leave the
       slot as it is; otherwise storage is allocated and the slot narrowed.
    3. Convertible source: convert and assign.
    4. Scanner destination (unless disabled): hand the source to `__scan__`.
    5. `Ref` (or None) source: retry with its content.

    Args:
        slot: Destination location.
        source: Candidate value.
        options: Option set of the running copy.

    Returns:
        True if the value was handled (written or deliberately skipped),
        False if no assignment path exists. Allocation done in step 2 is
        kept even when False is returned.
    """
    if source is MISSING:
        return True

    if is_pointer_type(slot.declared_type):
        if source is None or (isinstance(source, Ref) and indirect(source) is MISSING):
            return True  # never clobber with an explicit "no value"
        if is_zero(source):
            return True
        slot = _allocate(slot)

    ok, converted = convert(source, slot.declared_type)
    if ok:
        slot.assign(converted)
        return True

    if not options.disable_scanner and _scan(slot, source):
        return True

    if source is None:
        return True
    if isinstance(source, Ref):
        return set_value(slot, MISSING if source.is_empty() else source.unwrap(), options)
    return False
