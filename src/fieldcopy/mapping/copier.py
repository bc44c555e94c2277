"""Field-by-field copying between records of unrelated types.

Usage:
    row = UserRow()
    copy(row, UserDTO(id=7, name="ann"))

    rows: list[UserRow] = []
    copy(rows, dtos, item_type=UserRow)

    dto = copy_as(UserDTO, row)
    dtos = copy_as(list[UserDTO], rows)

Matching is by exact field name over the flattened field tables of both
sides. Fields that cannot be matched or coerced are left alone; only an
unaddressable destination or a failing nested copy raises.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable
from functools import cached_property
from typing import Any, get_origin

from fieldcopy.config.settings import CopySettings
from fieldcopy.core.coercion import (
    FieldSlot,
    ListSlot,
    RecordSlot,
    RefSlot,
    Slot,
    is_instance,
    set_value,
)
from fieldcopy.core.fields import (
    get_registry,
    is_frozen,
    is_pydantic_internal,
    is_record,
    new_instance,
    record_class,
)
from fieldcopy.core.options import CopyOption, CopyOptions
from fieldcopy.core.reference import (
    Ref,
    indirect,
    indirect_type,
    innermost,
    is_list_type,
    is_ref_type,
    list_item_type,
    optional_inner,
    ref_inner,
    strip_annotated,
)
from fieldcopy.core.types import MISSING


class CopyError(Exception):
    """Base class for errors raised by copy."""

    pass


class UnaddressableDestinationError(CopyError):
    """Raised when the destination cannot be updated in place."""

    pass


class CopyDepthError(CopyError):
    """Raised when nested record copies exceed the configured max_depth."""

    pass


def copy(
    to_value: Any,
    from_value: Any,
    *flags: CopyOption,
    item_type: Any = None,
    max_depth: int | None = None,
    settings: CopySettings | None = None,
) -> None:
    """Copy matching fields from one value into another.

    Args:
        to_value: Destination: a mutable record instance, a list, or a `Ref`
            holding either or any other value.
        from_value: Source: a record, a list/tuple of records, a `Ref`, or
            any value assignable to the destination.
        *flags: CopyOption flags.
        item_type: Element annotation of a list destination. Defaults to the
            type of the list's first element.
        max_depth: Bound on nested record copies (default from settings).
        settings: Defaults to apply; read from the environment if omitted.

    Raises:
        UnaddressableDestinationError: If the destination cannot be updated
            in place. Raised before anything is written.
        CopyDepthError: If nesting exceeds max_depth (cyclic values).
    """
    options = (settings or CopySettings()).to_options(flags, max_depth)
    target = _destination(to_value, item_type)
    _copy(target, from_value, options, 0)


def copy_as(
    dest_type: Any,
    from_value: Any,
    *flags: CopyOption,
    max_depth: int | None = None,
    settings: CopySettings | None = None,
) -> Any:
    """Build a new destination of the given type and copy into it.

    Args:
        dest_type: A mutable record class, or `list[Record]`.
        from_value: Source value (see `copy`).
        *flags: CopyOption flags.
        max_depth: Bound on nested record copies.
        settings: Defaults to apply.

    Returns:
        The new record instance or list.

    Raises:
        TypeError: If dest_type is neither a record class nor a list type.
        UnaddressableDestinationError: If dest_type is a frozen record.
    """
    item = list_item_type(dest_type)
    if item is not None:
        items: list[Any] = []
        copy(items, from_value, *flags, item_type=item, max_depth=max_depth, settings=settings)
        return items
    if not is_record(dest_type) or not (isinstance(dest_type, type) or get_origin(dest_type)):
        raise TypeError(f"copy_as() needs a record class or list type, got {dest_type!r}")
    instance = new_instance(dest_type)
    copy(instance, from_value, *flags, max_depth=max_depth, settings=settings)
    return instance


def _infer_item_type(items: list[Any]) -> Any:
    if not items:
        return None
    first = items[0]
    if isinstance(first, Ref):
        inner = indirect(first)
        return None if inner is MISSING else Ref[type(inner)]  # type: ignore[misc]
    return type(first)


def _destination(to_value: Any, item_type: Any) -> Slot:
    """Resolve the public destination argument into a slot."""
    if isinstance(to_value, Ref):
        ref = innermost(to_value)
        if ref.is_empty():
            raise UnaddressableDestinationError("copy to value is unaddressable: empty Ref")
        if isinstance(ref.value, list):
            return ListSlot(ref.value, item_type or _infer_item_type(ref.value))
        return RefSlot(ref)
    if isinstance(to_value, list):
        return ListSlot(to_value, item_type or _infer_item_type(to_value))
    if record_class(to_value) is None or isinstance(to_value, type) or get_origin(to_value):
        raise UnaddressableDestinationError(
            f"copy to value is unaddressable: {type(to_value).__name__} cannot be "
            f"updated in place, pass a Ref, a record instance or a list"
        )
    if is_frozen(type(to_value)):
        raise UnaddressableDestinationError(
            f"copy to value is unaddressable: {type(to_value).__name__} is frozen"
        )
    return RecordSlot(to_value)


def _follow(slot: Slot) -> Slot:
    """Resolve a slot through optional annotations and held `Ref` boxes."""
    while True:
        raw = strip_annotated(slot.declared_type)
        declared = optional_inner(raw)
        current = slot.get()
        if isinstance(current, Ref):
            ref = innermost(current)
            if ref.is_empty():
                raise UnaddressableDestinationError("copy to value is unaddressable: empty Ref")
            slot = RefSlot(ref, ref_inner(declared) if is_ref_type(declared) else None)
            continue
        if declared is not raw:
            slot = slot.narrowed(declared)
        return slot


def _assignable(source: Any, target: Slot) -> bool:
    if isinstance(target, ListSlot) and target.item_type is None:
        return False
    return is_instance(source, target.declared_type)


def _copy(target: Slot, from_value: Any, options: CopyOptions, depth: int) -> None:
    if depth > options.max_depth:
        raise CopyDepthError(
            f"copy exceeded max_depth={options.max_depth}; "
            f"cyclic values cannot be copied"
        )
    source = indirect(from_value)
    if source is MISSING:
        return

    target = _follow(target)
    if _assignable(source, target):
        target.assign(source)
        return

    declared = target.declared_type
    current = target.get()
    is_list = isinstance(current, list) or is_list_type(declared)
    if is_list:
        sources = list(source) if isinstance(source, (list, tuple)) else [source]
    elif isinstance(source, (list, tuple)):
        return
    else:
        sources = [source]

    to_type = record_class(current) if not is_list and is_record(current) else None
    to_type = to_type or record_class(indirect_type(declared))
    from_type = next((type(s) for s in map(indirect, sources) if s is not MISSING), None)
    if to_type is None or from_type is None or not is_record(from_type):
        return

    if is_list:
        if current is None:
            current = []
            target.assign(current)
        item_annotation = list_item_type(declared) or to_type
    elif not is_record(current):
        current = new_instance(to_type)
        target.assign(current)

    for element in sources:
        element = indirect(element)
        dest = new_instance(to_type) if is_list else current
        if element is not MISSING:
            _copy_fields(dest, element, options, depth)
            _copy_methods(dest, element, options)
        if is_list:
            _append(current, dest, item_annotation)


def _append(items: list[Any], element: Any, annotation: Any) -> None:
    inner = optional_inner(strip_annotated(annotation))
    if is_ref_type(inner):
        if is_instance(element, ref_inner(inner)):
            items.append(Ref(element))
    elif is_instance(element, annotation):
        items.append(element)


def _copy_fields(dest: Any, source: Any, options: CopyOptions, depth: int) -> None:
    """Field -> field, or field -> unary setter method when dest has no such field."""
    registry = get_registry()
    for field in registry.fields(type(source)):
        value = field.get(source)
        if value is MISSING:
            continue
        to_field = registry.lookup(type(dest), field.name)
        if to_field is None:
            _call_setter(dest, field.name, value)
        elif to_field.settable:
            slot = FieldSlot(dest, to_field)
            if not set_value(slot, value, options):
                _copy(slot, value, options, depth + 1)


def _copy_methods(dest: Any, source: Any, options: CopyOptions) -> None:
    """Zero-argument method / property on source -> same-named dest field."""
    registry = get_registry()
    for field in registry.fields(type(dest)):
        if not field.settable or registry.lookup(type(source), field.name) is not None:
            # Source fields were already matched by _copy_fields
            continue
        getter = _find_attribute(type(source), field.name)
        if isinstance(getter, (property, cached_property)):
            value = getattr(source, field.name)
        elif _is_method(source, field.name, getter) and len(_parameters(getter)) == 0:
            value = getattr(source, field.name)()
        else:
            continue
        # Best effort: no nested copy in this direction
        set_value(FieldSlot(dest, field), value, options)


def _call_setter(dest: Any, name: str, value: Any) -> None:
    method = _find_attribute(type(dest), name)
    if not _is_method(dest, name, method):
        return
    params = _parameters(method)
    if len(params) != 1 or params[0].kind not in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        return
    annotation = _hints(method).get(params[0].name, Any)
    if is_instance(value, annotation):
        getattr(dest, name)(value)


def _is_method(obj: Any, name: str, attribute: Any) -> bool:
    """Check that a class-level function is reached as a bound method on obj."""
    return inspect.isfunction(attribute) and inspect.ismethod(getattr(obj, name, None))


def _find_attribute(cls: type, name: str) -> Any:
    """Look up a public attribute defined by user classes in the MRO."""
    if name.startswith("_"):
        return None
    for klass in cls.__mro__:
        if klass is object or is_pydantic_internal(klass):
            continue
        if name in klass.__dict__:
            return klass.__dict__[name]
    return None


def _parameters(func: Callable[..., Any]) -> list[inspect.Parameter]:
    """Parameters of an unbound method, excluding self."""
    return list(inspect.signature(func).parameters.values())[1:]


def _hints(func: Callable[..., Any]) -> dict[str, Any]:
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError):
        return {}
