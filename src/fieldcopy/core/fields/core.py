"""Field enumeration, descriptor registry and record construction.

Usage:
    for field in deep_fields(Order):
        print(field.name, field.path)

    row = new_instance(Order)  # defaults and zero values, no __init__ call
"""

from __future__ import annotations

import dataclasses
import typing
from collections.abc import Mapping, MutableMapping, MutableSequence, MutableSet, Sequence
from collections.abc import Set as AbstractSet
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Literal, get_args, get_origin

from fieldcopy.core.fields.models import EMBEDDED_KEY, Embedded, FieldDescriptor
from fieldcopy.core.reference.operations import (
    indirect_type,
    is_pointer_type,
    is_union,
    strip_annotated,
)

_SCALAR_TYPES: tuple[type, ...] = (bool, int, float, complex, str, bytes, Decimal, Fraction)

# Abstract collection annotations and the concrete type used for their zero value
_ABSTRACT_COLLECTIONS: dict[Any, type] = {
    Sequence: list,
    MutableSequence: list,
    Mapping: dict,
    MutableMapping: dict,
    AbstractSet: set,
    MutableSet: set,
}


def _is_pydantic(cls: type) -> bool:
    """Check if class is a Pydantic model without importing pydantic.

    Args:
        cls: Class to check.

    Returns:
        True if class inherits from pydantic.BaseModel, False otherwise.
    """
    for base in getattr(cls, "__mro__", ()):
        if base.__module__.startswith("pydantic") and base.__name__ == "BaseModel":
            return True
    return False


def is_pydantic_internal(cls: type) -> bool:
    """Check if a class belongs to pydantic itself (e.g. BaseModel)."""
    return cls.__module__.startswith("pydantic")


def record_class(obj: Any) -> type | None:
    """Return the record class for an instance, class or parametrized alias.

    Returns:
        The dataclass / Pydantic model class, or None if obj is not a record.
    """
    if isinstance(obj, type):
        cls = obj
    elif get_origin(obj) is not None:
        cls = get_origin(obj)
    else:
        cls = type(obj)
    if not isinstance(cls, type):
        return None
    if dataclasses.is_dataclass(cls) or _is_pydantic(cls):
        return cls
    return None


def is_record(obj: Any) -> bool:
    """Check if a value or type is a record (dataclass or Pydantic model)."""
    return record_class(obj) is not None


def is_frozen(cls: type) -> bool:
    """Check if instances of a record class reject attribute assignment."""
    if dataclasses.is_dataclass(cls):
        return bool(cls.__dataclass_params__.frozen)  # type: ignore[attr-defined]
    if _is_pydantic(cls):
        return bool(cls.model_config.get("frozen", False))  # type: ignore[attr-defined]
    return False


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError, AttributeError):
        # Forward references that cannot be resolved from the module globals
        return {}


def _resolve(hints: dict[str, Any], name: str, raw: Any) -> Any:
    if name in hints:
        return hints[name]
    if raw is None or isinstance(raw, str):
        return Any
    return raw


def _has_marker(annotation: Any) -> bool:
    if get_origin(annotation) is not typing.Annotated:
        return False
    return any(meta is Embedded or isinstance(meta, Embedded) for meta in annotation.__metadata__)


def declared_fields(cls: type) -> list[tuple[str, Any, bool, bool]]:
    """List the fields a record class declares, inherited fields included.

    Args:
        cls: Dataclass or Pydantic model class.

    Returns:
        (name, annotation, embedded, frozen) tuples in declaration order.
        Private names are included.
    """
    hints = _type_hints(cls)
    result: list[tuple[str, Any, bool, bool]] = []
    if dataclasses.is_dataclass(cls):
        for f in dataclasses.fields(cls):
            annotation = _resolve(hints, f.name, f.type)
            is_embedded = bool(f.metadata.get(EMBEDDED_KEY)) or _has_marker(annotation)
            result.append((f.name, annotation, is_embedded, False))
    elif _is_pydantic(cls):
        for name, info in cls.model_fields.items():  # type: ignore[attr-defined]
            annotation = _resolve(hints, name, info.annotation)
            is_embedded = _has_marker(annotation) or any(
                meta is Embedded or isinstance(meta, Embedded) for meta in info.metadata
            )
            result.append((name, annotation, is_embedded, bool(info.frozen)))
    return result


class DescriptorRegistry:
    """Process-local memo of flattened field tables per record type.

    Tables depend only on the type, so they are built once and reused by
    every copy call.
    """

    def __init__(self) -> None:
        """Initialize empty descriptor registry."""
        self._tables: dict[type, tuple[FieldDescriptor, ...]] = {}
        self._by_name: dict[type, dict[str, FieldDescriptor]] = {}

    def fields(self, cls: Any) -> tuple[FieldDescriptor, ...]:
        """Get the flattened field table of a record type.

        Args:
            cls: Record class, instance or annotation wrapping one.

        Returns:
            Descriptors in declaration order, embedded members inlined
            depth-first, first occurrence of each name kept. Empty for
            non-record input.
        """
        record = record_class(indirect_type(cls) if not is_record(cls) else cls)
        if record is None:
            return ()
        table = self._tables.get(record)
        if table is None:
            table = tuple(_flatten(record, (), (), True, {record}))
            self._tables[record] = table
            self._by_name[record] = {}
            for descriptor in table:
                self._by_name[record].setdefault(descriptor.name, descriptor)
        return table

    def lookup(self, cls: Any, name: str) -> FieldDescriptor | None:
        """Find a field by name in a record type's flattened table.

        Returns:
            The descriptor if the type has a public field of that name,
            None otherwise.
        """
        record = record_class(cls)
        if record is None:
            return None
        if record not in self._by_name:
            self.fields(record)
        return self._by_name[record].get(name)

    def is_cached(self, cls: type) -> bool:
        """Check if a table was already built for a type."""
        return cls in self._tables

    def clear(self) -> None:
        """Drop all memoized tables."""
        self._tables.clear()
        self._by_name.clear()


def _flatten(
    cls: type,
    prefix: tuple[str, ...],
    carriers: tuple[Any, ...],
    settable: bool,
    visiting: set[type],
) -> list[FieldDescriptor]:
    settable = settable and not is_frozen(cls)
    seen: set[str] = set()
    result: list[FieldDescriptor] = []

    def add(descriptor: FieldDescriptor) -> None:
        if descriptor.name not in seen:
            seen.add(descriptor.name)
            result.append(descriptor)

    for name, annotation, is_embedded, frozen in declared_fields(cls):
        if name.startswith("_"):
            continue
        member = record_class(indirect_type(annotation)) if is_embedded else None
        if member is not None:
            if member in visiting:
                continue
            for descriptor in _flatten(
                member,
                prefix + (name,),
                carriers + (annotation,),
                settable and not frozen,
                visiting | {member},
            ):
                add(descriptor)
        else:
            add(
                FieldDescriptor(
                    name=name,
                    type=annotation,
                    path=prefix + (name,),
                    carriers=carriers,
                    settable=settable and not frozen,
                )
            )
    return result


# Module-level registry instance
_registry = DescriptorRegistry()


def get_registry() -> DescriptorRegistry:
    """Access the global descriptor registry.

    Returns:
        The process-local DescriptorRegistry instance.
    """
    return _registry


def deep_fields(cls: Any) -> tuple[FieldDescriptor, ...]:
    """Flattened field descriptors of a record type (see DescriptorRegistry.fields)."""
    return _registry.fields(cls)


def zero_value(annotation: Any) -> Any:
    """Build the default value for an annotation.

    Optional and `Ref` slots are None, scalars are their empty value,
    collections are empty, enums take their first member, records are built
    with `new_instance`. Anything else is None.

    Args:
        annotation: Field annotation.

    Returns:
        A fresh zero value.
    """
    annotation = strip_annotated(annotation)
    if annotation is Any or is_pointer_type(annotation) or is_union(annotation):
        return None
    origin = get_origin(annotation)
    if origin is Literal:
        return get_args(annotation)[0]
    base = origin if origin is not None else annotation
    base = _ABSTRACT_COLLECTIONS.get(base, base)
    if not isinstance(base, type):
        return None
    if base is tuple:
        args = get_args(annotation)
        if not args or (len(args) == 2 and args[1] is Ellipsis):
            return ()
        return tuple(zero_value(arg) for arg in args)
    if base in (list, dict, set, frozenset, bytearray):
        return base()
    if issubclass(base, Enum):
        return next(iter(base), None)
    if is_record(base):
        return new_instance(base)
    for scalar in _SCALAR_TYPES:
        if base is scalar:
            return base()
    return None


def new_instance(cls: Any) -> Any:
    """Allocate a record with defaults, without running validation.

    Dataclasses are built without calling `__init__` (and so without
    `__post_init__`): each field takes its default, default factory or
    zero value. Pydantic models go through `model_construct` with zero
    values for required fields.

    Args:
        cls: Record class (or parametrized alias of one).

    Returns:
        A new instance.

    Raises:
        TypeError: If cls is not a record type.
    """
    record = record_class(cls)
    if record is None or (not isinstance(cls, type) and get_origin(cls) is None):
        raise TypeError(f"{cls!r} is not a dataclass or Pydantic model")
    if _is_pydantic(record):
        hints = _type_hints(record)
        values = {
            name: zero_value(_resolve(hints, name, info.annotation))
            for name, info in record.model_fields.items()  # type: ignore[attr-defined]
            if info.is_required()
        }
        return record.model_construct(**values)  # type: ignore[attr-defined]

    instance = object.__new__(record)
    hints = _type_hints(record)
    for f in dataclasses.fields(record):
        if f.default is not dataclasses.MISSING:
            value = f.default
        elif f.default_factory is not dataclasses.MISSING:
            value = f.default_factory()
        else:
            value = zero_value(_resolve(hints, f.name, f.type))
        # Bypasses frozen=True; the instance is still under construction
        object.__setattr__(instance, f.name, value)
    return instance
