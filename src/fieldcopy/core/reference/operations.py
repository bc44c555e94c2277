"""Pure functions stripping indirection from values and annotations.

Values are resolved through `Ref` boxes; annotations are resolved through
`Annotated`, `Optional`, `Ref[...]` and list-like wrappers down to the
element type that field matching works on.
"""

from __future__ import annotations

import types
from collections.abc import MutableSequence, Sequence
from typing import Annotated, Any, Union, get_args, get_origin

from fieldcopy.core.reference.models import Ref
from fieldcopy.core.types import MISSING, Maybe

_NONE_TYPE = type(None)

# Generic origins treated as "collection of elements" when stripping types
LIST_ORIGINS: tuple[Any, ...] = (list, tuple, Sequence, MutableSequence)


def indirect(value: Any) -> Maybe[Any]:
    """Follow `Ref` boxes down to the terminal value.

    Args:
        value: Any value, possibly a (chain of) `Ref`.

    Returns:
        The first non-`Ref` value, or MISSING if the chain ends empty or the
        value is None.
    """
    while isinstance(value, Ref):
        value = value.unwrap()
    if value is None:
        return MISSING
    return value


def innermost(ref: Ref[Any]) -> Ref[Any]:
    """Return the last `Ref` of a chain of nested boxes."""
    while isinstance(ref.value, Ref):
        ref = ref.value
    return ref


def strip_annotated(tp: Any) -> Any:
    """Drop `Annotated[...]` metadata, returning the underlying annotation."""
    while get_origin(tp) is Annotated:
        tp = get_args(tp)[0]
    return tp


def is_union(tp: Any) -> bool:
    """Check if an annotation is a `Union` / `X | Y`."""
    return get_origin(tp) in (Union, types.UnionType)


def is_optional(tp: Any) -> bool:
    """Check if an annotation admits None (`X | None`, `Optional[X]`).

    Returns:
        True if the annotation is a union with a None arm, False otherwise.
    """
    tp = strip_annotated(tp)
    return is_union(tp) and _NONE_TYPE in get_args(tp)


def optional_inner(tp: Any) -> Any:
    """Remove the None arm from an optional annotation.

    Returns:
        The single remaining arm, or a `Union` of the remaining arms.
    """
    tp = strip_annotated(tp)
    if not is_optional(tp):
        return tp
    arms = tuple(arg for arg in get_args(tp) if arg is not _NONE_TYPE)
    if len(arms) == 1:
        return arms[0]
    return Union[arms]  # noqa: UP007


def is_ref_type(tp: Any) -> bool:
    """Check if an annotation is `Ref` or `Ref[X]`."""
    tp = strip_annotated(tp)
    return tp is Ref or get_origin(tp) is Ref


def ref_inner(tp: Any) -> Any:
    """Return `X` for `Ref[X]`, Any for a bare `Ref`."""
    args = get_args(strip_annotated(tp))
    return args[0] if args else Any


def is_pointer_type(tp: Any) -> bool:
    """Check if an annotation describes a nullable slot (optional or `Ref`)."""
    return is_optional(tp) or is_ref_type(tp)


def list_item_type(tp: Any) -> Any:
    """Return the element annotation of a list-like annotation.

    Returns:
        `X` for `list[X]`, `Sequence[X]` or `tuple[X, ...]`; None if the
        annotation is not list-like or carries no element type.
    """
    tp = strip_annotated(tp)
    origin = get_origin(tp)
    if origin not in LIST_ORIGINS:
        return None
    args = get_args(tp)
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        return None
    return args[0] if args else None


def is_list_type(tp: Any) -> bool:
    """Check if an annotation is `list` or a parametrized list-like type."""
    tp = strip_annotated(tp)
    return tp is list or list_item_type(tp) is not None


def indirect_type(tp: Any) -> Any:
    """Strip reference, optional and collection wrapping from an annotation.

    `Ref[list[Row]] | None` resolves to `Row`. Unions with more than one
    non-None arm are returned unchanged.

    Args:
        tp: Annotation or class.

    Returns:
        The element annotation left after stripping all wrappers.
    """
    while True:
        tp = strip_annotated(tp)
        if is_optional(tp):
            tp = optional_inner(tp)
        elif is_ref_type(tp):
            tp = ref_inner(tp)
        elif list_item_type(tp) is not None:
            tp = list_item_type(tp)
        else:
            return tp
