"""Reference functionality: the `Ref` box and indirection helpers."""

from fieldcopy.core.reference.models import Ref
from fieldcopy.core.reference.operations import (
    indirect,
    indirect_type,
    innermost,
    is_list_type,
    is_optional,
    is_pointer_type,
    is_ref_type,
    is_union,
    list_item_type,
    optional_inner,
    ref_inner,
    strip_annotated,
)

__all__ = [
    # Models
    "Ref",
    # Operations
    "indirect",
    "indirect_type",
    "innermost",
    "is_list_type",
    "is_optional",
    "is_pointer_type",
    "is_ref_type",
    "is_union",
    "list_item_type",
    "optional_inner",
    "ref_inner",
    "strip_annotated",
]
