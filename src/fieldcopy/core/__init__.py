"""Core functionalities: stateless primitives the copier is built from.

Architecture Note:
    core/ contains pure building blocks: indirection helpers, field tables,
    coercion and options. The only process-wide state is the descriptor
    registry, a memo cache keyed by type. The orchestration that ties them
    together lives in mapping/.
"""

from fieldcopy.core.coercion import (
    FieldSlot,
    ListSlot,
    RecordSlot,
    RefSlot,
    ScanWarning,
    Scanner,
    Slot,
    convert,
    is_instance,
    is_zero,
    set_value,
)
from fieldcopy.core.fields import (
    DescriptorRegistry,
    Embedded,
    FieldDescriptor,
    deep_fields,
    embedded,
    get_registry,
    is_frozen,
    is_record,
    new_instance,
    zero_value,
)
from fieldcopy.core.options import DEFAULT_MAX_DEPTH, CopyOption, CopyOptions
from fieldcopy.core.reference import Ref, indirect, indirect_type
from fieldcopy.core.types import MISSING, Maybe

__all__ = [
    # Types
    "MISSING",
    "Maybe",
    # Reference
    "Ref",
    "indirect",
    "indirect_type",
    # Fields
    "Embedded",
    "FieldDescriptor",
    "DescriptorRegistry",
    "embedded",
    "deep_fields",
    "get_registry",
    "is_frozen",
    "is_record",
    "new_instance",
    "zero_value",
    # Coercion
    "Scanner",
    "ScanWarning",
    "Slot",
    "RefSlot",
    "FieldSlot",
    "RecordSlot",
    "ListSlot",
    "convert",
    "is_instance",
    "is_zero",
    "set_value",
    # Options
    "CopyOption",
    "CopyOptions",
    "DEFAULT_MAX_DEPTH",
]
