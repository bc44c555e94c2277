"""Field functionality: descriptors, flattening registry and record construction."""

from fieldcopy.core.fields.core import (
    DescriptorRegistry,
    declared_fields,
    deep_fields,
    get_registry,
    is_frozen,
    is_pydantic_internal,
    is_record,
    new_instance,
    record_class,
    zero_value,
)
from fieldcopy.core.fields.models import Embedded, FieldDescriptor, embedded

__all__ = [
    # Models
    "Embedded",
    "FieldDescriptor",
    "embedded",
    # Core
    "DescriptorRegistry",
    "declared_fields",
    "deep_fields",
    "get_registry",
    "is_frozen",
    "is_pydantic_internal",
    "is_record",
    "new_instance",
    "record_class",
    "zero_value",
]
