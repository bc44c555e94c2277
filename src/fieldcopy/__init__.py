"""fieldcopy: field-by-field copying between dataclasses and Pydantic models.

Usage:
    from dataclasses import dataclass
    from fieldcopy import copy, copy_as

    @dataclass
    class UserDTO:
        id: int
        name: str

    @dataclass
    class UserRow:
        id: int = 0
        name: str = ""
        password_hash: str = ""

    row = UserRow()
    copy(row, UserDTO(id=7, name="ann"))   # row.id == 7, row.name == "ann"

    rows = copy_as(list[UserRow], [UserDTO(1, "a"), UserDTO(2, "b")])
"""

__version__ = "0.1.0"

# Configuration
from fieldcopy.config import CopySettings

# Core primitives
from fieldcopy.core import (
    MISSING,
    CopyOption,
    CopyOptions,
    DescriptorRegistry,
    Embedded,
    FieldDescriptor,
    Ref,
    Scanner,
    ScanWarning,
    deep_fields,
    embedded,
    get_registry,
    indirect,
    indirect_type,
    new_instance,
)

# Mapping
from fieldcopy.mapping import (
    CopyDepthError,
    CopyError,
    UnaddressableDestinationError,
    copy,
    copy_as,
)

__all__ = [
    # Version
    "__version__",
    # Mapping
    "copy",
    "copy_as",
    "CopyError",
    "CopyDepthError",
    "UnaddressableDestinationError",
    # Core
    "MISSING",
    "CopyOption",
    "CopyOptions",
    "Ref",
    "Embedded",
    "embedded",
    "FieldDescriptor",
    "DescriptorRegistry",
    "deep_fields",
    "get_registry",
    "indirect",
    "indirect_type",
    "new_instance",
    "Scanner",
    "ScanWarning",
    # Configuration
    "CopySettings",
]
