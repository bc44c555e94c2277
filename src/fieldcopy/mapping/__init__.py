"""Mapping entry points: copy, copy_as and their errors."""

from fieldcopy.mapping.copier import (
    CopyDepthError,
    CopyError,
    UnaddressableDestinationError,
    copy,
    copy_as,
)

__all__ = [
    "copy",
    "copy_as",
    "CopyError",
    "CopyDepthError",
    "UnaddressableDestinationError",
]
