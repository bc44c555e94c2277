"""Configuration module using Pydantic Settings.

Usage:
    from fieldcopy.config import CopySettings

    settings = CopySettings(max_depth=16)
"""

from fieldcopy.config.settings import CopySettings

__all__ = [
    "CopySettings",
]
