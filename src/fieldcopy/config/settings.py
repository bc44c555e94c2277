"""Configuration settings using Pydantic Settings.

Provides environment-driven defaults for copy calls.

Usage:
    from fieldcopy.config import CopySettings

    # Load from environment variables (FIELDCOPY_*)
    settings = CopySettings()

    # Or override with explicit values
    settings = CopySettings(max_depth=16)
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fieldcopy.core.options import DEFAULT_MAX_DEPTH, CopyOption, CopyOptions


class CopySettings(BaseSettings):  # type: ignore[misc]
    """Defaults applied to every copy call.

    Attributes:
        max_depth: Maximum nesting depth of recursive record copies.
        disable_scanner: Skip the `__scan__` fallback unless a call opts in.

    Environment Variables:
        FIELDCOPY_MAX_DEPTH
        FIELDCOPY_DISABLE_SCANNER
    """

    model_config = SettingsConfigDict(
        env_prefix="FIELDCOPY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=0)
    disable_scanner: bool = False

    def to_options(
        self, flags: tuple[CopyOption, ...] = (), max_depth: int | None = None
    ) -> CopyOptions:
        """Combine these defaults with call-site arguments.

        Args:
            flags: CopyOption flags given to the call.
            max_depth: Explicit recursion bound; overrides the setting.

        Returns:
            Option set for one copy call.
        """
        return CopyOptions.from_flags(
            flags,
            disable_scanner=self.disable_scanner,
            max_depth=self.max_depth if max_depth is None else max_depth,
        )
