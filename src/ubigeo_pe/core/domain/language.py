"""Language utilities for ubigeo-pe.

This module centralizes the language options supported for user-facing
status messages. Keeping it in the domain layer allows both CLI and service
layers to share a single source of truth without creating circular imports
with adapters.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported natural-language choices for user-facing output."""

    ENGLISH = "en"
    SPANISH = "es"

    @classmethod
    def default(cls) -> "Language":
        """Return the default language used across the application."""

        return cls.SPANISH

    def label(self) -> str:
        return "Español" if self is Language.SPANISH else "English"
