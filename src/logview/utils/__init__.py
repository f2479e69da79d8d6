"""Shared utilities: string trimming and option-key normalization."""

from logview.utils.text import normalize_key, trim

__all__ = [
    "normalize_key",
    "trim",
]
