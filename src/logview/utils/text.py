"""String helpers shared by the config loader."""

from __future__ import annotations

# Characters that separate a config key from its value
KEY_SEPARATORS = " \t"


def trim(value: str) -> str:
    """Strip leading and trailing whitespace (spaces, tabs, CR/LF)."""
    return value.strip()


def normalize_key(key: str) -> str:
    """
    Replace every underscore with a dash so old-style keys (e.g. color_scheme)
    map to the long option name (color-scheme). Idempotent.
    """
    return key.replace("_", "-")


def split_key(line: str) -> tuple[str, str] | None:
    """
    Split line at the first space or tab. Returns (key, remainder) where the
    remainder starts right after that separator, or None if the line has none.
    """
    for idx, ch in enumerate(line):
        if ch in KEY_SEPARATORS:
            return line[:idx], line[idx + 1 :]
    return None
