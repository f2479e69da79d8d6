"""Log-format presets: static format-description and date-format strings by preset."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Union


class LogFormat(Enum):
    """Known log-format presets. Declaration order is the match priority."""

    COMMON = 0
    VCOMMON = 1
    COMBINED = 2
    VCOMBINED = 3
    W3C = 4
    CLOUDFRONT = 5


@dataclass(frozen=True)
class FormatPreset:
    """One row of the preset table."""

    name: str  # Preset key as typed on the command line (e.g. "COMBINED")
    label: str  # Human-readable description for listings
    format: str
    date_format: str


# Date formats
APACHE_DATE = "%d/%b/%Y"
W3C_DATE = "%Y-%m-%d"
CLOUDFRONT_DATE = "%Y-%m-%d"

# CloudFront fields are separated by a literal backslash-t sequence, not a TAB
_PRESETS: dict[LogFormat, FormatPreset] = {
    LogFormat.COMMON: FormatPreset(
        "COMMON",
        "Common Log Format (CLF)",
        '%h %^[%d:%^] "%r" %s %b "%R" "%u"',
        APACHE_DATE,
    ),
    LogFormat.VCOMMON: FormatPreset(
        "VCOMMON",
        "Common Log Format (CLF) with Virtual Host",
        '%h %^[%d:%^] "%r" %s %b',
        APACHE_DATE,
    ),
    LogFormat.COMBINED: FormatPreset(
        "COMBINED",
        "NCSA Combined Log Format",
        '%^:%^ %h %^[%d:%^] "%r" %s %b "%R" "%u"',
        APACHE_DATE,
    ),
    LogFormat.VCOMBINED: FormatPreset(
        "VCOMBINED",
        "NCSA Combined Log Format with Virtual Host",
        '%^:%^ %h %^[%d:%^] "%r" %s %b',
        APACHE_DATE,
    ),
    LogFormat.W3C: FormatPreset(
        "W3C",
        "W3C",
        "%d %^ %h %^ %^ %^ %^ %r %^ %s %b %^ %^ %u %R",
        W3C_DATE,
    ),
    LogFormat.CLOUDFRONT: FormatPreset(
        "CLOUDFRONT",
        "CloudFront (Download Distribution)",
        "%d\\t%^\\t%^\\t%b\\t%h\\t%m\\t%^\\t%r\\t%s\\t%R\\t%u\\t%^",
        CLOUDFRONT_DATE,
    ),
}

PRESETS: Mapping[LogFormat, FormatPreset] = MappingProxyType(_PRESETS)

PresetKey = Union[LogFormat, int]


def _as_preset(preset: PresetKey | None) -> Optional[LogFormat]:
    """Accept a LogFormat or its integer index; None if out of range."""
    if isinstance(preset, LogFormat):
        return preset
    if isinstance(preset, bool) or not isinstance(preset, int):
        return None
    try:
        return LogFormat(preset)
    except ValueError:
        return None


def iter_presets() -> Iterator[tuple[LogFormat, FormatPreset]]:
    """Yield (preset, record) pairs in match-priority order."""
    for fmt in LogFormat:
        yield fmt, PRESETS[fmt]


def lookup_preset_by_string(value: str | None) -> Optional[LogFormat]:
    """
    Return the preset whose format string equals value exactly, or None.

    No partial or case-insensitive matching; presets are tried in priority order.
    """
    if value is None:
        return None
    for fmt, preset in iter_presets():
        if value == preset.format:
            return fmt
    return None


def preset_by_name(name: str | None) -> Optional[LogFormat]:
    """Case-insensitive lookup by preset name (e.g. 'combined', 'W3C')."""
    if not name:
        return None
    try:
        return LogFormat[name.strip().upper()]
    except KeyError:
        return None


def format_string_of(preset: PresetKey | None) -> Optional[str]:
    """Format-description string for preset (enum or index); None if out of range."""
    fmt = _as_preset(preset)
    if fmt is None:
        return None
    return PRESETS[fmt].format


def date_format_of(preset: PresetKey | None) -> Optional[str]:
    """Date-format string matching preset (enum or index); None if out of range."""
    fmt = _as_preset(preset)
    if fmt is None:
        return None
    return PRESETS[fmt].date_format


def resolve_log_format(value: str) -> tuple[str, Optional[str]]:
    """
    Turn a log-format option value into (format, date_format).

    A preset name expands to the preset's strings. A literal preset format string
    keeps its text and picks up the preset's date format. Any other (custom) format
    is returned as given with date_format None; the caller must supply one.
    """
    fmt = preset_by_name(value)
    if fmt is None:
        fmt = lookup_preset_by_string(value)
    if fmt is None:
        return value, None
    return PRESETS[fmt].format, PRESETS[fmt].date_format
