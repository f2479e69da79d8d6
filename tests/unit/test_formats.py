"""Unit tests for log-format presets (lookups by string, name and index)."""

from __future__ import annotations

import pytest

from logview.formats import (
    APACHE_DATE,
    PRESETS,
    LogFormat,
    date_format_of,
    format_string_of,
    iter_presets,
    lookup_preset_by_string,
    preset_by_name,
    resolve_log_format,
)

COMMON = '%h %^[%d:%^] "%r" %s %b "%R" "%u"'


def test_common_string_resolves_to_common() -> None:
    preset = lookup_preset_by_string(COMMON)
    assert preset is LogFormat.COMMON
    assert date_format_of(preset) == "%d/%b/%Y"


@pytest.mark.parametrize("preset", list(LogFormat))
def test_round_trip_by_string(preset: LogFormat) -> None:
    assert lookup_preset_by_string(format_string_of(preset)) is preset


def test_lookup_none_and_unknown() -> None:
    assert lookup_preset_by_string(None) is None
    assert lookup_preset_by_string("") is None
    assert lookup_preset_by_string("%h %r") is None


def test_lookup_is_exact() -> None:
    """No partial, whitespace-tolerant or case-insensitive matches."""
    assert lookup_preset_by_string(COMMON + " ") is None
    assert lookup_preset_by_string(COMMON[:-4]) is None
    assert lookup_preset_by_string(format_string_of(LogFormat.W3C).upper()) is None


def test_apache_date_shared_by_four_presets() -> None:
    apache = [p for p in LogFormat if date_format_of(p) == APACHE_DATE]
    assert apache == [LogFormat.COMMON, LogFormat.VCOMMON, LogFormat.COMBINED, LogFormat.VCOMBINED]
    assert date_format_of(LogFormat.W3C) == "%Y-%m-%d"
    assert date_format_of(LogFormat.CLOUDFRONT) == "%Y-%m-%d"
    assert date_format_of(LogFormat.W3C) != APACHE_DATE
    assert date_format_of(LogFormat.CLOUDFRONT) != APACHE_DATE


def test_lookups_by_index() -> None:
    assert format_string_of(0) == COMMON
    assert date_format_of(4) == "%Y-%m-%d"


@pytest.mark.parametrize("bad", [-1, 6, 100, None, "0", True])
def test_out_of_range_returns_none(bad: object) -> None:
    assert format_string_of(bad) is None
    assert date_format_of(bad) is None


def test_cloudfront_uses_literal_backslash_t() -> None:
    fmt = format_string_of(LogFormat.CLOUDFRONT)
    assert "\t" not in fmt
    assert fmt.startswith("%d\\t%^")


def test_iter_presets_priority_order() -> None:
    names = [preset.name for _, preset in iter_presets()]
    assert names == ["COMMON", "VCOMMON", "COMBINED", "VCOMBINED", "W3C", "CLOUDFRONT"]


def test_registry_is_read_only() -> None:
    with pytest.raises(TypeError):
        PRESETS[LogFormat.COMMON] = PRESETS[LogFormat.W3C]  # type: ignore[index]
    with pytest.raises(AttributeError):
        PRESETS[LogFormat.COMMON].format = "x"  # type: ignore[misc]


def test_preset_by_name_case_insensitive() -> None:
    assert preset_by_name("combined") is LogFormat.COMBINED
    assert preset_by_name(" W3C ") is LogFormat.W3C
    assert preset_by_name("apache") is None
    assert preset_by_name(None) is None


def test_resolve_log_format_by_name() -> None:
    assert resolve_log_format("cloudfront") == (
        format_string_of(LogFormat.CLOUDFRONT),
        "%Y-%m-%d",
    )


def test_resolve_log_format_by_string() -> None:
    assert resolve_log_format(COMMON) == (COMMON, APACHE_DATE)


def test_resolve_log_format_custom() -> None:
    assert resolve_log_format("%h %r %s") == ("%h %r %s", None)
