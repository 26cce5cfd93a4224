# backend/tests/test_formatting.py

from datetime import datetime, timezone

import pytest

from app.utils.formatting import (
    format_distance_to_now,
    format_locale_date,
    format_price,
)

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)
NOW_MS = int(NOW.timestamp() * 1000)
MINUTE_MS = 60 * 1000


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("100", "100"),
        ("100.0", "100"),
        ("1234.50", "1,234.5"),
        ("1000000", "1,000,000"),
        ("0.123456", "0.1235"),
        ("0", "0"),
    ],
)
def test_format_price(raw, expected):
    assert format_price(raw) == expected


def test_format_price_keeps_non_numeric_text():
    assert format_price("abc") == "abc"


@pytest.mark.parametrize(
    "offset_minutes, expected",
    [
        (0, "less than a minute"),
        (1, "1 minute"),
        (30, "30 minutes"),
        (60, "about 1 hour"),
        (120, "about 2 hours"),
        (60 * 24, "1 day"),
        (60 * 24 * 3, "3 days"),
        (60 * 24 * 45, "about 2 months"),
        (60 * 24 * 150, "5 months"),
    ],
)
def test_format_distance_to_now(offset_minutes, expected):
    timestamp = NOW_MS + offset_minutes * MINUTE_MS

    assert format_distance_to_now(timestamp, now=NOW) == expected


def test_format_distance_to_now_is_direction_agnostic():
    future = NOW_MS + 120 * MINUTE_MS
    past = NOW_MS - 120 * MINUTE_MS

    assert format_distance_to_now(future, now=NOW) == format_distance_to_now(past, now=NOW)


def test_format_distance_to_now_years():
    one_year_later = datetime(2027, 11, 1, 12, 0, 0, tzinfo=timezone.utc)
    two_and_half_years_later = datetime(2029, 4, 19, 12, 0, 0, tzinfo=timezone.utc)

    assert format_distance_to_now(int(one_year_later.timestamp() * 1000), now=NOW) == "about 1 year"
    assert (
        format_distance_to_now(int(two_and_half_years_later.timestamp() * 1000), now=NOW)
        == "over 2 years"
    )


def test_format_locale_date():
    assert format_locale_date(datetime(2026, 1, 5, tzinfo=timezone.utc)) == "1/5/2026"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1000000000000000000000000", "1,000,000,000,000,000,000,000,000"),
        (
            "1234567890123456789012345678901234567890.123456",
            "1,234,567,890,123,456,789,012,345,678,901,234,567,890.1235",
        ),
    ],
)
def test_format_price_handles_more_digits_than_default_precision(raw, expected):
    # 18 桁小数のベース単位で送られてくる価格でも落ちないこと
    assert format_price(raw) == expected


@pytest.mark.parametrize("timestamp", [300_000_000_000_000, -300_000_000_000_000])
def test_format_distance_to_now_beyond_datetime_range(timestamp):
    text = format_distance_to_now(timestamp, now=NOW)

    assert text.split()[0] in ("about", "over", "almost")
    assert text.endswith(" years")


def test_format_distance_to_now_beyond_datetime_range_uses_whole_months():
    # 1 か月 = 30 日の概算で 10000 年 + 6 か月 -> "over 10000 years"
    months = 10000 * 12 + 6
    timestamp = NOW_MS + months * 30 * 24 * 60 * MINUTE_MS

    assert format_distance_to_now(timestamp, now=NOW) == "over 10000 years"
