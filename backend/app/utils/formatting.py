# backend/app/utils/formatting.py

"""
通知メッセージ用の表示フォーマッタ群。

- 価格（10進文字列）→ 桁区切り付きの表示用文字列
- エポックミリ秒 → 「about 2 hours」のような相対時間表現
- 日付 → en-US ロケール相当の M/D/YYYY
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal, DecimalException, InvalidOperation, localcontext
from typing import Optional

PRICE_MAX_FRACTION_DIGITS = 4

MINUTES_IN_DAY = 1440
MINUTES_IN_ALMOST_TWO_DAYS = 2520
MINUTES_IN_MONTH = 43200
MINUTES_IN_TWO_MONTHS = 86400

MS_IN_MINUTE = 60 * 1000

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def format_price(price: str) -> str:
    """
    10進数の価格文字列を表示用に整形する。

    "1234.50" -> "1,234.5", "100" -> "100"

    数値として解釈できない値はそのまま返す（表示を落とさないため）。
    """
    try:
        value = Decimal(price)
    except (InvalidOperation, TypeError, ValueError):
        return str(price)

    if not value.is_finite():
        return str(price)

    # 18 桁小数のベース単位など、既定精度（28桁）を超える整数部でも丸められるようにする
    integer_digits = max(value.adjusted() + 1, 1)
    try:
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, integer_digits + PRICE_MAX_FRACTION_DIGITS + 1)
            ctx.Emax = max(ctx.Emax, integer_digits + 1)
            quantum = Decimal(1).scaleb(-PRICE_MAX_FRACTION_DIGITS)
            rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)
    except DecimalException:
        rounded = value

    text = f"{rounded:,f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def _month_difference(earlier: datetime, later: datetime) -> int:
    """
    暦上の月差（端数切り捨て）を返す。
    """
    months = (later.year - earlier.year) * 12 + (later.month - earlier.month)
    # 月末・時刻まで見て、まだ1か月経っていない分を差し引く
    if (later.day, later.time()) < (earlier.day, earlier.time()):
        months -= 1
    return max(months, 0)


def _calendar_months(now: datetime, offset_ms: int, minutes: int) -> int:
    """
    now から offset_ms 離れた時刻までの暦上の月差を返す。

    datetime で表せない時刻の場合は 30 日 = 1 か月として概算する。
    """
    try:
        target = now + timedelta(milliseconds=offset_ms)
    except (OverflowError, ValueError):
        return minutes // MINUTES_IN_MONTH

    earlier, later = sorted((target, now))
    return _month_difference(earlier, later)


def _round_half_up(value: float) -> int:
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_distance_to_now(
    timestamp_ms: int,
    now: Optional[datetime] = None,
) -> str:
    """
    エポックミリ秒の時刻と現在時刻との距離を英語の相対表現で返す。

    過去・未来どちらの方向でも同じ表現になる（"in" / "ago" は付けない）。
    分・時間・日・月・年の境界は一般的な英語 UI の慣習に合わせている。

    :param timestamp_ms: 対象時刻（エポックミリ秒）
    :param now: 基準時刻。省略時は現在の UTC 時刻。
    """
    now = now or datetime.now(timezone.utc)
    now_ms = (now - EPOCH) // timedelta(milliseconds=1)

    # datetime の範囲（1〜9999年）外の時刻もあるので、距離はミリ秒差から求める
    distance_ms = abs(timestamp_ms - now_ms)
    minutes = (distance_ms + MS_IN_MINUTE // 2) // MS_IN_MINUTE

    if minutes < 2:
        return "less than a minute" if minutes == 0 else "1 minute"
    if minutes < 45:
        return _plural(minutes, "minute")
    if minutes < 90:
        return "about 1 hour"
    if minutes < MINUTES_IN_DAY:
        hours = _round_half_up(minutes / 60)
        return f"about {_plural(hours, 'hour')}"
    if minutes < MINUTES_IN_ALMOST_TWO_DAYS:
        return "1 day"
    if minutes < MINUTES_IN_MONTH:
        days = _round_half_up(minutes / MINUTES_IN_DAY)
        return _plural(days, "day")
    if minutes < MINUTES_IN_TWO_MONTHS:
        months = _round_half_up(minutes / MINUTES_IN_MONTH)
        return f"about {_plural(months, 'month')}"

    months = _calendar_months(now, timestamp_ms - now_ms, minutes)
    if months < 12:
        nearest_month = _round_half_up(minutes / MINUTES_IN_MONTH)
        return _plural(nearest_month, "month")

    months_since_start_of_year = months % 12
    years = months // 12
    if months_since_start_of_year < 3:
        return f"about {_plural(years, 'year')}"
    if months_since_start_of_year < 9:
        return f"over {_plural(years, 'year')}"
    return f"almost {_plural(years + 1, 'year')}"


def format_locale_date(now: Optional[datetime] = None) -> str:
    """
    en-US ロケールの日付表記（M/D/YYYY）を返す。
    """
    now = now or datetime.now(timezone.utc)
    return f"{now.month}/{now.day}/{now.year}"
