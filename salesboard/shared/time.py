from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Optional, Tuple
from zoneinfo import ZoneInfo

from salesboard.core.errors import ValidationError

PERIOD_TODAY = "today"
PERIOD_WEEK = "week"
PERIOD_MONTH = "month"
PERIOD_QUARTER = "quarter"
PERIOD_YEAR = "year"
PERIOD_PAY_PERIOD = "pay-period"
PERIOD_PREV_PAY_PERIOD = "prev-pay-period"
PERIOD_CUSTOM = "custom"

PERIOD_TOKENS = frozenset(
    {
        PERIOD_TODAY,
        PERIOD_WEEK,
        PERIOD_MONTH,
        PERIOD_QUARTER,
        PERIOD_YEAR,
        PERIOD_PAY_PERIOD,
        PERIOD_PREV_PAY_PERIOD,
        PERIOD_CUSTOM,
    }
)
DEFAULT_PERIOD = PERIOD_PAY_PERIOD

ONE_MILLISECOND = timedelta(milliseconds=1)
END_OF_DAY = time(23, 59, 59, 999000)


@dataclass(frozen=True)
class DateRange:
    """Inclusive start; ``end`` of None means "through now"."""

    start: datetime
    end: Optional[datetime] = None

    def contains(self, moment: datetime) -> bool:
        if moment < self.start:
            return False
        return self.end is None or moment <= self.end


def reference_now(settings: Any) -> datetime:
    tz = ZoneInfo(settings.reporting_timezone)
    pinned = settings.reporting_reference_date
    if pinned is None:
        return datetime.now(tz)
    if pinned.tzinfo is None:
        return pinned.replace(tzinfo=tz)
    return pinned.astimezone(tz)


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(value: datetime) -> datetime:
    return value.replace(hour=23, minute=59, second=59, microsecond=999000)


def day_bounds(day: date, tz: Optional[tzinfo]) -> DateRange:
    return DateRange(
        start=datetime.combine(day, time.min, tzinfo=tz),
        end=datetime.combine(day, END_OF_DAY, tzinfo=tz),
    )


def shift_months(value: datetime, months: int) -> datetime:
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def shift_years(value: datetime, years: int) -> datetime:
    year = value.year + years
    day = min(value.day, calendar.monthrange(year, value.month)[1])
    return value.replace(year=year, day=day)


def month_start(value: datetime, months: int = 0) -> datetime:
    first = start_of_day(value.replace(day=1))
    return shift_months(first, months)


def pay_period_bounds(value: date) -> Tuple[date, date]:
    last_day = calendar.monthrange(value.year, value.month)[1]
    return date(value.year, value.month, 1), date(value.year, value.month, last_day)


def normalize_period(token: Optional[str]) -> str:
    period = (token or "").strip().lower()
    if period in PERIOD_TOKENS:
        return period
    return DEFAULT_PERIOD


def resolve_period(
    token: Optional[str],
    now: datetime,
    normalize_to_midnight: bool = False,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
) -> DateRange:
    period = normalize_period(token)
    if period == PERIOD_CUSTOM:
        return _resolve_custom_range(custom_start, custom_end, now.tzinfo)

    if period == PERIOD_TODAY:
        start = start_of_day(now)
    elif period == PERIOD_WEEK:
        start = now - timedelta(days=7)
    elif period == PERIOD_MONTH:
        start = shift_months(now, -1)
    elif period == PERIOD_QUARTER:
        start = shift_months(now, -3)
    elif period == PERIOD_YEAR:
        start = shift_years(now, -1)
    elif period == PERIOD_PREV_PAY_PERIOD:
        current_pay_period_start = month_start(now)
        return DateRange(
            start=month_start(now, -1),
            end=end_of_day(current_pay_period_start - timedelta(days=1)),
        )
    else:
        return DateRange(start=month_start(now))

    if normalize_to_midnight:
        start = start_of_day(start)
    return DateRange(start=start)


def resolve_previous_period(
    token: Optional[str],
    now: datetime,
    normalize_to_midnight: bool = False,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
) -> DateRange:
    period = normalize_period(token)
    current = resolve_period(
        period,
        now,
        normalize_to_midnight=normalize_to_midnight,
        custom_start=custom_start,
        custom_end=custom_end,
    )
    previous_end = current.start - ONE_MILLISECOND

    if period == PERIOD_TODAY:
        day_before = current.start - timedelta(days=1)
        return DateRange(start=start_of_day(day_before), end=end_of_day(day_before))
    if period == PERIOD_CUSTOM and current.end is not None:
        span = current.end - current.start + ONE_MILLISECOND
        return DateRange(start=current.start - span, end=previous_end)

    if period == PERIOD_WEEK:
        previous_start = current.start - timedelta(days=7)
    elif period == PERIOD_MONTH:
        previous_start = shift_months(current.start, -1)
    elif period == PERIOD_QUARTER:
        previous_start = shift_months(current.start, -3)
    elif period == PERIOD_YEAR:
        previous_start = shift_years(current.start, -1)
    elif period == PERIOD_PREV_PAY_PERIOD:
        previous_start = month_start(now, -2)
    else:
        previous_start = month_start(now, -1)
    return DateRange(start=previous_start, end=previous_end)


def _resolve_custom_range(
    custom_start: Optional[date], custom_end: Optional[date], tz: Optional[tzinfo]
) -> DateRange:
    if custom_start is None or custom_end is None:
        raise ValidationError("start_date and end_date are required for a custom range")
    if custom_end < custom_start:
        raise ValidationError("end_date must not be before start_date")
    return DateRange(
        start=datetime.combine(custom_start, time.min, tzinfo=tz),
        end=datetime.combine(custom_end, END_OF_DAY, tzinfo=tz),
    )
