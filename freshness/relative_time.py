"""
Coarse relative durations for badge messages.

``humanize_elapsed(updated_at, now)`` turns the gap between two instants into
phrases like "a day", "3 months" or "2 years", with no "ago"/"in" framing.

The gap is measured the calendar-aware way: whole calendar months first,
then the remainder as an exact duration. Each unit is then read off that
pair and rounded half up, and the first matching rung of the ladder wins:

    seconds < 45      "a few seconds"
    minutes <= 1      "a minute"
    minutes < 45      "N minutes"
    hours <= 1        "an hour"
    hours < 22        "N hours"
    days <= 1         "a day"
    days < 26         "N days"
    months <= 1       "a month"
    months < 11       "N months"
    years <= 1        "a year"
    otherwise         "N years"

Badge consumers see this output verbatim, so the ladder is frozen.
"""

import calendar
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from freshness.constants import (
    DAYS_PER_400_YEARS,
    DAYS_THRESHOLD,
    HOURS_THRESHOLD,
    MINUTES_THRESHOLD,
    MONTHS_PER_400_YEARS,
    MONTHS_THRESHOLD,
    RELATIVE_TIME_PHRASES,
    SECONDS_THRESHOLD,
)

SECONDS_PER_DAY = 86400


def _round(value: float) -> int:
    """Round half up; Python's round() is banker's rounding."""
    return int(math.floor(value + 0.5))


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def add_months(value: datetime, months: int) -> datetime:
    """Shift by calendar months, clamping the day to the target month's length."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


@dataclass(frozen=True)
class CalendarSpan:
    """Whole calendar months plus an exact remainder."""

    months: int
    remainder: timedelta

    @classmethod
    def between(cls, start: datetime, end: datetime) -> "CalendarSpan":
        start = _as_utc(start)
        end = _as_utc(end)
        if start >= end:
            return cls(months=0, remainder=timedelta(0))

        months = (end.year - start.year) * 12 + (end.month - start.month)
        if add_months(start, months) > end:
            months -= 1
        return cls(months=months, remainder=end - add_months(start, months))

    @property
    def total_seconds(self) -> float:
        # Months collapse to a whole number of days before the remainder is added
        month_days = _round(self.months * DAYS_PER_400_YEARS / MONTHS_PER_400_YEARS)
        return month_days * SECONDS_PER_DAY + self.remainder.total_seconds()

    @property
    def total_months(self) -> float:
        remainder_days = self.remainder.total_seconds() / SECONDS_PER_DAY
        return self.months + remainder_days * MONTHS_PER_400_YEARS / DAYS_PER_400_YEARS

    def as_seconds(self) -> int:
        return _round(self.total_seconds)

    def as_minutes(self) -> int:
        return _round(self.total_seconds / 60)

    def as_hours(self) -> int:
        return _round(self.total_seconds / 3600)

    def as_days(self) -> int:
        return _round(self.total_seconds / SECONDS_PER_DAY)

    def as_months(self) -> int:
        return _round(self.total_months)

    def as_years(self) -> int:
        return _round(self.total_months / 12)


def _phrase(key: str, value: int | None = None) -> str:
    return RELATIVE_TIME_PHRASES[key].format(value)


def humanize_span(span: CalendarSpan) -> str:
    """Render a span using the ladder documented at module level."""
    seconds = span.as_seconds()
    if seconds < SECONDS_THRESHOLD:
        return _phrase("s")

    minutes = span.as_minutes()
    if minutes <= 1:
        return _phrase("m")
    if minutes < MINUTES_THRESHOLD:
        return _phrase("mm", minutes)

    hours = span.as_hours()
    if hours <= 1:
        return _phrase("h")
    if hours < HOURS_THRESHOLD:
        return _phrase("hh", hours)

    days = span.as_days()
    if days <= 1:
        return _phrase("d")
    if days < DAYS_THRESHOLD:
        return _phrase("dd", days)

    months = span.as_months()
    if months <= 1:
        return _phrase("M")
    if months < MONTHS_THRESHOLD:
        return _phrase("MM", months)

    years = span.as_years()
    if years <= 1:
        return _phrase("y")
    return _phrase("yy", years)


def humanize_elapsed(updated_at: datetime, now: datetime) -> str:
    """
    Describe how long ago ``updated_at`` was, relative to ``now``.

    Naive datetimes are taken as UTC. A timestamp in the future (clock skew)
    counts as zero elapsed time.
    """
    return humanize_span(CalendarSpan.between(updated_at, now))


__all__ = ["CalendarSpan", "add_months", "humanize_elapsed", "humanize_span"]
