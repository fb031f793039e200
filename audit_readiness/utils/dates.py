"""Date-window helpers used by the locators and the score cache."""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta

from audit_readiness.models.enums import Timeframe


def months_ago(moment: datetime, months: int) -> datetime:
    """Same wall-clock instant ``months`` calendar months earlier (day clamped)."""
    month_index = moment.month - 1 - months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def timeframe_cutoff(timeframe: Timeframe, now: datetime) -> datetime:
    """Earliest creation time still inside a named window."""
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    match timeframe:
        case Timeframe.LAST_12_MONTHS:
            return months_ago(now, 12)
        case Timeframe.LAST_6_MONTHS:
            return months_ago(now, 6)
        case Timeframe.LAST_3_MONTHS:
            return months_ago(now, 3)
        case Timeframe.CURRENT_QUARTER:
            first_month = 3 * ((now.month - 1) // 3) + 1
            return start_of_day.replace(month=first_month, day=1)
        case Timeframe.CURRENT_YEAR:
            return start_of_day.replace(month=1, day=1)
    return datetime.min.replace(tzinfo=now.tzinfo)


def lookback_cutoff(days: int, now: datetime) -> datetime:
    return now - timedelta(days=days)


def end_of_day(moment: datetime) -> datetime:
    """Last representable instant of ``moment``'s calendar day, same tzinfo."""
    return datetime.combine(moment.date(), time.max, tzinfo=moment.tzinfo)


def add_days(day: date, days: int) -> date:
    return day + timedelta(days=days)
