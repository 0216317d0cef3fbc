"""Date manipulation utilities"""

import calendar
from datetime import date, datetime, timedelta
from typing import Optional


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp from the backend ("Z" suffix allowed)"""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def shift_months(from_date: date, months: int) -> date:
    """Move a date by whole months, clamping to the last day of the target month"""
    month_index = from_date.month - 1 + months
    year = from_date.year + month_index // 12
    month = month_index % 12 + 1
    day = min(from_date.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def range_start(range_name: str, today: date) -> Optional[date]:
    """
    First day included by a named date-range filter.

    "today" | "week" | "month" | "quarter" | "year"; anything else means no bound.
    """
    if range_name == "today":
        return today
    if range_name == "week":
        return today - timedelta(days=7)
    if range_name == "month":
        return shift_months(today, -1)
    if range_name == "quarter":
        return shift_months(today, -3)
    if range_name == "year":
        return shift_months(today, -12)
    return None
