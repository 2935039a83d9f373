from datetime import datetime, date, time, timezone
from typing import Optional

from dateutil.relativedelta import relativedelta


def to_utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    # une date simple devient minuit UTC
    return datetime.combine(value, time.min)


def add_months(instant: datetime, months: int) -> datetime:
    """Arithmétique calendaire : le 31/01 + 1 mois donne le dernier jour de février"""
    return instant + relativedelta(months=months)


def start_of_day(instant: datetime) -> datetime:
    return datetime.combine(instant.date(), time.min)


def calendar_days_between(start: datetime, end: datetime) -> int:
    return (start_of_day(end) - start_of_day(start)).days


def whole_months_between(start: datetime, end: datetime) -> int:
    delta = relativedelta(end, start)
    return delta.years * 12 + delta.months


def format_short_date(value: Optional[date]) -> Optional[str]:
    if not value:
        return None

    return value.strftime("%m/%d/%y")
