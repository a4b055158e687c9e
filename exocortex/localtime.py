"""Calendar and timezone helpers.

Every day-boundary computation takes an explicit tzinfo. Day arithmetic is
done on calendar dates and localized afterwards, so a DST day is 23 or 25
hours long rather than a fixed 24.
"""

from collections.abc import Iterator
from datetime import date, datetime, timedelta, tzinfo

from dateutil.relativedelta import relativedelta

MS_PER_MINUTE = 60_000
MS_PER_HOUR = 60 * MS_PER_MINUTE

DATE_KEY_FORMAT = "%Y-%m-%d"


def to_datetime(ms: int, tz: tzinfo) -> datetime:
    return datetime.fromtimestamp(ms / 1000, tz=tz)


def to_ms(dt: datetime) -> int:
    if dt.tzinfo is None:
        raise ValueError("naive datetime has no defined epoch; attach a tzinfo first")
    return round(dt.timestamp() * 1000)


def local_date(ms: int, tz: tzinfo) -> date:
    return to_datetime(ms, tz).date()


def date_key(ms: int, tz: tzinfo) -> str:
    """Canonical YYYY-MM-DD key of the local calendar day containing `ms`."""
    return local_date(ms, tz).strftime(DATE_KEY_FORMAT)


def start_of_day(day: date, tz: tzinfo) -> int:
    """Local midnight of `day`, epoch ms."""
    return to_ms(datetime(day.year, day.month, day.day, tzinfo=tz))


def day_bounds(day: date, tz: tzinfo) -> tuple[int, int]:
    """Half-open [midnight, next midnight) of `day`, epoch ms."""
    return start_of_day(day, tz), start_of_day(day + timedelta(days=1), tz)


def add_days(day: date, n: int) -> date:
    return day + timedelta(days=n)


def add_months(day: date, n: int) -> date:
    """Calendar month arithmetic; Jan 31 + 1 month = Feb 28/29."""
    return day + relativedelta(months=n)


def add_years(day: date, n: int) -> date:
    """Calendar year arithmetic; Feb 29 + 1 year = Feb 28."""
    return day + relativedelta(years=n)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every calendar date from start to end, inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
