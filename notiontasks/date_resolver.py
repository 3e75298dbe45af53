import datetime
from typing import Optional
from pydantic import BaseModel

from .constants import MONTH_NAMES, WEEKDAY_NAMES

REMINDER_HOUR = 23


class DateDetails(BaseModel):
    year: int
    month: str
    week: int
    day: str


def week_of_month(day_of_month: int) -> int:
    """ceil(day / 7): days 1-7 are week 1, 29-31 fall into week 5."""
    return (day_of_month + 6) // 7


def get_current_date_details(now: Optional[datetime.datetime] = None) -> DateDetails:
    """
    Break the current local date into the parts used to address the workspace hierarchy.

    :param now: Instant to resolve, defaults to the current local time
    """
    now = now or datetime.datetime.now()
    return DateDetails(
        year=now.year,
        month=MONTH_NAMES[now.month - 1],
        week=week_of_month(now.day),
        day=WEEKDAY_NAMES[now.weekday()],
    )


def reminder_time(now: Optional[datetime.datetime] = None, hour: int = REMINDER_HOUR) -> str:
    """
    Return `hour`:00:00 local time on the date of `now` as an ISO 8601 UTC string with
    millisecond precision, e.g. "2024-10-15T21:00:00.000Z" for a UTC+2 machine.
    """
    now = now or datetime.datetime.now()
    if now.tzinfo is None:
        # astimezone() on a naive value picks the local offset in effect at that wall time
        local = datetime.datetime(now.year, now.month, now.day, hour).astimezone()
    else:
        local = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    utc = local.astimezone(datetime.timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"
