from datetime import datetime, date, timedelta
from typing import Iterable, List, Optional, Union

import pytz

from mentorme.config import config


def now() -> datetime:
    """Current wall-clock time in the configured timezone, without tzinfo"""
    tz = config.tzinfo
    if tz is None:
        return datetime.now()
    return datetime.now(tz).replace(tzinfo=None)


def today() -> date:
    return now().date()


def start_of_week(day: date) -> date:
    """Monday of the week containing day"""
    return day - timedelta(days=day.weekday())


def days_between(start: Union[datetime, date], end: Union[datetime, date]) -> int:
    """Calendar days from start to end, ignoring time of day"""
    if isinstance(start, datetime):
        start = start.date()
    if isinstance(end, datetime):
        end = end.date()
    return (end - start).days


def parse_datetime(value: Union[str, int, float, datetime]) -> datetime:
    """Parse ISO-8601 strings or epoch milliseconds into a naive local datetime"""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        parsed = datetime.fromtimestamp(value / 1000, tz=pytz.utc)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    else:
        raise TypeError(f"Cannot parse datetime from {type(value).__name__}")

    if parsed.tzinfo is not None:
        tz = config.tzinfo
        if tz is None:
            parsed = parsed.astimezone()
        else:
            parsed = parsed.astimezone(tz)
        parsed = parsed.replace(tzinfo=None)
    return parsed


def parse_optional_datetime(value) -> Optional[datetime]:
    if value is None:
        return None
    return parse_datetime(value)


def to_iso(dt: datetime) -> str:
    return dt.isoformat()


def to_optional_iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt is not None else None


def format_time_12h(hour: int, minute: int) -> str:
    """Format as '3:05 PM'"""
    display_hour = hour - 12 if hour > 12 else (12 if hour == 0 else hour)
    period = "PM" if hour >= 12 else "AM"
    return f"{display_hour}:{minute:02d} {period}"


def consecutive_day_runs(days: Iterable[date]) -> List[int]:
    """Lengths of runs of consecutive calendar days, oldest run first"""
    runs: List[int] = []
    previous = None
    for day in sorted(set(days)):
        if previous is not None and (day - previous).days == 1:
            runs[-1] += 1
        else:
            runs.append(1)
        previous = day
    return runs
