"""Validation and application of a user-entered system date and time."""

from __future__ import annotations

import re
import subprocess
import sys
import time
from datetime import date, datetime, timedelta

_TWO_DIGITS = re.compile(r"[0-9]{1,2}")

YEAR_OUT_OF_RANGE = "输入年份超范围！"
BAD_TIME_FORMAT = "输入时间格式不正确！"


class TimeInputError(ValueError):
    """The entered date or time is not acceptable."""


def _to_int(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        return 0


def validate_date(text: str) -> tuple[int, int, int] | None:
    """Check a "year-month-day" entry; return its parts, or None when it gives no full date."""
    if not text:
        return None
    parts = text.split("-")
    year = _to_int(parts[0])
    if year < 1970 or year >= 2038:
        raise TimeInputError(YEAR_OUT_OF_RANGE)
    if len(parts) != 3:
        return None
    return year, _to_int(parts[1]), _to_int(parts[2])


def validate_time(text: str) -> tuple[int, int, int] | None:
    """Check an "hh:mm:ss" entry; return its parts, or None when empty."""
    if not text:
        return None
    parts = text.split(":")
    if len(parts) != 3 or not all(_TWO_DIGITS.fullmatch(p) for p in parts):
        raise TimeInputError(BAD_TIME_FORMAT)
    hour, minute, second = (int(p) for p in parts)
    if hour > 23 or minute > 59 or second > 59:
        raise TimeInputError(BAD_TIME_FORMAT)
    return hour, minute, second


def format_calendar_date(day: date) -> str:
    """Format a date picked from the calendar as it is put into the date field."""
    return f"{day.year}-{day.month:02d}-{day.day:02d}"


def _normalised_date(year: int, month: int, day: int) -> date:
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return date(year, month, 1) + timedelta(days=day - 1)


def build_datetime(day_text: str, time_text: str, now: datetime | None = None) -> datetime:
    """Combine the entries with the current time; unset fields keep their current values."""
    current = (now or datetime.now()).replace(microsecond=0)
    day_parts = validate_date(day_text)
    time_parts = validate_time(time_text)
    if time_parts is not None:
        hour, minute, second = time_parts
        current = current.replace(hour=hour, minute=minute, second=second)
    if day_parts is not None:
        new_day = _normalised_date(*day_parts)
        current = current.replace(year=new_day.year, month=new_day.month, day=new_day.day)
    return current


def set_system_time(day_text: str, time_text: str, now: datetime | None = None) -> datetime:
    """Validate the entries and, on Linux, set the system clock and hardware clock."""
    target = build_datetime(day_text, time_text, now)
    if sys.platform.startswith("linux"):
        time.clock_settime(getattr(time, "CLOCK_REALTIME", 0), target.timestamp())
        subprocess.run(["hwclock", "-w"], check=False)
    return target