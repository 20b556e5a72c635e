import re
from typing import Tuple

_CLOCK_RE = re.compile(r"(\d{1,2}):(\d{2})\s*(AM|PM)", re.IGNORECASE)


class TimeParseError(ValueError):
    pass


def parse_time_to_minutes(raw) -> int:
    """
    "9:05 AM" -> 545, "12:00 PM" -> 720, "12:30 AM" -> 30
    """
    text = str(raw or "").strip().upper()
    if not text:
        raise TimeParseError("empty time")

    m = _CLOCK_RE.search(text)
    if not m:
        raise TimeParseError(f"unrecognized time: {raw!r}")

    hour, minute, period = int(m.group(1)), int(m.group(2)), m.group(3)
    if hour > 12 or minute > 59:
        raise TimeParseError(f"time out of range: {raw!r}")

    if period == "PM" and hour != 12:
        hour += 12
    if period == "AM" and hour == 12:
        hour = 0
    return hour * 60 + minute


def parse_schedule_range(raw) -> Tuple[int, int]:
    """
    "7:30 AM-9:00 AM" -> (450, 540)
    """
    parts = str(raw or "").strip().split("-")
    if len(parts) < 2:
        raise TimeParseError(f"schedule is not a range: {raw!r}")
    return parse_time_to_minutes(parts[0]), parse_time_to_minutes(parts[1])


def format_minutes(minutes: int) -> str:
    h24, mins = divmod(minutes, 60)
    period = "PM" if h24 >= 12 else "AM"
    h12 = 12 if h24 % 12 == 0 else h24 % 12
    return f"{h12}:{mins:02d} {period}"


def format_hour_range(start: int, end: int) -> str:
    return f"{format_minutes(start)} - {format_minutes(end)}"
