"""
Happy hour windows: day specs, wall-clock times, and whether a deal is on.

Stored deals carry free-text fields, e.g. ``valid_days="Mon-Fri"``,
``hh_start_time="1700"``, ``hh_end_time="20:00"``. Everything here works on
those strings as-is and fails closed: a window that cannot be parsed is never
reported as active.

Weekdays are indexed Monday=0 .. Sunday=6, the same as ``datetime.weekday()``.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo

log = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Asia/Singapore"

ACTIVE = "active"
UPCOMING = "upcoming"
INACTIVE = "inactive"

DAY_ABBRS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")
DAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

_DAY_LOOKUP = {name: i for names in (DAY_ABBRS, DAY_NAMES) for i, name in enumerate(names)}
_EVERY_DAY = {"daily", "all days", "everyday"}

_NUMERIC_TIME = re.compile(r"^\d{3,4}$")
_CLOCK_TIME = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")

MINUTES_PER_DAY = 24 * 60

Zone = str | tzinfo


@dataclass(frozen=True)
class TimeWindow:
    valid_days: str
    start_time: str
    end_time: str

    @classmethod
    def from_deal(cls, deal: dict) -> "TimeWindow":
        """Build a window from a stored deal record."""
        return cls(
            valid_days=deal.get("valid_days") or "",
            start_time=deal.get("hh_start_time") or "",
            end_time=deal.get("hh_end_time") or "",
        )


# --- clock ---
def _zone(tz: Zone) -> tzinfo:
    return ZoneInfo(tz) if isinstance(tz, str) else tz


def now_in(tz: Zone = DEFAULT_TIMEZONE) -> datetime:
    return datetime.now(_zone(tz))


def to_local(now: datetime, tz: Zone = DEFAULT_TIMEZONE) -> datetime:
    """Aware datetimes are converted to ``tz``; naive ones are taken as already local."""
    if now.tzinfo is None:
        return now
    return now.astimezone(_zone(tz))


def _clock_minutes(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute


# --- time strings ---
def normalize_time(value) -> str:
    """"930" -> "9:30", "1730" -> "17:30"; anything else is returned stripped."""
    s = "" if value is None else str(value).strip()
    if _NUMERIC_TIME.match(s):
        # 3 digits: H + MM, 4 digits: HH + MM
        split = len(s) - 2
        return f"{s[:split]}:{s[split:]}"
    return s


def time_to_minutes(value) -> int | None:
    """Minutes since midnight, or None when the value is not a clock time."""
    m = _CLOCK_TIME.match(normalize_time(value))
    if not m:
        return None
    hours, minutes = int(m.group(1)), int(m.group(2))
    if minutes > 59 or hours > 24 or (hours == 24 and minutes):
        return None
    return hours * 60 + minutes


def format_time(value) -> str:
    """12-hour display form, e.g. "17:30" -> "5:30 PM"."""
    minutes = time_to_minutes(value)
    if minutes is None:
        return "" if value is None else str(value)
    hour, minute = divmod(minutes, 60)
    period = "PM" if 12 <= hour < 24 else "AM"
    hour = hour % 12 or 12
    return f"{hour}:{minute:02d} {period}"


def format_time_range(start_time, end_time) -> str:
    return f"{format_time(start_time)} - {format_time(end_time)}"


# --- day specs ---
def _day_range(spec: str) -> list[int]:
    parts = [p.strip() for p in spec.split("-")]
    if len(parts) != 2:
        return []
    start, end = _DAY_LOOKUP.get(parts[0]), _DAY_LOOKUP.get(parts[1])
    if start is None or end is None:
        return []
    if start <= end:
        return list(range(start, end + 1))
    return sorted(set(range(start, 7)) | set(range(0, end + 1)))


def parse_days(valid_days) -> list[int]:
    """Weekday indices covered by a day spec; empty when it cannot be parsed.

    Accepts "All Days"/"Everyday"/"Daily", "Weekdays", "Weekends", ranges
    ("Mon-Fri", wrapping "fri-sun"), comma lists ("Mon, Wed, Fri") and single
    days, in any case. Day tokens may be abbreviations or full names.
    """
    spec = "" if valid_days is None else str(valid_days).strip().lower()
    if not spec:
        return []
    if spec in _EVERY_DAY:
        return list(range(7))
    if spec == "weekdays":
        return list(range(5))
    if spec == "weekends":
        return [5, 6]

    if "-" in spec:
        days = _day_range(spec)
        if days:
            return days
        # "mon-wed, fri" is not a range; fall through to the list check

    if "," in spec:
        tokens = (t.strip() for t in spec.split(","))
        return sorted({_DAY_LOOKUP[t] for t in tokens if t in _DAY_LOOKUP})

    idx = _DAY_LOOKUP.get(spec)
    return [] if idx is None else [idx]


def is_valid_day(valid_days, now: datetime) -> bool:
    days = parse_days(valid_days)
    if not days:
        log.debug("Unrecognised day spec %r", valid_days)
        return False
    return now.weekday() in days


def days_display(valid_days) -> str:
    spec = "" if valid_days is None else str(valid_days).strip()
    lowered = spec.lower()
    if lowered in _EVERY_DAY:
        return "Every day"
    if lowered == "weekdays":
        return "Mon-Fri"
    if lowered == "weekends":
        return "Sat-Sun"
    return spec


# --- windows ---
def _bounds(window: TimeWindow) -> tuple[int, int] | None:
    start = time_to_minutes(window.start_time)
    end = time_to_minutes(window.end_time)
    if start is None or end is None:
        log.debug("Unparseable happy hour times %r - %r", window.start_time, window.end_time)
        return None
    return start, end


def is_within_window(window: TimeWindow, now: datetime, tz: Zone = DEFAULT_TIMEZONE) -> bool:
    """True when ``now`` falls inside the window, ends inclusive.

    The day is checked first, against ``now``'s weekday in ``tz``. Windows
    whose end is before their start run past midnight (22:00 - 02:00).
    """
    local = to_local(now, tz)
    if not is_valid_day(window.valid_days, local):
        return False
    bounds = _bounds(window)
    if bounds is None:
        return False

    start, end = bounds
    current = _clock_minutes(local)
    if start <= end:
        return start <= current <= end
    return current >= start or current <= end


def deal_status(window: TimeWindow, now: datetime, tz: Zone = DEFAULT_TIMEZONE) -> str:
    local = to_local(now, tz)
    if is_within_window(window, local, tz):
        return ACTIVE
    bounds = _bounds(window)
    if bounds and is_valid_day(window.valid_days, local) and _clock_minutes(local) < bounds[0]:
        return UPCOMING
    return INACTIVE


def minutes_remaining(window: TimeWindow, now: datetime, tz: Zone = DEFAULT_TIMEZONE) -> int | None:
    """Minutes until an active window closes; None when it is not active."""
    local = to_local(now, tz)
    if not is_within_window(window, local, tz):
        return None
    _, end = _bounds(window)
    current = _clock_minutes(local)
    if current <= end:
        return end - current
    return end + MINUTES_PER_DAY - current


def format_countdown(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    if hours > 0:
        return f"Ends in {hours}h {mins}m"
    return f"Ends in {mins}m"
