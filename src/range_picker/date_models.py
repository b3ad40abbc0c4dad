"""
Range Picker Date Models

Day-granularity date value used by every part of the selection engine,
plus the adapter that normalizes loose date inputs into it.

Construction from explicit components is validated and raises
InvalidDateException. Parsing loose input (parse_day) fails closed: anything
that cannot be read as a calendar day yields None, which the rest of the
engine treats as an absent endpoint.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date as PyDate, datetime, timedelta, timezone
from enum import Enum
from typing import Any, List, Optional, Union
import calendar as stdlib_calendar
import math

from .constants import CALENDAR_GRID_DAYS


DayInput = Union["Day", PyDate, datetime, str, int, float, None]


@dataclass(frozen=True, order=True)
class Day:
    """
    Immutable calendar day (Gregorian, no time-of-day, no timezone).

    Ordering and equality are by calendar day.
    """
    year: int
    month: int  # 1-12
    day: int    # 1-31

    def __post_init__(self):
        """Validate date components during creation."""
        if not is_valid_date(self.year, self.month, self.day):
            from .picker_exceptions import InvalidDateException
            raise InvalidDateException(year=self.year, month=self.month, day=self.day)

    @classmethod
    def from_python_date(cls, py_date: PyDate) -> Day:
        """Create Day from a Python date or datetime (time is discarded)."""
        return cls(py_date.year, py_date.month, py_date.day)

    @classmethod
    def today(cls) -> Day:
        """Create Day representing today."""
        return cls.from_python_date(PyDate.today())

    def raw(self) -> PyDate:
        """Native representation; parse_day(day.raw()) == day."""
        return PyDate(self.year, self.month, self.day)

    to_python_date = raw

    def add_days(self, days: int) -> Day:
        """
        Add specified number of days (can be negative). Results outside
        0001-01-01 .. 9999-12-31 clamp to the nearest edge.
        """
        try:
            return Day.from_python_date(self.raw() + timedelta(days=days))
        except OverflowError:
            return Day.from_python_date(PyDate.max if days > 0 else PyDate.min)

    def add_months(self, months: int) -> Day:
        """
        Add calendar months, clamping the day to the target month's length
        (Jan 31 + 1 month -> Feb 28/29). Months before 0001-01 or after
        9999-12 clamp to those months.
        """
        index = self.year * 12 + (self.month - 1) + months
        index = min(max(index, PyDate.min.year * 12), PyDate.max.year * 12 + 11)
        year, month_zero = divmod(index, 12)
        month = month_zero + 1
        return Day(year, month, min(self.day, days_in_month(year, month)))

    def start_of_month(self) -> Day:
        return Day(self.year, self.month, 1)

    def end_of_month(self) -> Day:
        return Day(self.year, self.month, self.days_in_month())

    def days_in_month(self) -> int:
        return days_in_month(self.year, self.month)

    @property
    def weekday_index(self) -> int:
        """Day of week with Sunday = 0 ... Saturday = 6."""
        return (self.raw().weekday() + 1) % 7

    def start_of_week(self, week_starts_on: int = 0) -> Day:
        """First day of the week containing this day."""
        diff = (self.weekday_index - week_starts_on) % 7
        return self.add_days(-diff)

    def end_of_week(self, week_starts_on: int = 0) -> Day:
        return self.start_of_week(week_starts_on).add_days(6)

    def days_until(self, other: Day) -> int:
        """Number of days from this day to other (negative if other is earlier)."""
        return (other.raw() - self.raw()).days

    def format(self, format_str: str = "%Y-%m-%d") -> str:
        """Format with strftime directives."""
        return self.raw().strftime(format_str)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def __repr__(self) -> str:
        return f"Day({self.year}, {self.month}, {self.day})"


class DayComparison(Enum):
    """Result of comparing two days."""
    BEFORE = -1
    SAME = 0
    AFTER = 1


# Adapter

def parse_day(value: Any) -> Optional[Day]:
    """
    Normalize a loose date input into a Day.

    Accepts Day, datetime.date, datetime.datetime (wall-clock date, no
    timezone conversion), epoch milliseconds (UTC), ISO-like strings, or any
    object exposing integer year/month/day attributes. Anything else,
    including impossible dates, yields None. Never raises.
    """
    if value is None:
        return None
    if isinstance(value, Day):
        return value
    if isinstance(value, PyDate):  # datetime is a date subclass
        return Day.from_python_date(value)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _day_from_epoch_ms(value)
    if isinstance(value, str):
        return _day_from_string(value)

    # Duck typing for date-like objects from other libraries
    year = getattr(value, 'year', None)
    month = getattr(value, 'month', None)
    day = getattr(value, 'day', None)
    if all(isinstance(part, int) and not isinstance(part, bool) for part in (year, month, day)):
        if is_valid_date(year, month, day):
            return Day(year, month, day)
    return None


def _day_from_epoch_ms(value: Union[int, float]) -> Optional[Day]:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    try:
        moment = datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return Day.from_python_date(moment)


_STRING_FORMATS = ("%Y/%m/%d", "%Y.%m.%d")


def _day_from_string(text: str) -> Optional[Day]:
    text = text.strip()
    if not text:
        return None

    try:
        return Day.from_python_date(PyDate.fromisoformat(text))
    except ValueError:
        pass

    iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return Day.from_python_date(datetime.fromisoformat(iso_text))
    except ValueError:
        pass

    for fmt in _STRING_FORMATS:
        try:
            return Day.from_python_date(datetime.strptime(text, fmt))
        except ValueError:
            continue
    return None


def start_of_day(value: DayInput) -> Optional[Day]:
    """Drop any time-of-day component; same as parse_day."""
    return parse_day(value)


# Comparisons. Absent (unparseable) operands never compare as before/after/same.

def compare_days(a: DayInput, b: DayInput) -> Optional[DayComparison]:
    """Compare two inputs by calendar day; None if either is absent."""
    first = parse_day(a)
    second = parse_day(b)
    if first is None or second is None:
        return None
    if first < second:
        return DayComparison.BEFORE
    if first > second:
        return DayComparison.AFTER
    return DayComparison.SAME


def is_same_day(a: DayInput, b: DayInput) -> bool:
    return compare_days(a, b) is DayComparison.SAME


def is_before(a: DayInput, b: DayInput) -> bool:
    return compare_days(a, b) is DayComparison.BEFORE


def is_after(a: DayInput, b: DayInput) -> bool:
    return compare_days(a, b) is DayComparison.AFTER


def is_in_range(value: DayInput, start: DayInput, end: DayInput) -> bool:
    """True if value lies between start and end, inclusive."""
    day, first, last = parse_day(value), parse_day(start), parse_day(end)
    if day is None or first is None or last is None:
        return False
    return first <= day <= last


def is_same_month(a: DayInput, b: DayInput) -> bool:
    first = parse_day(a)
    second = parse_day(b)
    if first is None or second is None:
        return False
    return (first.year, first.month) == (second.year, second.month)


def is_today(value: DayInput) -> bool:
    return is_same_day(value, Day.today())


# Arithmetic on loose input, absent in -> absent out

def add_days(value: DayInput, days: int) -> Optional[Day]:
    day = parse_day(value)
    return day.add_days(days) if day else None


def add_months(value: DayInput, months: int) -> Optional[Day]:
    day = parse_day(value)
    return day.add_months(months) if day else None


def start_of_month(value: DayInput) -> Optional[Day]:
    day = parse_day(value)
    return day.start_of_month() if day else None


def end_of_month(value: DayInput) -> Optional[Day]:
    day = parse_day(value)
    return day.end_of_month() if day else None


def start_of_week(value: DayInput, week_starts_on: int = 0) -> Optional[Day]:
    day = parse_day(value)
    return day.start_of_week(week_starts_on) if day else None


def end_of_week(value: DayInput, week_starts_on: int = 0) -> Optional[Day]:
    day = parse_day(value)
    return day.end_of_week(week_starts_on) if day else None


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month."""
    return stdlib_calendar.monthrange(year, month)[1]


def format_day(value: DayInput, format_str: str = "%Y-%m-%d") -> str:
    """Format a loose input; absent input formats as an empty string."""
    day = parse_day(value)
    return day.format(format_str) if day else ""


def calendar_days(month: DayInput, week_starts_on: int = 0) -> List[Day]:
    """
    Visible days for the month containing `month`.

    Always 42 days (six full weeks) starting on the configured week start
    day on or before the first of the month. For 9999-12 the days past the
    end of the calendar repeat 9999-12-31.
    """
    anchor = parse_day(month)
    if anchor is None:
        return []
    first = anchor.start_of_month().start_of_week(week_starts_on)
    return [first.add_days(offset) for offset in range(CALENDAR_GRID_DAYS)]


def is_valid_date(year: int, month: int, day: int) -> bool:
    """
    Check if the given date components form a valid date.

    Returns:
        True if valid date, False otherwise
    """
    try:
        PyDate(year, month, day)
        return True
    except (ValueError, TypeError):
        return False
