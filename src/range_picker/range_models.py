"""
Range Models

The selected-range entity and the pure assignment / normalization rules that
every selection path goes through.

normalize_range() is the single invariant-enforcing choke point: once both
endpoints are present, start <= end. assign_day() and assign_span() always
end in it.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterable, Optional

from .constants import DEFAULT_RANGE_KEY
from .date_models import Day, DayInput, parse_day


class FocusedPart(Enum):
    """Which endpoint the next committed selection targets."""
    START = 0
    END = 1

    def toggled(self) -> FocusedPart:
        return FocusedPart.END if self is FocusedPart.START else FocusedPart.START


@dataclass(frozen=True)
class DateRange:
    """
    A start/end pair of calendar days plus identifying key and display color.

    Either endpoint may be absent. Construction does not validate ordering;
    normalize_range() does.
    """
    start: Optional[Day] = None
    end: Optional[Day] = None
    key: str = DEFAULT_RANGE_KEY
    color: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    def contains(self, value: DayInput) -> bool:
        """Inclusive containment; a partial range contains nothing."""
        day = parse_day(value)
        if day is None or not self.is_complete:
            return False
        return self.start <= day <= self.end

    def is_start(self, value: DayInput) -> bool:
        day = parse_day(value)
        return day is not None and day == self.start

    def is_end(self, value: DayInput) -> bool:
        day = parse_day(value)
        return day is not None and day == self.end

    def to_key_dict(self) -> Dict[str, DateRange]:
        """Keyed form used by multi-range consumers: {key: range}."""
        return {self.key or DEFAULT_RANGE_KEY: self}

    def __str__(self) -> str:
        return f"{self.key}: {self.start or '-'} -> {self.end or '-'}"


@dataclass(frozen=True)
class AssignmentPolicy:
    """
    First-pick behaviour when the start endpoint is assigned.

    move_range_on_first_selection clears the end date on a fresh start pick,
    unless retain_end_date_on_first_selection is also set.
    """
    move_range_on_first_selection: bool = False
    retain_end_date_on_first_selection: bool = False

    @property
    def clears_end_on_start_pick(self) -> bool:
        return self.move_range_on_first_selection and not self.retain_end_date_on_first_selection


def make_range(start: DayInput = None, end: DayInput = None,
               key: str = DEFAULT_RANGE_KEY, color: Optional[str] = None) -> DateRange:
    """Build a normalized range from loose inputs; unparseable ends are absent."""
    return normalize_range(DateRange(parse_day(start), parse_day(end), key, color))


def normalize_range(date_range: DateRange) -> DateRange:
    """
    Swap the endpoints if both are present and inverted; otherwise return the
    range unchanged. Idempotent.
    """
    if date_range.is_complete and date_range.start > date_range.end:
        return replace(date_range, start=date_range.end, end=date_range.start)
    return date_range


def assign_day(date_range: DateRange, day: Day, part: FocusedPart,
               policy: AssignmentPolicy = AssignmentPolicy()) -> DateRange:
    """
    Commit `day` to the `part` endpoint of `date_range`.

    Start: sets start. The end is cleared first when the policy asks for it,
    then, if still present and earlier than the new start, pulled forward to
    the new start.

    End: with no start, only the end is set. Earlier than start swaps (the
    day becomes start, the old start becomes end). Later than or equal to
    start sets end and leaves start untouched.

    Callers reject disabled days before calling this.
    """
    if part is FocusedPart.START:
        end = date_range.end
        if policy.clears_end_on_start_pick:
            end = None
        if end is not None and day > end:
            end = day
        updated = replace(date_range, start=day, end=end)
    else:
        start = date_range.start
        if start is None:
            updated = replace(date_range, end=day)
        elif day < start:
            updated = replace(date_range, start=day, end=start)
        else:
            updated = replace(date_range, end=day)

    return normalize_range(updated)


def assign_span(date_range: DateRange, anchor: Day, day: Day) -> DateRange:
    """
    Live drag candidate: the span between the drag anchor and `day`,
    whichever direction the pointer went.
    """
    start, end = (anchor, day) if anchor <= day else (day, anchor)
    return normalize_range(replace(date_range, start=start, end=end))


# Range utilities

def is_range_start(value: DayInput, date_range: DateRange, week_starts_on: int = 0) -> bool:
    """
    True if the day opens a visual row of the range: it is the start day, or
    the first weekday column of the start day's week.
    """
    day = parse_day(value)
    if day is None or date_range.start is None:
        return False
    if day == date_range.start:
        return True
    same_week = day.start_of_week(week_starts_on) == date_range.start.start_of_week(week_starts_on)
    return same_week and day.weekday_index == week_starts_on


def is_range_end(value: DayInput, date_range: DateRange, week_starts_on: int = 0) -> bool:
    """
    True if the day closes a visual row of the range: it is the end day, or
    the last weekday column of the end day's week.
    """
    day = parse_day(value)
    if day is None or date_range.end is None:
        return False
    if day == date_range.end:
        return True
    same_week = day.start_of_week(week_starts_on) == date_range.end.start_of_week(week_starts_on)
    return same_week and day.weekday_index == (week_starts_on + 6) % 7


def range_for_day(value: DayInput, ranges: Iterable[DateRange]) -> Optional[DateRange]:
    """First range that contains the day or has it as an endpoint."""
    day = parse_day(value)
    if day is None:
        return None
    for date_range in ranges:
        if date_range.contains(day) or date_range.is_start(day) or date_range.is_end(day):
            return date_range
    return None


def is_day_in_any_range(value: DayInput, ranges: Iterable[DateRange]) -> bool:
    return any(date_range.contains(value) for date_range in ranges)
