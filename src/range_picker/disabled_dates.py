"""
Disabled Date Rules

Pure predicate deciding whether a day may be selected. Whether a day belongs
to the month a panel is showing is not part of this check: an adjacent-month
day can be selectable.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Iterable, Optional

from .date_models import Day, DayInput, parse_day


DisabledDayPredicate = Callable[[Day], bool]


@dataclass(frozen=True)
class DisabledDateRules:
    """
    Bounds, explicit exclusions and a custom predicate.

    Unparseable entries are dropped rather than rejected.
    """
    min_date: Optional[Day] = None
    max_date: Optional[Day] = None
    disabled_dates: FrozenSet[Day] = field(default_factory=frozenset)
    disabled_day: Optional[DisabledDayPredicate] = None

    @classmethod
    def build(cls, min_date: DayInput = None, max_date: DayInput = None,
              disabled_dates: Optional[Iterable[DayInput]] = None,
              disabled_day: Optional[DisabledDayPredicate] = None) -> DisabledDateRules:
        """Create rules from loose inputs."""
        parsed = (parse_day(value) for value in (disabled_dates or ()))
        return cls(
            min_date=parse_day(min_date),
            max_date=parse_day(max_date),
            disabled_dates=frozenset(day for day in parsed if day is not None),
            disabled_day=disabled_day,
        )

    def is_disabled(self, value: DayInput) -> bool:
        """True if the day cannot be selected. Unparseable input is disabled."""
        day = parse_day(value)
        if day is None:
            return True
        if self.min_date is not None and day < self.min_date:
            return True
        if self.max_date is not None and day > self.max_date:
            return True
        if day in self.disabled_dates:
            return True
        if self.disabled_day is not None and self.disabled_day(day):
            return True
        return False

    def is_selectable(self, value: DayInput) -> bool:
        return not self.is_disabled(value)


def is_day_disabled(value: DayInput, min_date: DayInput = None, max_date: DayInput = None,
                    disabled_dates: Optional[Iterable[DayInput]] = None,
                    disabled_day: Optional[DisabledDayPredicate] = None) -> bool:
    """One-shot form of DisabledDateRules.is_disabled."""
    rules = DisabledDateRules.build(min_date, max_date, disabled_dates, disabled_day)
    return rules.is_disabled(value)
