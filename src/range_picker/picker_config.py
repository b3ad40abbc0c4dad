"""
Picker Configuration

All knobs of one picker instance, validated at construction. Malformed date
values (min/max/disabled dates) degrade to absent with a warning, matching
how the selection core treats any unreadable date. Structural mistakes
(week start outside 0-6, a month count the layout cannot show) raise
PickerConfigurationException.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Mapping, Optional, Sequence
import logging

from .constants import (
    DEFAULT_COLOR,
    DEFAULT_DEBOUNCE_MS,
    MAX_DISPLAYED_MONTHS,
    MIN_DISPLAYED_MONTHS,
)
from .date_models import Day, DayInput, parse_day
from .disabled_dates import DisabledDateRules
from .picker_exceptions import PickerConfigurationException
from .range_models import AssignmentPolicy, FocusedPart


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PickerConfig:
    """
    Configuration for one picker instance.

    Date fields accept anything parse_day accepts and are stored as Day.
    """
    min_date: Optional[DayInput] = None
    max_date: Optional[DayInput] = None
    disabled_dates: Sequence[DayInput] = field(default_factory=tuple)
    disabled_day: Optional[Callable[[Day], bool]] = None
    week_starts_on: int = 0
    months: int = 1
    drag_selection_enabled: bool = True
    move_range_on_first_selection: bool = False
    retain_end_date_on_first_selection: bool = False
    initial_focused_part: FocusedPart = FocusedPart.START
    show_preview: bool = True
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    allow_adjacent_month_selection: bool = False
    color: str = DEFAULT_COLOR

    def __post_init__(self):
        """Validate and normalize configuration values."""
        object.__setattr__(self, 'min_date', self._coerce_day('min_date', self.min_date))
        object.__setattr__(self, 'max_date', self._coerce_day('max_date', self.max_date))

        disabled = []
        for value in self.disabled_dates or ():
            day = parse_day(value)
            if day is None:
                logger.warning(f"Ignoring unreadable disabled date {value!r}")
            else:
                disabled.append(day)
        object.__setattr__(self, 'disabled_dates', tuple(disabled))

        if self.min_date and self.max_date and self.min_date > self.max_date:
            logger.warning(
                f"min_date {self.min_date} is after max_date {self.max_date}; every day is disabled"
            )

        if self.disabled_day is not None and not callable(self.disabled_day):
            raise PickerConfigurationException(
                "disabled_day must be callable", "disabled_day", self.disabled_day
            )

        if not _is_int(self.week_starts_on) or not 0 <= self.week_starts_on <= 6:
            raise PickerConfigurationException(
                "week_starts_on must be an integer between 0 (Sunday) and 6",
                "week_starts_on", self.week_starts_on
            )

        if not _is_int(self.months) or not MIN_DISPLAYED_MONTHS <= self.months <= MAX_DISPLAYED_MONTHS:
            raise PickerConfigurationException(
                f"months must be between {MIN_DISPLAYED_MONTHS} and {MAX_DISPLAYED_MONTHS}",
                "months", self.months
            )

        if not _is_int(self.debounce_ms) or self.debounce_ms < 0:
            raise PickerConfigurationException(
                "debounce_ms must be a non-negative integer", "debounce_ms", self.debounce_ms
            )

        object.__setattr__(self, 'initial_focused_part',
                           _coerce_focused_part(self.initial_focused_part))

    @staticmethod
    def _coerce_day(name: str, value: Any) -> Optional[Day]:
        day = parse_day(value)
        if value is not None and day is None:
            logger.warning(f"Ignoring unreadable {name} {value!r}")
        return day

    @property
    def disabled_rules(self) -> DisabledDateRules:
        return DisabledDateRules(
            min_date=self.min_date,
            max_date=self.max_date,
            disabled_dates=frozenset(self.disabled_dates),
            disabled_day=self.disabled_day,
        )

    @property
    def assignment_policy(self) -> AssignmentPolicy:
        return AssignmentPolicy(
            move_range_on_first_selection=self.move_range_on_first_selection,
            retain_end_date_on_first_selection=self.retain_end_date_on_first_selection,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PickerConfig:
        """
        Build a configuration from plain data (e.g. parsed JSON).

        Unknown keys are logged and ignored.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key in known:
                kwargs[key] = value
            else:
                logger.warning(f"Ignoring unknown picker option '{key}'")
        return cls(**kwargs)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _coerce_focused_part(value: Any) -> FocusedPart:
    if isinstance(value, FocusedPart):
        return value
    if isinstance(value, str):
        lookup = {"start": FocusedPart.START, "startdate": FocusedPart.START,
                  "end": FocusedPart.END, "enddate": FocusedPart.END}
        part = lookup.get(value.strip().lower().replace("_", ""))
        if part is not None:
            return part
    elif _is_int(value) and value in (0, 1):
        return FocusedPart(value)
    raise PickerConfigurationException(
        "initial_focused_part must be START/END, 'start'/'end' or 0/1",
        "initial_focused_part", value
    )
