"""
Month Panel

A view over one displayed month of a picker. Panels hold no selection state
of their own: they read the coordinator's range, preview and focus, and
forward raw pointer events tagged with their month.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from .constants import DEFAULT_MONTH_FORMAT
from .date_models import Day, DayInput, calendar_days, is_today, parse_day
from .range_models import DateRange

if TYPE_CHECKING:
    from .coordinator import MultiPanelCoordinator


@dataclass(frozen=True)
class DayCellState:
    """Render flags for one grid cell."""
    day: Day
    is_passive: bool = False
    is_today: bool = False
    is_disabled: bool = False
    is_selected: bool = False
    is_start_of_range: bool = False
    is_end_of_range: bool = False
    is_in_range: bool = False
    is_in_preview: bool = False
    is_preview_start: bool = False
    is_preview_end: bool = False
    preview_has_prev: bool = False
    preview_has_next: bool = False
    is_start_of_week: bool = False
    is_end_of_week: bool = False
    is_start_of_month: bool = False
    is_end_of_month: bool = False


class MonthPanel:
    """Panel `index` of a coordinator; shows shown_month + index."""

    def __init__(self, coordinator: MultiPanelCoordinator, index: int):
        self._coordinator = coordinator
        self._index = index

    @property
    def index(self) -> int:
        return self._index

    @property
    def month(self) -> Day:
        return self._coordinator.shown_month.add_months(self._index)

    @property
    def title(self) -> str:
        return self.month.format(DEFAULT_MONTH_FORMAT)

    @property
    def is_active(self) -> bool:
        return self._coordinator.active_panel_index == self._index

    def days(self) -> List[Day]:
        return calendar_days(self.month, self._coordinator.config.week_starts_on)

    def day_states(self) -> List[DayCellState]:
        return [self.day_state(day) for day in self.days()]

    def day_state(self, value: DayInput) -> Optional[DayCellState]:
        """
        Flags for a day of this panel's grid. Range and preview flags are only
        set on enabled days of the panel's own month; adjacent-month cells
        render passive.
        """
        day = parse_day(value)
        if day is None:
            return None

        week_starts_on = self._coordinator.config.week_starts_on
        month = self.month
        passive = (day.year, day.month) != (month.year, month.month)
        start_of_week = day.weekday_index == week_starts_on
        end_of_week = day.weekday_index == (week_starts_on + 6) % 7

        state = dict(
            day=day,
            is_passive=passive,
            is_today=is_today(day),
            is_disabled=self._coordinator.is_disabled(day),
            is_start_of_week=start_of_week,
            is_end_of_week=end_of_week,
            is_start_of_month=day.day == 1,
            is_end_of_month=day == day.end_of_month(),
        )
        if passive or state["is_disabled"]:
            return DayCellState(**state)

        date_range = self._coordinator.range
        is_start = date_range.is_start(day)
        is_end = date_range.is_end(day)
        inside = date_range.contains(day)
        state.update(
            is_selected=is_start or is_end or inside,
            is_start_of_range=is_start,
            is_end_of_range=is_end,
            is_in_range=inside and not is_start and not is_end,
        )

        preview = self._coordinator.preview
        if preview is not None and _in_preview(preview, day):
            state.update(
                is_in_preview=True,
                is_preview_start=day == preview.start,
                is_preview_end=day == preview.end,
                preview_has_prev=day != preview.start and not start_of_week and day.day != 1,
                preview_has_next=day != preview.end and not end_of_week and day != day.end_of_month(),
            )
        return DayCellState(**state)

    # ── event forwarding ─────────────────────────────────────────────────

    def press(self, day: DayInput) -> None:
        self._coordinator.press(day, self.month)

    def move(self, day: DayInput) -> None:
        self._coordinator.move(day)

    def release(self, day: DayInput = None) -> None:
        self._coordinator.release(day, self.month)

    def click(self, day: DayInput) -> None:
        self._coordinator.click(day, self.month)

    def hover_enter(self, day: DayInput) -> None:
        self._coordinator.hover_enter(day)

    def hover_leave(self) -> None:
        self._coordinator.hover_leave()

    def enter(self) -> None:
        self._coordinator.enter_panel(self._index)

    def leave(self) -> None:
        self._coordinator.leave_panel(self._index)

    def __repr__(self) -> str:
        return f"MonthPanel(index={self._index}, month={self.month.format('%Y-%m')})"


def _in_preview(preview: DateRange, day: Day) -> bool:
    if preview.start is None or preview.end is None:
        return day == preview.start or day == preview.end
    return preview.start <= day <= preview.end
