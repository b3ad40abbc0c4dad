"""
Multi-Panel Coordinator

One picker instance: the range, the focused part, the single drag session,
the single preview and the displayed-month anchor, shared by every rendered
month panel. Panels only read this state and report raw events back; the
coordinator runs the state machine once and publishes the result.

Events are processed run-to-completion. A listener that calls back into the
coordinator while a notification is being delivered has its call queued and
processed, in arrival order, once the current transition has finished.
"""

from __future__ import annotations
from collections import deque
from dataclasses import replace
from typing import Any, Callable, Deque, List, Optional, Tuple
import logging

from .date_models import Day, DayInput, is_same_month, parse_day
from .drag_selection import DragPhase, DragSelectionController
from .month_panel import MonthPanel
from .picker_config import PickerConfig
from .picker_exceptions import PickerStateException
from .picker_notifications import NotificationType, PickerEventPublisher, PickerNotification
from .preview import compute_preview
from .range_models import (
    DateRange,
    FocusedPart,
    assign_day,
    assign_span,
    make_range,
    normalize_range,
)
from .scheduling import Debouncer, ImmediateScheduler, Scheduler


logger = logging.getLogger(__name__)


class MultiPanelCoordinator:
    """
    Shared selection state for 1..N month panels.

    Example:
        >>> picker = MultiPanelCoordinator(PickerConfig(months=2),
        ...                                on_range_change=print)
        >>> picker.press(Day(2024, 1, 10))
        >>> picker.release(Day(2024, 1, 10))
        selection: 2024-01-10 -> -
    """

    def __init__(self, config: Optional[PickerConfig] = None,
                 initial_range: Optional[DateRange] = None,
                 scheduler: Optional[Scheduler] = None,
                 publisher: Optional[PickerEventPublisher] = None,
                 shown_month: DayInput = None,
                 on_range_change: Optional[Callable[[DateRange], None]] = None,
                 on_focused_part_change: Optional[Callable[[FocusedPart], None]] = None,
                 on_preview_change: Optional[Callable[[Optional[DateRange]], None]] = None,
                 on_shown_month_change: Optional[Callable[[Day], None]] = None):
        """
        Args:
            config: Picker configuration (defaults apply when omitted)
            initial_range: Starting selection; normalized, color defaults to config.color
            scheduler: Timer source for drag debouncing. Defaults to
                ImmediateScheduler (no event loop, moves commit synchronously)
            publisher: Shared publisher; a private one is created when omitted
            shown_month: First displayed month; defaults to the range start, then today
            on_*: Plain callbacks receiving the notification payload
        """
        self._config = config or PickerConfig()
        self._rules = self._config.disabled_rules
        self._policy = self._config.assignment_policy
        self._publisher = publisher or PickerEventPublisher()

        base = initial_range or DateRange()
        if base.color is None:
            base = replace(base, color=self._config.color)
        self._range = normalize_range(base)
        self._focused_part = self._config.initial_focused_part

        anchor = parse_day(shown_month) or self._range.start or Day.today()
        self._shown_month = anchor.start_of_month()

        self._hovered: Optional[Day] = None
        self._pointer_inside = False
        self._preview: Optional[DateRange] = None

        self._queue: Deque[Tuple[Callable[..., Any], tuple]] = deque()
        self._dispatching = False

        self._debouncer = Debouncer(scheduler or ImmediateScheduler(), self._config.debounce_ms)
        self._drag = DragSelectionController(
            self,
            self._debouncer,
            drag_enabled=self._config.drag_selection_enabled,
            dispatch=self._dispatch,
        )

        self._subscribe_callback(on_range_change, NotificationType.RANGE_CHANGED)
        self._subscribe_callback(on_focused_part_change, NotificationType.FOCUSED_PART_CHANGED)
        self._subscribe_callback(on_preview_change, NotificationType.PREVIEW_CHANGED)
        self._subscribe_callback(on_shown_month_change, NotificationType.SHOWN_MONTH_CHANGED)

        logger.debug(f"Picker created: {self._range}, focus={self._focused_part.name}, "
                     f"months={self._config.months}, shown={self._shown_month}")

    def _subscribe_callback(self, callback: Optional[Callable[[Any], None]],
                            notification_type: NotificationType) -> None:
        if callback is None:
            return

        def deliver(notification: PickerNotification) -> None:
            callback(notification.payload)

        self._publisher.subscribe(deliver, [notification_type])

    # ── read-only state shared by panels ─────────────────────────────────

    @property
    def config(self) -> PickerConfig:
        return self._config

    @property
    def publisher(self) -> PickerEventPublisher:
        return self._publisher

    @property
    def range(self) -> DateRange:
        return self._range

    @property
    def focused_part(self) -> FocusedPart:
        return self._focused_part

    @property
    def preview(self) -> Optional[DateRange]:
        return self._preview

    @property
    def hovered_day(self) -> Optional[Day]:
        return self._hovered

    @property
    def drag_phase(self) -> DragPhase:
        return self._drag.phase

    @property
    def drag(self) -> DragSelectionController:
        return self._drag

    @property
    def shown_month(self) -> Day:
        return self._shown_month

    @property
    def months(self) -> int:
        return self._config.months

    def displayed_months(self) -> List[Day]:
        return [self._shown_month.add_months(offset) for offset in range(self._config.months)]

    @property
    def active_panel_index(self) -> int:
        """Panel the header navigates: first for start, second (if shown) for end."""
        if self._focused_part is FocusedPart.START:
            return 0
        return min(1, self._config.months - 1)

    @property
    def active_month(self) -> Day:
        return self._shown_month.add_months(self.active_panel_index)

    def panel(self, index: int) -> MonthPanel:
        """View over panel `index` (0-based)."""
        if not 0 <= index < self._config.months:
            raise PickerStateException(
                f"Panel index {index} is outside the displayed months",
                state_info={"months": self._config.months, "index": index}
            )
        return MonthPanel(self, index)

    def panels(self) -> List[MonthPanel]:
        return [MonthPanel(self, index) for index in range(self._config.months)]

    # ── selection host (used by DragSelectionController) ─────────────────

    def is_disabled(self, day: DayInput) -> bool:
        return self._rules.is_disabled(day)

    def is_in_scope(self, day: Day, panel_month: Optional[Day]) -> bool:
        """Adjacent-month cells are outside a panel's scope unless configured otherwise."""
        if panel_month is None or self._config.allow_adjacent_month_selection:
            return True
        return is_same_month(day, panel_month)

    def commit_day(self, day: Day, part: FocusedPart) -> None:
        """Assign `day` to `part`, publish, and advance focus to the other end."""
        self._range = assign_day(self._range, day, part, self._policy)
        logger.debug(f"Committed {day} as {part.name}: {self._range}")
        self._publisher.publish_range_changed(self._range)
        self._set_focused_part(part.toggled())
        self._refresh_preview()

    def commit_span(self, anchor: Day, day: Day, final: bool) -> None:
        """
        Commit a drag span. The final commit moves focus away from the end
        the drag extended: after a forward drag the next click starts over,
        after a backward drag it sets the end.
        """
        self._range = assign_span(self._range, anchor, day)
        logger.debug(f"Committed drag span {anchor} -> {day} (final={final}): {self._range}")
        self._publisher.publish_range_changed(self._range)
        if final:
            self._set_focused_part(FocusedPart.START if day >= anchor else FocusedPart.END)
            if not self._pointer_inside:
                self._hovered = None
        self._refresh_preview()

    def drag_candidate_changed(self) -> None:
        if not self._drag.is_active and not self._pointer_inside:
            self._hovered = None
        self._refresh_preview()

    # ── panel events ─────────────────────────────────────────────────────

    def press(self, day: DayInput, panel_month: DayInput = None) -> None:
        self._dispatch(self._drag.press, day, parse_day(panel_month))

    def move(self, day: DayInput) -> None:
        self._dispatch(self._drag.move, day)

    def release(self, day: DayInput = None, panel_month: DayInput = None) -> None:
        self._dispatch(self._drag.release, day, parse_day(panel_month))

    def click(self, day: DayInput, panel_month: DayInput = None) -> None:
        self._dispatch(self._drag.click, day, parse_day(panel_month))

    def global_release(self) -> None:
        """Pointer released anywhere in the window, inside a panel or not."""
        self._dispatch(self._drag.global_release)

    def cancel_interaction(self) -> None:
        self._dispatch(self._drag.cancel)

    def hover_enter(self, day: DayInput) -> None:
        self._dispatch(self._hover_enter, day)

    def hover_leave(self) -> None:
        self._dispatch(self._hover_leave)

    def enter_panel(self, index: int) -> None:
        """Crossing into a panel never affects the session."""
        logger.debug(f"Pointer entered panel {index}")

    def leave_panel(self, index: int) -> None:
        """Crossing out of a panel never closes the session; only hover is cleared."""
        logger.debug(f"Pointer left panel {index}")
        self._dispatch(self._hover_leave)

    def _hover_enter(self, value: DayInput) -> None:
        day = parse_day(value)
        if day is None:
            return
        self._drag.pointer_over(day)
        self._pointer_inside = True
        self._hovered = day
        self._refresh_preview()

    def _hover_leave(self) -> None:
        self._pointer_inside = False
        # A drag keeps its last day so it can continue in another panel
        if not self._drag.is_active:
            self._hovered = None
        self._refresh_preview()

    # ── direct manipulation (date inputs, date display tabs, caller) ─────

    def select_day(self, value: DayInput, part: Optional[FocusedPart] = None) -> bool:
        """
        Commit a day typed or picked outside the grid. Same rules as a click:
        unreadable or disabled days are rejected.
        """
        day = parse_day(value)
        if day is None or self.is_disabled(day):
            return False
        self._dispatch(self.commit_day, day, part or self._focused_part)
        return True

    def set_focused_part(self, part: FocusedPart) -> None:
        self._dispatch(self._set_focused_part, part)

    def set_range(self, date_range: DateRange) -> None:
        """Replace the range (controlled mode). Does not fire on_range_change."""
        self._dispatch(self._set_range, date_range)

    def set_range_dates(self, start: DayInput = None, end: DayInput = None) -> None:
        self.set_range(make_range(start, end, self._range.key, self._range.color))

    def _set_range(self, date_range: DateRange) -> None:
        if date_range.color is None:
            date_range = replace(date_range, color=self._config.color)
        self._range = normalize_range(date_range)
        self._refresh_preview()

    def _set_focused_part(self, part: FocusedPart) -> None:
        if part is self._focused_part:
            return
        self._focused_part = part
        logger.debug(f"Focused part -> {part.name}")
        self._publisher.publish_focused_part_changed(part)

    def update_config(self, **changes: Any) -> PickerConfig:
        """
        Replace configuration values. Any open session is cancelled first so
        it never straddles two rule sets. Invalid values raise here; applying
        the new configuration is queued like any other event.
        """
        config = replace(self._config, **changes)
        self._dispatch(self._apply_config, config)
        return config

    def _apply_config(self, config: PickerConfig) -> None:
        self._drag.cancel()
        self._config = config
        self._rules = config.disabled_rules
        self._policy = config.assignment_policy
        self._debouncer.delay_ms = config.debounce_ms
        self._drag.drag_enabled = config.drag_selection_enabled
        self._refresh_preview()

    # ── navigation ───────────────────────────────────────────────────────

    def set_shown_month(self, value: DayInput) -> bool:
        day = parse_day(value)
        if day is None:
            return False
        self._dispatch(self._set_shown_month, day.start_of_month())
        return True

    def set_active_month(self, value: DayInput) -> bool:
        """Show `value` in the active panel, keeping panel offsets."""
        day = parse_day(value)
        if day is None:
            return False
        return self.set_shown_month(day.start_of_month().add_months(-self.active_panel_index))

    def show_next_month(self) -> None:
        self._dispatch(self._set_shown_month, self._shown_month.add_months(1))

    def show_previous_month(self) -> None:
        self._dispatch(self._set_shown_month, self._shown_month.add_months(-1))

    def _set_shown_month(self, month: Day) -> None:
        if month == self._shown_month:
            return
        self._shown_month = month
        logger.debug(f"Shown month -> {month}")
        self._publisher.publish_shown_month_changed(month)

    # ── internals ────────────────────────────────────────────────────────

    def _refresh_preview(self) -> None:
        if not self._config.show_preview:
            preview = None
        else:
            candidate = self._drag.candidate()
            if candidate is not None:
                preview = assign_span(self._range, *candidate)
            elif self._hovered is not None:
                preview = compute_preview(self._range, self._hovered)
            else:
                preview = None

        if preview == self._preview:
            return
        self._preview = preview
        self._publisher.publish_preview_changed(preview)

    def _dispatch(self, handler: Callable[..., Any], *args: Any) -> None:
        self._queue.append((handler, args))
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._queue:
                queued_handler, queued_args = self._queue.popleft()
                queued_handler(*queued_args)
        finally:
            self._dispatching = False
