"""
Drag Selection Controller

State machine turning raw pointer events into range commits:

    IDLE --press--> PRESSED --move(other day)--> DRAGGING
    PRESSED --release--> IDLE          (plain click, commits the anchor)
    DRAGGING --release / global_release--> IDLE   (commits the drag span)
    any --cancel--> IDLE               (no commit)

Rejected input (disabled day, day outside the panel's month) is a silent
no-op. Moves are debounced through a single-slot timer; the latest enabled
day under the pointer always wins, and release commits it directly even if
its timer has not fired yet.

The controller owns only the interaction session. Range, focus and preview
live with the host (the coordinator), reached through SelectionHost.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol, Tuple
import logging

from .date_models import Day, DayInput, parse_day
from .range_models import FocusedPart
from .scheduling import Debouncer


logger = logging.getLogger(__name__)


class DragPhase(Enum):
    IDLE = "idle"
    PRESSED = "pressed"
    DRAGGING = "dragging"


@dataclass
class DragSession:
    """
    One press-to-release interaction.

    anchor: day under the initial press
    moved: the pointer reached another day while pressed (a drag, not a click)
    target: latest enabled day the drag reached, committed or still pending
    """
    anchor: Day
    moved: bool = False
    target: Optional[Day] = None
    active: bool = True


class SelectionHost(Protocol):
    """What the controller needs from whoever owns the range."""

    @property
    def focused_part(self) -> FocusedPart: ...

    def is_disabled(self, day: Day) -> bool: ...

    def is_in_scope(self, day: Day, panel_month: Optional[Day]) -> bool: ...

    def commit_day(self, day: Day, part: FocusedPart) -> None: ...

    def commit_span(self, anchor: Day, day: Day, final: bool) -> None: ...

    def drag_candidate_changed(self) -> None: ...


Dispatch = Callable[[Callable[[], None]], None]


def _run_now(transition: Callable[[], None]) -> None:
    transition()


class DragSelectionController:
    """
    Click/drag disambiguation, debounced drag updates and click suppression.

    The click that some input models synthesize after a release is consumed
    by the controller itself (see click()), so a completed drag never also
    registers as a click on the release cell.
    """

    def __init__(self, host: SelectionHost, debouncer: Debouncer,
                 drag_enabled: bool = True, dispatch: Dispatch = _run_now):
        """
        Args:
            host: Range owner receiving commits
            debouncer: Single-slot timer for drag moves
            drag_enabled: False makes press commit immediately, like a click
            dispatch: Runs the debounced transition; the coordinator passes
                its run-to-completion queue so timer commits never interleave
                with event handling
        """
        self._host = host
        self._debouncer = debouncer
        self._drag_enabled = drag_enabled
        self._dispatch = dispatch
        self._session: Optional[DragSession] = None
        # Day whose synthesized click is still expected after a committing release
        self._suppressed_click: Optional[Day] = None
        # Press committed directly while drag selection is disabled
        self._committed_press: Optional[Day] = None

    # ── state ────────────────────────────────────────────────────────────

    @property
    def session(self) -> Optional[DragSession]:
        return self._session

    @property
    def phase(self) -> DragPhase:
        if self._session is None:
            return DragPhase.IDLE
        return DragPhase.DRAGGING if self._session.moved else DragPhase.PRESSED

    @property
    def is_active(self) -> bool:
        return self._session is not None

    @property
    def is_dragging(self) -> bool:
        return self.phase is DragPhase.DRAGGING

    @property
    def drag_enabled(self) -> bool:
        return self._drag_enabled

    @drag_enabled.setter
    def drag_enabled(self, enabled: bool) -> None:
        if not enabled:
            self.cancel()
        self._drag_enabled = enabled

    @property
    def move_pending(self) -> bool:
        return self._debouncer.pending

    def candidate(self) -> Optional[Tuple[Day, Day]]:
        """(anchor, target) of the live drag, or None when not dragging."""
        session = self._session
        if session is None or not session.moved or session.target is None:
            return None
        return session.anchor, session.target

    # ── transitions ──────────────────────────────────────────────────────

    def press(self, value: DayInput, panel_month: Optional[Day] = None) -> bool:
        """Open a session on the pressed day. Nothing is committed yet."""
        self._suppressed_click = None
        self._committed_press = None
        if self._session is not None:
            logger.debug("Press while a session is open; discarding stale session")
            self.cancel()

        day = self._accept(value, panel_month)
        if day is None:
            return False

        if not self._drag_enabled:
            self._host.commit_day(day, self._host.focused_part)
            self._suppressed_click = day
            self._committed_press = day
            logger.debug(f"Press on {day} committed directly (drag selection disabled)")
            return True

        self._session = DragSession(anchor=day)
        logger.debug(f"Session opened at {day}")
        return True

    def move(self, value: DayInput) -> bool:
        """Pointer reached a day while pressed. Disabled days are ignored."""
        self.pointer_over(value)
        session = self._session
        if session is None:
            return False

        day = parse_day(value)
        if day is None or self._host.is_disabled(day):
            return False

        if not session.moved:
            if day == session.anchor:
                return False
            session.moved = True
            logger.debug(f"Drag started from {session.anchor}")
            self._host.commit_day(session.anchor, FocusedPart.START)

        if day == session.target:
            return False

        session.target = day
        self._host.drag_candidate_changed()
        self._debouncer.schedule(lambda: self._dispatch(self._apply_pending_target))
        return True

    def release(self, value: DayInput = None, panel_month: Optional[Day] = None) -> bool:
        """
        Pointer released over a day.

        Without movement this is a click committing the anchor to the focused
        part. After a drag it commits the latest target (falling back to the
        release day, then the anchor) and suppresses the follow-up click.
        """
        session = self._session
        if session is None:
            self._rearm_committed_press(parse_day(value))
            return False

        if not session.moved:
            self._close()
            if self._host.is_disabled(session.anchor):
                logger.debug(f"Click on {session.anchor} rejected: day disabled")
                return False
            self._suppressed_click = session.anchor
            logger.debug(f"Click committed at {session.anchor}")
            self._host.commit_day(session.anchor, self._host.focused_part)
            return True

        day = parse_day(value)
        final = session.target
        if final is None:
            final = day if day is not None and not self._host.is_disabled(day) else session.anchor
        return self._finish_drag(session, final, day or final)

    def global_release(self) -> bool:
        """
        Pointer released anywhere, possibly outside every panel.

        A drag is finalized with the last known target. A press that never
        moved is closed without committing: the release did not happen over
        the pressed cell.
        """
        session = self._session
        if session is None:
            return False

        if not session.moved:
            logger.debug(f"Session at {session.anchor} released outside the grid")
            self._close()
            self._host.drag_candidate_changed()
            return False

        return self._finish_drag(session, session.target or session.anchor, None)

    def click(self, value: DayInput, panel_month: Optional[Day] = None) -> bool:
        """
        Click or keyboard activation of a day.

        Consumed without effect when it is the click synthesized for a
        release that already committed: the first click after that release,
        on the released day, with the pointer not having moved to another day.
        """
        suppressed, self._suppressed_click = self._suppressed_click, None
        if self._session is not None:
            return False

        day = parse_day(value)
        if day is not None and day == suppressed:
            logger.debug(f"Click on {day} consumed: release already committed")
            return False
        day = self._accept(day, panel_month)
        if day is None:
            return False
        self._host.commit_day(day, self._host.focused_part)
        return True

    def pointer_over(self, value: DayInput) -> None:
        """Pointer reached a day; a pending click suppression for another day lapses."""
        if self._suppressed_click is not None and parse_day(value) != self._suppressed_click:
            self._suppressed_click = None

    def cancel(self) -> bool:
        """Close any open session without committing."""
        if self._session is None:
            return False
        logger.debug(f"Session at {self._session.anchor} cancelled")
        self._close()
        self._host.drag_candidate_changed()
        return True

    # ── internals ────────────────────────────────────────────────────────

    def _accept(self, value: DayInput, panel_month: Optional[Day]) -> Optional[Day]:
        day = parse_day(value)
        if day is None:
            return None
        if self._host.is_disabled(day):
            logger.debug(f"{day} rejected: day disabled")
            return None
        if not self._host.is_in_scope(day, panel_month):
            logger.debug(f"{day} rejected: outside panel month {panel_month}")
            return None
        return day

    def _apply_pending_target(self) -> None:
        session = self._session
        if session is None or not session.moved or session.target is None:
            return
        self._host.commit_span(session.anchor, session.target, False)

    def _finish_drag(self, session: DragSession, final: Day, released: Optional[Day]) -> bool:
        self._close()
        self._suppressed_click = released
        logger.debug(f"Drag finished: {session.anchor} -> {final}")
        self._host.commit_span(session.anchor, final, True)
        return True

    def _rearm_committed_press(self, released: Optional[Day]) -> None:
        pressed, self._committed_press = self._committed_press, None
        if pressed is not None and released == pressed:
            self._suppressed_click = pressed

    def _close(self) -> None:
        self._debouncer.cancel()
        if self._session is not None:
            self._session.active = False
        self._session = None
