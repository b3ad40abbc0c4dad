"""
Qt Bridge - Hooks a picker into a PySide6 application.

Provides:
- QtScheduler: drag debounce driven by single-shot QTimers
- QDate conversion helpers
- RangePickerSignals: picker notifications re-emitted as Qt signals
"""

from typing import List, Optional
import logging

from PySide6.QtCore import QDate, QObject, QTimer, Signal

from .date_models import Day
from .picker_notifications import NotificationType, PickerEventPublisher, PickerNotification
from .scheduling import Callback


logger = logging.getLogger(__name__)


class _QtTimerHandle:
    def __init__(self, scheduler: "QtScheduler", timer: QTimer):
        self._scheduler = scheduler
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()
        self._scheduler._discard(self._timer)


class QtScheduler:
    """
    Scheduler backed by the Qt event loop.

    Each call gets its own single-shot QTimer parented to `parent`, so pending
    timers die with the widget that owns the picker.
    """

    def __init__(self, parent: Optional[QObject] = None):
        self._parent = parent
        self._timers: List[QTimer] = []

    @property
    def pending_count(self) -> int:
        return sum(1 for timer in self._timers if timer.isActive())

    def call_later(self, delay_ms: int, callback: Callback) -> _QtTimerHandle:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)

        def on_timeout() -> None:
            self._discard(timer)
            callback()

        timer.timeout.connect(on_timeout)
        timer.start(max(0, delay_ms))
        self._timers.append(timer)
        return _QtTimerHandle(self, timer)

    def _discard(self, timer: QTimer) -> None:
        if timer in self._timers:
            self._timers.remove(timer)
            timer.deleteLater()


def day_from_qdate(qdate: QDate) -> Optional[Day]:
    """Convert a QDate; null or invalid dates become None."""
    if qdate is None or qdate.isNull() or not qdate.isValid():
        return None
    return Day(qdate.year(), qdate.month(), qdate.day())


def day_to_qdate(day: Optional[Day]) -> QDate:
    """Convert a Day; None becomes a null QDate."""
    if day is None:
        return QDate()
    return QDate(day.year, day.month, day.day)


class RangePickerSignals(QObject):
    """
    Qt signal facade over a PickerEventPublisher.

    Signals:
        range_changed: DateRange after every committed assignment
        focused_part_changed: FocusedPart after focus moved
        preview_changed: DateRange or None
        shown_month_changed: Day (first of month) after navigation
    """

    range_changed = Signal(object)
    focused_part_changed = Signal(object)
    preview_changed = Signal(object)
    shown_month_changed = Signal(object)

    def __init__(self, publisher: PickerEventPublisher, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._publisher = publisher
        self._signals = {
            NotificationType.RANGE_CHANGED: self.range_changed,
            NotificationType.FOCUSED_PART_CHANGED: self.focused_part_changed,
            NotificationType.PREVIEW_CHANGED: self.preview_changed,
            NotificationType.SHOWN_MONTH_CHANGED: self.shown_month_changed,
        }
        publisher.subscribe(self._on_notification)

    def _on_notification(self, notification: PickerNotification) -> None:
        signal = self._signals.get(notification.notification_type)
        if signal is None:
            logger.debug(f"No Qt signal for {notification.notification_type.value}")
            return
        signal.emit(notification.payload)

    def disconnect_publisher(self) -> None:
        """Stop forwarding notifications."""
        self._publisher.unsubscribe(self._on_notification)
