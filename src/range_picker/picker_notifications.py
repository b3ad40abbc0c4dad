"""
Picker Notifications

Publisher-subscriber change contract between the picker and its callers.
Every RANGE_CHANGED notification carries the full range, never a delta.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, List, Callable, Optional
from enum import Enum
import logging

from .date_models import Day
from .range_models import DateRange, FocusedPart


logger = logging.getLogger(__name__)


class NotificationType(Enum):
    """Types of picker notifications that can be published."""
    RANGE_CHANGED = "range_changed"
    FOCUSED_PART_CHANGED = "focused_part_changed"
    PREVIEW_CHANGED = "preview_changed"
    SHOWN_MONTH_CHANGED = "shown_month_changed"


@dataclass(frozen=True)
class PickerNotification:
    """
    Notification about a picker state change.

    `payload` is the single value the matching on_* callback receives.
    """
    notification_type: NotificationType
    timestamp: datetime
    data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate notification data."""
        if not isinstance(self.timestamp, datetime):
            raise ValueError("Timestamp must be a datetime object")
        if not isinstance(self.data, dict):
            raise ValueError("Data must be a dictionary")

    @property
    def payload(self) -> Any:
        return self.data.get("payload")


@dataclass(frozen=True)
class RangeChangedNotification(PickerNotification):
    """A committed assignment replaced the range."""

    @classmethod
    def create(cls, date_range: DateRange) -> "RangeChangedNotification":
        return cls(
            notification_type=NotificationType.RANGE_CHANGED,
            timestamp=datetime.now(),
            data={
                "payload": date_range,
                "ranges": date_range.to_key_dict(),
                "start_date": str(date_range.start) if date_range.start else None,
                "end_date": str(date_range.end) if date_range.end else None,
            }
        )


@dataclass(frozen=True)
class FocusedPartChangedNotification(PickerNotification):

    @classmethod
    def create(cls, part: FocusedPart) -> "FocusedPartChangedNotification":
        return cls(
            notification_type=NotificationType.FOCUSED_PART_CHANGED,
            timestamp=datetime.now(),
            data={"payload": part, "focused_range": (0, part.value)}
        )


@dataclass(frozen=True)
class PreviewChangedNotification(PickerNotification):
    """Preview replaced or cleared (payload None)."""

    @classmethod
    def create(cls, preview: Optional[DateRange]) -> "PreviewChangedNotification":
        return cls(
            notification_type=NotificationType.PREVIEW_CHANGED,
            timestamp=datetime.now(),
            data={"payload": preview}
        )


@dataclass(frozen=True)
class ShownMonthChangedNotification(PickerNotification):

    @classmethod
    def create(cls, month: Day) -> "ShownMonthChangedNotification":
        return cls(
            notification_type=NotificationType.SHOWN_MONTH_CHANGED,
            timestamp=datetime.now(),
            data={"payload": month, "shown_month": str(month)}
        )


# Type alias for notification listeners
NotificationListener = Callable[[PickerNotification], None]


class PickerEventPublisher:
    """
    Publisher for picker notifications using the observer pattern.

    A failing listener is logged and does not stop delivery to the others.
    """

    def __init__(self):
        """Initialize publisher with empty subscriber list."""
        self._subscribers: List[NotificationListener] = []
        self._type_subscribers: Dict[NotificationType, List[NotificationListener]] = {
            notification_type: [] for notification_type in NotificationType
        }

    def subscribe(self, listener: NotificationListener,
                  notification_types: Optional[List[NotificationType]] = None) -> None:
        """
        Subscribe to picker notifications.

        Args:
            listener: Callable that receives PickerNotification objects
            notification_types: Optional list of specific types to listen for.
                               If None, listener receives all notifications.
        """
        if not callable(listener):
            raise ValueError("Listener must be callable")

        if notification_types is None:
            if listener not in self._subscribers:
                self._subscribers.append(listener)
        else:
            for notification_type in notification_types:
                if listener not in self._type_subscribers[notification_type]:
                    self._type_subscribers[notification_type].append(listener)

    def unsubscribe(self, listener: NotificationListener) -> None:
        """Unsubscribe a listener from all notifications."""
        if listener in self._subscribers:
            self._subscribers.remove(listener)

        for type_list in self._type_subscribers.values():
            if listener in type_list:
                type_list.remove(listener)

    def publish(self, notification: PickerNotification) -> None:
        """Publish a notification to all relevant subscribers."""
        listeners = list(self._subscribers)
        listeners.extend(self._type_subscribers.get(notification.notification_type, []))

        for listener in listeners:
            try:
                listener(notification)
            except Exception:
                logger.warning(
                    f"Picker notification listener failed on {notification.notification_type.value}",
                    exc_info=True
                )

    def publish_range_changed(self, date_range: DateRange) -> None:
        self.publish(RangeChangedNotification.create(date_range))

    def publish_focused_part_changed(self, part: FocusedPart) -> None:
        self.publish(FocusedPartChangedNotification.create(part))

    def publish_preview_changed(self, preview: Optional[DateRange]) -> None:
        self.publish(PreviewChangedNotification.create(preview))

    def publish_shown_month_changed(self, month: Day) -> None:
        self.publish(ShownMonthChangedNotification.create(month))

    def get_subscriber_count(self) -> Dict[str, int]:
        """
        Get current subscriber counts for monitoring.

        Returns:
            Dictionary with subscriber counts by type
        """
        return {
            "all_types": len(self._subscribers),
            **{
                f"type_{notification_type.value}": len(subscribers)
                for notification_type, subscribers in self._type_subscribers.items()
            }
        }
