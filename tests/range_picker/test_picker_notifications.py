"""
Tests for picker notifications and the event publisher.
"""

import logging
import pytest
from datetime import datetime

from range_picker.date_models import Day
from range_picker.picker_notifications import (
    NotificationType, PickerNotification, PickerEventPublisher,
    RangeChangedNotification, FocusedPartChangedNotification,
    PreviewChangedNotification, ShownMonthChangedNotification
)
from range_picker.range_models import DateRange, FocusedPart


class TestNotifications:
    """Factory methods and validation."""

    def test_range_changed_carries_full_range(self):
        date_range = DateRange(Day(2024, 1, 10), None, key="trip")
        notification = RangeChangedNotification.create(date_range)

        assert notification.notification_type is NotificationType.RANGE_CHANGED
        assert notification.payload is date_range
        assert notification.data["ranges"] == {"trip": date_range}
        assert notification.data["start_date"] == "2024-01-10"
        assert notification.data["end_date"] is None

    def test_focused_part_changed(self):
        notification = FocusedPartChangedNotification.create(FocusedPart.END)
        assert notification.payload is FocusedPart.END
        assert notification.data["focused_range"] == (0, 1)

    def test_preview_changed_may_be_cleared(self):
        assert PreviewChangedNotification.create(None).payload is None

    def test_shown_month_changed(self):
        notification = ShownMonthChangedNotification.create(Day(2024, 3, 1))
        assert notification.data["shown_month"] == "2024-03-01"

    def test_validation(self):
        with pytest.raises(ValueError, match="Timestamp"):
            PickerNotification(NotificationType.RANGE_CHANGED, "now")
        with pytest.raises(ValueError, match="Data"):
            PickerNotification(NotificationType.RANGE_CHANGED, datetime.now(), data=[])


class TestPickerEventPublisher:
    """Subscription management and delivery."""

    def test_subscribe_all_and_by_type(self):
        publisher = PickerEventPublisher()
        everything, ranges = [], []
        publisher.subscribe(everything.append)
        publisher.subscribe(ranges.append, [NotificationType.RANGE_CHANGED])

        publisher.publish_range_changed(DateRange())
        publisher.publish_focused_part_changed(FocusedPart.END)

        assert len(everything) == 2
        assert [n.notification_type for n in ranges] == [NotificationType.RANGE_CHANGED]

    def test_duplicate_subscription_ignored(self):
        publisher = PickerEventPublisher()
        received = []
        publisher.subscribe(received.append)
        publisher.subscribe(received.append)
        publisher.publish_preview_changed(None)
        assert len(received) == 1

    def test_unsubscribe(self):
        publisher = PickerEventPublisher()
        received = []
        listener = received.append
        publisher.subscribe(listener)
        publisher.subscribe(listener, [NotificationType.SHOWN_MONTH_CHANGED])
        publisher.unsubscribe(listener)
        publisher.publish_shown_month_changed(Day(2024, 1, 1))
        assert received == []

    def test_non_callable_rejected(self):
        with pytest.raises(ValueError, match="callable"):
            PickerEventPublisher().subscribe("not callable")

    def test_failing_listener_logged_and_skipped(self, caplog):
        publisher = PickerEventPublisher()
        received = []

        def broken(notification):
            raise RuntimeError("boom")

        publisher.subscribe(broken)
        publisher.subscribe(received.append)

        with caplog.at_level(logging.WARNING, logger="range_picker.picker_notifications"):
            publisher.publish_range_changed(DateRange())

        assert len(received) == 1
        assert "listener failed on range_changed" in caplog.text

    def test_subscriber_count(self):
        publisher = PickerEventPublisher()
        publisher.subscribe(lambda n: None)
        publisher.subscribe(lambda n: None, [NotificationType.PREVIEW_CHANGED])
        counts = publisher.get_subscriber_count()
        assert counts["all_types"] == 1
        assert counts["type_preview_changed"] == 1
        assert counts["type_range_changed"] == 0
