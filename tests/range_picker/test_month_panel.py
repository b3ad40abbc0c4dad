"""
Tests for MonthPanel views and cell flags.
"""

from datetime import date as PyDate

from range_picker.date_models import Day
from range_picker.range_models import DateRange


def jan(day):
    return Day(2024, 1, day)


class TestMonthPanel:
    """Panel layout and forwarding."""

    def test_grid_and_title(self, make_picker):
        panel = make_picker().panel(0)
        days = panel.days()
        assert len(days) == 42
        assert days[0] == Day(2023, 12, 31)
        assert panel.title == "January 2024"
        assert repr(panel) == "MonthPanel(index=0, month=2024-01)"

    def test_week_start_shifts_grid(self, make_picker):
        panel = make_picker(week_starts_on=1).panel(0)
        assert panel.days()[0] == jan(1)

    def test_panels_follow_navigation(self, make_picker):
        picker = make_picker(months=2)
        second = picker.panel(1)
        picker.show_next_month()
        assert second.month == Day(2024, 3, 1)

    def test_active_panel(self, make_picker):
        picker = make_picker(months=2, initial_focused_part="end")
        assert not picker.panel(0).is_active
        assert picker.panel(1).is_active

    def test_events_forwarded(self, make_picker):
        picker = make_picker(months=2)
        first, second = picker.panels()
        first.press(jan(10))
        first.release(jan(10))
        first.click(jan(10))
        second.click(Day(2024, 2, 2))
        assert (picker.range.start, picker.range.end) == (jan(10), Day(2024, 2, 2))

    def test_second_panel_rejects_first_panel_month_cells(self, make_picker):
        picker = make_picker(months=2)
        picker.panel(1).click(jan(31))
        assert picker.range.is_empty


class TestDayState:
    """Render flags."""

    def test_range_flags(self, make_picker):
        panel = make_picker(initial_range=DateRange(jan(10), jan(20))).panel(0)

        start = panel.day_state(jan(10))
        assert start.is_selected and start.is_start_of_range
        assert not start.is_in_range

        middle = panel.day_state(jan(15))
        assert middle.is_selected and middle.is_in_range
        assert not middle.is_start_of_range and not middle.is_end_of_range

        end = panel.day_state(jan(20))
        assert end.is_end_of_range and not end.is_in_range

        outside = panel.day_state(jan(21))
        assert not outside.is_selected

    def test_passive_days_get_no_selection_flags(self, make_picker):
        panel = make_picker(initial_range=DateRange(Day(2023, 12, 25), jan(5))).panel(0)
        december = panel.day_state(Day(2023, 12, 31))
        assert december.is_passive
        assert not december.is_selected

    def test_disabled_flag(self, make_picker):
        panel = make_picker(disabled_dates=["2024-01-12"],
                            initial_range=DateRange(jan(10), jan(20))).panel(0)
        state = panel.day_state(jan(12))
        assert state.is_disabled
        assert not state.is_selected

    def test_calendar_position_flags(self, make_picker):
        panel = make_picker().panel(0)
        assert panel.day_state(jan(7)).is_start_of_week
        assert panel.day_state(jan(13)).is_end_of_week
        assert panel.day_state(jan(1)).is_start_of_month
        assert panel.day_state(jan(31)).is_end_of_month

    def test_today_flag(self, make_picker):
        today = Day.from_python_date(PyDate.today())
        panel = make_picker(shown_month=today).panel(0)
        assert panel.day_state(today).is_today

    def test_preview_flags(self, make_picker):
        picker = make_picker(initial_range=DateRange(jan(8), None))
        picker.hover_enter(jan(11))
        panel = picker.panel(0)

        first = panel.day_state(jan(8))
        assert first.is_in_preview and first.is_preview_start
        assert not first.preview_has_prev and first.preview_has_next

        middle = panel.day_state(jan(9))
        assert middle.preview_has_prev and middle.preview_has_next

        last = panel.day_state(jan(11))
        assert last.is_preview_end and not last.preview_has_next

        assert not panel.day_state(jan(12)).is_in_preview

    def test_preview_neighbours_break_at_week_edges(self, make_picker):
        """Jan 13 is a Saturday, Jan 14 a Sunday."""
        picker = make_picker(initial_range=DateRange(jan(10), None))
        picker.hover_enter(jan(16))
        panel = picker.panel(0)
        assert not panel.day_state(jan(13)).preview_has_next
        assert not panel.day_state(jan(14)).preview_has_prev

    def test_unreadable_day(self, make_picker):
        assert make_picker().panel(0).day_state("junk") is None

    def test_day_states_cover_grid(self, make_picker):
        states = make_picker().panel(0).day_states()
        assert len(states) == 42
        assert sum(1 for state in states if not state.is_passive) == 31
