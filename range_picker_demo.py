#!/usr/bin/env python3
"""
Range Picker Demo

Drives a two-month picker with scripted pointer events: a click selection,
a drag that crosses from the first displayed month into the second, a drag
released outside the widget, and a drag over disabled days. Debounced moves
run on a ManualScheduler so every step is visible.
"""

import sys
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from range_picker import Day, ManualScheduler, MultiPanelCoordinator, PickerConfig
from range_picker.constants import DEFAULT_WEEK_DAYS
from range_picker.logging_config import setup_logging, setup_selection_logging


def print_panel(picker, index):
    """Print a panel as text: [ selected, ( preview, x disabled."""
    panel = picker.panel(index)
    print(f"  {panel.title:^27}")
    print("  " + " ".join(f"{name:>3}" for name in DEFAULT_WEEK_DAYS))
    cells = []
    for state in panel.day_states():
        if state.is_passive:
            cells.append("   ")
        elif state.is_disabled:
            cells.append("  x")
        else:
            mark = "[" if state.is_selected else "(" if state.is_in_preview else " "
            cells.append(f"{mark}{state.day.day:2d}")
    for week in range(6):
        print("  " + " ".join(cells[week * 7:(week + 1) * 7]))


def demo_click_selection(picker):
    print("=" * 60)
    print("CLICK SELECTION")
    print("=" * 60)
    for day in (Day(2024, 1, 10), Day(2024, 1, 16)):
        picker.press(day, panel_month=day)
        picker.release(day, panel_month=day)
        picker.click(day, panel_month=day)
    print_panel(picker, 0)
    print()


def demo_cross_panel_drag(picker, scheduler):
    print("=" * 60)
    print("DRAG ACROSS PANELS")
    print("=" * 60)
    first, second = picker.panels()
    first.press(Day(2024, 1, 29))
    for day in (30, 31):
        first.hover_enter(Day(2024, 1, day))
        first.move(Day(2024, 1, day))
    first.leave()
    second.enter()
    for day in (1, 2, 3, 4):
        second.hover_enter(Day(2024, 2, day))
        second.move(Day(2024, 2, day))
    print(f"  pending move: {picker.drag.move_pending}, preview: {picker.preview}")
    scheduler.advance(16)
    second.release(Day(2024, 2, 4))
    second.click(Day(2024, 2, 4))
    print_panel(picker, 0)
    print_panel(picker, 1)
    print()


def demo_release_outside(picker):
    print("=" * 60)
    print("RELEASE OUTSIDE THE WIDGET")
    print("=" * 60)
    picker.press(Day(2024, 1, 8))
    picker.move(Day(2024, 1, 11))
    picker.leave_panel(0)
    picker.global_release()
    print(f"  phase after global release: {picker.drag_phase.value}")
    print()


def demo_disabled_days(picker, scheduler):
    print("=" * 60)
    print("DRAG OVER DISABLED DAYS")
    print("=" * 60)
    picker.press(Day(2024, 1, 22))
    for day in (23, 24, 25, 26):
        picker.move(Day(2024, 1, day))
    scheduler.advance(16)
    picker.release(Day(2024, 1, 26))
    print_panel(picker, 0)
    print()


def main():
    setup_logging(level="INFO", enable_file=False)
    if "--trace" in sys.argv:
        setup_selection_logging("DEBUG")

    scheduler = ManualScheduler()
    picker = MultiPanelCoordinator(
        PickerConfig(months=2, disabled_dates=["2024-01-25", "2024-01-26"]),
        scheduler=scheduler,
        shown_month=Day(2024, 1, 1),
        on_range_change=lambda date_range: print(f"  onRangeChange -> {date_range}"),
        on_focused_part_change=lambda part: print(f"  onFocusedPartChange -> {part.name}"),
    )

    demo_click_selection(picker)
    demo_cross_panel_drag(picker, scheduler)
    demo_release_outside(picker)
    demo_disabled_days(picker, scheduler)


if __name__ == "__main__":
    main()
