"""
Range Picker

Calendar date-range selection engine: click and drag selection across one
or more month panels, hover preview, disabled-day rules and change
notifications. Rendering is left to the host UI; a PySide6 bridge is
provided in range_picker.qt_bridge.

Public API:
    Classes:
        - Day: Immutable calendar day
        - DateRange: Selected range (start/end, key, color)
        - FocusedPart: Which endpoint the next selection targets
        - PickerConfig: Validated picker configuration
        - MultiPanelCoordinator: Shared selection state for N panels
        - MonthPanel / DayCellState: Per-month view and cell render flags
        - DragSelectionController: Click/drag state machine

    Scheduling:
        - ManualScheduler, ImmediateScheduler, AsyncioScheduler, Debouncer

    Exceptions:
        - RangePickerException: Base picker exception
        - InvalidDateException: Invalid date creation
        - PickerConfigurationException: Configuration errors
        - PickerStateException: Picker state errors

    Utilities:
        - parse_day(): Convert loose date input to Day (or None)
        - assign_day() / normalize_range(): Pure assignment rules
        - compute_preview(): Hover preview range
        - is_day_disabled(): Disabled-day rules

Example Usage:
    >>> from range_picker import MultiPanelCoordinator, PickerConfig, Day
    >>> picker = MultiPanelCoordinator(PickerConfig(months=2))
    >>> picker.press(Day(2024, 1, 10)); picker.move(Day(2024, 2, 3))
    >>> picker.release(Day(2024, 2, 3))
    >>> print(picker.range)
    selection: 2024-01-10 -> 2024-02-03
"""

from .date_models import (
    Day,
    DayComparison,
    parse_day,
    compare_days,
    is_same_day,
    is_before,
    is_after,
    is_in_range,
    is_same_month,
    calendar_days,
    format_day,
    is_valid_date
)

from .range_models import (
    DateRange,
    FocusedPart,
    AssignmentPolicy,
    make_range,
    normalize_range,
    assign_day,
    assign_span,
    is_range_start,
    is_range_end
)

from .disabled_dates import DisabledDateRules, is_day_disabled
from .preview import compute_preview

from .scheduling import (
    Scheduler,
    ManualScheduler,
    ImmediateScheduler,
    AsyncioScheduler,
    Debouncer
)

from .drag_selection import DragPhase, DragSession, DragSelectionController
from .picker_config import PickerConfig
from .month_panel import MonthPanel, DayCellState
from .coordinator import MultiPanelCoordinator

from .picker_notifications import (
    NotificationType,
    PickerNotification,
    PickerEventPublisher
)

from .picker_exceptions import (
    RangePickerException,
    InvalidDateException,
    PickerConfigurationException,
    PickerStateException,
    handle_picker_exception
)

__version__ = "1.0.0"

__all__ = [
    # Dates
    'Day',
    'DayComparison',
    'parse_day',
    'compare_days',
    'is_same_day',
    'is_before',
    'is_after',
    'is_in_range',
    'is_same_month',
    'calendar_days',
    'format_day',
    'is_valid_date',

    # Ranges
    'DateRange',
    'FocusedPart',
    'AssignmentPolicy',
    'make_range',
    'normalize_range',
    'assign_day',
    'assign_span',
    'is_range_start',
    'is_range_end',
    'DisabledDateRules',
    'is_day_disabled',
    'compute_preview',

    # Interaction
    'Scheduler',
    'ManualScheduler',
    'ImmediateScheduler',
    'AsyncioScheduler',
    'Debouncer',
    'DragPhase',
    'DragSession',
    'DragSelectionController',
    'PickerConfig',
    'MonthPanel',
    'DayCellState',
    'MultiPanelCoordinator',

    # Notifications
    'NotificationType',
    'PickerNotification',
    'PickerEventPublisher',

    # Exceptions
    'RangePickerException',
    'InvalidDateException',
    'PickerConfigurationException',
    'PickerStateException',
    'handle_picker_exception'
]
