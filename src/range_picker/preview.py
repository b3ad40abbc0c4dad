"""
Hover Preview

The range that would result if the user committed the hovered day now.
Pure; the coordinator decides when a preview is shown at all.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Optional

from .date_models import DayInput, parse_day
from .range_models import DateRange


def compute_preview(date_range: DateRange, hovered: DayInput) -> Optional[DateRange]:
    """
    Preview for `hovered` against the current range.

    The result always contains the hovered day and keeps the range's key and
    color. No hovered day means no preview.
    """
    day = parse_day(hovered)
    if day is None:
        return None

    start, end = date_range.start, date_range.end

    if start is None and end is None:
        return replace(date_range, start=day, end=day)

    if start is None:
        return replace(date_range, start=min(end, day), end=max(end, day))

    if end is None:
        return replace(date_range, start=min(start, day), end=max(start, day))

    if day > start:
        return replace(date_range, start=start, end=day)
    if day < start:
        # Re-anchor on start, the same way a drag going backwards does
        return replace(date_range, start=day, end=start)

    return date_range
