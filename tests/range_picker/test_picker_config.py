"""
Tests for PickerConfig validation and coercion.
"""

import logging
import pytest

from range_picker.constants import DEFAULT_COLOR, DEFAULT_DEBOUNCE_MS
from range_picker.date_models import Day
from range_picker.picker_config import PickerConfig
from range_picker.picker_exceptions import PickerConfigurationException
from range_picker.range_models import FocusedPart


class TestDefaults:

    def test_defaults(self):
        config = PickerConfig()
        assert config.week_starts_on == 0
        assert config.months == 1
        assert config.drag_selection_enabled
        assert not config.move_range_on_first_selection
        assert config.initial_focused_part is FocusedPart.START
        assert config.debounce_ms == DEFAULT_DEBOUNCE_MS
        assert config.color == DEFAULT_COLOR


class TestDateCoercion:
    """Malformed dates degrade to absent."""

    def test_dates_parsed(self):
        config = PickerConfig(min_date="2024-01-01", max_date=1706659200000,
                              disabled_dates=["2024-01-05", "junk"])
        assert config.min_date == Day(2024, 1, 1)
        assert config.max_date == Day(2024, 1, 31)
        assert config.disabled_dates == (Day(2024, 1, 5),)

    def test_unreadable_bound_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="range_picker.picker_config"):
            config = PickerConfig(min_date="soon")
        assert config.min_date is None
        assert "Ignoring unreadable min_date" in caplog.text

    def test_inverted_bounds_warn(self, caplog):
        with caplog.at_level(logging.WARNING, logger="range_picker.picker_config"):
            PickerConfig(min_date="2024-02-01", max_date="2024-01-01")
        assert "every day is disabled" in caplog.text

    def test_rules_and_policy(self):
        config = PickerConfig(max_date="2024-01-31", move_range_on_first_selection=True)
        assert config.disabled_rules.is_disabled(Day(2024, 2, 1))
        assert config.assignment_policy.clears_end_on_start_pick


class TestValidation:
    """Structural mistakes raise PickerConfigurationException."""

    @pytest.mark.parametrize("kwargs,key", [
        ({"week_starts_on": 7}, "week_starts_on"),
        ({"week_starts_on": True}, "week_starts_on"),
        ({"months": 0}, "months"),
        ({"months": 13}, "months"),
        ({"debounce_ms": -1}, "debounce_ms"),
        ({"disabled_day": "weekends"}, "disabled_day"),
        ({"initial_focused_part": "middle"}, "initial_focused_part"),
        ({"initial_focused_part": 2}, "initial_focused_part"),
    ])
    def test_invalid_values(self, kwargs, key):
        with pytest.raises(PickerConfigurationException) as exc_info:
            PickerConfig(**kwargs)
        assert exc_info.value.config_key == key
        assert exc_info.value.error_code == "INVALID_CONFIG"

    @pytest.mark.parametrize("value,expected", [
        ("start", FocusedPart.START),
        ("END", FocusedPart.END),
        ("startDate", FocusedPart.START),
        ("end_date", FocusedPart.END),
        (1, FocusedPart.END),
        (FocusedPart.END, FocusedPart.END),
    ])
    def test_focused_part_coercion(self, value, expected):
        assert PickerConfig(initial_focused_part=value).initial_focused_part is expected


class TestFromDict:

    def test_known_keys_used_unknown_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="range_picker.picker_config"):
            config = PickerConfig.from_dict({"months": 2, "theme": "dark"})
        assert config.months == 2
        assert "Ignoring unknown picker option 'theme'" in caplog.text
