"""
Pytest configuration for test discovery and imports.

Provides fixtures for testing including:
- Deterministic scheduler
- Picker factory
- QApplication for Qt bridge tests
"""

import os
import sys
from pathlib import Path
import pytest


# Determine paths
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
tests_path = project_root / "tests"


def pytest_configure(config):
    """Configure pytest - runs very early in startup.

    Project root and src MUST come before tests/ so tests/range_picker never
    shadows the range_picker package.
    """
    to_remove = [key for key in sys.modules.keys() if key.startswith('range_picker')]
    for key in to_remove:
        del sys.modules[key]

    seen = set()
    new_path = []
    for p in sys.path:
        if p not in seen and p != str(tests_path):
            seen.add(p)
            new_path.append(p)

    for path in [str(src_path), str(project_root)]:
        if path in new_path:
            new_path.remove(path)

    new_path.insert(0, str(project_root))
    new_path.insert(0, str(src_path))

    sys.path[:] = new_path

    # Qt tests run headless
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


# ============================================================================
# PICKER FIXTURES
# ============================================================================

@pytest.fixture
def scheduler():
    """ManualScheduler starting at t=0."""
    from range_picker.scheduling import ManualScheduler
    return ManualScheduler()


@pytest.fixture
def events():
    """
    Recorder for picker callbacks.

    Returns:
        Dict of lists keyed by callback name
    """
    return {"range": [], "focus": [], "preview": [], "month": []}


@pytest.fixture
def make_picker(scheduler, events):
    """
    Factory building a MultiPanelCoordinator wired to `scheduler` and `events`.

    Keyword arguments go to PickerConfig, except initial_range and shown_month.
    """
    from range_picker.coordinator import MultiPanelCoordinator
    from range_picker.picker_config import PickerConfig

    def _make(initial_range=None, shown_month="2024-01-01", **config):
        return MultiPanelCoordinator(
            PickerConfig(**config),
            initial_range=initial_range,
            scheduler=scheduler,
            shown_month=shown_month,
            on_range_change=events["range"].append,
            on_focused_part_change=events["focus"].append,
            on_preview_change=events["preview"].append,
            on_shown_month_change=events["month"].append,
        )

    return _make


@pytest.fixture(scope="module")
def qapp():
    """Create QApplication for tests."""
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app
