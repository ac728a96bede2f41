"""
Pytest configuration and fixtures for PyMixTimeline tests.
"""
import dataclasses

import pytest
from PyQt6.QtCore import QCoreApplication

from src.core.clip import TimelineClip
from src.core.clip_store import ClipStore
from src.core.config import TIMELINE_CONFIG, TimelineConfig
from src.core.placement import PlacementSolver
from src.core.playhead import PlayheadClock
from src.core.row_allocator import RowAllocator
from src.core.timeline import TimelineController
from src.core.undo_manager import UndoManager


@pytest.fixture(scope="session", autouse=True)
def qt_app() -> QCoreApplication:
    """QTimer needs an application instance in the main thread."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


@pytest.fixture
def config() -> TimelineConfig:
    """Default timeline geometry (width 1000, margin 5, x from 40)."""
    return TIMELINE_CONFIG


@pytest.fixture
def wide_margin_config() -> TimelineConfig:
    """Geometry with a 10 unit margin and clips allowed from x=0."""
    return dataclasses.replace(TIMELINE_CONFIG, margin=10.0, initial_x=0.0)


@pytest.fixture
def store(config) -> ClipStore:
    return ClipStore(config)


@pytest.fixture
def allocator(config) -> RowAllocator:
    return RowAllocator(config)


@pytest.fixture
def solver(config) -> PlacementSolver:
    return PlacementSolver(config)


@pytest.fixture
def clock(config):
    clock = PlayheadClock(config)
    yield clock
    clock.cleanup()


@pytest.fixture
def timeline(config):
    controller = TimelineController(config)
    yield controller
    controller.dispose()


@pytest.fixture
def undo_manager() -> UndoManager:
    """Create an undo manager."""
    return UndoManager(max_depth=10)


def make_clip(x, width=150.0, row=0, name="clip", clip_id=0, config=TIMELINE_CONFIG) -> TimelineClip:
    """Build a clip in a row without going through the store."""
    return TimelineClip(name=name, x=x, y=config.row_y(row), width=width, clip_id=clip_id)
