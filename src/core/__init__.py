"""
PyMixTimeline Core Module

This module contains the timeline clip-layout engine:
- TimelineController: Mutation API for one timeline instance
- ClipStore: Authoritative clip collection enforcing the row invariant
- RowAllocator: Maps drop geometry to rows
- PlacementSolver: Non-overlapping insert/move/resize geometry
- PlayheadClock: Fixed-rate playback cursor
- UndoManager: Undo/redo history
"""
from .clip import TimelineClip
from .clip_store import ClipStore
from .row_allocator import RowAllocator
from .placement import PlacementSolver
from .playhead import PlayheadClock
from .timeline import TimelineController
from .undo_manager import UndoManager
from .types import EditResult
from .errors import (
    TimelineError,
    CapacityError,
    NoRoomRejected,
    LayoutError,
    ClipNotFoundError,
)
from .config import (
    TIMELINE_CONFIG,
    UNDO_CONFIG,
    TimelineConfig,
    PlaybackState,
    Edge,
)
from . import layout

__all__ = [
    # Main classes
    'TimelineController',
    'TimelineClip',
    'ClipStore',
    'RowAllocator',
    'PlacementSolver',
    'PlayheadClock',
    'UndoManager',
    'EditResult',
    # Errors
    'TimelineError',
    'CapacityError',
    'NoRoomRejected',
    'LayoutError',
    'ClipNotFoundError',
    # Config
    'TIMELINE_CONFIG',
    'UNDO_CONFIG',
    'TimelineConfig',
    'PlaybackState',
    'Edge',
    # Submodules
    'layout',
]
