"""
Type definitions for the PyMixTimeline core module.
Provides type aliases and result objects shared by the engine and its callers.
"""
from typing import Callable, Optional

from .clip import TimelineClip
from .config import PlaybackState
from .errors import TimelineError

# Store state captured for undo/redo: (clips in insertion order, next id)
ClipSnapshot = tuple[tuple[TimelineClip, ...], int]

# Callback types
UndoFunc = Callable[[], None]
RedoFunc = Callable[[], None]
PositionCallback = Callable[[float], None]  # elapsed seconds
StateCallback = Callable[[PlaybackState], None]


class EditResult:
    """Result of a timeline edit: the committed clip, or the reason it was rejected."""
    __slots__ = ('success', 'clip', 'error')

    def __init__(
        self,
        success: bool,
        clip: Optional[TimelineClip] = None,
        error: Optional[TimelineError] = None
    ):
        self.success = success
        self.clip = clip
        self.error = error

    @classmethod
    def ok(cls, clip: TimelineClip) -> 'EditResult':
        return cls(True, clip=clip)

    @classmethod
    def failed(cls, error: TimelineError, clip: Optional[TimelineClip] = None) -> 'EditResult':
        return cls(False, clip=clip, error=error)

    @property
    def clip_id(self) -> Optional[int]:
        return self.clip.clip_id if self.clip is not None else None

    def __bool__(self) -> bool:
        return self.success

    def __repr__(self) -> str:
        if self.success:
            return f"EditResult(ok, {self.clip!r})"
        return f"EditResult(failed, {type(self.error).__name__}: {self.error})"
