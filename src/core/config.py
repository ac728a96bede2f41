"""
Centralized configuration for PyMixTimeline.
All timeline geometry and transport settings in one place.
"""
import math
from dataclasses import dataclass
from enum import Enum, auto


class PlaybackState(Enum):
    """Playback state enumeration."""
    STOPPED = auto()
    PLAYING = auto()
    PAUSED = auto()


class Edge(Enum):
    """Clip edge grabbed by a resize handle."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True, slots=True)
class TimelineConfig:
    """Timeline canvas geometry and playhead settings."""
    width: float = 1000.0
    duration_seconds: float = 120.0
    tick_interval_ms: int = 50  # playhead update rate, independent of repaint
    row_height: float = 40.0
    max_rows: int = 2
    initial_x: float = 40.0
    initial_y: float = 20.0
    min_clip_width: float = 150.0
    margin: float = 5.0  # required empty gap between clips in a row
    clip_height: float = 30.0
    stop_at_end: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.duration_seconds <= 0:
            raise ValueError("Timeline width and duration must be positive")
        if self.tick_interval_ms <= 0:
            raise ValueError("tick_interval_ms must be positive")
        if self.max_rows < 1 or self.row_height <= 0:
            raise ValueError("Timeline needs at least one row of positive height")
        if self.min_clip_width <= 0 or self.margin < 0:
            raise ValueError("Invalid clip width or margin")
        if self.initial_x < 0 or self.initial_x + self.min_clip_width > self.width:
            raise ValueError("Timeline is too narrow to hold a single clip")

    @property
    def tick_seconds(self) -> float:
        return self.tick_interval_ms / 1000.0

    def row_y(self, row_index: int) -> float:
        """Vertical offset of a row."""
        return self.initial_y + row_index * self.row_height

    def row_index_of(self, y: float) -> int:
        """
        Row index for a row offset, tolerating float noise around it.

        Raises:
            ValueError: if y is not the offset of one of the rows
        """
        if not math.isfinite(y):
            raise ValueError(f"y={y} is not a row offset")
        index = (y - self.initial_y) / self.row_height
        if not math.isclose(index, round(index), abs_tol=1e-9) or not 0 <= round(index) < self.max_rows:
            raise ValueError(f"y={y} is not a row offset")
        return int(round(index))

    def position_for_time(self, seconds: float) -> float:
        """Timeline x for a playback time, saturating at the timeline width."""
        if seconds >= self.duration_seconds:
            return self.width
        return max(0.0, seconds / self.duration_seconds * self.width)

    def time_for_position(self, x: float) -> float:
        """Playback time for a timeline x, clamped to [0, duration]."""
        x = min(max(x, 0.0), self.width)
        return x / self.width * self.duration_seconds


@dataclass(frozen=True, slots=True)
class UndoConfig:
    """Undo/Redo configuration."""
    max_depth: int = 50


# Global config instances (immutable singletons)
TIMELINE_CONFIG = TimelineConfig()
UNDO_CONFIG = UndoConfig()
