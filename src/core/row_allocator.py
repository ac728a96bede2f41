"""
Maps drop geometry to timeline rows.
"""
from __future__ import annotations
import math
from typing import TYPE_CHECKING, Optional, Sequence

from .clip import TimelineClip
from .config import TimelineConfig
from .errors import CapacityError

if TYPE_CHECKING:
    from .clip_store import ClipStore


class RowAllocator:
    """
    Picks the destination row for a new clip.
    Capacity inside the chosen row is checked by the PlacementSolver, not here.
    """

    def __init__(self, config: TimelineConfig):
        self.config = config

    def row_for_drop(self, drop_y: float) -> int:
        """
        Row under a vertical drop coordinate, clamped to the existing rows.

        Raises:
            ValueError: if drop_y is not a finite coordinate
        """
        if not math.isfinite(drop_y):
            raise ValueError(f"Drop y={drop_y} is not a finite coordinate")
        index = math.floor((drop_y - self.config.initial_y) / self.config.row_height)
        return min(max(index, 0), self.config.max_rows - 1)

    def residual_capacity(self, row_clips: Sequence[TimelineClip]) -> float:
        """Free width at the end of a row, leading margin included."""
        if row_clips:
            tail = max(c.right for c in row_clips)
        else:
            tail = self.config.initial_x - self.config.margin
        return self.config.width - tail

    def first_row_with_room(self, store: "ClipStore", width: Optional[float] = None) -> int:
        """
        First row (in index order) that can take a clip of `width` at its end.
        Defaults to the minimum clip width.

        Raises:
            CapacityError: if no row has that much room left
        """
        width = self.config.min_clip_width if width is None else width
        needed = width + self.config.margin
        for row_index in range(self.config.max_rows):
            if self.residual_capacity(store.in_row(row_index)) >= needed:
                return row_index
        raise CapacityError(f"No row of the timeline has room for a clip {width} wide")
