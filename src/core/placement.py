"""
Placement solver: computes legal, non-overlapping geometry inside a row.

All operations are pure functions of a row's sorted neighbor list and the
requested geometry. They never touch the store; the caller commits the
result (and the store validates it once more).
"""
from __future__ import annotations
import bisect
from typing import TYPE_CHECKING, Optional, Sequence

from .clip import TimelineClip
from .config import Edge, TimelineConfig
from .errors import CapacityError, NoRoomRejected
from .layout import EPSILON

if TYPE_CHECKING:
    from .clip_store import ClipStore


class PlacementSolver:
    """Finds the nearest legal position/width for insert, move and resize."""

    def __init__(self, config: TimelineConfig):
        self.config = config

    def neighbors_of(
        self,
        store: "ClipStore",
        row_index: int,
        exclude_id: Optional[int] = None
    ) -> list[TimelineClip]:
        """Clips sharing the row, sorted ascending by x, subject excluded."""
        return store.in_row(row_index, exclude_id=exclude_id)

    # --- Insertion ---

    def insert_at_point(
        self,
        neighbors: Sequence[TimelineClip],
        drop_x: float,
        width: Optional[float] = None,
        row_index: Optional[int] = None
    ) -> float:
        """
        Position for a clip dropped at drop_x.

        Tries, in order: the drop point in an empty row, the space before the
        first clip, a gap between two clips that contains the drop point, and
        finally the slot right after the last clip.

        Raises:
            CapacityError: if the resulting clip would pass the timeline end
        """
        cfg = self.config
        width = cfg.min_clip_width if width is None else width

        if not neighbors:
            x = max(cfg.initial_x, min(drop_x, cfg.width - width))
        elif drop_x + width <= neighbors[0].x - cfg.margin and drop_x >= cfg.initial_x:
            x = drop_x
        else:
            x = self._gap_at(neighbors, drop_x, width)
            if x is None:
                x = neighbors[-1].right + cfg.margin

        if x + width > cfg.width + EPSILON:
            raise CapacityError("No more space in this row of the timeline!", row_index=row_index)
        return x

    def _gap_at(self, neighbors: Sequence[TimelineClip], drop_x: float, width: float) -> Optional[float]:
        margin = self.config.margin
        for prev, nxt in zip(neighbors, neighbors[1:]):
            gap_start = prev.right + margin
            gap_end = nxt.x - margin
            if gap_end - gap_start >= width and gap_start <= drop_x and drop_x + width <= gap_end:
                return drop_x
        return None

    def append(
        self,
        neighbors: Sequence[TimelineClip],
        width: Optional[float] = None,
        row_index: Optional[int] = None
    ) -> float:
        """Position right after the last clip of a row (or at the row start)."""
        cfg = self.config
        width = cfg.min_clip_width if width is None else width
        x = neighbors[-1].right + cfg.margin if neighbors else cfg.initial_x
        if x + width > cfg.width + EPSILON:
            raise CapacityError("No more space in this row of the timeline!", row_index=row_index)
        return x

    # --- Drag ---

    def move(self, clip: TimelineClip, neighbors: Sequence[TimelineClip], candidate_x: float) -> float:
        """
        Clamp a dragged clip between the neighbors around candidate_x.

        Raises:
            NoRoomRejected: if the gap around candidate_x is narrower than the clip
        """
        cfg = self.config
        left_boundary = cfg.initial_x
        right_boundary = cfg.width - clip.width

        # Neighbors are disjoint and sorted, so the split point gives the nearest on each side
        i = bisect.bisect_right([n.x for n in neighbors], candidate_x)
        if i > 0:
            left_boundary = neighbors[i - 1].right + cfg.margin
        if i < len(neighbors):
            right_boundary = neighbors[i].x - cfg.margin - clip.width

        if left_boundary > right_boundary + EPSILON:
            raise NoRoomRejected(clip.clip_id)
        return min(max(candidate_x, left_boundary), right_boundary)

    # --- Resize ---

    def edge_bounds(self, clip: TimelineClip, neighbors: Sequence[TimelineClip]) -> tuple[float, float]:
        """
        Span a clip may occupy without touching its neighbors' margins.

        Returns:
            (leftmost x, rightmost right edge)
        """
        cfg = self.config
        left_boundary = cfg.initial_x
        right_boundary = cfg.width
        for n in neighbors:
            if n.x < clip.x:
                left_boundary = max(left_boundary, n.right + cfg.margin)
            elif n.x > clip.x:
                right_boundary = min(right_boundary, n.x - cfg.margin)
        return left_boundary, right_boundary

    def resize(
        self,
        clip: TimelineClip,
        neighbors: Sequence[TimelineClip],
        edge: Edge,
        requested_width: float,
        requested_x: Optional[float] = None
    ) -> tuple[float, float]:
        """
        New (x, width) for a clip resized from one edge.

        The trailing edge only changes width; the leading edge moves x and
        keeps the trailing edge fixed. Width is floored at min_clip_width
        after boundary clamping, shifting x if the floor needs the room.

        Raises:
            CapacityError: if a minimum width clip no longer fits between the neighbors
        """
        cfg = self.config
        left_boundary, right_boundary = self.edge_bounds(clip, neighbors)

        if edge is Edge.LEFT:
            # Without a reported x the trailing edge stays put and width drives x
            x = clip.right - requested_width if requested_x is None else requested_x
            x = max(x, left_boundary)
            width = clip.right - x
        else:
            x = clip.x
            width = min(requested_width, right_boundary - x)

        if width < cfg.min_clip_width:
            width = cfg.min_clip_width
            if edge is Edge.LEFT:
                x = clip.right - width
            if x + width > right_boundary:
                x = right_boundary - width
            if x < left_boundary - EPSILON:
                raise CapacityError(f"Clip {clip.clip_id} cannot keep its minimum width here")
        return x, width
