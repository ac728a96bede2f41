"""
Authoritative in-memory collection of clips placed on a timeline.
"""
from __future__ import annotations
from dataclasses import replace
from typing import Iterator, Optional

from .clip import TimelineClip
from .config import TIMELINE_CONFIG, TimelineConfig
from .errors import ClipNotFoundError, LayoutError
from .layout import find_violations
from .types import ClipSnapshot
from src.utils.logger import logger


class ClipStore:
    """
    Ordered clip collection (insertion order) that enforces the row invariant.

    Every mutation validates the complete candidate state before it is
    committed; a rejected mutation leaves the store exactly as it was.
    """

    def __init__(self, config: TimelineConfig = TIMELINE_CONFIG):
        self.config = config
        self._clips: list[TimelineClip] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._clips)

    def __iter__(self) -> Iterator[TimelineClip]:
        return iter(tuple(self._clips))

    def __contains__(self, clip_id: object) -> bool:
        return any(c.clip_id == clip_id for c in self._clips)

    def all(self) -> tuple[TimelineClip, ...]:
        return tuple(self._clips)

    def index_of(self, clip_id: int) -> int:
        for i, clip in enumerate(self._clips):
            if clip.clip_id == clip_id:
                return i
        raise ClipNotFoundError(clip_id)

    def get(self, clip_id: int) -> TimelineClip:
        return self._clips[self.index_of(clip_id)]

    def in_row(self, row_index: int, exclude_id: Optional[int] = None) -> list[TimelineClip]:
        """Clips sharing a row, sorted ascending by x."""
        y = self.config.row_y(row_index)
        row = [c for c in self._clips if c.y == y and c.clip_id != exclude_id]
        row.sort(key=lambda c: c.x)
        return row

    def _commit(self, candidate: list[TimelineClip]) -> None:
        problems = find_violations(candidate, self.config)
        if problems:
            logger.warning("Rejected timeline mutation: %s", "; ".join(problems))
            raise LayoutError(problems)
        self._clips = candidate

    def _snap_to_row(self, clip: TimelineClip) -> TimelineClip:
        """Pull a y within float noise of a row offset onto that exact offset."""
        try:
            row_y = self.config.row_y(self.config.row_index_of(clip.y))
        except ValueError:
            return clip  # off-grid; validation reports it
        return clip if clip.y == row_y else replace(clip, y=row_y)

    def insert(self, clip: TimelineClip) -> TimelineClip:
        """Append a clip under a freshly assigned id and return the stored record."""
        stored = replace(self._snap_to_row(clip), clip_id=self._next_id)
        self._commit(self._clips + [stored])
        self._next_id += 1
        logger.debug(f"Inserted clip {stored.clip_id} '{stored.name}' at x={stored.x} y={stored.y}")
        return stored

    def replace(self, index: int, clip: TimelineClip) -> TimelineClip:
        """Replace the clip at an index; the slot keeps its id."""
        if not 0 <= index < len(self._clips):
            raise IndexError(f"Clip index out of range: {index}")
        stored = replace(self._snap_to_row(clip), clip_id=self._clips[index].clip_id)
        candidate = list(self._clips)
        candidate[index] = stored
        self._commit(candidate)
        return stored

    def update(self, clip: TimelineClip) -> TimelineClip:
        """Replace the clip carrying the same id."""
        return self.replace(self.index_of(clip.clip_id), clip)

    def remove(self, clip_id: int) -> TimelineClip:
        index = self.index_of(clip_id)
        removed = self._clips[index]
        self._clips = self._clips[:index] + self._clips[index + 1:]
        logger.debug(f"Removed clip {clip_id} '{removed.name}'")
        return removed

    def remove_by_name(self, name: str) -> list[TimelineClip]:
        """Remove every clip carrying a display name; returns the removed clips."""
        removed = [c for c in self._clips if c.name == name]
        if removed:
            self._clips = [c for c in self._clips if c.name != name]
            logger.debug(f"Removed {len(removed)} clip(s) named '{name}'")
        return removed

    def clear(self) -> None:
        self._clips = []

    def snapshot(self) -> ClipSnapshot:
        return tuple(self._clips), self._next_id

    def restore(self, snapshot: ClipSnapshot) -> None:
        clips, next_id = snapshot
        self._commit(list(clips))
        self._next_id = max(self._next_id, next_id)
