"""
Interaction controller for one timeline instance.
Sequences the row allocator, placement solver and clip store behind the
mutation API that input handlers call into, and owns the playhead clock,
selection, drag previews and undo history of that timeline.
"""
from __future__ import annotations
import math
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from .clip import TimelineClip
from .clip_store import ClipStore
from .config import TIMELINE_CONFIG, UNDO_CONFIG, Edge, PlaybackState, TimelineConfig
from .errors import CapacityError, ClipNotFoundError, LayoutError, NoRoomRejected, TimelineError
from .placement import PlacementSolver
from .playhead import PlayheadClock
from .row_allocator import RowAllocator
from .types import ClipSnapshot, EditResult
from .undo_manager import UndoManager
from src.utils.logger import logger
from src.utils.time_format import format_time


def _require_finite(**coords: Optional[float]) -> None:
    """Raises ValueError for any NaN or infinite pointer coordinate."""
    for name, value in coords.items():
        if value is not None and not math.isfinite(value):
            raise ValueError(f"{name}={value} is not a finite coordinate")


class TimelineController(QObject):
    """
    Mutation API of a timeline: drop, drag, resize, delete, select and transport.
    Expected failures come back as a failed EditResult and never raise.
    """
    clipsChanged = pyqtSignal()
    selectionChanged = pyqtSignal(object)  # clip id or None
    positionChanged = pyqtSignal(float)
    stateChanged = pyqtSignal(str)
    capacityExceeded = pyqtSignal(str)

    def __init__(self, config: TimelineConfig = TIMELINE_CONFIG, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.config = config
        self.store = ClipStore(config)
        self.allocator = RowAllocator(config)
        self.solver = PlacementSolver(config)
        self.undo_manager = UndoManager(max_depth=UNDO_CONFIG.max_depth)
        self.clock = PlayheadClock(
            config,
            on_position_changed=self.positionChanged.emit,
            on_state_changed=lambda state: self.stateChanged.emit(state.name.lower())
        )
        self._selected_id: Optional[int] = None
        self._previews: dict[int, TimelineClip] = {}
        logger.info("TimelineController initialized")

    # --- Read side ---

    @property
    def clips(self) -> tuple[TimelineClip, ...]:
        """Committed clips in insertion order."""
        return self.store.all()

    def display_clips(self) -> tuple[TimelineClip, ...]:
        """Committed clips with any in-flight drag preview applied."""
        return tuple(self._previews.get(c.clip_id, c) for c in self.store.all())

    def row_of(self, clip: TimelineClip) -> int:
        return self.config.row_index_of(clip.y)

    # --- Insertion ---

    def on_drop(self, pointer_x: float, pointer_y: float, name: str) -> EditResult:
        """
        Place a new minimum width clip where it was dropped.

        Args:
            pointer_x: Drop x in timeline coordinates
            pointer_y: Drop y in timeline coordinates (picks the row)
            name: Display label of the dropped media
        """
        try:
            _require_finite(pointer_x=pointer_x, pointer_y=pointer_y)
            row_index = self.allocator.row_for_drop(pointer_y)
            neighbors = self.solver.neighbors_of(self.store, row_index)
            x = self.solver.insert_at_point(neighbors, pointer_x, row_index=row_index)
            clip = TimelineClip(name, x, self.config.row_y(row_index), self.config.min_clip_width)
            return self._commit_insert(clip)
        except ValueError as e:
            return self._reject(f"Drop '{name}'", TimelineError(str(e)))
        except (CapacityError, LayoutError) as e:
            return self._reject(f"Drop '{name}'", e)

    def append_clip(self, name: str, width: Optional[float] = None) -> EditResult:
        """Insert a clip at the end of the first row that still has room."""
        width = self.config.min_clip_width if width is None else width
        try:
            row_index = self.allocator.first_row_with_room(self.store, width)
            neighbors = self.solver.neighbors_of(self.store, row_index)
            x = self.solver.append(neighbors, width, row_index=row_index)
            clip = TimelineClip(name, x, self.config.row_y(row_index), width)
            return self._commit_insert(clip)
        except (CapacityError, LayoutError) as e:
            return self._reject(f"Append '{name}'", e)

    def _commit_insert(self, clip: TimelineClip) -> EditResult:
        before = self.store.snapshot()
        stored = self.store.insert(clip)
        self._record(f"Insert {stored.name}", before)
        logger.info(f"Placed clip {stored.clip_id} '{stored.name}' in row {self.row_of(stored)} at x={stored.x}")
        self.clipsChanged.emit()
        return EditResult.ok(stored)

    # --- Drag ---

    def on_drag_move(self, clip_id: int, x: float) -> TimelineClip:
        """
        Live preview of a drag. Never validated and never committed.

        Raises:
            ClipNotFoundError: if the clip does not exist
        """
        preview = self.store.get(clip_id).with_geometry(x)
        self._previews[clip_id] = preview
        return preview

    def on_drag_stop(self, clip_id: int, x: float) -> EditResult:
        """Finish a drag: clamp x between the neighbors and commit."""
        self._previews.pop(clip_id, None)
        try:
            _require_finite(x=x)
            # Re-derived from committed state; the last preview value is not trusted
            current = self.store.get(clip_id)
            neighbors = self.solver.neighbors_of(self.store, self.row_of(current), exclude_id=clip_id)
            new_x = self.solver.move(current, neighbors, x)
        except ValueError as e:
            return self._reject("Move", TimelineError(str(e)))
        except ClipNotFoundError as e:
            return self._reject("Move", e)
        except NoRoomRejected as e:
            logger.debug(f"Move of clip {clip_id} to x={x} rejected, keeping x={current.x}")
            self.clipsChanged.emit()
            return EditResult.failed(e, clip=current)
        return self._commit_update(current, current.with_geometry(new_x), "Move")

    def move_clip(self, clip_id: int, x: float) -> EditResult:
        return self.on_drag_stop(clip_id, x)

    def cancel_drag(self, clip_id: int) -> None:
        if self._previews.pop(clip_id, None) is not None:
            self.clipsChanged.emit()

    # --- Resize ---

    def on_resize_stop(
        self,
        clip_id: int,
        edge: Edge | str,
        ref_width: float,
        position_x: Optional[float] = None
    ) -> EditResult:
        """
        Finish a resize from either edge.

        Args:
            clip_id: Clip being resized
            edge: Edge.LEFT / Edge.RIGHT (or 'left' / 'right')
            ref_width: Width reported by the resize handle
            position_x: New x reported by the handle (used for the left edge)
        """
        try:
            _require_finite(ref_width=ref_width, position_x=position_x)
            edge = Edge(edge)
            current = self.store.get(clip_id)
            neighbors = self.solver.neighbors_of(self.store, self.row_of(current), exclude_id=clip_id)
            new_x, new_width = self.solver.resize(current, neighbors, edge, ref_width, position_x)
        except ValueError as e:
            return self._reject("Resize", TimelineError(str(e)))
        except (ClipNotFoundError, CapacityError) as e:
            return self._reject("Resize", e)
        return self._commit_update(current, current.with_geometry(new_x, new_width), "Resize")

    def resize_clip(self, clip_id: int, edge: Edge | str, width: float, x: Optional[float] = None) -> EditResult:
        return self.on_resize_stop(clip_id, edge, width, x)

    def _commit_update(self, current: TimelineClip, candidate: TimelineClip, verb: str) -> EditResult:
        if candidate == current:
            self.clipsChanged.emit()
            return EditResult.ok(current)
        before = self.store.snapshot()
        try:
            stored = self.store.update(candidate)
        except LayoutError as e:
            return self._reject(verb, e, clip=current)
        self._record(f"{verb} {stored.name}", before)
        logger.info(f"{verb} clip {stored.clip_id}: x={stored.x} width={stored.width}")
        self.clipsChanged.emit()
        return EditResult.ok(stored)

    # --- Selection / deletion ---

    @property
    def selected_id(self) -> Optional[int]:
        return self._selected_id

    @property
    def selected_clip(self) -> Optional[TimelineClip]:
        if self._selected_id is None or self._selected_id not in self.store:
            return None
        return self.store.get(self._selected_id)

    def select(self, clip_id: Optional[int]) -> None:
        if clip_id is not None and clip_id not in self.store:
            logger.warning(f"Cannot select unknown clip {clip_id}")
            return
        if clip_id != self._selected_id:
            self._selected_id = clip_id
            self.selectionChanged.emit(clip_id)

    def delete_selected(self) -> Optional[TimelineClip]:
        """Delete the selected clip. No-op when nothing is selected."""
        clip = self.selected_clip
        if clip is None:
            return None
        before = self.store.snapshot()
        removed = self.store.remove(clip.clip_id)
        self._previews.pop(removed.clip_id, None)
        self._record(f"Delete {removed.name}", before)
        self.select(None)
        logger.info(f"Deleted clip {removed.clip_id} '{removed.name}'")
        self.clipsChanged.emit()
        return removed

    def on_delete_key(self) -> Optional[TimelineClip]:
        return self.delete_selected()

    def clear(self) -> None:
        """Remove every clip and forget history."""
        self.store.clear()
        self._previews.clear()
        self.undo_manager.clear()
        self.select(None)
        self.clipsChanged.emit()

    # --- Undo / redo ---

    def _record(self, description: str, before: ClipSnapshot) -> None:
        after = self.store.snapshot()
        self.undo_manager.push_action(
            description,
            lambda: self._restore(before),
            lambda: self._restore(after)
        )

    def _restore(self, snapshot: ClipSnapshot) -> None:
        self.store.restore(snapshot)
        self._previews.clear()
        if self._selected_id is not None and self._selected_id not in self.store:
            self.select(None)
        self.clipsChanged.emit()

    def undo(self) -> bool:
        return self.undo_manager.undo()

    def redo(self) -> bool:
        return self.undo_manager.redo()

    # --- Transport ---

    @property
    def playback_state(self) -> PlaybackState:
        return self.clock.state

    @property
    def is_playing(self) -> bool:
        return self.clock.is_playing

    @property
    def elapsed_seconds(self) -> float:
        return self.clock.elapsed_seconds

    @property
    def playhead_position(self) -> float:
        return self.clock.position

    @property
    def elapsed_display(self) -> str:
        return format_time(self.clock.elapsed_seconds)

    def play(self) -> bool:
        return self.clock.play()

    def pause(self) -> None:
        self.clock.pause()

    def stop(self) -> None:
        self.clock.stop()

    def seek(self, seconds: float) -> None:
        self.clock.seek(seconds)

    def seek_position(self, x: float) -> None:
        self.clock.seek_position(x)

    def dispose(self) -> None:
        """Tear down: halt the tick timer. The controller must not be used afterwards."""
        self.clock.cleanup()
        self._previews.clear()
        logger.debug("TimelineController disposed")

    # --- Helpers ---

    def _reject(self, action: str, error: TimelineError, clip: Optional[TimelineClip] = None) -> EditResult:
        logger.warning(f"{action} rejected: {error}")
        if isinstance(error, CapacityError):
            self.capacityExceeded.emit(str(error))
        return EditResult.failed(error, clip=clip)
