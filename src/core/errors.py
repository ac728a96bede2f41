"""
Exceptions raised by the timeline layout engine.

The solver and the store raise these; TimelineController catches the
expected ones and hands them back inside an EditResult.
"""


class TimelineError(Exception):
    """Base class for timeline layout failures."""


class CapacityError(TimelineError):
    """No legal placement exists for the requested clip geometry."""

    def __init__(self, message: str, row_index: int | None = None):
        super().__init__(message)
        self.row_index = row_index


class NoRoomRejected(TimelineError):
    """A drag found no legal position; the clip keeps its committed geometry."""

    def __init__(self, clip_id: int, message: str = "No room for clip at requested position"):
        super().__init__(message)
        self.clip_id = clip_id


class LayoutError(TimelineError):
    """A candidate store state breaks the row invariant."""

    def __init__(self, violations: list[str]):
        super().__init__("; ".join(violations))
        self.violations = violations


class ClipNotFoundError(TimelineError, KeyError):
    """No clip with the given id exists in the store."""

    def __init__(self, clip_id: int):
        super().__init__(f"Unknown clip id: {clip_id}")
        self.clip_id = clip_id

    def __str__(self) -> str:
        return self.args[0]
