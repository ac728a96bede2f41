from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class TimelineClip:
    """
    Represents a single media item placed on the timeline.
    Moved and resized by replacing it in the ClipStore, never in place.
    """
    name: str
    x: float
    y: float
    width: float
    clip_id: int = 0  # assigned by the ClipStore on insert

    @property
    def right(self) -> float:
        return self.x + self.width

    def with_geometry(self, x: float, width: float | None = None) -> 'TimelineClip':
        return replace(self, x=x, width=self.width if width is None else width)
