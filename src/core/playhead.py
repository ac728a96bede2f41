"""
Playhead clock for PyMixTimeline.
Advances a virtual playback cursor on a fixed-rate QTimer, independent of
the repaint rate of whatever renders it.
"""
from __future__ import annotations
import logging
from typing import Optional

from PyQt6.QtCore import Qt, QTimer

from .config import TIMELINE_CONFIG, PlaybackState, TimelineConfig
from .types import PositionCallback, StateCallback

logger = logging.getLogger("PyMixTimeline")


class PlayheadClock:
    """
    STOPPED/PLAYING/PAUSED state machine driving elapsed time and playhead x.
    Owns exactly one tick timer for its lifetime.
    """
    __slots__ = (
        '_config', '_timer', '_elapsed', '_state',
        '_on_position_changed', '_on_state_changed', '_disposed', '__weakref__'
    )

    def __init__(
        self,
        config: TimelineConfig = TIMELINE_CONFIG,
        on_position_changed: Optional[PositionCallback] = None,
        on_state_changed: Optional[StateCallback] = None
    ) -> None:
        """
        Initialize the clock.

        Args:
            config: Timeline geometry (width, duration, tick interval)
            on_position_changed: Callback for position updates (seconds)
            on_state_changed: Callback for state changes
        """
        self._config = config
        self._elapsed: float = 0.0
        self._state = PlaybackState.STOPPED
        self._on_position_changed = on_position_changed
        self._on_state_changed = on_state_changed
        self._disposed: bool = False

        self._timer = QTimer()
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(config.tick_interval_ms)
        self._timer.timeout.connect(self.tick)

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed playback time in seconds."""
        return self._elapsed

    @property
    def position(self) -> float:
        """Playhead x on the timeline, saturating at the timeline width."""
        return self._config.position_for_time(self._elapsed)

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state == PlaybackState.PLAYING

    @property
    def at_end(self) -> bool:
        return self._elapsed >= self._config.duration_seconds

    @property
    def is_timer_active(self) -> bool:
        return self._timer.isActive()

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _set_state(self, state: PlaybackState) -> None:
        """Update state and notify callback."""
        if self._state != state:
            self._state = state
            if self._on_state_changed:
                self._on_state_changed(state)

    def _notify_position(self) -> None:
        if self._on_position_changed:
            self._on_position_changed(self._elapsed)

    def play(self) -> bool:
        """
        Start (or resume) advancing the playhead.

        Returns:
            True if the clock is now playing
        """
        if self._disposed:
            return False
        if self.is_playing:
            return True
        if not self._timer.isActive():
            self._timer.start()
        self._set_state(PlaybackState.PLAYING)
        logger.info("Playback started at %.2fs", self._elapsed)
        return True

    def pause(self) -> None:
        """Pause playback (keep position)."""
        if self._disposed:
            return
        self._timer.stop()
        if self._state == PlaybackState.PLAYING:
            self._set_state(PlaybackState.PAUSED)
            logger.info("Playback paused at %.2fs", self._elapsed)

    def stop(self) -> None:
        """Stop playback and reset position."""
        if self._disposed:
            return
        self._timer.stop()
        self._elapsed = 0.0
        self._set_state(PlaybackState.STOPPED)
        self._notify_position()
        logger.info("Playback stopped")

    def toggle_play_pause(self) -> None:
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def tick(self) -> None:
        """Advance by one tick interval. Ignored unless playing."""
        if self._disposed or not self.is_playing:
            return
        self._elapsed += self._config.tick_seconds
        try:
            self._notify_position()
        except Exception as e:
            logger.error("Position callback error: %s", e, exc_info=True)

        if self._config.stop_at_end and self.at_end:
            logger.debug("Playhead reached the end of the timeline")
            self.pause()

    def seek(self, seconds: float) -> None:
        """
        Move the playhead to a time, independent of play/pause state.

        Args:
            seconds: Target position in seconds, clamped to the timeline duration
        """
        if self._disposed:
            return
        self._elapsed = min(max(seconds, 0.0), self._config.duration_seconds)
        self._notify_position()

    def seek_position(self, x: float) -> None:
        """Move the playhead to a timeline x coordinate."""
        self.seek(self._config.time_for_position(x))

    def cleanup(self) -> None:
        """Halt the tick timer for good; no state changes or callbacks afterwards."""
        self._disposed = True
        self._on_position_changed = None
        self._on_state_changed = None
        self._timer.stop()
        try:
            self._timer.timeout.disconnect(self.tick)
        except TypeError:
            pass
        self._state = PlaybackState.STOPPED
