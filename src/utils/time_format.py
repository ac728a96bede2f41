"""
Text helpers for the elapsed time display and the time ruler.
"""
import math


def format_time(seconds: float) -> str:
    """Format seconds as HH:MM:SS:CC (CC = hundredths)."""
    seconds = max(0.0, seconds)
    hrs = int(seconds // 3600)
    mins = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    # Round first so 0.29 doesn't render as 28 hundredths
    hundredths = int(round((seconds % 1) * 100, 6))
    return f"{hrs:02d}:{mins:02d}:{secs:02d}:{min(hundredths, 99):02d}"


def ruler_label(seconds: float) -> str:
    """Ruler tick label: '0s', '50s', '1m 0s', '1m 10s', ..."""
    total = int(seconds)
    if total < 60:
        return f"{total}s"
    return f"{total // 60}m {total % 60}s"


def ruler_labels(duration_seconds: float, step_seconds: float = 10.0) -> list[str]:
    """Labels for every ruler tick from 0 to duration inclusive."""
    if step_seconds <= 0:
        raise ValueError("step_seconds must be positive")
    count = int(math.floor(duration_seconds / step_seconds + 1e-9)) + 1
    return [ruler_label(i * step_seconds) for i in range(count)]
