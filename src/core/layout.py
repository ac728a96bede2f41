"""
Row invariant checks for committed timeline state.
Vectorized with numpy so the whole store is validated on every commit.
"""
from __future__ import annotations
from typing import Iterable

import numpy as np

from .clip import TimelineClip
from .config import TimelineConfig

# Tolerance for float geometry coming from pointer coordinates
EPSILON = 1e-9


def _as_arrays(clips: list[TimelineClip]) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    xs = np.fromiter((c.x for c in clips), dtype=np.float64, count=len(clips))
    ys = np.fromiter((c.y for c in clips), dtype=np.float64, count=len(clips))
    widths = np.fromiter((c.width for c in clips), dtype=np.float64, count=len(clips))
    return xs, ys, widths


def find_violations(clips: Iterable[TimelineClip], config: TimelineConfig) -> list[str]:
    """
    Check every clip against the timeline bounds and the per-row margin rule.

    Returns:
        Human readable descriptions of each violation (empty if the layout is legal)
    """
    clips = list(clips)
    if not clips:
        return []

    problems: list[str] = []
    xs, ys, widths = _as_arrays(clips)
    rights = xs + widths

    # Rows are exact offsets; the store snaps near-grid y before validating
    row_ys = config.initial_y + np.arange(config.max_rows) * config.row_height
    for i in np.flatnonzero(~np.isin(ys, row_ys)):
        problems.append(f"clip {clips[i].clip_id} has y={clips[i].y} outside the row grid")

    for i in np.flatnonzero(~np.isfinite(xs) | ~np.isfinite(widths)):
        problems.append(f"clip {clips[i].clip_id} has non-finite geometry")

    for i in np.flatnonzero(widths < config.min_clip_width - EPSILON):
        problems.append(f"clip {clips[i].clip_id} narrower than {config.min_clip_width}")
    for i in np.flatnonzero(xs < config.initial_x - EPSILON):
        problems.append(f"clip {clips[i].clip_id} starts before x={config.initial_x}")
    for i in np.flatnonzero(rights > config.width + EPSILON):
        problems.append(f"clip {clips[i].clip_id} extends past timeline width {config.width}")

    # Sort by (row, x); consecutive clips in the same row must be margin apart
    order = np.lexsort((xs, ys))
    same_row = ys[order][1:] == ys[order][:-1]
    gaps = xs[order][1:] - rights[order][:-1]
    for k in np.flatnonzero(same_row & (gaps < config.margin - EPSILON)):
        a, b = clips[order[k]], clips[order[k + 1]]
        problems.append(f"clips {a.clip_id} and {b.clip_id} overlap in row y={a.y}")

    return problems


def is_valid_layout(clips: Iterable[TimelineClip], config: TimelineConfig) -> bool:
    return not find_violations(clips, config)
