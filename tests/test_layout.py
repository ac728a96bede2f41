"""
Tests for the row invariant checks.
"""
from src.core.clip import TimelineClip
from src.core.layout import find_violations, is_valid_layout
from conftest import make_clip


class TestFindViolations:

    def test_empty_layout_is_valid(self, config):
        assert find_violations([], config) == []

    def test_disjoint_rows_valid(self, config):
        clips = [
            make_clip(40, clip_id=1),
            make_clip(195, clip_id=2),
            make_clip(40, row=1, clip_id=3),
        ]
        assert is_valid_layout(clips, config)

    def test_overlap_reported_once(self, config):
        clips = [make_clip(40, clip_id=1), make_clip(100, clip_id=2)]
        problems = find_violations(clips, config)
        assert len(problems) == 1
        assert "1 and 2 overlap" in problems[0]

    def test_overlap_detected_regardless_of_order(self, config):
        clips = [make_clip(600, clip_id=1), make_clip(40, clip_id=2), make_clip(300, clip_id=3), make_clip(320, clip_id=4)]
        assert not is_valid_layout(clips, config)

    def test_margin_is_required(self, config):
        clips = [make_clip(40, clip_id=1), make_clip(191, clip_id=2)]
        assert not is_valid_layout(clips, config)

    def test_off_grid_row(self, config):
        clip = TimelineClip(name="a", x=40, y=config.initial_y + 7, width=150, clip_id=1)
        assert "row grid" in find_violations([clip], config)[0]

    def test_row_beyond_max_rows(self, config):
        clip = make_clip(40, row=config.max_rows, clip_id=1)
        assert not is_valid_layout([clip], config)

    def test_too_narrow(self, config):
        assert "narrower" in find_violations([make_clip(40, width=100, clip_id=1)], config)[0]

    def test_starts_before_initial_x(self, config):
        assert "starts before" in find_violations([make_clip(10, clip_id=1)], config)[0]

    def test_past_timeline_end(self, config):
        assert "past timeline width" in find_violations([make_clip(900, clip_id=1)], config)[0]

    def test_near_grid_row_is_off_grid(self, config):
        clip = TimelineClip(name="a", x=40, y=config.initial_y + 1e-10, width=150, clip_id=1)
        assert "row grid" in find_violations([clip], config)[0]

    def test_near_grid_row_still_overlaps_its_row(self, config):
        clips = [
            TimelineClip(name="a", x=40, y=config.initial_y + 1e-10, width=150, clip_id=1),
            TimelineClip(name="b", x=40, y=config.initial_y, width=150, clip_id=2),
        ]
        assert not is_valid_layout(clips, config)

    def test_non_finite_geometry(self, config):
        clip = TimelineClip(name="a", x=float("nan"), y=config.initial_y, width=150, clip_id=1)
        assert any("non-finite" in p for p in find_violations([clip], config))
