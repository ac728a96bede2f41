"""
Tests for ClipStore.
"""
import pytest

from src.core.clip import TimelineClip
from src.core.clip_store import ClipStore
from src.core.errors import ClipNotFoundError, LayoutError
from conftest import make_clip


class TestClipStore:
    """Tests for ClipStore functionality."""

    def test_empty_store(self, store):
        assert len(store) == 0
        assert store.all() == ()
        assert store.in_row(0) == []

    def test_insert_assigns_unique_ids(self, store):
        first = store.insert(make_clip(40, name="kick.wav"))
        second = store.insert(make_clip(400, name="kick.wav"))
        assert first.clip_id == 1
        assert second.clip_id == 2
        assert [c.clip_id for c in store.all()] == [1, 2]

    def test_insert_keeps_insertion_order(self, store):
        store.insert(make_clip(600, name="late"))
        store.insert(make_clip(40, name="early"))
        assert [c.name for c in store.all()] == ["late", "early"]

    def test_insert_overlap_rejected(self, store):
        store.insert(make_clip(40))
        with pytest.raises(LayoutError):
            store.insert(make_clip(100))
        assert len(store) == 1

    def test_insert_inside_margin_rejected(self, store, config):
        store.insert(make_clip(40))
        with pytest.raises(LayoutError):
            store.insert(make_clip(190 + config.margin - 1))

    def test_insert_exactly_margin_apart(self, store, config):
        store.insert(make_clip(40))
        store.insert(make_clip(190 + config.margin))
        assert len(store) == 2

    def test_same_x_different_rows_allowed(self, store):
        store.insert(make_clip(40, row=0))
        store.insert(make_clip(40, row=1))
        assert len(store.in_row(0)) == 1
        assert len(store.in_row(1)) == 1

    def test_near_grid_y_snapped_onto_row(self, store, config):
        stored = store.insert(TimelineClip("a", 40, config.initial_y + 1e-10, 150))
        assert stored.y == config.row_y(0)
        assert store.in_row(0) == [stored]

    def test_near_grid_y_cannot_bypass_overlap_check(self, store, config):
        store.insert(TimelineClip("a", 40, config.initial_y + 1e-10, 150))
        with pytest.raises(LayoutError):
            store.insert(TimelineClip("b", 40, config.initial_y, 150))
        assert len(store) == 1

    def test_replace_snaps_near_grid_y(self, store, config):
        stored = store.insert(make_clip(40))
        moved = store.replace(0, TimelineClip("a", 400, config.row_y(1) - 1e-10, 150))
        assert moved.y == config.row_y(1)
        assert store.in_row(1) == [moved]
        assert stored.clip_id == moved.clip_id

    def test_failed_insert_does_not_consume_id(self, store):
        store.insert(make_clip(40))
        with pytest.raises(LayoutError):
            store.insert(make_clip(50))
        assert store.insert(make_clip(400)).clip_id == 2

    def test_replace_keeps_id(self, store):
        stored = store.insert(make_clip(40))
        moved = store.replace(0, make_clip(300, clip_id=99))
        assert moved.clip_id == stored.clip_id
        assert store.get(stored.clip_id).x == 300

    def test_replace_invalid_leaves_state(self, store):
        store.insert(make_clip(40))
        store.insert(make_clip(400))
        before = store.all()
        with pytest.raises(LayoutError):
            store.replace(1, make_clip(100))
        assert store.all() == before

    def test_replace_bad_index(self, store):
        with pytest.raises(IndexError):
            store.replace(3, make_clip(40))

    def test_in_row_sorted_and_excludes(self, store):
        a = store.insert(make_clip(600))
        b = store.insert(make_clip(40))
        c = store.insert(make_clip(300))
        assert [clip.clip_id for clip in store.in_row(0)] == [b.clip_id, c.clip_id, a.clip_id]
        assert [clip.clip_id for clip in store.in_row(0, exclude_id=c.clip_id)] == [b.clip_id, a.clip_id]

    def test_remove_by_id(self, store):
        stored = store.insert(make_clip(40))
        removed = store.remove(stored.clip_id)
        assert removed == stored
        assert stored.clip_id not in store

    def test_remove_unknown_id(self, store):
        with pytest.raises(ClipNotFoundError):
            store.remove(42)
        with pytest.raises(KeyError):
            store.get(42)

    def test_remove_by_name_removes_all_matches(self, store):
        store.insert(make_clip(40, name="kick.wav"))
        store.insert(make_clip(400, name="snare.wav"))
        store.insert(make_clip(40, row=1, name="kick.wav"))
        removed = store.remove_by_name("kick.wav")
        assert len(removed) == 2
        assert [c.name for c in store.all()] == ["snare.wav"]

    def test_remove_by_name_missing(self, store):
        store.insert(make_clip(40))
        assert store.remove_by_name("nothing") == []
        assert len(store) == 1

    def test_snapshot_restore(self, store):
        store.insert(make_clip(40))
        snap = store.snapshot()
        store.insert(make_clip(400))
        store.restore(snap)
        assert len(store) == 1
        # Ids are never reused after a restore
        assert store.insert(make_clip(400)).clip_id == 3

    def test_iteration_is_a_copy(self, store):
        store.insert(make_clip(40))
        for clip in store:
            store.remove(clip.clip_id)
        assert len(store) == 0

    def test_custom_config_bounds(self, wide_margin_config):
        store = ClipStore(wide_margin_config)
        store.insert(make_clip(0, config=wide_margin_config))
        with pytest.raises(LayoutError):
            store.insert(make_clip(155, config=wide_margin_config))
