"""
Tests for the InteractionSurface drag state machine and gestures.

Runs without any GUI: positions are plain Points.
"""

import itertools

import pytest

from pdfstamp.config import EditorDefaults
from pdfstamp.core.errors import NotFound
from pdfstamp.core.geometry import Point
from pdfstamp.core.interaction import EditorMode, InteractionSurface, SurfaceEventType

from conftest import make_annotation

ORIGIN = Point(0.0, 0.0)


@pytest.fixture
def surface(store):
    counter = itertools.count(1)
    return InteractionSurface(store, id_factory=lambda: f"ann-{next(counter)}")


@pytest.fixture
def events(surface):
    received = []
    surface.add_listener(received.append)
    return received


class TestDoubleClick:
    def test_creates_annotation_relative_to_surface(self, surface, store):
        ann = surface.double_click(Point(300, 220), Point(50, 20))

        assert (ann.x, ann.y) == (250, 190)
        assert store.get(ann.id) == ann

    def test_uses_defaults_and_current_page(self, surface):
        surface.set_page(3)

        ann = surface.double_click(Point(10, 20), ORIGIN)

        defaults = EditorDefaults()
        assert ann.text == defaults.placeholder_text == "Nouveau texte"
        assert ann.font_size == 16
        assert (ann.width, ann.height) == (200, 30)
        assert ann.page_index == 3

    def test_custom_defaults(self, store):
        defaults = EditorDefaults(font_size=12, placeholder_text="Note", vertical_click_offset=0)
        surface = InteractionSurface(store, defaults=defaults, id_factory=lambda: "x")

        ann = surface.double_click(Point(10, 20), ORIGIN)

        assert (ann.y, ann.font_size, ann.text) == (20, 12, "Note")

    def test_on_existing_annotation_does_nothing(self, surface, store):
        assert surface.double_click(Point(10, 10), ORIGIN, on_annotation=True) is None
        assert len(store) == 0

    def test_ids_are_unique_with_default_factory(self, store):
        surface = InteractionSurface(store)

        first = surface.double_click(Point(10, 10), ORIGIN)
        second = surface.double_click(Point(10, 10), ORIGIN)

        assert first.id != second.id
        assert len(store) == 2

    def test_emits_added(self, surface, events):
        ann = surface.double_click(Point(10, 10), ORIGIN)
        assert events[-1].event_type is SurfaceEventType.ADDED
        assert events[-1].annotation == ann


class TestDrag:
    def test_starts_idle(self, surface):
        assert surface.drag_state.mode is EditorMode.IDLE

    def test_drag_keeps_grab_offset(self, surface, store):
        store.add(make_annotation("a", x=100, y=50))

        assert surface.pointer_down("a", Point(110, 60), ORIGIN)
        assert surface.drag_state.mode is EditorMode.DRAGGING
        assert surface.drag_state.grab_offset == Point(10, 10)

        moved = surface.pointer_move(Point(200, 140), ORIGIN)

        assert (moved.x, moved.y) == (190, 130)
        assert store.get("a") == moved

    def test_drag_changes_only_position(self, surface, store):
        original = make_annotation("a", x=100, y=50, text="keep", font_size=22, page_index=0)
        store.add(original)

        surface.pointer_down("a", Point(110, 60), ORIGIN)
        moved = surface.pointer_move(Point(200, 140), ORIGIN)

        assert moved == original.moved_to(190, 130)

    def test_repeated_moves_do_not_drift(self, surface, store):
        store.add(make_annotation("a", x=100, y=50))
        surface.pointer_down("a", Point(110, 60), ORIGIN)

        for _ in range(50):
            surface.pointer_move(Point(200, 140), ORIGIN)

        assert (store.get("a").x, store.get("a").y) == (190, 130)

    def test_surface_origin_is_read_per_event(self, surface, store):
        store.add(make_annotation("a", x=100, y=50))
        surface.pointer_down("a", Point(160, 80), Point(50, 20))

        # Page scrolled up by 30px between events, pointer did not move
        moved = surface.pointer_move(Point(160, 80), Point(50, -10))

        assert (moved.x, moved.y) == (100, 80)

    def test_pointer_up_returns_to_idle_without_mutation(self, surface, store):
        store.add(make_annotation("a", x=100, y=50))
        surface.pointer_down("a", Point(110, 60), ORIGIN)
        surface.pointer_move(Point(120, 70), ORIGIN)
        before = store.snapshot()

        surface.pointer_up()

        assert surface.drag_state.mode is EditorMode.IDLE
        assert store.snapshot() == before
        assert surface.pointer_move(Point(300, 300), ORIGIN) is None
        assert store.snapshot() == before

    def test_pointer_down_on_missing_annotation_stays_idle(self, surface):
        assert not surface.pointer_down("ghost", Point(1, 1), ORIGIN)
        assert surface.drag_state.mode is EditorMode.IDLE

    def test_delete_while_dragging_ends_drag(self, surface, store):
        store.add(make_annotation("a"))
        surface.pointer_down("a", Point(110, 60), ORIGIN)

        surface.delete("a")

        assert surface.drag_state.mode is EditorMode.IDLE
        assert surface.pointer_move(Point(0, 0), ORIGIN) is None

    def test_annotation_removed_from_store_mid_drag(self, surface, store):
        store.add(make_annotation("a"))
        surface.pointer_down("a", Point(110, 60), ORIGIN)
        store.remove("a")

        assert surface.pointer_move(Point(0, 0), ORIGIN) is None
        assert surface.drag_state.mode is EditorMode.IDLE

    def test_emits_updated_on_move(self, surface, store, events):
        store.add(make_annotation("a"))
        surface.pointer_down("a", Point(110, 60), ORIGIN)
        surface.pointer_move(Point(120, 70), ORIGIN)

        assert [e.event_type for e in events] == [SurfaceEventType.UPDATED]


class TestEditAndDelete:
    def test_edit_text_replaces_record(self, surface, store):
        store.add(make_annotation("a", text="old"))

        surface.edit_text("a", "n")
        surface.edit_text("a", "ne")
        updated = surface.edit_text("a", "new")

        assert updated == make_annotation("a", text="new")
        assert store.get("a").text == "new"

    def test_edit_missing_raises(self, surface):
        with pytest.raises(NotFound):
            surface.edit_text("ghost", "text")

    def test_delete(self, surface, store, events):
        store.add(make_annotation("a"))

        assert surface.delete("a")
        assert "a" not in store
        assert events[-1].event_type is SurfaceEventType.REMOVED
        assert events[-1].annotation_id == "a"

    def test_double_delete_is_silent(self, surface, store, events):
        store.add(make_annotation("a"))
        store.add(make_annotation("b"))
        surface.delete("a")
        before = store.snapshot()
        count = len(events)

        assert surface.delete("a") is False
        assert store.snapshot() == before
        assert len(events) == count


class TestPages:
    def test_visible_annotations_follow_page(self, surface, store):
        store.add(make_annotation("a", page_index=0))
        store.add(make_annotation("b", page_index=1))

        assert [a.id for a in surface.visible_annotations()] == ["a"]
        surface.set_page(1)
        assert [a.id for a in surface.visible_annotations()] == ["b"]

    def test_page_switch_does_not_touch_store(self, surface, store):
        store.add(make_annotation("a", page_index=0))
        store.add(make_annotation("b", page_index=1))
        before = store.snapshot()

        surface.set_page(1)
        surface.set_page(0)

        assert store.snapshot() == before

    def test_page_switch_ends_drag(self, surface, store):
        store.add(make_annotation("a"))
        surface.pointer_down("a", Point(110, 60), ORIGIN)

        surface.set_page(1)

        assert surface.drag_state.mode is EditorMode.IDLE

    def test_page_changed_event(self, surface, events):
        surface.set_page(2)
        surface.set_page(2)

        assert len(events) == 1
        assert events[0].event_type is SurfaceEventType.PAGE_CHANGED
        assert events[0].page_index == 2

    def test_negative_page_rejected(self, surface):
        with pytest.raises(ValueError):
            surface.set_page(-1)


class TestListeners:
    def test_failing_listener_does_not_block_others(self, surface):
        received = []

        def broken(event):
            raise RuntimeError("boom")

        surface.add_listener(broken)
        surface.add_listener(received.append)

        surface.double_click(Point(5, 5), ORIGIN)

        assert len(received) == 1

    def test_remove_listener(self, surface):
        received = []
        surface.add_listener(received.append)
        surface.remove_listener(received.append)

        surface.double_click(Point(5, 5), ORIGIN)

        assert received == []
