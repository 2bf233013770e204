"""Tests for the component tree."""

import logging

import pytest
from unittest.mock import Mock
from term_widgets.builders import ContainerBuilder, InputBuilder, WindowBuilder
from term_widgets.components import Container, EditOp, Text, Window
from term_widgets.errors import (
    AreaOutOfBounds,
    ComponentNotFound,
    IdAlreadyInUse,
    IdKindMismatch,
    OriginOutOfBounds,
    ParentNotFound,
    SiblingConflict,
    TreeError,
    ValueTooLong,
)
from term_widgets.geometry import Area, Dimensions, Pos
from term_widgets.tree import ByBuilder, ById, ByValue, Tree


def make_tree():
    """An 80x24 tree with window 0 and a 30x10 container (0, 0) at the origin."""
    tree = Tree.init(80, 24)
    tree.container(ById((0, 0)), xpos=Pos.start(), ypos=Pos.start(), area=Area.values(30, 10))
    return tree


class TestTreeInit:
    """Tests for creating trees and windows."""

    def test_init(self):
        """Test that init creates one focused full-size window."""
        tree = Tree.init(80, 24)
        assert tree.focused() == 0
        window = tree.window_ref(0)
        assert (window.width, window.height) == (80, 24)
        assert window.is_focused()

    def test_iterates_windows(self):
        tree = Tree.init(80, 24)
        tree.window_auto()
        assert [window.id for window in tree] == [0, 1]

    def test_duplicate_window(self):
        tree = Tree.init(80, 24)
        with pytest.raises(IdAlreadyInUse):
            tree.window(ById(0))
        assert tree.child_count() == 1

    def test_window_id_kind(self):
        with pytest.raises(IdKindMismatch):
            Tree(80, 24).window(ById((0, 1)))

    def test_window_auto_fills_gaps(self):
        tree = Tree.init(80, 24)
        assert tree.window_auto() == 1
        tree.remove_window(0)
        assert tree.window_auto() == 0
        assert sorted(tree.child_ids()) == [0, 1]

    def test_window_from_builder(self):
        tree = Tree(80, 24)
        assert tree.window(ByBuilder(WindowBuilder().offset_id([3]))) == 3

    def test_window_larger_than_terminal(self):
        tree = Tree(80, 24)
        with pytest.raises(AreaOutOfBounds):
            tree.window(ByBuilder(WindowBuilder().area(Area.values(100, 10))))
        assert tree.child_count() == 0

    def test_push_window(self):
        tree = Tree(80, 24)
        window = Window(2, 40, 12)
        assert tree.push_window(window) == 2
        assert tree.window_ref(2) is window

    def test_not_a_source(self):
        with pytest.raises(TypeError):
            Tree(80, 24).window(0)


class TestTreeScenarios:
    """End-to-end insertion scenarios on a 500x500 window."""

    def setup_method(self):
        self.tree = Tree(500, 500)
        self.tree.window(ById(0))

    def test_start_anchored_container(self):
        cid = self.tree.container(ById((0, 0)), xpos=Pos.start(), ypos=Pos.start(), area=Area.values(35, 8))
        assert self.tree.container_ref(cid).position == Dimensions(0, 0, 35, 8)

    def test_oversized_second_container(self):
        self.tree.container(ById((0, 0)), xpos=Pos.start(), ypos=Pos.start(), area=Area.values(35, 8))
        with pytest.raises(AreaOutOfBounds):
            self.tree.container(ById((0, 1)), xpos=Pos.center(), ypos=Pos.end(), area=Area.values(8354, 3))
        assert self.tree.window_ref(0).child_count() == 1

    def test_explicit_origins(self):
        cid = self.tree.container(ById((0, 0)), xpos=Pos.at(2), ypos=Pos.at(5), area=Area.values(24, 32))
        assert self.tree.container_ref(cid).position.x == 2
        self.tree.remove_container(cid)
        with pytest.raises(OriginOutOfBounds):
            self.tree.container(ById((0, 0)), xpos=Pos.at(8355), ypos=Pos.at(5), area=Area.values(24, 32))

    def test_odd_text_requested_editable(self):
        self.tree.container(ById((0, 0)), area=Area.values(43, 16))
        with pytest.raises(IdKindMismatch):
            self.tree.text(ById((0, 0, 1)), editable=True, area=Area.values(4, 1))

    def test_read_only_value_too_long(self):
        self.tree.container(ById((0, 0)), area=Area.values(2, 2))
        with pytest.raises(ValueTooLong):
            self.tree.text(ById((0, 0, 1)), area=Area.fill(), value="hello")
        assert self.tree.text_count() == 0

    def test_focus_missing_text(self):
        self.tree.container(ById((0, 0)), area=Area.values(43, 16))
        tid = self.tree.text(ById((0, 0, 0)), area=Area.values(5, 1))
        self.tree.focus_text(tid)
        with pytest.raises(ComponentNotFound):
            self.tree.focus_text((0, 0, 2))
        assert self.tree.focused_text() == tid
        assert self.tree.text_ref(tid).is_focused()


class TestTreeSources:
    """Tests for the three component sources."""

    def test_container_by_builder(self):
        tree = Tree.init(80, 24)
        builder = ContainerBuilder().offset_id([0]).area(Area.values(20, 5))
        assert tree.container(ByBuilder(builder)) == (0, 0)

    def test_container_by_value(self):
        tree = Tree.init(80, 24)
        container = Container((0, 2), hpos=1, vpos=1, width=5, height=5)
        assert tree.container(ByValue(container)) == (0, 2)

    def test_container_in_missing_window(self):
        tree = Tree.init(80, 24)
        with pytest.raises(ParentNotFound):
            tree.container(ById((7, 0)))
        container = Container((7, 0))
        with pytest.raises(ParentNotFound) as exc_info:
            tree.container(ByValue(container))
        assert exc_info.value.entity is container

    def test_container_by_window_id(self):
        tree = Tree.init(80, 24)
        assert tree.container(ById(0)) == (0, 0)

    def test_text_parity_from_id(self):
        """Test that a text created by id takes its kind from the parity."""
        tree = make_tree()
        read_only = tree.text(ById((0, 0, 1)), area=Area.values(3, 1))
        editable = tree.text(ById((0, 0, 2)), xpos=Pos.at(5), area=Area.values(3, 1))
        assert not tree.text_ref(read_only).editable
        assert tree.text_ref(editable).editable

    def test_text_by_builder(self):
        tree = make_tree()
        builder = InputBuilder().offset_id([0, 0]).area(Area.values(4, 1))
        assert tree.text(ByBuilder(builder)) == (0, 0, 0)

    def test_text_by_value(self):
        tree = make_tree()
        text = Text((0, 0, 5), hpos=2, vpos=3, width=4, height=1, value="name")
        assert tree.text(ByValue(text)) == (0, 0, 5)
        assert (text.ahpos, text.avpos) == (2, 3)

    def test_input_and_noedit(self):
        tree = make_tree()
        assert tree.input((0, 0), area=Area.values(3, 1)) == (0, 0, 0)
        assert tree.noedit((0, 0), xpos=Pos.at(5), area=Area.values(3, 1)) == (0, 0, 1)

    def test_rejected_text_leaves_tree_unchanged(self):
        """Test that every rejection leaves the tree as it was."""
        tree = make_tree()
        tree.input((0, 0), area=Area.values(5, 1))
        before = dict(tree.container_ref((0, 0)).texts)
        for request in (
            dict(area=Area.values(31, 1)),
            dict(area=Area.values(5, 1)),
            dict(xpos=Pos.at(29), area=Area.values(5, 1)),
        ):
            with pytest.raises(TreeError):
                tree.input((0, 0), **request)
        assert tree.container_ref((0, 0)).texts == before


class TestTreeInvariants:
    """Tests for properties that hold across many insertions."""

    def test_unique_ids(self):
        tree = make_tree()
        for _ in range(5):
            tree.container(ById(0))
        with pytest.raises(IdAlreadyInUse):
            tree.container(ById((0, 3)))
        ids = tree.window_ref(0).child_ids()
        assert len(ids) == len(set(ids)) == 6

    def test_containment_and_non_overlap(self):
        """Test that accepted containers fit the window and never overlap."""
        tree = Tree.init(80, 24)
        for x in range(0, 90, 7):
            for y in range(0, 30, 5):
                try:
                    tree.container(ById(0), xpos=Pos.at(x), ypos=Pos.at(y), area=Area.values(9, 6))
                except TreeError:
                    pass
        window = tree.window_ref(0)
        bounds = Dimensions(0, 0, window.width, window.height)
        boxes = [c.position for c in window.children()]
        assert boxes
        assert all(bounds.contains(box) for box in boxes)
        for i, a in enumerate(boxes):
            for b in boxes[i + 1:]:
                assert not a.intersects(b)

    def test_parity(self):
        tree = make_tree()
        for i in range(4):
            tree.input((0, 0), xpos=Pos.at(i * 3), area=Area.values(2, 1))
            tree.noedit((0, 0), xpos=Pos.at(i * 3), ypos=Pos.at(2), area=Area.values(2, 1))
        for text in tree.container_ref((0, 0)).children():
            assert (text.id[2] % 2 == 0) == text.editable


class TestTreeFocus:
    """Tests for window and text focus."""

    def test_focus_window(self):
        tree = Tree.init(80, 24)
        tree.window_auto()
        tree.focus(1)
        assert tree.focused() == 1
        assert not tree.window_ref(0).is_focused()

    def test_focus_missing_window(self):
        tree = Tree.init(80, 24)
        with pytest.raises(ComponentNotFound):
            tree.focus(4)
        assert tree.focused() == 0

    def test_focus_text_focuses_window(self):
        tree = make_tree()
        tree.window_auto()
        tree.focus(1)
        tid = tree.input((0, 0), xpos=Pos.at(4), ypos=Pos.at(2), area=Area.values(5, 1))
        tree.focus_text(tid)
        assert tree.focused() == 0
        assert tree.focused_text() == tid
        assert tree.cursor() == (4, 2)


class TestTreeResize:
    """Tests for terminal resize."""

    def test_reports_misfits(self, caplog):
        tree = Tree.init(80, 24)
        tree.container(ById((0, 0)), xpos=Pos.at(0), ypos=Pos.at(0), area=Area.values(10, 5))
        tree.container(ById((0, 1)), xpos=Pos.at(50), ypos=Pos.at(0), area=Area.values(20, 5))
        with caplog.at_level(logging.WARNING, logger="term_widgets"):
            misfits = tree.resize(40, 20)
        assert misfits == [(0, 1)]
        assert (tree.window_ref(0).width, tree.window_ref(0).height) == (40, 20)
        assert tree.container_ref((0, 1)) is not None
        assert "0:1" in caplog.text

    def test_no_misfits(self):
        tree = make_tree()
        assert tree.resize(100, 40) == []

    def test_builder_sized_window_keeps_size(self):
        """Test that a smaller window keeps its size and only shrinks to fit."""
        tree = Tree.init(80, 24)
        small = tree.window(ByBuilder(WindowBuilder().area(Area.values(40, 10))))
        tree.resize(100, 30)
        assert (tree.window_ref(small).width, tree.window_ref(small).height) == (40, 10)
        assert (tree.window_ref(0).width, tree.window_ref(0).height) == (100, 30)
        tree.resize(30, 20)
        assert (tree.window_ref(small).width, tree.window_ref(small).height) == (30, 10)


class TestTreeEditing:
    """Tests for editing texts through the tree."""

    def test_edit_syncs_cursor(self):
        tree = make_tree()
        tid = tree.input((0, 0), xpos=Pos.at(2), ypos=Pos.at(1), area=Area.values(5, 1))
        tree.focus_text(tid)
        tree.edit(tid, EditOp.INSERT, "h")
        tree.edit(tid, EditOp.INSERT, "i")
        assert tree.text_ref(tid).value == "hi"
        assert tree.cursor() == (4, 1)

    def test_edit_missing(self):
        tree = make_tree()
        with pytest.raises(ComponentNotFound):
            tree.edit((0, 0, 0), EditOp.LEFT)
        with pytest.raises(ParentNotFound):
            tree.edit((0, 4, 0), EditOp.LEFT)

    def test_edit_read_only(self):
        tree = make_tree()
        tid = tree.noedit((0, 0), area=Area.values(5, 1))
        with pytest.raises(IdKindMismatch):
            tree.edit(tid, EditOp.INSERT, "x")

    def test_move_text_resyncs(self):
        tree = make_tree()
        tid = tree.input((0, 0), area=Area.values(5, 1))
        tree.focus_text(tid)
        tree.move_text(tid, 10, 4)
        assert tree.cursor() == (10, 4)

    def test_resize_text_resyncs(self):
        """Test that shrinking the focused text pulls the window cursor back."""
        tree = make_tree()
        tid = tree.input((0, 0), area=Area.values(10, 1), value="abcdefgh")
        tree.focus_text(tid)
        assert tree.cursor() == (8, 0)
        tree.resize_text(tid, Area.values(3, 3))
        text = tree.text_ref(tid)
        assert tree.cursor() == (text.crsh, text.crsv) == (2, 0)

    def test_move_container_conflict(self):
        tree = make_tree()
        tree.container(ById((0, 1)), xpos=Pos.at(40), ypos=Pos.at(0), area=Area.values(10, 10))
        with pytest.raises(SiblingConflict):
            tree.move_container((0, 1), 25, 0)


class TestTreeFocusOnPush:
    """Tests for focus carried by entities moved between trees."""

    def test_text_from_other_tree(self):
        """Test that a focused text moved in does not add a second holder."""
        tree = make_tree()
        tid = tree.input((0, 0), area=Area.values(3, 1))
        tree.focus_text(tid)
        other = make_tree()
        other.input((0, 0), area=Area.values(3, 1))
        moved_id = other.input((0, 0), xpos=Pos.at(5), area=Area.values(3, 1))
        other.focus_text(moved_id)
        moved = other.remove_text(moved_id)

        assert tree.text(ByValue(moved)) == (0, 0, 2)
        focused = [t.id for t in tree.container_ref((0, 0)) if t.is_focused()]
        assert focused == [tid]
        assert tree.focused_text() == tid

    def test_focused_text_into_unfocused_window(self):
        tree = make_tree()
        other = make_tree()
        moved_id = other.input((0, 0), xpos=Pos.at(4), ypos=Pos.at(2), area=Area.values(3, 1))
        other.focus_text(moved_id)
        tree.text(ByValue(other.remove_text(moved_id)))
        assert tree.focused_text() == moved_id
        assert tree.cursor() == (4, 2)

    def test_container_from_other_tree(self):
        tree = make_tree()
        tid = tree.input((0, 0), area=Area.values(3, 1))
        tree.focus_text(tid)
        other = Tree.init(80, 24)
        other.container(ById((0, 1)), xpos=Pos.at(40), ypos=Pos.at(0), area=Area.values(10, 3))
        other.focus_text(other.input((0, 1), area=Area.values(3, 1)))
        moved = other.remove_container((0, 1))

        tree.container(ByValue(moved))
        assert tree.window_ref(0).focused() == tid
        assert not moved.text_ref((0, 1, 0)).is_focused()

    def test_window_from_other_tree(self):
        """Test that a focused window pushed in leaves the current one focused."""
        tree = Tree.init(80, 24)
        other = Tree.init(80, 24)
        other.focus(other.window_auto())
        moved = other.remove_window(1)
        assert moved.is_focused()

        tree.push_window(moved)
        assert not moved.is_focused()
        assert [w.id for w in tree if w.is_focused()] == [0]

    def test_focused_window_into_empty_tree(self):
        tree = Tree(80, 24)
        other = Tree.init(80, 24)
        tree.push_window(other.remove_window(0))
        assert tree.focused() == 0


class TestTreeHandlers:
    """Tests for the handlers table."""

    def test_handlers(self):
        tree = Tree.init(80, 24)
        on_submit = Mock(return_value="sent")
        tree.handlers.register("submit", on_submit)
        assert tree.handlers.invoke("submit", (0, 0, 0)) == "sent"
        on_submit.assert_called_once_with((0, 0, 0))
