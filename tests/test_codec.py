"""
Unit tests for building trees from nested layouts and back.
"""

import pytest
from tiletabs.codec import (
    PaneLayout,
    SplitLayout,
    build_from_input,
    format_tree,
    to_nested,
)
from tiletabs.errors import InvalidLayout
from tiletabs.invariants import check_invariants
from tiletabs.nodes import PaneNode, SplitDirection, SplitNode


@pytest.mark.unit
class TestBuildFromInput:
    """Test flattening nested layouts."""

    def test_default_is_empty_root_pane(self):
        tree, index = build_from_input()

        assert tree.root == 1
        assert tree.pane(1) == PaneNode(id=1, parent=None, order=(), active=None)
        assert len(index) == 0

    def test_ids_are_minted_depth_first(self, nested_layout):
        tree, index = build_from_input(nested_layout)

        assert tree.split(1).children == (2, 3)
        assert tree.split(3).children == (4, 5)
        assert tree.split(5).children == (6, 7)
        assert tree.next_id == 8
        assert index.to_dict() == {"a": 2, "b": 4, "c": 6, "d": 7}
        check_invariants(tree, index)

    def test_parent_references(self, side_by_side):
        tree, _ = build_from_input(side_by_side)

        assert tree.split(1).parent is None
        assert tree.pane(2).parent == 1
        assert tree.pane(3).parent == 1

    def test_split_tag_form(self):
        tree, index = build_from_input(
            {
                "split": "horizontal",
                "children": [
                    {"split": "none", "order": ["a"], "active": "a"},
                    {"split": "none", "order": ["b"], "active": "b"},
                ],
            }
        )

        assert tree.split(1) == SplitNode(
            id=1, parent=None, direction=SplitDirection.HORIZONTAL, children=(2, 3)
        )
        assert index.pane_of("b") == 3

    def test_tree_is_read_only(self, side_by_side):
        tree, _ = build_from_input(side_by_side)
        with pytest.raises(TypeError):
            tree.nodes[9] = tree.nodes[2]


@pytest.mark.unit
class TestInvalidInput:
    """Test rejection of malformed nested layouts."""

    def test_single_child_split(self, make_pane, make_split):
        with pytest.raises(InvalidLayout):
            build_from_input(make_split("vertical", make_pane("a")))

    def test_split_without_children(self, make_split):
        with pytest.raises(InvalidLayout):
            build_from_input(make_split("vertical"))

    def test_unknown_direction(self, make_pane, make_split):
        with pytest.raises(InvalidLayout):
            build_from_input(make_split("diagonal", make_pane("a"), make_pane("b")))

    def test_unknown_split_tag(self):
        with pytest.raises(InvalidLayout):
            build_from_input({"split": "sideways", "children": []})

    def test_unknown_kind(self):
        with pytest.raises(InvalidLayout):
            build_from_input({"kind": "window"})

    def test_not_a_mapping(self):
        with pytest.raises(InvalidLayout):
            build_from_input(["a", "b"])

    def test_same_direction_nesting(self, make_pane, make_split):
        layout = make_split(
            "vertical",
            make_pane("a"),
            make_split("vertical", make_pane("b"), make_pane("c")),
        )
        with pytest.raises(InvalidLayout):
            build_from_input(layout)

    def test_duplicate_tab_in_pane(self, make_pane):
        with pytest.raises(InvalidLayout):
            build_from_input(make_pane("a", "a"))

    def test_tab_in_two_panes(self, make_pane, make_split):
        with pytest.raises(InvalidLayout):
            build_from_input(make_split("vertical", make_pane("a"), make_pane("a")))

    def test_active_not_in_order(self, make_pane):
        with pytest.raises(InvalidLayout):
            build_from_input(make_pane("a", active="b"))

    def test_missing_active(self):
        with pytest.raises(InvalidLayout):
            build_from_input({"kind": "pane", "order": ["a"], "active": None})

    def test_empty_pane_inside_split(self, make_pane, make_split):
        with pytest.raises(InvalidLayout):
            build_from_input(make_split("vertical", make_pane("a"), make_pane()))

    def test_invalid_layout_is_value_error(self, make_pane):
        with pytest.raises(ValueError):
            build_from_input(make_pane("a", active="b"))


@pytest.mark.unit
class TestToNested:
    """Test projecting a tree back into nested form."""

    def test_round_trip(self, nested_layout):
        tree, _ = build_from_input(nested_layout)
        assert to_nested(tree).to_dict(with_ids=False) == nested_layout

    def test_ids_attached(self, side_by_side):
        tree, _ = build_from_input(side_by_side)
        layout = to_nested(tree)

        assert isinstance(layout, SplitLayout)
        assert layout.id == 1
        assert [child.id for child in layout.children] == [2, 3]
        assert layout.to_dict()["children"][1] == {
            "id": 3,
            "kind": "pane",
            "order": ["t2", "t3"],
            "active": "t2",
        }

    def test_snapshot_is_immutable(self, side_by_side):
        layout = to_nested(build_from_input(side_by_side)[0])
        with pytest.raises(AttributeError):
            layout.children[0].active = "t9"
        assert isinstance(layout.children[0].order, tuple)

    def test_build_is_idempotent_over_snapshots(self, nested_layout):
        once = to_nested(build_from_input(nested_layout)[0])
        twice = to_nested(build_from_input(once)[0])
        assert twice == once

    def test_subtree(self, nested_layout):
        tree, _ = build_from_input(nested_layout)
        assert to_nested(tree, 5).to_dict(with_ids=False)["direction"] == "vertical"


@pytest.mark.unit
class TestFormatTree:
    """Test the debug outline."""

    def test_outline(self, side_by_side):
        text = format_tree(to_nested(build_from_input(side_by_side)[0]))
        assert text.splitlines() == [
            "split 1 vertical",
            "  pane 2 [t1*]",
            "  pane 3 [t2*, t3]",
        ]

    def test_empty_pane(self):
        assert format_tree(PaneLayout(id=1, order=(), active=None)) == "pane 1 []"
