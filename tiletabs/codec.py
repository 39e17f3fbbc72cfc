"""
Tree Codec

Converts between the nested layout description used to seed a layout and
the flat LayoutTree, and projects a LayoutTree back into an immutable nested
snapshot for renderers.

Nested input nodes are dicts of the form::

    {"kind": "split", "direction": "vertical", "children": [...]}
    {"kind": "pane", "order": ["a", "b"], "active": "a"}

The single-tag form ``{"split": "none" | "horizontal" | "vertical", ...}``
and the PaneLayout/SplitLayout snapshots returned by to_nested are accepted
as well.
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .errors import InvalidLayout
from .index import TabIndex
from .nodes import LayoutTree, Node, NodeId, PaneNode, SplitDirection, SplitNode, TabId


@dataclass(frozen=True)
class PaneLayout:
    """Nested snapshot of a pane."""

    id: NodeId
    order: Tuple[TabId, ...]
    active: Optional[TabId]

    kind = "pane"

    def to_dict(self, with_ids: bool = True) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "kind": self.kind,
            "order": list(self.order),
            "active": self.active,
        }
        if with_ids:
            result["id"] = self.id
        return result


@dataclass(frozen=True)
class SplitLayout:
    """Nested snapshot of a split."""

    id: NodeId
    direction: SplitDirection
    children: Tuple["Layout", ...]

    kind = "split"

    def to_dict(self, with_ids: bool = True) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "kind": self.kind,
            "direction": self.direction.value,
            "children": [child.to_dict(with_ids) for child in self.children],
        }
        if with_ids:
            result["id"] = self.id
        return result


Layout = Union[PaneLayout, SplitLayout]

EMPTY_LAYOUT: Mapping[str, Any] = MappingProxyType({"kind": "pane", "order": (), "active": None})


def _parse_direction(value: Any) -> SplitDirection:
    if isinstance(value, SplitDirection):
        return value
    try:
        return SplitDirection(value)
    except ValueError:
        raise InvalidLayout(f"Layout with invalid split direction: {value!r}") from None


def _describe(layout: Any) -> Tuple[str, Any]:
    """
    Classify one nested node.

    Returns:
        ("pane", (order, active)) or ("split", (direction, children))
    """
    if isinstance(layout, PaneLayout):
        return "pane", (layout.order, layout.active)
    if isinstance(layout, SplitLayout):
        return "split", (layout.direction, layout.children)
    if not isinstance(layout, Mapping):
        raise InvalidLayout(f"Layout node must be a mapping, got {type(layout).__name__}")

    if "kind" in layout:
        kind = layout["kind"]
        if kind == "pane":
            return "pane", (layout.get("order", ()), layout.get("active"))
        if kind == "split":
            return "split", (_parse_direction(layout.get("direction")), layout.get("children", ()))
        raise InvalidLayout(f"Layout with invalid 'kind' property: {kind!r}")

    if "split" in layout:
        split = layout["split"]
        if split == "none":
            return "pane", (layout.get("order", ()), layout.get("active"))
        return "split", (_parse_direction(split), layout.get("children", ()))

    raise InvalidLayout("Layout node has neither 'kind' nor 'split' property")


class _Builder:
    """Flattens one nested description, minting ids depth-first."""

    def __init__(self):
        self.nodes: Dict[NodeId, Node] = {}
        self.tabs: Dict[TabId, NodeId] = {}
        self.next_id: NodeId = 1

    def build(
        self,
        layout: Any,
        parent: Optional[NodeId] = None,
        parent_direction: Optional[SplitDirection] = None,
    ) -> NodeId:
        node_id = self.next_id
        self.next_id += 1

        kind, data = _describe(layout)

        if kind == "split":
            direction, children = data
            children = list(children)
            if len(children) < 2:
                raise InvalidLayout(f"Split layout with {len(children)} child(ren)")
            if direction == parent_direction:
                raise InvalidLayout(f"Split layout nested in split of same direction {direction.value}")
            child_ids = tuple(self.build(child, node_id, direction) for child in children)
            self.nodes[node_id] = SplitNode(
                id=node_id, parent=parent, direction=direction, children=child_ids
            )
        else:
            order, active = data
            order = tuple(order)
            self._check_pane(order, active, parent)
            for tab in order:
                self.tabs[tab] = node_id
            self.nodes[node_id] = PaneNode(id=node_id, parent=parent, order=order, active=active)

        return node_id

    def _check_pane(self, order: Tuple[TabId, ...], active: Optional[TabId], parent) -> None:
        if len(set(order)) != len(order):
            raise InvalidLayout(f"Pane layout lists a tab twice: {list(order)}")
        for tab in order:
            if tab in self.tabs:
                raise InvalidLayout(f"Tab {tab!r} appears in more than one pane")
        if not order:
            if active is not None:
                raise InvalidLayout(f"Empty pane layout with active tab {active!r}")
            if parent is not None:
                raise InvalidLayout("Empty pane layout inside a split")
        elif active not in order:
            raise InvalidLayout(f"Active tab {active!r} not in pane order {list(order)}")


def build_from_input(layout: Any = EMPTY_LAYOUT) -> Tuple[LayoutTree, TabIndex]:
    """Build a flat tree and its tab index from a nested description.

    Args:
        layout: Nested layout description (defaults to a single empty pane)

    Returns:
        (tree, index) pair

    Raises:
        InvalidLayout: If the description is malformed or not normalized
    """
    builder = _Builder()
    root = builder.build(layout)
    return LayoutTree(builder.nodes, root, builder.next_id), TabIndex(builder.tabs)


def to_nested(tree: LayoutTree, node_id: Optional[NodeId] = None) -> Layout:
    """Project a flat tree (or one of its subtrees) into a nested snapshot."""
    node = tree.node(tree.root if node_id is None else node_id)

    if isinstance(node, SplitNode):
        return SplitLayout(
            id=node.id,
            direction=node.direction,
            children=tuple(to_nested(tree, child) for child in node.children),
        )
    return PaneLayout(id=node.id, order=node.order, active=node.active)


def format_tree(layout: Layout, indent: int = 0) -> str:
    """Render a nested snapshot as an indented outline, one node per line."""
    pad = "  " * indent
    if isinstance(layout, SplitLayout):
        lines: List[str] = [f"{pad}split {layout.id} {layout.direction.value}"]
        lines.extend(format_tree(child, indent + 1) for child in layout.children)
        return "\n".join(lines)

    tabs = ", ".join(f"{tab}*" if tab == layout.active else str(tab) for tab in layout.order)
    return f"{pad}pane {layout.id} [{tabs}]"
