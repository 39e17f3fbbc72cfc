"""
Layout Tree Nodes

Flat node records and the immutable LayoutTree snapshot.

A tree is stored as a mapping from node id to node record. Nodes refer to
each other only by id (``parent`` and ``children``), never by object
reference, so any node can be located, replaced or deleted directly.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple, Union

from .errors import DataCorruption

NodeId = int
TabId = str


class SplitDirection(Enum):
    """Orientation of a split node."""

    HORIZONTAL = "horizontal"  # Children stacked top-to-bottom
    VERTICAL = "vertical"  # Children arranged left-to-right


class Edge(Enum):
    """Edge of a pane that a tab can be dropped on to create a split."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"

    @property
    def split_direction(self) -> SplitDirection:
        """Orientation of the split created by dropping on this edge."""
        if self in (Edge.LEFT, Edge.RIGHT):
            return SplitDirection.VERTICAL
        return SplitDirection.HORIZONTAL

    @property
    def after(self) -> bool:
        """Whether the new pane goes after the destination pane."""
        return self in (Edge.RIGHT, Edge.BOTTOM)


@dataclass(frozen=True)
class PaneNode:
    """Leaf node: an ordered strip of tabs with one active tab."""

    id: NodeId
    parent: Optional[NodeId]
    order: Tuple[TabId, ...] = ()
    active: Optional[TabId] = None

    @property
    def is_empty(self) -> bool:
        return not self.order


@dataclass(frozen=True)
class SplitNode:
    """Internal node: two or more children sharing one orientation."""

    id: NodeId
    parent: Optional[NodeId]
    direction: SplitDirection
    children: Tuple[NodeId, ...]


Node = Union[PaneNode, SplitNode]


class LayoutTree:
    """
    Immutable snapshot of a layout.

    Holds the node map, the root id and the next id to mint. Transitions
    never modify a LayoutTree; they build a new one (see surgery.TreeDraft).
    """

    __slots__ = ("_nodes", "_root", "_next_id")

    def __init__(self, nodes: Mapping[NodeId, Node], root: NodeId, next_id: NodeId):
        self._nodes = MappingProxyType(dict(nodes))
        self._root = root
        self._next_id = next_id

    @property
    def nodes(self) -> Mapping[NodeId, Node]:
        """Read-only view of the node map."""
        return self._nodes

    @property
    def root(self) -> NodeId:
        return self._root

    @property
    def next_id(self) -> NodeId:
        return self._next_id

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id) -> bool:
        return node_id in self._nodes

    def __eq__(self, other) -> bool:
        if not isinstance(other, LayoutTree):
            return NotImplemented
        return (
            self._root == other._root
            and self._next_id == other._next_id
            and dict(self._nodes) == dict(other._nodes)
        )

    def __hash__(self):
        return hash((self._root, self._next_id, frozenset(self._nodes.items())))

    def __repr__(self) -> str:
        return f"LayoutTree(root={self._root}, nodes={len(self._nodes)})"

    def node(self, node_id: NodeId) -> Node:
        """Get a node that must exist."""
        node = self._nodes.get(node_id)
        if node is None:
            raise DataCorruption(f"Missing node {node_id}")
        return node

    def pane(self, node_id: NodeId) -> PaneNode:
        """Get a node that must exist and be a pane."""
        node = self.node(node_id)
        if not isinstance(node, PaneNode):
            raise DataCorruption(f"Node {node_id} is not a pane")
        return node

    def split(self, node_id: NodeId) -> SplitNode:
        """Get a node that must exist and be a split."""
        node = self.node(node_id)
        if not isinstance(node, SplitNode):
            raise DataCorruption(f"Node {node_id} is not a split")
        return node

    def get_pane(self, node_id) -> Optional[PaneNode]:
        """Get a pane by id, or None if the id is unknown or not a pane."""
        node = self._nodes.get(node_id)
        return node if isinstance(node, PaneNode) else None

    def walk(self, node_id: Optional[NodeId] = None) -> Iterator[Node]:
        """Iterate nodes depth-first, parents before children."""
        stack = [self._root if node_id is None else node_id]
        while stack:
            node = self.node(stack.pop())
            yield node
            if isinstance(node, SplitNode):
                stack.extend(reversed(node.children))

    def panes(self) -> Iterator[PaneNode]:
        """Iterate panes in depth-first (reading) order."""
        for node in self.walk():
            if isinstance(node, PaneNode):
                yield node

    def first_pane(self) -> PaneNode:
        return next(self.panes())
