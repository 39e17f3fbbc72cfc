"""
Tree Surgery

Structural operations that restore the normalization invariants after a
pane edit: reparenting, promotion, same-direction merge and the collapse of
emptied panes.

All operations work on a TreeDraft, a mutable working copy of one snapshot.
A transition creates a draft, edits it, and commits it into a new
LayoutTree/TabIndex pair. If anything raises before commit, the draft is
simply dropped and the original snapshot is untouched.
"""

from __future__ import annotations
import logging
from dataclasses import replace
from typing import Dict, Iterable, Optional, Tuple

from .errors import DataCorruption
from .index import TabIndex
from .nodes import LayoutTree, Node, NodeId, PaneNode, SplitNode, TabId
from .pane_edits import splice_at

logger = logging.getLogger(__name__)


class TreeDraft:
    """Mutable working copy of a LayoutTree and its TabIndex."""

    def __init__(self, tree: LayoutTree, index: TabIndex):
        self.nodes: Dict[NodeId, Node] = dict(tree.nodes)
        self.tabs: Dict[TabId, NodeId] = index.to_dict()
        self.root = tree.root
        self.next_id = tree.next_id

    def commit(self) -> Tuple[LayoutTree, TabIndex]:
        """Freeze the draft into a new snapshot pair."""
        return LayoutTree(self.nodes, self.root, self.next_id), TabIndex(self.tabs)

    def get(self, node_id: NodeId) -> Node:
        node = self.nodes.get(node_id)
        if node is None:
            raise DataCorruption(f"Missing node {node_id}")
        return node

    def get_pane(self, node_id) -> Optional[PaneNode]:
        node = self.nodes.get(node_id)
        return node if isinstance(node, PaneNode) else None

    def pane(self, node_id: NodeId) -> PaneNode:
        node = self.get(node_id)
        if not isinstance(node, PaneNode):
            raise DataCorruption(f"Node {node_id} is not a pane")
        return node

    def split(self, node_id: NodeId) -> SplitNode:
        node = self.get(node_id)
        if not isinstance(node, SplitNode):
            raise DataCorruption(f"Node {node_id} is not a split")
        return node

    def put(self, node: Node) -> None:
        self.nodes[node.id] = node

    def delete(self, node_id: NodeId) -> None:
        if self.nodes.pop(node_id, None) is None:
            raise DataCorruption(f"Missing node {node_id}")


def allocate_id(draft: TreeDraft) -> NodeId:
    """Mint a fresh node id. Ids are never handed out twice per lineage."""
    node_id = draft.next_id
    draft.next_id += 1
    return node_id


def reparent_children(draft: TreeDraft, children: Iterable[NodeId], parent: NodeId) -> None:
    for child in children:
        draft.put(replace(draft.get(child), parent=parent))


def promote(
    draft: TreeDraft, node_id: NodeId, new_id: NodeId, new_parent: Optional[NodeId]
) -> None:
    """
    Relabel a node to new_id under new_parent.

    Whatever record was stored under new_id is replaced. Children of a
    promoted split, and index entries of a promoted pane's tabs, follow the
    node to its new id.
    """
    node = draft.get(node_id)

    draft.delete(node_id)
    draft.put(replace(node, id=new_id, parent=new_parent))

    if isinstance(node, SplitNode):
        reparent_children(draft, node.children, new_id)
    else:
        for tab in node.order:
            draft.tabs[tab] = new_id

    logger.debug("Promoted node %s to %s (parent %s)", node_id, new_id, new_parent)


def merge_into_parent(draft: TreeDraft, child_id: NodeId) -> None:
    """Splice a split into its parent when both share a direction."""
    child = draft.get(child_id)
    if not isinstance(child, SplitNode) or child.parent is None:
        return

    parent = draft.split(child.parent)
    if parent.direction != child.direction:
        return

    if child_id not in parent.children:
        raise DataCorruption(f"Node {child_id} missing from parent {parent.id}")
    index = parent.children.index(child_id)

    draft.put(replace(parent, children=splice_at(parent.children, index, child.children)))
    draft.delete(child_id)
    reparent_children(draft, child.children, parent.id)

    logger.debug("Merged split %s into %s", child_id, parent.id)


def collapse_empty_pane(draft: TreeDraft, pane_id: NodeId) -> None:
    """
    Remove an emptied non-root pane.

    If its parent split is left with a single child, that child takes over
    the parent's id and position and is then merged into its new parent if
    the directions match.
    """
    pane = draft.pane(pane_id)
    if pane.order or pane.parent is None:
        return

    parent = draft.split(pane.parent)
    if pane_id not in parent.children:
        raise DataCorruption(f"Pane {pane_id} missing from parent {parent.id}")

    draft.delete(pane_id)
    remaining = tuple(child for child in parent.children if child != pane_id)

    if len(remaining) > 1:
        draft.put(replace(parent, children=remaining))
        logger.debug("Dropped empty pane %s from split %s", pane_id, parent.id)
        return

    logger.debug("Dropped empty pane %s, unsplitting %s", pane_id, parent.id)
    promote(draft, remaining[0], parent.id, parent.parent)
    merge_into_parent(draft, parent.id)
