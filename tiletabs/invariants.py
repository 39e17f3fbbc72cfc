"""
Layout Invariants

Full consistency check of a tree and its tab index.
"""

from __future__ import annotations
from typing import Set

from .errors import DataCorruption
from .index import TabIndex
from .nodes import LayoutTree, NodeId, PaneNode, SplitNode


def check_invariants(tree: LayoutTree, index: TabIndex) -> None:
    """
    Verify that a snapshot is normalized and consistent.

    Checks:
    - the root exists and has no parent; every node is reached exactly once
      from the root and names its parent correctly (connected, acyclic)
    - every split has at least two children
    - no split has a child split of the same direction
    - pane orders hold no duplicates and active is a member, or None exactly
      when the pane is empty
    - only the root pane may be empty
    - the tab index lists exactly the tabs of every pane, each in one pane
    - no node id is at or above next_id

    Raises:
        DataCorruption: Describing the first violation found
    """
    root = tree.node(tree.root)
    if root.parent is not None:
        raise DataCorruption(f"Root {tree.root} has parent {root.parent}")

    seen: Set[NodeId] = set()
    tabs = {}
    stack = [tree.root]

    while stack:
        node_id = stack.pop()
        if node_id in seen:
            raise DataCorruption(f"Node {node_id} reached twice")
        seen.add(node_id)

        node = tree.node(node_id)
        if node.id != node_id:
            raise DataCorruption(f"Node stored under {node_id} has id {node.id}")
        if node_id >= tree.next_id:
            raise DataCorruption(f"Node {node_id} not below next id {tree.next_id}")

        if isinstance(node, SplitNode):
            if len(node.children) < 2:
                raise DataCorruption(f"Split {node_id} has fewer than two children")
            for child_id in node.children:
                child = tree.node(child_id)
                if child.parent != node_id:
                    raise DataCorruption(
                        f"Node {child_id} has parent {child.parent}, expected {node_id}"
                    )
                if isinstance(child, SplitNode) and child.direction == node.direction:
                    raise DataCorruption(
                        f"Split {child_id} has the same direction as parent {node_id}"
                    )
            stack.extend(node.children)

        elif isinstance(node, PaneNode):
            if len(set(node.order)) != len(node.order):
                raise DataCorruption(f"Pane {node_id} lists a tab twice")
            if node.order and node.active not in node.order:
                raise DataCorruption(f"Pane {node_id} active tab {node.active!r} not in order")
            if not node.order:
                if node.active is not None:
                    raise DataCorruption(f"Empty pane {node_id} has active tab")
                if node.parent is not None:
                    raise DataCorruption(f"Empty pane {node_id} is not the root")
            for tab in node.order:
                if tab in tabs:
                    raise DataCorruption(f"Tab {tab!r} in panes {tabs[tab]} and {node_id}")
                tabs[tab] = node_id

        else:
            raise DataCorruption(f"Unknown node type {type(node).__name__}")

    if len(seen) != len(tree.nodes):
        unreachable = sorted(set(tree.nodes) - seen)
        raise DataCorruption(f"Unreachable nodes: {unreachable}")

    if tabs != index.to_dict():
        raise DataCorruption("Tab index does not match pane contents")
