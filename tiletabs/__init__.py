"""
tiletabs - tiling tab layout engine

Keeps the state of a tiling tab surface: a tree of splits whose leaves are
tab strips (panes), normalized after every change.

This package provides:
- Flat layout tree records and the tab location index
- Pane-local edits and tree surgery (promote, merge, collapse)
- A pure reducer for select/close/move/move-with-split/open actions
- Conversion between nested layout descriptions and the flat tree
- A LayoutManager that owns one surface and notifies listeners
- Drop areas that turn drag-and-drop gestures into bus commands

Example usage:
    from tiletabs import LayoutManager, Edge

    manager = LayoutManager(
        {"kind": "pane", "order": ["a", "b"], "active": "a"},
    )
    unsubscribe = manager.subscribe(lambda layout, tabs: print(layout))
    manager.move_tab_split("b", manager.pane_of("a"), Edge.RIGHT)
"""

__version__ = "0.1.0"

from .errors import LayoutError, InvalidLayout, DataCorruption

from .nodes import (
    NodeId,
    TabId,
    SplitDirection,
    Edge,
    PaneNode,
    SplitNode,
    LayoutTree,
)

from .index import TabIndex

from .actions import (
    SelectTab,
    CloseTab,
    MoveTab,
    MoveTabSplit,
    OpenTab,
    LayoutAction,
)

from .reducer import Transition, reduce

from .codec import (
    PaneLayout,
    SplitLayout,
    Layout,
    build_from_input,
    to_nested,
    format_tree,
)

from .invariants import check_invariants

from .config import LayoutConfig

from .manager import LayoutManager

from .drop_area import TabDragDesc, TabDropArea

from . import topics

__all__ = [
    # Version
    "__version__",
    # Errors
    "LayoutError",
    "InvalidLayout",
    "DataCorruption",
    # Tree
    "NodeId",
    "TabId",
    "SplitDirection",
    "Edge",
    "PaneNode",
    "SplitNode",
    "LayoutTree",
    "TabIndex",
    # Actions
    "SelectTab",
    "CloseTab",
    "MoveTab",
    "MoveTabSplit",
    "OpenTab",
    "LayoutAction",
    "Transition",
    "reduce",
    # Codec
    "PaneLayout",
    "SplitLayout",
    "Layout",
    "build_from_input",
    "to_nested",
    "format_tree",
    "check_invariants",
    # Manager
    "LayoutConfig",
    "LayoutManager",
    # Drag and drop
    "TabDragDesc",
    "TabDropArea",
    # Event topics
    "topics",
]
