"""
Layout Actions

One frozen dataclass per action kind. The reducer dispatches on the class.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

from .nodes import Edge, NodeId, TabId


@dataclass(frozen=True)
class SelectTab:
    """Make tab the active tab of its pane."""

    tab: TabId


@dataclass(frozen=True)
class CloseTab:
    """Remove tab from the layout."""

    tab: TabId


@dataclass(frozen=True)
class MoveTab:
    """Move tab into pane dest at position pos (reorders if already there)."""

    tab: TabId
    dest: NodeId
    pos: int = 0


@dataclass(frozen=True)
class MoveTabSplit:
    """Move tab into a new pane created on one edge of pane dest."""

    tab: TabId
    dest: NodeId
    edge: Edge

    def __post_init__(self):
        if not isinstance(self.edge, Edge):
            object.__setattr__(self, "edge", Edge(self.edge))


@dataclass(frozen=True)
class OpenTab:
    """Admit a tab that is not yet part of the layout.

    pane defaults to the first pane of the tree, pos to the end of its strip.
    """

    tab: TabId
    pane: Optional[NodeId] = None
    pos: Optional[int] = None


LayoutAction = Union[SelectTab, CloseTab, MoveTab, MoveTabSplit, OpenTab]
