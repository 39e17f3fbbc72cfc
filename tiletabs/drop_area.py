"""
Tab Drop Areas

Boundary to the drag-and-drop layer. The UI hit-tests pointer gestures and
asks a TabDropArea whether a dragged tab may land there; an accepted drop is
turned into a move command on the event bus, scoped to the area's realm.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from pubsub import pub

from . import topics
from .nodes import Edge, NodeId, TabId


@dataclass(frozen=True)
class TabDragDesc:
    """A tab being dragged."""

    realm: str
    id: TabId


class TabDropArea:
    """
    A drop target tied to one pane.

    Either pos (drop into the pane's tab strip) or edge (drop on one side of
    the pane to split it) must be given.
    """

    def __init__(
        self,
        realm: str,
        pane: NodeId,
        pos: Optional[int] = None,
        edge: Optional[Edge] = None,
        ignore: Optional[TabId] = None,
        bus=pub,
    ):
        """Initialize drop area.

        Args:
            realm: Layout surface this area belongs to
            pane: Destination pane id
            pos: Insertion position in the destination strip
            edge: Edge of the destination pane to split on
            ignore: Tab that may not be dropped here (e.g. the tab itself)
            bus: Event bus instance (Pypubsub)
        """
        if (pos is None) == (edge is None):
            raise ValueError("TabDropArea needs exactly one of pos or edge")

        self.realm = realm
        self.pane = pane
        self.pos = pos
        self.edge = Edge(edge) if edge is not None else None
        self.ignore = ignore
        self.bus = bus

    def can_drop(self, desc: TabDragDesc) -> bool:
        """Whether a dragged tab is accepted by this area."""
        return desc.realm == self.realm and desc.id != self.ignore

    def drop(self, desc: TabDragDesc) -> bool:
        """Drop a tab on this area.

        Returns:
            True if the drop was accepted and the move command published
        """
        if not self.can_drop(desc):
            return False

        if self.edge is not None:
            self.bus.sendMessage(
                topics.CMD_MOVE_TAB_SPLIT,
                realm=self.realm,
                tab=desc.id,
                dest=self.pane,
                edge=self.edge,
            )
        else:
            self.bus.sendMessage(
                topics.CMD_MOVE_TAB,
                realm=self.realm,
                tab=desc.id,
                dest=self.pane,
                pos=self.pos,
            )
        return True
