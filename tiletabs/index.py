"""
Tab Location Index

Maps every tab id to the id of the pane that lists it.
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional

from .nodes import NodeId, TabId


class TabIndex(Mapping):
    """Immutable tab -> pane mapping.

    The index is derived from the panes' tab orders but kept incrementally:
    transitions copy it into a draft, edit the few entries they touch, and
    freeze the result.
    """

    __slots__ = ("_panes",)

    def __init__(self, panes: Optional[Mapping[TabId, NodeId]] = None):
        self._panes: Mapping[TabId, NodeId] = MappingProxyType(dict(panes or {}))

    def __getitem__(self, tab: TabId) -> NodeId:
        return self._panes[tab]

    def __iter__(self) -> Iterator[TabId]:
        return iter(self._panes)

    def __len__(self) -> int:
        return len(self._panes)

    def __repr__(self) -> str:
        return f"TabIndex({dict(self._panes)!r})"

    def pane_of(self, tab: TabId) -> Optional[NodeId]:
        """Get the pane containing a tab, or None if the tab is unknown."""
        return self._panes.get(tab)

    def to_dict(self) -> Dict[TabId, NodeId]:
        return dict(self._panes)
