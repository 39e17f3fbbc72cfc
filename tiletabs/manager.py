"""
Layout Manager

Owns the current layout of one tab surface and notifies listeners when it
changes.
"""

from __future__ import annotations
import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, TypeVar

from pubsub import pub

from . import topics
from .actions import CloseTab, LayoutAction, MoveTab, MoveTabSplit, OpenTab, SelectTab
from .codec import EMPTY_LAYOUT, Layout, build_from_input, format_tree, to_nested
from .config import LayoutConfig
from .index import TabIndex
from .invariants import check_invariants
from .nodes import Edge, LayoutTree, NodeId, TabId
from .reducer import reduce

logger = logging.getLogger(__name__)

T = TypeVar("T")

LayoutUpdateListener = Callable[[Layout, Mapping[TabId, Any]], None]


class LayoutManager(Generic[T]):
    """
    Manages the layout of one tab surface.

    This component subscribes to the tab command events of its realm and
    publishes LAYOUT_UPDATED and TAB_CLOSED events.

    Responsibilities:
    - Hold the current tree snapshot and tab location index
    - Hold the payload registered for every tab
    - Apply actions through the reducer, one at a time
    - Notify listeners after each applied action, in subscription order
    - CMD_SELECT_TAB / CMD_CLOSE_TAB / CMD_MOVE_TAB / CMD_MOVE_TAB_SPLIT /
      CMD_OPEN_TAB: Apply the matching action
    """

    def __init__(
        self,
        layout: Any = EMPTY_LAYOUT,
        tabs: Optional[Mapping[TabId, T]] = None,
        config: Optional[LayoutConfig] = None,
        bus=pub,
    ):
        """Initialize layout manager.

        Args:
            layout: Nested layout description to start from
            tabs: Payload for each tab listed in layout
            config: Layout configuration
            bus: Event bus instance (Pypubsub)

        Raises:
            InvalidLayout: If layout is malformed
        """
        self.bus = bus
        self.config = config or LayoutConfig()
        self.realm = self.config.realm

        self._tree, self._index = build_from_input(layout)
        self._tabs: Dict[TabId, T] = dict(tabs or {})
        self._listeners: List[LayoutUpdateListener] = []

        if self.config.validate:
            check_invariants(self._tree, self._index)

        if self.config.debug_events:
            self.bus.subscribe(self.debug_event_logger, self.bus.ALL_TOPICS)

        self._setup_subscriptions()

    def _setup_subscriptions(self):
        """Subscribe to the command events LayoutManager handles."""
        self.bus.subscribe(self._on_select_tab, topics.CMD_SELECT_TAB)
        self.bus.subscribe(self._on_close_tab, topics.CMD_CLOSE_TAB)
        self.bus.subscribe(self._on_move_tab, topics.CMD_MOVE_TAB)
        self.bus.subscribe(self._on_move_tab_split, topics.CMD_MOVE_TAB_SPLIT)
        self.bus.subscribe(self._on_open_tab, topics.CMD_OPEN_TAB)

    def debug_event_logger(self, topic=pub.AUTO_TOPIC, **kwargs):
        """Log all events published on the event bus."""
        data_str = ", ".join(
            f"{k}={v}" for k, v in kwargs.items() if k not in ("topic", "layout")
        )
        logger.debug("EVENT: %s | %s", topic.getName(), data_str)
        if "layout" in kwargs:
            logger.debug("Layout:\n%s", format_tree(kwargs["layout"]))

    # State accessors

    @property
    def tree(self) -> LayoutTree:
        """Current flat tree snapshot."""
        return self._tree

    @property
    def index(self) -> TabIndex:
        """Current tab location index."""
        return self._index

    @property
    def layout(self) -> Layout:
        """Current nested snapshot."""
        return to_nested(self._tree)

    @property
    def tabs(self) -> Mapping[TabId, T]:
        """Read-only view of the tab payload registry."""
        return MappingProxyType(self._tabs)

    def pane_of(self, tab: TabId) -> Optional[NodeId]:
        """Get the pane containing a tab."""
        return self._index.pane_of(tab)

    # Observation

    def subscribe(self, listener: LayoutUpdateListener) -> Callable[[], None]:
        """Register a listener and call it once with the current state.

        Args:
            listener: Called as listener(layout, tabs)

        Returns:
            Function that unregisters the listener
        """
        self._listeners.append(listener)
        listener(self.layout, MappingProxyType(dict(self._tabs)))

        def unsubscribe():
            self.remove_update_listener(listener)

        return unsubscribe

    def add_update_listener(self, listener: LayoutUpdateListener) -> None:
        self.subscribe(listener)

    def remove_update_listener(self, listener: LayoutUpdateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _update(self) -> None:
        """Notify listeners and the bus of the committed state."""
        layout = self.layout
        tabs = MappingProxyType(dict(self._tabs))

        for listener in list(self._listeners):
            listener(layout, tabs)

        self.bus.sendMessage(topics.LAYOUT_UPDATED, realm=self.realm, layout=layout, tabs=tabs)

    # Mutation

    def dispatch(self, action: LayoutAction, payload: Optional[T] = None) -> bool:
        """Apply one action to the current state.

        Args:
            action: Action to apply
            payload: Payload to register when action is OpenTab

        Returns:
            True if the action was applied, False if it was a no-op
        """
        closed_payload = None
        if isinstance(action, CloseTab):
            closed_payload = self._tabs.get(action.tab)

        result = reduce(self._tree, self._index, action)
        if not result.applied:
            return False

        if self.config.validate:
            check_invariants(result.tree, result.index)

        self._tree, self._index = result.tree, result.index

        if isinstance(action, OpenTab):
            self._tabs[action.tab] = payload
        elif isinstance(action, CloseTab):
            self._tabs.pop(action.tab, None)

        self._update()

        if isinstance(action, CloseTab):
            self.bus.sendMessage(
                topics.TAB_CLOSED, realm=self.realm, tab=action.tab, payload=closed_payload
            )
        return True

    def select_tab(self, tab: TabId) -> bool:
        return self.dispatch(SelectTab(tab))

    def close_tab(self, tab: TabId) -> bool:
        return self.dispatch(CloseTab(tab))

    def move_tab(self, tab: TabId, dest: NodeId, pos: int = 0) -> bool:
        return self.dispatch(MoveTab(tab, dest, pos))

    def move_tab_split(self, tab: TabId, dest: NodeId, edge: Edge) -> bool:
        return self.dispatch(MoveTabSplit(tab, dest, Edge(edge)))

    def open_tab(
        self,
        tab: TabId,
        payload: Optional[T] = None,
        pane: Optional[NodeId] = None,
        pos: Optional[int] = None,
    ) -> bool:
        """Admit a new tab into the layout.

        Args:
            tab: Id of the new tab
            payload: Opaque data associated with the tab
            pane: Pane to open the tab in (first pane if None)
            pos: Position in the pane's strip (end if None)

        Returns:
            True if the tab was added, False if it already exists or pane is
            not a pane
        """
        return self.dispatch(OpenTab(tab, pane, pos), payload=payload)

    # Command event handlers

    def _on_select_tab(self, realm, tab):
        """Handle CMD_SELECT_TAB command."""
        if realm == self.realm:
            self.select_tab(tab)

    def _on_close_tab(self, realm, tab):
        """Handle CMD_CLOSE_TAB command."""
        if realm == self.realm:
            self.close_tab(tab)

    def _on_move_tab(self, realm, tab, dest, pos):
        """Handle CMD_MOVE_TAB command."""
        if realm == self.realm:
            self.move_tab(tab, dest, pos)

    def _on_move_tab_split(self, realm, tab, dest, edge):
        """Handle CMD_MOVE_TAB_SPLIT command."""
        if realm == self.realm:
            self.move_tab_split(tab, dest, edge)

    def _on_open_tab(self, realm, tab, payload=None, pane=None, pos=None):
        """Handle CMD_OPEN_TAB command."""
        if realm == self.realm:
            self.open_tab(tab, payload, pane, pos)
