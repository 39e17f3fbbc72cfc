"""
Event Topics for tiletabs

All pub/sub topics are defined here for easy discovery and documentation.
Topic naming convention: <category>.<action>

Every topic carries a ``realm`` argument so that several layout surfaces can
share one bus without reacting to each other's commands.
"""

# Notifications
LAYOUT_UPDATED = "layout.updated"
"""Published after an action was applied. Params: realm, layout, tabs"""

TAB_CLOSED = "tab.closed"
"""Published when a tab leaves the layout. Params: realm, tab, payload"""

# Command events (imperative - tell a LayoutManager to do something)
# These are triggered by drop areas, key bindings or other components

CMD_SELECT_TAB = "cmd.select_tab"
"""Command: Make a tab the active tab of its pane. Params: realm, tab"""

CMD_CLOSE_TAB = "cmd.close_tab"
"""Command: Close a tab. Params: realm, tab"""

CMD_MOVE_TAB = "cmd.move_tab"
"""Command: Move a tab into a pane at a position. Params: realm, tab, dest, pos"""

CMD_MOVE_TAB_SPLIT = "cmd.move_tab_split"
"""Command: Move a tab into a new pane next to dest. Params: realm, tab, dest, edge"""

CMD_OPEN_TAB = "cmd.open_tab"
"""Command: Admit a new tab. Params: realm, tab, payload, pane, pos"""
