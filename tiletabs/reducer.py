"""
Layout Reducer

Pure state transitions: (tree, index, action) -> Transition.

Each action combines pane-local edits with tree surgery. A rejected action
returns the original tree and index objects with applied=False; nothing is
partially applied.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, replace

from .actions import CloseTab, LayoutAction, MoveTab, MoveTabSplit, OpenTab, SelectTab
from .errors import DataCorruption
from .index import TabIndex
from .nodes import LayoutTree, NodeId, PaneNode, SplitNode, TabId
from .pane_edits import insert_at, insert_tab, move_tab_within_pane, remove_tab, select_tab
from .surgery import TreeDraft, allocate_id, collapse_empty_pane, promote

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """Result of applying one action."""

    tree: LayoutTree
    index: TabIndex
    applied: bool

    def __bool__(self) -> bool:
        return self.applied


def _rejected(tree: LayoutTree, index: TabIndex, action: LayoutAction, reason: str) -> Transition:
    logger.debug("Rejected %s: %s", action, reason)
    return Transition(tree, index, False)


def _committed(draft: TreeDraft, action: LayoutAction) -> Transition:
    tree, index = draft.commit()
    logger.debug("Applied %s", action)
    return Transition(tree, index, True)


def _move_tab(draft: TreeDraft, tab: TabId, source: NodeId, dest: NodeId, pos: int) -> bool:
    """Move tab from pane source into pane dest within a draft."""
    source_pane = draft.pane(source)
    if tab not in source_pane.order:
        return False

    if source == dest:
        draft.put(move_tab_within_pane(source_pane, tab, pos))
        return True

    dest_pane = draft.get_pane(dest)
    if dest_pane is None:
        return False

    draft.put(remove_tab(source_pane, tab))
    draft.put(insert_tab(dest_pane, tab, pos))
    draft.tabs[tab] = dest

    collapse_empty_pane(draft, source)
    return True


def _select_tab(tree: LayoutTree, index: TabIndex, action: SelectTab) -> Transition:
    pane_id = index.pane_of(action.tab)
    if pane_id is None:
        return _rejected(tree, index, action, "unknown tab")

    pane = tree.pane(pane_id)
    if action.tab not in pane.order:
        return _rejected(tree, index, action, f"tab not in pane {pane_id}")

    selected = select_tab(pane, action.tab)
    if selected is pane:
        return Transition(tree, index, True)

    draft = TreeDraft(tree, index)
    draft.put(selected)
    return _committed(draft, action)


def _close_tab(tree: LayoutTree, index: TabIndex, action: CloseTab) -> Transition:
    pane_id = index.pane_of(action.tab)
    if pane_id is None:
        return _rejected(tree, index, action, "unknown tab")

    pane = tree.pane(pane_id)
    if action.tab not in pane.order:
        return _rejected(tree, index, action, f"tab not in pane {pane_id}")

    draft = TreeDraft(tree, index)
    draft.put(remove_tab(pane, action.tab))
    del draft.tabs[action.tab]
    collapse_empty_pane(draft, pane_id)
    return _committed(draft, action)


def _move_tab_action(tree: LayoutTree, index: TabIndex, action: MoveTab) -> Transition:
    source = index.pane_of(action.tab)
    if source is None:
        return _rejected(tree, index, action, "unknown tab")
    if tree.get_pane(action.dest) is None:
        return _rejected(tree, index, action, f"{action.dest!r} is not a pane")

    draft = TreeDraft(tree, index)
    if not _move_tab(draft, action.tab, source, action.dest, action.pos):
        return _rejected(tree, index, action, f"tab not in pane {source}")
    return _committed(draft, action)


def _move_tab_split(tree: LayoutTree, index: TabIndex, action: MoveTabSplit) -> Transition:
    dest = action.dest
    dest_pane = tree.get_pane(dest)
    if dest_pane is None:
        return _rejected(tree, index, action, f"{dest!r} is not a pane")

    source = index.pane_of(action.tab)
    if source is None:
        return _rejected(tree, index, action, "unknown tab")
    if action.tab not in tree.pane(source).order:
        return _rejected(tree, index, action, f"tab not in pane {source}")
    if source == dest and len(dest_pane.order) == 1:
        return _rejected(tree, index, action, "cannot split a pane's only tab off itself")

    draft = TreeDraft(tree, index)
    direction = action.edge.split_direction

    parent_id = None
    pos = 0

    if dest_pane.parent is not None:
        dest_parent = draft.split(dest_pane.parent)
        if dest_parent.direction == direction:
            if dest not in dest_parent.children:
                raise DataCorruption(f"Pane {dest} missing from parent {dest_parent.id}")
            parent_id = dest_parent.id
            pos = dest_parent.children.index(dest)

    if parent_id is None:
        # The new split takes over dest's id and position; dest moves under it
        parent_id = dest
        moved = allocate_id(draft)
        promote(draft, dest, moved, parent_id)
        draft.put(
            SplitNode(
                id=parent_id,
                parent=dest_pane.parent,
                direction=direction,
                children=(moved,),
            )
        )
        if source == dest:
            source = moved

    if action.edge.after:
        pos += 1

    new_id = allocate_id(draft)
    draft.put(PaneNode(id=new_id, parent=parent_id))
    parent = draft.split(parent_id)
    draft.put(replace(parent, children=insert_at(parent.children, new_id, pos)))

    if not _move_tab(draft, action.tab, source, new_id, 0):
        raise DataCorruption(f"Tab {action.tab!r} vanished from pane {source}")
    return _committed(draft, action)


def _open_tab(tree: LayoutTree, index: TabIndex, action: OpenTab) -> Transition:
    if action.tab in index:
        return _rejected(tree, index, action, "tab already in layout")

    if action.pane is None:
        pane = tree.first_pane()
    else:
        pane = tree.get_pane(action.pane)
        if pane is None:
            return _rejected(tree, index, action, f"{action.pane!r} is not a pane")

    pos = len(pane.order) if action.pos is None else action.pos

    draft = TreeDraft(tree, index)
    draft.put(insert_tab(pane, action.tab, pos))
    draft.tabs[action.tab] = pane.id
    return _committed(draft, action)


def reduce(tree: LayoutTree, index: TabIndex, action: LayoutAction) -> Transition:
    """Apply one action to a snapshot.

    Args:
        tree: Current layout tree
        index: Tab location index matching tree
        action: Action to apply

    Returns:
        Transition holding the next snapshot and whether the action applied

    Raises:
        DataCorruption: If tree and index were inconsistent before the call
        TypeError: If action is not a layout action
    """
    if isinstance(action, SelectTab):
        return _select_tab(tree, index, action)
    elif isinstance(action, CloseTab):
        return _close_tab(tree, index, action)
    elif isinstance(action, MoveTab):
        return _move_tab_action(tree, index, action)
    elif isinstance(action, MoveTabSplit):
        return _move_tab_split(tree, index, action)
    elif isinstance(action, OpenTab):
        return _open_tab(tree, index, action)
    raise TypeError(f"Unknown layout action: {action!r}")
