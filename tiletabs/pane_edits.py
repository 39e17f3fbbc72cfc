"""
Pane-local Edits

Pure functions on a single PaneNode. Each returns the pane unchanged (the
same object) when the edit does not apply.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Sequence, Tuple, TypeVar

from .nodes import PaneNode, TabId

T = TypeVar("T")


def clamp(pos: int, length: int) -> int:
    """Clamp an insertion position to [0, length]."""
    return max(0, min(pos, length))


def insert_at(items: Sequence[T], item: T, pos: int) -> Tuple[T, ...]:
    """Return a copy of items with item inserted at the clamped position."""
    pos = clamp(pos, len(items))
    return tuple(items[:pos]) + (item,) + tuple(items[pos:])


def remove_at(items: Sequence[T], index: int) -> Tuple[T, ...]:
    return tuple(items[:index]) + tuple(items[index + 1 :])


def splice_at(items: Sequence[T], index: int, replacement: Sequence[T]) -> Tuple[T, ...]:
    """Replace items[index] with the elements of replacement."""
    return tuple(items[:index]) + tuple(replacement) + tuple(items[index + 1 :])


def select_tab(pane: PaneNode, tab: TabId) -> PaneNode:
    """Make tab active if the pane contains it."""
    if tab not in pane.order or pane.active == tab:
        return pane
    return replace(pane, active=tab)


def insert_tab(pane: PaneNode, tab: TabId, pos: int) -> PaneNode:
    """Insert tab at the clamped position and make it active."""
    return replace(pane, order=insert_at(pane.order, tab, pos), active=tab)


def remove_tab(pane: PaneNode, tab: TabId) -> PaneNode:
    """
    Remove tab from the pane.

    If the removed tab was active, the tab that slides into its slot becomes
    active; when the last tab was removed, the new last tab does. An emptied
    pane has no active tab.
    """
    if tab not in pane.order:
        return pane

    index = pane.order.index(tab)
    order = remove_at(pane.order, index)

    active = pane.active
    if tab == active:
        active = order[min(index, len(order) - 1)] if order else None

    return replace(pane, order=order, active=active)


def move_tab_within_pane(pane: PaneNode, tab: TabId, pos: int) -> PaneNode:
    """Reorder tab to the clamped position. The active tab is unchanged."""
    if tab not in pane.order:
        return pane

    index = pane.order.index(tab)
    order = insert_at(remove_at(pane.order, index), tab, pos)
    if order == pane.order:
        return pane
    return replace(pane, order=order)
