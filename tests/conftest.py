"""
Shared pytest fixtures for tiletabs tests.
"""

import itertools

import pytest

_realms = itertools.count(1)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without external resources")


def pane(*order, active=None):
    """Nested pane description; the first tab is active unless given."""
    if active is None and order:
        active = order[0]
    return {"kind": "pane", "order": list(order), "active": active}


def split(direction, *children):
    """Nested split description."""
    return {"kind": "split", "direction": direction, "children": list(children)}


@pytest.fixture
def make_pane():
    """Factory fixture for nested pane descriptions."""
    return pane


@pytest.fixture
def make_split():
    """Factory fixture for nested split descriptions."""
    return split


@pytest.fixture
def single_pane():
    """Root pane with two tabs, t1 active."""
    return pane("t1", "t2")


@pytest.fixture
def side_by_side():
    """Vertical split: left pane [t1], right pane [t2, t3]."""
    return split("vertical", pane("t1"), pane("t2", "t3"))


@pytest.fixture
def nested_layout():
    """Vertical root [A, horizontal [B, vertical [C, D]]].

    Ids are minted depth-first: root 1, A 2, horizontal 3, B 4,
    inner vertical 5, C 6, D 7.
    """
    return split(
        "vertical",
        pane("a"),
        split("horizontal", pane("b"), split("vertical", pane("c"), pane("d"))),
    )


@pytest.fixture
def realm():
    """A realm tag unique to the test, so leftover managers stay out of the way."""
    return f"test-realm-{next(_realms)}"
