"""
Layout Errors

Exceptions raised by the layout engine.
"""


class LayoutError(Exception):
    """Base class for layout engine errors."""


class InvalidLayout(LayoutError, ValueError):
    """Raised when a nested layout description cannot be built into a tree."""


class DataCorruption(LayoutError, RuntimeError):
    """Raised when the tree no longer satisfies its structural invariants.

    This is a programming error: the tree was already broken before the
    failing call, so the operation is abandoned instead of repaired.
    """

    def __init__(self, message: str = "Data corruption"):
        super().__init__(message)
