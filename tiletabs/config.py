"""
Layout Configuration
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field


def _env_flag(name: str) -> bool:
    """Read a boolean flag from the environment ("1", "true", "yes", "on")."""
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


@dataclass
class LayoutConfig:
    """Layout manager configuration."""

    # Scoping tag for bus commands and drag-and-drop; one per layout surface
    realm: str = "default"

    # Run the full invariant check after every applied action
    validate: bool = field(default_factory=lambda: _env_flag("TILETABS_VALIDATE"))

    # Log every message published on the event bus
    debug_events: bool = field(default_factory=lambda: _env_flag("TILETABS_DEBUG"))

    def __post_init__(self):
        """Normalize the realm tag."""
        self.realm = str(self.realm).strip()
        if not self.realm:
            raise ValueError("Invalid realm: must be a non-empty string")
