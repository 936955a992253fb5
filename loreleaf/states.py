"""Application and navigation states."""

from __future__ import annotations

from enum import Enum

__all__ = ["NavigationState", "LoreLeafState"]


class NavigationState(Enum):
    """The screen chosen in the navigation menu; HOME is the initial one."""

    HOME = "home"
    LIBRARY = "library"
    READER = "reader"
    LORE_EXPLORER = "lore_explorer"
    EXIT = "exit"


class LoreLeafState(Enum):
    """The phase of the whole application; SPLASH is the initial one."""

    SPLASH = "splash"
    HOME = "home"