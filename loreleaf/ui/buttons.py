"""State and styling of buttons, including the navigation menu buttons."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from loreleaf.states import NavigationState

__all__ = [
    "NORMAL_BUTTON",
    "HOVERED_BUTTON",
    "HOVERED_PRESSED_BUTTON",
    "PRESSED_BUTTON",
    "SELECTED_BUTTON",
    "Interaction",
    "NavigationButtonAction",
    "ButtonProperties",
    "navigation_button_interaction",
]

Color = tuple[float, float, float, float]

NORMAL_BUTTON: Color = (0.15, 0.15, 0.15, 1.0)
HOVERED_BUTTON: Color = (0.25, 0.25, 0.25, 1.0)
HOVERED_PRESSED_BUTTON: Color = (0.25, 0.65, 0.25, 1.0)
PRESSED_BUTTON: Color = (0.35, 0.75, 0.35, 1.0)
SELECTED_BUTTON: Color = (1.0, 1.0, 0.0, 1.0)


class Interaction(Enum):
    """What the pointer is doing with a button."""

    PRESSED = "pressed"
    HOVERED = "hovered"
    NONE = "none"


class NavigationButtonAction(Enum):
    """A navigation menu button and the screen it leads to."""

    HOME = NavigationState.HOME
    LIBRARY = NavigationState.LIBRARY
    READER = NavigationState.READER
    LORE_EXPLORER = NavigationState.LORE_EXPLORER
    EXIT = NavigationState.EXIT

    @property
    def state(self) -> NavigationState:
        """The navigation state this button selects."""
        return self.value


@dataclass
class ButtonProperties:
    """Interaction flags of a button and its current border colour."""

    is_enabled: bool = True
    is_hovered: bool = False
    is_clicked: bool = False
    is_currently_selected: bool = False
    border_color: Color = NORMAL_BUTTON

    def handle_interaction(self, interaction: Interaction) -> None:
        """Record ``interaction``; NONE clears both the click and the hover."""
        if interaction is Interaction.PRESSED:
            self.is_clicked = True
        elif interaction is Interaction.HOVERED:
            self.is_hovered = True
        else:
            self.is_clicked = False
            self.is_hovered = False

    def update_style(self) -> Color:
        """Pick the border colour from the flags and return it.

        A click is consumed here: it shows once as pressed and then turns
        into a hover.
        """
        if self.is_clicked:
            self.border_color = PRESSED_BUTTON
            self.is_clicked = False
            self.is_hovered = True
        elif self.is_hovered:
            self.border_color = HOVERED_PRESSED_BUTTON
        elif self.is_currently_selected:
            self.border_color = SELECTED_BUTTON
        else:
            self.border_color = NORMAL_BUTTON
        return self.border_color


def navigation_button_interaction(
    properties: ButtonProperties,
    action: NavigationButtonAction,
    current_state: NavigationState,
) -> NavigationState | None:
    """Mark whether the button's screen is the current one.

    Returns the state to navigate to when the button is clicked, else None.
    """
    target = action.state
    properties.is_currently_selected = current_state is target
    return target if properties.is_clicked else None