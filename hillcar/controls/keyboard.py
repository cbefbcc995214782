"""
Keyboard controls for interacting with the simulation.

Supports pausing/resuming the physics, resetting the simulation and
adjusting camera zoom. The caller supplies an object with callbacks for
each action:

- Space: toggle pause/resume
- 'R' or 'r': reset the simulation
- '+' or '=': zoom in
- '-' or '_': zoom out
"""

from typing import Callable, Optional

import pygame

# Typed character -> action name
KEY_BINDINGS = {
    " ": "toggle_pause",
    "r": "reset",
    "R": "reset",
    "+": "zoom_in",
    "=": "zoom_in",  # Allow both plus and equal keys for convenience
    "-": "zoom_out",
    "_": "zoom_out",
}

# Key codes used when the event carries no character
KEYCODE_BINDINGS = {
    pygame.K_SPACE: "toggle_pause",
    pygame.K_r: "reset",
    pygame.K_PLUS: "zoom_in",
    pygame.K_EQUALS: "zoom_in",
    pygame.K_KP_PLUS: "zoom_in",
    pygame.K_MINUS: "zoom_out",
    pygame.K_UNDERSCORE: "zoom_out",
    pygame.K_KP_MINUS: "zoom_out",
}


def resolve_action(event) -> Optional[str]:
    """Map a KEYDOWN event to an action name, or None if the key is unbound."""
    char = getattr(event, "unicode", "")
    if char:
        return KEY_BINDINGS.get(char)
    return KEYCODE_BINDINGS.get(getattr(event, "key", None))


class KeyboardControls:
    """Single key listener dispatching to the supplied actions."""

    def __init__(self, actions, is_text_input_active: Optional[Callable[[], bool]] = None):
        self.actions = actions
        self.is_text_input_active = is_text_input_active or (lambda: False)

    def handle_event(self, event) -> bool:
        """
        Dispatch a pygame event.

        Returns:
            True if the event was consumed (default handling suppressed)
        """
        if event.type != pygame.KEYDOWN:
            return False
        # Let normal text editing proceed while a text field has focus
        if self.is_text_input_active():
            return False
        name = resolve_action(event)
        if name is None:
            return False
        getattr(self.actions, name)()
        return True


def setup_controls(actions, is_text_input_active: Optional[Callable[[], bool]] = None) -> KeyboardControls:
    """
    Set up keyboard handling for the given actions.

    Args:
        actions: Object with toggle_pause, reset, zoom_in and zoom_out callables
        is_text_input_active: Returns True while a text-input-like control has focus

    Returns:
        KeyboardControls whose handle_event the frame loop feeds KEYDOWN events to
    """
    for name in set(KEY_BINDINGS.values()):
        if not callable(getattr(actions, name, None)):
            raise ValueError(f"actions is missing callback: {name}")
    return KeyboardControls(actions, is_text_input_active)
