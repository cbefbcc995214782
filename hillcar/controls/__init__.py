"""Keyboard controls."""

from .keyboard import KeyboardControls, setup_controls, KEY_BINDINGS

__all__ = [
    'KeyboardControls',
    'setup_controls',
    'KEY_BINDINGS',
]
