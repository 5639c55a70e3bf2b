"""Keyboard bindings for the host input layer."""

from __future__ import annotations

from graphnav.models.scene_models import NavigationCommand

KEY_BINDINGS: dict[str, NavigationCommand] = {
    "a": NavigationCommand.SELECT_PREVIOUS,
    "d": NavigationCommand.SELECT_NEXT,
    "w": NavigationCommand.COMMIT_FORWARD,
    "s": NavigationCommand.COMMIT_BACKWARD,
}

PANEL_TOGGLE_KEY = "n"


def command_for_key(key: str) -> NavigationCommand | None:
    """Map a key to a navigation command, case-insensitively. Unbound keys map to None."""
    return KEY_BINDINGS.get(key.lower()) if key else None


def is_panel_toggle(key: str) -> bool:
    return bool(key) and key.lower() == PANEL_TOGGLE_KEY
