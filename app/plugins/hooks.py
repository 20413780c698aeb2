"""Hook name constants for the plugin system.

Centralizes hook names so registry and tests reference constants,
not magic strings. All plugin hooks are defined here.
"""

from __future__ import annotations

# Session hooks
HOOK_LABEL_ADDED: str = "on_label_added"
HOOK_POINT_PLACED: str = "on_point_placed"
HOOK_RESET: str = "on_reset"

# Lifecycle hooks
HOOK_ACTIVATE: str = "on_activate"
HOOK_DEACTIVATE: str = "on_deactivate"

# All hooks in invocation order (lifecycle first, then session)
ALL_HOOKS: list[str] = [
    HOOK_ACTIVATE,
    HOOK_LABEL_ADDED,
    HOOK_POINT_PLACED,
    HOOK_RESET,
    HOOK_DEACTIVATE,
]
