"""Host key names to input events."""

from .defaults import default_bindings, load_default_keymaps
from .models import KeyBinding, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry

__all__ = [
    "KeyBinding",
    "KeyStroke",
    "KeymapConflictError",
    "KeymapRegistry",
    "default_bindings",
    "load_default_keymaps",
]
