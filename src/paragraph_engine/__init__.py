"""Text editing engine for a paragraph rendered on a canvas."""

__all__ = [
    "adapters",
    "buffer",
    "config",
    "dispatch",
    "keymaps",
    "layout",
    "runtime",
    "selection",
]

__version__ = "0.1.0"
