"""Text storage: the persistent rope and the value-typed text model."""

from .model import CharacterCategory, TextModel, categorize_code_point
from .rope import Rope
from .validation import RopeRangeError, ensure_position, ensure_range

__all__ = [
    "CharacterCategory",
    "Rope",
    "RopeRangeError",
    "TextModel",
    "categorize_code_point",
    "ensure_position",
    "ensure_range",
]
