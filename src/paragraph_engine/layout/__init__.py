"""Layout Engine contracts and the monospace reference engine."""

from .monospace import LineSpan, MonospaceLayout, MonospaceLayoutEngine
from .protocol import LayoutEngine, LineLayout, RectHeightStyle, RectWidthStyle

__all__ = [
    "LayoutEngine",
    "LineLayout",
    "LineSpan",
    "MonospaceLayout",
    "MonospaceLayoutEngine",
    "RectHeightStyle",
    "RectWidthStyle",
]
