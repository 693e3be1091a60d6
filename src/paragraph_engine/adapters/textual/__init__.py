"""Textual adapter surface (controller + renderer; the app is imported lazily)."""

from .controller import TextualEditorAdapter, TextualUIHooks
from .render import render_paragraph

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "render_paragraph"]
