"""Turn an editor snapshot laid out on a character grid into rich ``Text``."""

from __future__ import annotations

from typing import List, Optional

from rich.text import Text

from paragraph_engine.dispatch import EditorSnapshot
from paragraph_engine.layout import MonospaceLayout
from paragraph_engine.selection import Range, selection_bounds

SELECTION_STYLE = "black on cyan"
CARET_STYLE = "reverse"


def _caret_cell(snapshot: EditorSnapshot, layout: MonospaceLayout) -> Optional[tuple[int, int]]:
    if snapshot.regions is None:
        return None
    caret = snapshot.regions.caret
    row = int(min(caret.y0, caret.y1) // layout.line_height)
    column = int(round(caret.x / layout.char_width))
    return row, column


def render_paragraph(snapshot: EditorSnapshot, *, rows: Optional[int] = None) -> Text:
    """Render the visible rows of ``snapshot`` with selection and caret styles.

    Only ``MonospaceLayout`` carries row information; any other layout is
    rendered as plain text.
    """

    layout = snapshot.layout
    text = snapshot.model.text
    if not isinstance(layout, MonospaceLayout):
        return Text(text)

    first_row = int(snapshot.scroll_y // layout.line_height)
    last_row = len(layout.lines) if rows is None else min(len(layout.lines), first_row + rows)
    selected = (
        selection_bounds(snapshot.selection)
        if isinstance(snapshot.selection, Range)
        else None
    )
    caret = _caret_cell(snapshot, layout)

    rendered: List[Text] = []
    for row in range(first_row, last_row):
        line = layout.lines[row]
        piece = Text(text[line.start : line.end])
        if selected is not None:
            low = max(selected[0], line.start) - line.start
            high = min(selected[1], line.end) - line.start
            if low < high:
                piece.stylize(SELECTION_STYLE, low, high)
        if caret is not None and caret[0] == row:
            column = caret[1]
            if column < len(piece):
                piece.stylize(CARET_STYLE, column, column + 1)
            else:
                piece.append(" ", style=CARET_STYLE)
        rendered.append(piece)
    return Text("\n").join(rendered)


__all__ = ["CARET_STYLE", "SELECTION_STYLE", "render_paragraph"]
