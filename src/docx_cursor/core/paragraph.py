"""
Cursor over paragraphs (``w:p``) in the body or a table cell.
"""

from __future__ import annotations

from ..opc.xml import W_P
from .cursor import SequenceCursor
from .formatting import Formatting
from .run import RunCursor


class ParagraphCursor(SequenceCursor):
    """Cursor over sibling paragraphs; produces run cursors and inserts paragraphs."""

    tag = W_P

    def runs(self) -> RunCursor:
        """
        Fresh cursor over the current paragraph's runs.

        Exhausted when the paragraph has no runs; unpositioned when this
        cursor has no current paragraph.
        """
        return RunCursor.first_in(self._current)

    def add_run(self, text: str, formatting: Formatting = Formatting.NONE) -> RunCursor:
        """Append a run after the paragraph's existing content and return a cursor on it."""
        if self._current is None:
            return RunCursor()
        return RunCursor.append_to(self._current, text, formatting)

    def insert_paragraph_after(self, text: str, formatting: Formatting = Formatting.NONE) -> ParagraphCursor:
        """
        Insert a one-run paragraph directly after the current one.

        Returns a cursor on the new paragraph; this cursor keeps pointing
        at the paragraph it was on.
        """
        if self._current is None:
            return ParagraphCursor()

        paragraph = self._current.makeelement(W_P, {})
        self._current.addnext(paragraph)

        cursor = ParagraphCursor(self._parent, paragraph)
        cursor.add_run(text, formatting)
        return cursor

    def text(self) -> str:
        """Text of all runs in the paragraph."""
        return "".join(run.text() for run in self.runs())
