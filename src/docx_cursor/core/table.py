"""
Cursors over tables and their rows and cells.

Tables are walked, not restructured: cell content is edited through
the paragraph and run cursors a cell hands out.
"""

from __future__ import annotations

from ..errors import StructuralViolation
from ..opc.xml import W_TBL, W_TC, W_TR
from .cursor import SequenceCursor
from .paragraph import ParagraphCursor


class TableCellCursor(SequenceCursor):
    tag = W_TC

    def paragraphs(self) -> ParagraphCursor:
        """
        Cursor over the cell's paragraphs.

        Raises:
            StructuralViolation: if the current cell holds no paragraph.
        """
        cursor = ParagraphCursor.first_in(self._current)
        if cursor.exhausted:
            raise StructuralViolation("Table cell has no paragraph")
        return cursor

    def text(self) -> str:
        """Paragraph texts of the cell, one per line."""
        if self._current is None:
            return ""
        return "\n".join(paragraph.text() for paragraph in self.paragraphs())


class TableRowCursor(SequenceCursor):
    tag = W_TR

    def cells(self) -> TableCellCursor:
        return TableCellCursor.first_in(self._current)


class TableCursor(SequenceCursor):
    tag = W_TBL

    def rows(self) -> TableRowCursor:
        return TableRowCursor.first_in(self._current)
