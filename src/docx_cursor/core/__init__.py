"""
Document model: the document and the cursors that walk its content.
"""

from .cursor import CursorState, SequenceCursor
from .document import Document
from .formatting import Formatting
from .paragraph import ParagraphCursor
from .run import RunCursor
from .table import TableCellCursor, TableCursor, TableRowCursor

__all__ = [
    "CursorState",
    "SequenceCursor",
    "Document",
    "Formatting",
    "ParagraphCursor",
    "RunCursor",
    "TableCellCursor",
    "TableCursor",
    "TableRowCursor",
]
