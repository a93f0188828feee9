"""
docx-cursor: read, edit and save Word documents through cursors over
their paragraphs, runs and tables.
"""

from .config import DocxCursorConfig
from .core import (
    CursorState,
    Document,
    Formatting,
    ParagraphCursor,
    RunCursor,
    TableCellCursor,
    TableCursor,
    TableRowCursor,
)
from .errors import DocxCursorError, LoadError, StructuralViolation, WriteError

__version__ = "0.1.0"

__all__ = [
    "CursorState",
    "Document",
    "DocxCursorConfig",
    "DocxCursorError",
    "Formatting",
    "LoadError",
    "ParagraphCursor",
    "RunCursor",
    "StructuralViolation",
    "TableCellCursor",
    "TableCursor",
    "TableRowCursor",
    "WriteError",
]
