"""
Exception types raised by docx-cursor.
"""

from __future__ import annotations


class DocxCursorError(Exception):
    """Base class for every error raised by this package."""


class LoadError(DocxCursorError):
    """The package could not be opened, the content part is missing, or it is not valid XML."""


class StructuralViolation(DocxCursorError):
    """The content tree lacks a container a cursor needs, e.g. a table cell with no paragraph."""


class WriteError(DocxCursorError):
    """The package could not be written. The in-memory document stays usable."""
