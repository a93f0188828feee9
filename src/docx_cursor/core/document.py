"""
Top-level document: owns the package handle and the parsed content tree.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from lxml import etree

from ..config import DocxCursorConfig
from ..errors import LoadError, WriteError
from ..opc.archive import PackageArchive
from ..opc.xml import W_BODY, parse_xml, serialize_xml
from .paragraph import ParagraphCursor
from .table import TableCursor


class Document:
    """
    A .docx package opened for reading and editing.

    Only the main content part is parsed. Every other member of the
    package is copied through untouched when the document is saved.
    Cursors handed out by a document are views onto its tree and must
    not be used once the document is closed.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None, config: Optional[DocxCursorConfig] = None):
        self.path = Path(path) if path is not None else None
        self.config = config or DocxCursorConfig()
        self.logger = logging.getLogger(__name__)

        self._archive: Optional[PackageArchive] = None
        self._root: Optional[etree._Element] = None
        self._body: Optional[etree._Element] = None

    @classmethod
    def load(cls, path: Union[str, Path], config: Optional[DocxCursorConfig] = None) -> Document:
        """Construct and open a document in one step."""
        document = cls(path, config)
        document.open()
        return document

    @property
    def is_open(self) -> bool:
        return self._body is not None

    def open(self, path: Optional[Union[str, Path]] = None) -> None:
        """
        Read the package and parse its content part.

        Raises:
            LoadError: if the package is missing or corrupt, lacks the
                content member, or the content is not a document body.
        """
        if path is not None:
            self.path = Path(path)
        if self.path is None:
            raise LoadError("No package path given")

        self.close()

        archive = PackageArchive.open(self.path, compression=self.config.compression)
        root = parse_xml(archive.extract_member(self.config.content_member))

        body = root.find(W_BODY)
        if body is None:
            raise LoadError(f"'{self.config.content_member}' in {self.path} has no document body")

        self._archive = archive
        self._root = root
        self._body = body
        self.logger.info(f"Opened {self.path} ({len(archive.names())} package members)")

    def close(self) -> None:
        """Drop the content tree and the package handle. Unsaved edits are lost."""
        self._archive = None
        self._root = None
        self._body = None

    def paragraphs(self) -> ParagraphCursor:
        """Cursor over the body's top-level paragraphs."""
        return ParagraphCursor.first_in(self._body)

    def tables(self) -> TableCursor:
        """Cursor over the body's tables."""
        return TableCursor.first_in(self._body)

    def save(self, path: Optional[Union[str, Path]] = None) -> Path:
        """
        Write the package, with the edited content part, to ``path``.

        Defaults to the path the document was opened from. The write is
        not atomic. After a failure the document is unchanged and the
        save can be retried.

        Returns:
            The path written to.

        Raises:
            WriteError: if no document is open or the package cannot be written.
        """
        if self._archive is None or self._root is None:
            raise WriteError("No document is open")

        target = Path(path) if path is not None else self._archive.path
        data = serialize_xml(self._root, standalone=self.config.standalone)

        try:
            written = self._archive.write_member(self.config.content_member, data, target)
        except WriteError:
            self.logger.error(f"Saving {self.path} to {target} failed", exc_info=True)
            raise

        self.logger.info(f"Saved {written}")
        return written
