"""
Cursor over the runs (``w:r``) of one paragraph.
"""

from __future__ import annotations

import logging

from lxml import etree

from ..opc.xml import W_R, W_RPR, W_T, W_VAL, XML_SPACE, sanitize_xml_string
from .cursor import SequenceCursor
from .formatting import MARKERS, Formatting, RunPropertyMarker, marker_is_on, schema_position


logger = logging.getLogger(__name__)


class RunCursor(SequenceCursor):
    """
    Cursor over sibling runs inside a paragraph.

    Text is read from and written to the run's ``w:t`` children.
    Formatting is a set of marker elements under the run's ``w:rPr``.
    On a cursor with no current run, reads return empty values and
    writes return False.
    """

    tag = W_R

    @classmethod
    def append_to(cls, paragraph: etree._Element, text: str, formatting: Formatting = Formatting.NONE) -> RunCursor:
        """Create a run as the last child of ``paragraph`` and return a cursor on it."""
        run = etree.SubElement(paragraph, W_R)
        cursor = cls(paragraph, run)
        cursor.apply_formatting(formatting)
        cursor.set_text(text)
        return cursor

    def text(self) -> str:
        """The run's text, or an empty string."""
        if self._current is None:
            return ""
        return "".join(t.text or "" for t in self._current.iterchildren(W_T))

    def set_text(self, text: str) -> bool:
        """
        Replace the run's text.

        Keeps the first ``w:t`` (creating one if needed) and drops the rest.
        Markup characters are escaped by lxml on serialization; control
        characters XML cannot carry are stripped.
        """
        if self._current is None:
            return False

        clean = sanitize_xml_string(text)
        if clean != text:
            logger.debug(f"Stripped {len(text) - len(clean)} characters XML cannot store from run text")

        text_nodes = list(self._current.iterchildren(W_T))
        if text_nodes:
            t = text_nodes[0]
            for extra in text_nodes[1:]:
                self._current.remove(extra)
        else:
            t = etree.SubElement(self._current, W_T)

        t.text = clean
        if clean != clean.strip():
            t.set(XML_SPACE, "preserve")
        else:
            t.attrib.pop(XML_SPACE, None)
        return True

    def apply_formatting(self, formatting: Formatting) -> bool:
        """
        Turn on every flag in ``formatting``.

        Only adds: flags not in ``formatting`` are left as they are, and a
        flag that is already on produces no second marker. Superscript and
        subscript share ``w:vertAlign``, so the one applied last wins.
        """
        if self._current is None:
            return False
        if not formatting:
            return True

        rpr = self._get_or_add_rpr()
        for flag, marker in MARKERS.items():
            if flag in formatting:
                self._ensure_marker(rpr, marker)
        return True

    def formatting(self) -> Formatting:
        """Flags whose marker is present and switched on."""
        result = Formatting.NONE
        if self._current is None:
            return result

        rpr = self._current.find(W_RPR)
        if rpr is None:
            return result

        for flag, marker in MARKERS.items():
            element = rpr.find(marker.tag)
            if element is not None and marker_is_on(marker, element.get(W_VAL)):
                result |= flag
        return result

    def _get_or_add_rpr(self) -> etree._Element:
        rpr = self._current.find(W_RPR)
        if rpr is None:
            rpr = etree.SubElement(self._current, W_RPR)
        # w:rPr must lead the run
        if self._current.index(rpr) != 0:
            self._current.insert(0, rpr)
        return rpr

    @staticmethod
    def _ensure_marker(rpr: etree._Element, marker: RunPropertyMarker) -> None:
        element = rpr.find(marker.tag)
        if element is None:
            element = etree.SubElement(rpr, marker.tag)
            position = schema_position(marker.tag)
            for sibling in rpr:
                if sibling is not element and schema_position(sibling.tag) > position:
                    sibling.addprevious(element)
                    break
        elif marker_is_on(marker, element.get(W_VAL)):
            return

        if marker.value is None:
            element.attrib.pop(W_VAL, None)
        else:
            element.set(W_VAL, marker.value)
