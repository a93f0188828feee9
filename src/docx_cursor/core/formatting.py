"""
Run formatting flags and the run property markers that encode them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Flag, auto
from typing import Dict, Optional, Tuple

from docx.oxml.ns import qn


class Formatting(Flag):
    """
    Boolean character formatting a run can carry. Combine with ``|``.

    SUPERSCRIPT and SUBSCRIPT share one ``w:vertAlign`` marker, so a run
    holds at most one of them and the one applied last wins.
    """
    NONE = 0
    BOLD = auto()
    ITALIC = auto()
    UNDERLINE = auto()
    STRIKETHROUGH = auto()
    SUPERSCRIPT = auto()
    SUBSCRIPT = auto()
    SMALL_CAPS = auto()
    SHADOW = auto()


@dataclass(frozen=True)
class RunPropertyMarker:
    """Element beneath ``w:rPr`` whose presence turns one flag on."""

    tag: str
    value: Optional[str] = None


MARKERS: Dict[Formatting, RunPropertyMarker] = {
    Formatting.BOLD: RunPropertyMarker(qn("w:b")),
    Formatting.ITALIC: RunPropertyMarker(qn("w:i")),
    Formatting.UNDERLINE: RunPropertyMarker(qn("w:u"), "single"),
    Formatting.STRIKETHROUGH: RunPropertyMarker(qn("w:strike")),
    Formatting.SUPERSCRIPT: RunPropertyMarker(qn("w:vertAlign"), "superscript"),
    Formatting.SUBSCRIPT: RunPropertyMarker(qn("w:vertAlign"), "subscript"),
    Formatting.SMALL_CAPS: RunPropertyMarker(qn("w:smallCaps")),
    Formatting.SHADOW: RunPropertyMarker(qn("w:shadow")),
}

# Child sequence of CT_RPr; markers are inserted at their schema position
RPR_CHILD_ORDER: Tuple[str, ...] = tuple(qn(f"w:{name}") for name in (
    "rStyle", "rFonts", "b", "bCs", "i", "iCs", "caps", "smallCaps",
    "strike", "dstrike", "outline", "shadow", "emboss", "imprint",
    "noProof", "snapToGrid", "vanish", "webHidden", "color", "spacing",
    "w", "kern", "position", "sz", "szCs", "highlight", "u", "effect",
    "bdr", "shd", "fitText", "vertAlign", "rtl", "cs", "em", "lang",
    "eastAsianLayout", "specVanish", "oMath",
))

_OFF_VALUES = {"0", "false", "off"}


def marker_is_on(marker: RunPropertyMarker, value: Optional[str]) -> bool:
    """Whether an existing marker element with ``w:val`` = ``value`` enables its flag."""
    if marker.tag == qn("w:vertAlign"):
        return value == marker.value
    if value is None:
        return True
    value = value.lower()
    if marker.tag == qn("w:u"):
        return value != "none"
    return value not in _OFF_VALUES


def schema_position(tag: str) -> int:
    try:
        return RPR_CHILD_ORDER.index(tag)
    except ValueError:
        return len(RPR_CHILD_ORDER)
