"""
Parsing and serialization of package XML parts.

Wraps lxml so the rest of the package deals in elements and
qualified tag names only.
"""

from __future__ import annotations

import re

from lxml import etree
from docx.oxml.ns import qn

from ..errors import LoadError


W_BODY = qn("w:body")
W_P = qn("w:p")
W_R = qn("w:r")
W_T = qn("w:t")
W_RPR = qn("w:rPr")
W_TBL = qn("w:tbl")
W_TR = qn("w:tr")
W_TC = qn("w:tc")
W_VAL = qn("w:val")

XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"


def _make_parser() -> etree.XMLParser:
    # Content parts never need DTDs or external entities
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_blank_text=False,
        huge_tree=True,
    )


def parse_xml(data: bytes) -> etree._Element:
    """
    Parse a package part into an element tree.

    Raises:
        LoadError: if the bytes are not well-formed XML.
    """
    try:
        return etree.fromstring(data, _make_parser())
    except etree.XMLSyntaxError as e:
        raise LoadError(f"Content part is not well-formed XML: {e}") from e


def serialize_xml(root: etree._Element, standalone: bool = True) -> bytes:
    """Serialize an element tree back to part bytes, with an XML declaration."""
    return etree.tostring(
        root,
        xml_declaration=True,
        encoding="UTF-8",
        standalone=standalone,
    )


# Complement of the XML 1.0 Char production: C0 controls other than
# #x9, #xA and #xD, surrogates, and #xFFFE-#xFFFF
_ILLEGAL_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def sanitize_xml_string(text: str) -> str:
    """
    Remove characters that cannot be stored in XML 1.0.

    Markup characters such as ``<`` and ``&`` are left alone; lxml escapes
    those when the text is serialized.
    """
    if not text:
        return text
    return _ILLEGAL_XML_CHARS.sub("", text)
