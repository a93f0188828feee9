"""
Shared fixtures: minimal .docx packages built from WordprocessingML snippets.
"""

import struct
import zipfile
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

import pytest

from docx_cursor.opc.xml import W_BODY, parse_xml


W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

CONTENT_TYPES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    '<Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
    '<Default Extension="xml" ContentType="application/xml"/>'
    '<Default Extension="png" ContentType="image/png"/>'
    '<Override PartName="/word/document.xml" '
    'ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>'
    '<Override PartName="/word/styles.xml" '
    'ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.styles+xml"/>'
    '</Types>'
)

PACKAGE_RELS = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    '<Relationship Id="rId1" '
    'Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" '
    'Target="word/document.xml"/>'
    '</Relationships>'
)

DOCUMENT_RELS = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    '<Relationship Id="rId1" '
    'Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/styles" '
    'Target="styles.xml"/>'
    '</Relationships>'
)

STYLES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    f'<w:styles xmlns:w="{W_NS}"><w:docDefaults/></w:styles>'
)

# Not a real image; only its bytes matter for pass-through checks
MEDIA = bytes(range(256)) * 4


def run_xml(text: str, rpr: str = "") -> str:
    return f'<w:r>{rpr}<w:t>{text}</w:t></w:r>'


def para_xml(*texts: str) -> str:
    return '<w:p>' + ''.join(run_xml(t) for t in texts) + '</w:p>'


def table_xml(rows: Sequence[Sequence[str]]) -> str:
    body = ''.join(
        '<w:tr>' + ''.join(f'<w:tc>{para_xml(text)}</w:tc>' for text in row) + '</w:tr>'
        for row in rows
    )
    columns = max((len(row) for row in rows), default=0)
    grid = '<w:tblGrid>' + '<w:gridCol/>' * columns + '</w:tblGrid>'
    return f'<w:tbl><w:tblPr/>{grid}{body}</w:tbl>'


def document_xml(body: str) -> bytes:
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:document xmlns:w="{W_NS}"><w:body>{body}<w:sectPr/></w:body></w:document>'
    ).encode("utf-8")


def build_package(path: Path, body: Optional[str] = None,
                  members: Optional[Dict[str, bytes]] = None,
                  omit: Iterable[str] = ()) -> Path:
    """Write a .docx package; ``members`` override or add parts, ``omit`` drops them."""
    parts: Dict[str, bytes] = {
        "[Content_Types].xml": CONTENT_TYPES.encode("utf-8"),
        "_rels/.rels": PACKAGE_RELS.encode("utf-8"),
        "word/document.xml": document_xml(body or ""),
        "word/_rels/document.xml.rels": DOCUMENT_RELS.encode("utf-8"),
        "word/styles.xml": STYLES.encode("utf-8"),
        "word/media/image1.png": MEDIA,
    }
    parts.update(members or {})

    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zout:
        for name, data in parts.items():
            if name in omit:
                continue
            # Media is usually stored, not deflated
            compress_type = zipfile.ZIP_STORED if name.startswith("word/media/") else zipfile.ZIP_DEFLATED
            zout.writestr(name, data, compress_type=compress_type)
    return path


def read_members(path: Path) -> Dict[str, bytes]:
    with zipfile.ZipFile(path, "r") as zin:
        return {name: zin.read(name) for name in zin.namelist()}


def corrupt_member(path: Path, name: str, length: int = 8) -> Path:
    """Invert bytes in the middle of a member's compressed payload, in place."""
    with zipfile.ZipFile(path, "r") as zin:
        info = zin.getinfo(name)

    raw = bytearray(path.read_bytes())
    # Local file header: 30 fixed bytes, then the name and extra field
    name_len, extra_len = struct.unpack_from("<HH", raw, info.header_offset + 26)
    start = info.header_offset + 30 + name_len + extra_len
    middle = start + info.compress_size // 2 - length // 2
    for i in range(middle, middle + length):
        raw[i] ^= 0xFF
    path.write_bytes(bytes(raw))
    return path


def body_of(body: str):
    """Parse a body snippet straight into an lxml ``w:body`` element."""
    return parse_xml(document_xml(body)).find(W_BODY)


@pytest.fixture
def simple_docx(tmp_path):
    """Three paragraphs around a 1x2 table; the second paragraph has two runs."""
    body = (
        para_xml("First")
        + table_xml([["A", "B"]])
        + para_xml("Sec", "ond")
        + para_xml("Third")
    )
    return build_package(tmp_path / "simple.docx", body)


@pytest.fixture
def grid_docx(tmp_path):
    """A 2x3 table whose cells hold r0c0 .. r1c2."""
    rows = [[f"r{r}c{c}" for c in range(3)] for r in range(2)]
    return build_package(tmp_path / "grid.docx", para_xml("Intro") + table_xml(rows))
