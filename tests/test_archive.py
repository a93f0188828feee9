"""
Tests for PackageArchive: member access and pass-through rewriting.
"""

import warnings
import zipfile

import pytest

from docx_cursor import LoadError, WriteError
from docx_cursor.opc import PackageArchive, parse_xml, sanitize_xml_string, serialize_xml

from conftest import MEDIA, build_package, read_members


class TestPackageArchive:
    """Opening, extracting and writing members"""

    def test_names_in_archive_order(self, simple_docx):
        archive = PackageArchive.open(simple_docx)
        assert archive.names() == list(read_members(simple_docx))
        assert archive.has_member("word/styles.xml")
        assert not archive.has_member("word/missing.xml")

    def test_extract_member(self, simple_docx):
        archive = PackageArchive.open(simple_docx)
        assert archive.extract_member("word/media/image1.png") == MEDIA

    def test_extract_missing_member(self, simple_docx):
        archive = PackageArchive.open(simple_docx)
        with pytest.raises(LoadError):
            archive.extract_member("word/missing.xml")

    def test_open_directory(self, tmp_path):
        with pytest.raises(LoadError):
            PackageArchive.open(tmp_path)

    def test_write_replaces_member(self, simple_docx, tmp_path):
        archive = PackageArchive.open(simple_docx)
        out = archive.write_member("word/styles.xml", b"<styles/>", tmp_path / "out.docx")

        members = read_members(out)
        assert members["word/styles.xml"] == b"<styles/>"
        assert members["word/media/image1.png"] == MEDIA
        assert list(members) == archive.names()

    def test_write_creates_member(self, simple_docx, tmp_path):
        archive = PackageArchive.open(simple_docx)
        out = archive.write_member("customXml/item1.xml", b"<item/>", tmp_path / "out.docx")

        members = read_members(out)
        assert list(members)[-1] == "customXml/item1.xml"
        assert members["customXml/item1.xml"] == b"<item/>"
        with zipfile.ZipFile(out) as zin:
            assert zin.getinfo("customXml/item1.xml").compress_type == zipfile.ZIP_DEFLATED

    def test_new_member_compression(self, simple_docx, tmp_path):
        archive = PackageArchive.open(simple_docx, compression="stored")
        out = archive.write_member("extra.bin", b"data", tmp_path / "out.docx")
        with zipfile.ZipFile(out) as zin:
            assert zin.getinfo("extra.bin").compress_type == zipfile.ZIP_STORED

    def test_unknown_compression(self, simple_docx, tmp_path):
        archive = PackageArchive.open(simple_docx, compression="bzip9")
        with pytest.raises(WriteError):
            archive.write_member("word/styles.xml", b"<styles/>", tmp_path / "out.docx")
        assert not (tmp_path / "out.docx").exists()

    def test_duplicate_entries_collapse_to_last(self, tmp_path):
        path = tmp_path / "dupes.docx"
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            with zipfile.ZipFile(path, "w") as zout:
                zout.writestr("a.xml", b"<old/>")
                zout.writestr("b.xml", b"<b/>")
                zout.writestr("a.xml", b"<new/>")

        archive = PackageArchive.open(path)
        assert archive.names() == ["b.xml", "a.xml"]
        assert archive.extract_member("a.xml") == b"<new/>"

        out = archive.write_member("b.xml", b"<b2/>", tmp_path / "out.docx")
        with zipfile.ZipFile(out) as zin:
            assert zin.namelist() == ["b.xml", "a.xml"]
            assert zin.read("a.xml") == b"<new/>"

    def test_source_removed_before_write(self, tmp_path):
        path = build_package(tmp_path / "gone.docx")
        archive = PackageArchive.open(path)
        path.unlink()
        with pytest.raises(WriteError):
            archive.write_member("word/styles.xml", b"<styles/>", tmp_path / "out.docx")


class TestXmlHelpers:
    """Parsing, serialization and text sanitizing"""

    def test_parse_error(self):
        with pytest.raises(LoadError):
            parse_xml(b"<unclosed>")

    def test_serialize_round_trip(self):
        root = parse_xml(b'<root a="1"><child>text &amp; more</child></root>')
        again = parse_xml(serialize_xml(root))
        assert again.find("child").text == "text & more"
        assert again.get("a") == "1"

    def test_serialize_without_standalone(self):
        data = serialize_xml(parse_xml(b"<root/>"), standalone=False)
        assert b"standalone='no'" in data

    def test_sanitize_keeps_whitespace_and_markup(self):
        assert sanitize_xml_string("a\tb\nc\rd <&>") == "a\tb\nc\rd <&>"

    def test_sanitize_strips_controls(self):
        assert sanitize_xml_string("\x00x\x0by\x1f") == "xy"
        assert sanitize_xml_string("a\ufffeb\uffffc\ud800d\udfffe") == "abcde"
        assert sanitize_xml_string("") == ""
