"""
Package-level access: the zip archive and its XML parts.
"""

from .archive import PackageArchive
from .xml import parse_xml, sanitize_xml_string, serialize_xml

__all__ = ["PackageArchive", "parse_xml", "sanitize_xml_string", "serialize_xml"]
