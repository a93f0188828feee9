"""
Zip archive access for .docx packages.

A package is read once to check it is a usable zip; member payloads are
read again from the source file only when they are extracted or passed
through on write, so untouched members are never decoded.
"""

from __future__ import annotations

import copy
import io
import logging
import zipfile
import zlib
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..errors import LoadError, WriteError


COMPRESSION_TYPES = {
    "deflated": zipfile.ZIP_DEFLATED,
    "stored": zipfile.ZIP_STORED,
}


class PackageArchive:
    """
    Handle on a zip-structured package on disk.

    The handle remembers the source path it was opened from. Writing a
    member copies every other member of the source into the target, in the
    original order and with the original per-member compression.
    """

    def __init__(self, path: Path, infos: List[zipfile.ZipInfo], compression: str = "deflated"):
        self.path = path
        self.compression = compression
        self.logger = logging.getLogger(__name__)

        # Zip files may carry the same name twice; the last entry wins
        self._infos: Dict[str, zipfile.ZipInfo] = {}
        for info in infos:
            self._infos.pop(info.filename, None)
            self._infos[info.filename] = info

    @classmethod
    def open(cls, path: Union[str, Path], compression: str = "deflated") -> PackageArchive:
        """
        Open the package at ``path``.

        Raises:
            LoadError: if the path does not exist or is not a zip archive.
        """
        path = Path(path)
        if not path.is_file():
            raise LoadError(f"Package not found: {path}")

        try:
            with zipfile.ZipFile(path, "r") as zin:
                infos = zin.infolist()
        except (zipfile.BadZipFile, OSError) as e:
            raise LoadError(f"Not a valid package archive: {path}: {e}") from e

        return cls(path, infos, compression=compression)

    def names(self) -> List[str]:
        """Member names in archive order."""
        return list(self._infos)

    def has_member(self, name: str) -> bool:
        return name in self._infos

    def extract_member(self, name: str) -> bytes:
        """
        Read one member's payload.

        Raises:
            LoadError: if the member is absent or the archive cannot be read.
        """
        info = self._infos.get(name)
        if info is None:
            raise LoadError(f"Package {self.path} has no member '{name}'")

        try:
            with zipfile.ZipFile(self.path, "r") as zin:
                return zin.read(name)
        except (zipfile.BadZipFile, zlib.error, NotImplementedError, OSError, KeyError) as e:
            raise LoadError(f"Could not read '{name}' from {self.path}: {e}") from e

    def write_member(self, name: str, data: bytes, target: Optional[Union[str, Path]] = None) -> Path:
        """
        Write the package with ``name`` replaced by (or extended with) ``data``.

        The whole archive is assembled in memory before the target is
        touched, so ``target`` may be the source path itself. The final
        write is not atomic.

        Returns:
            The path written to.

        Raises:
            WriteError: if the source cannot be read or the target cannot be written.
        """
        target = Path(target) if target is not None else self.path
        buffer = io.BytesIO()

        try:
            with zipfile.ZipFile(self.path, "r") as zin, \
                    zipfile.ZipFile(buffer, "w", compression=self._compress_type()) as zout:
                for member, info in self._infos.items():
                    # writestr() fills in sizes and offsets on the info it is given
                    out_info = copy.copy(info)
                    if member == name:
                        zout.writestr(out_info, data)
                    else:
                        zout.writestr(out_info, zin.read(member))

                if name not in self._infos:
                    zout.writestr(name, data, compress_type=self._compress_type())
        except (zipfile.BadZipFile, zlib.error, NotImplementedError, OSError, KeyError) as e:
            raise WriteError(f"Could not read source package {self.path}: {e}") from e

        try:
            target.write_bytes(buffer.getvalue())
        except OSError as e:
            raise WriteError(f"Could not write package to {target}: {e}") from e

        self.logger.debug(f"Wrote {len(self._infos)} members to {target} (replaced '{name}')")
        return target

    def _compress_type(self) -> int:
        try:
            return COMPRESSION_TYPES[self.compression]
        except KeyError:
            raise WriteError(f"Unknown compression '{self.compression}'") from None
