"""
ZIP container access for arkpage core layer.

Every call opens its own read-only handle; nothing is shared between callers.
"""

import zipfile
import zlib
from typing import Iterator, List, Optional, Tuple

from .errors import ArchiveOpenError, EntryOpenError, PageIsDirectory, PageNotFound


class ZipArchive:
    """Read-only view of a ZIP container whose entries are pages in container order."""

    def __init__(self, zip_path: str):
        self.zip_path = zip_path
        self._zip: Optional[zipfile.ZipFile] = None
        self._entries: List[zipfile.ZipInfo] = []

    def open(self) -> 'ZipArchive':
        try:
            self._zip = zipfile.ZipFile(self.zip_path, 'r')
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise ArchiveOpenError(self.zip_path, str(e)) from e
        self._entries = self._zip.infolist()
        return self

    def close(self):
        if self._zip is not None:
            self._zip.close()
            self._zip = None

    def __enter__(self) -> 'ZipArchive':
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __len__(self) -> int:
        return len(self._entries)

    def iter_entries(self) -> Iterator[Tuple[int, zipfile.ZipInfo]]:
        """Yield (index, entry) pairs in container order."""
        return enumerate(self._entries)

    def get_page(self, index: int) -> zipfile.ZipInfo:
        """Return the entry at index, which must be a file."""
        if index < 0 or index >= len(self._entries):
            raise PageNotFound(self.zip_path, index, len(self._entries))
        info = self._entries[index]
        if info.is_dir():
            raise PageIsDirectory(self.zip_path, index, info.filename)
        return info

    def read_entry(self, info: zipfile.ZipInfo) -> bytes:
        """Read an entry's full contents."""
        if self._zip is None:
            raise ArchiveOpenError(self.zip_path, "archive is not open")
        try:
            with self._zip.open(info, 'r') as entry_stream:
                return entry_stream.read()
        # RuntimeError: encrypted entry, NotImplementedError: unsupported compression
        except (OSError, EOFError, zipfile.BadZipFile, zlib.error,
                RuntimeError, NotImplementedError) as e:
            raise EntryOpenError(self.zip_path, info.filename, str(e)) from e
