"""
ZIP service implementation for arkpage.
Inspects archives for catalog registration.
"""

import logging
import os
from typing import List

from ..core.cache_keys import make_archive_identity
from ..core.errors import ArchiveOpenError
from ..core.file_manager import ZipArchive
from ..core.models import ArchiveRecord

logger = logging.getLogger(__name__)


class ZipService:
    """Service for reading archive metadata."""

    def get_page_count(self, zip_path: str) -> int:
        """Number of entries in the container, directories included.

        Page indices address entries, so this is also the exclusive upper
        bound for valid indices.
        """
        with ZipArchive(zip_path) as archive:
            return len(archive)

    def list_pages(self, zip_path: str) -> List[str]:
        """Names of the file entries in container order."""
        with ZipArchive(zip_path) as archive:
            return [info.filename for _, info in archive.iter_entries() if not info.is_dir()]

    def build_record(self, zip_path: str, folder_identity: str = "") -> ArchiveRecord:
        """Build a catalog record by inspecting the archive on disk."""
        try:
            stat_result = os.stat(zip_path)
        except OSError as e:
            raise ArchiveOpenError(zip_path, str(e)) from e

        page_count = self.get_page_count(zip_path)
        logger.debug("Inspected %s: %d entries, %d bytes", zip_path, page_count, stat_result.st_size)
        return ArchiveRecord(
            identity=make_archive_identity(zip_path),
            folder_identity=folder_identity,
            file_path=zip_path,
            file_size=stat_result.st_size,
            page_count=page_count,
            mod_time=stat_result.st_mtime,
        )
