"""
Thumbnail service implementation for arkpage.
Produces one fixed-width preview per archive from its first file entry.
"""

import io
import logging
import os
from typing import Optional, Tuple

from . import CatalogServiceInterface, ThumbnailServiceInterface
from ..config import CacheSettings
from ..core.cache_keys import thumbnail_artifact_path
from ..core.file_manager import ZipArchive
from ..core.imaging import render_resized_jpeg
from ..core.inflight import InFlightGuard

logger = logging.getLogger(__name__)


class ThumbnailService(ThumbnailServiceInterface):
    """Service for generating archive thumbnails."""

    def __init__(self, catalog: CatalogServiceInterface, settings: Optional[CacheSettings] = None,
                 guard: Optional[InFlightGuard] = None):
        self.catalog = catalog
        self.settings = settings or CacheSettings()
        self.guard = guard or InFlightGuard()

    def thumbnail_path(self, identity: str) -> str:
        return thumbnail_artifact_path(self.settings.thumbnail_dir, identity)

    def thumbnail_path_for_file(self, file_path: str) -> str:
        return self.thumbnail_path(self.catalog.compute_identity(file_path))

    def thumbnail_exists(self, identity: str) -> Tuple[bool, str]:
        path = self.thumbnail_path(identity)
        return os.path.exists(path), path

    def generate_thumbnail(self, identity: str) -> Optional[str]:
        """Write the archive's thumbnail and return its path.

        There is no cache-hit check here; an existing thumbnail is rebuilt.
        Returns None when the archive holds no file entries.
        """
        file_path = self.catalog.resolve_path(identity)
        output_path = self.thumbnail_path(identity)
        return self.guard.run(output_path, lambda: self._render_first_page(file_path, output_path))

    def generate_thumbnail_for_file(self, file_path: str) -> Optional[str]:
        output_path = self.thumbnail_path_for_file(file_path)
        return self.guard.run(output_path, lambda: self._render_first_page(file_path, output_path))

    def _render_first_page(self, file_path: str, output_path: str) -> Optional[str]:
        with ZipArchive(file_path) as archive:
            for _, info in archive.iter_entries():
                if info.is_dir():
                    continue

                # The first file entry is the thumbnail source, whatever its name.
                # An unreadable entry raises instead of falling through to the next one.
                data = archive.read_entry(info)
                with io.BytesIO(data) as image_stream:
                    render_resized_jpeg(image_stream, 0, self.settings.thumbnail_width,
                                        self.settings.thumbnail_quality, output_path)
                logger.debug("Thumbnail %s[%s] -> %s", file_path, info.filename, output_path)
                return output_path

        logger.debug("No file entries in %s, thumbnail not created", file_path)
        return None
