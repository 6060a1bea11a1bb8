"""
Page service implementation for arkpage.
Resolves single pages from the disk cache and prefetches page ranges.
"""

import io
import logging
import os
import zipfile
from typing import Optional, Tuple

from . import CatalogServiceInterface, PageServiceInterface
from ..config import CacheSettings
from ..core.cache_keys import page_artifact_path
from ..core.errors import ArkPageError
from ..core.file_manager import ZipArchive
from ..core.imaging import render_resized_jpeg
from ..core.inflight import InFlightGuard
from ..core.models import PrefetchResult, ResizeTarget, SkippedEntry
from ..core.sizing import resolve_resize_target

logger = logging.getLogger(__name__)


class PageService(PageServiceInterface):
    """Serves resized JPEG pages out of ZIP archives through a disk cache."""

    def __init__(self, catalog: CatalogServiceInterface, settings: Optional[CacheSettings] = None,
                 guard: Optional[InFlightGuard] = None):
        """
        Initialize the page service.

        Args:
            catalog: Resolves archive identities to file paths
            settings: Cache roots and JPEG quality; CONFIG defaults if omitted
            guard: Shared in-flight guard, for services filling the same cache
        """
        self.catalog = catalog
        self.settings = settings or CacheSettings()
        self.guard = guard or InFlightGuard()

    def _locate(self, file_path: str, index: int, max_height: int,
                max_width: int) -> Tuple[ResizeTarget, str]:
        target = resolve_resize_target(max_height, max_width)
        identity = self.catalog.compute_identity(file_path)
        output_path = page_artifact_path(
            self.settings.page_cache_dir, identity, index, target.height, target.width
        )
        return target, output_path

    def page_exists(self, identity: str, index: int, max_height: int, max_width: int) -> Tuple[bool, str]:
        """Report whether the page artifact is cached, and where it lives.

        Never opens the archive.
        """
        file_path = self.catalog.resolve_path(identity)
        _, output_path = self._locate(file_path, index, max_height, max_width)
        return os.path.exists(output_path), output_path

    def resolve_page(self, identity: str, index: int, max_height: int, max_width: int) -> str:
        """Return the cached page path, generating the artifact on a miss.

        Raises:
            NotFound: identity is not in the catalog
            ArchiveOpenError, PageNotFound, PageIsDirectory, EntryOpenError,
            DecodeError, ResizeError, EncodeOrWriteError: the fill failed
        """
        file_path = self.catalog.resolve_path(identity)
        return self.resolve_page_for_file(file_path, index, max_height, max_width)

    def resolve_page_for_file(self, file_path: str, index: int, max_height: int, max_width: int) -> str:
        """Same as resolve_page for a caller that already holds the archive path."""
        target, output_path = self._locate(file_path, index, max_height, max_width)
        if os.path.exists(output_path):
            logger.debug("Page cache hit: %s", output_path)
            return output_path

        self.guard.run(output_path, lambda: self._fill_page(file_path, index, target, output_path))
        return output_path

    def _fill_page(self, file_path: str, index: int, target: ResizeTarget, output_path: str) -> bool:
        with ZipArchive(file_path) as archive:
            info = archive.get_page(index)
            return self._render_entry(archive, info, target, output_path)

    def _render_entry(self, archive: ZipArchive, info: zipfile.ZipInfo,
                      target: ResizeTarget, output_path: str) -> bool:
        # Another fill may have finished between the caller's check and now
        if os.path.exists(output_path):
            return False

        data = archive.read_entry(info)
        with io.BytesIO(data) as image_stream:
            render_resized_jpeg(image_stream, target.height, target.width,
                                self.settings.page_quality, output_path)
        logger.debug("Page cache fill: %s[%s] -> %s", archive.zip_path, info.filename, output_path)
        return True

    def prefetch_range(self, identity: str, start_index: int, limit: int,
                       max_height: int, max_width: int) -> PrefetchResult:
        """Generate every missing page artifact in [start_index, start_index + limit).

        Only catalog and archive-open failures raise. Directory entries and
        cached pages are skipped; a failing entry is logged, recorded in the
        result and the run continues.
        """
        file_path = self.catalog.resolve_path(identity)
        result = PrefetchResult()
        end_index = start_index + limit
        logger.debug("Prefetch start: %s [%d, %d)", file_path, start_index, end_index)

        with ZipArchive(file_path) as archive:
            for index, info in archive.iter_entries():
                if index < start_index or index >= end_index:
                    continue
                if info.is_dir():
                    result.directory_count += 1
                    continue

                target, output_path = self._locate(file_path, index, max_height, max_width)
                if os.path.exists(output_path):
                    result.cached_count += 1
                    continue

                # Set only when this call renders; a fill by another caller counts as cached
                rendered_here = []

                def fill():
                    generated = self._render_entry(archive, info, target, output_path)
                    rendered_here.append(generated)
                    return generated

                try:
                    self.guard.run(output_path, fill)
                except ArkPageError as e:
                    logger.warning("Prefetch skipped %s[%d] %s: %s", file_path, index, info.filename, e)
                    result.failures.append(SkippedEntry(index=index, name=info.filename, error=e))
                    continue

                if any(rendered_here):
                    result.generated_count += 1
                    result.generated_paths.append(output_path)
                else:
                    result.cached_count += 1

        logger.debug("Prefetch finish: %s generated=%d cached=%d failed=%d",
                     file_path, result.generated_count, result.cached_count, len(result.failures))
        return result
