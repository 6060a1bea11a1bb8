"""
arkpage package initialization.
"""

# Import core components
from .core.errors import (
    ArkPageError,
    NotFound,
    ArchiveOpenError,
    PageNotFound,
    PageIsDirectory,
    EntryOpenError,
    DecodeError,
    ResizeError,
    EncodeOrWriteError,
)
from .core.models import ArchiveRecord, ResizeTarget, PrefetchResult, SkippedEntry
from .core.cache_keys import make_archive_identity
from .core.sizing import resolve_resize_target
from .core.imaging import render_resized_jpeg

# Import services
from .services.catalog_service import InMemoryCatalog
from .services.config_service import ConfigService
from .services.page_service import PageService
from .services.thumbnail_service import ThumbnailService
from .services.zip_service import ZipService

# Import configuration
from .config import CONFIG, CacheSettings

__all__ = [
    # Errors
    "ArkPageError",
    "NotFound",
    "ArchiveOpenError",
    "PageNotFound",
    "PageIsDirectory",
    "EntryOpenError",
    "DecodeError",
    "ResizeError",
    "EncodeOrWriteError",

    # Core components
    "ArchiveRecord",
    "ResizeTarget",
    "PrefetchResult",
    "SkippedEntry",
    "make_archive_identity",
    "resolve_resize_target",
    "render_resized_jpeg",

    # Services
    "InMemoryCatalog",
    "ConfigService",
    "PageService",
    "ThumbnailService",
    "ZipService",

    # Configuration
    "CONFIG",
    "CacheSettings",
]
