"""
Core package for arkpage: identity, naming, sizing, ZIP access and imaging.
"""

from .errors import (
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
from .models import (
    ArchiveRecord,
    ResizeTarget,
    SkippedEntry,
    PrefetchResult,
)
from .cache_keys import (
    make_archive_identity,
    page_artifact_path,
    thumbnail_artifact_path,
)
from .sizing import resolve_resize_target
from .file_manager import ZipArchive
from .imaging import render_resized_jpeg
from .inflight import InFlightGuard

__all__ = [
    'ArkPageError',
    'NotFound',
    'ArchiveOpenError',
    'PageNotFound',
    'PageIsDirectory',
    'EntryOpenError',
    'DecodeError',
    'ResizeError',
    'EncodeOrWriteError',
    'ArchiveRecord',
    'ResizeTarget',
    'SkippedEntry',
    'PrefetchResult',
    'make_archive_identity',
    'page_artifact_path',
    'thumbnail_artifact_path',
    'resolve_resize_target',
    'ZipArchive',
    'render_resized_jpeg',
    'InFlightGuard',
]
