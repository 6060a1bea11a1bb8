"""arkpage.core.cache_keys

Archive identity and on-disk cache artifact naming.

Layout:
    <thumbnail_dir>/<identity>.jpg
    <page_cache_dir>/<identity>/<index>_<height>_<width>.jpg

The identity is a SHA-256 digest of the archive path string, not of the file
contents. An archive replaced in place keeps its identity (and therefore its
stale cache entries); a byte-identical archive moved to a new path gets a new
identity.
"""

from __future__ import annotations

import hashlib
import logging
import os

logger = logging.getLogger(__name__)


def make_archive_identity(file_path: str) -> str:
    """Lowercase hex SHA-256 digest of the archive path."""
    return hashlib.sha256(file_path.encode("utf-8")).hexdigest()


def _ensure_dir(dir_path: str) -> None:
    # A failure here surfaces later as an EncodeOrWriteError when the
    # artifact is written.
    try:
        os.makedirs(dir_path, exist_ok=True)
    except OSError as e:
        logger.warning("Could not create cache directory %s: %s", dir_path, e)


def page_artifact_name(index: int, height: int, width: int) -> str:
    return f"{index}_{height}_{width}.jpg"


def page_artifact_path(cache_root: str, identity: str, index: int, height: int, width: int) -> str:
    """Path of a cached page, creating the per-archive directory if missing."""
    dir_path = os.path.join(cache_root, identity)
    _ensure_dir(dir_path)
    return os.path.join(dir_path, page_artifact_name(index, height, width))


def thumbnail_artifact_path(thumbnail_root: str, identity: str) -> str:
    """Path of an archive's thumbnail. Thumbnails share one flat directory."""
    _ensure_dir(thumbnail_root)
    return os.path.join(thumbnail_root, f"{identity}.jpg")
