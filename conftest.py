"""
Shared pytest fixtures for arkpage tests.
"""

import io
import os
import sys
import zipfile

import pytest
from PIL import Image

sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src', 'python'))

from arkpage.config import CacheSettings
from arkpage.services.catalog_service import InMemoryCatalog


def image_bytes(size=(40, 80), color='red', fmt='PNG') -> bytes:
    """Encode a solid-color image; size is (width, height)."""
    buffer = io.BytesIO()
    Image.new('RGB', size, color=color).save(buffer, format=fmt)
    return buffer.getvalue()


def write_zip(path, entries, compression=zipfile.ZIP_DEFLATED) -> str:
    """Write a ZIP whose entries keep the given order.

    A name ending in "/" becomes a directory entry; other values are bytes.
    """
    with zipfile.ZipFile(path, 'w', compression=compression) as zf:
        for name, data in entries:
            if name.endswith('/'):
                zf.writestr(zipfile.ZipInfo(name), b'')
            else:
                zf.writestr(name, data)
    return str(path)


@pytest.fixture
def settings(tmp_path):
    return CacheSettings(
        thumbnail_dir=str(tmp_path / 'thumbnail'),
        page_cache_dir=str(tmp_path / 'cache'),
    )


@pytest.fixture
def catalog():
    return InMemoryCatalog()
