#!/usr/bin/env python3
"""
Tests for single-page resolution through the disk cache.
"""

import os
import threading
import time
import zipfile

import pytest
from PIL import Image

from conftest import image_bytes, write_zip
from arkpage.core.cache_keys import make_archive_identity, page_artifact_path
from arkpage.core.errors import (
    ArchiveOpenError,
    DecodeError,
    EntryOpenError,
    NotFound,
    PageIsDirectory,
    PageNotFound,
)
from arkpage.core.models import ArchiveRecord
from arkpage.services import page_service as page_service_module
from arkpage.services.page_service import PageService


def _register(catalog, zip_path):
    return catalog.add_archive(zip_path).identity


def _pages_zip(tmp_path):
    return write_zip(tmp_path / "book.zip", [
        ("chapter1/", b""),
        ("p0.png", image_bytes((2000, 1000), 'red')),
        ("p1.png", image_bytes((300, 600), 'green')),
        ("p2.png", b"this is not an image"),
    ])


def test_fill_then_hit_returns_same_file(tmp_path, catalog, settings):
    identity = _register(catalog, _pages_zip(tmp_path))
    pages = PageService(catalog, settings)

    first = pages.resolve_page(identity, 1, 0, 500)
    with open(first, 'rb') as f:
        first_bytes = f.read()
    second = pages.resolve_page(identity, 1, 0, 500)

    assert first == second
    with open(second, 'rb') as f:
        assert f.read() == first_bytes
    assert first == os.path.join(settings.page_cache_dir, identity, "1_0_500.jpg")


def test_cache_hit_never_opens_archive(tmp_path, catalog, settings):
    missing_zip = str(tmp_path / "gone.zip")
    identity = make_archive_identity(missing_zip)
    catalog.register(ArchiveRecord(identity=identity, folder_identity="", file_path=missing_zip))
    cached = page_artifact_path(settings.page_cache_dir, identity, 4, 0, 320)
    with open(cached, 'wb') as f:
        f.write(b"already cached")

    pages = PageService(catalog, settings)

    assert pages.resolve_page(identity, 4, 100, 320) == cached
    with open(cached, 'rb') as f:
        assert f.read() == b"already cached"

    with pytest.raises(ArchiveOpenError):
        pages.resolve_page(identity, 5, 100, 320)


def test_width_dominant_request_preserves_aspect(tmp_path, catalog, settings):
    identity = _register(catalog, _pages_zip(tmp_path))
    pages = PageService(catalog, settings)

    path = pages.resolve_page(identity, 1, 0, 500)

    with Image.open(path) as img:
        assert img.format == "JPEG"
        assert img.size == (500, 250)


def test_height_dominant_request_preserves_aspect(tmp_path, catalog, settings):
    identity = _register(catalog, _pages_zip(tmp_path))
    pages = PageService(catalog, settings)

    path = pages.resolve_page(identity, 2, 300, 100)

    assert path.endswith("2_300_0.jpg")
    with Image.open(path) as img:
        assert img.size == (150, 300)


def test_zero_bounds_keep_original_size(tmp_path, catalog, settings):
    identity = _register(catalog, _pages_zip(tmp_path))
    pages = PageService(catalog, settings)

    path = pages.resolve_page(identity, 1, 0, 0)

    assert path.endswith("1_0_0.jpg")
    with Image.open(path) as img:
        assert img.size == (2000, 1000)


def test_equal_bounds_fix_both_axes(tmp_path, catalog, settings):
    identity = _register(catalog, _pages_zip(tmp_path))
    pages = PageService(catalog, settings)

    path = pages.resolve_page(identity, 1, 100, 100)

    with Image.open(path) as img:
        assert img.size == (100, 100)


def test_index_bounds(tmp_path, catalog, settings):
    zip_path = write_zip(tmp_path / "two.zip", [
        ("a.png", image_bytes()),
        ("b.png", image_bytes()),
    ])
    identity = _register(catalog, zip_path)
    pages = PageService(catalog, settings)

    assert os.path.exists(pages.resolve_page(identity, 1, 0, 20))

    with pytest.raises(PageNotFound) as excinfo:
        pages.resolve_page(identity, 2, 0, 20)
    assert excinfo.value.entry_count == 2

    with pytest.raises(PageNotFound):
        pages.resolve_page(identity, -1, 0, 20)


def test_directory_entry_is_rejected_before_decoding(tmp_path, catalog, settings, monkeypatch):
    identity = _register(catalog, _pages_zip(tmp_path))
    pages = PageService(catalog, settings)

    def fail_render(*args, **kwargs):
        raise AssertionError("directory entries must not be decoded")

    monkeypatch.setattr(page_service_module, "render_resized_jpeg", fail_render)

    with pytest.raises(PageIsDirectory):
        pages.resolve_page(identity, 0, 0, 100)


def test_undecodable_entry_raises_and_leaves_no_file(tmp_path, catalog, settings):
    identity = _register(catalog, _pages_zip(tmp_path))
    pages = PageService(catalog, settings)

    with pytest.raises(DecodeError):
        pages.resolve_page(identity, 3, 0, 100)

    exists, path = pages.page_exists(identity, 3, 0, 100)
    assert not exists
    assert os.listdir(os.path.dirname(path)) == []


def test_corrupt_entry_data_raises_entry_open_error(tmp_path, catalog, settings):
    payload = b"UNIQUE-PAYLOAD-" * 8
    zip_path = tmp_path / "crc.zip"
    write_zip(zip_path, [("p0.bin", payload)], compression=zipfile.ZIP_STORED)
    raw = zip_path.read_bytes()
    offset = raw.find(payload)
    zip_path.write_bytes(raw[:offset] + b"X" + raw[offset + 1:])

    identity = _register(catalog, str(zip_path))
    pages = PageService(catalog, settings)

    with pytest.raises(EntryOpenError):
        pages.resolve_page(identity, 0, 0, 100)


def test_unknown_identity(catalog, settings):
    pages = PageService(catalog, settings)

    with pytest.raises(NotFound):
        pages.resolve_page("0" * 64, 0, 0, 100)
    with pytest.raises(NotFound):
        pages.page_exists("0" * 64, 0, 0, 100)


def test_unreadable_archive(tmp_path, catalog, settings):
    bogus = tmp_path / "bogus.zip"
    bogus.write_bytes(b"not a zip at all")
    identity = make_archive_identity(str(bogus))
    catalog.register(ArchiveRecord(identity=identity, folder_identity="", file_path=str(bogus)))
    pages = PageService(catalog, settings)

    with pytest.raises(ArchiveOpenError):
        pages.resolve_page(identity, 0, 0, 100)


def test_page_exists_does_not_fill(tmp_path, catalog, settings):
    identity = _register(catalog, _pages_zip(tmp_path))
    pages = PageService(catalog, settings)

    exists, path = pages.page_exists(identity, 1, 0, 500)
    assert not exists
    assert not os.path.exists(path)

    assert pages.resolve_page(identity, 1, 0, 500) == path
    assert pages.page_exists(identity, 1, 0, 500) == (True, path)


def test_resolve_page_for_file(tmp_path, catalog, settings):
    zip_path = _pages_zip(tmp_path)
    pages = PageService(catalog, settings)

    path = pages.resolve_page_for_file(zip_path, 1, 0, 500)

    assert path.startswith(os.path.join(settings.page_cache_dir, make_archive_identity(zip_path)))
    assert os.path.exists(path)


def test_concurrent_fills_for_same_page_render_once(tmp_path, catalog, settings, monkeypatch):
    identity = _register(catalog, _pages_zip(tmp_path))
    pages = PageService(catalog, settings)
    calls = []
    original_render = page_service_module.render_resized_jpeg

    def slow_render(*args, **kwargs):
        calls.append(args)
        time.sleep(0.2)
        return original_render(*args, **kwargs)

    monkeypatch.setattr(page_service_module, "render_resized_jpeg", slow_render)

    results = []
    threads = [
        threading.Thread(target=lambda: results.append(pages.resolve_page(identity, 1, 0, 64)))
        for _ in range(4)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert len(set(results)) == 1 and len(results) == 4
    assert os.listdir(os.path.dirname(results[0])) == ["1_0_64.jpg"]
