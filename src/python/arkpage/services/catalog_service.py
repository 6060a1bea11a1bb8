"""
In-memory archive catalog for arkpage.

The production catalog is an external table; this implementation backs the
CLI and tests with the same identity -> path contract.
"""

import logging
import threading
from typing import Dict, List, Optional

from . import CatalogServiceInterface
from .zip_service import ZipService
from ..core.cache_keys import make_archive_identity
from ..core.errors import NotFound
from ..core.models import ArchiveRecord

logger = logging.getLogger(__name__)


class InMemoryCatalog(CatalogServiceInterface):
    """Dictionary-backed catalog keyed by archive identity."""

    def __init__(self, zip_service: Optional[ZipService] = None):
        self.zip_service = zip_service or ZipService()
        self._records: Dict[str, ArchiveRecord] = {}
        self._lock = threading.Lock()

    def register(self, record: ArchiveRecord) -> ArchiveRecord:
        """Insert or replace a record."""
        with self._lock:
            self._records[record.identity] = record
        logger.debug("Registered %s as %s", record.file_path, record.identity)
        return record

    def add_archive(self, file_path: str, folder_identity: str = "") -> ArchiveRecord:
        """Inspect an archive on disk and register it."""
        return self.register(self.zip_service.build_record(file_path, folder_identity))

    def remove(self, identity: str) -> bool:
        with self._lock:
            return self._records.pop(identity, None) is not None

    def get(self, identity: str) -> Optional[ArchiveRecord]:
        with self._lock:
            return self._records.get(identity)

    def list_folder(self, folder_identity: str) -> List[ArchiveRecord]:
        with self._lock:
            return [r for r in self._records.values() if r.folder_identity == folder_identity]

    def resolve_path(self, identity: str) -> str:
        record = self.get(identity)
        if record is None:
            raise NotFound(identity)
        return record.file_path

    def compute_identity(self, file_path: str) -> str:
        return make_archive_identity(file_path)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, identity: str) -> bool:
        with self._lock:
            return identity in self._records
