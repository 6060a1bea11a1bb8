"""
Service layer package for arkpage.
Services sit between callers (HTTP handlers, the CLI) and the core layer.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

from ..core.models import PrefetchResult


class CatalogServiceInterface(ABC):
    """The two catalog operations the cache engine depends on."""

    @abstractmethod
    def resolve_path(self, identity: str) -> str:
        """Return the archive's file path; raise NotFound for unknown identities."""
        pass

    @abstractmethod
    def compute_identity(self, file_path: str) -> str:
        """Return the identity of the archive at file_path."""
        pass


class ConfigServiceInterface(ABC):

    @abstractmethod
    def get_setting(self, key: str, default: Any = None) -> Any:
        pass

    @abstractmethod
    def set_setting(self, key: str, value: Any):
        pass

    @abstractmethod
    def save_settings(self):
        pass


class PageServiceInterface(ABC):

    @abstractmethod
    def resolve_page(self, identity: str, index: int, max_height: int, max_width: int) -> str:
        """Return the cached page path, generating the artifact if absent."""
        pass

    @abstractmethod
    def page_exists(self, identity: str, index: int, max_height: int, max_width: int) -> Tuple[bool, str]:
        """Report cache state without generating anything."""
        pass

    @abstractmethod
    def prefetch_range(self, identity: str, start_index: int, limit: int,
                       max_height: int, max_width: int) -> PrefetchResult:
        """Generate missing artifacts for [start_index, start_index + limit)."""
        pass


class ThumbnailServiceInterface(ABC):

    @abstractmethod
    def generate_thumbnail(self, identity: str) -> Optional[str]:
        pass


from .catalog_service import InMemoryCatalog
from .config_service import ConfigService
from .zip_service import ZipService
from .page_service import PageService
from .thumbnail_service import ThumbnailService

__all__ = [
    'CatalogServiceInterface',
    'ConfigServiceInterface',
    'PageServiceInterface',
    'ThumbnailServiceInterface',
    'InMemoryCatalog',
    'ConfigService',
    'ZipService',
    'PageService',
    'ThumbnailService',
]
