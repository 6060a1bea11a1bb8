"""
Data models for arkpage core layer.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..config import format_human_size


@dataclass
class ArchiveRecord:
    """Catalog entry describing one archive."""
    identity: str
    folder_identity: str
    file_path: str
    file_size: Optional[int] = None
    page_count: int = 0
    mod_time: Optional[float] = None

    def get_formatted_size(self) -> str:
        """Format file size into human-readable string."""
        if self.file_size is None:
            return "Unknown"

        return format_human_size(self.file_size)


@dataclass(frozen=True)
class ResizeTarget:
    """Concrete resize target. A zero on either axis means "auto"."""
    height: int
    width: int

    @property
    def is_passthrough(self) -> bool:
        return self.height == 0 and self.width == 0


@dataclass
class SkippedEntry:
    """A prefetch entry that failed and was skipped."""
    index: int
    name: str
    error: Exception

    @property
    def reason(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"


@dataclass
class PrefetchResult:
    """Outcome of a prefetch run over an index range."""
    generated_count: int = 0
    cached_count: int = 0
    directory_count: int = 0
    generated_paths: List[str] = field(default_factory=list)
    failures: List[SkippedEntry] = field(default_factory=list)

    @property
    def skipped_indices(self) -> List[int]:
        return [entry.index for entry in self.failures]
