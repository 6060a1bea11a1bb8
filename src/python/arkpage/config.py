"""
Configuration defaults for arkpage.

CONFIG holds the process defaults. Engine components never read it directly;
they receive a CacheSettings instance so that every cache root is explicit.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Optional


CONFIG: Dict[str, Any] = {
    "THUMBNAIL_DIR": "_temp/thumbnail",
    "PAGE_CACHE_DIR": "_temp/cache",
    "THUMBNAIL_WIDTH": 512,
    "THUMBNAIL_JPEG_QUALITY": 70,
    "PAGE_JPEG_QUALITY": 70,
}

# Environment variables that override the settings file
ENV_OVERRIDES = {
    "ARKPAGE_THUMBNAIL_DIR": "thumbnail_dir",
    "ARKPAGE_PAGE_CACHE_DIR": "page_cache_dir",
}


def format_human_size(size_bytes: int) -> str:
    """Format a byte count into a human-readable string."""
    KB = 1024.0
    MB = KB * 1024.0
    GB = MB * 1024.0

    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / KB:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / MB:.1f} MB"
    else:
        return f"{size_bytes / GB:.1f} GB"


@dataclass
class CacheSettings:
    """Cache roots and encoding parameters for one engine instance."""
    thumbnail_dir: str = CONFIG["THUMBNAIL_DIR"]
    page_cache_dir: str = CONFIG["PAGE_CACHE_DIR"]
    thumbnail_width: int = CONFIG["THUMBNAIL_WIDTH"]
    thumbnail_quality: int = CONFIG["THUMBNAIL_JPEG_QUALITY"]
    page_quality: int = CONFIG["PAGE_JPEG_QUALITY"]

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]] = None) -> 'CacheSettings':
        """Create CacheSettings from a mapping, falling back to CONFIG defaults."""
        data = data or {}
        return cls(
            thumbnail_dir=str(data.get('thumbnail_dir', CONFIG["THUMBNAIL_DIR"])),
            page_cache_dir=str(data.get('page_cache_dir', CONFIG["PAGE_CACHE_DIR"])),
            thumbnail_width=int(data.get('thumbnail_width', CONFIG["THUMBNAIL_WIDTH"])),
            thumbnail_quality=int(data.get('thumbnail_quality', CONFIG["THUMBNAIL_JPEG_QUALITY"])),
            page_quality=int(data.get('page_quality', CONFIG["PAGE_JPEG_QUALITY"])),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert CacheSettings to a dictionary."""
        return asdict(self)
