"""
Main entry point for the arkpage command line tool.
"""

import argparse
import logging
import sys

from .config import CacheSettings
from .core.errors import ArkPageError
from .services.catalog_service import InMemoryCatalog
from .services.config_service import ConfigService
from .services.page_service import PageService
from .services.thumbnail_service import ThumbnailService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="arkpage", description="Serve resized pages out of ZIP comic archives")
    parser.add_argument("--config", help="Path to a JSON settings file")
    parser.add_argument("--thumbnail-dir", help="Thumbnail cache root")
    parser.add_argument("--page-cache-dir", help="Page cache root")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    page = subparsers.add_parser("page", help="Resolve one page and print its cached path")
    page.add_argument("archive")
    page.add_argument("index", type=int)
    page.add_argument("--max-height", type=int, default=0)
    page.add_argument("--max-width", type=int, default=0)

    prefetch = subparsers.add_parser("prefetch", help="Generate missing pages in an index range")
    prefetch.add_argument("archive")
    prefetch.add_argument("start", type=int)
    prefetch.add_argument("limit", type=int)
    prefetch.add_argument("--max-height", type=int, default=0)
    prefetch.add_argument("--max-width", type=int, default=0)

    thumbnail = subparsers.add_parser("thumbnail", help="Generate the archive thumbnail")
    thumbnail.add_argument("archive")

    info = subparsers.add_parser("info", help="Show the archive's identity and page count")
    info.add_argument("archive")

    return parser


def load_settings(args: argparse.Namespace) -> CacheSettings:
    settings = ConfigService(args.config).get_cache_settings()
    if args.thumbnail_dir:
        settings.thumbnail_dir = args.thumbnail_dir
    if args.page_cache_dir:
        settings.page_cache_dir = args.page_cache_dir
    return settings


def run(args: argparse.Namespace) -> int:
    settings = load_settings(args)
    catalog = InMemoryCatalog()
    record = catalog.add_archive(args.archive)

    if args.command == "info":
        print(f"identity: {record.identity}")
        print(f"pages:    {record.page_count}")
        print(f"size:     {record.get_formatted_size()}")
    elif args.command == "page":
        pages = PageService(catalog, settings)
        print(pages.resolve_page(record.identity, args.index, args.max_height, args.max_width))
    elif args.command == "prefetch":
        pages = PageService(catalog, settings)
        result = pages.prefetch_range(record.identity, args.start, args.limit,
                                      args.max_height, args.max_width)
        for path in result.generated_paths:
            print(path)
        for skipped in result.failures:
            print(f"skipped {skipped.index} {skipped.name}: {skipped.reason}", file=sys.stderr)
        print(f"generated {result.generated_count}, cached {result.cached_count}, "
              f"failed {len(result.failures)}")
    elif args.command == "thumbnail":
        thumbnails = ThumbnailService(catalog, settings)
        path = thumbnails.generate_thumbnail(record.identity)
        if path is None:
            print("no file entries, thumbnail not created", file=sys.stderr)
        else:
            print(path)
    return 0


def main(argv=None) -> int:
    """Command line entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return run(args)
    except ArkPageError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
