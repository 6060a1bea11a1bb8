"""
Error types raised by the arkpage cache engine.
"""


class ArkPageError(Exception):
    """Base class for every error the engine raises."""


class NotFound(ArkPageError):
    """The catalog has no archive for the given identity."""

    def __init__(self, identity: str):
        super().__init__(f"Unknown archive identity: {identity}")
        self.identity = identity


class ArchiveOpenError(ArkPageError):
    """The ZIP container is missing, unreadable or corrupt."""

    def __init__(self, path: str, reason: str = ""):
        message = f"Cannot open archive {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = path


class PageNotFound(ArkPageError):
    """The page index is outside the container's entry range."""

    def __init__(self, path: str, index: int, entry_count: int):
        super().__init__(f"Page {index} not found in {path} ({entry_count} entries)")
        self.path = path
        self.index = index
        self.entry_count = entry_count


class PageIsDirectory(ArkPageError):
    """The page index addresses a directory entry."""

    def __init__(self, path: str, index: int, name: str):
        super().__init__(f"Page {index} of {path} is a directory: {name}")
        self.path = path
        self.index = index
        self.name = name


class EntryOpenError(ArkPageError):
    """An entry exists but its bytes could not be read."""

    def __init__(self, path: str, name: str, reason: str = ""):
        message = f"Cannot read {name} from {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = path
        self.name = name


class DecodeError(ArkPageError):
    """Image content is unsupported or corrupt."""


class ResizeError(ArkPageError):
    """The decoded image could not be resized."""


class EncodeOrWriteError(ArkPageError):
    """The JPEG could not be encoded or written to its output path."""

    def __init__(self, output_path: str, reason: str = ""):
        message = f"Cannot write {output_path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.output_path = output_path
