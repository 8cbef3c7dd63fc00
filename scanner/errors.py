"""Errors raised while indexing asset packages."""

from pathlib import Path
from typing import Optional


class IndexerError(Exception):
    """Base class for every indexing failure."""


class ConfigurationError(IndexerError):
    """A path cannot be indexed: missing, extensionless or unsupported."""


class ProviderError(IndexerError):
    """The graph provider could not produce an object graph for a file."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Failed to load {path}: {reason}")
        self.path = path
        self.reason = reason


class SiteGenerationError(IndexerError):
    """A top-level directory of a site could not be created."""


class PageWriteError(IndexerError):
    """One page of a site could not be written."""

    def __init__(self, path: Path, cause: Optional[OSError] = None):
        message = f"Failed to write {path}"
        if cause is not None:
            message += f": {cause.strerror or cause}"
        super().__init__(message)
        self.path = path


class ReferenceContractError(IndexerError):
    """
    An index reference that a correct scanner and provider never produce.

    These point at a bug upstream of the page being rendered rather than at
    bad input, so the page is abandoned instead of emitting a broken link.
    """


class ZeroIndexError(ReferenceContractError):
    """Index 0 means "no reference" and is never a valid link target."""

    def __init__(self):
        super().__init__("Tried to annotate 0 index.")


class IndexOutOfRangeError(ReferenceContractError):
    """An index whose magnitude exceeds the length of its table."""

    def __init__(self, index: int, table: str, size: int):
        super().__init__(f"Index {index} is out of range for {table} (size {size})")
        self.index = index
        self.table = table
        self.size = size
