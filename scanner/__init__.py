"""Scanner module for index reference discovery and resolution."""

from .config import DEFAULT_CONFIG, IndexerConfig, compile_index_pattern
from .parser import AssetDumpProvider, parse_file
from .references import find_indices, transform_indices
from .resolver import ResolvedReference, resolve_index

__all__ = [
    "DEFAULT_CONFIG",
    "IndexerConfig",
    "compile_index_pattern",
    "AssetDumpProvider",
    "parse_file",
    "find_indices",
    "transform_indices",
    "ResolvedReference",
    "resolve_index",
]
