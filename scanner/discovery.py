"""Directory walking: index every asset package in a tree."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

from .builder import index_file, output_dir_for
from .config import DEFAULT_CONFIG, IndexerConfig
from .errors import IndexerError
from .parser import GraphProvider


logger = logging.getLogger(__name__)


@dataclass
class IndexSummary:
    """
    Aggregated outcome of an indexing run.

    Attributes:
        indexed: Source files whose site was generated (possibly with
            failed pages).
        skipped: Files left out, mapped to the reason.
        failed: Paths that could not be processed, mapped to the error.
        incomplete: Sites with at least one missing page, mapped to the
            number of missing pages.
    """

    indexed: List[Path] = field(default_factory=list)
    skipped: Dict[Path, str] = field(default_factory=dict)
    failed: Dict[Path, str] = field(default_factory=dict)
    incomplete: Dict[Path, int] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True if every path was indexed with all of its pages."""
        return not self.failed and not self.incomplete


def claim_output_dirs(paths: Iterable[Path], config: IndexerConfig = DEFAULT_CONFIG) -> Set[Path]:
    """
    Get the site directories that indexing these paths will produce.

    Only paths with an indexed extension claim a directory; the check does
    not touch the filesystem.
    """
    return {output_dir_for(path) for path in paths if path.suffix and config.is_supported(path.suffix)}


def index_path(
    path: Path,
    config: IndexerConfig = DEFAULT_CONFIG,
    provider: Optional[GraphProvider] = None,
    summary: Optional[IndexSummary] = None,
) -> IndexSummary:
    """
    Index one file or directory, recording errors in the summary.

    Args:
        path: A source file or a directory to walk.
        config: Indexer settings.
        provider: Graph provider (default: AssetDumpProvider).
        summary: Summary to extend (default: a new one).

    Returns:
        The summary.
    """
    if summary is None:
        summary = IndexSummary()

    if path.is_dir():
        return index_directory(path, config, provider, summary)
    if path.is_file():
        _index_one(path, config, provider, summary)
        return summary

    logger.error("File does not exist: %s", path)
    summary.failed[path] = "does not exist"
    return summary


def index_directory(
    root: Path,
    config: IndexerConfig = DEFAULT_CONFIG,
    provider: Optional[GraphProvider] = None,
    summary: Optional[IndexSummary] = None,
) -> IndexSummary:
    """
    Index every asset package in a directory tree.

    Files directly inside ``root`` are indexed first, and the site
    directory of each one is claimed. Subdirectories are then walked,
    except the claimed ones, which hold generated pages, and symlinked
    ones, which may lead back into the tree.

    Args:
        root: Directory to walk.
        config: Indexer settings.
        provider: Graph provider (default: AssetDumpProvider).
        summary: Summary to extend (default: a new one).

    Returns:
        IndexSummary of the whole walk.
    """
    if summary is None:
        summary = IndexSummary()

    logger.info("Indexing directory: %s", root)

    try:
        entries = sorted(root.iterdir())
    except OSError as e:
        logger.error("Cannot list directory %s: %s", root, e)
        summary.failed[root] = str(e)
        return summary

    files = [entry for entry in entries if entry.is_file()]
    for entry in files:
        if not entry.suffix:
            logger.warning("Skipping %s: file has no extension", entry)
            summary.skipped[entry] = "no extension"
            continue
        if not config.is_supported(entry.suffix):
            logger.debug("Skipping %s: unsupported extension", entry)
            continue
        _index_one(entry, config, provider, summary)

    claimed = claim_output_dirs(files, config)

    for entry in entries:
        if not entry.is_dir():
            continue
        if entry.is_symlink():
            logger.debug("Not following symlinked directory %s", entry)
            continue
        if entry in claimed:
            logger.debug("Not descending into generated site %s", entry)
            continue
        index_directory(entry, config, provider, summary)

    return summary


def _index_one(
    path: Path,
    config: IndexerConfig,
    provider: Optional[GraphProvider],
    summary: IndexSummary,
) -> None:
    try:
        report = index_file(path, config, provider)
    except IndexerError as e:
        logger.error("%s", e)
        summary.failed[path] = str(e)
        return

    summary.indexed.append(path)
    if report.failed:
        logger.error(
            "Site for %s is incomplete: %d of %d pages missing",
            path,
            len(report.failed),
            len(report.failed) + len(report.written),
        )
        summary.incomplete[path] = len(report.failed)
