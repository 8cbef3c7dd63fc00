"""Indexing of a single asset package into its site."""

import logging
from pathlib import Path
from typing import Optional

from exporters.site_exporter import SiteReport, write_site
from .config import DEFAULT_CONFIG, IndexerConfig
from .errors import ConfigurationError
from .parser import AssetDumpProvider, GraphProvider


logger = logging.getLogger(__name__)


def output_dir_for(path: Path) -> Path:
    """Site directory of a source file: its path without the extension."""
    return path.with_suffix("")


def index_file(
    path: Path,
    config: IndexerConfig = DEFAULT_CONFIG,
    provider: Optional[GraphProvider] = None,
) -> SiteReport:
    """
    Load an asset package and write its site next to it.

    The graph is loaded before any directory is created, so a file the
    provider rejects leaves nothing behind.

    Args:
        path: The source file (``foo.uasset`` produces ``foo/``).
        config: Indexer settings.
        provider: Graph provider (default: AssetDumpProvider).

    Returns:
        SiteReport of the generated site.

    Raises:
        ConfigurationError: If the file is missing or its extension is not
            indexed.
        ProviderError: If the graph cannot be loaded.
        SiteGenerationError: If the site directories cannot be created.
    """
    logger.info("Indexing asset file: %s", path.name)

    if not path.suffix:
        raise ConfigurationError(
            f"{path} has no extension. Valid extensions are: {config.describe_extensions()}"
        )
    if not config.is_supported(path.suffix):
        raise ConfigurationError(
            f"Invalid extension '{path.suffix}'. Valid extensions are: {config.describe_extensions()}"
        )
    if not path.is_file():
        raise ConfigurationError(f"File does not exist: {path}")

    if provider is None:
        provider = AssetDumpProvider(config)

    graph = provider(path)
    logger.debug("Loaded %r from %s", graph, path)

    return write_site(graph, output_dir_for(path), site_name=path.stem, config=config)
