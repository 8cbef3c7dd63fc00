"""Site generation: the page hierarchy of one asset package."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from graph.model import Export, Import, ObjectGraph
from scanner.config import DEFAULT_CONFIG, IndexerConfig
from scanner.errors import IndexerError, SiteGenerationError
from .html_exporter import (
    ROOT,
    render_detail_page,
    render_listing,
    render_root_index,
    write_page,
)


logger = logging.getLogger(__name__)


@dataclass
class SiteReport:
    """
    Outcome of generating one site.

    Attributes:
        output_dir: Root directory of the site.
        written: Pages written, in generation order.
        failed: Pages that could not be produced, mapped to the reason.
    """

    output_dir: Path
    written: List[Path] = field(default_factory=list)
    failed: Dict[Path, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True if every page of the site was written."""
        return not self.failed


def _ensure_dir(path: Path) -> None:
    if path.is_dir():
        return
    path.mkdir()


def write_site(
    graph: ObjectGraph,
    output_dir: Path,
    site_name: Optional[str] = None,
    config: IndexerConfig = DEFAULT_CONFIG,
) -> SiteReport:
    """
    Write the linked pages of an object graph under a directory.

    Layout: ``index.html``, ``exports/index.html``, ``exports/<n>/index.html``
    and the same for imports, with ``n`` counting from 1 in native order.
    Existing directories and unrelated files are left in place; generated
    files are overwritten.

    Args:
        graph: The graph to publish.
        output_dir: Site root, created if missing (its parent must exist).
        site_name: Name shown in breadcrumbs (default: the directory name).
        config: Style and reference marker settings.

    Returns:
        SiteReport listing written and failed pages.

    Raises:
        SiteGenerationError: If one of the top-level directories cannot be
            created.
    """
    if site_name is None:
        site_name = output_dir.name

    report = SiteReport(output_dir=output_dir)
    tables = ((Export.table, graph.exports), (Import.table, graph.imports))

    for directory in (output_dir,) + tuple(output_dir / table for table, _ in tables):
        try:
            _ensure_dir(directory)
        except OSError as e:
            raise SiteGenerationError(f"Failed to create directory {directory}: {e}") from e

    _write(report, ROOT.file_path(output_dir), lambda: render_root_index(site_name, config))
    for table, records in tables:
        location = ROOT.child(table)
        _write(
            report,
            location.file_path(output_dir),
            lambda: render_listing(site_name, table, records, config),
        )

    for table, records in tables:
        for position, record in enumerate(records, start=1):
            location = ROOT.child(table).child(position)
            page = location.file_path(output_dir)
            try:
                _ensure_dir(page.parent)
            except OSError as e:
                _fail(report, page, f"Failed to create directory {page.parent}: {e}")
                continue
            _write(
                report,
                page,
                lambda: render_detail_page(record, position, graph, site_name, config),
            )

    logger.debug(
        "Wrote %d pages to %s (%d failed)", len(report.written), output_dir, len(report.failed)
    )
    return report


def _write(report: SiteReport, page: Path, render) -> None:
    try:
        report.written.append(write_page(page, render()))
    except IndexerError as e:
        _fail(report, page, str(e))


def _fail(report: SiteReport, page: Path, reason: str) -> None:
    logger.error("Skipping page %s: %s", page, reason)
    report.failed[page] = reason
