"""HTML page rendering for asset sites."""

import html
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Sequence, Tuple, Union

from graph.model import ObjectGraph, Record
from scanner.config import DEFAULT_CONFIG, IndexerConfig
from scanner.errors import PageWriteError
from scanner.references import transform_indices
from scanner.resolver import ResolvedReference, resolve_index


PAGE_FILE = "index.html"
DUMP_OPEN = '<span style="white-space-collapse:preserve;font-family:monospace">'
DUMP_CLOSE = "</span>"


@dataclass(frozen=True)
class PageLocation:
    """Directory of a page relative to the site root, e.g. ('exports', '3')."""

    parts: Tuple[str, ...] = ()

    @property
    def depth(self) -> int:
        return len(self.parts)

    def href_to(self, target: Union[str, PurePosixPath]) -> str:
        """
        Relative link from this page to a directory given relative to the
        site root. '..' reaches the directory holding the site.
        """
        parts = [".."] * self.depth + list(PurePosixPath(target).parts)
        return "/".join(parts) or "."

    def child(self, name: Union[str, int]) -> "PageLocation":
        return PageLocation(self.parts + (str(name),))

    def file_path(self, site_root: Path) -> Path:
        return site_root.joinpath(*self.parts, PAGE_FILE)


ROOT = PageLocation()


def render_breadcrumb(site_name: str, location: PageLocation) -> str:
    """
    Render the heading trail from the site's parent directory to a page.

    Every element but the last one links to its own page.
    """
    crumbs = [(".", "..")]
    crumbs.append((site_name, "."))
    for i, part in enumerate(location.parts):
        crumbs.append((part, "/".join(location.parts[: i + 1])))

    lines = ["<h1>"]
    last = len(crumbs) - 1
    for i, (text, target) in enumerate(crumbs):
        text = html.escape(text)
        if i == last:
            lines.append(text if location.parts else f"{text}/")
        else:
            lines.append(f'<a href="{html.escape(location.href_to(target))}">{text}</a>/')
    lines.append("</h1>")
    return "\n".join(lines) + "\n"


def render_reference(resolved: ResolvedReference, location: PageLocation) -> str:
    """Render a link to a referenced record."""
    href = location.href_to(resolved.target)
    return f'<a href="{href}">{html.escape(resolved.label)}</a>'


def render_root_index(site_name: str, config: IndexerConfig = DEFAULT_CONFIG) -> str:
    """Render the site root page linking to both tables."""
    return (
        config.style
        + render_breadcrumb(site_name, ROOT)
        + "<ul>\n"
        + '<li><a href="imports">imports</a></li>\n'
        + '<li><a href="exports">exports</a></li>\n'
        + "</ul>\n"
    )


def render_listing(
    site_name: str,
    table: str,
    records: Sequence[Record],
    config: IndexerConfig = DEFAULT_CONFIG,
) -> str:
    """Render a table listing: one link per record, in native order."""
    items = [
        f'<li><a href="{i}">{i} ({html.escape(record.name)})</a></li>\n'
        for i, record in enumerate(records, start=1)
    ]
    return (
        config.style
        + render_breadcrumb(site_name, ROOT.child(table))
        + "<ul>\n"
        + "".join(items)
        + "</ul>\n"
    )


def render_detail_page(
    record: Record,
    position: int,
    graph: ObjectGraph,
    site_name: str,
    config: IndexerConfig = DEFAULT_CONFIG,
) -> str:
    """
    Render the page of one record with its dump cross-linked.

    Every index reference in the dump becomes a link to the referenced
    record's page, labelled with the index and the record name.

    Raises:
        ReferenceContractError: If the dump holds an index that does not
            resolve against the graph.
    """
    location = ROOT.child(record.table).child(position)

    def link(index: int) -> str:
        return render_reference(resolve_index(index, graph), location)

    dump = html.escape(record.rendered_text, quote=False)
    dump = transform_indices(dump, link, config.index_pattern)
    return (
        config.style
        + render_breadcrumb(site_name, location)
        + DUMP_OPEN
        + dump
        + DUMP_CLOSE
        + "\n"
    )


def write_page(path: Path, content: str) -> Path:
    """
    Write one page as UTF-8.

    Raises:
        PageWriteError: If the file cannot be written.
    """
    try:
        with path.open("w", encoding="utf-8", newline="\n") as f:
            f.write(content)
    except OSError as e:
        raise PageWriteError(path, e) from e
    return path
