"""Resolution of signed index references to export and import records."""

from dataclasses import dataclass
from pathlib import PurePosixPath

from graph.model import Export, Import, ObjectGraph
from .errors import IndexOutOfRangeError, ZeroIndexError


@dataclass(frozen=True)
class ResolvedReference:
    """
    A record named by a signed index.

    Attributes:
        index: The index as written in the dump.
        table: Directory name of the table ('exports' or 'imports').
        position: 1-based position within that table.
        name: Name of the referenced record.
    """

    index: int
    table: str
    position: int
    name: str

    @property
    def target(self) -> PurePosixPath:
        """Path of the record's page directory relative to the site root."""
        return PurePosixPath(self.table, str(self.position))

    @property
    def label(self) -> str:
        """Visible text of a link to the record."""
        return f"{self.index} ({self.name})"


def resolve_index(index: int, graph: ObjectGraph) -> ResolvedReference:
    """
    Resolve a signed index against a graph.

    A positive index names the export at ``index - 1``, a negative one the
    import at ``-index - 1``.

    Raises:
        ZeroIndexError: If index is 0.
        IndexOutOfRangeError: If the magnitude exceeds the table length.
    """
    if index == 0:
        raise ZeroIndexError()

    if index > 0:
        table, position, size = Export.table, index, graph.export_count
        if position > size:
            raise IndexOutOfRangeError(index, table, size)
        name = graph.get_export(position).name
    else:
        table, position, size = Import.table, -index, graph.import_count
        if position > size:
            raise IndexOutOfRangeError(index, table, size)
        name = graph.get_import(position).name

    return ResolvedReference(index=index, table=table, position=position, name=name)
