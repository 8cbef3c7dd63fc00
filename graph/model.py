"""Object graph model for the exports and imports of one asset package."""

from dataclasses import dataclass
from typing import ClassVar, Iterator, List, Tuple


@dataclass(frozen=True)
class Record:
    """
    One entry of an asset package's export or import table.

    Attributes:
        name: The object name shown in listings and reference labels.
        rendered_text: The full debug dump of the record, possibly containing
            embedded index references.
    """

    table: ClassVar[str] = ""

    name: str
    rendered_text: str


@dataclass(frozen=True)
class Export(Record):
    """An object owned by the package itself (positive index)."""

    table: ClassVar[str] = "exports"


@dataclass(frozen=True)
class Import(Record):
    """An object referenced from another package (negative index)."""

    table: ClassVar[str] = "imports"


class ObjectGraph:
    """
    The export and import tables of one asset package.

    Both tables keep their native order. Records are addressed externally by
    1-based positions: a positive index names an export, a negative index
    names an import.
    """

    def __init__(self):
        self._exports: List[Export] = []
        self._imports: List[Import] = []

    @property
    def exports(self) -> Tuple[Export, ...]:
        """Return the export table in native order."""
        return tuple(self._exports)

    @property
    def imports(self) -> Tuple[Import, ...]:
        """Return the import table in native order."""
        return tuple(self._imports)

    @property
    def export_count(self) -> int:
        """Return the number of exports."""
        return len(self._exports)

    @property
    def import_count(self) -> int:
        """Return the number of imports."""
        return len(self._imports)

    def add_export(self, name: str, rendered_text: str) -> int:
        """Append an export and return its 1-based position."""
        self._exports.append(Export(name=name, rendered_text=rendered_text))
        return len(self._exports)

    def add_import(self, name: str, rendered_text: str) -> int:
        """Append an import and return its 1-based position."""
        self._imports.append(Import(name=name, rendered_text=rendered_text))
        return len(self._imports)

    def get_export(self, position: int) -> Export:
        """
        Get the export at a 1-based position.

        Raises:
            IndexError: If the position is outside the export table.
        """
        if not 1 <= position <= len(self._exports):
            raise IndexError(f"export position {position} out of range 1..{len(self._exports)}")
        return self._exports[position - 1]

    def get_import(self, position: int) -> Import:
        """
        Get the import at a 1-based position.

        Raises:
            IndexError: If the position is outside the import table.
        """
        if not 1 <= position <= len(self._imports):
            raise IndexError(f"import position {position} out of range 1..{len(self._imports)}")
        return self._imports[position - 1]

    def iter_exports(self) -> Iterator[Tuple[int, Export]]:
        """Iterate over exports as (position, record) tuples."""
        for i, export in enumerate(self._exports):
            yield i + 1, export

    def iter_imports(self) -> Iterator[Tuple[int, Import]]:
        """Iterate over imports as (position, record) tuples."""
        for i, import_ in enumerate(self._imports):
            yield i + 1, import_

    def __len__(self) -> int:
        """Return the total number of records in both tables."""
        return len(self._exports) + len(self._imports)

    def __repr__(self) -> str:
        return f"ObjectGraph(exports={len(self._exports)}, imports={len(self._imports)})"
