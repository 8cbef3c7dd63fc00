"""Indexer settings shared by every component of one run."""

import re
from dataclasses import dataclass, field
from typing import FrozenSet


DEFAULT_EXTENSIONS = frozenset({".uasset", ".umap"})
COMPANION_EXTENSION = ".uexp"
INDEX_MARKER = "index: "
GLOBAL_STYLE = "<style>a{text-decoration:none}a:visited{color:darkmagenta}</style>"


def compile_index_pattern(marker: str) -> re.Pattern:
    """
    Compile the pattern matching an index reference after a marker.

    Group 1 is the marker, group 2 the signed integer. The integer never
    starts with zero, and a marker directly preceded by an underscore
    (``_index: 1``) is not a reference.
    """
    return re.compile(r"(?<!_)(" + re.escape(marker) + r")(-?[1-9][0-9]*)")


INDEX_PATTERN = compile_index_pattern(INDEX_MARKER)


@dataclass(frozen=True)
class IndexerConfig:
    """
    Settings for scanning and site generation.

    Attributes:
        extensions: Source file suffixes to index (case-sensitive, with dot).
        companion_extension: Suffix of the optional file merged into the
            primary file's graph.
        marker: Literal label preceding every index reference in a dump.
        style: Style sheet written at the top of every page.
    """

    extensions: FrozenSet[str] = DEFAULT_EXTENSIONS
    companion_extension: str = COMPANION_EXTENSION
    marker: str = INDEX_MARKER
    style: str = GLOBAL_STYLE
    index_pattern: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        pattern = INDEX_PATTERN if self.marker == INDEX_MARKER else compile_index_pattern(self.marker)
        object.__setattr__(self, "index_pattern", pattern)

    def is_supported(self, suffix: str) -> bool:
        """Check if a file suffix is one of the indexed extensions."""
        return suffix in self.extensions

    def describe_extensions(self) -> str:
        """Return the indexed extensions as a readable list."""
        return ", ".join(f"'{ext.lstrip('.')}'" for ext in sorted(self.extensions))


DEFAULT_CONFIG = IndexerConfig()
