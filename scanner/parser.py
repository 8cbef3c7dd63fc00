"""Graph provider reading serialized asset package dumps."""

import json
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional

import yaml

from graph.dump import render_debug
from graph.model import ObjectGraph
from .config import DEFAULT_CONFIG, IndexerConfig
from .errors import ProviderError


# A provider turns one source file into its object graph.
GraphProvider = Callable[[Path], ObjectGraph]

NAME_KEYS = ("ObjectName", "object_name", "name")
EXPORT_KEYS = ("Exports", "exports")
IMPORT_KEYS = ("Imports", "imports")


def parse_file(file_path: Path) -> Any:
    """
    Parse a serialized dump and return its contents.

    JSON is tried first, then YAML.

    Args:
        file_path: Path to the file to parse.

    Returns:
        Parsed data structure.

    Raises:
        ProviderError: If the file cannot be read or parsed.
    """
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ProviderError(file_path, str(e)) from e

    try:
        return json.loads(content)
    except json.JSONDecodeError:
        pass

    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ProviderError(file_path, f"not a JSON or YAML document ({e})") from e


def record_name(entry: Mapping, source: Path) -> str:
    """Get the object name of one table entry."""
    for key in NAME_KEYS:
        if key in entry:
            return str(entry[key])
    raise ProviderError(source, f"record has none of the name fields {', '.join(NAME_KEYS)}")


def _get_table(data: Mapping, keys, source: Path) -> List[Mapping]:
    for key in keys:
        if key in data:
            table = data[key]
            break
    else:
        return []
    if table is None:
        return []
    if not isinstance(table, list):
        raise ProviderError(source, f"'{keys[0]}' must be a list")
    for entry in table:
        if not isinstance(entry, Mapping):
            raise ProviderError(source, f"every entry of '{keys[0]}' must be a mapping")
    return table


def _load_companion(path: Path, export_count: int) -> Optional[List[Mapping]]:
    if not path.is_file():
        return None

    data = parse_file(path)
    if isinstance(data, Mapping):
        bodies = _get_table(data, EXPORT_KEYS, path)
    elif isinstance(data, list):
        bodies = data
    else:
        raise ProviderError(path, "expected a list of export bodies")

    if len(bodies) != export_count:
        raise ProviderError(
            path, f"has {len(bodies)} export bodies but the package has {export_count} exports"
        )
    for body in bodies:
        if body is not None and not isinstance(body, Mapping):
            raise ProviderError(path, "every export body must be a mapping")
    return bodies


class AssetDumpProvider:
    """
    Build object graphs from serialized asset packages.

    The primary file holds the import and export tables. A companion file
    with the same stem, when present, holds the export bodies, which are
    merged into their exports by position.
    """

    def __init__(self, config: IndexerConfig = DEFAULT_CONFIG):
        self.config = config

    def __call__(self, path: Path) -> ObjectGraph:
        data = parse_file(path)
        if not isinstance(data, Mapping):
            raise ProviderError(path, "expected a mapping with 'Imports' and 'Exports'")

        imports = _get_table(data, IMPORT_KEYS, path)
        exports = _get_table(data, EXPORT_KEYS, path)

        companion = path.with_suffix(self.config.companion_extension)
        bodies = _load_companion(companion, len(exports))
        if bodies is not None:
            exports = [{**export, **(body or {})} for export, body in zip(exports, bodies)]

        graph = ObjectGraph()
        for entry in exports:
            graph.add_export(record_name(entry, path), render_debug(entry, "Export"))
        for entry in imports:
            graph.add_import(record_name(entry, path), render_debug(entry, "Import"))
        return graph
