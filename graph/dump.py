"""Indented debug dumps of record fields."""

import dataclasses
import json
from typing import Any, List, Mapping, Optional


INDENT = "    "
TYPE_KEY = "$type"


def render_debug(value: Any, type_name: Optional[str] = None) -> str:
    """
    Render a value as an indented, struct-style debug dump.

    Mappings and dataclasses render as ``TypeName {`` blocks with one
    ``field: value,`` line per entry, sequences as ``[`` blocks, and scalars
    as JSON literals. A nested ``{"index": -2}`` therefore renders as
    ``index: -2``.

    Args:
        value: The value to render.
        type_name: Optional name printed before the outermost block. A
            ``$type`` entry of a mapping takes precedence over it.

    Returns:
        The dump as text.
    """
    lines: List[str] = []
    _render(value, lines, "", type_name)
    return "".join(lines)


def short_type_name(qualified: str) -> str:
    """Reduce 'Namespace.Type, Assembly' to 'Type'."""
    return qualified.split(",", 1)[0].strip().rsplit(".", 1)[-1]


def _render(value: Any, out: List[str], indent: str, type_name: Optional[str] = None) -> None:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        fields = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        _render_mapping(fields, out, indent, type(value).__name__)
    elif isinstance(value, Mapping):
        if TYPE_KEY in value:
            type_name = short_type_name(str(value[TYPE_KEY]))
            value = {k: v for k, v in value.items() if k != TYPE_KEY}
        _render_mapping(value, out, indent, type_name)
    elif isinstance(value, (list, tuple)):
        _render_sequence(value, out, indent)
    else:
        out.append(_scalar(value))


def _render_mapping(value: Mapping, out: List[str], indent: str, type_name: Optional[str]) -> None:
    prefix = f"{type_name} " if type_name else ""
    if not value:
        out.append(type_name if type_name else "{}")
        return
    out.append(prefix + "{\n")
    inner = indent + INDENT
    for key, item in value.items():
        label = key if isinstance(key, str) else _scalar(key)
        out.append(f"{inner}{label}: ")
        _render(item, out, inner)
        out.append(",\n")
    out.append(indent + "}")


def _render_sequence(value, out: List[str], indent: str) -> None:
    if not value:
        out.append("[]")
        return
    out.append("[\n")
    inner = indent + INDENT
    for item in value:
        out.append(inner)
        _render(item, out, inner)
        out.append(",\n")
    out.append(indent + "]")


def _scalar(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)
