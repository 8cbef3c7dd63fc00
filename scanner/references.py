"""Locating and rewriting index references inside record dumps."""

import re
from typing import Callable, List

from .config import INDEX_PATTERN


def transform_indices(
    text: str,
    transform: Callable[[int], str],
    pattern: re.Pattern = INDEX_PATTERN,
) -> str:
    """
    Rewrite the numeric part of every index reference in a text.

    Matches are found left to right without overlap. The marker and all text
    outside the matched numbers are copied unchanged.

    Args:
        text: The text to scan.
        transform: Called with each parsed (nonzero) index; its result
            replaces the digits.
        pattern: Compiled reference pattern (see ``compile_index_pattern``).

    Returns:
        The rewritten text, identical to the input if nothing matched.
    """
    return pattern.sub(lambda m: m.group(1) + transform(int(m.group(2))), text)


def find_indices(text: str, pattern: re.Pattern = INDEX_PATTERN) -> List[int]:
    """Return every index reference in a text, in order of appearance."""
    return [int(m.group(2)) for m in pattern.finditer(text)]
