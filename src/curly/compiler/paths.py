"""Path model - dotted addresses into the render data.

A path is a dot separated string of segments relative to the data root.
"" and "." both mean "here". Resolution treats falsy scalars as absent:
{"a": {"b": 0}} resolves "a.b" to None, exactly like a missing key. Empty
lists and mappings are still present.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Iterator, Optional

CURRENT = "."
SEPARATOR = "."


def add_to_path(path: Any, part: Any) -> str:
    """Compose `path` with one more `part`.

    >>> add_to_path("", "")
    '.'
    >>> add_to_path("foo", ".")
    'foo'
    >>> add_to_path("foo", "bar")
    'foo.bar'
    """
    path = str(path)
    part = str(part)
    if path == "" and part == "":
        return CURRENT
    if part == CURRENT or part == "":
        return path
    return f"{path}{SEPARATOR}{part}" if path else part


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _lookup(value: Any, segment: str) -> Any:
    if isinstance(value, Mapping):
        if segment in value:
            return value[segment]
        if segment.isdecimal():
            return value.get(int(segment))
        return None

    if _is_sequence(value):
        if not segment.isdecimal():
            return None
        index = int(segment)
        return value[index] if index < len(value) else None

    if isinstance(value, (str, bytes, bytearray)) or segment.startswith("_"):
        return None
    return getattr(value, segment, None)


def is_absent(value: Any) -> bool:
    """None, False, numeric zero, NaN and "" count as absent; empty containers do not."""
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or value != value
    return isinstance(value, str) and value == ""


def resolve(data: Any, path: str) -> Optional[Any]:
    """Return the value at `path`, or None when it is absent or falsy."""
    if path == "" or path == CURRENT:
        return data

    value = data
    for segment in path.split(SEPARATOR):
        value = _lookup(value, segment)
        if is_absent(value):
            return None
    return value


def iter_entries(value: Any) -> Iterator[str]:
    """Yield the path segment of every entry of a collection.

    Lists and tuples yield their indices, mappings their keys in insertion
    order. Anything else has no entries.
    """
    if not value:
        return
    if _is_sequence(value):
        for index in range(len(value)):
            yield str(index)
    elif isinstance(value, Mapping):
        for key in value:
            yield str(key)


def to_text(value: Any) -> str:
    """Textual form of a resolved value; None renders as nothing."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(item) for item in value)
    return str(value)
