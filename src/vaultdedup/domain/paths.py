"""Dotted field paths over decoded JSON trees.

A path such as ``login.uris`` addresses nested object members. Only objects are
traversed: arrays are treated as leaves, so numeric-looking segments never
index into lists. Resolution never raises; a missing member yields ``ABSENT``,
which is distinct from a present ``null``.
"""

from __future__ import annotations

from enum import Enum
from typing import Final

type JsonValue = dict[str, JsonValue] | list[JsonValue] | str | int | float | bool | None
type FieldPath = tuple[str, ...]


class _Absent(Enum):
    ABSENT = "absent"

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: Final = _Absent.ABSENT
type Resolved = JsonValue | _Absent


def parse_path(path: str) -> FieldPath:
    """Split ``path`` on dots, dropping empty segments."""

    return tuple(segment for segment in path.split(".") if segment)


def resolve(value: JsonValue, path: FieldPath | str) -> Resolved:
    """Return the value at ``path`` inside ``value`` or ``ABSENT``."""

    segments = parse_path(path) if isinstance(path, str) else path
    current: JsonValue = value
    for segment in segments:
        if not isinstance(current, dict) or segment not in current:
            return ABSENT
        current = current[segment]
    return current


__all__ = ["ABSENT", "FieldPath", "JsonValue", "Resolved", "parse_path", "resolve"]
