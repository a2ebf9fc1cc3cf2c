"""Canonical views of vault items used as fingerprint input.

Canonicalization is a read-only projection: the input item is never mutated and
the canonical tree is never emitted. One recursive descent applies every rule,
carrying the dotted path of the current member so that name-based and
path-based ignores are decided together:

- members whose key is in ``ignore_keys`` are dropped at any depth
- members whose path is in ``ignore_paths`` are dropped (parents stay, even if empty)
- string leaves are trimmed, then lowercased, when the policy asks for it
- the ``login.uris`` list is ordered by URI when ``sort_uris`` is set

Paths stop at arrays: members of objects nested inside a list have no path and
can only be dropped by name.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from vaultdedup.domain.paths import FieldPath, JsonValue
    from vaultdedup.domain.policy import Policy

LOGIN_URIS_PATH: Final[tuple[str, ...]] = ("login", "uris")


def canonical_json(value: JsonValue) -> str:
    """Serialise ``value`` with sorted keys and no insignificant whitespace."""

    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def canonicalize(item: JsonValue, policy: Policy) -> JsonValue:
    """Return the normalized structural value of ``item`` under ``policy``."""

    return _Canonicalizer(policy).walk(item, ())


def uri_sort_key(entry: JsonValue) -> tuple[str, str]:
    """Order ``login.uris`` entries by URI, then by their full rendering."""

    rendered = canonical_json(entry)
    if isinstance(entry, dict):
        uri = entry.get("uri")
        return (uri if isinstance(uri, str) else "", rendered)
    if isinstance(entry, str):
        return (entry, rendered)
    return (rendered, rendered)


@dataclass(frozen=True, slots=True)
class _Canonicalizer:
    policy: Policy

    def walk(self, value: JsonValue, path: FieldPath | None) -> JsonValue:
        if isinstance(value, dict):
            return self._walk_object(value, path)
        if isinstance(value, list):
            elements = [self.walk(element, None) for element in value]
            if self.policy.sort_uris and path == LOGIN_URIS_PATH:
                elements.sort(key=uri_sort_key)
            return elements
        if isinstance(value, str):
            return self._normalize_string(value)
        return value

    def _walk_object(self, value: dict[str, JsonValue], path: FieldPath | None) -> JsonValue:
        canonical: dict[str, JsonValue] = {}
        for key, child in value.items():
            if key in self.policy.ignore_keys:
                continue
            child_path = None if path is None else (*path, key)
            if child_path is not None and child_path in self.policy.ignore_paths:
                continue
            canonical[key] = self.walk(child, child_path)
        return canonical

    def _normalize_string(self, value: str) -> str:
        if self.policy.trim_strings:
            value = value.strip()
        if self.policy.lowercase_strings:
            value = value.lower()
        return value


__all__ = ["LOGIN_URIS_PATH", "canonical_json", "canonicalize", "uri_sort_key"]
