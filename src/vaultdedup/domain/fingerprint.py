"""Stable identity fingerprints for vault items.

Two modes exist. With an empty ``policy_keys`` the whole canonical item is
digested. Otherwise each policy key is resolved against the canonical item and
the ordered ``(key, value)`` tuple is digested; a key that does not resolve is
encoded without a value, so "absent" never collides with ``null`` or ``""``.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Final

from vaultdedup.domain.canonicalization import LOGIN_URIS_PATH, canonical_json, canonicalize
from vaultdedup.domain.paths import ABSENT, parse_path, resolve

if TYPE_CHECKING:
    from vaultdedup.domain.paths import JsonValue, Resolved
    from vaultdedup.domain.policy import Policy

type Fingerprint = str
type KeyResolver = Callable[[JsonValue], Resolved]


def uri_strings(item: JsonValue) -> Resolved:
    """Return the URI strings of ``login.uris`` in list order."""

    entries = resolve(item, LOGIN_URIS_PATH)
    if not isinstance(entries, list):
        return ABSENT
    uris: list[JsonValue] = []
    for entry in entries:
        if isinstance(entry, dict):
            uri = entry.get("uri")
            if isinstance(uri, str):
                uris.append(uri)
        elif isinstance(entry, str):
            uris.append(entry)
    return uris


def extract_host(uri: str) -> str | None:
    """Return the host part of ``uri`` without scheme, path, userinfo or port."""

    _, separator, remainder = uri.partition("://")
    authority = (remainder if separator else uri).split("/", 1)[0]
    host = authority.rsplit("@", 1)[-1].split(":", 1)[0]
    return host or None


def domains(item: JsonValue) -> Resolved:
    uris = uri_strings(item)
    if not isinstance(uris, list):
        return ABSENT
    hosts = {extract_host(uri) or uri for uri in uris if isinstance(uri, str)}
    return sorted(hosts)


DERIVED_KEYS: Final[Mapping[str, KeyResolver]] = {
    "domain": domains,
    "uri": uri_strings,
    "username": partial(resolve, path=("login", "username")),
    "password": partial(resolve, path=("login", "password")),
    "totp": partial(resolve, path=("login", "totp")),
    "name": partial(resolve, path=("name",)),
}


def resolve_policy_key(canonical: JsonValue, key: str) -> Resolved:
    """Resolve a named derived key, or otherwise a dotted path."""

    resolver = DERIVED_KEYS.get(key)
    if resolver is not None:
        return resolver(canonical)
    return resolve(canonical, parse_path(key))


def digest(value: JsonValue) -> Fingerprint:
    # Lone surrogates are valid in decoded JSON strings but not in UTF-8.
    encoded = canonical_json(value).encode("utf-8", errors="surrogatepass")
    return hashlib.sha256(encoded).hexdigest()


@dataclass(frozen=True, slots=True)
class FingerprintComputer:
    """Compute fingerprints for items under one policy."""

    policy: Policy

    def __call__(self, item: JsonValue) -> Fingerprint:
        canonical = canonicalize(item, self.policy)
        if self.policy.full_item_mode:
            return digest(canonical)
        return digest(self.policy_tuple(canonical))

    def policy_tuple(self, canonical: JsonValue) -> JsonValue:
        """Return the ordered key/value pairs digested in policy-key mode."""

        pairs: list[JsonValue] = []
        for key in self.policy.policy_keys:
            value = resolve_policy_key(canonical, key)
            pairs.append([key] if value is ABSENT else [key, value])
        return pairs


def fingerprint(item: JsonValue, policy: Policy) -> Fingerprint:
    return FingerprintComputer(policy)(item)


__all__ = [
    "DERIVED_KEYS",
    "Fingerprint",
    "FingerprintComputer",
    "digest",
    "domains",
    "extract_host",
    "fingerprint",
    "resolve_policy_key",
    "uri_strings",
]
