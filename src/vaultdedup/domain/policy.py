"""Equivalence policy consumed by the deduplication core."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Final

from vaultdedup.config.errors import InvalidPolicyError
from vaultdedup.domain.paths import FieldPath, parse_path

if TYPE_CHECKING:
    from collections.abc import Iterable

DEFAULT_POLICY_KEYS: Final[tuple[str, ...]] = ("domain", "username", "password")
DEFAULT_IGNORE_KEYS: Final[tuple[str, ...]] = (
    "id",
    "revisionDate",
    "creationDate",
    "passwordHistory",
)


class KeepStrategy(StrEnum):
    """Which member of a duplicate group survives."""

    FIRST = "first"
    LAST = "last"
    NEWEST = "newest"
    OLDEST = "oldest"

    @classmethod
    def parse(cls, value: object) -> KeepStrategy:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        choices = ", ".join(member.value for member in cls)
        raise InvalidPolicyError(f"Unknown keep strategy {value!r} (expected one of: {choices})")


@dataclass(frozen=True, slots=True, kw_only=True)
class Policy:
    """Resolved options for one deduplication run.

    An empty ``policy_keys`` selects full-item mode: the whole canonicalized
    item is fingerprinted. Otherwise only the named keys contribute, in order.
    """

    keep: KeepStrategy = KeepStrategy.FIRST
    policy_keys: tuple[str, ...] = DEFAULT_POLICY_KEYS
    ignore_keys: frozenset[str] = field(default_factory=lambda: frozenset(DEFAULT_IGNORE_KEYS))
    ignore_paths: frozenset[FieldPath] = field(default_factory=frozenset[FieldPath])
    trim_strings: bool = False
    lowercase_strings: bool = False
    sort_uris: bool = True

    @classmethod
    def build(
        cls,
        *,
        keep: object = KeepStrategy.FIRST,
        policy_keys: Iterable[str] = DEFAULT_POLICY_KEYS,
        ignore_keys: Iterable[str] = DEFAULT_IGNORE_KEYS,
        ignore_paths: Iterable[str] = (),
        trim_strings: bool = False,
        lowercase_strings: bool = False,
        sort_uris: bool = True,
    ) -> Policy:
        """Normalise loosely-typed option values into a validated policy."""

        policy = cls(
            keep=KeepStrategy.parse(keep),
            policy_keys=_ordered_unique(key.strip() for key in policy_keys if key.strip()),
            ignore_keys=frozenset(key for key in ignore_keys if key),
            ignore_paths=frozenset(
                parsed for parsed in (parse_path(path) for path in ignore_paths) if parsed
            ),
            trim_strings=trim_strings,
            lowercase_strings=lowercase_strings,
            sort_uris=sort_uris,
        )
        policy.validate()
        return policy

    @property
    def full_item_mode(self) -> bool:
        return not self.policy_keys

    def validate(self) -> None:
        """Raise ``InvalidPolicyError`` if any option is malformed."""

        if not isinstance(self.keep, KeepStrategy):
            raise InvalidPolicyError(f"Unknown keep strategy {self.keep!r}")
        for key in self.policy_keys:
            if not isinstance(key, str) or not key.strip():
                raise InvalidPolicyError(f"Invalid policy key: {key!r}")
        for name in self.ignore_keys:
            if not isinstance(name, str):
                raise InvalidPolicyError(f"Invalid ignore key: {name!r}")
        for path in self.ignore_paths:
            if not path or not all(isinstance(segment, str) and segment for segment in path):
                raise InvalidPolicyError(f"Invalid ignore path: {path!r}")


def _ordered_unique(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


__all__ = ["DEFAULT_IGNORE_KEYS", "DEFAULT_POLICY_KEYS", "KeepStrategy", "Policy"]
