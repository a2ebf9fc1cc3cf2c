"""Pydantic model describing the Bitwarden JSON export envelope."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class ExportEnvelope(BaseModel):
    """Top level of an unencrypted export.

    Only ``items`` is inspected; folders, collections and any other members are
    carried through untouched. Items themselves are not validated.
    """

    model_config = ConfigDict(extra="allow")

    encrypted: bool = False
    items: list[Any]
