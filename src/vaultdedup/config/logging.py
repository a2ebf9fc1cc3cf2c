"""Logging setup for the vaultdedup command line."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Send log records to stderr, at DEBUG for ``--verbose`` and INFO otherwise.

    Per-group duplicate decisions and skipped timestamps are only logged at
    DEBUG; the run summary and written paths are INFO.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        force=force,
    )
