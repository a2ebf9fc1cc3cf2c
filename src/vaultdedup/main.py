from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from vaultdedup import __version__
from vaultdedup.app import dedupe_export
from vaultdedup.config import ConfigurationError, configure_logging
from vaultdedup.config.settings import CliOverrides, resolve_settings
from vaultdedup.domain import KeepStrategy

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _comma_list(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="vaultdedup",
        description="Deduplicate Bitwarden JSON exports",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-i",
        "--input",
        type=Path,
        required=True,
        metavar="FILE",
        help="Bitwarden JSON export file",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file (defaults to <input>.dedup.json)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite the output file if it exists",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be removed without writing output",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Write pretty-printed JSON",
    )
    parser.add_argument(
        "--keep",
        choices=[strategy.value for strategy in KeepStrategy],
        help="Keep strategy when duplicates are found (default: first)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        metavar="FILE",
        help="Config file (TOML); defaults to $VAULTDEDUP_CONFIG or ./config.toml",
    )
    parser.add_argument(
        "--ignore-key",
        type=_comma_list,
        action="extend",
        metavar="KEYS",
        help="Ignore any keys with these names, anywhere in the item",
    )
    parser.add_argument(
        "--ignore-path",
        type=_comma_list,
        action="extend",
        metavar="PATHS",
        help="Ignore specific paths (dot-separated), relative to each item",
    )
    parser.add_argument(
        "--trim-strings",
        action="store_true",
        help="Trim whitespace from all string values before hashing",
    )
    parser.add_argument(
        "--lowercase-strings",
        action="store_true",
        help="Lowercase all string values before hashing",
    )
    parser.add_argument(
        "--sort-uris",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Sort login.uris entries by URI before hashing (default: on)",
    )
    parser.add_argument(
        "--policy-key",
        type=_comma_list,
        action="extend",
        metavar="KEYS",
        help=(
            "Deduplication keys: domain, username, password, name, uri, totp or dotted "
            'paths. Pass "" to hash whole items. Overrides config.'
        ),
    )
    parser.add_argument(
        "--report",
        type=Path,
        metavar="FILE",
        help="Write a JSON report of the duplicate groups",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(list(argv))


def _overrides_from_args(args: argparse.Namespace) -> CliOverrides:
    return CliOverrides(
        keep=args.keep,
        policy_keys=args.policy_key,
        ignore_keys=args.ignore_key,
        ignore_paths=args.ignore_path,
        trim_strings=args.trim_strings,
        lowercase_strings=args.lowercase_strings,
        sort_uris=args.sort_uris,
        pretty=args.pretty,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(verbose=parsed_args.verbose)

    try:
        settings = resolve_settings(
            _overrides_from_args(parsed_args),
            config_path=parsed_args.config,
        )
        dedupe_export(
            parsed_args.input,
            settings=settings,
            output_path=parsed_args.output,
            report_path=parsed_args.report,
            force=parsed_args.force,
            dry_run=parsed_args.dry_run,
        )
    except ConfigurationError as exc:
        log.error("Error: %s", exc)  # noqa: TRY400
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during deduplication")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
