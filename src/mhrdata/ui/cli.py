from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from mhrdata.app import build_dataset, scrape_kind
from mhrdata.common import configure_logging
from mhrdata.domain.model import EntityKind

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

_ALL_KINDS = "all"


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build the multilingual Monster Hunter Rise dataset"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug output",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    kind_choices = [*(str(kind) for kind in EntityKind), _ALL_KINDS]

    scrape = subparsers.add_parser("scrape", help="Fetch every source and save raw snapshots")
    scrape.add_argument(
        "--kind",
        choices=kind_choices,
        default=_ALL_KINDS,
        help="Entity kind to scrape (default: %(default)s)",
    )

    build = subparsers.add_parser("build", help="Reconcile and write the dataset")
    build.add_argument(
        "--kind",
        choices=kind_choices,
        default=_ALL_KINDS,
        help="Entity kind to build (default: %(default)s)",
    )
    build.add_argument(
        "--offline",
        action="store_true",
        help="Reconcile from the last saved snapshot instead of fetching",
    )
    build.add_argument(
        "--check-alignment",
        action="store_true",
        help="Abort when languages disagree on the non-name values of a row",
    )

    return parser.parse_args(list(argv))


def _selected_kinds(value: str) -> list[EntityKind]:
    if value == _ALL_KINDS:
        return list(EntityKind)
    return [EntityKind(value)]


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    # argparse exits with status 2 on invalid arguments
    parsed_args = _parse_args(args_list)
    configure_logging(verbose=parsed_args.verbose)
    kinds = _selected_kinds(parsed_args.kind)

    try:
        for kind in kinds:
            if parsed_args.command == "scrape":
                scrape_kind(kind)
            elif parsed_args.command == "build":
                build = build_dataset(
                    kind,
                    offline=parsed_args.offline,
                    check_alignment=parsed_args.check_alignment,
                )
                log.info(
                    "Build finished: kind=%s, emitted=%s, unresolved=%s, output=%s",
                    kind,
                    len(build.result.entities),
                    len(build.result.unresolved),
                    build.dataset_path,
                )
            else:
                raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
