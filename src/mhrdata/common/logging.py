"""Shared logging helpers for the CLI."""

from __future__ import annotations

import logging
from typing import Final

# Loggers that emit one record per HTTP request.
_HTTP_LOGGERS: Final[tuple[str, ...]] = ("httpx", "httpcore", "hishel")


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Configure the root logger for a scrape or build run.

    ``verbose`` lowers every logger to DEBUG, HTTP client libraries included.
    Otherwise the run logs stage summaries at INFO and the HTTP libraries only
    report warnings. Pass ``force=True`` to reconfigure an already configured root
    logger, as tests do.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    http_level = logging.DEBUG if verbose else logging.WARNING
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
