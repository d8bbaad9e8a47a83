"""Dataset and report writer."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from mhrdata.domain.reconciliation import ReconciliationResult

log = logging.getLogger(__name__)


def dataset_path(directory: Path, result: ReconciliationResult) -> Path:
    return directory / f"{result.kind}.json"


def report_path(directory: Path, result: ReconciliationResult) -> Path:
    return directory / f"{result.kind}.report.json"


def write_result(result: ReconciliationResult, directory: Path) -> tuple[Path, Path]:
    """Write ``<kind>.json`` and ``<kind>.report.json``; existing files are replaced."""

    directory.mkdir(parents=True, exist_ok=True)
    dataset = dataset_path(directory, result)
    report = report_path(directory, result)
    _write_json(dataset, result.payloads())
    _write_json(report, result.report())
    log.info("Wrote %s %s entities to %s", len(result.entities), result.kind, dataset)
    return dataset, report


def _write_json(path: Path, payload: object) -> None:
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=4, ensure_ascii=False)
        handle.write("\n")
