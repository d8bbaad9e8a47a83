"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

from mhrdata.adapters.inven import InvenFetcher
from mhrdata.adapters.kiranico import KiranicoFetcher
from mhrdata.adapters.output import write_result
from mhrdata.adapters.overrides import load_overrides
from mhrdata.adapters.snapshot import load_secondary, load_store, save_secondary, save_store
from mhrdata.config import get_scrape_config, get_storage_config
from mhrdata.domain.model import EntityKind, RawRecord, SecondaryRecord
from mhrdata.domain.reconciliation import RecordStore, ReconciliationEngine

if TYPE_CHECKING:
    from pathlib import Path

    from mhrdata.config import ScrapeConfig, StorageConfig
    from mhrdata.domain.reconciliation import ReconciliationResult

StoreFetcher = Callable[[EntityKind], RecordStore[RawRecord]]
SecondaryFetcher = Callable[[], list[SecondaryRecord]]

# Only armor has cross-source attributes (part and sex type).
SECONDARY_KINDS: Final[frozenset[EntityKind]] = frozenset({EntityKind.ARMOR})

log = getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class ScrapeResult:
    kind: EntityKind
    store: RecordStore[RawRecord]
    secondary: list[SecondaryRecord] | None
    snapshot_files: list[Path]


@dataclass(slots=True, kw_only=True)
class BuildResult:
    result: ReconciliationResult
    dataset_path: Path
    report_path: Path


def scrape_kind(
    kind: EntityKind,
    *,
    fetcher: StoreFetcher | None = None,
    secondary_fetcher: SecondaryFetcher | None = None,
    scrape_config: ScrapeConfig | None = None,
    storage_config: StorageConfig | None = None,
) -> ScrapeResult:
    """Fetch every source for ``kind`` and save the raw snapshot."""

    config = scrape_config or get_scrape_config()
    storage = storage_config or get_storage_config()
    store, secondary = _fetch(kind, config, fetcher, secondary_fetcher)

    snapshot_root = storage.snapshot_path()
    written = save_store(store, snapshot_root)
    if secondary is not None:
        written.append(save_secondary(secondary, snapshot_root, kind))
    log.info("Finished %s scrape: %s snapshot files", kind, len(written))
    return ScrapeResult(kind=kind, store=store, secondary=secondary, snapshot_files=written)


def build_dataset(
    kind: EntityKind,
    *,
    offline: bool = False,
    check_alignment: bool = False,
    fetcher: StoreFetcher | None = None,
    secondary_fetcher: SecondaryFetcher | None = None,
    engine: ReconciliationEngine | None = None,
    scrape_config: ScrapeConfig | None = None,
    storage_config: StorageConfig | None = None,
) -> BuildResult:
    """Reconcile ``kind`` and write its dataset and report.

    Overrides are loaded before any fetch so a missing or broken override file
    fails fast. Every fatal error is raised before the output is written.
    """

    config = scrape_config or get_scrape_config()
    storage = storage_config or get_storage_config()
    overrides = load_overrides(storage.overrides_path(), kind)

    log.info(
        "Starting %s build: offline=%s, check_alignment=%s, languages=%s",
        kind,
        offline,
        check_alignment,
        ",".join(config.languages),
    )
    if offline:
        snapshot_root = storage.snapshot_path(ensure=False)
        store = load_store(
            snapshot_root,
            kind,
            pivot=config.pivot_language,
            languages=config.languages,
        )
        secondary = load_secondary(snapshot_root, kind) if kind in SECONDARY_KINDS else None
    else:
        scraped = scrape_kind(
            kind,
            fetcher=fetcher,
            secondary_fetcher=secondary_fetcher,
            scrape_config=config,
            storage_config=storage,
        )
        store, secondary = scraped.store, scraped.secondary

    result = (engine or ReconciliationEngine()).reconcile(
        store,
        secondary=secondary,
        overrides=overrides,
        link_language=config.link_language,
        check_alignment=check_alignment,
    )
    dataset, report = write_result(result, storage.output_path())
    return BuildResult(result=result, dataset_path=dataset, report_path=report)


def _fetch(
    kind: EntityKind,
    config: ScrapeConfig,
    fetcher: StoreFetcher | None,
    secondary_fetcher: SecondaryFetcher | None,
) -> tuple[RecordStore[RawRecord], list[SecondaryRecord] | None]:
    effective_fetcher = fetcher or KiranicoFetcher(config)
    store = effective_fetcher(kind)
    if kind not in SECONDARY_KINDS:
        return store, None
    effective_secondary = secondary_fetcher or InvenFetcher(config)
    return store, effective_secondary()
