from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mhrdata.config import ScrapeConfig, StorageConfig
from mhrdata.config.sources import INVEN_BASE_URL, KIRANICO_BASE_URL
from tests.helpers.http import offline_resilience

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def scrape_config() -> ScrapeConfig:
    return ScrapeConfig(
        languages=("en", "ko"),
        pivot_language="en",
        link_language="ko",
        armor_rarity_views=2,
        kiranico=offline_resilience("kiranico", KIRANICO_BASE_URL),
        inven=offline_resilience("inven", INVEN_BASE_URL),
    )


@pytest.fixture
def storage_config(tmp_path: Path) -> StorageConfig:
    return StorageConfig(
        data_dir=tmp_path / "data",
        override_dir=tmp_path / "overrides",
        output_dir=tmp_path / "output",
        snapshot_dir=tmp_path / "snapshots",
    )
