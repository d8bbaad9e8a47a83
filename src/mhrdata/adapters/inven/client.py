"""Inven secondary-source fetcher."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx

from mhrdata.adapters.errors import SourceFetchError
from mhrdata.adapters.http_resilience import ResilientClient
from mhrdata.config.sources import ScrapeConfig

from .parser import INVEN_LANGUAGE, parse_armor_list

if TYPE_CHECKING:
    from collections.abc import Callable

    from mhrdata.config.http_resilience import ResilienceConfig
    from mhrdata.domain.model import SecondaryRecord

log = getLogger(__name__)

ARMOR_LIST_PATH: Final[str] = "/dataninfo/mhr/armor"


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class InvenFetcher:
    config: ScrapeConfig = field(default_factory=ScrapeConfig)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self) -> list[SecondaryRecord]:
        return asyncio.run(self.fetch_armor())

    async def fetch_armor(self) -> list[SecondaryRecord]:
        async with self.client_factory(self.config.inven) as client:
            try:
                response = await client.get(ARMOR_LIST_PATH)
                response.raise_for_status()
            except httpx.HTTPError as exc:
                raise SourceFetchError(f"Inven fetch failed for {ARMOR_LIST_PATH}: {exc}") from exc
        records = parse_armor_list(response.text, language=INVEN_LANGUAGE)
        log.info("Inven parsing done: %s armor records", len(records))
        return records
