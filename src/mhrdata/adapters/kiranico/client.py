"""Kiranico scraper: fetches every language page of a kind and builds a record store."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from mhrdata.adapters.errors import SourceFetchError
from mhrdata.adapters.http_resilience import ResilientClient
from mhrdata.config.sources import ScrapeConfig
from mhrdata.domain.model import EntityKind
from mhrdata.domain.reconciliation import RecordStore

from .parser import parse_armor_page, parse_decoration_page, parse_skill_page

if TYPE_CHECKING:
    from collections.abc import Callable

    from mhrdata.config.http_resilience import ResilienceConfig
    from mhrdata.domain.model import GroupKey, RawRecord

log = getLogger(__name__)

_FLAT_PAGES: dict[EntityKind, str] = {
    EntityKind.SKILL: "skills",
    EntityKind.DECORATION: "decorations",
}


@dataclass(frozen=True, slots=True)
class PageRequest:
    kind: EntityKind
    language: str
    group: GroupKey
    path: str


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class KiranicoFetcher:
    """Fetch Kiranico tables concurrently, one page per (language, group).

    The rate limiter inside the client bounds concurrency; the store is only built
    once every page of the kind has been fetched and parsed.
    """

    config: ScrapeConfig = field(default_factory=ScrapeConfig)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self, kind: EntityKind) -> RecordStore[RawRecord]:
        return asyncio.run(self.fetch(kind))

    async def fetch(self, kind: EntityKind) -> RecordStore[RawRecord]:
        requests = self.page_requests(kind)
        log.info("Fetching %s Kiranico %s pages", len(requests), kind)
        async with self.client_factory(self.config.kiranico) as client:
            try:
                async with asyncio.TaskGroup() as group:
                    tasks = [
                        group.create_task(self._fetch_page(client, request))
                        for request in requests
                    ]
            except ExceptionGroup as failures:
                # The group has cancelled the remaining pages.
                raise failures.exceptions[0] from failures
        pages = [task.result() for task in tasks]

        store: RecordStore[RawRecord] = RecordStore(
            kind=kind,
            pivot=self.config.pivot_language,
            languages=self.config.languages,
        )
        for request, html in zip(requests, pages, strict=True):
            store.add(request.language, request.group, _parse(request, html))
            log.info(
                "Kiranico parsing (kind: %s, lang: %s, group: %s) done",
                kind,
                request.language,
                request.group,
            )
        return store

    def page_requests(self, kind: EntityKind) -> list[PageRequest]:
        requests: list[PageRequest] = []
        for language in self.config.languages:
            if kind is EntityKind.ARMOR:
                # Group key is the rarity tier; page views are zero-based.
                requests.extend(
                    PageRequest(
                        kind=kind,
                        language=language,
                        group=view + 1,
                        path=f"/{language}/data/armors?view={view}",
                    )
                    for view in range(self.config.armor_rarity_views)
                )
                continue
            requests.append(
                PageRequest(
                    kind=kind,
                    language=language,
                    group=None,
                    path=f"/{language}/data/{_FLAT_PAGES[kind]}",
                )
            )
        return requests

    async def _fetch_page(self, client: ResilientClient, request: PageRequest) -> str:
        try:
            response = await client.get(request.path)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise SourceFetchError(f"Kiranico fetch failed for {request.path}: {exc}") from exc
        return response.text


def _parse(request: PageRequest, html: str) -> list[RawRecord]:
    if request.kind is EntityKind.ARMOR:
        if request.group is None:
            raise ValueError("Armor pages need a rarity group")
        return list(parse_armor_page(html, rarity=request.group))
    if request.kind is EntityKind.SKILL:
        return list(parse_skill_page(html))
    return list(parse_decoration_page(html))
