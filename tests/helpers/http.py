"""HTTP fakes: a ``ResilientClient`` factory backed by ``httpx.MockTransport``."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from mhrdata.adapters.http_resilience import ResilientClient
from mhrdata.config import ResilienceConfig

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


def make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    return make_async_client_factory(async_handler)


def make_async_client_factory(
    handler: Callable[[httpx.Request], Awaitable[httpx.Response]],
) -> Callable[[ResilienceConfig], ResilientClient]:
    """Like ``make_client_factory`` for handlers that need to await."""

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            transport=httpx.MockTransport(handler),
            base_url=resilience.base_url or "",
        )
        return client

    return factory


def offline_resilience(name: str, base_url: str) -> ResilienceConfig:
    """Resilience settings without rate limiting or caching, for fast tests."""

    return ResilienceConfig(name=name, base_url=base_url, ratelimit=None, cache=None)
