"""Scrape source configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from mhrdata import __version__

from .env import env_list, env_str
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

KIRANICO_BASE_URL: Final[str] = "https://mhrise.kiranico.com"
INVEN_BASE_URL: Final[str] = "https://mhf.inven.co.kr"

DEFAULT_LANGUAGES: Final[tuple[str, ...]] = (
    "ja",
    "zh",
    "zh-Hant",
    "en",
    "ko",
    "ru",
    "ar",
    "de",
    "es",
    "fr",
    "it",
    "pl",
)
DEFAULT_PIVOT_LANGUAGE: Final[str] = "en"
DEFAULT_LINK_LANGUAGE: Final[str] = "ko"
ARMOR_RARITY_VIEWS: Final[int] = 10
USER_AGENT: Final[str] = f"mhrdata/{__version__}"


def _scrape_resilience(name: str, base_url: str) -> ResilienceConfig:
    # One request per second per site; pages are cached for the lifetime of a run.
    return ResilienceConfig(
        name=name,
        base_url=base_url,
        ratelimit=RateLimit(max_calls=1, per_seconds=1.0),
        retry=RetryPolicy(total=4),
        cache=CacheConfig(enabled=True, backend="memory"),
        default_headers={"User-Agent": USER_AGENT},
    )


def _default_kiranico_resilience() -> ResilienceConfig:
    return _scrape_resilience("kiranico", KIRANICO_BASE_URL)


def _default_inven_resilience() -> ResilienceConfig:
    return _scrape_resilience("inven", INVEN_BASE_URL)


@dataclass(frozen=True, slots=True)
class ScrapeConfig:
    """Languages and HTTP settings for both scrape sources.

    ``pivot_language`` is the language the override files are authored against;
    ids are derived from its names. ``link_language`` is the language the
    secondary source publishes names in.
    """

    languages: tuple[str, ...] = DEFAULT_LANGUAGES
    pivot_language: str = DEFAULT_PIVOT_LANGUAGE
    link_language: str = DEFAULT_LINK_LANGUAGE
    armor_rarity_views: int = ARMOR_RARITY_VIEWS
    kiranico: ResilienceConfig = field(default_factory=_default_kiranico_resilience)
    inven: ResilienceConfig = field(default_factory=_default_inven_resilience)

    def __post_init__(self) -> None:
        if self.pivot_language not in self.languages:
            raise ConfigurationError(
                f"Pivot language {self.pivot_language!r} is not a configured language"
            )
        if self.link_language not in self.languages:
            raise ConfigurationError(
                f"Link language {self.link_language!r} is not a configured language"
            )
        if self.armor_rarity_views < 1:
            raise ConfigurationError("At least one armor rarity view is required")


def get_scrape_config() -> ScrapeConfig:
    return ScrapeConfig(
        languages=env_list("MHRDATA_LANGUAGES", DEFAULT_LANGUAGES),
        pivot_language=env_str("MHRDATA_PIVOT_LANGUAGE", DEFAULT_PIVOT_LANGUAGE),
        link_language=env_str("MHRDATA_LINK_LANGUAGE", DEFAULT_LINK_LANGUAGE),
    )
