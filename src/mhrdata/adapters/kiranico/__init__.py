"""Kiranico primary-source adapter."""

from __future__ import annotations

from .client import KiranicoFetcher, PageRequest
from .parser import (
    KiranicoParseError,
    parse_armor_page,
    parse_decoration_page,
    parse_skill_page,
)

__all__ = [
    "KiranicoFetcher",
    "KiranicoParseError",
    "PageRequest",
    "parse_armor_page",
    "parse_decoration_page",
    "parse_skill_page",
]
