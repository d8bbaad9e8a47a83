"""Inven secondary-source adapter."""

from __future__ import annotations

from .client import InvenFetcher
from .parser import INVEN_LANGUAGE, PART_LABELS, SEX_LABELS, parse_armor_list

__all__ = [
    "INVEN_LANGUAGE",
    "PART_LABELS",
    "SEX_LABELS",
    "InvenFetcher",
    "parse_armor_list",
]
