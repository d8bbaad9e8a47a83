"""Identifier and display-name normalization.

``make_id`` derives the stable identifier of a canonical entity. It must only be
fed pivot-language names: two languages naming the same item differently will
never produce the same id.
"""

from __future__ import annotations

import re
from typing import Final

_WHITESPACE_RUN: Final = re.compile(r"\s+")

_GLYPHS: Final = str.maketrans(
    {
        "【": "[",
        "】": "]",
        "「": "[",
        "」": "]",
        "『": "[",
        "』": "]",
        "〔": "[",
        "〕": "]",
        "［": "[",
        "］": "]",
        "（": "(",
        "）": ")",
        "＜": "<",
        "＞": ">",
        "〈": "<",
        "〉": ">",
        "《": "<",
        "》": ">",
        "“": '"',
        "”": '"',
        "„": '"',
        "‟": '"',
        "＂": '"',
        "‘": "'",
        "’": "'",
        "‚": "'",
        "‛": "'",
        "＇": "'",
    }
)


def make_id(name: str) -> str:
    """Lower-case ``name`` and collapse every whitespace run into one underscore.

    Surrounding whitespace is dropped, so the function is idempotent. An empty or
    whitespace-only name yields ``""``; callers decide whether that is an error.
    """

    return _WHITESPACE_RUN.sub("_", name.strip().lower())


def normalize_glyphs(name: str) -> str:
    """Map source-specific bracket and quote glyphs to their common ASCII form."""

    return name.translate(_GLYPHS).strip()
