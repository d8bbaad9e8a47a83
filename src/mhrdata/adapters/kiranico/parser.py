"""HTML table parsers for Kiranico data pages.

Every parser returns records in page order. A row that cannot be parsed raises
``KiranicoParseError`` instead of being skipped: dropping a row in one language
would shift every later row out of alignment with the other languages.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final

from bs4 import BeautifulSoup

from mhrdata.domain.model import ArmorStat, RawArmor, RawDecoration, RawSkill, RawSkillLevel

if TYPE_CHECKING:
    from bs4 import Tag

log = logging.getLogger(__name__)

_TRAILING_NUMBER: Final = re.compile(r"(\d+)\s*$")
_SLOT_SRC: Final = re.compile(r"(\d)\.png$")
_LEVEL_MARKER: Final = re.compile(r"Lv\.?\s*(\d+)", re.IGNORECASE)


class KiranicoParseError(ValueError):
    """Raised when a Kiranico table row does not have the expected structure."""


def parse_armor_page(html: str, *, rarity: int) -> list[RawArmor]:
    armors: list[RawArmor] = []
    for index, row in enumerate(_rows(html)):
        cols = _cells(row, minimum=7, index=index, page="armor")
        name = _anchor_text(cols[2], index=index)
        slots = tuple(_slot_size(img.get("src"), index=index) for img in _children(cols[3], "img"))

        defense_cells = _children(cols[4], "div")
        resistance_cells = _children(cols[5], "div")
        if len(defense_cells) < 3 or len(resistance_cells) < 3:
            raise KiranicoParseError(f"armor row {index}: incomplete defense columns")
        stat = ArmorStat(
            defense=_to_int(defense_cells[0].get_text(strip=True), index=index),
            fire_res=_resistance(defense_cells[1], index=index),
            water_res=_resistance(defense_cells[2], index=index),
            ice_res=_resistance(resistance_cells[0], index=index),
            elec_res=_resistance(resistance_cells[1], index=index),
            dragon_res=_resistance(resistance_cells[2], index=index),
        )

        skills = tuple(_skill_level(div, index=index) for div in _children(cols[6], "div"))
        armors.append(RawArmor(name=name, rarity=rarity, stat=stat, skills=skills, slots=slots))

    log.debug("Parsed %s armor rows (rarity %s)", len(armors), rarity)
    return armors


def parse_skill_page(html: str) -> list[RawSkill]:
    skills: list[RawSkill] = []
    for index, row in enumerate(_rows(html)):
        cols = _cells(row, minimum=2, index=index, page="skill")
        name_element = cols[0].select_one(":scope > a > div > div > p")
        if name_element is None:
            raise KiranicoParseError(f"skill row {index}: missing name")
        paragraphs = [
            text for p in _children(cols[1], "p") if (text := p.get_text(strip=True))
        ]
        text = "\n".join(paragraphs)
        levels = [int(level) for level in _LEVEL_MARKER.findall(text)]
        skills.append(
            RawSkill(
                name=name_element.get_text(strip=True),
                text=text,
                max_level=max(levels) if levels else None,
            )
        )

    log.debug("Parsed %s skill rows", len(skills))
    return skills


def parse_decoration_page(html: str) -> list[RawDecoration]:
    decorations: list[RawDecoration] = []
    for index, row in enumerate(_rows(html)):
        cols = _cells(row, minimum=2, index=index, page="decoration")
        name = _anchor_text(cols[0], index=index)
        slot_image = cols[0].find("img")
        if slot_image is None:
            raise KiranicoParseError(f"decoration row {index}: missing slot icon")
        skill = _skill_level(cols[1], index=index)
        description = cols[2].get_text("\n", strip=True) if len(cols) > 2 else ""
        decorations.append(
            RawDecoration(
                name=name,
                skill_name=skill.name,
                skill_level=skill.level,
                slot_size=_slot_size(slot_image.get("src"), index=index),
                text=description,
            )
        )

    log.debug("Parsed %s decoration rows", len(decorations))
    return decorations


def _rows(html: str) -> list[Tag]:
    soup = BeautifulSoup(html, "html.parser")
    return soup.select("table tbody tr")


def _cells(row: Tag, *, minimum: int, index: int, page: str) -> list[Tag]:
    cells = _children(row, "td")
    if len(cells) < minimum:
        raise KiranicoParseError(f"{page} row {index}: expected {minimum} cells, got {len(cells)}")
    return cells


def _children(element: Tag, name: str) -> list[Tag]:
    return list(element.find_all(name, recursive=False))


def _anchor_text(cell: Tag, *, index: int) -> str:
    anchor = cell.find("a")
    if anchor is None:
        raise KiranicoParseError(f"row {index}: missing name link")
    return anchor.get_text(strip=True)


def _skill_level(element: Tag, *, index: int) -> RawSkillLevel:
    anchor = element.find("a")
    if anchor is None:
        raise KiranicoParseError(f"row {index}: missing skill link")
    match = _TRAILING_NUMBER.search(element.get_text(strip=True))
    if match is None:
        raise KiranicoParseError(f"row {index}: missing skill level")
    return RawSkillLevel(name=anchor.get_text(strip=True), level=int(match.group(1)))


def _resistance(element: Tag, *, index: int) -> int:
    value = element.select_one(":scope > span > span")
    if value is None:
        raise KiranicoParseError(f"row {index}: missing resistance value")
    return _to_int(value.get_text(strip=True), index=index)


def _slot_size(src: object, *, index: int) -> int:
    match = _SLOT_SRC.search(src) if isinstance(src, str) else None
    if match is None:
        raise KiranicoParseError(f"row {index}: unrecognised slot icon {src!r}")
    return int(match.group(1))


def _to_int(value: str, *, index: int) -> int:
    try:
        return int(value)
    except ValueError:
        raise KiranicoParseError(f"row {index}: expected a number, got {value!r}") from None
