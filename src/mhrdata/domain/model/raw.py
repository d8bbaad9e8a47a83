"""Raw per-language records as produced by the scraping adapters.

Records are immutable once produced. Their order inside a group is significant:
the canonical assembler aligns languages by position.
"""

from __future__ import annotations

from dataclasses import dataclass

type GroupKey = int | None
type RawRecord = RawArmor | RawSkill | RawDecoration


@dataclass(frozen=True, slots=True, kw_only=True)
class ArmorStat:
    defense: int
    fire_res: int
    water_res: int
    ice_res: int
    elec_res: int
    dragon_res: int


@dataclass(frozen=True, slots=True, kw_only=True)
class RawSkillLevel:
    """A skill granted by an armor piece, named in the page's language."""

    name: str
    level: int


@dataclass(frozen=True, slots=True, kw_only=True)
class RawArmor:
    name: str
    rarity: int
    stat: ArmorStat
    skills: tuple[RawSkillLevel, ...] = ()
    slots: tuple[int, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class RawSkill:
    name: str
    text: str = ""
    max_level: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class RawDecoration:
    name: str
    skill_name: str
    skill_level: int
    slot_size: int
    text: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class SecondaryRecord:
    """Flat record from the secondary source carrying cross-source-only attributes."""

    name: str
    category: str
    variant: str
    language: str
