"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Source(StrEnum):
    KIRANICO = "kiranico"
    INVEN = "inven"
    OVERRIDE = "override"


class EntityKind(StrEnum):
    """Discriminator for the three reconciled datasets."""

    ARMOR = "armor"
    SKILL = "skill"
    DECORATION = "decoration"


class ArmorPart(StrEnum):
    HELM = "helm"
    TORSO = "torso"
    ARM = "arm"
    WAIST = "waist"
    FEET = "feet"


class SexType(StrEnum):
    ALL = "all"
    MALE = "male"
    FEMALE = "female"
