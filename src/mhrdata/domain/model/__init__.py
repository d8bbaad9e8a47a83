"""Public domain model surface."""

from __future__ import annotations

from mhrdata.domain.model.canonical import (
    ArmorAttributes,
    Attributes,
    CanonicalEntity,
    DecorationAttributes,
    Override,
    Provenance,
    SkillAttributes,
    attributes_type_for,
)
from mhrdata.domain.model.enums import ArmorPart, EntityKind, SexType, Source
from mhrdata.domain.model.raw import (
    ArmorStat,
    GroupKey,
    RawArmor,
    RawDecoration,
    RawRecord,
    RawSkill,
    RawSkillLevel,
    SecondaryRecord,
)

__all__ = [  # noqa: RUF022
    # enums
    "ArmorPart",
    "EntityKind",
    "SexType",
    "Source",
    # raw records
    "ArmorStat",
    "GroupKey",
    "RawArmor",
    "RawDecoration",
    "RawRecord",
    "RawSkill",
    "RawSkillLevel",
    "SecondaryRecord",
    # canonical
    "ArmorAttributes",
    "Attributes",
    "CanonicalEntity",
    "DecorationAttributes",
    "Override",
    "Provenance",
    "SkillAttributes",
    "attributes_type_for",
]
