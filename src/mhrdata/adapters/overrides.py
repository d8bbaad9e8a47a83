"""Override file loader.

Override files are hand-edited JSON lists, one file per entity kind
(``<override_dir>/<kind>.json``). Keys follow the emitted dataset's camelCase
names. Attribute payloads replace the scraped payload wholesale, so a file that
sets one attribute field must set all of them.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from collections import Counter
from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, model_validator

from mhrdata.config.errors import ConfigurationError
from mhrdata.domain.model import (
    ArmorAttributes,
    ArmorStat,
    DecorationAttributes,
    EntityKind,
    Override,
    SkillAttributes,
)

if TYPE_CHECKING:
    from pathlib import Path

    from mhrdata.domain.model import Attributes

log = logging.getLogger(__name__)


class MissingOverrideFileError(ConfigurationError):
    """Raised when the override file for a kind does not exist."""


class OverrideBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)
    kind: ClassVar[EntityKind]

    id: str = Field(min_length=1)

    @abstractmethod
    def to_override(self) -> Override[Attributes]: ...


class StatModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    defense: int
    fire_res: int = Field(alias="fireRes")
    water_res: int = Field(alias="waterRes")
    ice_res: int = Field(alias="iceRes")
    elec_res: int = Field(alias="elecRes")
    dragon_res: int = Field(alias="dragonRes")


class SkillLevelModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    level: int = Field(ge=0)


class ArmorOverrideModel(OverrideBaseModel):
    kind: ClassVar[EntityKind] = EntityKind.ARMOR

    rarity: int | None = None
    stat: StatModel | None = None
    slots: list[int] | None = None
    skills: dict[str, SkillLevelModel] | None = None

    @model_validator(mode="after")
    def _attributes_complete(self) -> ArmorOverrideModel:
        present = [value is not None for value in (self.rarity, self.stat, self.slots)]
        if any(present) and not all(present):
            raise ValueError("armor overrides must set rarity, stat and slots together")
        return self

    def to_override(self) -> Override[Attributes]:
        attributes: Attributes | None = None
        if self.rarity is not None and self.stat is not None and self.slots is not None:
            attributes = ArmorAttributes(
                rarity=self.rarity,
                stat=ArmorStat(**self.stat.model_dump()),
                slots=tuple(self.slots),
            )
        sub_attributes = (
            {skill_id: skill.level for skill_id, skill in self.skills.items()}
            if self.skills is not None
            else None
        )
        return Override(
            id=self.id,
            kind=self.kind,
            attributes=attributes,
            sub_attributes=sub_attributes,
        )


class SkillOverrideModel(OverrideBaseModel):
    kind: ClassVar[EntityKind] = EntityKind.SKILL

    max_level: int | None = Field(default=None, alias="maxLevel")

    def to_override(self) -> Override[Attributes]:
        attributes = (
            SkillAttributes(max_level=self.max_level) if self.max_level is not None else None
        )
        return Override(id=self.id, kind=self.kind, attributes=attributes)


class DecorationOverrideModel(OverrideBaseModel):
    kind: ClassVar[EntityKind] = EntityKind.DECORATION

    slot_size: int | None = Field(default=None, alias="slotSize")
    skill_level: int | None = Field(default=None, alias="skillLevel")
    skill_id: str | None = Field(default=None, alias="skillId")

    @model_validator(mode="after")
    def _attributes_complete(self) -> DecorationOverrideModel:
        if (self.slot_size is None) != (self.skill_level is None):
            raise ValueError("decoration overrides must set slotSize and skillLevel together")
        if self.skill_id is not None and self.skill_level is None:
            raise ValueError("decoration overrides with skillId must set skillLevel")
        return self

    def to_override(self) -> Override[Attributes]:
        attributes: Attributes | None = None
        if self.slot_size is not None and self.skill_level is not None:
            attributes = DecorationAttributes(
                slot_size=self.slot_size, skill_level=self.skill_level
            )
        sub_attributes = (
            {self.skill_id: self.skill_level}
            if self.skill_id is not None and self.skill_level is not None
            else None
        )
        return Override(
            id=self.id,
            kind=self.kind,
            attributes=attributes,
            sub_attributes=sub_attributes,
        )


_MODELS: dict[EntityKind, type[OverrideBaseModel]] = {
    EntityKind.ARMOR: ArmorOverrideModel,
    EntityKind.SKILL: SkillOverrideModel,
    EntityKind.DECORATION: DecorationOverrideModel,
}


def override_path(directory: Path, kind: EntityKind) -> Path:
    return directory / f"{kind}.json"


def parse_overrides(payload: str | bytes, kind: EntityKind) -> list[Override[Attributes]]:
    adapter = TypeAdapter(list[_MODELS[kind]])
    try:
        models = adapter.validate_json(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid {kind} override data: {exc}") from exc
    counts = Counter(model.id for model in models)
    duplicates = sorted(override_id for override_id, count in counts.items() if count > 1)
    if duplicates:
        raise ConfigurationError(f"Duplicate {kind} override ids: {', '.join(duplicates)}")
    return [model.to_override() for model in models]


def load_overrides(directory: Path, kind: EntityKind) -> list[Override[Attributes]]:
    """Load the override file for ``kind``; a missing file aborts the run."""

    path = override_path(directory, kind)
    if not path.is_file():
        raise MissingOverrideFileError(f"Missing {kind} override file: {path}")
    overrides = parse_overrides(path.read_bytes(), kind)
    log.info("Loaded %s %s overrides from %s", len(overrides), kind, path)
    return overrides
