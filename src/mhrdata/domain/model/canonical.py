"""Canonical multilingual entities produced by reconciliation.

Only the canonical assembler creates these. Later stages (linking, overrides)
mutate them in place within a single-threaded pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mhrdata.domain.model.enums import EntityKind, Source

if TYPE_CHECKING:
    from mhrdata.domain.model.raw import ArmorStat, GroupKey


@dataclass(frozen=True, slots=True, kw_only=True)
class ArmorAttributes:
    rarity: int
    stat: ArmorStat
    slots: tuple[int, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class SkillAttributes:
    max_level: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DecorationAttributes:
    slot_size: int
    skill_level: int


type Attributes = ArmorAttributes | SkillAttributes | DecorationAttributes

_ATTRIBUTES_BY_KIND: dict[EntityKind, type[Attributes]] = {
    EntityKind.ARMOR: ArmorAttributes,
    EntityKind.SKILL: SkillAttributes,
    EntityKind.DECORATION: DecorationAttributes,
}


def attributes_type_for(kind: EntityKind) -> type[Attributes]:
    return _ATTRIBUTES_BY_KIND[kind]


@dataclass(eq=False, kw_only=True)
class Provenance:
    """Where an entity's values came from.

    ``scraped`` keeps the scraped value of every field an override replaced.
    """

    sources: set[Source] = field(default_factory=set["Source"])
    overridden: set[str] = field(default_factory=set[str])
    scraped: dict[str, object] = field(default_factory=dict[str, object])


@dataclass(eq=False, kw_only=True)
class CanonicalEntity[A: Attributes]:
    """The single merged, multilingual record for one game item.

    ``category`` and ``variant`` are ``None`` until the cross-source linker finds a
    secondary record for the entity.
    """

    id: str
    kind: EntityKind
    group: GroupKey
    names: dict[str, str]
    attributes: A
    sub_attributes: dict[str, int] = field(default_factory=dict[str, int])
    texts: dict[str, str] = field(default_factory=dict[str, str])
    sub_names: dict[str, str] = field(default_factory=dict[str, str])
    category: str | None = None
    variant: str | None = None
    provenance: Provenance = field(default_factory=Provenance)

    @property
    def is_linked(self) -> bool:
        return self.category is not None and self.variant is not None

    def link(self, *, category: str, variant: str, source: Source) -> None:
        self.category = category
        self.variant = variant
        self.provenance.sources.add(source)

    def replace_attributes(self, attributes: A) -> None:
        self._record_scraped("attributes", self.attributes)
        self.attributes = attributes

    def replace_sub_attributes(self, sub_attributes: dict[str, int]) -> None:
        self._record_scraped("sub_attributes", dict(self.sub_attributes))
        self.sub_attributes = dict(sub_attributes)

    def _record_scraped(self, field_name: str, value: object) -> None:
        # Keep the first scraped value; a repeated override must not hide it.
        self.provenance.scraped.setdefault(field_name, value)
        self.provenance.overridden.add(field_name)
        self.provenance.sources.add(Source.OVERRIDE)


@dataclass(frozen=True, slots=True, kw_only=True)
class Override[A: Attributes]:
    """Manual correction keyed by canonical id.

    A present field replaces the corresponding canonical field wholesale.
    """

    id: str
    kind: EntityKind
    attributes: A | None = None
    sub_attributes: dict[str, int] | None = None
