"""Canonical assembly stage.

Responsibilities of this stage:
- validate group alignment of the record store once, up front
- create one canonical entity per pivot-language record
- pull names (and texts) from the same position in every other language
- derive sub-attribute ids from pivot-language sub-entity names

Alignment is purely positional. If the source ever orders a group differently
in two languages, records are silently mismatched; ``check_alignment`` compares
language-independent values at each position and turns such a shift into a
fatal error, but it cannot help when those values coincide.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Hashable
from dataclasses import dataclass, field
from functools import singledispatch
from typing import TYPE_CHECKING

from mhrdata.domain.model import (
    ArmorAttributes,
    Attributes,
    CanonicalEntity,
    DecorationAttributes,
    RawArmor,
    RawDecoration,
    RawSkill,
    SkillAttributes,
    Source,
)

from .errors import AlignmentMismatchError, EmptyIdentifierError, EmptyNameError
from .normalize import make_id

if TYPE_CHECKING:
    from mhrdata.domain.model import GroupKey, RawRecord

    from .store import RecordStore

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class SubAttributeCollision:
    """Two sub-entities of one entity normalized to the same id.

    The later value wins; ``kept`` is the value left in the map.
    """

    entity_id: str
    sub_id: str
    names: tuple[str, ...]
    kept: int


@dataclass(slots=True)
class AssemblyResult:
    entities: list[CanonicalEntity[Attributes]] = field(
        default_factory=list["CanonicalEntity[Attributes]"]
    )
    duplicate_ids: dict[str, int] = field(default_factory=dict[str, int])
    collisions: list[SubAttributeCollision] = field(
        default_factory=list["SubAttributeCollision"]
    )


def assemble_entities(
    store: RecordStore[RawRecord],
    *,
    check_alignment: bool = False,
) -> AssemblyResult:
    """Build canonical entities from ``store`` using the pivot's order as ground truth."""

    store.validate()
    result = AssemblyResult()

    for group in store.groups():
        rows = {language: store.get(language, group) for language in store.languages}
        for index, pivot_record in enumerate(rows[store.pivot]):
            aligned = {language: rows[language][index] for language in store.languages}
            if check_alignment:
                _check_alignment(store, group=group, index=index, aligned=aligned)
            entity = _assemble_one(store, group=group, index=index, aligned=aligned, result=result)
            result.entities.append(entity)

    counts = Counter(entity.id for entity in result.entities)
    result.duplicate_ids = {entity_id: count for entity_id, count in counts.items() if count > 1}
    for entity_id, count in result.duplicate_ids.items():
        log.warning("Duplicate %s id %r shared by %s entities", store.kind, entity_id, count)

    log.info(
        "Assembled %s %s entities across %s groups",
        len(result.entities),
        store.kind,
        len(store.groups()),
    )
    return result


def _assemble_one(
    store: RecordStore[RawRecord],
    *,
    group: GroupKey,
    index: int,
    aligned: dict[str, RawRecord],
    result: AssemblyResult,
) -> CanonicalEntity[Attributes]:
    pivot_record = aligned[store.pivot]
    entity_id = make_id(pivot_record.name)
    if not entity_id:
        raise EmptyIdentifierError(kind=store.kind, group=group, index=index)

    names: dict[str, str] = {}
    for language, record in aligned.items():
        if not record.name.strip():
            raise EmptyNameError(kind=store.kind, language=language, group=group, index=index)
        names[language] = record.name

    entity: CanonicalEntity[Attributes] = CanonicalEntity(
        id=entity_id,
        kind=store.kind,
        group=group,
        names=names,
        attributes=_attributes_for(pivot_record),
    )
    entity.provenance.sources.add(Source.KIRANICO)

    for language, record in aligned.items():
        text = _text_for(record)
        if text is not None:
            entity.texts[language] = text
        sub_name = _sub_name_for(record)
        if sub_name is not None:
            entity.sub_names[language] = sub_name

    seen_names: dict[str, list[str]] = {}
    for sub_name, level in _sub_entities_for(pivot_record):
        sub_id = make_id(sub_name)
        if not sub_id:
            log.warning("Skipping unnamed sub-entity of %s %r", store.kind, entity_id)
            continue
        seen_names.setdefault(sub_id, []).append(sub_name)
        entity.sub_attributes[sub_id] = level

    for sub_id, raw_names in seen_names.items():
        if len(raw_names) < 2:
            continue
        collision = SubAttributeCollision(
            entity_id=entity_id,
            sub_id=sub_id,
            names=tuple(raw_names),
            kept=entity.sub_attributes[sub_id],
        )
        result.collisions.append(collision)
        log.warning(
            "Sub-attribute id %r of %s %r collides for %s; keeping last value %s",
            sub_id,
            store.kind,
            entity_id,
            ", ".join(repr(name) for name in raw_names),
            collision.kept,
        )

    return entity


def _check_alignment(
    store: RecordStore[RawRecord],
    *,
    group: GroupKey,
    index: int,
    aligned: dict[str, RawRecord],
) -> None:
    expected = _fingerprint(aligned[store.pivot])
    if expected is None:
        return
    for language, record in aligned.items():
        if _fingerprint(record) != expected:
            raise AlignmentMismatchError(
                kind=store.kind,
                language=language,
                group=group,
                index=index,
            )


@singledispatch
def _attributes_for(record: object) -> Attributes:
    raise TypeError(f"Unsupported raw record type: {type(record).__name__}")


@_attributes_for.register
def _(record: RawArmor) -> Attributes:
    return ArmorAttributes(rarity=record.rarity, stat=record.stat, slots=record.slots)


@_attributes_for.register
def _(record: RawSkill) -> Attributes:
    return SkillAttributes(max_level=record.max_level)


@_attributes_for.register
def _(record: RawDecoration) -> Attributes:
    return DecorationAttributes(slot_size=record.slot_size, skill_level=record.skill_level)


@singledispatch
def _sub_entities_for(_record: object) -> tuple[tuple[str, int], ...]:
    return ()


@_sub_entities_for.register
def _(record: RawArmor) -> tuple[tuple[str, int], ...]:
    return tuple((skill.name, skill.level) for skill in record.skills)


@_sub_entities_for.register
def _(record: RawDecoration) -> tuple[tuple[str, int], ...]:
    return ((record.skill_name, record.skill_level),)


@singledispatch
def _text_for(_record: object) -> str | None:
    return None


@_text_for.register
def _(record: RawSkill) -> str | None:
    return record.text


@_text_for.register
def _(record: RawDecoration) -> str | None:
    return record.text


@singledispatch
def _sub_name_for(_record: object) -> str | None:
    return None


@_sub_name_for.register
def _(record: RawDecoration) -> str | None:
    return record.skill_name


@singledispatch
def _fingerprint(_record: object) -> Hashable | None:
    return None


@_fingerprint.register
def _(record: RawArmor) -> Hashable | None:
    return (
        record.rarity,
        record.stat,
        record.slots,
        tuple(skill.level for skill in record.skills),
    )


@_fingerprint.register
def _(record: RawDecoration) -> Hashable | None:
    return (record.slot_size, record.skill_level)
