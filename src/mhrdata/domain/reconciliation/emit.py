"""Completeness filter and payload emission.

Entities that the cross-source linker never matched still carry the unset
category/variant and are discarded here. The accepted sequence keeps assembly
order: pivot groups ascending, then pivot order inside each group.
"""

from __future__ import annotations

import logging
from functools import singledispatch
from typing import TYPE_CHECKING

from mhrdata.domain.model import (
    ArmorAttributes,
    Attributes,
    CanonicalEntity,
    DecorationAttributes,
    SkillAttributes,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

log = logging.getLogger(__name__)

type Payload = dict[str, object]


def filter_complete(
    entities: Sequence[CanonicalEntity[Attributes]],
    *,
    require_link: bool = True,
) -> tuple[list[CanonicalEntity[Attributes]], list[CanonicalEntity[Attributes]]]:
    """Split ``entities`` into (accepted, discarded), preserving order."""

    if not require_link:
        return list(entities), []

    accepted: list[CanonicalEntity[Attributes]] = []
    discarded: list[CanonicalEntity[Attributes]] = []
    for entity in entities:
        (accepted if entity.is_linked else discarded).append(entity)

    if discarded:
        log.info(
            "Discarded %s unlinked %s entities: %s",
            len(discarded),
            discarded[0].kind,
            ", ".join(entity.id for entity in discarded),
        )
    return accepted, discarded


def to_payload(entity: CanonicalEntity[Attributes]) -> Payload:
    """Serialisable mapping in the shape the simulator's data loader reads."""

    return _payload_for(entity.attributes, entity)


@singledispatch
def _payload_for(attributes: object, _entity: CanonicalEntity[Attributes]) -> Payload:
    raise TypeError(f"Unsupported attributes type: {type(attributes).__name__}")


@_payload_for.register
def _(attributes: ArmorAttributes, entity: CanonicalEntity[Attributes]) -> Payload:
    stat = attributes.stat
    return {
        "id": entity.id,
        "part": entity.category,
        "sexType": entity.variant,
        "names": dict(entity.names),
        "rarity": attributes.rarity,
        "stat": {
            "defense": stat.defense,
            "fireRes": stat.fire_res,
            "waterRes": stat.water_res,
            "iceRes": stat.ice_res,
            "elecRes": stat.elec_res,
            "dragonRes": stat.dragon_res,
        },
        "skills": {skill_id: {"level": level} for skill_id, level in entity.sub_attributes.items()},
        "slots": list(attributes.slots),
    }


@_payload_for.register
def _(attributes: SkillAttributes, entity: CanonicalEntity[Attributes]) -> Payload:
    return {
        "id": entity.id,
        "names": dict(entity.names),
        "texts": dict(entity.texts),
        "maxLevel": attributes.max_level,
    }


@_payload_for.register
def _(attributes: DecorationAttributes, entity: CanonicalEntity[Attributes]) -> Payload:
    skill_id = next(iter(entity.sub_attributes), None)
    return {
        "id": entity.id,
        "names": dict(entity.names),
        "skillNames": dict(entity.sub_names),
        "texts": dict(entity.texts),
        "skillId": skill_id,
        "skillLevel": attributes.skill_level,
        "slotSize": attributes.slot_size,
    }
