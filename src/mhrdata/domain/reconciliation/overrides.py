"""Override stage: manual corrections layered over scraped values.

An override replaces the attribute payload and/or the sub-attribute map of the
entity with the same id. Scraped values are kept in the entity's provenance.
Overrides for ids that do not exist are ignored and reported as stale, so
correction files can be written ahead of upstream data changes.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mhrdata.domain.model import attributes_type_for

from .errors import OverrideKindError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from mhrdata.domain.model import Attributes, CanonicalEntity, Override

log = logging.getLogger(__name__)


@dataclass(slots=True)
class OverrideReport:
    applied: list[str] = field(default_factory=list[str])
    stale: list[str] = field(default_factory=list[str])


def apply_overrides(
    entities: Sequence[CanonicalEntity[Attributes]],
    overrides: Iterable[Override[Attributes]],
) -> OverrideReport:
    """Apply ``overrides`` to ``entities`` in place.

    With duplicate canonical ids every entity sharing the id receives the override.
    """

    by_id: defaultdict[str, list[CanonicalEntity[Attributes]]] = defaultdict(list)
    for entity in entities:
        by_id[entity.id].append(entity)

    report = OverrideReport()
    for override in overrides:
        targets = by_id.get(override.id)
        if not targets:
            report.stale.append(override.id)
            log.info("Ignoring %s override for unknown id %r", override.kind, override.id)
            continue
        for entity in targets:
            _apply_one(entity, override)
        report.applied.append(override.id)

    log.info(
        "Applied %s overrides (%s stale)",
        len(report.applied),
        len(report.stale),
    )
    return report


def _apply_one(entity: CanonicalEntity[Attributes], override: Override[Attributes]) -> None:
    if override.kind is not entity.kind:
        raise OverrideKindError(
            f"Override {override.id!r} is a {override.kind} override, "
            f"entity is a {entity.kind}"
        )
    if override.attributes is not None:
        expected = attributes_type_for(entity.kind)
        if not isinstance(override.attributes, expected):
            raise OverrideKindError(
                f"Override {override.id!r} carries {type(override.attributes).__name__}, "
                f"expected {expected.__name__}"
            )
        entity.replace_attributes(override.attributes)
    if override.sub_attributes is not None:
        entity.replace_sub_attributes(override.sub_attributes)
