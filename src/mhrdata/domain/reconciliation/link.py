"""Cross-source linking stage.

Responsibilities of this stage:
- match canonical entities against the secondary source's flat record list
- copy the cross-source-only attributes (category, variant) onto matched entities
- report entities that found no match

Matching compares glyph-normalized display names in one language. The scan
follows the secondary list's order and the first equal name wins. Records are not
consumed, so one secondary record can link several canonical entities whose names
coincide.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mhrdata.domain.model import Source

from .normalize import normalize_glyphs

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mhrdata.domain.model import Attributes, CanonicalEntity, SecondaryRecord

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class LinkResult:
    entity_id: str
    record: SecondaryRecord


@dataclass(slots=True)
class LinkReport:
    links: list[LinkResult] = field(default_factory=list["LinkResult"])
    unresolved: list[str] = field(default_factory=list[str])


def link_entities(
    entities: Sequence[CanonicalEntity[Attributes]],
    records: Sequence[SecondaryRecord],
    *,
    language: str,
    source: Source = Source.INVEN,
) -> LinkReport:
    """Link ``entities`` to ``records`` by their ``language`` display name."""

    normalized_records = [(normalize_glyphs(record.name), record) for record in records]
    report = LinkReport()

    for entity in entities:
        name = entity.names.get(language)
        match = _first_match(normalize_glyphs(name), normalized_records) if name else None
        if match is None:
            report.unresolved.append(entity.id)
            log.debug(
                "No secondary record for %s %r (%s=%r)", entity.kind, entity.id, language, name
            )
            continue
        entity.link(category=match.category, variant=match.variant, source=source)
        report.links.append(LinkResult(entity_id=entity.id, record=match))

    log.info(
        "Linked %s of %s entities against %s secondary records (%s unresolved)",
        len(report.links),
        len(entities),
        len(records),
        len(report.unresolved),
    )
    return report


def _first_match(
    name: str,
    normalized_records: Sequence[tuple[str, SecondaryRecord]],
) -> SecondaryRecord | None:
    for record_name, record in normalized_records:
        if record_name == name:
            return record
    return None
