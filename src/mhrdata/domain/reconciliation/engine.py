"""Orchestrator for the reconciliation subsystem.

The engine composes stage callables but does not prescribe concrete adapters.
Every stage receives its input explicitly and returns a new result; the only
shared state is the list of canonical entities created by assembly, which later
stages mutate in place.

Flow:
1) validate and assemble canonical entities from the per-language store
2) link entities to the secondary source (when one is supplied)
3) apply overrides
4) drop entities the linker could not resolve
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from .assemble import assemble_entities
from .emit import filter_complete, to_payload
from .link import link_entities
from .overrides import apply_overrides

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from mhrdata.domain.model import (
        Attributes,
        CanonicalEntity,
        EntityKind,
        Override,
        RawRecord,
        SecondaryRecord,
    )

    from .assemble import AssemblyResult, SubAttributeCollision
    from .emit import Payload
    from .link import LinkReport, LinkResult
    from .overrides import OverrideReport
    from .store import RecordStore

log = logging.getLogger(__name__)


class AssembleStage(Protocol):
    def __call__(
        self,
        store: RecordStore[RawRecord],
        *,
        check_alignment: bool = False,
    ) -> AssemblyResult: ...


class LinkStage(Protocol):
    def __call__(
        self,
        entities: Sequence[CanonicalEntity[Attributes]],
        records: Sequence[SecondaryRecord],
        *,
        language: str,
    ) -> LinkReport: ...


class OverrideStage(Protocol):
    def __call__(
        self,
        entities: Sequence[CanonicalEntity[Attributes]],
        overrides: Iterable[Override[Attributes]],
    ) -> OverrideReport: ...


class FilterStage(Protocol):
    def __call__(
        self,
        entities: Sequence[CanonicalEntity[Attributes]],
        *,
        require_link: bool = True,
    ) -> tuple[list[CanonicalEntity[Attributes]], list[CanonicalEntity[Attributes]]]: ...


@dataclass(slots=True, kw_only=True)
class ReconciliationResult:
    """Accepted entities plus everything a run chose not to emit."""

    kind: EntityKind
    entities: list[CanonicalEntity[Attributes]]
    discarded: list[CanonicalEntity[Attributes]] = field(
        default_factory=list["CanonicalEntity[Attributes]"]
    )
    unresolved: list[str] = field(default_factory=list[str])
    links: list[LinkResult] = field(default_factory=list["LinkResult"])
    stale_overrides: list[str] = field(default_factory=list[str])
    duplicate_ids: dict[str, int] = field(default_factory=dict[str, int])
    collisions: list[SubAttributeCollision] = field(
        default_factory=list["SubAttributeCollision"]
    )

    def payloads(self) -> list[Payload]:
        return [to_payload(entity) for entity in self.entities]

    def report(self) -> dict[str, object]:
        return {
            "kind": str(self.kind),
            "emitted": len(self.entities),
            "linked": len(self.links),
            "unresolved": list(self.unresolved),
            "staleOverrides": list(self.stale_overrides),
            "duplicateIds": dict(self.duplicate_ids),
            "subAttributeCollisions": [
                {
                    "entityId": collision.entity_id,
                    "subId": collision.sub_id,
                    "names": list(collision.names),
                    "kept": collision.kept,
                }
                for collision in self.collisions
            ],
        }


@dataclass(slots=True)
class ReconciliationEngine:
    """Run full reconciliation from per-language records to the accepted dataset."""

    assemble: AssembleStage = field(default=assemble_entities)
    link: LinkStage = field(default=link_entities)
    override: OverrideStage = field(default=apply_overrides)
    filter: FilterStage = field(default=filter_complete)

    def reconcile(
        self,
        store: RecordStore[RawRecord],
        *,
        secondary: Sequence[SecondaryRecord] | None = None,
        overrides: Iterable[Override[Attributes]] = (),
        link_language: str | None = None,
        check_alignment: bool = False,
    ) -> ReconciliationResult:
        """Reconcile one entity kind.

        Without ``secondary`` the kind has no cross-source attributes: linking is
        skipped and nothing is filtered for being unlinked.
        """

        assembly = self.assemble(store, check_alignment=check_alignment)
        entities = assembly.entities

        links: list[LinkResult] = []
        unresolved: list[str] = []
        if secondary is not None:
            link_report = self.link(entities, secondary, language=link_language or store.pivot)
            links = link_report.links
            unresolved = link_report.unresolved

        override_report = self.override(entities, overrides)
        accepted, discarded = self.filter(entities, require_link=secondary is not None)

        log.info(
            "Reconciled %s: emitted=%s, unresolved=%s, stale_overrides=%s, duplicate_ids=%s",
            store.kind,
            len(accepted),
            len(unresolved),
            len(override_report.stale),
            len(assembly.duplicate_ids),
        )
        return ReconciliationResult(
            kind=store.kind,
            entities=accepted,
            discarded=discarded,
            unresolved=unresolved,
            links=links,
            stale_overrides=override_report.stale,
            duplicate_ids=assembly.duplicate_ids,
            collisions=assembly.collisions,
        )


def reconcile(
    store: RecordStore[RawRecord],
    *,
    secondary: Sequence[SecondaryRecord] | None = None,
    overrides: Iterable[Override[Attributes]] = (),
    link_language: str | None = None,
    check_alignment: bool = False,
) -> ReconciliationResult:
    """Reconcile ``store`` with the default stages."""

    return ReconciliationEngine().reconcile(
        store,
        secondary=secondary,
        overrides=overrides,
        link_language=link_language,
        check_alignment=check_alignment,
    )
