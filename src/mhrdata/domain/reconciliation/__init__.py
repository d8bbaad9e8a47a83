"""Reconciliation core for building the canonical multilingual dataset.

Layered flow:
1) hold per-language scrape output in a ``RecordStore``
2) assemble canonical entities by pivot-language position
3) link them to the secondary source by display name
4) apply manual overrides
5) filter unresolved entities and emit payloads
"""

from __future__ import annotations

from .assemble import AssemblyResult, SubAttributeCollision, assemble_entities
from .emit import filter_complete, to_payload
from .engine import ReconciliationEngine, ReconciliationResult, reconcile
from .errors import (
    AlignmentMismatchError,
    EmptyIdentifierError,
    EmptyNameError,
    EmptyStoreError,
    GroupLengthMismatch,
    MissingLanguageData,
    OverrideKindError,
    ReconciliationError,
)
from .link import LinkReport, LinkResult, link_entities
from .normalize import make_id, normalize_glyphs
from .overrides import OverrideReport, apply_overrides
from .store import RecordStore

__all__ = [
    "AlignmentMismatchError",
    "AssemblyResult",
    "EmptyIdentifierError",
    "EmptyNameError",
    "EmptyStoreError",
    "GroupLengthMismatch",
    "LinkReport",
    "LinkResult",
    "MissingLanguageData",
    "OverrideKindError",
    "OverrideReport",
    "ReconciliationEngine",
    "ReconciliationError",
    "ReconciliationResult",
    "RecordStore",
    "SubAttributeCollision",
    "apply_overrides",
    "assemble_entities",
    "filter_complete",
    "link_entities",
    "make_id",
    "normalize_glyphs",
    "reconcile",
    "to_payload",
]
