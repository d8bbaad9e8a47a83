"""Raw scrape snapshots.

A snapshot keeps one JSON file per ``(kind, language)`` so ``build --offline``
can reconcile without touching the network::

    <snapshot_dir>/<kind>/<kind>.<language>.json   {"<group>": [record, ...]}
    <snapshot_dir>/armor/armor.secondary.json      [record, ...]

Group keys are JSON object keys, so they are stored as strings with ``"null"``
standing for the flat group.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from pydantic import TypeAdapter, ValidationError

from mhrdata.config.errors import ConfigurationError
from mhrdata.domain.model import (
    EntityKind,
    RawArmor,
    RawDecoration,
    RawSkill,
    SecondaryRecord,
)
from mhrdata.domain.reconciliation import RecordStore

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from mhrdata.domain.model import GroupKey, RawRecord

log = logging.getLogger(__name__)

_NULL_GROUP: Final[str] = "null"

_RECORD_TYPES: Final[dict[EntityKind, type[RawArmor] | type[RawSkill] | type[RawDecoration]]] = {
    EntityKind.ARMOR: RawArmor,
    EntityKind.SKILL: RawSkill,
    EntityKind.DECORATION: RawDecoration,
}

_SECONDARY_ADAPTER: Final = TypeAdapter(list[SecondaryRecord])


class SnapshotError(ConfigurationError):
    """Raised when a snapshot is missing or cannot be read back."""


def _groups_adapter(kind: EntityKind) -> TypeAdapter[dict[str, list[RawRecord]]]:
    return TypeAdapter(dict[str, list[_RECORD_TYPES[kind]]])


def _encode_group(group: GroupKey) -> str:
    return _NULL_GROUP if group is None else str(group)


def _decode_group(key: str, *, path: Path) -> GroupKey:
    if key == _NULL_GROUP:
        return None
    try:
        return int(key)
    except ValueError:
        raise SnapshotError(f"Invalid group key {key!r} in {path}") from None


def language_snapshot_path(root: Path, kind: EntityKind, language: str) -> Path:
    return root / str(kind) / f"{kind}.{language}.json"


def secondary_snapshot_path(root: Path, kind: EntityKind) -> Path:
    return root / str(kind) / f"{kind}.secondary.json"


def save_store(store: RecordStore[RawRecord], root: Path) -> list[Path]:
    grouped: dict[str, dict[str, list[RawRecord]]] = {}
    for language, group, records in store.items():
        grouped.setdefault(language, {})[_encode_group(group)] = list(records)

    adapter = _groups_adapter(store.kind)
    written: list[Path] = []
    for language in store.languages:
        if language not in grouped:
            continue
        path = language_snapshot_path(root, store.kind, language)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(adapter.dump_json(grouped[language], indent=2))
        written.append(path)
    log.info("Saved %s %s snapshot files under %s", len(written), store.kind, root)
    return written


def load_store(
    root: Path,
    kind: EntityKind,
    *,
    pivot: str,
    languages: Sequence[str],
) -> RecordStore[RawRecord]:
    """Rebuild a record store from snapshot files.

    A missing pivot snapshot raises ``SnapshotError``. Any other language without
    a snapshot file is left out of the store; the assembler reports it as missing
    data when it validates the store.
    """

    store: RecordStore[RawRecord] = RecordStore(
        kind=kind, pivot=pivot, languages=tuple(languages)
    )
    adapter = _groups_adapter(kind)
    for language in store.languages:
        path = language_snapshot_path(root, kind, language)
        if not path.is_file():
            if language == store.pivot:
                raise SnapshotError(f"Missing pivot {kind} snapshot: {path}")
            log.warning("No %s snapshot for language %s at %s", kind, language, path)
            continue
        try:
            groups = adapter.validate_json(path.read_bytes())
        except ValidationError as exc:
            raise SnapshotError(f"Invalid snapshot {path}: {exc}") from exc
        for key, records in groups.items():
            store.add(language, _decode_group(key, path=path), records)
    return store


def save_secondary(records: Sequence[SecondaryRecord], root: Path, kind: EntityKind) -> Path:
    path = secondary_snapshot_path(root, kind)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(_SECONDARY_ADAPTER.dump_json(list(records), indent=2))
    log.info("Saved %s secondary %s records to %s", len(records), kind, path)
    return path


def load_secondary(root: Path, kind: EntityKind) -> list[SecondaryRecord]:
    path = secondary_snapshot_path(root, kind)
    if not path.is_file():
        raise SnapshotError(f"Missing secondary {kind} snapshot: {path}")
    try:
        return _SECONDARY_ADAPTER.validate_json(path.read_bytes())
    except ValidationError as exc:
        raise SnapshotError(f"Invalid snapshot {path}: {exc}") from exc
