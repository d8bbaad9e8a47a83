"""Per-language record store.

Holds the scraping adapter's output for one entity kind: an ordered sequence of
raw records per ``(language, group)``. Order is the alignment key for assembly,
so the store never reorders, deduplicates or mutates records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import EmptyStoreError, GroupLengthMismatch, MissingLanguageData

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence

    from mhrdata.domain.model import EntityKind, GroupKey, RawRecord

log = logging.getLogger(__name__)


def group_sort_key(group: GroupKey) -> tuple[bool, int]:
    """Ascending group order with the flat ``None`` group first."""

    return (group is not None, group if group is not None else 0)


@dataclass(slots=True)
class RecordStore[R: RawRecord]:
    kind: EntityKind
    pivot: str
    languages: tuple[str, ...]
    _records: dict[tuple[str, GroupKey], tuple[R, ...]] = field(
        default_factory=dict["tuple[str, GroupKey]", "tuple[R, ...]"], repr=False, init=False
    )

    def __post_init__(self) -> None:
        if not self.languages:
            raise ValueError(f"No languages configured for {self.kind}")
        if len(set(self.languages)) != len(self.languages):
            raise ValueError(f"Duplicate languages configured for {self.kind}")
        if self.pivot not in self.languages:
            raise ValueError(
                f"Pivot language {self.pivot!r} is not one of {', '.join(self.languages)}"
            )

    @classmethod
    def from_mapping(
        cls,
        *,
        kind: EntityKind,
        pivot: str,
        languages: Sequence[str],
        records: Mapping[str, Mapping[GroupKey, Sequence[R]]],
    ) -> RecordStore[R]:
        store = cls(kind=kind, pivot=pivot, languages=tuple(languages))
        for language, groups in records.items():
            for group, sequence in groups.items():
                store.add(language, group, sequence)
        return store

    def add(self, language: str, group: GroupKey, records: Iterable[R]) -> None:
        if language not in self.languages:
            raise ValueError(f"Language {language!r} is not configured for {self.kind}")
        self._records[(language, group)] = tuple(records)

    def get(self, language: str, group: GroupKey) -> tuple[R, ...]:
        try:
            return self._records[(language, group)]
        except KeyError:
            raise MissingLanguageData(kind=self.kind, language=language, group=group) from None

    def has(self, language: str, group: GroupKey) -> bool:
        return (language, group) in self._records

    def groups(self) -> list[GroupKey]:
        """Groups the pivot language has records for, in ascending order."""

        pivot_groups = {group for language, group in self._records if language == self.pivot}
        return sorted(pivot_groups, key=group_sort_key)

    def items(self) -> Iterator[tuple[str, GroupKey, tuple[R, ...]]]:
        for (language, group), records in self._records.items():
            yield language, group, records

    def validate(self) -> None:
        """Check that every language mirrors the pivot's group lengths.

        Positional alignment cannot detect a one-off shift, so any gap or length
        difference is fatal for the whole run. An empty sequence counts as a gap,
        and so does a pivot language without any groups.
        """

        groups = self.groups()
        if not groups:
            raise EmptyStoreError(kind=self.kind, language=self.pivot)
        for group in groups:
            for language in self.languages:
                if not self._records.get((language, group)):
                    raise MissingLanguageData(kind=self.kind, language=language, group=group)
            expected = len(self._records[(self.pivot, group)])
            for language in self.languages:
                actual = len(self._records[(language, group)])
                if actual != expected:
                    raise GroupLengthMismatch(
                        kind=self.kind,
                        language=language,
                        group=group,
                        expected=expected,
                        actual=actual,
                    )
        log.debug(
            "Validated %s store: %s languages, %s groups",
            self.kind,
            len(self.languages),
            len(groups),
        )
