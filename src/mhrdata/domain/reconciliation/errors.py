"""Fatal reconciliation conditions.

Each of these aborts the run before any output is written. Recoverable outcomes
(unmatched entities, stale overrides, anomalies) are reported, not raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mhrdata.domain.model import EntityKind, GroupKey


class ReconciliationError(RuntimeError):
    """Base class for errors that abort a reconciliation run."""


class MissingLanguageData(ReconciliationError):  # noqa: N818
    """A configured language has no records for a group the pivot language has."""

    def __init__(self, *, kind: EntityKind, language: str, group: GroupKey) -> None:
        super().__init__(f"No {kind} records for language {language!r} in group {group!r}")
        self.kind = kind
        self.language = language
        self.group = group


class EmptyStoreError(ReconciliationError):
    """The pivot language has no records at all."""

    def __init__(self, *, kind: EntityKind, language: str) -> None:
        super().__init__(f"No {kind} records for pivot language {language!r}")
        self.kind = kind
        self.language = language


class GroupLengthMismatch(ReconciliationError):  # noqa: N818
    """A language's group is not the same length as the pivot's group."""

    def __init__(
        self,
        *,
        kind: EntityKind,
        language: str,
        group: GroupKey,
        expected: int,
        actual: int,
    ) -> None:
        super().__init__(
            f"{kind} group {group!r}: language {language!r} has {actual} records, "
            f"pivot has {expected}"
        )
        self.kind = kind
        self.language = language
        self.group = group
        self.expected = expected
        self.actual = actual


class EmptyIdentifierError(ReconciliationError):
    """A pivot display name normalized to an empty identifier."""

    def __init__(self, *, kind: EntityKind, group: GroupKey, index: int) -> None:
        super().__init__(f"Empty {kind} identifier at group {group!r}, index {index}")
        self.kind = kind
        self.group = group
        self.index = index


class AlignmentMismatchError(ReconciliationError):
    """Rows aligned by position disagree on language-independent values."""

    def __init__(
        self,
        *,
        kind: EntityKind,
        language: str,
        group: GroupKey,
        index: int,
    ) -> None:
        super().__init__(
            f"{kind} group {group!r}, index {index}: language {language!r} "
            "does not match the pivot row"
        )
        self.kind = kind
        self.language = language
        self.group = group
        self.index = index


class OverrideKindError(ReconciliationError):
    """An override targets an entity of a different kind."""


class EmptyNameError(ReconciliationError):
    """A non-pivot language has an empty display name at an aligned position."""

    def __init__(self, *, kind: EntityKind, language: str, group: GroupKey, index: int) -> None:
        super().__init__(
            f"Empty {kind} name for language {language!r} at group {group!r}, index {index}"
        )
        self.kind = kind
        self.language = language
        self.group = group
        self.index = index
