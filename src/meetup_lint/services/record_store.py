"""Record store contract and sparse patch computation for committing fixes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from meetup_lint.domain.models import FieldValue, Record


@dataclass(frozen=True, slots=True)
class RecordPatch:
    """Top-level record attributes to persist. ``None`` means unchanged."""

    title: str | None = None
    labels: tuple[str, ...] | None = None
    display_body: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.title is None and self.labels is None and self.display_body is None

    def changed_attributes(self) -> tuple[str, ...]:
        changed: list[str] = []
        if self.title is not None:
            changed.append("title")
        if self.labels is not None:
            changed.append("labels")
        if self.display_body is not None:
            changed.append("display_body")
        return tuple(changed)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {}
        if self.title is not None:
            payload["title"] = self.title
        if self.labels is not None:
            payload["labels"] = list(self.labels)
        if self.display_body is not None:
            payload["body"] = self.display_body
        return payload


@runtime_checkable
class RecordStore(Protocol):
    """Issue-tracker backed persistence of top-level record attributes."""

    async def update_record(self, record_id: int, patch: RecordPatch) -> None: ...


class InMemoryRecordStore(RecordStore):
    """Dictionary-backed store; keeps every applied patch for inspection."""

    def __init__(self, records: Mapping[int, Record] | None = None) -> None:
        self._records: dict[int, Record] = {
            record_id: record.clone() for record_id, record in (records or {}).items()
        }
        self.patches: list[tuple[int, RecordPatch]] = []

    def get_record(self, record_id: int) -> Record:
        try:
            return self._records[record_id].clone()
        except KeyError:
            raise KeyError(f"Unknown record: {record_id}") from None

    async def update_record(self, record_id: int, patch: RecordPatch) -> None:
        self.patches.append((record_id, patch))
        stored = self._records.get(record_id)
        if stored is None:
            return
        if patch.title is not None:
            stored.title = patch.title
        if patch.labels is not None:
            stored.labels = list(patch.labels)
        if patch.display_body is not None:
            stored.display_body = patch.display_body


def values_equal(left: FieldValue | None, right: FieldValue | None) -> bool:
    """Compare field values, lists by value."""

    if isinstance(left, list) or isinstance(right, list):
        return list(left or ()) == list(right or ()) and type(left) is type(right)
    return left == right


def labels_equal(left: list[str], right: list[str]) -> bool:
    return sorted(left) == sorted(right)


def changed_fields(original: Record, updated: Record) -> tuple[str, ...]:
    """Names of ``fields`` entries whose value differs between two records."""

    names = list(updated.fields)
    names.extend(name for name in original.fields if name not in updated.fields)
    return tuple(
        name
        for name in names
        if not values_equal(original.fields.get(name), updated.fields.get(name))
    )


def diff_records(original: Record, updated: Record) -> RecordPatch:
    """Compute the sparse patch turning ``original`` into ``updated``."""

    if original.id != updated.id:
        raise ValueError("Issue number mismatch")

    title = updated.title if original.title != updated.title else None
    labels = None if labels_equal(original.labels, updated.labels) else tuple(updated.labels)
    body = updated.display_body if original.display_body != updated.display_body else None
    return RecordPatch(title=title, labels=labels, display_body=body)


__all__ = [
    "InMemoryRecordStore",
    "RecordPatch",
    "RecordStore",
    "changed_fields",
    "diff_records",
    "labels_equal",
    "values_equal",
]
