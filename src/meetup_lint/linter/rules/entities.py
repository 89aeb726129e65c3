"""
Entity-link extraction, whitelist lookup and the entity rules built on them.

Field text may hold bare names or ``[name](url)`` markdown links; multi-entity
text is comma-separated. Names match the whitelist case-sensitively.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import ClassVar, Final

from meetup_lint.domain.models import EntityLink, FieldName, FieldValue, Record
from meetup_lint.linter.rules.base import FieldRule

_LINK_PATTERN: Final[re.Pattern[str]] = re.compile(r"\[([^\]]+)\]\([^)]+\)")


def extract_entity_name(text: str) -> str:
    """Strip link syntax from a single-entity text."""

    return _LINK_PATTERN.sub(r"\1", text).strip()


def extract_entity_names(text: str) -> list[str]:
    """Strip link syntax, split on commas and trim each name. Empty names are kept."""

    cleaned = _LINK_PATTERN.sub(r"\1", text)
    return [name.strip() for name in cleaned.split(",")]


def has_link(text: str) -> bool:
    return _LINK_PATTERN.search(text) is not None


class EntityDirectory:
    """Ordered whitelist of known entities keyed by exact name."""

    __slots__ = ("_kind", "_urls")

    def __init__(self, entities: Iterable[EntityLink], *, kind: str = "entities") -> None:
        urls: dict[str, str] = {}
        for entity in entities:
            urls.setdefault(entity.name, entity.url)
        if not urls:
            raise ValueError(f"At least one known entry is required for {kind}")
        self._urls = urls
        self._kind = kind

    @property
    def kind(self) -> str:
        return self._kind

    def names(self) -> tuple[str, ...]:
        return tuple(self._urls)

    def contains(self, name: str) -> bool:
        return name in self._urls

    def url_for(self, name: str) -> str | None:
        return self._urls.get(name)

    def resolve(self, name: str) -> EntityLink:
        url = self._urls.get(name)
        if url is None:
            raise KeyError(name)
        return EntityLink(name=name, url=url)

    def format_link(self, name: str) -> str:
        url = self._urls.get(name)
        return f"[{name}]({url})" if url else name

    def unknown_message(self, name: str) -> str:
        return f'"{name}" is not in the list of known {self._kind}'

    def __len__(self) -> int:
        return len(self._urls)


def _directory(entities: Iterable[EntityLink] | EntityDirectory, kind: str) -> EntityDirectory:
    if isinstance(entities, EntityDirectory):
        return entities
    return EntityDirectory(entities, kind=kind)


class EntityLinkRule(FieldRule):
    """
    Comma-separated entity field checked against a whitelist.

    Text is rewritten to ``[name](url)`` links joined by ``", "`` in fix mode,
    or whenever it carries no link syntax at all. Resolved entities are stored
    in ``record.derived`` under ``derived_key`` when one is given. ``label`` names
    the body section when it differs from the default field label.
    """

    EMPTY_MESSAGE: ClassVar[str] = "Must not be empty"

    def __init__(
        self,
        field: str,
        entities: Iterable[EntityLink] | EntityDirectory,
        *,
        name: str | None = None,
        label: str | None = None,
        derived_key: str | None = None,
    ) -> None:
        self._field = field
        self._label = label
        self._directory = _directory(entities, "entities")
        self._name = name
        self._derived_key = derived_key

    @property
    def field_name(self) -> str:
        return self._field

    @property
    def field_label(self) -> str:
        return self._label or super().field_label

    @property
    def directory(self) -> EntityDirectory:
        return self._directory

    def name(self) -> str:
        return self._name or self._field

    def evaluate(self, record: Record, fix_mode: bool) -> Record:
        value = record.fields.get(self._field)
        text = ", ".join(value) if isinstance(value, list) else value
        if not isinstance(text, str) or not text.strip():
            raise self.fail(value, self.EMPTY_MESSAGE)

        names = extract_entity_names(text)
        messages: list[str] = []
        for entity_name in names:
            if not entity_name:
                messages.append("Entity must not be empty")
            elif not self._directory.contains(entity_name):
                messages.append(self._directory.unknown_message(entity_name))
        if messages:
            raise self.fail(value, *messages)

        if fix_mode or not has_link(text):
            links = [self._directory.format_link(entity_name) for entity_name in names]
            canonical: FieldValue = links if isinstance(value, list) else ", ".join(links)
            self.update_field(record, canonical)

        if self._derived_key is not None:
            record.derived[self._derived_key] = [
                self._directory.resolve(entity_name) for entity_name in dict.fromkeys(names)
            ]
        return record


class HosterRule(FieldRule):
    """The ``hoster`` field holds exactly one known hoster."""

    FIELD = FieldName.HOSTER

    def __init__(self, hosters: Iterable[EntityLink] | EntityDirectory) -> None:
        self._directory = _directory(hosters, "hosters")

    @property
    def directory(self) -> EntityDirectory:
        return self._directory

    def evaluate(self, record: Record, fix_mode: bool) -> Record:
        value = record.fields.get(self.field_name)
        entries = _hoster_entries(value)
        if not entries:
            raise self.fail(value, "Must not be empty")
        if len(entries) > 1:
            raise self.fail(value, "Must have exactly one entry")

        hoster_name = extract_entity_name(entries[0])
        if not self._directory.contains(hoster_name):
            raise self.fail(hoster_name, self._directory.unknown_message(hoster_name))

        if fix_mode or not has_link(entries[0]):
            self.update_field(record, [self._directory.format_link(hoster_name)])

        record.derived["hoster"] = self._directory.resolve(hoster_name)
        return record


def _hoster_entries(value: FieldValue | None) -> list[str]:
    if isinstance(value, list):
        return list(value)
    if isinstance(value, str) and value.strip():
        return [value]
    return []


__all__ = [
    "EntityDirectory",
    "EntityLinkRule",
    "HosterRule",
    "extract_entity_name",
    "extract_entity_names",
    "has_link",
]
