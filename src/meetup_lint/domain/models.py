"""Dataclass domain models for meetup issue records and entity whitelists."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final, NoReturn

FieldValue = str | list[str]


class FieldName(StrEnum):
    EVENT_DATE = "event_date"
    EVENT_TITLE = "event_title"
    HOSTER = "hoster"
    EVENT_DESCRIPTION = "event_description"
    AGENDA = "agenda"
    MEETUP_LINK = "meetup_link"
    CNCF_LINK = "cncf_link"
    DRIVE_LINK = "drive_link"


# Section headings used in the rendered issue body, keyed by field name.
FIELD_LABELS: Final[Mapping[str, str]] = {
    FieldName.EVENT_DATE: "Event Date",
    FieldName.EVENT_TITLE: "Event Title",
    FieldName.HOSTER: "Hoster",
    FieldName.EVENT_DESCRIPTION: "Event Description",
    FieldName.AGENDA: "Agenda",
    FieldName.MEETUP_LINK: "Meetup Link",
    FieldName.CNCF_LINK: "CNCF Link",
    FieldName.DRIVE_LINK: "Drive Link",
}


def field_path(name: str) -> str:
    """Issue path for a ``fields`` entry, e.g. ``fields.agenda``."""

    return f"fields.{name}"


def field_label(name: str) -> str:
    """Body section label for ``name``; unknown fields fall back to title case."""

    return FIELD_LABELS.get(name) or name.replace("_", " ").strip().title()


@dataclass(frozen=True, slots=True)
class EntityLink:
    """Known entity (hoster, speaker) and its canonical URL."""

    name: str
    url: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            _fail("EntityLink.name", "must be a non-empty string")
        if not isinstance(self.url, str) or not self.url.strip():
            _fail("EntityLink.url", "must be a non-empty string")

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> EntityLink:
        name = payload.get("name")
        url = payload.get("url")
        if not isinstance(name, str):
            _fail("EntityLink.name", f"must be a string, got {type(name).__name__}")
        if not isinstance(url, str):
            _fail("EntityLink.url", f"must be a string, got {type(url).__name__}")
        return cls(name=name, url=url)

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "url": self.url}


@dataclass(slots=True)
class Record:
    """
    Meetup issue under validation.

    ``fields`` is the canonical parsed state; ``display_body`` is the markdown
    rendering the issue tracker stores. ``derived`` holds rule side outputs
    consumed by the output payload builder.
    """

    id: int
    title: str | None = None
    labels: list[str] = field(default_factory=list)
    display_body: str = ""
    fields: dict[str, FieldValue] = field(default_factory=dict)
    derived: dict[str, object] = field(default_factory=dict)

    def clone(self) -> Record:
        return Record(
            id=self.id,
            title=self.title,
            labels=list(self.labels),
            display_body=self.display_body,
            fields=copy.deepcopy(self.fields),
            derived=copy.deepcopy(self.derived),
        )

    def get_text(self, name: str) -> str | None:
        value = self.fields.get(name)
        return value if isinstance(value, str) else None

    def get_list(self, name: str) -> list[str] | None:
        value = self.fields.get(name)
        return value if isinstance(value, list) else None

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> Record:
        raw_id = payload.get("id", payload.get("number"))
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            _fail("Record.id", "must be an integer")

        title = payload.get("title")
        if title is not None and not isinstance(title, str):
            _fail("Record.title", "must be a string or null")

        labels = _as_str_list(payload.get("labels", []), "Record.labels")

        body = payload.get("display_body", payload.get("body", ""))
        if not isinstance(body, str):
            _fail("Record.display_body", "must be a string")

        raw_fields = payload.get("fields", payload.get("parsed_body", {}))
        if not isinstance(raw_fields, Mapping):
            _fail("Record.fields", "must be an object")
        fields: dict[str, FieldValue] = {}
        for key, value in raw_fields.items():
            if not isinstance(key, str):
                _fail("Record.fields", "keys must be strings")
            if isinstance(value, str):
                fields[key] = value
            else:
                fields[key] = _as_str_list(value, f"Record.fields.{key}")

        return cls(id=raw_id, title=title, labels=labels, display_body=body, fields=fields)


def render_body(fields: Mapping[str, FieldValue]) -> str:
    """Render a full issue body with one section per known field, in form order."""

    order = (
        FieldName.EVENT_TITLE,
        FieldName.EVENT_DATE,
        FieldName.HOSTER,
        FieldName.EVENT_DESCRIPTION,
        FieldName.AGENDA,
        FieldName.MEETUP_LINK,
        FieldName.CNCF_LINK,
        FieldName.DRIVE_LINK,
    )
    sections: list[str] = []
    for name in order:
        value = fields.get(name, "")
        text = ", ".join(value) if isinstance(value, list) else value
        sections.append(f"### {FIELD_LABELS[name]}\n\n{text}\n")
    return "\n".join(sections)


def entities_from_payload(raw: Iterable[Mapping[str, object]]) -> tuple[EntityLink, ...]:
    return tuple(EntityLink.from_dict(item) for item in raw)


def _as_str_list(value: object, path: str) -> list[str]:
    if not isinstance(value, list):
        _fail(path, "must be a list of strings")
    items: list[str] = []
    for index, item in enumerate(value):
        if not isinstance(item, str):
            _fail(f"{path}[{index}]", "must be a string")
        items.append(item)
    return items


def _fail(path: str, message: str) -> NoReturn:
    raise ValueError(f"{path}: {message}")


__all__ = [
    "FIELD_LABELS",
    "EntityLink",
    "FieldName",
    "FieldValue",
    "Record",
    "entities_from_payload",
    "field_label",
    "field_path",
    "render_body",
]
