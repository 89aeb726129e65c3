"""Sample meetup records and entity whitelists shared by unit tests."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from meetup_lint.domain.models import EntityLink, FieldValue, Record, render_body

HOSTERS: tuple[EntityLink, ...] = (
    EntityLink(name="Hoster 1", url="https://example.com/hoster1"),
    EntityLink(name="Hoster 2", url="https://example.com/hoster2"),
)

SPEAKERS: tuple[EntityLink, ...] = (
    EntityLink(name="Speaker One", url="https://example.com/speaker1"),
    EntityLink(name="Speaker Two", url="https://example.com/speaker2"),
)

MEETUP_LINK = "https://www.meetup.com/cloud-native-aix-marseille/events/123456789"
CNCF_LINK = (
    "https://community.cncf.io/events/details/"
    "cncf-cloud-native-aix-marseille-presents-test-meetup-event"
)
DRIVE_FOLDER_ID = "1a2b3c4d5e6f7g8h9i0j"
DRIVE_LINK = f"https://drive.google.com/drive/folders/{DRIVE_FOLDER_ID}"
VALID_TITLE = "[Meetup] - 2021-12-31 - Meetup Event"
VALID_LABELS = ("meetup", "hoster:confirmed")


def meetup_fields(**overrides: FieldValue) -> dict[str, FieldValue]:
    """Valid, canonical field values; keyword overrides replace single fields."""

    fields: dict[str, FieldValue] = {
        "event_date": "2021-12-31",
        "event_title": "Meetup Event",
        "hoster": ["[Hoster 1](https://example.com/hoster1)"],
        "event_description": "This is the event description.",
        "agenda": (
            "- [Speaker One](https://example.com/speaker1): Talk description One\n"
            "- [Speaker Two](https://example.com/speaker2): Talk description Two"
        ),
        "meetup_link": MEETUP_LINK,
        "cncf_link": CNCF_LINK,
        "drive_link": DRIVE_LINK,
    }
    fields.update(overrides)
    return fields


def meetup_record(*, fields: dict[str, FieldValue] | None = None, **attributes: Any) -> Record:
    """Valid record number 1 whose body is rendered from its fields."""

    values = meetup_fields(**(fields or {}))
    record = Record(
        id=1,
        title=VALID_TITLE,
        labels=list(VALID_LABELS),
        display_body=render_body(values),
        fields=values,
    )
    return replace(record, **attributes) if attributes else record


__all__ = [
    "CNCF_LINK",
    "DRIVE_FOLDER_ID",
    "DRIVE_LINK",
    "HOSTERS",
    "MEETUP_LINK",
    "SPEAKERS",
    "VALID_LABELS",
    "VALID_TITLE",
    "meetup_fields",
    "meetup_record",
]
