"""
Event link rules.

Each link must be an absolute URL matching a community-specific pattern. Fix
mode drops a single trailing slash. The drive link rule additionally checks
the event folder and its template copies through the drive services.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import date
from typing import Final
from urllib.parse import urlsplit

from meetup_lint.constants import (
    DEFAULT_CNCF_CHAPTER,
    DEFAULT_MEETUP_GROUP,
    EVENT_DATE_PLACEHOLDER,
)
from meetup_lint.domain.models import EntityLink, FieldName, Record
from meetup_lint.linter.rules.base import FieldRule, RuleOutput
from meetup_lint.linter.rules.entities import extract_entity_name
from meetup_lint.linter.rules.fields import parse_iso_date
from meetup_lint.services.drive import (
    DriveError,
    DriveFile,
    DriveFolder,
    DriveFolderService,
    DriveTemplateService,
)

MONTH_NAMES: Final[tuple[str, ...]] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def is_valid_url(value: str) -> bool:
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc) and " " not in value


class LinkRule(FieldRule):
    """URL field constrained by ``pattern``; ``hint`` is the mismatch message."""

    pattern: re.Pattern[str]
    hint: str

    def evaluate(self, record: Record, fix_mode: bool) -> RuleOutput:
        self.check_link(record, fix_mode)
        return record

    def check_link(self, record: Record, fix_mode: bool) -> str:
        value = record.fields.get(self.field_name)
        if not isinstance(value, str):
            raise self.fail(value, "Must not be empty")

        problems: list[str] = []
        if not is_valid_url(value):
            problems.append("Invalid url")
        if self.pattern.match(value) is None:
            problems.append(self.hint)
        if problems:
            raise self.fail(value, "; ".join(problems))

        if fix_mode and value.endswith("/"):
            value = value[:-1]
            self.update_field(record, value)
        return value


class MeetupLinkRule(LinkRule):
    FIELD = FieldName.MEETUP_LINK

    def __init__(self, group: str = DEFAULT_MEETUP_GROUP) -> None:
        self.pattern = re.compile(
            rf"^https://www\.meetup\.com/{re.escape(group)}/events/[0-9]+/?$"
        )
        self.hint = (
            "Must be a valid Meetup link, e.g. "
            f"https://www.meetup.com/{group}/events/123456789"
        )


class CncfLinkRule(LinkRule):
    FIELD = FieldName.CNCF_LINK

    def __init__(self, chapter: str = DEFAULT_CNCF_CHAPTER) -> None:
        self.pattern = re.compile(
            rf"^https://community\.cncf\.io/events/details/"
            rf"{re.escape(chapter)}-presents-[0-9a-z-]+/?$"
        )
        self.hint = (
            "Must be a valid CNCF link, e.g. "
            f"https://community.cncf.io/events/details/{chapter}-presents-test-meetup-event"
        )


class DriveLinkRule(LinkRule):
    """
    Drive link to the event folder, whose content mirrors the template files.

    The folder is named ``<date> - <Month> - <hoster>``. Every template file
    must have a copy in the folder, named after the template with the event
    date placeholder substituted. Fix mode creates, renames and copies as
    needed. Collected file links are stored in ``record.derived["drive_files"]``.
    """

    FIELD = FieldName.DRIVE_LINK
    pattern = re.compile(
        r"^https://drive\.google\.com/drive/folders/[A-Za-z0-9_-]+/?$"
    )
    hint = (
        "Must be a valid Drive Link, e.g. "
        "https://drive.google.com/drive/folders/1a2b3c4d5e6f7g8h9i0j"
    )

    def __init__(
        self, folder_service: DriveFolderService, template_service: DriveTemplateService
    ) -> None:
        self._folders = folder_service
        self._templates = template_service

    def dependencies(self) -> tuple[str, ...]:
        return (FieldName.EVENT_DATE, FieldName.HOSTER)

    async def evaluate(self, record: Record, fix_mode: bool) -> Record:
        self.check_link(record, fix_mode)
        try:
            folder = await self._sync_folder(record, fix_mode)
            drive_files = await self._sync_files(record, folder, fix_mode)
        except DriveError as error:
            raise self.fail(record.fields.get(self.field_name), str(error)) from error

        record.derived["drive_files"] = drive_files
        return record

    def folder_name(self, record: Record) -> str:
        event_date = (record.get_text(FieldName.EVENT_DATE) or "").strip()
        if not event_date:
            raise DriveError("Cannot auto-create folder - Event Date is required")
        parsed = parse_iso_date(event_date)
        if parsed is None:
            raise DriveError("Cannot auto-create folder - Event Date is invalid")

        hoster = _hoster_name(record)
        if not hoster:
            raise DriveError("Cannot auto-create folder - Hoster is required")
        return f"{event_date} - {_month_name(parsed)} - {hoster}"

    async def _sync_folder(self, record: Record, fix_mode: bool) -> DriveFolder:
        expected = self.folder_name(record)
        folder = await self._folders.get_folder(record.id)

        if folder is None:
            if not fix_mode:
                raise DriveError(
                    f"Folder does not exist on Google Drive for meetup issue #{record.id}"
                )
            folder = await self._folders.create_folder(record.id, expected)
            self.update_field(record, folder.url)
            return folder

        if folder.name != expected:
            if not fix_mode:
                raise DriveError(
                    f'Folder name mismatch. Expected: "{expected}", Found: "{folder.name}"'
                )
            folder = await self._folders.update_folder_name(folder.id, expected)
        return folder

    async def _sync_files(
        self, record: Record, folder: DriveFolder, fix_mode: bool
    ) -> dict[str, str]:
        event_date = (record.get_text(FieldName.EVENT_DATE) or "").strip()
        templates: Sequence[DriveFile] = await self._templates.get_template_files()
        if not templates:
            raise DriveError("No template files found for Google Drive folder linting.")

        drive_files: dict[str, str] = {}
        for template in templates:
            expected_name = template.name.replace(EVENT_DATE_PLACEHOLDER, event_date)
            current = await self._templates.find_by_template_id(folder.id, template)

            if current is None:
                if not fix_mode:
                    raise DriveError(
                        f'Missing file for template ID {template.id} in folder "{folder.name}"'
                    )
                current = await self._templates.copy_template_file(
                    template, folder.id, expected_name
                )
            else:
                if current.template_kind != template.template_kind:
                    if not fix_mode:
                        raise DriveError(
                            f"Template kind mismatch for template ID {template.id}. "
                            f'Expected: "{template.template_kind}", '
                            f'Found: "{current.template_kind or "none"}"'
                        )
                    current = await self._templates.update_template_kind(current, template)

                if current.name != expected_name:
                    if not fix_mode:
                        raise DriveError(
                            f"File name mismatch for template ID {template.id}. "
                            f'Expected: "{expected_name}", Found: "{current.name}"'
                        )
                    current = await self._templates.update_name(current, expected_name)

            if current.url:
                drive_files[f"{template.template_kind}-link"] = current.url
        return drive_files


def _hoster_name(record: Record) -> str:
    resolved = record.derived.get("hoster")
    if isinstance(resolved, EntityLink):
        return resolved.name
    hosters = record.get_list(FieldName.HOSTER) or []
    return extract_entity_name(hosters[0]) if hosters else ""


def _month_name(value: date) -> str:
    return MONTH_NAMES[value.month - 1]


__all__ = [
    "MONTH_NAMES",
    "CncfLinkRule",
    "DriveLinkRule",
    "LinkRule",
    "MeetupLinkRule",
    "is_valid_url",
]
