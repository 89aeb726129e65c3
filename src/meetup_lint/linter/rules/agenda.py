"""
Agenda grammar rule.

Each non-blank line reads ``- <speaker(s)>: <talk description>``. The line is
split at the first ``": "``: a description may contain ``": "`` itself, a
speaker section may not.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Final

from meetup_lint.domain.models import EntityLink, FieldName, Record
from meetup_lint.linter.errors import LintError, LintIssue
from meetup_lint.linter.rules.base import FieldRule
from meetup_lint.linter.rules.entities import EntityDirectory, extract_entity_names

_AGENDA_LINE: Final[re.Pattern[str]] = re.compile(r"^- (.+?): (.+)$")

ENTRY_FORMAT: Final[str] = "- <speaker(s)>: <talk_description>"


@dataclass(frozen=True, slots=True)
class AgendaEntry:
    """One parsed agenda line."""

    speakers: tuple[str, ...]
    description: str

    def render(self, directory: EntityDirectory) -> str:
        speakers = ", ".join(directory.format_link(speaker) for speaker in self.speakers)
        return f"- {speakers}: {self.description}"


class AgendaRule(FieldRule):
    FIELD = FieldName.AGENDA

    def __init__(self, speakers: Iterable[EntityLink] | EntityDirectory) -> None:
        if isinstance(speakers, EntityDirectory):
            self._directory = speakers
        else:
            self._directory = EntityDirectory(speakers, kind="speakers")

    @property
    def directory(self) -> EntityDirectory:
        return self._directory

    def evaluate(self, record: Record, fix_mode: bool) -> Record:
        agenda = record.fields.get(self.field_name)
        if not isinstance(agenda, str) or not agenda:
            raise self.fail(agenda, "Must not be empty")

        entries: list[AgendaEntry] = []
        issues: list[LintIssue] = []
        for line in agenda.split("\n"):
            try:
                entry = self.parse_line(line)
            except LintError as error:
                issues.extend(error.get_issues())
                continue
            if entry is not None:
                entries.append(entry)

        if issues:
            raise LintError(issues)
        if not entries:
            raise self.fail(agenda, "Must contain at least one entry")

        record.derived["speakers"] = self.resolve_speakers(entries)
        if fix_mode:
            self.update_field(record, self.render(entries))
        return record

    def parse_line(self, line: str) -> AgendaEntry | None:
        """Parse one agenda line; ``None`` for blank lines."""

        if not line.strip():
            return None

        match = _AGENDA_LINE.match(line)
        if match is None:
            raise self.fail(line, f'Entry "{line}" must follow the format: "{ENTRY_FORMAT}"')

        speakers = extract_entity_names(match.group(1))
        for speaker in speakers:
            if not speaker:
                raise self.fail(line, "Speaker must not be empty")
            if not self._directory.contains(speaker):
                raise self.fail(speaker, self._directory.unknown_message(speaker))

        return AgendaEntry(speakers=tuple(speakers), description=match.group(2).strip())

    def render(self, entries: Sequence[AgendaEntry]) -> str:
        return "\n".join(entry.render(self._directory) for entry in entries)

    def resolve_speakers(self, entries: Sequence[AgendaEntry]) -> list[EntityLink]:
        """De-duplicated speakers in first-seen order."""

        seen: dict[str, EntityLink] = {}
        for entry in entries:
            for speaker in entry.speakers:
                if speaker not in seen:
                    seen[speaker] = self._directory.resolve(speaker)
        return list(seen.values())


__all__ = ["AgendaEntry", "AgendaRule", "ENTRY_FORMAT"]
