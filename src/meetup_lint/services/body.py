"""
Markdown issue-body section rendering.

Each field lives under a ``### <Label>`` heading. Labels come from the caller
when given, else from ``field_label`` (known form labels, then title case).
"""

from __future__ import annotations

import re

from meetup_lint.domain.models import Record, field_label


class BodySectionError(ValueError):
    """Raised when a field cannot be rendered into the issue body."""


def _section_pattern(label: str) -> re.Pattern[str]:
    return re.compile(rf"### {re.escape(label)}\s*\n(.*?)(?=\n###|\Z)", re.DOTALL)


def read_body_section(body: str, name: str, *, label: str | None = None) -> str | None:
    """Return the trimmed text of the ``### <Label>`` section for ``name``."""

    match = _section_pattern(_label_for(name, label)).search(body)
    if match is None:
        return None
    return match.group(1).strip()


def update_body_field(record: Record, name: str, *, label: str | None = None) -> None:
    """Re-render the body section of ``name`` from ``record.fields``."""

    heading = _label_for(name, label)
    pattern = _section_pattern(heading)
    if pattern.search(record.display_body) is None:
        raise BodySectionError(f'Field "{name}" not found in issue body')

    value = record.fields.get(name) or ""
    text = ", ".join(value) if isinstance(value, list) else value
    replacement = f"### {heading}\n\n{text.strip()}\n"
    record.display_body = pattern.sub(lambda _: replacement, record.display_body, count=1)


def _label_for(name: str, label: str | None) -> str:
    resolved = (label or field_label(name)).strip()
    if not resolved:
        raise BodySectionError(f"Invalid field: {name!r}")
    return resolved


__all__ = ["BodySectionError", "read_body_section", "update_body_field"]
