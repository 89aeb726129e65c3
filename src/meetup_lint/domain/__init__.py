"""
meetup-lint — domain types

Purpose
- Record, entity whitelist entries and field naming shared by rules and services.
- Keep the domain layer free of IO side effects.
"""

from meetup_lint.domain.models import (
    FIELD_LABELS,
    EntityLink,
    FieldName,
    FieldValue,
    Record,
    entities_from_payload,
    field_label,
    field_path,
    render_body,
)

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
