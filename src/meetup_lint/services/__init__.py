"""
meetup-lint — collaborator services

Purpose
- Body section rendering, record store contract, drive provisioning
  interfaces and the downstream output payload.
"""

from meetup_lint.services.body import BodySectionError, read_body_section, update_body_field
from meetup_lint.services.drive import (
    DriveError,
    DriveFile,
    DriveFolder,
    DriveFolderService,
    DriveTemplateService,
)
from meetup_lint.services.output import build_output
from meetup_lint.services.record_store import (
    InMemoryRecordStore,
    RecordPatch,
    RecordStore,
    changed_fields,
    diff_records,
)

__all__ = [
    "BodySectionError",
    "DriveError",
    "DriveFile",
    "DriveFolder",
    "DriveFolderService",
    "DriveTemplateService",
    "InMemoryRecordStore",
    "RecordPatch",
    "RecordStore",
    "build_output",
    "changed_fields",
    "diff_records",
    "read_body_section",
    "update_body_field",
]
