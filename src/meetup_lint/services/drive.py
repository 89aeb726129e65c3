"""
Shared-drive provisioning interfaces consumed by the drive link rule.

Only the async contracts live here; concrete clients are supplied by the
caller. Implementations report recoverable failures with ``DriveError`` so the
rule can surface them as lint issues.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


class DriveError(RuntimeError):
    """Folder or template state that prevents the drive link from validating."""


@dataclass(frozen=True, slots=True)
class DriveFolder:
    id: str
    name: str
    url: str


@dataclass(frozen=True, slots=True)
class DriveFile:
    """Template file, or a folder copy of one."""

    id: str
    name: str
    template_kind: str | None = None
    url: str | None = None


@runtime_checkable
class DriveFolderService(Protocol):
    async def get_folder(self, record_id: int) -> DriveFolder | None: ...

    async def create_folder(self, record_id: int, name: str) -> DriveFolder: ...

    async def update_folder_name(self, folder_id: str, name: str) -> DriveFolder: ...


@runtime_checkable
class DriveTemplateService(Protocol):
    async def get_template_files(self) -> Sequence[DriveFile]: ...

    async def find_by_template_id(
        self, folder_id: str, template: DriveFile
    ) -> DriveFile | None: ...

    async def update_template_kind(self, file: DriveFile, template: DriveFile) -> DriveFile: ...

    async def update_name(self, file: DriveFile, name: str) -> DriveFile: ...

    async def copy_template_file(
        self, template: DriveFile, folder_id: str, name: str
    ) -> DriveFile: ...


__all__ = [
    "DriveError",
    "DriveFile",
    "DriveFolder",
    "DriveFolderService",
    "DriveTemplateService",
]
