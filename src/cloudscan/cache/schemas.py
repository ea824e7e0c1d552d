"""Pydantic schemas for persisted scan snapshots.

The persisted layout is ``{"vulnerableFiles": [...], "fileTree": {...},
"summary": {...}}`` with camelCase keys. These models only validate the
document; conversion to domain types lives in ``serialization``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cloudscan.domain import Severity


class _SnapshotBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class FileRecordModel(_SnapshotBase):
    """A persisted FileRecord."""

    id: str
    name: str
    type: Literal["file", "folder"]
    size: int | None = None
    modified_time: str | None = Field(default=None, alias="modifiedTime")
    parents: list[str] | None = None
    path: str | None = None
    mime_type: str | None = Field(default=None, alias="mimeType")

    @model_validator(mode="after")
    def check_single_locator(self) -> FileRecordModel:
        """Exactly one of ``parents`` and ``path`` must be present."""
        if (self.parents is None) == (self.path is None):
            raise ValueError("file must have exactly one of 'parents' or 'path'")
        return self


class RiskModel(_SnapshotBase):
    """A persisted RiskMatch."""

    type: str
    severity: Severity
    description: str


class FindingModel(_SnapshotBase):
    """A persisted Finding."""

    file: FileRecordModel
    risks: list[RiskModel] = Field(min_length=1)
    folder_path: str = Field(alias="folderPath")


class TreeNodeModel(_SnapshotBase):
    """A persisted folder or leaf node."""

    name: str
    type: Literal["file", "folder"]
    id: str
    size: int | None = None
    modified_time: str | None = Field(default=None, alias="modifiedTime")
    mime_type: str | None = Field(default=None, alias="mimeType")
    children: dict[str, TreeNodeModel] | None = None

    @model_validator(mode="after")
    def check_children(self) -> TreeNodeModel:
        """Folders carry a children mapping; files never do."""
        if self.type == "folder" and self.children is None:
            raise ValueError(f"folder {self.id!r} is missing 'children'")
        if self.type == "file" and self.children is not None:
            raise ValueError(f"file {self.id!r} must not have 'children'")
        return self


class SummaryModel(_SnapshotBase):
    """A persisted ScanSummary."""

    total_files: int = Field(alias="totalFiles", ge=0)
    total_files_fetched: int = Field(default=0, alias="totalFilesFetched", ge=0)
    vulnerable_files: int = Field(alias="vulnerableFiles", ge=0)
    scan_date: str = Field(alias="scanDate")
    provider: str
    severity_counts: dict[str, int] = Field(
        default_factory=dict, alias="severityCounts"
    )


class SnapshotModel(_SnapshotBase):
    """A complete persisted ScanResult."""

    vulnerable_files: list[FindingModel] = Field(alias="vulnerableFiles")
    file_tree: TreeNodeModel = Field(alias="fileTree")
    summary: SummaryModel

    @model_validator(mode="after")
    def check_root_is_folder(self) -> SnapshotModel:
        """The tree root is always a folder."""
        if self.file_tree.type != "folder":
            raise ValueError("fileTree root must be a folder")
        return self


TreeNodeModel.model_rebuild()
