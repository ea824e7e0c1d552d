"""Conversion between ScanResult and its persisted JSON structure."""

from __future__ import annotations

from typing import Any

from cloudscan.cache.schemas import (
    FileRecordModel,
    FindingModel,
    SnapshotModel,
    TreeNodeModel,
)
from cloudscan.domain import (
    FileRecord,
    Finding,
    FolderNode,
    LeafNode,
    RiskMatch,
    ScanResult,
    ScanSummary,
    TreeNode,
)


def record_to_dict(record: FileRecord) -> dict[str, Any]:
    """Serialize a FileRecord, keeping only the locator it actually has."""
    data: dict[str, Any] = {
        "id": record.id,
        "name": record.name,
        "type": "folder" if record.is_folder else "file",
        "size": record.size,
        "modifiedTime": record.modified_time,
    }
    if record.parent_ids is not None:
        data["parents"] = list(record.parent_ids)
    else:
        data["path"] = record.full_path
    if record.mime_type is not None:
        data["mimeType"] = record.mime_type
    return data


def node_to_dict(node: TreeNode) -> dict[str, Any]:
    """Serialize a tree node recursively."""
    if isinstance(node, FolderNode):
        return {
            "name": node.name,
            "type": "folder",
            "id": node.id,
            "children": {
                key: node_to_dict(child) for key, child in node.children.items()
            },
        }
    data: dict[str, Any] = {
        "name": node.name,
        "type": "file",
        "id": node.id,
        "size": node.size,
        "modifiedTime": node.modified_time,
    }
    if node.mime_type is not None:
        data["mimeType"] = node.mime_type
    return data


def result_to_dict(result: ScanResult) -> dict[str, Any]:
    """Serialize a ScanResult to its persisted JSON structure."""
    summary = result.summary
    return {
        "vulnerableFiles": [
            {
                "file": record_to_dict(finding.record),
                "risks": [
                    {
                        "type": risk.category,
                        "severity": risk.severity.value,
                        "description": risk.description,
                    }
                    for risk in finding.risks
                ],
                "folderPath": finding.folder_path,
            }
            for finding in result.findings
        ],
        "fileTree": node_to_dict(result.tree),
        "summary": {
            "totalFiles": summary.total_records_scanned,
            "totalFilesFetched": summary.total_records_fetched,
            "vulnerableFiles": summary.finding_count,
            "scanDate": summary.scan_timestamp,
            "provider": summary.provider_label,
            "severityCounts": dict(summary.severity_counts),
        },
    }


def _record_from_model(model: FileRecordModel) -> FileRecord:
    return FileRecord(
        id=model.id,
        name=model.name,
        is_folder=model.type == "folder",
        size=model.size,
        modified_time=model.modified_time,
        parent_ids=tuple(model.parents) if model.parents is not None else None,
        full_path=model.path,
        mime_type=model.mime_type,
    )


def _finding_from_model(model: FindingModel) -> Finding:
    return Finding(
        record=_record_from_model(model.file),
        risks=tuple(
            RiskMatch(category=r.type, severity=r.severity, description=r.description)
            for r in model.risks
        ),
        folder_path=model.folder_path,
    )


def _node_from_model(model: TreeNodeModel) -> TreeNode:
    if model.type == "file":
        return LeafNode(
            name=model.name,
            id=model.id,
            size=model.size,
            modified_time=model.modified_time,
            mime_type=model.mime_type,
        )
    folder = FolderNode(name=model.name, id=model.id)
    for key, child in (model.children or {}).items():
        folder.children[key] = _node_from_model(child)
    return folder


def result_from_model(model: SnapshotModel) -> ScanResult:
    """Rebuild a ScanResult from a validated snapshot document."""
    tree = _node_from_model(model.file_tree)
    assert isinstance(tree, FolderNode)  # enforced by SnapshotModel
    summary = model.summary
    return ScanResult(
        findings=tuple(_finding_from_model(f) for f in model.vulnerable_files),
        tree=tree,
        summary=ScanSummary(
            total_records_scanned=summary.total_files,
            finding_count=summary.vulnerable_files,
            scan_timestamp=summary.scan_date,
            provider_label=summary.provider,
            total_records_fetched=summary.total_files_fetched,
            severity_counts=dict(summary.severity_counts),
        ),
    )
