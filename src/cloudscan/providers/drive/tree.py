"""Tree builder for the parent-graph (Google Drive) model."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from cloudscan.domain import ROOT_ID, FileRecord, FolderNode, LeafNode
from cloudscan.providers.base import TreeBuilder
from cloudscan.providers.drive.paths import FolderMap, primary_parent, remember_folder
from cloudscan.providers.tree_utils import attach_child

logger = logging.getLogger(__name__)


class DriveTreeBuilder(TreeBuilder):
    """Two-pass builder: create every folder node, then attach by parent id.

    Records whose primary parent is not a listed folder (the Drive root
    folder itself, shared or unreachable parents) attach to the root.

    Parent links are read from ``folders``, the map FolderPathResolver fills
    during enumeration; listed folders missing from it are added first.
    """

    root_name = "My Drive"

    def __init__(self, folders: FolderMap | None = None) -> None:
        self.folders: FolderMap = folders if folders is not None else {}

    def build(self, records: Iterable[FileRecord]) -> FolderNode:
        root = FolderNode(name=self.root_name, id=ROOT_ID)
        ordered = sorted(records, key=lambda r: r.id)
        folders = [r for r in ordered if r.is_folder]
        files = [r for r in ordered if not r.is_folder]

        # Pass 1: a node per folder record
        nodes: dict[str, FolderNode] = {}
        for record in folders:
            if self.folders.get(record.id) is None:
                remember_folder(self.folders, record)
            nodes[record.id] = FolderNode(name=record.name, id=record.id)

        # Pass 2: folders first, then files
        orphans = 0
        for record in folders:
            parent = self._parent_for_folder(record.id, nodes, root)
            if parent is root and record.primary_parent not in (None, ROOT_ID):
                orphans += 1
            attach_child(parent, nodes[record.id])

        for record in files:
            parent_id = record.primary_parent
            parent = nodes.get(parent_id, root) if parent_id else root
            if parent is root and parent_id not in (None, ROOT_ID):
                orphans += 1
            attach_child(
                parent,
                LeafNode(
                    name=record.name,
                    id=record.id,
                    size=record.size,
                    modified_time=record.modified_time,
                    mime_type=record.mime_type,
                ),
            )

        logger.debug(
            "Built Drive tree: %d folders, %d files, %d attached to root "
            "without a listed parent",
            len(folders),
            len(files),
            orphans,
        )
        return root

    def _parent_for_folder(
        self, folder_id: str, nodes: dict[str, FolderNode], root: FolderNode
    ) -> FolderNode:
        """Return the node ``folder_id`` hangs from.

        Falls back to root when the parent is unknown or when following
        parents from it leads back to ``folder_id`` (which would leave the
        folder unreachable).
        """
        parent_id = primary_parent(self.folders, folder_id)
        if not parent_id or parent_id not in nodes:
            return root

        seen: set[str] = set()
        current: str | None = parent_id
        while current is not None and current in nodes and current not in seen:
            if current == folder_id:
                logger.warning("Folder %s is its own ancestor, using root", folder_id)
                return root
            seen.add(current)
            current = primary_parent(self.folders, current)
        return nodes[parent_id]
