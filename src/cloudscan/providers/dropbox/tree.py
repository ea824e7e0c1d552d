"""Tree builder for the flat-path (Dropbox) model."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from cloudscan.domain import ROOT_ID, FileRecord, FolderNode, LeafNode
from cloudscan.providers.base import TreeBuilder
from cloudscan.providers.tree_utils import attach_child, count_nodes

logger = logging.getLogger(__name__)


def synthetic_folder_id(segments: list[str]) -> str:
    """Id for a folder implied by a path but not listed itself."""
    return "folder:/" + "/".join(segments).lower()


class DropboxTreeBuilder(TreeBuilder):
    """Builds the tree by splitting every record's full path.

    Intermediate folders are created on demand with a synthetic id; when the
    folder's own record is processed it adopts the real id. Dropbox paths
    are case-insensitive and only the last component of ``path_display`` has
    reliable casing, so folders are looked up by lowercased path while nodes
    keep the first display name seen.
    """

    root_name = "Dropbox"

    def build(self, records: Iterable[FileRecord]) -> FolderNode:
        root = FolderNode(name=self.root_name, id=ROOT_ID)
        folders: dict[str, FolderNode] = {"": root}
        # Parents sort before their children, so listed folders are usually
        # placed before anything is attached below them
        ordered = sorted(records, key=lambda r: ((r.full_path or "").lower(), r.id))

        for record in ordered:
            segments = [part for part in (record.full_path or "").split("/") if part]
            if not segments:
                logger.warning(
                    "Record %s has no path, attaching to root by name", record.id
                )
                segments = [record.name]

            current = root
            for depth in range(1, len(segments)):
                current = self._folder_at(folders, current, segments[:depth])

            name = segments[-1]
            if record.is_folder:
                self._attach_folder(folders, current, record.id, segments)
            else:
                attach_child(
                    current,
                    LeafNode(
                        name=name,
                        id=record.id,
                        size=record.size,
                        modified_time=record.modified_time,
                    ),
                )

        logger.debug("Built Dropbox tree: %d nodes", count_nodes(root))
        return root

    @staticmethod
    def _folder_at(
        folders: dict[str, FolderNode], parent: FolderNode, segments: list[str]
    ) -> FolderNode:
        """Return the folder at ``segments``, creating it under ``parent``."""
        key = "/".join(segments).lower()
        folder = folders.get(key)
        if folder is None:
            folder = FolderNode(name=segments[-1], id=synthetic_folder_id(segments))
            attach_child(parent, folder)
            folders[key] = folder
        return folder

    @staticmethod
    def _attach_folder(
        folders: dict[str, FolderNode],
        parent: FolderNode,
        record_id: str,
        segments: list[str],
    ) -> None:
        """Attach a listed folder, adopting an implicitly created node."""
        key = "/".join(segments).lower()
        existing = folders.get(key)
        if existing is not None and existing.id == synthetic_folder_id(segments):
            existing.id = record_id
            return
        folder = FolderNode(name=segments[-1], id=record_id)
        attach_child(parent, folder)
        folders.setdefault(key, folder)
