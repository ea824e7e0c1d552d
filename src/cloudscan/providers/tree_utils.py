"""Helpers shared by the tree builders."""

from __future__ import annotations

from cloudscan.domain import FolderNode, TreeNode


def attach_child(folder: FolderNode, node: TreeNode) -> str:
    """Attach ``node`` under ``folder`` without overwriting a sibling.

    The child is keyed by its name. When the name is already taken, the key
    gets the first free numeric suffix: ``"name (2)"``, ``"name (3)"``, ...
    The node's own ``name`` is left untouched.

    Returns:
        The key the node was stored under.
    """
    key = node.name
    suffix = 2
    while key in folder.children:
        key = f"{node.name} ({suffix})"
        suffix += 1
    folder.children[key] = node
    return key


def count_nodes(folder: FolderNode) -> int:
    """Return the number of nodes below ``folder`` (the folder excluded)."""
    return sum(1 for _ in folder.walk())

