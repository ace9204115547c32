"""Tree models for browsing archive entries by folder."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True)
class FileNode:
    """A leaf entry in the archive tree."""

    name: str
    path: str


@dataclass
class FolderNode:
    """A folder implied by entry paths, with children in first-seen order."""

    name: str
    path: str
    children: dict[str, TreeNode] = field(default_factory=dict)

    def walk(self, depth: int = 0) -> Iterator[tuple[int, TreeNode]]:
        """Yield (depth, node) pairs depth-first, excluding this node."""
        for child in self.children.values():
            yield depth, child
            if isinstance(child, FolderNode):
                yield from child.walk(depth + 1)

    def files(self) -> Iterator[FileNode]:
        """Yield every file below this folder."""
        for _, node in self.walk():
            if isinstance(node, FileNode):
                yield node


TreeNode = FolderNode | FileNode
