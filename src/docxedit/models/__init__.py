"""Data models for docxedit."""

from docxedit.models.entry import ArchiveEntry, EntryMetadata
from docxedit.models.tree import FileNode, FolderNode, TreeNode
from docxedit.models.validation import Severity, ValidationError, ValidationResult

__all__ = [
    "ArchiveEntry",
    "EntryMetadata",
    "FileNode",
    "FolderNode",
    "TreeNode",
    "Severity",
    "ValidationError",
    "ValidationResult",
]
