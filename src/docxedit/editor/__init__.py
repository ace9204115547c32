"""Editing host: open-document session, debounced validation, entry tree."""

from docxedit.editor.debounce import DebouncedValidator
from docxedit.editor.session import EditorSession, EntryRef
from docxedit.editor.tree import DEFAULT_EXPANDED, build_tree, render_tree

__all__ = [
    "DEFAULT_EXPANDED",
    "DebouncedValidator",
    "EditorSession",
    "EntryRef",
    "build_tree",
    "render_tree",
]
