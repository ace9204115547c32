"""Build a folder tree from flat archive entry paths."""

from typing import Iterable, Optional

from docxedit.models import FileNode, FolderNode

# Folders a browser expands when an archive is first opened
DEFAULT_EXPANDED = frozenset({"customXml"})


def build_tree(paths: Iterable[str]) -> FolderNode:
    """Nest '/'-delimited entry paths into folders.

    The last segment of each path is a file; every earlier segment is a
    folder, created the first time it is seen. Children keep the order in
    which they first appear.

    Args:
        paths: Entry paths, e.g. the keys of an extracted mapping

    Returns:
        The root folder (empty name and path)
    """
    root = FolderNode(name="", path="")

    for path in paths:
        parts = path.split("/")
        current = root
        for index, part in enumerate(parts):
            node_path = "/".join(parts[: index + 1])
            if index == len(parts) - 1:
                current.children[part] = FileNode(name=part, path=node_path)
                continue

            child = current.children.get(part)
            if not isinstance(child, FolderNode):
                child = FolderNode(name=part, path=node_path)
                current.children[part] = child
            current = child

    return root


def render_tree(root: FolderNode, expanded: Optional[Iterable[str]] = None) -> str:
    """Render a tree as indented text, folders suffixed with '/'.

    Args:
        root: Tree from build_tree
        expanded: Folder paths whose children are shown; None shows all.
            Pass DEFAULT_EXPANDED for the layout of a freshly opened archive.
    """
    open_folders = None if expanded is None else frozenset(expanded)
    lines: list[str] = []

    def render(folder: FolderNode, depth: int) -> None:
        for child in folder.children.values():
            if isinstance(child, FileNode):
                lines.append(f"{'  ' * depth}{child.name}")
                continue
            lines.append(f"{'  ' * depth}{child.name}/")
            if open_folders is None or child.path in open_folders:
                render(child, depth + 1)

    render(root, 0)
    return "\n".join(lines)
