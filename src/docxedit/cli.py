"""CLI entry point for docxedit."""

import argparse
import json
import logging
import sys
from pathlib import Path

from docxedit.archive import extract, is_binary_payload, iter_entries, modified_filename, save_archive
from docxedit.checker import format_xml, validate
from docxedit.config import load_settings
from docxedit.editor import DEFAULT_EXPANDED, build_tree, render_tree
from docxedit.errors import ConfigError, ExtractionError, PackError

logger = logging.getLogger(__name__)


def _read_archive(archive: str) -> dict[str, str]:
    path = Path(archive)
    if not path.exists():
        logger.error(f"File not found: {archive}")
        sys.exit(1)
    try:
        return extract(path.read_bytes())
    except ExtractionError as exc:
        logger.error(f"Could not process {archive}: {exc}")
        sys.exit(1)


def _format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def extract_command(archive: str, output: str | None = None) -> None:
    """Extract an archive into a JSON mapping of entry path to content.

    Args:
        archive: Path to the .docx (or any zip) file
        output: Path for the JSON mapping; stdout when omitted
    """
    files = _read_archive(archive)
    payload = json.dumps(files, ensure_ascii=False, indent=2)

    if output is None:
        print(payload)
        return

    Path(output).write_text(payload, encoding="utf-8")
    logger.info(f"Extracted {len(files)} entries -> {output}")


def pack_command(mapping: str, output: str | None = None) -> None:
    """Pack a JSON mapping (as written by extract) into a .docx.

    Args:
        mapping: Path to the JSON mapping
        output: Output archive path; defaults to <mapping stem>_modified.docx
    """
    mapping_path = Path(mapping)
    try:
        files = json.loads(mapping_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.error(f"Cannot read mapping {mapping}: {exc}")
        sys.exit(1)

    if not isinstance(files, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in files.items()
    ):
        logger.error("Mapping must be a JSON object of path -> string content")
        sys.exit(1)

    settings = load_settings()
    if output is None:
        output = str(mapping_path.with_name(modified_filename(mapping_path.stem, settings.output_suffix)))

    try:
        save_archive(files, output, compression_level=settings.compression_level)
    except PackError as exc:
        logger.error(f"Error saving file: {exc}")
        sys.exit(1)


def _report(path: str, content: str) -> bool:
    result = validate(content)
    for error in result.errors:
        print(f"{path}:{error.line}:{error.column}: {error.severity}: {error.message}")
    return result.is_valid


def validate_command(source: str, entry: str | None = None) -> None:
    """Validate an XML file, one archive entry, or every XML entry.

    Exits with status 1 when anything is malformed.
    """
    source_path = Path(source)

    if source_path.suffix.lower() == ".xml":
        if not source_path.exists():
            logger.error(f"File not found: {source}")
            sys.exit(1)
        valid = _report(source, source_path.read_text(encoding="utf-8", errors="replace"))
        checked = 1
    else:
        files = _read_archive(source)
        if entry is not None:
            if entry not in files:
                logger.error(f"No entry named {entry} in {source}")
                sys.exit(1)
            targets = [entry]
        else:
            targets = [p for p in files if p.endswith(".xml") and not is_binary_payload(files[p])]

        valid = True
        for path in targets:
            valid = _report(path, files[path]) and valid
        checked = len(targets)

    if not valid:
        sys.exit(1)
    logger.info(f"{checked} XML document(s) well-formed")


def format_command(source: str, in_place: bool = False) -> None:
    """Pretty-print an XML file to stdout, or rewrite it in place."""
    path = Path(source)
    if not path.exists():
        logger.error(f"File not found: {source}")
        sys.exit(1)

    try:
        original = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        logger.error(f"Could not read {source} as UTF-8: {exc}")
        sys.exit(1)
    formatted = format_xml(original)

    if not in_place:
        print(formatted)
        return

    if formatted == original:
        logger.info(f"Unchanged: {source}")
        return
    path.write_text(formatted, encoding="utf-8")
    logger.info(f"Formatted {source}")


def tree_command(archive: str, collapsed: bool = False) -> None:
    """Print the entries of an archive as an indented folder tree.

    With collapsed, only the folders a freshly opened archive shows expanded
    list their contents.
    """
    files = _read_archive(archive)
    expanded = DEFAULT_EXPANDED if collapsed else None
    print(render_tree(build_tree(files), expanded))


def info_command(archive: str) -> None:
    """Show entry sizes and text/binary classification for an archive."""
    archive_path = Path(archive)
    if not archive_path.exists():
        logger.error(f"File not found: {archive}")
        sys.exit(1)

    try:
        entries = list(iter_entries(archive_path.read_bytes()))
    except ExtractionError as exc:
        logger.error(f"Could not process {archive}: {exc}")
        sys.exit(1)

    text_entries = [e for e in entries if e.metadata.is_text]

    print(f"Archive: {archive_path.name}")
    print(f"  Size: {_format_size(archive_path.stat().st_size)}")
    print(f"")
    print(f"Entries:")
    for e in entries:
        kind = "" if e.metadata.is_text else "[binary]"
        print(f"  {e.path:<60} {_format_size(e.metadata.size_bytes):>10} {kind}")
    print(f"")
    print(f"Contents:")
    print(f"  Text entries: {len(text_entries)}")
    print(f"  Binary entries: {len(entries) - len(text_entries)}")
    print(f"  Total: {len(entries)}")


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="docxedit",
        description="docxedit - edit the XML inside Dynamics 365 Word reports",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # extract command
    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract a .docx into a JSON mapping of entry path to content",
    )
    extract_parser.add_argument("archive", help="Input .docx file path")
    extract_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output JSON path (default: stdout)",
    )

    # pack command
    pack_parser = subparsers.add_parser(
        "pack",
        help="Pack a JSON mapping back into a .docx",
    )
    pack_parser.add_argument("mapping", help="JSON mapping written by extract")
    pack_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output .docx path (default: <mapping>_modified.docx)",
    )

    # validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Check XML well-formedness of a file or archive entries",
    )
    validate_parser.add_argument("source", help="An .xml file or a .docx archive")
    validate_parser.add_argument(
        "--entry",
        default=None,
        help="Validate only this archive entry",
    )

    # format command
    format_parser = subparsers.add_parser(
        "format",
        help="Pretty-print an XML file",
    )
    format_parser.add_argument("source", help="XML file path")
    format_parser.add_argument(
        "--in-place",
        "-i",
        action="store_true",
        help="Rewrite the file instead of printing",
    )

    # tree command
    tree_parser = subparsers.add_parser(
        "tree",
        help="Show archive entries as a folder tree",
    )
    tree_parser.add_argument("archive", help="Input .docx file path")
    tree_parser.add_argument(
        "--collapsed",
        action="store_true",
        help="Expand only customXml, as when the archive is first opened",
    )

    # info command
    info_parser = subparsers.add_parser(
        "info",
        help="Show entry sizes and classification",
    )
    info_parser.add_argument("archive", help="Input .docx file path")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        if args.command == "extract":
            extract_command(args.archive, args.output)
        elif args.command == "pack":
            pack_command(args.mapping, args.output)
        elif args.command == "validate":
            validate_command(args.source, args.entry)
        elif args.command == "format":
            format_command(args.source, args.in_place)
        elif args.command == "tree":
            tree_command(args.archive, args.collapsed)
        elif args.command == "info":
            info_command(args.archive)
    except ConfigError as exc:
        logger.error(f"Invalid configuration: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
