"""Convert zip archives to entry mappings and back."""

import binascii
import io
import logging
import struct
import zipfile
import zlib
from pathlib import Path
from typing import BinaryIO, Iterator, Mapping

from docxedit.archive.classify import (
    decode_text_entry,
    encode_binary,
    entry_extension,
    is_text_entry,
    payload_bytes,
)
from docxedit.errors import ExtractionError, PackError
from docxedit.models import ArchiveEntry, EntryMetadata

logger = logging.getLogger(__name__)

DEFAULT_COMPRESSION_LEVEL = 9

# Failures that mean the archive itself is unreadable
_READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    struct.error,
    EOFError,
    OSError,
    ValueError,
    OverflowError,
    NotImplementedError,
    RuntimeError,
)


def _open_source(source: bytes | BinaryIO) -> BinaryIO:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(source))
    return source


def iter_entries(source: bytes | BinaryIO) -> Iterator[ArchiveEntry]:
    """Yield an ArchiveEntry for every non-directory member of a zip archive.

    Args:
        source: Archive bytes or a readable binary file object

    Yields:
        ArchiveEntry objects in archive order

    Raises:
        ExtractionError: If the archive cannot be opened or a member cannot be read
    """
    try:
        zf = zipfile.ZipFile(_open_source(source), "r")
    except _READ_ERRORS as exc:
        raise ExtractionError("Failed to extract the archive") from exc

    with zf:
        for info in zf.infolist():
            if info.is_dir():
                continue

            try:
                raw = zf.read(info.filename)
            except _READ_ERRORS as exc:
                raise ExtractionError(f"Failed to read archive entry {info.filename}") from exc

            text_entry = is_text_entry(info.filename)
            if text_entry:
                content, stage = decode_text_entry(raw)
                if stage == "lenient":
                    logger.warning(f"Strict UTF-8 decoding failed for {info.filename}, decoded leniently")
                elif stage == "base64":
                    logger.warning(f"No text content in {info.filename}, kept as base64")
            else:
                content = encode_binary(raw)

            metadata = EntryMetadata(
                path=info.filename,
                size_bytes=info.file_size,
                extension=entry_extension(info.filename),
                is_text=text_entry,
            )
            yield ArchiveEntry(metadata=metadata, content=content)


def extract(source: bytes | BinaryIO) -> dict[str, str]:
    """Extract a zip archive into a mapping of entry path to content.

    Text-bearing entries (.xml, .rels, .txt, .json) become plain strings;
    everything else becomes a sentinel-encoded Base64 string.

    Raises:
        ExtractionError: If the input is not a readable zip archive
    """
    contents = {entry.path: entry.content for entry in iter_entries(source)}
    logger.debug(f"Extracted {len(contents)} entries")
    return contents


def pack(files: Mapping[str, str], compression_level: int = DEFAULT_COMPRESSION_LEVEL) -> bytes:
    """Pack an entry mapping back into DEFLATE-compressed zip bytes.

    Args:
        files: Mapping of entry path to plain text or sentinel-encoded content
        compression_level: DEFLATE level, 9 by default

    Returns:
        The archive bytes

    Raises:
        PackError: If an entry cannot be encoded or the archive cannot be written
    """
    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(
            buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=compression_level
        ) as zf:
            for path, content in files.items():
                try:
                    data = payload_bytes(content)
                except binascii.Error as exc:
                    raise PackError(f"Invalid base64 content for {path}") from exc
                except UnicodeEncodeError as exc:
                    raise PackError(f"Cannot encode {path} as UTF-8") from exc
                zf.writestr(path, data)
    except PackError:
        raise
    except (zipfile.BadZipFile, zlib.error, OSError, ValueError) as exc:
        raise PackError("Failed to write the archive") from exc
    return buffer.getvalue()


def save_archive(files: Mapping[str, str], path: Path | str, compression_level: int = DEFAULT_COMPRESSION_LEVEL) -> Path:
    """Pack an entry mapping and write it to disk.

    Returns:
        The path written
    """
    target = Path(path)
    data = pack(files, compression_level=compression_level)
    try:
        target.write_bytes(data)
    except OSError as exc:
        raise PackError(f"Failed to write {target}") from exc
    logger.info(f"Saved {len(files)} entries -> {target}")
    return target


def modified_filename(original: str, suffix: str = "_modified") -> str:
    """Return the save name for an edited archive.

    ``report.docx`` becomes ``report_modified.docx``; names without a
    ``.docx`` extension get the suffix and the extension appended.
    """
    name = Path(original).name
    stem = name[: -len(".docx")] if name.endswith(".docx") else name
    return f"{stem}{suffix}.docx"
