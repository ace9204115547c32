"""Archive transcoding: zip bytes to entry mappings and back."""

from docxedit.archive.classify import (
    BINARY_PREFIX,
    TEXT_SUFFIXES,
    encode_binary,
    is_binary_payload,
    is_text_entry,
    payload_bytes,
)
from docxedit.archive.transcoder import (
    extract,
    iter_entries,
    modified_filename,
    pack,
    save_archive,
)

__all__ = [
    "BINARY_PREFIX",
    "TEXT_SUFFIXES",
    "encode_binary",
    "extract",
    "is_binary_payload",
    "is_text_entry",
    "iter_entries",
    "modified_filename",
    "pack",
    "payload_bytes",
    "save_archive",
]
