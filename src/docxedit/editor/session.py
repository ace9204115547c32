"""The open-document session behind an archive editor."""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import BinaryIO, Callable, Mapping, Optional

from docxedit.archive import extract, modified_filename, pack
from docxedit.checker import validate
from docxedit.config import Settings
from docxedit.editor.debounce import DebouncedValidator
from docxedit.editor.tree import build_tree
from docxedit.errors import DocxEditError, PackError, UnsupportedFileError
from docxedit.models import FolderNode, ValidationResult
from docxedit.protocols import TimerFactory

logger = logging.getLogger(__name__)

# Entries whose content is validated as XML
XML_SUFFIXES = (".xml", ".rels")

CUSTOM_XML_PREFIX = "customXml/"


@dataclass(frozen=True)
class EntryRef:
    """One activation of an entry. Re-selecting the same path yields a new ref."""

    path: str
    generation: int


ValidationCallback = Callable[[EntryRef, ValidationResult], None]


class EditorSession:
    """Holds one open archive and the entry being edited.

    The active entry is a single EntryRef swapped under a lock. Edits and
    validation results carry the ref they were issued for and are dropped
    when it is no longer active, so a switch can never attribute content
    or errors of one entry to another.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        on_validated: Optional[ValidationCallback] = None,
        timer_factory: Optional[TimerFactory] = None,
    ):
        self.settings = settings or Settings()
        self._on_validated = on_validated
        self._lock = threading.Lock()
        self._files: dict[str, str] = {}
        self._filename: Optional[str] = None
        self._active: Optional[EntryRef] = None
        self._generation = 0
        self._last_result: Optional[tuple[EntryRef, ValidationResult]] = None
        self._validator: DebouncedValidator[EntryRef] = DebouncedValidator(
            self.settings.debounce_seconds,
            self._deliver,
            timer_factory=timer_factory,
        )

    # Document lifecycle

    def open(self, filename: str, data: bytes | BinaryIO) -> Optional[EntryRef]:
        """Open an archive, replacing any document already open.

        The largest customXml/*.xml entry is selected automatically.

        Args:
            filename: Original file name, must end in .docx
            data: Archive bytes or binary file object

        Returns:
            The ref of the auto-selected entry, or None

        Raises:
            UnsupportedFileError: If filename is not a .docx
            ExtractionError: If data is not a readable zip archive
        """
        if not filename.endswith(".docx"):
            raise UnsupportedFileError(f"Please upload a valid .docx file: {filename}")

        files = extract(data)

        with self._lock:
            self._validator.cancel()
            self._files = files
            self._filename = filename
            self._active = None
            self._last_result = None

        logger.info(f"Opened {filename} ({len(files)} entries)")

        largest = self._largest_custom_xml(files)
        if largest is None:
            return None
        logger.info(f"Selected {largest} ({len(files[largest])} characters)")
        return self.select(largest)

    @staticmethod
    def _largest_custom_xml(files: Mapping[str, str]) -> Optional[str]:
        largest = None
        for path, content in files.items():
            if not (path.startswith(CUSTOM_XML_PREFIX) and path.endswith(".xml")):
                continue
            if largest is None or len(content) > len(files[largest]):
                largest = path
        return largest

    def reset(self) -> None:
        """Close the current document and cancel pending validation."""
        with self._lock:
            self._validator.cancel()
            self._files = {}
            self._filename = None
            self._active = None
            self._last_result = None

    def close(self) -> None:
        self._validator.cancel()

    def __enter__(self) -> "EditorSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # State

    @property
    def is_open(self) -> bool:
        return self._filename is not None

    @property
    def filename(self) -> Optional[str]:
        return self._filename

    @property
    def files(self) -> Mapping[str, str]:
        """Read-only view of the entry mapping."""
        return MappingProxyType(self._files)

    @property
    def paths(self) -> list[str]:
        return list(self._files)

    @property
    def active(self) -> Optional[EntryRef]:
        with self._lock:
            return self._active

    @property
    def last_result(self) -> Optional[tuple[EntryRef, ValidationResult]]:
        """The most recent validation delivered for the active entry."""
        return self._last_result

    def content(self, path: Optional[str] = None) -> str:
        """Return an entry's current content (the active entry by default)."""
        if path is None:
            active = self.active
            if active is None:
                raise DocxEditError("No entry is selected")
            path = active.path
        return self._files[path]

    def is_large(self, path: Optional[str] = None) -> bool:
        """Check if an entry is big enough to warrant a loading indicator."""
        return len(self.content(path)) > self.settings.large_entry_threshold

    def tree(self) -> FolderNode:
        return build_tree(self._files)

    # Editing

    def select(self, path: str) -> EntryRef:
        """Make path the active entry.

        Any pending validation for the previous entry is cancelled.

        Raises:
            KeyError: If path is not in the open document
        """
        with self._lock:
            if path not in self._files:
                raise KeyError(path)
            self._validator.cancel()
            self._generation += 1
            ref = EntryRef(path=path, generation=self._generation)
            self._active = ref
            self._last_result = None
            content = self._files[path]

        if path.endswith(XML_SUFFIXES):
            self._validator.schedule(ref, content)
        return ref

    def edit(self, ref: EntryRef, content: str) -> bool:
        """Replace the content of the entry ref points at.

        Returns:
            True if applied, False if ref is no longer the active entry
        """
        with self._lock:
            if ref != self._active:
                logger.debug(f"Discarding edit for inactive entry {ref.path}")
                return False
            self._files[ref.path] = content

        if ref.path.endswith(XML_SUFFIXES):
            self._validator.schedule(ref, content)
        return True

    @property
    def validation_pending(self) -> bool:
        return self._validator.pending

    def validate_now(self) -> ValidationResult:
        """Validate the active entry immediately, bypassing the debounce."""
        with self._lock:
            ref = self._active
            if ref is None:
                raise DocxEditError("No entry is selected")
            self._validator.cancel()
            content = self._files[ref.path]
        result = validate(content)
        self._deliver(ref, result)
        return result

    def _deliver(self, ref: EntryRef, result: ValidationResult) -> None:
        with self._lock:
            if ref != self._active:
                logger.debug(f"Dropping stale validation for {ref.path}")
                return
            self._last_result = (ref, result)
        if self._on_validated is not None:
            self._on_validated(ref, result)

    # Saving

    def save(self) -> tuple[str, bytes]:
        """Pack the document.

        Returns:
            (save filename, archive bytes)

        Raises:
            PackError: If the mapping cannot be packed
        """
        if self._filename is None:
            raise DocxEditError("No document is open")
        with self._lock:
            files = dict(self._files)
        name = modified_filename(self._filename, self.settings.output_suffix)
        return name, pack(files, compression_level=self.settings.compression_level)

    def save_to(self, directory: Path | str) -> Path:
        """Pack the document into directory under its save filename."""
        name, data = self.save()
        target = Path(directory) / name
        try:
            target.write_bytes(data)
        except OSError as exc:
            raise PackError(f"Failed to write {target}") from exc
        logger.info(f"Saved {target}")
        return target
