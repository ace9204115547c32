"""Core data models for archive entries."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EntryMetadata:
    """Metadata for any archive entry (text or binary)."""

    path: str
    size_bytes: int
    extension: str
    is_text: bool


@dataclass
class ArchiveEntry:
    """An entry extracted from an archive."""

    metadata: EntryMetadata
    content: str  # plain text or sentinel-encoded Base64

    @property
    def path(self) -> str:
        return self.metadata.path
