"""Exceptions raised by docxedit."""


class DocxEditError(Exception):
    """Base class for docxedit errors."""


class ExtractionError(DocxEditError):
    """Raised when archive bytes cannot be read as a zip archive."""


class PackError(DocxEditError):
    """Raised when an entry mapping cannot be written back into an archive."""


class UnsupportedFileError(DocxEditError):
    """Raised when a session is asked to open something other than a .docx."""


class ConfigError(DocxEditError):
    """Raised when a configuration override cannot be parsed."""
