"""docxedit - edit the XML payloads inside Dynamics 365 Word-report archives."""

from docxedit.archive import extract, pack
from docxedit.checker import format_xml, validate
from docxedit.errors import DocxEditError, ExtractionError, PackError

__version__ = "0.1.0"

__all__ = [
    "DocxEditError",
    "ExtractionError",
    "PackError",
    "extract",
    "format_xml",
    "pack",
    "validate",
]
