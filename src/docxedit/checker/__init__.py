"""XML structural checking and formatting."""

from docxedit.checker.formatter import format_xml
from docxedit.checker.locate import clean_message, locate
from docxedit.checker.validator import validate

__all__ = ["clean_message", "format_xml", "locate", "validate"]
