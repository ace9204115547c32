"""Well-formedness validation of XML text."""

import logging

from lxml import etree

from docxedit.checker.locate import clean_message, locate, strip_location
from docxedit.checker.parser import parse_text
from docxedit.models import ValidationError, ValidationResult

logger = logging.getLogger(__name__)


def _syntax_error_position(exc: etree.XMLSyntaxError, message: str) -> tuple[int, int]:
    """Prefer the parser's structured position, else scrape the message."""
    fallback_line, fallback_column = locate(message)
    position = getattr(exc, "position", None) or (None, None)
    line, column = position
    if not line or line < 1:
        return fallback_line, fallback_column
    if not column or column < 1:
        column = fallback_column
    return line, column


def validate(xml_text: str) -> ValidationResult:
    """Check whether text is well-formed XML.

    Empty or whitespace-only text is valid. A malformed document yields
    exactly one error describing the first problem the parser hit. This
    never raises for malformed input; problems come back as data.

    Args:
        xml_text: The XML document text

    Returns:
        A new ValidationResult
    """
    if not xml_text.strip():
        return ValidationResult.ok()

    try:
        parse_text(xml_text)
    except etree.XMLSyntaxError as exc:
        raw = exc.msg or str(exc) or "Unknown XML parsing error"
        line, column = _syntax_error_position(exc, raw)
        message = clean_message(raw)
        logger.debug(f"XML error at {line}:{column}: {raw}")
        return ValidationResult.failed(
            ValidationError(line=line, column=column, message=message, severity="error")
        )
    except (etree.LxmlError, ValueError) as exc:
        logger.debug(f"XML parser raised {type(exc).__name__}: {exc}")
        detail = strip_location(str(exc)) or "Unknown error"
        return ValidationResult.failed(
            ValidationError(line=1, column=1, message=f"XML parsing failed: {detail}", severity="error")
        )

    return ValidationResult.ok()
