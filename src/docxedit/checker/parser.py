"""lxml parser configuration shared by the validator and the formatter."""

from lxml import etree


def make_parser() -> etree.XMLParser:
    """Create a fresh, non-recovering XML parser.

    Entity expansion and network access are disabled. The encoding is
    forced to UTF-8 because callers hand over already-decoded text, so any
    ``encoding=`` in the declaration no longer describes the bytes.
    lxml parsers must not be shared between threads, hence one per call.
    """
    return etree.XMLParser(
        encoding="utf-8",
        resolve_entities=False,
        no_network=True,
        huge_tree=True,
        recover=False,
    )


def parse_text(xml_text: str) -> etree._Element:
    """Parse XML text and return the root element.

    Raises:
        lxml.etree.XMLSyntaxError: If the text is not well-formed
    """
    return etree.fromstring(xml_text.encode("utf-8"), make_parser())
