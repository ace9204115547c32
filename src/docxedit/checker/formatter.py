"""Best-effort pretty-printing of XML text."""

import logging
import re
from typing import Union
from xml.sax.saxutils import escape

from lxml import etree

from docxedit.checker.parser import parse_text

logger = logging.getLogger(__name__)

INDENT = "  "

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

_DECLARATION = re.compile(r"[\ufeff\s]*(<\?xml\s[^>]*\?>)")

# A child node is either an lxml node or the text between nodes
Node = Union[etree._Element, str]


def _split_clark(name: str) -> tuple[str | None, str]:
    if name.startswith("{"):
        uri, local = name[1:].split("}", 1)
        return uri, local
    return None, name


def _tag_name(element: etree._Element) -> str:
    _, local = _split_clark(element.tag)
    return f"{element.prefix}:{local}" if element.prefix else local


def _attribute_name(element: etree._Element, name: str) -> str:
    uri, local = _split_clark(name)
    if uri is None:
        return local
    if uri == XML_NAMESPACE:
        return f"xml:{local}"
    for prefix, value in element.nsmap.items():
        if prefix is not None and value == uri:
            return f"{prefix}:{local}"
    return local


def _namespace_declarations(element: etree._Element) -> list[str]:
    parent = element.getparent()
    inherited = parent.nsmap if parent is not None else {}
    declarations = []
    for prefix, uri in element.nsmap.items():
        if inherited.get(prefix) == uri:
            continue
        name = f"xmlns:{prefix}" if prefix else "xmlns"
        declarations.append(f' {name}="{_escape_attribute(uri)}"')
    return declarations


def _escape_attribute(value: str) -> str:
    return escape(value, {'"': "&quot;"})


def _attributes(element: etree._Element) -> str:
    parts = _namespace_declarations(element)
    for name, value in element.attrib.items():
        parts.append(f' {_attribute_name(element, name)}="{_escape_attribute(value)}"')
    return "".join(parts)


def _child_nodes(element: etree._Element) -> list[Node]:
    nodes: list[Node] = []
    if element.text is not None:
        nodes.append(element.text)
    for child in element:
        nodes.append(child)
        if child.tail is not None:
            nodes.append(child.tail)
    return nodes


def _is_element(node: Node) -> bool:
    return not isinstance(node, str) and isinstance(node.tag, str)


def _format_node(node: Node, indent: int = 0) -> str:
    if isinstance(node, str):
        return escape(node.strip())

    # Comments, processing instructions and entity references are dropped
    if not _is_element(node):
        return ""

    pad = INDENT * indent
    tag = _tag_name(node)
    attributes = _attributes(node)
    children = _child_nodes(node)

    if not children:
        return f"{pad}<{tag}{attributes}/>"

    has_elements = any(_is_element(child) for child in children)
    has_text = any(isinstance(child, str) and child.strip() for child in children)

    if not has_elements and has_text:
        text = "".join(escape(child.strip()) for child in children if isinstance(child, str))
        return f"{pad}<{tag}{attributes}>{text}</{tag}>"

    formatted = [_format_node(child, indent + 1) for child in children]
    body = "\n".join(part for part in formatted if part)
    if body:
        return f"{pad}<{tag}{attributes}>\n{body}\n{pad}</{tag}>"
    return f"{pad}<{tag}{attributes}></{tag}>"


def format_xml(xml_text: str) -> str:
    """Re-serialize an XML document with two-space indentation.

    Elements without children become self-closing, text-only elements stay
    on one line, and whitespace between elements is dropped. A leading XML
    declaration is kept verbatim. Text that does not parse is returned
    unchanged, so callers must not assume the output differs from the input.

    Mixed text/element content, comments, processing instructions and CDATA
    are not guaranteed to survive a format pass.
    """
    try:
        root = parse_text(xml_text)
    except (etree.LxmlError, ValueError) as exc:
        logger.warning(f"Cannot format XML: {exc}")
        return xml_text

    if root is None:
        logger.warning("Cannot format XML: no root element found")
        return xml_text

    lines = []
    declaration = _DECLARATION.match(xml_text)
    if declaration:
        lines.append(declaration.group(1))
    lines.append(_format_node(root))
    return "\n".join(lines)
