"""Entry classification and the Base64 sentinel convention."""

import base64

# Entries with these suffixes are offered as editable text
TEXT_SUFFIXES = (".xml", ".rels", ".txt", ".json")

BINARY_PREFIX = "data:application/octet-stream;base64,"


def is_text_entry(path: str) -> bool:
    """Check if an entry path names a text-bearing entry.

    The match is an exact, case-sensitive suffix match, so ``ITEM.XML`` is
    treated as binary.
    """
    return path.endswith(TEXT_SUFFIXES)


def entry_extension(path: str) -> str:
    """Return the lowercase extension of an entry path ('' if none).

    A dot-led name such as ``_rels/.rels`` is its own extension.
    """
    name = path.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    if dot == -1:
        return ""
    return name[dot:].lower()


def encode_binary(raw: bytes) -> str:
    """Wrap raw bytes in the sentinel-prefixed Base64 form."""
    return BINARY_PREFIX + base64.b64encode(raw).decode("ascii")


def is_binary_payload(content: str) -> bool:
    """Check if content is sentinel-encoded binary data."""
    return content.startswith(BINARY_PREFIX)


def payload_bytes(content: str) -> bytes:
    """Return the exact bytes an entry's content stands for.

    Sentinel content is Base64-decoded; anything else is UTF-8 text.

    Raises:
        binascii.Error: If sentinel content is not valid Base64
        UnicodeEncodeError: If text content cannot be encoded as UTF-8
    """
    if is_binary_payload(content):
        return base64.b64decode(content[len(BINARY_PREFIX):], validate=True)
    return content.encode("utf-8")


def decode_text_entry(raw: bytes) -> tuple[str, str]:
    """Decode a text-bearing entry, degrading instead of failing.

    Order: strict UTF-8, then lenient UTF-8 (replacement characters) when
    the strict pass fails or yields only whitespace, then the Base64
    sentinel when nothing usable is left.

    Args:
        raw: Raw entry bytes

    Returns:
        (content, stage) where stage is "strict", "lenient" or "base64"
    """
    content = None
    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError:
        pass

    if content is not None and content.strip():
        return content, "strict"

    content = raw.decode("utf-8", errors="replace")
    if content:
        return content, "lenient"

    return encode_binary(raw), "base64"
