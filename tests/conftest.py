from __future__ import annotations

from typing import Callable

import pytest

from tests._fixtures.archives import SAMPLE_ENTRIES, build_zip


@pytest.fixture
def make_archive() -> Callable[..., bytes]:
    return build_zip


@pytest.fixture
def docx_bytes() -> bytes:
    """A small Word-report archive with customXml parts and a media file."""
    return build_zip(SAMPLE_ENTRIES, directories=["word/", "word/media/"])
