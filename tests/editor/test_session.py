from __future__ import annotations

from pathlib import Path

import pytest

from docxedit.archive import BINARY_PREFIX, extract
from docxedit.config import Settings
from docxedit.editor import EditorSession, EntryRef
from docxedit.errors import DocxEditError, ExtractionError, PackError, UnsupportedFileError
from docxedit.models import ValidationResult
from tests.editor.fakes import FakeTimers


class Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[EntryRef, ValidationResult]] = []

    def __call__(self, ref: EntryRef, result: ValidationResult) -> None:
        self.calls.append((ref, result))


@pytest.fixture
def timers() -> FakeTimers:
    return FakeTimers()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def session(docx_bytes: bytes, timers: FakeTimers, recorder: Recorder) -> EditorSession:
    s = EditorSession(on_validated=recorder, timer_factory=timers)
    s.open("Sales Invoice.docx", docx_bytes)
    return s


def test_open_selects_largest_custom_xml(session: EditorSession) -> None:
    assert session.is_open
    assert session.filename == "Sales Invoice.docx"
    assert session.active is not None
    assert session.active.path == "customXml/item2.xml"
    assert session.content().startswith('<?xml version="1.0"')


def test_open_without_custom_xml_selects_nothing(make_archive, timers: FakeTimers) -> None:
    s = EditorSession(timer_factory=timers)
    ref = s.open("plain.docx", make_archive({"word/document.xml": b"<w/>"}))

    assert ref is None
    assert s.active is None
    assert s.paths == ["word/document.xml"]


def test_open_rejects_non_docx(docx_bytes: bytes) -> None:
    with pytest.raises(UnsupportedFileError):
        EditorSession().open("report.zip", docx_bytes)


def test_open_propagates_extraction_error() -> None:
    s = EditorSession()
    with pytest.raises(ExtractionError):
        s.open("report.docx", b"garbage")
    assert not s.is_open


def test_select_unknown_path(session: EditorSession) -> None:
    with pytest.raises(KeyError):
        session.select("word/missing.xml")


def test_reselecting_creates_new_ref(session: EditorSession) -> None:
    first = session.active
    second = session.select("customXml/item2.xml")

    assert first is not None
    assert second.path == first.path
    assert second != first


def test_edit_updates_active_entry(session: EditorSession) -> None:
    ref = session.select("customXml/item1.xml")

    assert session.edit(ref, "<root><a>changed</a></root>")
    assert session.files["customXml/item1.xml"] == "<root><a>changed</a></root>"


def test_stale_edit_is_discarded(session: EditorSession) -> None:
    old = session.select("customXml/item1.xml")
    session.select("word/document.xml")

    assert session.edit(old, "<late/>") is False
    assert session.files["customXml/item1.xml"] == "<root><a>short</a></root>"
    assert "<late/>" not in session.files.values()


def test_debounced_validation_reports_for_active_entry(
    session: EditorSession, timers: FakeTimers, recorder: Recorder
) -> None:
    ref = session.select("customXml/item1.xml")
    session.edit(ref, "<root><a>")
    assert session.validation_pending

    timers.fire_all()

    assert len(recorder.calls) == 1
    delivered_ref, result = recorder.calls[0]
    assert delivered_ref == ref
    assert result.is_valid is False
    assert session.last_result == (ref, result)


def test_stale_validation_is_dropped_after_switch(
    session: EditorSession, timers: FakeTimers, recorder: Recorder
) -> None:
    ref = session.select("customXml/item1.xml")
    session.edit(ref, "<broken>")
    in_flight = timers.last

    session.select("word/media/image1.png")
    in_flight.fire()

    assert recorder.calls == []
    assert session.last_result is None


def test_stale_delivery_racing_a_switch_is_dropped(
    session: EditorSession, timers: FakeTimers, recorder: Recorder
) -> None:
    ref = session.select("customXml/item1.xml")
    session.edit(ref, "<broken>")
    in_flight = timers.last

    # The timer thread already passed the debounce check when the switch lands
    session.select("word/document.xml")
    session._deliver(ref, ValidationResult(is_valid=False))
    in_flight.fire()

    assert all(r.path == "word/document.xml" for r, _ in recorder.calls)


def test_binary_entries_are_not_validated(session: EditorSession, timers: FakeTimers) -> None:
    before = len(timers.created)
    session.select("word/media/image1.png")
    assert len(timers.created) == before


def test_validate_now(session: EditorSession, recorder: Recorder) -> None:
    ref = session.select("customXml/item1.xml")
    session.edit(ref, "<root/>")

    result = session.validate_now()

    assert result.is_valid
    assert recorder.calls[-1] == (ref, result)
    assert not session.validation_pending


def test_is_large_uses_threshold(docx_bytes: bytes, timers: FakeTimers) -> None:
    s = EditorSession(Settings(large_entry_threshold=30), timer_factory=timers)
    s.open("report.docx", docx_bytes)

    assert s.is_large("customXml/item2.xml")
    assert not s.is_large("customXml/item1.xml")


def test_content_requires_selection(make_archive) -> None:
    s = EditorSession()
    s.open("plain.docx", make_archive({"a.txt": b"x"}))
    with pytest.raises(DocxEditError):
        s.content()


def test_tree(session: EditorSession) -> None:
    root = session.tree()
    assert set(root.children) == {"[Content_Types].xml", "_rels", "word", "customXml"}


def test_save_round_trips_edits(session: EditorSession, docx_bytes: bytes) -> None:
    ref = session.select("customXml/item1.xml")
    session.edit(ref, "<root><a>edited</a></root>")

    name, data = session.save()

    assert name == "Sales Invoice_modified.docx"
    files = extract(data)
    assert files == dict(session.files)
    assert files["word/media/image1.png"] == extract(docx_bytes)["word/media/image1.png"]


def test_save_uses_configured_suffix(docx_bytes: bytes) -> None:
    s = EditorSession(Settings(output_suffix="_v2"), timer_factory=FakeTimers())
    s.open("report.docx", docx_bytes)
    assert s.save()[0] == "report_v2.docx"


def test_save_propagates_pack_error(session: EditorSession) -> None:
    ref = session.select("word/media/image1.png")
    session.edit(ref, BINARY_PREFIX + "%%%")

    with pytest.raises(PackError):
        session.save()


def test_save_to_directory(session: EditorSession, tmp_path: Path) -> None:
    target = session.save_to(tmp_path)

    assert target == tmp_path / "Sales Invoice_modified.docx"
    assert extract(target.read_bytes()) == dict(session.files)


def test_save_without_document() -> None:
    with pytest.raises(DocxEditError):
        EditorSession().save()


def test_reset_clears_document(session: EditorSession, timers: FakeTimers, recorder: Recorder) -> None:
    session.reset()
    timers.fire_all()

    assert not session.is_open
    assert session.active is None
    assert session.paths == []
    assert recorder.calls == []


def test_context_manager_cancels_pending(docx_bytes: bytes, timers: FakeTimers) -> None:
    with EditorSession(timer_factory=timers) as s:
        s.open("report.docx", docx_bytes)
        assert s.validation_pending
    assert not s.validation_pending
