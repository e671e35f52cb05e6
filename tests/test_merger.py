from __future__ import annotations

import logging

import pytest

from pdfassembler.config import MERGER_CREATOR, AssemblerSettings
from pdfassembler.core import Document, DocumentBuilder
from pdfassembler.exceptions import DocumentParseError, DocumentValidationError, MergeError
from pdfassembler.merge import load_documents, merge


@pytest.fixture()
def documents(pdf_factory) -> list[Document]:
    return [
        Document.from_bytes(pdf_factory(2, title="First Title", author="Alice"), name="alpha.pdf"),
        Document.from_bytes(pdf_factory(3, title="Second Title", author="Bob", base_width=300), name="beta.pdf"),
    ]


def test_merge_concatenates_pages_in_input_order(documents: list[Document]) -> None:
    merged = merge(documents)

    assert merged.page_count == documents[0].page_count + documents[1].page_count
    assert [page.width for page in merged] == [101, 102, 301, 302, 303]
    assert merged.name == "merged.pdf"


@pytest.mark.parametrize("count", [0, 1])
def test_merge_requires_two_documents(documents: list[Document], count: int) -> None:
    with pytest.raises(DocumentValidationError, match="At least 2 PDF files"):
        merge(documents[:count])


def test_metadata_comes_from_first_document_only(documents: list[Document]) -> None:
    merged = merge(documents, settings=AssemblerSettings(producer="Merge Tests"))

    assert merged.metadata.title == "First Title"
    assert merged.metadata.author == "Alice"
    assert merged.metadata.creator == MERGER_CREATOR
    assert merged.metadata.producer == "Merge Tests"


def test_creator_is_set_without_preserving_metadata(documents: list[Document]) -> None:
    merged = merge(documents, preserve_metadata=False)

    assert merged.metadata.title is None
    assert merged.metadata.author is None
    assert merged.metadata.creator == MERGER_CREATOR


def test_bookmarks_point_at_first_page_of_each_source(documents: list[Document]) -> None:
    merged = merge(documents)

    assert [(entry.title, entry.page_index) for entry in merged.outline] == [("alpha", 0), ("beta", 2)]


def test_bookmarks_can_be_disabled(documents: list[Document]) -> None:
    assert merge(documents, add_bookmarks=False).outline == []


def test_bookmark_failure_is_logged_and_skipped(
    documents: list[Document], monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    original = DocumentBuilder.add_outline_entry

    def failing(self, title, page_index):
        if title == "beta":
            raise RuntimeError("outline unavailable")
        return original(self, title, page_index)

    monkeypatch.setattr(DocumentBuilder, "add_outline_entry", failing)
    caplog.set_level(logging.WARNING, logger="pdfassembler.merge")

    merged = merge(documents)

    assert merged.page_count == 5
    assert [entry.title for entry in merged.outline] == ["alpha"]
    assert "Failed to add bookmark 'beta'" in caplog.text


def test_metadata_failure_does_not_abort_merge(
    documents: list[Document], monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    def broken_metadata(self):
        raise ValueError("bad info dictionary")

    monkeypatch.setattr(Document, "metadata", property(broken_metadata))
    caplog.set_level(logging.WARNING, logger="pdfassembler.merge")

    merged = merge(documents)

    monkeypatch.undo()
    assert merged.page_count == 5
    assert merged.metadata.title is None
    assert merged.metadata.creator == MERGER_CREATOR
    assert "Failed to capture metadata from alpha.pdf" in caplog.text


def test_copy_failure_names_the_file(documents: list[Document], monkeypatch: pytest.MonkeyPatch) -> None:
    original = DocumentBuilder.copy_pages

    def failing(self, pages):
        if pages and pages[0].document.name == "beta.pdf":
            raise RuntimeError("corrupt page tree")
        return original(self, pages)

    monkeypatch.setattr(DocumentBuilder, "copy_pages", failing)

    with pytest.raises(MergeError, match="Failed to process beta.pdf"):
        merge(documents)


def test_inputs_are_not_modified(documents: list[Document]) -> None:
    before = [document.to_bytes() for document in documents]
    merge(documents)
    assert [document.to_bytes() for document in documents] == before


def test_load_documents_names_the_bad_file(pdf_factory) -> None:
    with pytest.raises(DocumentParseError) as excinfo:
        load_documents([pdf_factory(1), b"garbage"], ["good.pdf", "bad.pdf"])

    assert excinfo.value.filename == "bad.pdf"
    assert "bad.pdf" in str(excinfo.value)


def test_load_documents_default_names(pdf_factory) -> None:
    loaded = load_documents([pdf_factory(1), pdf_factory(1)])
    assert [document.name for document in loaded] == ["document-1.pdf", "document-2.pdf"]
