from __future__ import annotations

import io
import logging

import pytest
from pypdf import PdfReader

from pdfassembler.config import AssemblerSettings
from pdfassembler.core import Document, DocumentBuilder
from pdfassembler.exceptions import DocumentValidationError, WatermarkError
from pdfassembler.watermark import (
    WATERMARK_POSITIONS,
    clamp_font_size,
    clamp_opacity,
    create_overlay,
    watermark,
)

PAGE_WIDTH = 600.0
PAGE_HEIGHT = 200.0


def _text_origins(page) -> list[tuple[float, float]]:
    origins: list[tuple[float, float]] = []

    def visit(text, cm, tm, font_dict, font_size):
        if text.strip():
            x = tm[4] * cm[0] + tm[5] * cm[2] + cm[4]
            y = tm[4] * cm[1] + tm[5] * cm[3] + cm[5]
            origins.append((x, y))

    page.extract_text(visitor_text=visit)
    return origins


@pytest.mark.parametrize(
    "value, expected",
    [(None, 48), (10, 24), (24, 24), (60, 60), (100, 72)],
)
def test_clamp_font_size(value, expected: int) -> None:
    assert clamp_font_size(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(None, 0.3), (0, 0.1), (0.5, 0.5), (3, 1.0)],
)
def test_clamp_opacity(value, expected: float) -> None:
    assert clamp_opacity(value) == pytest.approx(expected)


def test_every_page_carries_the_text(pdf_factory) -> None:
    document = Document.from_bytes(pdf_factory(3, title="Plan", author="Ops"), name="plan.pdf")

    result = watermark(document, "  CONFIDENTIAL ", settings=AssemblerSettings(producer="Stamp Co"))

    assert result.name == "plan_watermarked.pdf"
    assert result.page_count == 3
    assert [page.width for page in result] == [101, 102, 103]
    assert all("CONFIDENTIAL" in page.pdf_page.extract_text() for page in result)
    assert result.metadata.title == "Plan"
    assert result.metadata.author == "Ops"
    assert result.metadata.producer == "Stamp Co"


def test_source_document_is_not_modified(pdf_factory) -> None:
    data = pdf_factory(2)
    document = Document.from_bytes(data)

    watermark(document, "DRAFT", position="diagonal")

    assert document.to_bytes() == data
    assert all("DRAFT" not in page.pdf_page.extract_text() for page in document)


@pytest.mark.parametrize("position", WATERMARK_POSITIONS)
def test_overlay_draws_text_for_every_position(position: str) -> None:
    overlay = create_overlay("DRAFT", PAGE_WIDTH, PAGE_HEIGHT, position=position, font_size=24)

    assert "DRAFT" in overlay.extract_text()
    assert float(overlay.mediabox.width) == PAGE_WIDTH
    assert float(overlay.mediabox.height) == PAGE_HEIGHT


@pytest.mark.parametrize(
    "position, left, top",
    [
        ("top-left", True, True),
        ("top-right", False, True),
        ("bottom-left", True, False),
        ("bottom-right", False, False),
    ],
)
def test_corner_positions_stay_in_their_corner(position: str, left: bool, top: bool) -> None:
    overlay = create_overlay("DRAFT", PAGE_WIDTH, PAGE_HEIGHT, position=position, font_size=24)

    x, y = _text_origins(overlay)[0]

    assert (x < PAGE_WIDTH / 2) is left
    assert (y > PAGE_HEIGHT / 2) is top
    assert 0 <= x <= PAGE_WIDTH and 0 <= y <= PAGE_HEIGHT


@pytest.mark.parametrize("text", ["", "   ", None])
def test_blank_text_is_rejected(pdf_factory, text) -> None:
    with pytest.raises(DocumentValidationError, match="cannot be empty"):
        watermark(Document.from_bytes(pdf_factory(1)), text)


def test_unknown_position_is_rejected(pdf_factory) -> None:
    with pytest.raises(DocumentValidationError, match="Unsupported watermark position"):
        watermark(Document.from_bytes(pdf_factory(1)), "DRAFT", position="middle")


def test_stamp_failure_aborts(
    pdf_factory, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    original = DocumentBuilder.stamp_page

    def flaky(self, page_index, overlay):
        if page_index == 1:
            raise ValueError("bad content stream")
        return original(self, page_index, overlay)

    monkeypatch.setattr(DocumentBuilder, "stamp_page", flaky)
    caplog.set_level(logging.ERROR, logger="pdfassembler.watermark")

    with pytest.raises(WatermarkError) as excinfo:
        watermark(Document.from_bytes(pdf_factory(3), name="plan.pdf"), "DRAFT")

    assert excinfo.value.page_number == 2
    assert str(excinfo.value) == "Failed to watermark page 2"
    assert "Failed to watermark page 2 of plan.pdf" in caplog.text


def test_output_is_a_readable_pdf(pdf_factory) -> None:
    result = watermark(Document.from_bytes(pdf_factory(2)), "DRAFT", position="bottom-right", opacity=0.8)

    reader = PdfReader(io.BytesIO(result.to_bytes()))
    assert len(reader.pages) == 2
