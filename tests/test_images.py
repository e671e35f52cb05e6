from __future__ import annotations

import io
import logging

import pytest
from PIL import Image, features

from pdfassembler.core import Document
from pdfassembler.exceptions import DocumentValidationError, ImageConversionError
from pdfassembler.images import clamp_dpi, clamp_quality, page_image_name, to_images
from pdfassembler.thumbnails import RenderedPage

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
JPEG_SIGNATURE = b"\xff\xd8"


class FailingSession:
    def __init__(self, pages: int, failing: int) -> None:
        self.pages = pages
        self.failing = failing
        self.closed = False

    @property
    def page_count(self) -> int:
        return self.pages

    def render(self, index: int, scale: float) -> RenderedPage:
        if index + 1 == self.failing:
            raise RuntimeError(f"cannot draw page {index + 1}")
        image = Image.new("RGB", (10, 10), "white")
        buffer = io.BytesIO()
        image.save(buffer, "PNG")
        return RenderedPage(width=10, height=10, png=buffer.getvalue())

    def close(self) -> None:
        self.closed = True


class SessionEngine:
    def __init__(self, session: FailingSession) -> None:
        self.session = session

    def open(self, data: bytes) -> FailingSession:
        return self.session


class BrokenEngine:
    def open(self, data: bytes) -> FailingSession:
        raise RuntimeError("worker failed to load")


@pytest.mark.parametrize("value, expected", [(None, 150), (10, 72), (300, 300), (1200, 600)])
def test_clamp_dpi(value, expected: int) -> None:
    assert clamp_dpi(value) == expected


@pytest.mark.parametrize("value, expected", [(None, 90), (0, 10), (75, 75), (150, 100)])
def test_clamp_quality(value, expected: int) -> None:
    assert clamp_quality(value) == expected


def test_page_image_name() -> None:
    assert page_image_name("report", 3, "png") == "report_page_3.png"
    assert page_image_name("report", 3, "jpeg") == "report_page_3.jpg"


def test_png_pages_follow_dpi(pdf_factory) -> None:
    images = to_images(pdf_factory(2), dpi=144, name="report.pdf")

    assert [image.page_number for image in images] == [1, 2]
    assert [(image.width, image.height) for image in images] == [(202, 400), (204, 400)]
    assert [image.filename for image in images] == ["report_page_1.png", "report_page_2.png"]
    assert all(image.image_bytes.startswith(PNG_SIGNATURE) for image in images)


def test_dpi_below_minimum_renders_at_72(pdf_factory) -> None:
    [image] = to_images(pdf_factory(1), dpi=10)

    assert (image.width, image.height) == (101, 200)


def test_document_source_uses_its_name(pdf_factory) -> None:
    document = Document.from_bytes(pdf_factory(1), name="scan.pdf")

    [image] = to_images(document, image_format="jpeg")

    assert image.filename == "scan_page_1.jpg"
    assert image.image_bytes.startswith(JPEG_SIGNATURE)
    assert image.image_format == "jpeg"


@pytest.mark.parametrize("color_mode", ["grayscale", "monochrome"])
def test_color_modes_produce_single_channel_images(pdf_factory, color_mode: str) -> None:
    [image] = to_images(pdf_factory(1), dpi=72, color_mode=color_mode)

    with Image.open(io.BytesIO(image.image_bytes)) as decoded:
        assert decoded.mode == "L"
        assert decoded.size == (101, 200)
        assert decoded.getextrema() == (255, 255)


@pytest.mark.skipif(not features.check("webp"), reason="Pillow built without WebP")
def test_webp_output(pdf_factory) -> None:
    [image] = to_images(pdf_factory(1), image_format="webp", quality=50)

    assert image.filename.endswith(".webp")
    with Image.open(io.BytesIO(image.image_bytes)) as decoded:
        assert decoded.format == "WEBP"


def test_unknown_format_and_color_mode_are_rejected(pdf_factory) -> None:
    with pytest.raises(DocumentValidationError, match="Unsupported image format"):
        to_images(pdf_factory(1), image_format="tiff")
    with pytest.raises(DocumentValidationError, match="Unsupported color mode"):
        to_images(pdf_factory(1), color_mode="sepia")
    with pytest.raises(DocumentValidationError, match="Expected PDF bytes"):
        to_images("report.pdf")


def test_page_failure_aborts_the_conversion(caplog: pytest.LogCaptureFixture) -> None:
    session = FailingSession(3, failing=2)
    caplog.set_level(logging.ERROR, logger="pdfassembler.images")

    with pytest.raises(ImageConversionError, match="page 2"):
        to_images(b"%PDF", engine=SessionEngine(session), name="scan.pdf")

    assert session.closed
    assert "Failed to convert page 2 of scan.pdf" in caplog.text


def test_engine_failure_is_reported() -> None:
    with pytest.raises(ImageConversionError, match="Failed to open broken.pdf"):
        to_images(b"junk", engine=BrokenEngine(), name="broken.pdf")


def test_unreadable_bytes_are_reported() -> None:
    with pytest.raises(ImageConversionError):
        to_images(b"definitely not a pdf")
