"""Text watermarks drawn over every page of a document."""

from __future__ import annotations

import io
import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

from pypdf import PdfReader
from reportlab.lib import colors
from reportlab.pdfgen import canvas

from ..config import AssemblerSettings, get_settings
from ..core.document import Document, DocumentBuilder, DocumentMetadata
from ..exceptions import DocumentValidationError, WatermarkError

LOGGER = logging.getLogger("pdfassembler.watermark")

WATERMARK_POSITIONS = ("center", "diagonal", "top-left", "top-right", "bottom-left", "bottom-right")

WATERMARK_FONT = "Helvetica"
WATERMARK_GREY = 0.7
EDGE_MARGIN = 50

DEFAULT_FONT_SIZE = 48
MIN_FONT_SIZE = 24
MAX_FONT_SIZE = 72

DEFAULT_OPACITY = 0.3
MIN_OPACITY = 0.1
MAX_OPACITY = 1.0


def clamp_font_size(font_size: Optional[float]) -> int:
    if font_size is None:
        return DEFAULT_FONT_SIZE
    return int(max(MIN_FONT_SIZE, min(MAX_FONT_SIZE, font_size)))


def clamp_opacity(opacity: Optional[float]) -> float:
    if opacity is None:
        return DEFAULT_OPACITY
    return float(max(MIN_OPACITY, min(MAX_OPACITY, opacity)))


def create_overlay(
    text: str,
    width: float,
    height: float,
    *,
    position: str = "center",
    font_size: int = DEFAULT_FONT_SIZE,
    opacity: float = DEFAULT_OPACITY,
) -> Any:
    """Return a one-page pypdf page of *width* x *height* carrying *text*.

    Corner positions sit :data:`EDGE_MARGIN` points in from both edges;
    ``diagonal`` is centred and rotated 45 degrees.
    """

    packet = io.BytesIO()
    pdf = canvas.Canvas(packet, pagesize=(width, height))
    pdf.saveState()
    pdf.setFillColor(colors.Color(WATERMARK_GREY, WATERMARK_GREY, WATERMARK_GREY, alpha=opacity))
    pdf.setFont(WATERMARK_FONT, font_size)

    top = height - EDGE_MARGIN - font_size
    if position == "diagonal":
        pdf.translate(width / 2, height / 2)
        pdf.rotate(45)
        pdf.drawCentredString(0, 0, text)
    elif position == "top-left":
        pdf.drawString(EDGE_MARGIN, top, text)
    elif position == "top-right":
        pdf.drawRightString(width - EDGE_MARGIN, top, text)
    elif position == "bottom-left":
        pdf.drawString(EDGE_MARGIN, EDGE_MARGIN, text)
    elif position == "bottom-right":
        pdf.drawRightString(width - EDGE_MARGIN, EDGE_MARGIN, text)
    else:
        pdf.drawCentredString(width / 2, height / 2, text)

    pdf.restoreState()
    pdf.save()
    packet.seek(0)
    return PdfReader(packet).pages[0]


def _watermark_metadata(
    document: Document,
    settings: AssemblerSettings,
    logger: logging.Logger,
) -> DocumentMetadata:
    try:
        source = document.metadata
    except Exception as exc:
        logger.warning("Failed to read metadata from %s: %s", document.name, exc)
        source = DocumentMetadata()
    return replace(source, producer=settings.producer)


def watermark(
    document: Document,
    text: str,
    *,
    position: str = "center",
    font_size: Optional[float] = None,
    opacity: Optional[float] = None,
    settings: Optional[AssemblerSettings] = None,
    logger: Optional[logging.Logger] = None,
) -> Document:
    """Return a copy of *document* with *text* drawn in light grey on every page.

    Args:
        document: Source document; it is never modified.
        text: Watermark text; surrounding whitespace is ignored.
        position: One of :data:`WATERMARK_POSITIONS`.
        font_size: Clamped to 24-72 points, 48 when omitted.
        opacity: Clamped to 0.1-1.0, 0.3 when omitted.

    Raises:
        DocumentValidationError: If *text* is blank or *position* is unknown.
        WatermarkError: If a page cannot be stamped. No partial document
            is returned.
    """

    settings = settings or get_settings()
    logger = logger or LOGGER

    text = (text or "").strip()
    if not text:
        raise DocumentValidationError("Watermark text cannot be empty")
    if position not in WATERMARK_POSITIONS:
        raise DocumentValidationError(
            f"Unsupported watermark position: {position}. Expected one of {', '.join(WATERMARK_POSITIONS)}"
        )

    size = clamp_font_size(font_size)
    alpha = clamp_opacity(opacity)
    overlays: Dict[Tuple[float, float], Any] = {}

    builder = DocumentBuilder()
    for page in document:
        try:
            index = page.copy_into(builder)
            key = (page.width, page.height)
            if key not in overlays:
                overlays[key] = create_overlay(
                    text, page.width, page.height, position=position, font_size=size, opacity=alpha
                )
            builder.stamp_page(index, overlays[key])
        except Exception as exc:
            logger.error("Failed to watermark page %d of %s: %s", page.number, document.name, exc)
            raise WatermarkError(page.number) from exc

    builder.set_metadata(_watermark_metadata(document, settings, logger))
    result = builder.build(name=f"{document.display_name}_watermarked.pdf")
    logger.info("Watermarked %d page(s) of %s", result.page_count, document.name)
    return result


__all__ = [
    "WATERMARK_POSITIONS",
    "clamp_font_size",
    "clamp_opacity",
    "create_overlay",
    "watermark",
]
