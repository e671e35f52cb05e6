"""Page assembly, watermarking and page rendering for PDF documents.

The functions defined here form the public boundary of the toolkit. They
accept and produce PDF byte buffers and report failures through
:class:`ProcessingResult` instead of raising.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from . import extract as extraction
from . import images as imaging
from . import merge as merging
from . import thumbnails as thumbnailing
from . import watermark as watermarking
from .config import AssemblerSettings, get_settings
from .core import Document, DocumentBuilder, DocumentMetadata, OutlineEntry, Page
from .exceptions import (
    DocumentParseError,
    DocumentValidationError,
    ImageConversionError,
    InvalidRangeError,
    MergeError,
    PageCopyError,
    PdfAssemblerError,
    ThumbnailError,
    WatermarkError,
)
from .extract import PageRange, equal_parts, filter_valid_ranges, parse_range_spec
from .thumbnails import ThumbnailCache
from .tools import load_builtin_plugins
from .tools.common.interfaces import AssemblyContext
from .tools.common.pipeline import ToolRegistry, register_tool, registry
from .types import DocumentInfo, PageImage, ProcessingResult, Thumbnail
from .utils import describe_document, format_file_size, write_outputs, write_zip_archive

__version__ = "1.0.0"

load_builtin_plugins()

__all__ = [
    "extraction",
    "merging",
    "thumbnailing",
    "watermarking",
    "imaging",
    "extract_pages",
    "split_document",
    "merge_documents",
    "add_watermark",
    "pdf_to_images",
    "get_thumbnails",
    "get_document_info",
    "AssemblerSettings",
    "get_settings",
    "AssemblyContext",
    "ToolRegistry",
    "registry",
    "register_tool",
    "Document",
    "DocumentBuilder",
    "DocumentMetadata",
    "OutlineEntry",
    "Page",
    "PageRange",
    "equal_parts",
    "filter_valid_ranges",
    "parse_range_spec",
    "ThumbnailCache",
    "DocumentInfo",
    "ProcessingResult",
    "PageImage",
    "Thumbnail",
    "describe_document",
    "format_file_size",
    "write_outputs",
    "write_zip_archive",
    "PdfAssemblerError",
    "DocumentValidationError",
    "InvalidRangeError",
    "DocumentParseError",
    "PageCopyError",
    "MergeError",
    "ThumbnailError",
    "WatermarkError",
    "ImageConversionError",
    "__version__",
]


def _run(operation: str, tool_name: str, context: AssemblyContext) -> ProcessingResult:
    logger = context.logger or logging.getLogger("pdfassembler")
    try:
        result = registry.create(tool_name, context).run()
    except PdfAssemblerError as exc:
        logger.error("%s failed: %s", operation, exc)
        return ProcessingResult.failed(operation, exc)

    documents = result if isinstance(result, list) else [result]
    return ProcessingResult.ok(
        operation,
        [document.to_bytes() for document in documents],
        names=[document.name for document in documents],
        page_counts=[document.page_count for document in documents],
    )


def extract_pages(
    source: bytes,
    ranges: Iterable[Any],
    *,
    name: str = "document.pdf",
    preserve_metadata: bool = True,
    settings: Optional[AssemblerSettings] = None,
    logger: Optional[logging.Logger] = None,
) -> ProcessingResult:
    """Extract one PDF per valid ``{"from", "to"}`` range of *source*."""

    context = AssemblyContext(
        sources=[source],
        names=[name],
        config={"ranges": list(ranges), "preserve_metadata": preserve_metadata},
        settings=settings,
        logger=logger,
    )
    return _run("extract", "extract", context)


def split_document(
    source: bytes,
    *,
    mode: str = "range",
    ranges: Optional[Iterable[Any] | str] = None,
    pages: Optional[Sequence[int]] = None,
    parts: int = 2,
    name: str = "document.pdf",
    preserve_metadata: bool = True,
    settings: Optional[AssemblerSettings] = None,
    logger: Optional[logging.Logger] = None,
) -> ProcessingResult:
    """Split *source* by ranges, selected pages, equal parts or every page."""

    context = AssemblyContext(
        sources=[source],
        names=[name],
        config={
            "mode": mode,
            "ranges": ranges if ranges is None or isinstance(ranges, str) else list(ranges),
            "pages": pages,
            "parts": parts,
            "preserve_metadata": preserve_metadata,
        },
        settings=settings,
        logger=logger,
    )
    return _run("split", "split", context)


def merge_documents(
    sources: Sequence[bytes],
    *,
    names: Optional[Sequence[str]] = None,
    add_bookmarks: bool = True,
    preserve_metadata: bool = True,
    settings: Optional[AssemblerSettings] = None,
    logger: Optional[logging.Logger] = None,
) -> ProcessingResult:
    """Merge *sources* in order into a single PDF."""

    sources = list(sources)
    if len(sources) < 2:
        exc = DocumentValidationError("At least 2 PDF files are required for merging")
        return ProcessingResult.failed("merge", exc)

    context = AssemblyContext(
        sources=sources,
        names=list(names or []),
        config={"add_bookmarks": add_bookmarks, "preserve_metadata": preserve_metadata},
        settings=settings,
        logger=logger,
    )
    return _run("merge", "merge", context)


def add_watermark(
    source: bytes,
    text: str,
    *,
    position: str = "center",
    font_size: Optional[float] = None,
    opacity: Optional[float] = None,
    name: str = "document.pdf",
    settings: Optional[AssemblerSettings] = None,
    logger: Optional[logging.Logger] = None,
) -> ProcessingResult:
    """Stamp *text* on every page of *source*.

    *position* is one of ``center``, ``diagonal``, ``top-left``,
    ``top-right``, ``bottom-left`` or ``bottom-right``. Font size is clamped
    to 24-72 points and opacity to 0.1-1.0.
    """

    context = AssemblyContext(
        sources=[source],
        names=[name],
        config={"text": text, "position": position, "font_size": font_size, "opacity": opacity},
        settings=settings,
        logger=logger,
    )
    return _run("watermark", "watermark", context)


def pdf_to_images(
    source: bytes,
    *,
    dpi: Optional[float] = None,
    image_format: str = "png",
    quality: Optional[float] = None,
    color_mode: str = "color",
    name: str = "document.pdf",
    settings: Optional[AssemblerSettings] = None,
    logger: Optional[logging.Logger] = None,
) -> ProcessingResult:
    """Convert every page of *source* to an image.

    ``outputs`` holds the encoded images in page order; ``details`` carries
    their ``names``, ``page_numbers`` and pixel ``sizes``.
    """

    context = AssemblyContext(
        sources=[source],
        names=[name],
        config={
            "dpi": dpi,
            "image_format": image_format,
            "quality": quality,
            "color_mode": color_mode,
        },
        settings=settings,
        logger=logger,
    )
    try:
        images = registry.create("images", context).run()
    except PdfAssemblerError as exc:
        (logger or logging.getLogger("pdfassembler")).error("images failed: %s", exc)
        return ProcessingResult.failed("images", exc)

    return ProcessingResult.ok(
        "images",
        [image.image_bytes for image in images],
        names=[image.filename for image in images],
        page_numbers=[image.page_number for image in images],
        sizes=[(image.width, image.height) for image in images],
    )


def get_thumbnails(
    source: bytes,
    max_pages: Optional[int] = None,
    *,
    cache: Optional[ThumbnailCache] = None,
    settings: Optional[AssemblerSettings] = None,
    logger: Optional[logging.Logger] = None,
) -> list[Thumbnail]:
    """Return page previews of *source*; unrenderable pages become placeholders.

    Never raises. A *max_pages* that is not a positive integer is ignored
    with a warning, and any other failure yields placeholder previews.
    """

    logger = logger or logging.getLogger("pdfassembler.thumbnails")
    if max_pages is not None and (isinstance(max_pages, bool) or not isinstance(max_pages, int) or max_pages < 1):
        logger.warning("Ignoring invalid max_pages %r", max_pages)
        max_pages = None

    context = AssemblyContext(
        sources=[source],
        config={"max_pages": max_pages, "cache": cache},
        settings=settings,
        logger=logger,
    )
    try:
        return registry.create("thumbnails", context).run()
    except PdfAssemblerError as exc:
        logger.warning("Thumbnail generation failed, using fallback thumbnails: %s", exc)
        byte_size = len(source) if isinstance(source, (bytes, bytearray, memoryview)) else 0
        return thumbnailing.fallback_thumbnails(byte_size, context.settings)


def get_document_info(source: bytes, *, name: str = "document.pdf") -> DocumentInfo:
    """Return :class:`DocumentInfo` for *source*.

    Raises:
        DocumentParseError: If *source* is not a readable PDF.
    """

    return describe_document(Document.from_bytes(source, name=name))
