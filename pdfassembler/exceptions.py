"""
Custom exceptions for PDF Assembler.

Every error raised by the package derives from :class:`PdfAssemblerError`
so callers can catch a single type at the public boundary.
"""

from __future__ import annotations

from typing import Optional


class PdfAssemblerError(Exception):
    """Base exception for all PDF Assembler errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF assembler error occurred."


class DocumentValidationError(PdfAssemblerError):
    """Raised when the inputs of an operation are rejected before processing."""

    @property
    def default_message(self) -> str:
        return "Invalid input for PDF operation."


class InvalidRangeError(DocumentValidationError):
    """Raised when no usable page range remains for an extraction."""

    def __init__(self, message: str = "", *, total_pages: Optional[int] = None) -> None:
        self.total_pages = total_pages
        if not message and total_pages is not None:
            message = f"No valid page ranges found. Document has {total_pages} pages."
        super().__init__(message)

    @property
    def default_message(self) -> str:
        return "Invalid page range specification."


class DocumentParseError(PdfAssemblerError):
    """Raised when a source document cannot be loaded."""

    def __init__(self, message: str = "", *, filename: Optional[str] = None) -> None:
        self.filename = filename
        if not message and filename:
            message = f"Failed to load {filename}. Please ensure it's a valid PDF."
        super().__init__(message)

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF file."


class PageCopyError(PdfAssemblerError):
    """Raised when the pages of one range cannot be copied into a new document."""

    def __init__(self, start: int, end: int) -> None:
        self.start = start
        self.end = end
        super().__init__(f"Failed to extract pages {start}-{end}")


class MergeError(PdfAssemblerError):
    """Raised when a merge cannot be completed."""

    @property
    def default_message(self) -> str:
        return "Failed to merge PDF files."


class ThumbnailError(PdfAssemblerError):
    """Raised when a thumbnail request is malformed."""

    @property
    def default_message(self) -> str:
        return "Invalid thumbnail request."


class WatermarkError(PdfAssemblerError):
    """Raised when a watermark cannot be stamped onto a page."""

    def __init__(self, page_number: int) -> None:
        self.page_number = page_number
        super().__init__(f"Failed to watermark page {page_number}")


class ImageConversionError(PdfAssemblerError):
    """Raised when pages cannot be converted to images."""

    @property
    def default_message(self) -> str:
        return "Failed to convert PDF pages to images."


__all__ = [
    "PdfAssemblerError",
    "DocumentValidationError",
    "InvalidRangeError",
    "DocumentParseError",
    "PageCopyError",
    "MergeError",
    "ThumbnailError",
    "WatermarkError",
    "ImageConversionError",
]
