"""
Type definitions and dataclasses for PDF Assembler.

This module defines the records returned across the public interface.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import PdfAssemblerError


@dataclass
class DocumentInfo:
    """
    PDF document information and metadata.

    Attributes:
        name: File name the document was loaded under
        num_pages: Number of pages in the document
        byte_size: Size of the serialized document in bytes
        title: PDF title metadata
        author: PDF author metadata
        subject: PDF subject metadata
        creator: PDF creator application
        producer: PDF producer application
        is_encrypted: Whether the PDF is encrypted
        outline_entries: Number of bookmarks in the document outline
        page_sizes: Width and height of every page in PDF points
    """
    name: str
    num_pages: int
    byte_size: int
    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    creator: Optional[str] = None
    producer: Optional[str] = None
    is_encrypted: bool = False
    outline_entries: int = 0
    page_sizes: List[Tuple[float, float]] = field(default_factory=list)


@dataclass(frozen=True)
class Thumbnail:
    """
    Rasterized preview of a single page.

    Attributes:
        page_number: 1-based page number the preview represents
        width: Image width in pixels
        height: Image height in pixels
        image_bytes: PNG-encoded image
        placeholder: ``True`` when the image was synthesized instead of
            rendered from the page
    """
    page_number: int
    width: int
    height: int
    image_bytes: bytes
    placeholder: bool = False


@dataclass(frozen=True)
class PageImage:
    """
    A page converted to a standalone image file.

    Attributes:
        page_number: 1-based page number the image was made from
        width: Image width in pixels
        height: Image height in pixels
        image_bytes: Encoded image data
        image_format: ``png``, ``jpeg`` or ``webp``
        filename: Suggested file name, e.g. ``report_page_3.png``
    """
    page_number: int
    width: int
    height: int
    image_bytes: bytes
    image_format: str
    filename: str


@dataclass
class ProcessingResult:
    """
    Outcome of a document operation.

    Attributes:
        success: Whether the operation completed
        operation: Name of the operation performed
        outputs: Serialized PDF documents produced, in order
        error: Human-readable failure reason when ``success`` is ``False``
        details: Operation-specific extras (ranges written, page counts...)
    """
    success: bool
    operation: str
    outputs: List[bytes] = field(default_factory=list)
    error: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[PdfAssemblerError] = field(default=None, repr=False, compare=False)

    @classmethod
    def ok(cls, operation: str, outputs: List[bytes], **details: Any) -> "ProcessingResult":
        return cls(success=True, operation=operation, outputs=list(outputs), details=details)

    @classmethod
    def failed(cls, operation: str, exc: PdfAssemblerError) -> "ProcessingResult":
        return cls(success=False, operation=operation, error=str(exc), exception=exc)

    @property
    def total_outputs(self) -> int:
        return len(self.outputs)

    def unwrap(self) -> List[bytes]:
        """Return the outputs, re-raising the stored failure if there is one."""
        if not self.success:
            if self.exception is not None:
                raise self.exception
            raise PdfAssemblerError(self.error or "")
        return self.outputs

    def __str__(self) -> str:
        if self.success:
            return f"ProcessingResult(operation={self.operation}, success=True, outputs={self.total_outputs})"
        return f"ProcessingResult(operation={self.operation}, success=False, error='{self.error}')"


__all__ = ["DocumentInfo", "PageImage", "ProcessingResult", "Thumbnail"]
