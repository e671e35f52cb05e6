"""Render engine abstractions for page thumbnails."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import fitz  # PyMuPDF


@dataclass(frozen=True)
class RenderedPage:
    """PNG raster of one page produced by a render engine."""

    width: int
    height: int
    png: bytes


class RenderSession(Protocol):
    """An opened document that can rasterize its pages."""

    @property
    def page_count(self) -> int:
        """Number of pages the engine sees in the document."""

    def render(self, index: int, scale: float) -> RenderedPage:
        """Rasterize the page at 0-based *index* at *scale* (1.0 = 72 dpi)."""

    def close(self) -> None:
        """Release engine resources held for the document."""


class RenderEngine(Protocol):
    """Protocol implemented by thumbnail render engines."""

    def open(self, data: bytes) -> RenderSession:
        """Load *data* for rendering. Raises if the engine cannot start."""


class PyMuPDFSession:
    """:class:`RenderSession` over a ``fitz.Document``."""

    def __init__(self, document: "fitz.Document") -> None:
        self._document = document

    @property
    def page_count(self) -> int:
        return self._document.page_count

    def render(self, index: int, scale: float) -> RenderedPage:
        page = self._document.load_page(index)
        pixmap = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
        return RenderedPage(width=pixmap.width, height=pixmap.height, png=pixmap.tobytes("png"))

    def close(self) -> None:
        self._document.close()


class PyMuPDFEngine:
    """Render engine backed by PyMuPDF."""

    def open(self, data: bytes) -> PyMuPDFSession:
        document = fitz.open(stream=data, filetype="pdf")
        if document.needs_pass:
            document.close()
            raise RuntimeError("Document is encrypted and cannot be rendered")
        if document.page_count == 0:
            document.close()
            raise RuntimeError("Document has no renderable pages")
        return PyMuPDFSession(document)


__all__ = [
    "PyMuPDFEngine",
    "PyMuPDFSession",
    "RenderEngine",
    "RenderSession",
    "RenderedPage",
]
