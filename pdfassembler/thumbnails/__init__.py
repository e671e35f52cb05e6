"""Page thumbnail utilities for the :mod:`pdfassembler` toolkit."""

from __future__ import annotations

from .engine import PyMuPDFEngine, RenderEngine, RenderedPage, RenderSession
from .placeholder import render_placeholder
from .thumbnailer import (
    ThumbnailCache,
    estimate_page_count,
    fallback_thumbnails,
    placeholder_thumbnail,
    thumbnails,
)

__all__ = [
    "PyMuPDFEngine",
    "RenderEngine",
    "RenderSession",
    "RenderedPage",
    "ThumbnailCache",
    "estimate_page_count",
    "fallback_thumbnails",
    "placeholder_thumbnail",
    "render_placeholder",
    "thumbnails",
]
