"""Watermark stamping for the :mod:`pdfassembler` toolkit."""

from __future__ import annotations

from .stamper import WATERMARK_POSITIONS, clamp_font_size, clamp_opacity, create_overlay, watermark

__all__ = [
    "WATERMARK_POSITIONS",
    "clamp_font_size",
    "clamp_opacity",
    "create_overlay",
    "watermark",
]
