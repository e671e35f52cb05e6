"""Page-to-image conversion for the :mod:`pdfassembler` toolkit."""

from __future__ import annotations

from .rasterizer import (
    COLOR_MODES,
    IMAGE_FORMATS,
    apply_color_mode,
    clamp_dpi,
    clamp_quality,
    encode_image,
    page_image_name,
    to_images,
)

__all__ = [
    "COLOR_MODES",
    "IMAGE_FORMATS",
    "apply_color_mode",
    "clamp_dpi",
    "clamp_quality",
    "encode_image",
    "page_image_name",
    "to_images",
]
