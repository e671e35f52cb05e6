"""Convert document pages to PNG, JPEG or WebP images."""

from __future__ import annotations

import io
import logging
from contextlib import closing
from typing import List, Optional, Union

from PIL import Image, ImageEnhance

from ..core.document import Document
from ..core.utils import strip_extension
from ..exceptions import DocumentValidationError, ImageConversionError
from ..thumbnails.engine import PyMuPDFEngine, RenderEngine
from ..types import PageImage

LOGGER = logging.getLogger("pdfassembler.images")

# format name -> (Pillow format, file extension)
IMAGE_FORMATS = {
    "png": ("PNG", "png"),
    "jpeg": ("JPEG", "jpg"),
    "webp": ("WEBP", "webp"),
}
COLOR_MODES = ("color", "grayscale", "monochrome")

DEFAULT_DPI = 150
MIN_DPI = 72
MAX_DPI = 600

DEFAULT_QUALITY = 90
MIN_QUALITY = 10
MAX_QUALITY = 100

POINTS_PER_INCH = 72


def clamp_dpi(dpi: Optional[float]) -> int:
    if dpi is None:
        return DEFAULT_DPI
    return int(max(MIN_DPI, min(MAX_DPI, dpi)))


def clamp_quality(quality: Optional[float]) -> int:
    if quality is None:
        return DEFAULT_QUALITY
    return int(max(MIN_QUALITY, min(MAX_QUALITY, quality)))


def apply_color_mode(image: Image.Image, color_mode: str) -> Image.Image:
    """Return *image* converted for *color_mode*.

    ``monochrome`` is greyscale with doubled contrast and 1.5x brightness,
    which washes light backgrounds out to white.
    """

    if color_mode == "grayscale":
        return image.convert("L")
    if color_mode == "monochrome":
        image = ImageEnhance.Contrast(image.convert("L")).enhance(2.0)
        return ImageEnhance.Brightness(image).enhance(1.5)
    return image


def encode_image(image: Image.Image, image_format: str, quality: int) -> bytes:
    pil_format, _ = IMAGE_FORMATS[image_format]
    buffer = io.BytesIO()
    if pil_format == "PNG":
        image.save(buffer, pil_format, optimize=True)
    else:
        if image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        image.save(buffer, pil_format, quality=quality)
    return buffer.getvalue()


def page_image_name(base_name: str, page_number: int, image_format: str) -> str:
    _, extension = IMAGE_FORMATS[image_format]
    return f"{base_name}_page_{page_number}.{extension}"


def to_images(
    source: Union[Document, bytes],
    *,
    dpi: Optional[float] = None,
    image_format: str = "png",
    quality: Optional[float] = None,
    color_mode: str = "color",
    name: str = "document.pdf",
    engine: Optional[RenderEngine] = None,
    logger: Optional[logging.Logger] = None,
) -> List[PageImage]:
    """Render every page of *source* to an image, in page order.

    Args:
        source: Document or PDF bytes.
        dpi: Resolution, clamped to 72-600 and 150 when omitted.
        image_format: ``png``, ``jpeg`` or ``webp``.
        quality: JPEG/WebP quality, clamped to 10-100 and 90 when omitted.
        color_mode: ``color``, ``grayscale`` or ``monochrome``.
        name: File name used for the output image names.

    Raises:
        DocumentValidationError: If *image_format* or *color_mode* is unknown.
        ImageConversionError: If the document cannot be opened for rendering
            or one of its pages fails. No partial output is returned.
    """

    logger = logger or LOGGER
    engine = engine or PyMuPDFEngine()

    image_format = (image_format or "").lower()
    if image_format not in IMAGE_FORMATS:
        raise DocumentValidationError(
            f"Unsupported image format: {image_format}. Expected one of {', '.join(IMAGE_FORMATS)}"
        )
    if color_mode not in COLOR_MODES:
        raise DocumentValidationError(
            f"Unsupported color mode: {color_mode}. Expected one of {', '.join(COLOR_MODES)}"
        )

    if isinstance(source, Document):
        data = source.to_bytes()
        name = source.name
    elif isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
    else:
        raise DocumentValidationError(f"Expected PDF bytes, got {type(source).__name__}")

    resolution = clamp_dpi(dpi)
    scale = resolution / POINTS_PER_INCH
    level = clamp_quality(quality)
    base_name = strip_extension(name)

    try:
        session = engine.open(data)
    except Exception as exc:
        logger.error("Failed to open %s for rendering: %s", name, exc)
        raise ImageConversionError(f"Failed to open {name} for rendering: {exc}") from exc

    images: List[PageImage] = []
    with closing(session):
        for index in range(session.page_count):
            number = index + 1
            try:
                rendered = session.render(index, scale)
                if image_format == "png" and color_mode == "color":
                    encoded = rendered.png
                else:
                    with Image.open(io.BytesIO(rendered.png)) as image:
                        encoded = encode_image(apply_color_mode(image, color_mode), image_format, level)
            except Exception as exc:
                logger.error("Failed to convert page %d of %s: %s", number, name, exc)
                raise ImageConversionError(f"Failed to convert page {number} to {image_format}") from exc

            images.append(
                PageImage(
                    page_number=number,
                    width=rendered.width,
                    height=rendered.height,
                    image_bytes=encoded,
                    image_format=image_format,
                    filename=page_image_name(base_name, number, image_format),
                )
            )

    logger.info("Converted %d page(s) of %s to %s at %d dpi", len(images), name, image_format, resolution)
    return images


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
