"""Synthesized placeholder thumbnails drawn with Pillow."""

from __future__ import annotations

import io

from PIL import Image, ImageDraw, ImageFont

_BACKGROUND = "#ffffff"
_BORDER = "#e2e8f0"
_HEADER = "#1f2937"
_TEXT_LINE = "#d1d5db"
_RULE = "#e5e7eb"
_CAPTION = "#9ca3af"

_MARGIN = 15


def render_placeholder(page_number: int, total_pages: int, width: int = 200, height: int = 280) -> bytes:
    """Return a PNG page mock-up captioned ``Page <n> of <total>``."""

    image = Image.new("RGB", (width, height), _BACKGROUND)
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()

    draw.rectangle((0, 0, width - 1, height - 1), outline=_BORDER, width=1)

    # header block and simulated body text
    header_bottom = min(height - 1, _MARGIN + 8)
    draw.rectangle((_MARGIN, _MARGIN, max(_MARGIN, width // 2), header_bottom), fill=_HEADER)
    line_y = header_bottom + 14
    for line in range(8):
        right = width - _MARGIN - (line % 3) * 12
        if line_y >= height * 0.5 or right <= _MARGIN:
            break
        draw.line((_MARGIN, line_y, right, line_y), fill=_TEXT_LINE, width=2)
        line_y += 12

    for offset, inset in ((int(height * 0.55), _MARGIN), (int(height * 0.62), _MARGIN + 20)):
        if offset < height - 1:
            draw.line((_MARGIN, offset, width - inset, offset), fill=_RULE, width=1)

    caption = f"Page {page_number} of {total_pages}"
    left, top, right, bottom = draw.textbbox((0, 0), caption, font=font)
    text_x = (width - (right - left)) / 2
    text_y = height - _MARGIN - (bottom - top)
    draw.text((text_x, text_y), caption, fill=_CAPTION, font=font)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


__all__ = ["render_placeholder"]
