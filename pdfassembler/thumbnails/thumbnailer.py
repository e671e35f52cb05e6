"""Page thumbnail generation with per-page and whole-document fallbacks."""

from __future__ import annotations

import hashlib
import logging
from contextlib import closing
from typing import Dict, List, Optional, Tuple, Union

from ..config import AssemblerSettings, get_settings
from ..core.document import Document
from ..exceptions import ThumbnailError
from ..types import Thumbnail
from .engine import PyMuPDFEngine, RenderEngine
from .placeholder import render_placeholder

LOGGER = logging.getLogger("pdfassembler.thumbnails")

CacheKey = Tuple[str, int, float]


class ThumbnailCache:
    """In-memory cache of rendered thumbnails keyed by document digest and page."""

    def __init__(self, max_entries: int = 512) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self.max_entries = max_entries
        self._entries: Dict[CacheKey, Thumbnail] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: CacheKey) -> Optional[Thumbnail]:
        return self._entries.get(key)

    def put(self, key: CacheKey, thumbnail: Thumbnail) -> None:
        if key not in self._entries and len(self._entries) >= self.max_entries:
            self._entries.pop(next(iter(self._entries)))
        self._entries[key] = thumbnail

    def clear(self) -> None:
        self._entries.clear()


def estimate_page_count(byte_size: int, settings: Optional[AssemblerSettings] = None) -> int:
    """Rough page count for a document that could not be opened for rendering."""

    settings = settings or get_settings()
    estimate = byte_size // settings.fallback_bytes_per_page
    return max(1, min(settings.fallback_max_pages, estimate))


def placeholder_thumbnail(
    page_number: int,
    total_pages: int,
    settings: Optional[AssemblerSettings] = None,
) -> Thumbnail:
    settings = settings or get_settings()
    return Thumbnail(
        page_number=page_number,
        width=settings.placeholder_width,
        height=settings.placeholder_height,
        image_bytes=render_placeholder(
            page_number,
            total_pages,
            width=settings.placeholder_width,
            height=settings.placeholder_height,
        ),
        placeholder=True,
    )


def fallback_thumbnails(byte_size: int, settings: Optional[AssemblerSettings] = None) -> List[Thumbnail]:
    """Placeholders for every page estimated from the document size."""

    settings = settings or get_settings()
    total = estimate_page_count(byte_size, settings)
    return [placeholder_thumbnail(number, total, settings) for number in range(1, total + 1)]


def thumbnails(
    source: Union[Document, bytes],
    max_pages: Optional[int] = None,
    *,
    engine: Optional[RenderEngine] = None,
    cache: Optional[ThumbnailCache] = None,
    settings: Optional[AssemblerSettings] = None,
    logger: Optional[logging.Logger] = None,
) -> List[Thumbnail]:
    """Return one thumbnail per page, in page order, up to *max_pages*.

    A page that fails to render is replaced by a placeholder and the
    remaining pages are still rendered. If the engine cannot open the
    document at all, placeholders are synthesized for a page count
    estimated from the byte size; *max_pages* does not apply on that path.

    Raises:
        ThumbnailError: If *max_pages* is not a positive integer.
    """

    settings = settings or get_settings()
    logger = logger or LOGGER
    engine = engine or PyMuPDFEngine()

    if max_pages is None:
        max_pages = settings.thumbnail_max_pages
    if max_pages is not None and (isinstance(max_pages, bool) or not isinstance(max_pages, int) or max_pages < 1):
        raise ThumbnailError(f"max_pages must be a positive integer, got {max_pages!r}")

    if isinstance(source, Document):
        data = source.to_bytes()
        digest = source.digest
    elif isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
        digest = hashlib.sha256(data).hexdigest()
    else:
        raise ThumbnailError(f"Expected PDF bytes, got {type(source).__name__}")

    scale = settings.thumbnail_scale

    try:
        session = engine.open(data)
    except Exception as exc:
        logger.warning("Render engine unavailable, using fallback thumbnails: %s", exc)
        return fallback_thumbnails(len(data), settings)

    try:
        page_count = session.page_count
    except Exception as exc:
        session.close()
        logger.warning("Render engine could not count pages, using fallback thumbnails: %s", exc)
        return fallback_thumbnails(len(data), settings)

    limit = page_count if max_pages is None else min(page_count, max_pages)
    results: List[Thumbnail] = []
    with closing(session):
        for number in range(1, limit + 1):
            key = (digest, number, scale)
            cached = cache.get(key) if cache is not None else None
            if cached is not None:
                results.append(cached)
                continue

            try:
                rendered = session.render(number - 1, scale)
            except Exception as exc:
                logger.warning("Failed to render page %d of %d: %s", number, page_count, exc)
                results.append(placeholder_thumbnail(number, page_count, settings))
                continue

            thumbnail = Thumbnail(
                page_number=number,
                width=rendered.width,
                height=rendered.height,
                image_bytes=rendered.png,
            )
            if cache is not None:
                cache.put(key, thumbnail)
            results.append(thumbnail)

    placeholders = sum(1 for item in results if item.placeholder)
    logger.debug("Generated %d thumbnail(s), %d placeholder(s)", len(results), placeholders)
    return results


__all__ = [
    "ThumbnailCache",
    "estimate_page_count",
    "fallback_thumbnails",
    "placeholder_thumbnail",
    "thumbnails",
]
