"""Page-range extraction for :mod:`pdfassembler`."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Set

from ..config import SPLITTER_CREATOR, AssemblerSettings, get_settings
from ..core.document import Document, DocumentBuilder, DocumentMetadata
from ..exceptions import PageCopyError
from .ranges import (
    PageRange,
    build_output_filename,
    equal_parts,
    filter_valid_ranges,
    unique_filename,
)

LOGGER = logging.getLogger("pdfassembler.extract")


def _derived_metadata(
    document: Document,
    page_range: PageRange,
    *,
    preserve_metadata: bool,
    settings: AssemblerSettings,
    logger: logging.Logger,
) -> DocumentMetadata:
    author = subject = None
    if preserve_metadata:
        try:
            source = document.metadata
            author, subject = source.author, source.subject
        except Exception as exc:
            logger.warning("Failed to read metadata from %s: %s", document.name, exc)

    return DocumentMetadata(
        title=f"{document.display_name} - {page_range.label()}",
        author=author,
        subject=subject,
        creator=SPLITTER_CREATOR,
        producer=settings.producer,
    )


def _extract_range(
    document: Document,
    page_range: PageRange,
    *,
    name: str,
    preserve_metadata: bool,
    settings: AssemblerSettings,
    logger: logging.Logger,
) -> Document:
    builder = DocumentBuilder()
    pages = document.pages
    for index in page_range.page_indices():
        pages[index].copy_into(builder)

    builder.set_metadata(
        _derived_metadata(
            document,
            page_range,
            preserve_metadata=preserve_metadata,
            settings=settings,
            logger=logger,
        )
    )
    return builder.build(name=name)


def extract(
    document: Document,
    ranges: Iterable[Any],
    *,
    preserve_metadata: bool = True,
    settings: Optional[AssemblerSettings] = None,
    logger: Optional[logging.Logger] = None,
) -> List[Document]:
    """Return one new document per valid range of *ranges*, in input order.

    Args:
        document: Source document; it is never modified.
        ranges: Page ranges as :class:`PageRange`, ``(from, to)`` pairs or
            ``{"from": .., "to": ..}`` mappings. 1-based and inclusive.
        preserve_metadata: Copy author and subject from the source.

    Raises:
        InvalidRangeError: If no range is valid for the document.
        PageCopyError: If the pages of a range cannot be copied. Ranges
            already completed are discarded with the rest of the batch.
    """

    settings = settings or get_settings()
    logger = logger or LOGGER

    valid_ranges = filter_valid_ranges(ranges, document.page_count)
    logger.debug(
        "Extracting %d range(s) from %s (%d pages)",
        len(valid_ranges),
        document.name,
        document.page_count,
    )

    results: List[Document] = []
    taken: Set[str] = set()
    for page_range in valid_ranges:
        name = unique_filename(build_output_filename(document.display_name, page_range), taken)
        try:
            extracted = _extract_range(
                document,
                page_range,
                name=name,
                preserve_metadata=preserve_metadata,
                settings=settings,
                logger=logger,
            )
        except Exception as exc:
            logger.error("Failed to process range %s-%s: %s", page_range.start, page_range.end, exc)
            raise PageCopyError(page_range.start, page_range.end) from exc
        logger.debug("Wrote %s with %d page(s)", extracted.name, extracted.page_count)
        results.append(extracted)

    logger.info("Extracted %d document(s) from %s", len(results), document.name)
    return results


def split_equal_parts(
    document: Document,
    parts: int,
    *,
    preserve_metadata: bool = True,
    settings: Optional[AssemblerSettings] = None,
    logger: Optional[logging.Logger] = None,
) -> List[Document]:
    """Split *document* into at most *parts* documents of equal page counts."""

    return extract(
        document,
        equal_parts(document.page_count, parts),
        preserve_metadata=preserve_metadata,
        settings=settings,
        logger=logger,
    )


__all__ = ["extract", "split_equal_parts"]
