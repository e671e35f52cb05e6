"""Merge functionality for the :mod:`pdfassembler.merge` package."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from ..config import MERGER_CREATOR, AssemblerSettings, get_settings
from ..core.document import Document, DocumentBuilder, DocumentMetadata
from ..exceptions import DocumentValidationError, MergeError

LOGGER = logging.getLogger("pdfassembler.merge")

MERGED_NAME = "merged.pdf"


def _first_document_metadata(document: Document, logger: logging.Logger) -> Tuple[Optional[str], Optional[str]]:
    try:
        metadata = document.metadata
    except Exception as exc:
        logger.warning("Failed to capture metadata from %s: %s", document.name, exc)
        return None, None
    return metadata.title, metadata.author


def merge(
    documents: Sequence[Document],
    *,
    add_bookmarks: bool = True,
    preserve_metadata: bool = True,
    name: str = MERGED_NAME,
    settings: Optional[AssemblerSettings] = None,
    logger: Optional[logging.Logger] = None,
) -> Document:
    """Concatenate *documents* in order into a new document.

    Args:
        documents: At least two source documents. They are never modified.
        add_bookmarks: Add one outline entry per source document pointing
            at its first page in the merged output.
        preserve_metadata: Copy title and author from the first document.
        name: File name for the merged document.

    Raises:
        DocumentValidationError: If fewer than two documents are supplied.
        MergeError: If the pages of a document cannot be copied.
    """

    settings = settings or get_settings()
    logger = logger or LOGGER

    documents = list(documents)
    if len(documents) < 2:
        raise DocumentValidationError("At least 2 PDF files are required for merging")

    builder = DocumentBuilder()
    bookmark_targets: List[Tuple[str, int]] = []

    for position, document in enumerate(documents, start=1):
        logger.debug("Processing input PDF %s", document.name)
        start_page_index = builder.page_count
        try:
            builder.copy_pages(document.pages)
        except Exception as exc:
            logger.error("Failed to process file %s: %s", document.name, exc)
            raise MergeError(
                f"Failed to process {document.name}. Please ensure it's a valid PDF."
            ) from exc

        if add_bookmarks:
            title = document.display_name or f"Document {position}"
            bookmark_targets.append((title, start_page_index))

    title = author = None
    if preserve_metadata:
        title, author = _first_document_metadata(documents[0], logger)

    builder.set_metadata(
        DocumentMetadata(
            title=title,
            author=author,
            creator=MERGER_CREATOR,
            producer=settings.producer,
        )
    )

    for bookmark_title, page_index in bookmark_targets:
        try:
            builder.add_outline_entry(bookmark_title, page_index)
        except Exception as exc:
            logger.warning("Failed to add bookmark '%s': %s", bookmark_title, exc)

    try:
        merged = builder.build(name=name or MERGED_NAME)
    except Exception as exc:
        logger.error("Failed to write merged PDF: %s", exc)
        raise MergeError("Failed to write merged PDF") from exc

    logger.info("Merged %d PDFs into %s (%d pages)", len(documents), merged.name, merged.page_count)
    return merged


def load_documents(sources: Sequence[bytes], names: Optional[Sequence[str]] = None) -> List[Document]:
    """Parse every source, naming the offending file when one cannot be loaded."""

    names = list(names or [])
    documents: List[Document] = []
    for index, data in enumerate(sources):
        name = names[index] if index < len(names) and names[index] else f"document-{index + 1}.pdf"
        documents.append(Document.from_bytes(data, name=name))
    return documents


__all__ = ["MERGED_NAME", "load_documents", "merge"]
