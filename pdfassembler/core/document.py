"""Page-oriented document model built on :mod:`pypdf`.

A :class:`Document` is an immutable view over serialized PDF bytes. New
documents are produced through :class:`DocumentBuilder`, which copies
pages out of existing documents and serializes the result, so no
operation ever mutates its inputs.
"""

from __future__ import annotations

import hashlib
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, List, Mapping, Optional, Sequence

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError

from ..exceptions import DocumentParseError
from .utils import resolve_path, strip_extension

LOGGER = logging.getLogger("pdfassembler.core")

DEFAULT_NAME = "document.pdf"

_INFO_KEYS = {
    "title": "/Title",
    "author": "/Author",
    "subject": "/Subject",
    "creator": "/Creator",
    "producer": "/Producer",
}


@dataclass(frozen=True)
class DocumentMetadata:
    """Core information-dictionary fields of a PDF document."""

    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    creator: Optional[str] = None
    producer: Optional[str] = None

    @classmethod
    def from_info(cls, info: Optional[Mapping[str, Any]]) -> "DocumentMetadata":
        if not info:
            return cls()
        values = {}
        for field_name, pdf_key in _INFO_KEYS.items():
            value = info.get(pdf_key)
            if value is None:
                continue
            text = str(value).strip()
            if text:
                values[field_name] = text
        return cls(**values)

    def to_info(self) -> dict[str, str]:
        """Return the non-empty fields keyed by their PDF info names."""

        info: dict[str, str] = {}
        for field_name, pdf_key in _INFO_KEYS.items():
            value = getattr(self, field_name)
            if value:
                info[pdf_key] = value
        return info


@dataclass(frozen=True)
class OutlineEntry:
    """A flat bookmark: a label pointing at a 0-based page index."""

    title: str
    page_index: int


class Page:
    """Handle on one page of a parent :class:`Document`."""

    __slots__ = ("_document", "_index")

    def __init__(self, document: "Document", index: int) -> None:
        self._document = document
        self._index = index

    def __repr__(self) -> str:
        return f"Page(number={self.number}, document={self._document.name!r})"

    @property
    def document(self) -> "Document":
        return self._document

    @property
    def index(self) -> int:
        return self._index

    @property
    def number(self) -> int:
        return self._index + 1

    @property
    def pdf_page(self) -> Any:
        return self._document.reader.pages[self._index]

    @property
    def width(self) -> float:
        return float(self.pdf_page.mediabox.width)

    @property
    def height(self) -> float:
        return float(self.pdf_page.mediabox.height)

    def copy_into(self, builder: "DocumentBuilder") -> int:
        """Copy this page into *builder* and return its index there."""

        return builder.copy_page(self)


class Document:
    """Immutable PDF document backed by its serialized bytes."""

    def __init__(self, data: bytes, reader: PdfReader, *, name: str = DEFAULT_NAME) -> None:
        self._data = data
        self._reader = reader
        self.name = name or DEFAULT_NAME
        self._pages: Optional[List[Page]] = None
        self._digest: Optional[str] = None

    def __repr__(self) -> str:
        return f"Document(name={self.name!r}, pages={self.page_count})"

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_bytes(cls, data: bytes, *, name: str = DEFAULT_NAME) -> "Document":
        """Parse *data* into a :class:`Document`.

        Raises:
            DocumentParseError: If the bytes are not a readable PDF with at
                least one page.
        """

        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise DocumentParseError(
                f"Expected PDF bytes for {name}, got {type(data).__name__}", filename=name
            )
        data = bytes(data)
        if not data:
            raise DocumentParseError(f"{name} is empty", filename=name)

        try:
            reader = PdfReader(io.BytesIO(data))
        except PdfReadError as exc:
            LOGGER.error("Failed to parse %s: %s", name, exc)
            raise DocumentParseError(filename=name) from exc
        except Exception as exc:
            LOGGER.error("Unexpected error parsing %s: %s", name, exc)
            raise DocumentParseError(filename=name) from exc

        if reader.is_encrypted:
            LOGGER.debug("Attempting to decrypt encrypted PDF %s", name)
            try:
                decrypted = reader.decrypt("")
            except Exception as exc:
                raise DocumentParseError(
                    f"Unable to decrypt encrypted PDF: {name}", filename=name
                ) from exc
            if not decrypted:
                raise DocumentParseError(
                    f"{name} is encrypted and requires a password", filename=name
                )

        try:
            page_count = len(reader.pages)
        except Exception as exc:
            LOGGER.error("Failed to read page tree of %s: %s", name, exc)
            raise DocumentParseError(filename=name) from exc

        if page_count == 0:
            raise DocumentParseError(f"{name} contains no pages", filename=name)

        return cls(data, reader, name=name)

    @classmethod
    def from_path(cls, path: str | Path) -> "Document":
        pdf_path = resolve_path(path)
        try:
            data = pdf_path.read_bytes()
        except OSError as exc:
            raise DocumentParseError(
                f"Unable to read PDF file: {pdf_path}", filename=pdf_path.name
            ) from exc
        return cls.from_bytes(data, name=pdf_path.name)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def reader(self) -> PdfReader:
        return self._reader

    @property
    def display_name(self) -> str:
        return strip_extension(self.name)

    @property
    def byte_size(self) -> int:
        return len(self._data)

    @property
    def digest(self) -> str:
        if self._digest is None:
            self._digest = hashlib.sha256(self._data).hexdigest()
        return self._digest

    @property
    def page_count(self) -> int:
        return len(self._reader.pages)

    @property
    def pages(self) -> List[Page]:
        if self._pages is None:
            self._pages = [Page(self, index) for index in range(self.page_count)]
        return list(self._pages)

    def page(self, number: int) -> Page:
        """Return the page with 1-based *number*."""

        if number < 1 or number > self.page_count:
            raise IndexError(
                f"Page {number} is out of bounds. Document has {self.page_count} pages."
            )
        return self.pages[number - 1]

    def __iter__(self) -> Iterator[Page]:
        return iter(self.pages)

    def __len__(self) -> int:
        return self.page_count

    @property
    def metadata(self) -> DocumentMetadata:
        return DocumentMetadata.from_info(self._reader.metadata)

    @property
    def is_encrypted(self) -> bool:
        return bool(self._reader.is_encrypted)

    @property
    def outline(self) -> List[OutlineEntry]:
        entries: List[OutlineEntry] = []
        try:
            self._flatten_outline(self._reader.outline, entries)
        except Exception as exc:  # pragma: no cover - malformed outlines vary
            LOGGER.warning("Failed to read outline of %s: %s", self.name, exc)
        return entries

    def _flatten_outline(self, items: Sequence[Any], entries: List[OutlineEntry]) -> None:
        for item in items:
            if isinstance(item, list):
                self._flatten_outline(item, entries)
                continue
            page_index = self._reader.get_destination_page_number(item)
            if page_index is None or page_index < 0:
                continue
            entries.append(OutlineEntry(title=str(item.title), page_index=page_index))

    def to_bytes(self) -> bytes:
        return self._data


class DocumentBuilder:
    """Accumulates copied pages and document-level data for a new PDF."""

    def __init__(self) -> None:
        self._writer = PdfWriter()

    @property
    def page_count(self) -> int:
        return len(self._writer.pages)

    def copy_page(self, page: Page) -> int:
        self._writer.add_page(page.pdf_page)
        return len(self._writer.pages) - 1

    def copy_pages(self, pages: Sequence[Page]) -> None:
        for page in pages:
            self.copy_page(page)

    def stamp_page(self, page_index: int, overlay: Any) -> None:
        """Draw the pypdf page *overlay* on top of the copied page at *page_index*."""

        self._writer.pages[page_index].merge_page(overlay)

    def set_metadata(self, metadata: DocumentMetadata) -> None:
        info = metadata.to_info()
        if info:
            self._writer.add_metadata(info)

    def add_outline_entry(self, title: str, page_index: int) -> OutlineEntry:
        if page_index < 0 or page_index >= self.page_count:
            raise IndexError(f"Outline target {page_index} is outside the document")
        self._writer.add_outline_item(title, page_index)
        entry = OutlineEntry(title=title, page_index=page_index)
        return entry

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self._writer.write(buffer)
        return buffer.getvalue()

    def build(self, *, name: str = DEFAULT_NAME) -> Document:
        return Document.from_bytes(self.to_bytes(), name=name)


__all__ = [
    "DEFAULT_NAME",
    "Document",
    "DocumentBuilder",
    "DocumentMetadata",
    "OutlineEntry",
    "Page",
]
