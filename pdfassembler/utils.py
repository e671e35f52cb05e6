"""Utility functions for PDF Assembler callers."""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from .core.document import Document
from .core.utils import resolve_path
from .types import DocumentInfo

OutputEntry = Tuple[str, bytes]


def describe_document(document: Document) -> DocumentInfo:
    """Return :class:`DocumentInfo` for an already parsed document."""

    metadata = document.metadata
    return DocumentInfo(
        name=document.name,
        num_pages=document.page_count,
        byte_size=document.byte_size,
        title=metadata.title,
        author=metadata.author,
        subject=metadata.subject,
        creator=metadata.creator,
        producer=metadata.producer,
        is_encrypted=document.is_encrypted,
        outline_entries=len(document.outline),
        page_sizes=[(page.width, page.height) for page in document.pages],
    )


def write_zip_archive(entries: Iterable[OutputEntry], destination: Union[str, Path]) -> Path:
    """Write ``(filename, data)`` pairs into a deflated zip at *destination*."""

    archive_path = resolve_path(destination)
    archive_path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for filename, data in entries:
            archive.writestr(filename, data)
    return archive_path


def write_outputs(entries: Iterable[OutputEntry], output_dir: Union[str, Path]) -> List[Path]:
    """Write ``(filename, data)`` pairs as files inside *output_dir*."""

    directory = resolve_path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for filename, data in entries:
        destination = directory / filename
        destination.write_bytes(data)
        written.append(destination)
    return written


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "500 KB")
    """
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"


__all__ = ["describe_document", "format_file_size", "write_outputs", "write_zip_archive"]
