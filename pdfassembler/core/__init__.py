"""Core document model and helpers shared by PDF Assembler operations."""

from __future__ import annotations

from .document import DEFAULT_NAME, Document, DocumentBuilder, DocumentMetadata, OutlineEntry, Page
from .utils import get_logger, resolve_path, strip_extension

__all__ = [
    "DEFAULT_NAME",
    "Document",
    "DocumentBuilder",
    "DocumentMetadata",
    "OutlineEntry",
    "Page",
    "get_logger",
    "resolve_path",
    "strip_extension",
]
