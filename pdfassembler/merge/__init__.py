"""Merge utilities for the :mod:`pdfassembler` toolkit."""

from __future__ import annotations

from .merger import MERGED_NAME, load_documents, merge

__all__ = ["MERGED_NAME", "load_documents", "merge"]
