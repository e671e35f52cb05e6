"""Page-range extraction utilities for the :mod:`pdfassembler` toolkit."""

from __future__ import annotations

from .extractor import extract, split_equal_parts
from .ranges import (
    PageRange,
    build_output_filename,
    coerce_range,
    equal_parts,
    every_page_ranges,
    filter_valid_ranges,
    parse_range_spec,
    single_page_ranges,
    unique_filename,
    validate_range,
)

__all__ = [
    "extract",
    "split_equal_parts",
    "PageRange",
    "build_output_filename",
    "coerce_range",
    "equal_parts",
    "every_page_ranges",
    "filter_valid_ranges",
    "parse_range_spec",
    "single_page_ranges",
    "unique_filename",
    "validate_range",
]
