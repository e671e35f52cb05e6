"""Plugins exposing page-range extraction and splitting through the registry."""

from __future__ import annotations

from typing import Any, List, Sequence

from ..core.document import Document
from ..core.utils import get_logger
from ..exceptions import InvalidRangeError
from ..extract import (
    equal_parts,
    every_page_ranges,
    extract,
    parse_range_spec,
    single_page_ranges,
)
from .common.interfaces import BaseTool
from .common.pipeline import register_tool

LOGGER = get_logger("pdfassembler.tools.extract")

SPLIT_MODES = ("range", "pages", "parts", "all")


def _ranges_from_config(ranges: Any) -> List[Any]:
    if ranges is None:
        raise InvalidRangeError("ranges configuration is required for extraction")
    if isinstance(ranges, str):
        return list(parse_range_spec(ranges))
    return list(ranges)


@register_tool("extract")
class ExtractTool(BaseTool):
    """Extract page ranges into separate documents."""

    name = "extract"

    def run(self) -> List[Document]:
        context = self.context
        document = context.ensure_document()
        ranges = _ranges_from_config(context.config.get("ranges"))

        results = extract(
            document,
            ranges,
            preserve_metadata=context.config.get("preserve_metadata", True),
            settings=context.settings,
            logger=context.logger,
        )
        return results


@register_tool("split")
class SplitTool(BaseTool):
    """Split a document by ranges, pages, equal parts or every page."""

    name = "split"

    def run(self) -> List[Document]:
        context = self.context
        document = context.ensure_document()
        mode = context.config.get("mode", "range")

        ranges: Sequence[Any]
        if mode == "range":
            ranges = _ranges_from_config(context.config.get("ranges"))
        elif mode == "pages":
            pages = context.config.get("pages")
            if pages is None:
                raise InvalidRangeError("pages argument is required when mode='pages'")
            ranges = single_page_ranges(pages)
        elif mode == "parts":
            ranges = equal_parts(document.page_count, context.config.get("parts", 2))
        elif mode == "all":
            ranges = every_page_ranges(document.page_count)
        else:
            raise InvalidRangeError(
                f"Unsupported split mode: {mode}. Expected one of {', '.join(SPLIT_MODES)}"
            )

        LOGGER.debug("Split mode %s produced %d candidate range(s)", mode, len(ranges))
        results = extract(
            document,
            ranges,
            preserve_metadata=context.config.get("preserve_metadata", True),
            settings=context.settings,
            logger=context.logger,
        )
        return results
