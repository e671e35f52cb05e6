"""Plugin exposing document merging through the registry."""

from __future__ import annotations

from ..core.document import Document
from ..core.utils import get_logger
from ..merge import MERGED_NAME, merge
from .common.interfaces import BaseTool
from .common.pipeline import register_tool

LOGGER = get_logger("pdfassembler.tools.merge")


@register_tool("merge")
class MergeTool(BaseTool):
    """Merge documents in order, with one bookmark per source."""

    name = "merge"

    def run(self) -> Document:
        context = self.context
        documents = context.ensure_documents()
        LOGGER.debug("Merging %d input(s)", len(documents))

        result = merge(
            documents,
            add_bookmarks=context.config.get("add_bookmarks", True),
            preserve_metadata=context.config.get("preserve_metadata", True),
            name=context.config.get("output_name", MERGED_NAME),
            settings=context.settings,
            logger=context.logger,
        )
        return result
