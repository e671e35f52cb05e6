"""Plugin exposing page thumbnails through the registry."""

from __future__ import annotations

from typing import List

from ..exceptions import DocumentValidationError
from ..types import Thumbnail
from ..thumbnails import thumbnails
from .common.interfaces import BaseTool
from .common.pipeline import register_tool


@register_tool("thumbnails")
class ThumbnailTool(BaseTool):
    """Render PNG previews, substituting placeholders for failed pages."""

    name = "thumbnails"

    def run(self) -> List[Thumbnail]:
        context = self.context
        if len(context.sources) != 1:
            raise DocumentValidationError(
                f"Thumbnail tool requires exactly one source document, got {len(context.sources)}"
            )

        # Not parsed here; unreadable documents fall back to placeholders.
        source = context.documents[0] if context.documents else context.sources[0]
        result = thumbnails(
            source,
            context.config.get("max_pages"),
            engine=context.config.get("engine"),
            cache=context.config.get("cache"),
            settings=context.settings,
            logger=context.logger,
        )
        return result
