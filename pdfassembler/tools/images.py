"""Plugin exposing page-to-image conversion through the registry."""

from __future__ import annotations

from typing import List

from ..exceptions import DocumentValidationError
from ..images import to_images
from ..types import PageImage
from .common.interfaces import BaseTool
from .common.pipeline import register_tool


@register_tool("images")
class ImagesTool(BaseTool):
    """Convert every page to a PNG, JPEG or WebP image."""

    name = "images"

    def run(self) -> List[PageImage]:
        context = self.context
        if len(context.sources) != 1:
            raise DocumentValidationError(
                f"Image tool requires exactly one source document, got {len(context.sources)}"
            )

        config = context.config
        return to_images(
            context.sources[0],
            dpi=config.get("dpi"),
            image_format=config.get("image_format", "png"),
            quality=config.get("quality"),
            color_mode=config.get("color_mode", "color"),
            name=context.name_for(0),
            engine=config.get("engine"),
            logger=context.logger,
        )
