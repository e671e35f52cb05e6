"""Plugin exposing text watermarks through the registry."""

from __future__ import annotations

from ..core.document import Document
from ..core.utils import get_logger
from ..watermark import watermark
from .common.interfaces import BaseTool
from .common.pipeline import register_tool

LOGGER = get_logger("pdfassembler.tools.watermark")


@register_tool("watermark")
class WatermarkTool(BaseTool):
    """Stamp a text watermark on every page."""

    name = "watermark"

    def run(self) -> Document:
        context = self.context
        document = context.ensure_document()
        position = context.config.get("position", "center")
        LOGGER.debug("Watermarking %s at %s", document.name, position)

        return watermark(
            document,
            context.config.get("text", ""),
            position=position,
            font_size=context.config.get("font_size"),
            opacity=context.config.get("opacity"),
            settings=context.settings,
            logger=context.logger,
        )
