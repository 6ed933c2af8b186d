"""Image generation tool. Gemini draws the image as an SVG document."""

import logging
import re
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..errors import GenerationError, UpstreamError
from ..models.manager import ModelVariant
from .base import MCPTool, ToolOutput

if TYPE_CHECKING:
    from ..core.context import ToolContext

logger = logging.getLogger(__name__)

SVG_PATTERN = re.compile(r"<svg\b.*?</svg>", re.DOTALL | re.IGNORECASE)
DEFAULT_SIZE = 512
MAX_SIZE = 4096


def extract_svg(text: str) -> Optional[str]:
    """Pull the first complete ``<svg>`` element out of a model response."""
    match = SVG_PATTERN.search(text or "")
    return match.group(0) if match else None


class ImageGenTool(MCPTool):
    """Tool for Gemini image generation."""

    @property
    def name(self) -> str:
        return "gemini-image-gen"

    @property
    def description(self) -> str:
        return "Generate an SVG image from a text description with Gemini"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "description": {
                    "type": "string",
                    "description": "What the image should show",
                },
                "style": {
                    "type": "string",
                    "description": "Optional visual style (e.g. 'flat icon', 'line art')",
                },
                "width": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": MAX_SIZE,
                    "default": DEFAULT_SIZE,
                },
                "height": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": MAX_SIZE,
                    "default": DEFAULT_SIZE,
                },
            },
            "required": ["description"],
        }

    async def execute(self, parameters: Dict[str, Any], context: "ToolContext") -> ToolOutput:
        """Execute the tool."""
        description = parameters.get("description")
        if not description:
            return self.invalid_input("Description is required for image generation")

        width = parameters.get("width", DEFAULT_SIZE)
        height = parameters.get("height", DEFAULT_SIZE)
        for label, value in (("Width", width), ("Height", height)):
            if isinstance(value, bool) or not isinstance(value, int) or not 0 < value <= MAX_SIZE:
                return self.invalid_input(f"{label} must be an integer between 1 and {MAX_SIZE}")

        prompt = self._build_prompt(description, parameters.get("style", ""), width, height)

        try:
            response = await context.connection.generate(ModelVariant.PRO, prompt)
            svg = extract_svg(response)
            if svg is None:
                raise UpstreamError(
                    "Response did not contain an SVG image",
                    model=context.connection.model_name(ModelVariant.PRO),
                )
        except GenerationError as e:
            return self.upstream_failure(e)

        return ToolOutput(
            success=True,
            result=svg,
            tool_name=self.name,
            metadata={"mime_type": "image/svg+xml", "width": width, "height": height},
        )

    def _build_prompt(self, description: str, style: str, width: int, height: int) -> str:
        """Build the image prompt."""
        style_text = f"\nStyle: {style}" if style else ""

        return f"""Create an image as a single self-contained SVG document.

Image description: {description}{style_text}
Canvas: width="{width}" height="{height}" with a matching viewBox.

Requirements:
1. Output only the SVG markup, starting with <svg and ending with </svg>
2. Do not reference external images, fonts or scripts
3. Use shapes, paths and gradients to depict the description faithfully"""
