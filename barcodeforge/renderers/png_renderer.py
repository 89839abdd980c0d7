"""
Raster backend: draws symbol modules and the text line with Pillow.

The same class serves PNG and JPEG; only the encoder differs. There is no
placeholder fallback here: a symbol source failure is a RenderError.
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Any, Dict, Optional, Tuple

from PIL import Image, ImageColor, ImageDraw

from barcodeforge.barcodegen.symbols import Symbol, SymbolGenerator
from barcodeforge.renderers.base import (
    BaseRenderer,
    SymbolLayout,
    check_image_size,
    compute_layout,
    load_font,
)

logger = logging.getLogger(__name__)

__all__ = ["PngRenderer"]

_ENCODERS: Dict[str, str] = {"png": "PNG", "jpg": "JPEG", "jpeg": "JPEG"}


class PngRenderer(BaseRenderer):
    """
    Raster renderer.

    Args:
        image_format: ``png``, ``jpg`` or ``jpeg``
        symbols: Symbol source (shared with the other renderers by the service)

    Example:
        >>> png = PngRenderer().render("HELLO", "code128", {"height": 60})
        >>> png[:8] == b"\\x89PNG\\r\\n\\x1a\\n"
        True
    """

    backend = "png"
    extra_defaults = {"font": None}

    def __init__(
        self, image_format: str = "png", symbols: Optional[SymbolGenerator] = None
    ) -> None:
        super().__init__(symbols)
        fmt = image_format.lower()
        if fmt not in _ENCODERS:
            raise ValueError(f"Unsupported raster format: {image_format}")
        self.image_format = fmt
        self.backend = fmt  # type: ignore[misc]

    def _render(self, data: str, barcode_type: str, opts: Dict[str, Any]) -> bytes:
        symbol = self.symbol(data, barcode_type, opts)
        img = self.draw(symbol, opts)
        buf = BytesIO()
        encoder = _ENCODERS[self.image_format]
        if encoder == "JPEG":
            img.save(buf, format=encoder, quality=95)
        else:
            img.save(buf, format=encoder)
        logger.debug(
            "%s output %dx%d (%d bytes)",
            encoder,
            img.width,
            img.height,
            buf.getbuffer().nbytes,
        )
        return buf.getvalue()

    def draw(self, symbol: Symbol, opts: Dict[str, Any]) -> Image.Image:
        """Paint a symbol onto a fresh RGB surface sized to fit it."""
        background = ImageColor.getrgb(str(opts["background"]))
        foreground = ImageColor.getrgb(str(opts["lineColor"]))

        text = symbol.text if opts.get("displayValue") else ""
        if text:
            # A glyph taller than the surface limit can never fit
            check_image_size(0, int(opts["fontSize"]))
        font = load_font(opts.get("font"), int(opts["fontSize"])) if text else None
        text_w, text_h, text_offset = 0, 0, (0, 0)
        if text and font is not None:
            measure = ImageDraw.Draw(Image.new("RGB", (1, 1)))
            left, top, right, bottom = measure.textbbox((0, 0), text, font=font)
            text_w, text_h, text_offset = right - left, bottom - top, (left, top)

        layout = compute_layout(symbol, opts, text_w, text_h)
        img = Image.new("RGB", (layout.width, layout.height), background)
        draw = ImageDraw.Draw(img)

        self._draw_modules(draw, symbol, layout, foreground)

        if text and font is not None:
            tx = layout.text_x(str(opts.get("textAlign", "center")), text_w)
            draw.text(
                (tx - text_offset[0], layout.text_y - text_offset[1]),
                text,
                font=font,
                fill=foreground,
            )
        return img

    @staticmethod
    def _draw_modules(
        draw: ImageDraw.ImageDraw,
        symbol: Symbol,
        layout: SymbolLayout,
        color: Tuple[int, ...],
    ) -> None:
        x0, y0 = layout.x, layout.y
        mw, mh = layout.module_width, layout.module_height
        if not symbol.is_matrix:
            for start, run in symbol.bars():
                x = x0 + start * mw
                draw.rectangle((x, y0, x + run * mw - 1, y0 + mh - 1), fill=color)
            return
        for r, row in enumerate(symbol.rows):
            y = y0 + r * mh
            for c, dark in enumerate(row):
                if dark:
                    x = x0 + c * mw
                    draw.rectangle((x, y, x + mw - 1, y + mh - 1), fill=color)
