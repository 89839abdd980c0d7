"""
Vector backend.

Primary path: the real module pattern drawn as SVG rectangles, laid out
with the same geometry as the raster backend. When the primary path fails
for any reason the renderer builds a self-contained placeholder document
instead of raising.
"""

from __future__ import annotations

import logging
from html import escape
from typing import Any, Dict, List

from barcodeforge.barcodegen.symbols import Symbol
from barcodeforge.model import barcode_types
from barcodeforge.renderers.base import BaseRenderer, compute_layout
from barcodeforge.renderers.placeholder import bar_positions, fmt_number

logger = logging.getLogger(__name__)

__all__ = ["SvgRenderer"]

SVG_NS = "http://www.w3.org/2000/svg"

# Placeholder geometry
_FALLBACK_WIDTH = 300
_FALLBACK_TEXT_SPACE = 30
_FALLBACK_BAR_WIDTH = 2
_FALLBACK_START_X = 20
_FALLBACK_TOP = 10

_ANCHORS: Dict[str, str] = {"left": "start", "center": "middle", "right": "end"}


class SvgRenderer(BaseRenderer):
    """SVG renderer returning the document as text."""

    backend = "svg"

    def _render(self, data: str, barcode_type: str, opts: Dict[str, Any]) -> str:
        try:
            return self._render_primary(data, barcode_type, opts)
        except Exception as e:
            logger.warning(
                "SVG primary path failed for %s, using manual SVG: %s",
                barcode_type,
                e,
            )
            return self.create_manual_svg(data, barcode_type, opts)

    def _render_primary(self, data: str, barcode_type: str, opts: Dict[str, Any]) -> str:
        return self.module_svg(self.symbol(data, barcode_type, opts), opts)

    @staticmethod
    def module_svg(symbol: Symbol, opts: Dict[str, Any]) -> str:
        """Real module pattern as SVG rectangles (one per bar run or dark cell)."""
        font_size = int(opts["fontSize"])
        text = symbol.text if opts.get("displayValue") else ""
        layout = compute_layout(symbol, opts, 0, font_size if text else 0)
        fg = escape(str(opts["lineColor"]), quote=True)
        bg = escape(str(opts["background"]), quote=True)

        parts: List[str] = [
            f'<svg width="{layout.width}" height="{layout.height}" '
            f'viewBox="0 0 {layout.width} {layout.height}" xmlns="{SVG_NS}">',
            f'<rect width="{layout.width}" height="{layout.height}" fill="{bg}"/>',
        ]
        mw, mh = layout.module_width, layout.module_height
        if symbol.is_matrix:
            for r, row in enumerate(symbol.rows):
                for c, dark in enumerate(row):
                    if dark:
                        parts.append(
                            f'<rect x="{layout.x + c * mw}" y="{layout.y + r * mh}" '
                            f'width="{mw}" height="{mh}" fill="{fg}"/>'
                        )
        else:
            for start, run in symbol.bars():
                parts.append(
                    f'<rect x="{layout.x + start * mw}" y="{layout.y}" '
                    f'width="{run * mw}" height="{mh}" fill="{fg}"/>'
                )

        if text:
            align = str(opts.get("textAlign", "center"))
            if align == "left":
                tx = layout.margin_left
            elif align == "right":
                tx = layout.width - layout.margin_right
            else:
                tx = layout.width // 2
            parts.append(
                f'<text x="{tx}" y="{layout.text_y + font_size}" '
                f'text-anchor="{_ANCHORS.get(align, "middle")}" font-family="monospace" '
                f'font-size="{font_size}" fill="{fg}">{escape(text)}</text>'
            )
        parts.append("</svg>")
        return "".join(parts)

    @staticmethod
    def create_manual_svg(data: str, barcode_type: str, opts: Dict[str, Any]) -> str:
        """
        Placeholder SVG used when no real symbol could be produced.

        The body is a centred square for 2D types and the character-code bar
        sequence for everything else; neither is scannable.
        """
        width = _FALLBACK_WIDTH
        display = bool(opts.get("displayValue"))
        bar_height = int(opts["height"])
        height = bar_height + (_FALLBACK_TEXT_SPACE if display else 0)
        fg = escape(str(opts["lineColor"]), quote=True)
        bg = escape(str(opts["background"]), quote=True)

        parts: List[str] = [
            f'<svg width="{width}" height="{height}" xmlns="{SVG_NS}">',
            f'<rect width="{width}" height="{height}" fill="{bg}"/>',
        ]
        if barcode_types.is_two_dimensional(barcode_type):
            size = min(width, height) - 40
            x = fmt_number((width - size) / 2)
            y = fmt_number((height - size) / 2)
            parts.append(
                f'<rect x="{x}" y="{y}" width="{size}" height="{size}" '
                f'fill="{fg}" stroke="{fg}" stroke-width="1"/>'
            )
        else:
            for x_pos in bar_positions(data, _FALLBACK_START_X, _FALLBACK_BAR_WIDTH):
                parts.append(
                    f'<rect x="{fmt_number(x_pos)}" y="{_FALLBACK_TOP}" '
                    f'width="{_FALLBACK_BAR_WIDTH}" height="{bar_height}" fill="{fg}"/>'
                )

        if display:
            parts.append(
                f'<text x="{fmt_number(width / 2)}" y="{height - 5}" '
                f'text-anchor="middle" font-family="Arial" '
                f'font-size="{opts["fontSize"]}" fill="{fg}">{escape(data)}</text>'
            )
        parts.append("</svg>")
        return "".join(parts)
