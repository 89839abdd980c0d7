"""
Document backend: a single reportlab page with the symbol drawn as filled
rectangles. Pages are written with ``invariant=1`` so identical input
produces identical bytes.
"""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from io import BytesIO
from typing import Any, Dict, Mapping, Optional

from reportlab.lib.colors import Color, toColor
from reportlab.pdfgen import canvas

from barcodeforge.barcodegen.symbols import Symbol
from barcodeforge.model import barcode_types
from barcodeforge.renderers.base import BaseRenderer
from barcodeforge.renderers.placeholder import bar_positions, row_cell_filled

logger = logging.getLogger(__name__)

__all__ = ["PdfRenderer"]

_PLACEHOLDER_GRID_SIZE = 200
_PLACEHOLDER_CELL_SIZE = 10
_FONT = "Helvetica"


class PdfRenderer(BaseRenderer):
    """
    PDF renderer.

    Coordinates in the options are measured from the top-left corner of the
    page, like the other backends; they are flipped to PDF space internally.

    Example:
        >>> pdf = PdfRenderer().render("HELLO", "code128")
        >>> pdf[:5]
        b'%PDF-'
    """

    backend = "pdf"
    extra_defaults = {"pageWidth": 612, "pageHeight": 792}

    def _render(self, data: str, barcode_type: str, opts: Dict[str, Any]) -> bytes:
        page_w = float(opts["pageWidth"])
        page_h = float(opts["pageHeight"])
        fg = toColor(str(opts["lineColor"]))
        bg = toColor(str(opts["background"]))

        buf = BytesIO()
        doc = canvas.Canvas(buf, pagesize=(page_w, page_h), invariant=1)
        doc.setTitle(data)

        doc.setFillColor(bg)
        doc.rect(0, 0, page_w, page_h, stroke=0, fill=1)

        font_size = int(opts["fontSize"])
        display = bool(opts.get("displayValue"))
        text_block = font_size + int(opts["textMargin"]) if display else 0
        x = float(opts["marginLeft"])
        top = float(opts["marginTop"])
        if display and opts.get("textPosition") == "top":
            top += text_block

        symbol = self.try_symbol(data, barcode_type, opts)
        doc.setFillColor(fg)
        if symbol is not None:
            symbol_h = self._draw_symbol(doc, symbol, x, page_h - top, opts)
            label = symbol.text
        else:
            symbol_h = self._draw_placeholder(
                doc, data, barcode_type, x, page_h - top, opts
            )
            label = data

        if display:
            if opts.get("textPosition") == "top":
                baseline = page_h - float(opts["marginTop"]) - font_size
            else:
                gap = int(opts["textMargin"])
                baseline = page_h - top - symbol_h - gap - font_size
            self._draw_text(doc, label, baseline, page_w, opts, fg)

        doc.showPage()
        doc.save()
        return buf.getvalue()

    async def render_async(
        self,
        data: str,
        barcode_type: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> bytes:
        """Async wrapper for render (runs in the default executor)."""
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(
            None, partial(self.render, data, barcode_type, options)
        )
        return bytes(result)

    @staticmethod
    def _draw_symbol(
        doc: canvas.Canvas, symbol: Symbol, x: float, top: float, opts: Dict[str, Any]
    ) -> float:
        if symbol.is_matrix:
            cell = float(opts["moduleSize"])
            for r, row in enumerate(symbol.rows):
                y = top - (r + 1) * cell
                for c, dark in enumerate(row):
                    if dark:
                        doc.rect(x + c * cell, y, cell, cell, stroke=0, fill=1)
            return symbol.row_count * cell

        width = float(opts["width"])
        height = float(opts["height"])
        for start, run in symbol.bars():
            doc.rect(
                x + start * width, top - height, run * width, height, stroke=0, fill=1
            )
        return height

    @staticmethod
    def _draw_placeholder(
        doc: canvas.Canvas,
        data: str,
        barcode_type: str,
        x: float,
        top: float,
        opts: Dict[str, Any],
    ) -> float:
        if barcode_types.is_two_dimensional(barcode_type):
            cell = _PLACEHOLDER_CELL_SIZE
            cells = _PLACEHOLDER_GRID_SIZE // cell
            for row in range(cells):
                for col in range(cells):
                    if row_cell_filled(data, row, col, cells):
                        doc.rect(
                            x + col * cell,
                            top - (row + 1) * cell,
                            cell,
                            cell,
                            stroke=0,
                            fill=1,
                        )
            return float(_PLACEHOLDER_GRID_SIZE)

        width = float(opts.get("width") or 2)
        height = float(opts["height"])
        for bar_x in bar_positions(data, x, width):
            doc.rect(bar_x, top - height, width, height, stroke=0, fill=1)
        return height

    @staticmethod
    def _draw_text(
        doc: canvas.Canvas,
        text: str,
        baseline: float,
        page_w: float,
        opts: Dict[str, Any],
        color: Color,
    ) -> None:
        doc.setFont(_FONT, int(opts["fontSize"]))
        doc.setFillColor(color)
        left = float(opts["marginLeft"])
        right = page_w - float(opts["marginRight"])
        align = opts.get("textAlign", "center")
        if align == "left":
            doc.drawString(left, baseline, text)
        elif align == "right":
            doc.drawRightString(right, baseline, text)
        else:
            doc.drawCentredString((left + right) / 2, baseline, text)
