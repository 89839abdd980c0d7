"""
Markup backend: a self-contained ``<div>`` fragment with inline styles and
a ``<style>`` block scoped to the container id.
"""

from __future__ import annotations

import hashlib
import logging
import random
import re
import string
import time
from html import escape
from itertools import groupby
from typing import Any, Dict, List

from barcodeforge.barcodegen.symbols import Symbol
from barcodeforge.model import barcode_types
from barcodeforge.renderers.base import BaseRenderer
from barcodeforge.renderers.placeholder import bar_counts, grid_cell_filled

logger = logging.getLogger(__name__)

__all__ = ["HtmlRenderer"]

_PLACEHOLDER_GRID_SIZE = 200
_PLACEHOLDER_CELL_SIZE = 10
_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_UNSAFE = re.compile(r"[^A-Za-z0-9_-]")
_CSS_UNSAFE = re.compile(r"[;{}<>\"'\\]")
_TEXT_ALIGNS = ("left", "center", "right")
_PIXEL_KEYS = (
    "width",
    "height",
    "fontSize",
    "textMargin",
    "margin",
    "marginTop",
    "marginBottom",
    "marginLeft",
    "marginRight",
    "moduleSize",
)


class HtmlRenderer(BaseRenderer):
    """
    HTML renderer.

    The container id comes from the ``id`` option when given. Otherwise it is
    derived from the content, so identical input yields identical markup;
    ``uniqueId=True`` switches to a time-plus-random id for pages that embed
    the same code twice.
    """

    backend = "html"
    extra_defaults = {"className": "barcode", "id": None, "uniqueId": False}

    def _render(self, data: str, barcode_type: str, opts: Dict[str, Any]) -> str:
        opts = self.style_options(opts)
        container_id = self.container_id(data, barcode_type, opts)
        container_class = escape(str(opts.get("className") or "barcode"), quote=True)

        symbol = self.try_symbol(data, barcode_type, opts)
        if symbol is None:
            if barcode_types.is_two_dimensional(barcode_type):
                body = self._placeholder_grid(data, opts)
            else:
                body = self._placeholder_bars(data, opts)
            label = data
        else:
            if symbol.is_matrix:
                body = self._matrix_html(symbol, opts)
            else:
                body = self._linear_html(symbol, opts)
            label = symbol.text

        parts: List[str] = [
            f'<div id="{container_id}" class="{container_class}" '
            f'style="{self._container_styles(opts)}">'
        ]
        text_html = ""
        if opts.get("displayValue"):
            text_html = (
                f'<div class="barcode-text" style="{self._text_styles(opts)}">'
                f"{escape(label)}</div>"
            )
        if opts.get("textPosition") == "top":
            parts.extend([text_html, body])
        else:
            parts.extend([body, text_html])
        parts.append("</div>")
        parts.append(self._scoped_styles(container_id))
        return "".join(parts)

    @staticmethod
    def container_id(data: str, barcode_type: str, opts: Dict[str, Any]) -> str:
        if opts.get("id"):
            return _ID_UNSAFE.sub("_", str(opts["id"]))
        if opts.get("uniqueId"):
            suffix = "".join(random.choices(_ID_ALPHABET, k=9))
            return f"barcode-{int(time.time() * 1000)}-{suffix}"
        digest = hashlib.sha1(
            f"{barcode_type}\x00{data}\x00{sorted(opts.items(), key=str)}".encode("utf-8")
        ).hexdigest()
        return f"barcode-{digest[:12]}"

    @staticmethod
    def style_options(opts: Dict[str, Any]) -> Dict[str, Any]:
        """
        Copy of ``opts`` safe to interpolate into inline styles.

        Pixel sizes become ints, colors lose the characters that could end a
        declaration or the attribute, and an unknown ``textAlign`` becomes
        ``center``.
        """
        safe = dict(opts)
        for key in _PIXEL_KEYS:
            safe[key] = int(opts[key])
        for key in ("background", "lineColor"):
            safe[key] = _CSS_UNSAFE.sub("", str(opts[key])).strip() or "transparent"
        if safe.get("textAlign") not in _TEXT_ALIGNS:
            safe["textAlign"] = "center"
        return safe

    # --- real modules

    @staticmethod
    def _matrix_html(symbol: Symbol, opts: Dict[str, Any]) -> str:
        cell = int(opts["moduleSize"])
        fg, bg = opts["lineColor"], opts["background"]
        parts = [
            f'<div class="matrix-code" style="display: grid; '
            f"grid-template-columns: repeat({symbol.columns}, {cell}px); "
            f"grid-auto-rows: {cell}px; background: {bg}; padding: 10px; "
            f'width: {symbol.columns * cell}px;">'
        ]
        for row in symbol.rows:
            for dark in row:
                parts.append(f'<div style="background-color: {fg if dark else bg};"></div>')
        parts.append("</div>")
        return "".join(parts)

    @staticmethod
    def _linear_html(symbol: Symbol, opts: Dict[str, Any]) -> str:
        width, height = int(opts["width"]), int(opts["height"])
        fg, bg = opts["lineColor"], opts["background"]
        parts = [
            f'<div class="linear-barcode" style="display: flex; align-items: flex-start; '
            f'background: {bg}; padding: 10px;">'
        ]
        for dark, run in groupby(symbol.rows[0]):
            span = sum(1 for _ in run) * width
            parts.append(
                f'<div style="width: {span}px; height: {height}px; '
                f'background-color: {fg if dark else bg};"></div>'
            )
        parts.append("</div>")
        return "".join(parts)

    # --- placeholders

    @staticmethod
    def _placeholder_grid(data: str, opts: Dict[str, Any]) -> str:
        size, cell = _PLACEHOLDER_GRID_SIZE, _PLACEHOLDER_CELL_SIZE
        cells = size // cell
        fg, bg = opts["lineColor"], opts["background"]
        parts = [
            f'<div class="qr-code" style="width: {size}px; height: {size}px; '
            f"display: grid; grid-template-columns: repeat({cells}, 1fr); gap: 1px; "
            f'background: {bg}; padding: 10px;">'
        ]
        for i in range(cells * cells):
            color = fg if grid_cell_filled(data, i) else bg
            parts.append(
                f'<div style="background-color: {color}; width: 100%; height: 100%;"></div>'
            )
        parts.append("</div>")
        return "".join(parts)

    @staticmethod
    def _placeholder_bars(data: str, opts: Dict[str, Any]) -> str:
        bar_width = int(opts.get("width") or 2)
        bar_height = int(opts.get("height") or 100)
        fg, bg = opts["lineColor"], opts["background"]
        parts = [
            f'<div class="linear-barcode" style="display: flex; align-items: flex-start; '
            f'background: {bg}; padding: 10px;">'
        ]
        bar = (
            f'<div style="width: {bar_width}px; height: {bar_height}px; '
            f'background-color: {fg}; margin-right: {bar_width}px;"></div>'
        )
        for count in bar_counts(data):
            parts.extend([bar] * count)
        parts.append("</div>")
        return "".join(parts)

    # --- styles

    @staticmethod
    def _container_styles(opts: Dict[str, Any]) -> str:
        return (
            f"display: inline-block; background: {opts['background']}; "
            f"padding: {opts['margin']}px; "
            f"margin: {opts['marginTop']}px {opts['marginRight']}px "
            f"{opts['marginBottom']}px {opts['marginLeft']}px; "
            f"border: 1px solid #ccc; text-align: center;"
        )

    @staticmethod
    def _text_styles(opts: Dict[str, Any]) -> str:
        return (
            f"font-family: Arial, sans-serif; font-size: {opts['fontSize']}px; "
            f"color: {opts['lineColor']}; text-align: {opts['textAlign']}; "
            f"margin-top: {opts['textMargin']}px;"
        )

    @staticmethod
    def _scoped_styles(container_id: str) -> str:
        return (
            "<style>"
            f"#{container_id} {{ font-family: Arial, sans-serif; }}"
            f"#{container_id} .barcode-text {{ font-weight: bold; }}"
            f"#{container_id} .qr-code, #{container_id} .matrix-code {{ margin: 0 auto; }}"
            f"#{container_id} .linear-barcode {{ justify-content: center; }}"
            "</style>"
        )

