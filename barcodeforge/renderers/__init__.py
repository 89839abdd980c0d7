"""
renderers

Output backends sharing ``render(data, barcode_type, options) -> artifact``:

    - PngRenderer: PNG/JPEG bytes (Pillow)
    - SvgRenderer: SVG text (module SVG, placeholder)
    - HtmlRenderer: HTML fragment
    - PdfRenderer: PDF bytes (reportlab)
"""

from barcodeforge.renderers.base import BaseRenderer, load_font
from barcodeforge.renderers.html_renderer import HtmlRenderer
from barcodeforge.renderers.pdf_renderer import PdfRenderer
from barcodeforge.renderers.png_renderer import PngRenderer
from barcodeforge.renderers.svg_renderer import SvgRenderer

__all__ = [
    "BaseRenderer",
    "HtmlRenderer",
    "PdfRenderer",
    "PngRenderer",
    "SvgRenderer",
    "load_font",
]
