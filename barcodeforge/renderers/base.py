"""
Shared renderer contract.

Every backend exposes ``render(data, barcode_type, options) -> artifact``.
The base class owns the default option set, the merge (caller wins), symbol
lookup through the type mapping table and the wrapping of internal failures
into a backend-tagged RenderError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Final, Mapping, Optional, Union

from PIL import ImageFont
from PIL.ImageFont import FreeTypeFont
from PIL.ImageFont import ImageFont as PILImageFont

from barcodeforge.barcodegen.symbols import Symbol, SymbolGenerator
from barcodeforge.exceptions import BarcodeError, InvalidInputError, RenderError
from barcodeforge.model.options import DEFAULT_RENDER_OPTIONS, merge_options

logger = logging.getLogger(__name__)

__all__ = [
    "BaseRenderer",
    "Artifact",
    "SymbolLayout",
    "compute_layout",
    "load_font",
    "DEFAULT_FONT",
    "MAX_IMAGE_WIDTH",
    "MAX_IMAGE_HEIGHT",
    "check_image_size",
]

Artifact = Union[bytes, str]
AnyFont = Union[FreeTypeFont, PILImageFont]

DEFAULT_FONT = "DejaVuSans.ttf"

# About 300 MB for an RGB surface at the limit
MAX_IMAGE_WIDTH: Final[int] = 10000
MAX_IMAGE_HEIGHT: Final[int] = 10000


def check_image_size(width: int, height: int) -> None:
    """
    Reject a surface larger than MAX_IMAGE_WIDTH x MAX_IMAGE_HEIGHT.

    Raises:
        InvalidInputError: either dimension is over the limit.
    """
    if width > MAX_IMAGE_WIDTH:
        raise InvalidInputError(
            f"Image width {width} exceeds maximum {MAX_IMAGE_WIDTH}px",
            context={"width": width},
        )
    if height > MAX_IMAGE_HEIGHT:
        raise InvalidInputError(
            f"Image height {height} exceeds maximum {MAX_IMAGE_HEIGHT}px",
            context={"height": height},
        )


def load_font(path: Optional[str], size: int) -> AnyFont:
    """
    Load a TrueType font, falling back to Pillow's built-in font.

    Missing fonts are common on minimal hosts and never fail a render.
    """
    try:
        return ImageFont.truetype(path or DEFAULT_FONT, int(size))
    except OSError as e:
        logger.warning("Failed to load font (%r): %r", path or DEFAULT_FONT, e)
        return ImageFont.load_default(int(size))


class BaseRenderer:
    """
    Base class for the four output backends.

    Subclasses set ``backend`` and implement ``_render``.
    ``extra_defaults`` adds renderer-local option keys.
    """

    backend: ClassVar[str] = ""
    extra_defaults: ClassVar[Mapping[str, Any]] = {}

    def __init__(self, symbols: Optional[SymbolGenerator] = None) -> None:
        self._defaults: Dict[str, Any] = dict(DEFAULT_RENDER_OPTIONS)
        self._defaults.update(self.extra_defaults)
        self._symbols = symbols or SymbolGenerator()

    def get_default_options(self) -> Dict[str, Any]:
        return dict(self._defaults)

    def set_default_options(self, options: Mapping[str, Any]) -> None:
        self._defaults = merge_options(self._defaults, options)

    def merge_options(self, options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        return merge_options(self._defaults, options)

    def render(
        self,
        data: str,
        barcode_type: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Artifact:
        """
        Render ``data`` as ``barcode_type``.

        Raises:
            RenderError: any failure inside the backend, tagged with its name.
        """
        opts = self.merge_options(options)
        try:
            artifact = self._render(data, barcode_type, opts)
        except RenderError:
            raise
        except Exception as e:
            logger.error(
                "%s rendering failed for %s: %s", self.backend, barcode_type, e
            )
            raise RenderError.wrap(self.backend, e, type=barcode_type) from e
        logger.debug(
            "%s rendered for %s (%d chars)", self.backend, barcode_type, len(data)
        )
        return artifact

    def _render(self, data: str, barcode_type: str, opts: Dict[str, Any]) -> Artifact:
        raise NotImplementedError

    def symbol(self, data: str, barcode_type: str, opts: Mapping[str, Any]) -> Symbol:
        return self._symbols.generate(data, barcode_type, opts)

    def try_symbol(
        self, data: str, barcode_type: str, opts: Mapping[str, Any]
    ) -> Optional[Symbol]:
        """Symbol or None when the source fails; used by fallback backends."""
        try:
            return self.symbol(data, barcode_type, opts)
        except BarcodeError as e:
            logger.warning(
                "%s: symbol source failed for %s, using placeholder: %s",
                self.backend,
                barcode_type,
                e,
            )
            return None


@dataclass(frozen=True)
class SymbolLayout:
    """Pixel geometry of a symbol plus its optional text line."""

    width: int
    height: int
    x: int  # symbol origin
    y: int
    module_width: int
    module_height: int
    symbol_width: int
    symbol_height: int
    text_y: int  # top of the text box
    margin_left: int
    margin_right: int

    def text_x(self, align: str, text_width: int) -> int:
        if align == "left":
            return self.margin_left
        if align == "right":
            return self.width - self.margin_right - text_width
        return (self.width - text_width) // 2


def compute_layout(
    symbol: Symbol,
    opts: Mapping[str, Any],
    text_width: int = 0,
    text_height: int = 0,
) -> SymbolLayout:
    """
    Lay out a symbol inside its margins.

    Linear symbols use ``width`` per module and ``height`` for the bars;
    matrix symbols use ``moduleSize`` for both cell edges. The text line
    sits above or below the symbol per ``textPosition``.
    """
    if symbol.is_matrix:
        module_w = module_h = max(1, int(opts["moduleSize"]))
        symbol_h = symbol.row_count * module_h
    else:
        module_w = max(1, int(opts["width"]))
        module_h = max(1, int(opts["height"]))
        symbol_h = module_h
    symbol_w = symbol.columns * module_w

    m_top = int(opts["marginTop"])
    m_bottom = int(opts["marginBottom"])
    m_left = int(opts["marginLeft"])
    m_right = int(opts["marginRight"])

    text_block = 0
    if opts.get("displayValue"):
        text_block = int(opts["textMargin"]) + text_height
    content_w = max(symbol_w, text_width)

    if opts.get("textPosition") == "top":
        text_y = m_top
        y = m_top + text_block
    else:
        y = m_top
        text_y = y + symbol_h + int(opts["textMargin"])

    width = m_left + content_w + m_right
    height = m_top + symbol_h + text_block + m_bottom
    check_image_size(width, height)

    return SymbolLayout(
        width=width,
        height=height,
        x=m_left + (content_w - symbol_w) // 2,
        y=y,
        module_width=module_w,
        module_height=module_h,
        symbol_width=symbol_w,
        symbol_height=symbol_h,
        text_y=text_y,
        margin_left=m_left,
        margin_right=m_right,
    )
