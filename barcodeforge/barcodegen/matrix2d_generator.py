"""
RU: Генерация матриц модулей 2D/многострочных/почтовых штрихкодов (QR, PDF417, DataMatrix, Aztec, ...)
EN: Module-matrix source for 2D, stacked and postal symbologies

Provides:
- QR matrices and images (qrcode)
- PDF417 matrices (pdf417gen)
- Everything else BWIPP knows (treepoem, requires Ghostscript)

All engines return the symbol as rows of dark/light modules so renderers can
draw them with their own primitives.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Final, List, Mapping, Optional, Tuple

import pdf417gen
import qrcode
from PIL import Image
from qrcode.constants import (
    ERROR_CORRECT_H,
    ERROR_CORRECT_L,
    ERROR_CORRECT_M,
    ERROR_CORRECT_Q,
)
from qrcode.exceptions import DataOverflowError

from barcodeforge.exceptions import SymbolGenerationError

logger = logging.getLogger(__name__)

__all__ = [
    "Matrix2DCodeGenerator",
    "ModuleMatrix",
    "QR_ERROR_CORRECTION",
]

ModuleMatrix = List[List[bool]]

QR_ERROR_CORRECTION: Final[Mapping[str, int]] = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}

# Pixel luminance below this counts as a dark module
_DARK_THRESHOLD: Final[int] = 128


class Matrix2DCodeGenerator:
    """2D-code module source for QR / PDF417 / BWIPP symbologies.

    Args:
        engine: ``qrcode``, ``pdf417`` or ``treepoem``.
        name: Engine-specific symbology name (BWIPP name for treepoem).
        data: Source data to encode.
        options: Engine options (``errorCorrectionLevel``, ``columns``,
            ``security_level`` or BWIPP options).

    Examples:
        >>> gen = Matrix2DCodeGenerator("qrcode", "qrcode", "test123")
        >>> matrix = gen.modules()
        >>> len(matrix) == len(matrix[0])
        True
    """

    _engines: Tuple[str, ...] = ("qrcode", "pdf417", "treepoem")

    def __init__(
        self,
        engine: str,
        name: str,
        data: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if engine not in self._engines:
            logger.error("Unsupported 2D engine %r", engine)
            raise SymbolGenerationError(f"Unsupported 2D engine: {engine!r}")
        self.engine = engine
        self.name = name
        self.data = data
        self.options: Dict[str, Any] = dict(options) if options else {}

    def validate(self) -> None:
        if not isinstance(self.data, str) or not self.data:
            logger.error("Input data is empty or not string, got %r", self.data)
            raise SymbolGenerationError("Data must be a non-empty string")

    def modules(self) -> ModuleMatrix:
        """
        Encode the payload and return its module matrix (no quiet zone).

        Raises:
            SymbolGenerationError: the engine rejected the payload or is unavailable.
        """
        self.validate()
        if self.engine == "qrcode":
            matrix = self._qr_modules()
        elif self.engine == "pdf417":
            matrix = self._pdf417_modules()
        else:
            matrix = self._treepoem_modules()
        if not matrix or not matrix[0]:
            raise SymbolGenerationError(f"{self.name} produced an empty symbol")
        logger.debug(
            "2D modules generated: %s via %s, %dx%d",
            self.name,
            self.engine,
            len(matrix[0]),
            len(matrix),
        )
        return matrix

    # --- QR

    def _qr_code(self, box_size: int = 1, border: int = 0) -> qrcode.QRCode:
        level = str(self.options.get("errorCorrectionLevel", "M")).upper()
        qr = qrcode.QRCode(
            version=self.options.get("version"),
            error_correction=QR_ERROR_CORRECTION.get(level, ERROR_CORRECT_M),
            box_size=box_size,
            border=border,
        )
        try:
            qr.add_data(self.data)
            qr.make(fit=True)
        except (ValueError, DataOverflowError) as e:
            logger.error("QR encoding error: %r", e)
            raise SymbolGenerationError(f"QR Code generation failed: {e}") from e
        return qr

    def _qr_modules(self) -> ModuleMatrix:
        qr = self._qr_code()
        return [[bool(cell) for cell in row] for row in qr.get_matrix()]

    def render_qr_image(
        self,
        fill_color: Any = "black",
        back_color: Any = "white",
        box_size: int = 10,
    ) -> Image.Image:
        """
        Render the QR symbol as a Pillow image without quiet zone.

        Raises:
            SymbolGenerationError: on encoding failure or a non-QR engine.
        """
        import qrcode.image.pil

        if self.engine != "qrcode":
            raise SymbolGenerationError(f"{self.name} is not a QR symbol")
        self.validate()
        qr = self._qr_code(box_size=box_size, border=0)
        qr_img = qr.make_image(
            fill_color=fill_color,
            back_color=back_color,
            image_factory=qrcode.image.pil.PilImage,
        )
        if hasattr(qr_img, "get_image"):
            qr_img = qr_img.get_image()
        if not isinstance(qr_img, Image.Image):
            logger.error("QR code did not produce a PIL.Image")
            raise SymbolGenerationError("QR code rendering did not produce a valid image")
        return qr_img.convert("RGB")

    # --- PDF417

    def _pdf417_modules(self) -> ModuleMatrix:
        try:
            codes = pdf417gen.encode(
                self.data,
                columns=int(self.options.get("columns", 6)),
                security_level=int(self.options.get("security_level", 2)),
            )
            # One pixel per module with no padding
            img = pdf417gen.render_image(codes, scale=1, ratio=1, padding=0)
        except ValueError as e:
            logger.error("PDF417 generation error: %r", e)
            raise SymbolGenerationError(f"PDF417 generation failed: {e}") from e
        return self._image_to_matrix(img)

    # --- BWIPP via treepoem

    def _treepoem_modules(self) -> ModuleMatrix:
        try:
            import treepoem
        except ImportError as e:
            logger.error("treepoem not installed for %s", self.name)
            raise SymbolGenerationError(
                "treepoem not installed (pip install treepoem)"
            ) from e

        bwipp_opts = {
            k: v
            for k, v in self.options.items()
            if k in ("includecheck", "eclevel", "columns", "rows", "mode", "layers")
        }
        try:
            img = treepoem.generate_barcode(
                barcode_type=self.name,
                data=self.data,
                options=bwipp_opts,
                scale=1,
            )
        except Exception as e:
            # treepoem surfaces Ghostscript and BWIPP failures as assorted errors
            logger.error("%s generation error: %r", self.name, e)
            raise SymbolGenerationError(f"{self.name} generation failed: {e}") from e

        if not isinstance(img, Image.Image):
            raise SymbolGenerationError(f"{self.name} generation failed via treepoem")
        return self._image_to_matrix(img)

    @staticmethod
    def _image_to_matrix(img: Image.Image) -> ModuleMatrix:
        gray = img.convert("L")
        width, height = gray.size
        pixels = gray.load()
        return [
            [pixels[x, y] < _DARK_THRESHOLD for x in range(width)]
            for y in range(height)
        ]

    @classmethod
    def engines(cls) -> Tuple[str, ...]:
        return cls._engines
