"""
model/enums.py

(Краткое RU: Перечисления для типов штрихкодов, категорий, позиций водяного знака.)

EN: Domain enums for barcodeforge: symbology identifiers, their categories,
QR error-correction levels, watermark anchors and text layout values.
NO rendering logic here!

See Also:
    - barcodeforge/model/barcode_types.py (per-type configuration tables)
    - barcodeforge/model/render_formats.py (output formats)
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final, List, Literal

_logger: Final[logging.Logger] = logging.getLogger(__name__)


class BarcodeCategory(str, Enum):
    LINEAR = "LINEAR"
    EAN_UPC = "EAN_UPC"
    POSTAL = "POSTAL"
    SPECIALIZED = "SPECIALIZED"
    MATRIX_2D = "MATRIX_2D"
    STACKED = "STACKED"

    @property
    def is_two_dimensional(self) -> bool:
        return self is BarcodeCategory.MATRIX_2D

    def localized_name(self, lang: Literal["ru", "en"] = "en") -> str:
        names_ru = {
            self.LINEAR: "Линейные",
            self.EAN_UPC: "EAN/UPC",
            self.POSTAL: "Почтовые",
            self.SPECIALIZED: "Специализированные",
            self.MATRIX_2D: "2D матричные",
            self.STACKED: "Многострочные",
        }
        names_en = {
            self.LINEAR: "Linear",
            self.EAN_UPC: "EAN/UPC",
            self.POSTAL: "Postal",
            self.SPECIALIZED: "Specialized",
            self.MATRIX_2D: "2D Matrix",
            self.STACKED: "Stacked",
        }
        return (
            names_ru.get(self, self.value)
            if lang == "ru"
            else names_en.get(self, self.value)
        )


class BarcodeType(str, Enum):
    # Linear
    CODE128 = "code128"
    CODE128A = "code128a"
    CODE128B = "code128b"
    CODE128C = "code128c"
    CODE128AUTO = "code128auto"
    CODE39 = "code39"
    CODE39EXTENDED = "code39extended"
    CODE39CHECKSUM = "code39checksum"
    CODE39AUTO = "code39auto"
    CODE93 = "code93"
    CODE25 = "code25"
    CODE25AUTO = "code25auto"
    CODE32 = "code32"  # Italian pharmacode
    STANDARD25 = "standard25"
    STANDARD25CHECKSUM = "standard25checksum"
    INTERLEAVED25 = "interleaved25"
    INTERLEAVED25CHECKSUM = "interleaved25checksum"
    INTERLEAVED25AUTO = "interleaved25auto"
    MSI = "msi"
    MSICHECKSUM = "msichecksum"
    MSIAUTO = "msiauto"
    # EAN/UPC family
    EAN13 = "ean13"
    EAN8 = "ean8"
    EAN2 = "ean2"  # add-on
    EAN5 = "ean5"  # add-on
    UPCA = "upca"
    UPCE = "upce"
    ITF14 = "itf14"
    # Postal
    POSTNET = "postnet"
    PLANET = "planet"
    RMS4CC = "rms4cc"  # Royal Mail 4-state
    KIX = "kix"
    IMB = "imb"  # USPS Intelligent Mail
    # Specialized
    CODABAR = "codabar"
    CODE11 = "code11"
    PHARMACODE = "pharmacode"
    PHARMACODETWOTRACKS = "pharmacodetwotracks"
    # 2D matrix
    QRCODE = "qrcode"
    DATAMATRIX = "datamatrix"
    AZTEC = "aztec"
    PDF417 = "pdf417"
    MICROQR = "microqr"
    MAXICODE = "maxicode"
    # Stacked linear
    CODE16K = "code16k"
    CODE49 = "code49"


class ErrorCorrectionLevel(str, Enum):
    L = "L"  # ~7%
    M = "M"  # ~15% (default)
    Q = "Q"  # ~25%
    H = "H"  # ~30%


class WatermarkPosition(str, Enum):
    TOP_LEFT = "top-left"
    TOP_CENTER = "top-center"
    TOP_RIGHT = "top-right"
    LEFT_CENTER = "left-center"
    CENTER = "center"
    RIGHT_CENTER = "right-center"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_CENTER = "bottom-center"
    BOTTOM_RIGHT = "bottom-right"

    @classmethod
    def values(cls) -> List[str]:
        return [p.value for p in cls]


class TextAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class TextPosition(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"


DEFAULT_BARCODE_TYPE: Final[BarcodeType] = BarcodeType.CODE128
DEFAULT_ERROR_CORRECTION: Final[ErrorCorrectionLevel] = ErrorCorrectionLevel.M
DEFAULT_WATERMARK_POSITION: Final[WatermarkPosition] = WatermarkPosition.CENTER


__all__ = [
    "BarcodeCategory",
    "BarcodeType",
    "ErrorCorrectionLevel",
    "WatermarkPosition",
    "TextAlign",
    "TextPosition",
    "DEFAULT_BARCODE_TYPE",
    "DEFAULT_ERROR_CORRECTION",
    "DEFAULT_WATERMARK_POSITION",
]
