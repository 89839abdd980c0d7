"""
barcodegen

Источники символов: преобразование данных в матрицу модулей через внешние генераторы.

Public API:
    - LinearCodeGenerator: 1D symbols via python-barcode (class)
    - Matrix2DCodeGenerator: QR, PDF417 and BWIPP symbols (class)
    - SymbolGenerator: public barcode id -> Symbol (class)
    - Symbol: backend-neutral module description (dataclass)

Примеры:
    >>> from barcodeforge.barcodegen import SymbolGenerator
    >>> SymbolGenerator().generate("HELLO", "code128").kind
    'linear'

Зависимости:
    python-barcode, qrcode, pdf417gen, treepoem (+ Ghostscript), Pillow
"""

from barcodeforge.barcodegen.barcode_generator import LinearCodeGenerator
from barcodeforge.barcodegen.matrix2d_generator import Matrix2DCodeGenerator
from barcodeforge.barcodegen.symbols import (
    FALLBACK_MAPPING,
    SYMBOL_MAPPINGS,
    Symbol,
    SymbolGenerator,
    SymbolMapping,
    mapping_for,
)

__all__ = [
    "LinearCodeGenerator",
    "Matrix2DCodeGenerator",
    "Symbol",
    "SymbolGenerator",
    "SymbolMapping",
    "SYMBOL_MAPPINGS",
    "FALLBACK_MAPPING",
    "mapping_for",
]
