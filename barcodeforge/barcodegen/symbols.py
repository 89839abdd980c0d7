"""
Symbol source facade: maps public barcode identifiers onto the external
generators and returns a backend-neutral module description.

The mapping table is many-to-one (the code128 variants share one python-barcode
class, the postal codes share BWIPP, ...). Identifiers missing from the table
fall back to Code 128; the service has already validated the type by then.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Final, List, Mapping, NamedTuple, Optional, Tuple

from barcodeforge.barcodegen.barcode_generator import LinearCodeGenerator
from barcodeforge.barcodegen.matrix2d_generator import Matrix2DCodeGenerator
from barcodeforge.exceptions import SymbolGenerationError

logger = logging.getLogger(__name__)

__all__ = [
    "Symbol",
    "SymbolMapping",
    "SymbolGenerator",
    "SYMBOL_MAPPINGS",
    "FALLBACK_MAPPING",
    "mapping_for",
    "LINEAR",
    "MATRIX",
]

LINEAR: Final[str] = "linear"
MATRIX: Final[str] = "matrix"


class SymbolMapping(NamedTuple):
    engine: str  # pybarcode | qrcode | pdf417 | treepoem
    name: str  # engine-specific symbology name
    kind: str  # linear | matrix
    options: Mapping[str, Any] = MappingProxyType({})


def _py(name: str, **options: Any) -> SymbolMapping:
    return SymbolMapping("pybarcode", name, LINEAR, MappingProxyType(options))


def _bwipp(name: str, kind: str = LINEAR, **options: Any) -> SymbolMapping:
    return SymbolMapping("treepoem", name, kind, MappingProxyType(options))


SYMBOL_MAPPINGS: Final[Mapping[str, SymbolMapping]] = MappingProxyType(
    {
        # Code 128 family
        "code128": _py("code128"),
        "code128a": _py("code128"),
        "code128b": _py("code128"),
        "code128c": _py("code128"),
        "code128auto": _py("code128"),
        # Code 39 family
        "code39": _py("code39", add_checksum=False),
        "code39auto": _py("code39", add_checksum=False),
        "code39checksum": _py("code39", add_checksum=True),
        "code39extended": _bwipp("code39ext"),
        "code93": _bwipp("code93"),
        # 2 of 5 family
        "code25": _bwipp("code2of5"),
        "code25auto": _bwipp("code2of5"),
        "standard25": _bwipp("code2of5"),
        "standard25checksum": _bwipp("code2of5", includecheck=True),
        "code32": _bwipp("code32"),
        "interleaved25": _py("itf"),
        "interleaved25auto": _py("itf"),
        "interleaved25checksum": _bwipp("interleaved2of5", includecheck=True),
        "msi": _bwipp("msi"),
        "msiauto": _bwipp("msi"),
        "msichecksum": _bwipp("msi", includecheck=True),
        # EAN/UPC
        "ean13": _py("ean13"),
        "ean8": _py("ean8"),
        "ean2": _bwipp("ean2"),
        "ean5": _bwipp("ean5"),
        "upca": _py("upca"),
        "upce": _bwipp("upce"),
        "itf14": _py("itf"),
        # Postal (4-state bars keep their full height profile)
        "postnet": _bwipp("postnet", MATRIX),
        "planet": _bwipp("planet", MATRIX),
        "rms4cc": _bwipp("royalmail", MATRIX),
        "kix": _bwipp("kix", MATRIX),
        "imb": _bwipp("onecode", MATRIX),
        # Specialized
        "codabar": _py("codabar"),
        "code11": _bwipp("code11"),
        "pharmacode": _bwipp("pharmacode"),
        "pharmacodetwotracks": _bwipp("pharmacode2", MATRIX),
        # 2D
        "qrcode": SymbolMapping("qrcode", "qrcode", MATRIX),
        "pdf417": SymbolMapping("pdf417", "pdf417", MATRIX),
        "datamatrix": _bwipp("datamatrix", MATRIX),
        "aztec": _bwipp("azteccode", MATRIX),
        "microqr": _bwipp("microqrcode", MATRIX),
        "maxicode": _bwipp("maxicode", MATRIX),
        # Stacked
        "code16k": _bwipp("code16k", MATRIX),
        "code49": _bwipp("code49", MATRIX),
    }
)

FALLBACK_MAPPING: Final[SymbolMapping] = SYMBOL_MAPPINGS["code128"]


def mapping_for(barcode_type: str) -> SymbolMapping:
    mapping = SYMBOL_MAPPINGS.get(barcode_type)
    if mapping is None:
        logger.warning(
            "No symbol mapping for %r, falling back to code128", barcode_type
        )
        return FALLBACK_MAPPING
    return mapping


@dataclass(frozen=True)
class Symbol:
    """
    Backend-neutral description of an encoded symbol.

    Attributes:
        kind: ``linear`` (one row of bars) or ``matrix`` (rows of cells)
        rows: Dark/light modules; a linear symbol has exactly one row
        text: Human readable text (includes computed check digits)
        engine: Generator that produced the modules
    """

    kind: str
    rows: Tuple[Tuple[bool, ...], ...]
    text: str
    engine: str
    name: str = ""

    @property
    def is_matrix(self) -> bool:
        return self.kind == MATRIX

    @property
    def columns(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def bars(self) -> List[Tuple[int, int]]:
        """
        Runs of dark modules of a linear symbol as ``(start, width)`` pairs.
        """
        runs: List[Tuple[int, int]] = []
        start: Optional[int] = None
        row = self.rows[0] if self.rows else ()
        for i, dark in enumerate(row):
            if dark and start is None:
                start = i
            elif not dark and start is not None:
                runs.append((start, i - start))
                start = None
        if start is not None:
            runs.append((start, len(row) - start))
        return runs


class SymbolGenerator:
    """
    Entry point used by every renderer to obtain real module patterns.

    Example:
        >>> symbol = SymbolGenerator().generate("1234567890128", "ean13")
        >>> symbol.kind, symbol.text
        ('linear', '1234567890128')
    """

    def generate(
        self,
        data: str,
        barcode_type: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Symbol:
        mapping = mapping_for(barcode_type)
        opts = dict(options or {})

        if mapping.engine == "pybarcode":
            gen = LinearCodeGenerator(mapping.name, data, mapping.options)
            modules = gen.modules()
            if not any(modules):
                raise SymbolGenerationError(f"{mapping.name} produced no bars")
            return Symbol(
                kind=LINEAR,
                rows=(tuple(modules),),
                text=gen.text(),
                engine=mapping.engine,
                name=mapping.name,
            )

        engine_opts: Dict[str, Any] = dict(mapping.options)
        for key in ("errorCorrectionLevel", "version", "columns", "security_level"):
            if key in opts:
                engine_opts[key] = opts[key]
        gen2d = Matrix2DCodeGenerator(mapping.engine, mapping.name, data, engine_opts)
        matrix = gen2d.modules()

        if mapping.kind == LINEAR:
            # BWIPP draws linear symbols as full-height bars; one scanline is enough
            row: Tuple[bool, ...] = tuple(matrix[len(matrix) // 2])
            return Symbol(LINEAR, (row,), data, mapping.engine, mapping.name)
        return Symbol(
            MATRIX,
            tuple(tuple(r) for r in matrix),
            data,
            mapping.engine,
            mapping.name,
        )
