"""
Type registry: supported symbologies, categories, length/charset limits and
descriptions.

All tables are read-only mappings built once at import time. Lookups of
unknown identifiers return permissive defaults instead of raising, so that
loosely specified types are never blocked here (the Validator decides).

Example:
    >>> from barcodeforge.model import barcode_types
    >>> barcode_types.is_valid("ean13")
    True
    >>> barcode_types.config_for("nope")
    SymbologyConfig(min_length=1, max_length=100, charset='Unknown')
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from barcodeforge.model.enums import BarcodeCategory, BarcodeType

__all__ = [
    "SymbologyConfig",
    "FALLBACK_CONFIG",
    "UNKNOWN_DESCRIPTION",
    "list_all",
    "list_by_category",
    "get_categories",
    "is_valid",
    "config_for",
    "description_for",
    "category_of",
    "is_two_dimensional",
    "type_info",
]


@dataclass(frozen=True)
class SymbologyConfig:
    """Length bounds and charset label of a symbology."""

    min_length: int
    max_length: int
    charset: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


FALLBACK_CONFIG: SymbologyConfig = SymbologyConfig(1, 100, "Unknown")
UNKNOWN_DESCRIPTION: str = "Unknown barcode type"

_ALL_TYPES: Tuple[str, ...] = tuple(t.value for t in BarcodeType)

_CATEGORIES: Mapping[BarcodeCategory, Tuple[str, ...]] = MappingProxyType(
    {
        BarcodeCategory.LINEAR: (
            "code128",
            "code128a",
            "code128b",
            "code128c",
            "code128auto",
            "code39",
            "code39extended",
            "code39checksum",
            "code39auto",
            "code93",
            "code25",
            "code25auto",
            "code32",
            "standard25",
            "standard25checksum",
            "interleaved25",
            "interleaved25checksum",
            "interleaved25auto",
            "msi",
            "msichecksum",
            "msiauto",
        ),
        BarcodeCategory.EAN_UPC: (
            "ean13",
            "ean8",
            "ean2",
            "ean5",
            "upca",
            "upce",
            "itf14",
        ),
        BarcodeCategory.POSTAL: ("postnet", "planet", "rms4cc", "kix", "imb"),
        BarcodeCategory.SPECIALIZED: (
            "codabar",
            "code11",
            "pharmacode",
            "pharmacodetwotracks",
        ),
        BarcodeCategory.MATRIX_2D: (
            "qrcode",
            "datamatrix",
            "aztec",
            "pdf417",
            "microqr",
            "maxicode",
        ),
        BarcodeCategory.STACKED: ("code16k", "code49"),
    }
)

_CATEGORY_BY_TYPE: Mapping[str, BarcodeCategory] = MappingProxyType(
    {t: cat for cat, types in _CATEGORIES.items() for t in types}
)

_CONFIGS: Mapping[str, SymbologyConfig] = MappingProxyType(
    {
        "code128": SymbologyConfig(1, 80, "ASCII"),
        "code128a": SymbologyConfig(1, 80, "ASCII A"),
        "code128b": SymbologyConfig(1, 80, "ASCII B"),
        "code128c": SymbologyConfig(2, 80, "Numeric"),
        "code39": SymbologyConfig(1, 43, "0-9, A-Z, space, -.$/+%"),
        "code39extended": SymbologyConfig(1, 43, "Extended ASCII"),
        "code93": SymbologyConfig(1, 43, "0-9, A-Z, -.$/+%"),
        "ean13": SymbologyConfig(12, 13, "Numeric"),
        "ean8": SymbologyConfig(7, 8, "Numeric"),
        "upca": SymbologyConfig(11, 12, "Numeric"),
        "upce": SymbologyConfig(6, 8, "Numeric"),
        "qrcode": SymbologyConfig(1, 2953, "Unicode"),
        "datamatrix": SymbologyConfig(1, 2335, "Unicode"),
        "pdf417": SymbologyConfig(1, 1850, "Unicode"),
    }
)

_DESCRIPTIONS: Mapping[str, str] = MappingProxyType(
    {
        "code128": "Code 128 - High-density linear barcode",
        "code39": "Code 39 - Alphanumeric barcode",
        "ean13": "EAN-13 - European Article Number",
        "ean8": "EAN-8 - European Article Number (short)",
        "upca": "UPC-A - Universal Product Code",
        "upce": "UPC-E - Universal Product Code (compressed)",
        "qrcode": "QR Code - 2D matrix barcode",
        "datamatrix": "Data Matrix - 2D matrix barcode",
        "pdf417": "PDF417 - 2D stacked barcode",
    }
)


def list_all() -> List[str]:
    """All registered identifiers, in catalogue order."""
    return list(_ALL_TYPES)


def list_by_category(category: str) -> List[str]:
    """Identifiers of one category; unknown category gives an empty list."""
    try:
        key = BarcodeCategory(str(category).upper())
    except ValueError:
        return []
    return list(_CATEGORIES[key])


def get_categories() -> List[str]:
    return [c.value for c in _CATEGORIES]


def is_valid(identifier: Any) -> bool:
    return isinstance(identifier, str) and identifier in _CATEGORY_BY_TYPE


def config_for(identifier: str) -> SymbologyConfig:
    return _CONFIGS.get(identifier, FALLBACK_CONFIG)


def description_for(identifier: str) -> str:
    return _DESCRIPTIONS.get(identifier, UNKNOWN_DESCRIPTION)


def category_of(identifier: str) -> Optional[BarcodeCategory]:
    return _CATEGORY_BY_TYPE.get(identifier)


def is_two_dimensional(identifier: str) -> bool:
    category = category_of(identifier)
    return category is not None and category.is_two_dimensional


def type_info(identifier: str) -> Dict[str, Any]:
    """
    Summary of a type for API/CLI listings.

    Returns:
        Dict with type, category (None if unknown), description and config.
    """
    category = category_of(identifier)
    config = config_for(identifier)
    return {
        "type": identifier,
        "category": category.value if category else None,
        "description": description_for(identifier),
        "min_length": config.min_length,
        "max_length": config.max_length,
        "charset": config.charset,
    }
