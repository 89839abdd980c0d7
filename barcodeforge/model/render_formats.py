"""
Format registry: supported output formats with MIME type and file extension.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

__all__ = [
    "PNG",
    "SVG",
    "HTML",
    "PDF",
    "JPG",
    "JPEG",
    "DEFAULT_MIME_TYPE",
    "list_all",
    "is_valid",
    "mime_type_for",
    "extension_for",
    "description_for",
    "format_info",
]

PNG = "png"
SVG = "svg"
HTML = "html"
PDF = "pdf"
JPG = "jpg"
JPEG = "jpeg"

_FORMATS: Tuple[str, ...] = (PNG, SVG, HTML, PDF, JPG, JPEG)

_MIME_TYPES: Mapping[str, str] = MappingProxyType(
    {
        PNG: "image/png",
        SVG: "image/svg+xml",
        HTML: "text/html",
        PDF: "application/pdf",
        JPG: "image/jpeg",
        JPEG: "image/jpeg",
    }
)

_EXTENSIONS: Mapping[str, str] = MappingProxyType(
    {
        PNG: ".png",
        SVG: ".svg",
        HTML: ".html",
        PDF: ".pdf",
        JPG: ".jpg",
        JPEG: ".jpeg",
    }
)

_DESCRIPTIONS: Mapping[str, str] = MappingProxyType(
    {
        PNG: "Portable Network Graphics - Raster image format",
        SVG: "Scalable Vector Graphics - Vector image format",
        HTML: "HyperText Markup Language - Web page format",
        PDF: "Portable Document Format - Document format",
        JPG: "JPEG - Compressed raster image format",
        JPEG: "JPEG - Compressed raster image format",
    }
)

DEFAULT_MIME_TYPE = "application/octet-stream"


def list_all() -> List[str]:
    return list(_FORMATS)


def is_valid(fmt: Any) -> bool:
    return isinstance(fmt, str) and fmt in _FORMATS


def mime_type_for(fmt: str) -> str:
    return _MIME_TYPES.get(fmt, DEFAULT_MIME_TYPE)


def extension_for(fmt: str) -> str:
    return _EXTENSIONS.get(fmt, "")


def description_for(fmt: str) -> str:
    return _DESCRIPTIONS.get(fmt, "Unknown format")


def format_info(fmt: str) -> Dict[str, Any]:
    return {
        "format": fmt,
        "mime_type": mime_type_for(fmt),
        "extension": extension_for(fmt),
        "description": description_for(fmt),
    }
