"""
api.py

(Краткое RU: Функции уровня модуля поверх общего BarcodeService.)

EN: Module-level facade bound to one lazily created default service. The
service is configured from ``load_config()`` on first use; ``set_service``
replaces it (tests, embedding applications).

Example:
    >>> from barcodeforge import api
    >>> png = api.png("1234567890")
    >>> api.validate("1234567890128", "ean13").valid
    True
    >>> uri = api.qr_code("https://example.com", size=200).get_data_uri()
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Mapping, Optional, Sequence

from barcodeforge.builders.qr_code_builder import QrCodeBuilder
from barcodeforge.model import barcode_types, render_formats
from barcodeforge.model.batch import BatchResult
from barcodeforge.model.enums import DEFAULT_BARCODE_TYPE
from barcodeforge.services.barcode_service import BarcodeService
from barcodeforge.validators.validator import ValidationResult

logger = logging.getLogger(__name__)

__all__ = [
    "get_service",
    "set_service",
    "png",
    "svg",
    "html",
    "pdf",
    "qr_code",
    "validate",
    "batch",
    "get_barcode_types",
    "get_render_formats",
    "get_watermark_positions",
    "get_barcode_type_info",
    "get_render_format_info",
]

_lock = threading.Lock()
_service: Optional[BarcodeService] = None
_qr_defaults: Dict[str, Any] = {}


def get_service() -> BarcodeService:
    """Return the shared service, creating it from the loaded config on first use."""
    global _service
    with _lock:
        if _service is None:
            from barcodeforge import load_config

            config = load_config()
            _qr_defaults.clear()
            _qr_defaults.update(config.get("qr_defaults") or {})
            _service = BarcodeService(config)
            logger.debug("Default BarcodeService created")
        return _service


def set_service(service: Optional[BarcodeService]) -> None:
    """Replace the shared service; ``None`` resets it to lazy creation."""
    global _service
    with _lock:
        _service = service
        if service is None:
            _qr_defaults.clear()


def png(
    data: Any,
    barcode_type: str = DEFAULT_BARCODE_TYPE.value,
    options: Optional[Mapping[str, Any]] = None,
) -> bytes:
    return get_service().png(data, barcode_type, options)


def svg(
    data: Any,
    barcode_type: str = DEFAULT_BARCODE_TYPE.value,
    options: Optional[Mapping[str, Any]] = None,
) -> str:
    return get_service().svg(data, barcode_type, options)


def html(
    data: Any,
    barcode_type: str = DEFAULT_BARCODE_TYPE.value,
    options: Optional[Mapping[str, Any]] = None,
) -> str:
    return get_service().html(data, barcode_type, options)


def pdf(
    data: Any,
    barcode_type: str = DEFAULT_BARCODE_TYPE.value,
    options: Optional[Mapping[str, Any]] = None,
) -> bytes:
    return get_service().pdf(data, barcode_type, options)


def qr_code(data: str, **options: Any) -> QrCodeBuilder:
    """
    Start a QR composition for ``data``.

    Keyword options are the ``QrCodeBuilder.create`` options; they override
    ``qr_defaults`` from the configuration.
    """
    get_service()
    merged = {**_qr_defaults, **options, "data": data}
    return QrCodeBuilder.create(**merged)


def validate(data: Any, barcode_type: str) -> ValidationResult:
    return get_service().validate(data, barcode_type)


def batch(items: Sequence[Any], parallel: bool = False) -> List[BatchResult]:
    return get_service().batch(items, parallel=parallel)


def get_barcode_types() -> List[str]:
    return barcode_types.list_all()


def get_render_formats() -> List[str]:
    return render_formats.list_all()


def get_watermark_positions() -> List[str]:
    return get_service().get_watermark_positions()


def get_barcode_type_info(barcode_type: str) -> Dict[str, Any]:
    return barcode_types.type_info(barcode_type)


def get_render_format_info(output_format: str) -> Dict[str, Any]:
    return render_formats.format_info(output_format)
