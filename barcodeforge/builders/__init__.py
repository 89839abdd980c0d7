"""Fluent builders for composed QR codes."""

from barcodeforge.builders.qr_code_builder import (
    QrCodeBuilder,
    QrCodeConfig,
    QrCodeResult,
    watermark_anchor,
)

__all__ = ["QrCodeBuilder", "QrCodeConfig", "QrCodeResult", "watermark_anchor"]
