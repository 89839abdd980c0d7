"""Data validation for barcode symbologies."""

from barcodeforge.validators.validator import (
    ValidationResult,
    Validator,
    calculate_ean_check_digit,
)

__all__ = ["ValidationResult", "Validator", "calculate_ean_check_digit"]
