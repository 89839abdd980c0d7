"""
validators/validator.py

(Краткое RU: Проверка данных штрихкода перед рендерингом.)

EN: Data validation per symbology. Checks run in a fixed order (input,
type, length, per-type charset, EAN check digit) and the first failure wins.
The validator never raises on bad data; it returns a ValidationResult whose
``error_code`` the service maps onto the typed exceptions.

Example:
    >>> Validator().validate("1234567890128", "ean13").valid
    True
    >>> calculate_ean_check_digit("123456789012")
    8
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Final, Mapping, Optional, Pattern

from barcodeforge.model import barcode_types

logger = logging.getLogger(__name__)

__all__ = [
    "ValidationResult",
    "Validator",
    "calculate_ean_check_digit",
    "ERROR_INVALID_INPUT",
    "ERROR_UNKNOWN_TYPE",
    "ERROR_LENGTH",
    "ERROR_CHARSET",
    "ERROR_CHECKSUM",
]

ERROR_INVALID_INPUT: Final[str] = "invalid_input"
ERROR_UNKNOWN_TYPE: Final[str] = "unknown_type"
ERROR_LENGTH: Final[str] = "length"
ERROR_CHARSET: Final[str] = "charset"
ERROR_CHECKSUM: Final[str] = "checksum"

_ASCII: Final[Pattern[str]] = re.compile(r"[\x00-\x7F]+")
_NUMERIC: Final[Pattern[str]] = re.compile(r"[0-9]+")
_ALPHANUMERIC: Final[Pattern[str]] = re.compile(r"[A-Za-z0-9]+")
_CODE39: Final[Pattern[str]] = re.compile(r"[A-Z0-9 \-.$/+%]+")
_EAN13: Final[Pattern[str]] = re.compile(r"[0-9]{12,13}")
_EAN8: Final[Pattern[str]] = re.compile(r"[0-9]{7,8}")
_UPCA: Final[Pattern[str]] = re.compile(r"[0-9]{11,12}")
_UPCE: Final[Pattern[str]] = re.compile(r"[0-9]{6,8}")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation call."""

    valid: bool
    error: Optional[str] = None
    length: Optional[int] = None
    charset: Optional[str] = None
    data: Optional[str] = None
    type: Optional[str] = None
    error_code: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid

    def to_dict(self) -> Dict[str, Any]:
        if not self.valid:
            return {"valid": False, "error": self.error}
        return {
            "valid": True,
            "data": self.data,
            "type": self.type,
            "length": self.length,
            "charset": self.charset,
        }


def calculate_ean_check_digit(digits: str) -> int:
    """
    Weighted modulo-10 check digit over an EAN payload without its check digit.

    Positions are 0-indexed from the left: even positions weigh 1, odd
    positions weigh 3.
    """
    total = 0
    for i, ch in enumerate(digits):
        digit = int(ch)
        total += digit if i % 2 == 0 else digit * 3
    return (10 - total % 10) % 10


def _fail(error: str, code: str = ERROR_CHARSET) -> ValidationResult:
    return ValidationResult(valid=False, error=error, error_code=code)


_OK: Final[ValidationResult] = ValidationResult(valid=True)


class Validator:
    """Stateless per-symbology data checks."""

    def __init__(self) -> None:
        self._checkers: Mapping[str, Callable[[str, str], ValidationResult]] = {
            "code128": self._check_code128,
            "code128a": self._check_code128,
            "code128b": self._check_code128,
            "code128c": self._check_code128,
            "code128auto": self._check_code128,
            "code39": self._check_code39,
            "code39extended": self._check_code39,
            "code39checksum": self._check_code39,
            "code39auto": self._check_code39,
            "code93": self._check_code93,
            "ean13": self._check_ean13,
            "ean8": self._check_ean8,
            "upca": self._check_upca,
            "upce": self._check_upce,
            "qrcode": self._check_matrix,
            "datamatrix": self._check_matrix,
            "pdf417": self._check_matrix,
        }

    def validate(self, data: Any, barcode_type: Any) -> ValidationResult:
        if not isinstance(data, str) or not data:
            return _fail("Data must be a non-empty string", ERROR_INVALID_INPUT)

        if not barcode_types.is_valid(barcode_type):
            return _fail(f"Invalid barcode type: {barcode_type}", ERROR_UNKNOWN_TYPE)

        config = barcode_types.config_for(barcode_type)
        if len(data) < config.min_length:
            return _fail(
                f"Data too short. Minimum length: {config.min_length}", ERROR_LENGTH
            )
        if len(data) > config.max_length:
            return _fail(
                f"Data too long. Maximum length: {config.max_length}", ERROR_LENGTH
            )

        checker = self._checkers.get(barcode_type, self._check_default)
        result = checker(data, barcode_type)
        if not result.valid:
            logger.debug(
                "Validation failed for %s (%d chars): %s",
                barcode_type,
                len(data),
                result.error,
            )
            return result

        return ValidationResult(
            valid=True,
            length=len(data),
            charset=config.charset,
            data=data,
            type=barcode_type,
        )

    # --- per-type checkers

    @staticmethod
    def _check_code128(data: str, barcode_type: str) -> ValidationResult:
        if not _ASCII.fullmatch(data):
            return _fail("Code 128 supports ASCII characters only")
        if barcode_type == "code128c" and not _NUMERIC.fullmatch(data):
            return _fail("Code 128C supports digits only")
        return _OK

    @staticmethod
    def _check_code39(data: str, barcode_type: str) -> ValidationResult:
        if barcode_type == "code39extended":
            if not _ASCII.fullmatch(data):
                return _fail("Extended Code 39 supports ASCII characters only")
        elif not _CODE39.fullmatch(data):
            return _fail("Code 39 supports characters: A-Z, 0-9, space, -.$/+%")
        return _OK

    @staticmethod
    def _check_code93(data: str, barcode_type: str) -> ValidationResult:
        if not _ALPHANUMERIC.fullmatch(data):
            return _fail("Code 93 supports alphanumeric characters only")
        return _OK

    @staticmethod
    def _check_ean13(data: str, barcode_type: str) -> ValidationResult:
        if not _EAN13.fullmatch(data):
            return _fail("EAN-13 must be 12 or 13 digits")
        if len(data) == 13 and int(data[12]) != calculate_ean_check_digit(data[:12]):
            return _fail("Invalid EAN-13 check digit", ERROR_CHECKSUM)
        return _OK

    @staticmethod
    def _check_ean8(data: str, barcode_type: str) -> ValidationResult:
        if not _EAN8.fullmatch(data):
            return _fail("EAN-8 must be 7 or 8 digits")
        if len(data) == 8 and int(data[7]) != calculate_ean_check_digit(data[:7]):
            return _fail("Invalid EAN-8 check digit", ERROR_CHECKSUM)
        return _OK

    @staticmethod
    def _check_upca(data: str, barcode_type: str) -> ValidationResult:
        if not _UPCA.fullmatch(data):
            return _fail("UPC-A must be 11 or 12 digits")
        return _OK

    @staticmethod
    def _check_upce(data: str, barcode_type: str) -> ValidationResult:
        if not _UPCE.fullmatch(data):
            return _fail("UPC-E must be 6 to 8 digits")
        return _OK

    @staticmethod
    def _check_matrix(data: str, barcode_type: str) -> ValidationResult:
        # Unicode payloads are accepted as is
        return _OK

    @staticmethod
    def _check_default(data: str, barcode_type: str) -> ValidationResult:
        return _OK if data else _fail("Data cannot be empty", ERROR_INVALID_INPUT)
