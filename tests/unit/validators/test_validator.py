from typing import Any

import pytest

from barcodeforge.validators.validator import (
    ERROR_CHARSET,
    ERROR_CHECKSUM,
    ERROR_INVALID_INPUT,
    ERROR_LENGTH,
    ERROR_UNKNOWN_TYPE,
    ValidationResult,
    Validator,
    calculate_ean_check_digit,
)


@pytest.fixture
def validator() -> Validator:
    return Validator()


class TestCheckDigit:
    def test_ean13_payload(self) -> None:
        assert calculate_ean_check_digit("123456789012") == 8

    @pytest.mark.parametrize(
        "payload,expected",
        [
            ("400638133393", 1),
            ("590123412345", 7),
            ("000000000000", 0),
        ],
    )
    def test_known_payloads(self, payload: str, expected: int) -> None:
        assert calculate_ean_check_digit(payload) == expected


class TestValidatorInput:
    @pytest.mark.parametrize("data", ["", None, 123, b"123", ["1"]])
    def test_non_string_or_empty(self, validator: Validator, data: Any) -> None:
        result = validator.validate(data, "code128")
        assert not result.valid
        assert result.error == "Data must be a non-empty string"
        assert result.error_code == ERROR_INVALID_INPUT

    def test_input_checked_before_type(self, validator: Validator) -> None:
        result = validator.validate("", "nope")
        assert result.error_code == ERROR_INVALID_INPUT

    def test_unknown_type(self, validator: Validator) -> None:
        result = validator.validate("ABC", "nope")
        assert not result.valid
        assert result.error == "Invalid barcode type: nope"
        assert result.error_code == ERROR_UNKNOWN_TYPE

    def test_too_short(self, validator: Validator) -> None:
        result = validator.validate("12345678901", "ean13")
        assert result.error == "Data too short. Minimum length: 12"
        assert result.error_code == ERROR_LENGTH

    def test_too_long(self, validator: Validator) -> None:
        result = validator.validate("A" * 81, "code128")
        assert result.error == "Data too long. Maximum length: 80"
        assert result.error_code == ERROR_LENGTH

    def test_length_bounds_inclusive(self, validator: Validator) -> None:
        assert validator.validate("A" * 80, "code128").valid
        assert validator.validate("A", "code128").valid


class TestValidatorTypes:
    def test_success_result_fields(self, validator: Validator) -> None:
        result = validator.validate("1234567890", "code128")
        assert result == ValidationResult(
            valid=True,
            length=10,
            charset="ASCII",
            data="1234567890",
            type="code128",
        )
        assert bool(result)

    def test_code128_rejects_non_ascii(self, validator: Validator) -> None:
        result = validator.validate("Привет", "code128")
        assert not result.valid
        assert result.error_code == ERROR_CHARSET

    def test_code128c_digits_only(self, validator: Validator) -> None:
        assert validator.validate("123456", "code128c").valid
        result = validator.validate("12AB", "code128c")
        assert result.error == "Code 128C supports digits only"

    @pytest.mark.parametrize("data", ["ABC123", "TEST-DATA", "HELLO WORLD", "A$B/C+D%E"])
    def test_code39_valid(self, validator: Validator, data: str) -> None:
        assert validator.validate(data, "code39").valid

    @pytest.mark.parametrize("data", ["abc", "ABC@1", "A*B"])
    def test_code39_invalid(self, validator: Validator, data: str) -> None:
        result = validator.validate(data, "code39")
        assert not result.valid
        assert "A-Z" in (result.error or "")

    def test_code39extended_accepts_lowercase(self, validator: Validator) -> None:
        assert validator.validate("abc@1", "code39extended").valid

    def test_code93_alphanumeric(self, validator: Validator) -> None:
        assert validator.validate("Abc123", "code93").valid
        assert not validator.validate("ABC-1", "code93").valid

    def test_ean13_valid_checksum(self, validator: Validator) -> None:
        assert validator.validate("1234567890128", "ean13").valid

    def test_ean13_twelve_digits_skip_checksum(self, validator: Validator) -> None:
        assert validator.validate("123456789012", "ean13").valid

    @pytest.mark.parametrize("data", ["1234567890123", "1234567890120"])
    def test_ean13_bad_checksum(self, validator: Validator, data: str) -> None:
        result = validator.validate(data, "ean13")
        assert not result.valid
        assert result.error == "Invalid EAN-13 check digit"
        assert result.error_code == ERROR_CHECKSUM

    def test_ean13_non_digits(self, validator: Validator) -> None:
        result = validator.validate("12345678901A", "ean13")
        assert result.error == "EAN-13 must be 12 or 13 digits"
        assert result.error_code == ERROR_CHARSET

    @pytest.mark.parametrize(
        "data, barcode_type",
        [
            ("123456789012\n", "ean13"),
            ("1234567\n", "ean8"),
            ("12\n", "code128c"),
            ("12345678901\n", "upca"),
            ("ABC\n", "code39"),
            ("ABC\n", "code93"),
        ],
    )
    def test_trailing_newline_rejected(
        self, validator: Validator, data: str, barcode_type: str
    ) -> None:
        result = validator.validate(data, barcode_type)
        assert not result.valid
        assert result.error_code == ERROR_CHARSET

    def test_code39_rejects_tab(self, validator: Validator) -> None:
        assert not validator.validate("A\tB", "code39").valid

    def test_ean8(self, validator: Validator) -> None:
        check = calculate_ean_check_digit("1234567")
        assert validator.validate("1234567", "ean8").valid
        assert validator.validate(f"1234567{check}", "ean8").valid
        bad = (check + 1) % 10
        assert validator.validate(f"1234567{bad}", "ean8").error_code == ERROR_CHECKSUM

    def test_upc(self, validator: Validator) -> None:
        assert validator.validate("12345678901", "upca").valid
        assert validator.validate("123456", "upce").valid
        assert not validator.validate("1234567890A", "upca").valid
        assert validator.validate("12345A", "upce").error == "UPC-E must be 6 to 8 digits"

    @pytest.mark.parametrize("barcode_type", ["qrcode", "datamatrix", "pdf417"])
    def test_matrix_accepts_unicode(self, validator: Validator, barcode_type: str) -> None:
        assert validator.validate("Привет, мир! 🙂", barcode_type).valid

    def test_unconfigured_type_accepts_text(self, validator: Validator) -> None:
        result = validator.validate("anything goes", "kix")
        assert result.valid
        assert result.charset == "Unknown"

    def test_to_dict(self, validator: Validator) -> None:
        assert validator.validate("", "code128").to_dict() == {
            "valid": False,
            "error": "Data must be a non-empty string",
        }
        ok = validator.validate("ABC", "code39").to_dict()
        assert ok["valid"] is True
        assert ok["length"] == 3
