import pytest

from barcodeforge.model.enums import (
    DEFAULT_BARCODE_TYPE,
    DEFAULT_ERROR_CORRECTION,
    DEFAULT_WATERMARK_POSITION,
    BarcodeCategory,
    BarcodeType,
    ErrorCorrectionLevel,
    TextAlign,
    TextPosition,
    WatermarkPosition,
)


def test_barcode_type_catalogue_size_and_uniqueness() -> None:
    values = [t.value for t in BarcodeType]
    assert len(values) == 45
    assert len(set(values)) == 45


def test_barcode_type_is_str_enum() -> None:
    assert BarcodeType.EAN13 == "ean13"
    assert BarcodeType("qrcode") is BarcodeType.QRCODE


def test_category_two_dimensional_flag() -> None:
    assert BarcodeCategory.MATRIX_2D.is_two_dimensional
    for category in BarcodeCategory:
        if category is not BarcodeCategory.MATRIX_2D:
            assert not category.is_two_dimensional


@pytest.mark.parametrize(
    "category,ru,en",
    [
        (BarcodeCategory.LINEAR, "Линейные", "Linear"),
        (BarcodeCategory.POSTAL, "Почтовые", "Postal"),
        (BarcodeCategory.STACKED, "Многострочные", "Stacked"),
    ],
)
def test_category_localized_name(category: BarcodeCategory, ru: str, en: str) -> None:
    assert category.localized_name("ru") == ru
    assert category.localized_name("en") == en
    assert category.localized_name() == en


def test_watermark_positions_order() -> None:
    assert WatermarkPosition.values() == [
        "top-left",
        "top-center",
        "top-right",
        "left-center",
        "center",
        "right-center",
        "bottom-left",
        "bottom-center",
        "bottom-right",
    ]


def test_defaults() -> None:
    assert DEFAULT_BARCODE_TYPE is BarcodeType.CODE128
    assert DEFAULT_ERROR_CORRECTION is ErrorCorrectionLevel.M
    assert DEFAULT_WATERMARK_POSITION is WatermarkPosition.CENTER


def test_text_enums() -> None:
    assert {a.value for a in TextAlign} == {"left", "center", "right"}
    assert {p.value for p in TextPosition} == {"top", "bottom"}
