import asyncio
from typing import Any, Dict, List
from unittest.mock import patch

import pytest

from barcodeforge.exceptions import (
    BarcodeError,
    ChecksumError,
    CharsetError,
    InvalidInputError,
    LengthError,
    RenderError,
    UnsupportedFormatError,
    UnsupportedTypeError,
    ValidationError,
)
from barcodeforge.model.batch import BatchItem
from barcodeforge.renderers import PngRenderer
from barcodeforge.services.barcode_service import BarcodeService


@pytest.fixture
def service() -> BarcodeService:
    return BarcodeService()


class TestGenerate:
    def test_png(self, service: BarcodeService) -> None:
        png = service.png("1234567890", "code128")
        assert isinstance(png, bytes)
        assert png.startswith(b"\x89PNG")

    def test_svg_html_pdf(self, service: BarcodeService) -> None:
        assert "<svg" in service.svg("1234567890", "code128")
        assert service.html("1234567890", "code128").startswith("<div")
        assert service.pdf("1234567890", "code128").startswith(b"%PDF-")

    def test_defaults_for_type_and_format(self, service: BarcodeService) -> None:
        assert service.generate("ABC").startswith(b"\x89PNG")  # type: ignore[union-attr]

    @pytest.mark.parametrize("fmt", ["jpg", "jpeg"])
    def test_jpeg_formats(self, service: BarcodeService, fmt: str) -> None:
        out = service.generate("ABC", "code128", fmt)
        assert isinstance(out, bytes)
        assert out[:2] == b"\xff\xd8"

    def test_ean13_valid_literal(self, service: BarcodeService) -> None:
        assert service.png("1234567890128", "ean13")

    @pytest.mark.parametrize("data", ["", None, 42])
    def test_invalid_input(self, service: BarcodeService, data: Any) -> None:
        with pytest.raises(InvalidInputError, match="Data must be a non-empty string"):
            service.generate(data, "code128", "png")

    def test_unknown_type(self, service: BarcodeService) -> None:
        with pytest.raises(UnsupportedTypeError, match="Invalid barcode type: nope"):
            service.generate("ABC", "nope", "png")

    def test_unknown_format(self, service: BarcodeService) -> None:
        with pytest.raises(UnsupportedFormatError, match="Invalid format: gif") as exc:
            service.generate("ABC", "code128", "gif")
        assert "png, svg, html, pdf, jpg, jpeg" in str(exc.value)

    @pytest.mark.parametrize(
        "data,barcode_type,error_cls",
        [
            ("1234567890123", "ean13", ChecksumError),
            ("12345", "ean13", LengthError),
            ("abc", "code39", CharsetError),
            ("123456789012\n", "ean13", CharsetError),
            ("A" * 81, "code128", LengthError),
        ],
    )
    def test_validation_errors_typed(
        self,
        service: BarcodeService,
        data: str,
        barcode_type: str,
        error_cls: type,
    ) -> None:
        with pytest.raises(error_cls) as exc_info:
            service.generate(data, barcode_type, "png")
        assert isinstance(exc_info.value, ValidationError)
        assert str(exc_info.value).startswith(f"Invalid data for {barcode_type}: ")

    def test_validation_runs_before_rendering(self, service: BarcodeService) -> None:
        with patch.object(PngRenderer, "render") as render:
            with pytest.raises(ChecksumError):
                service.generate("1234567890120", "ean13", "png")
        render.assert_not_called()

    def test_options_forwarded(self, service: BarcodeService) -> None:
        with patch.object(PngRenderer, "render", return_value=b"png") as render:
            service.png("ABC", "code128", {"height": 40})
        render.assert_called_once_with("ABC", "code128", {"height": 40})

    def test_render_error_propagates(self, service: BarcodeService) -> None:
        with patch.object(
            PngRenderer, "render", side_effect=RenderError("PNG rendering failed: x")
        ):
            with pytest.raises(RenderError):
                service.png("ABC", "code128")

    def test_config_defaults(self) -> None:
        service = BarcodeService(
            {
                "default_type": "qrcode",
                "default_format": "svg",
                "render_defaults": {"moduleSize": 2},
            }
        )
        svg = service.generate("HELLO")
        assert isinstance(svg, str)
        assert svg.startswith("<svg")
        assert service.get_renderer("png").get_default_options()["moduleSize"] == 2

    def test_get_renderer_unknown(self, service: BarcodeService) -> None:
        with pytest.raises(UnsupportedFormatError):
            service.get_renderer("tiff")


class TestBatch:
    def test_mixed_batch(self, service: BarcodeService) -> None:
        results = service.batch(
            [
                {"data": "1234567890", "type": "code128", "format": "png"},
                {"data": "", "type": "code128", "format": "png"},
            ]
        )
        assert len(results) == 2
        assert results[0].index == 0 and results[0].success
        assert isinstance(results[0].result, bytes)
        assert results[1].index == 1 and not results[1].success
        assert results[1].error == "Data must be a non-empty string"
        assert results[1].result is None

    def test_failure_does_not_alter_success(self, service: BarcodeService) -> None:
        alone = service.batch([{"data": "1234567890", "type": "code128", "format": "svg"}])
        mixed = service.batch(
            [
                {"data": "1234567890", "type": "code128", "format": "svg"},
                {"data": "x", "type": "nope"},
                {"data": "x", "format": "tiff"},
            ]
        )
        assert mixed[0].result == alone[0].result
        assert [r.success for r in mixed] == [True, False, False]

    def test_item_defaults_and_objects(self, service: BarcodeService) -> None:
        results = service.batch(
            [{"data": "ABC"}, BatchItem(data="HELLO", type="qrcode", format="html")]
        )
        assert results[0].type == "code128"
        assert results[0].format == "png"
        assert results[1].success
        assert isinstance(results[1].result, str)

    def test_configured_defaults_on_success_and_failure(self) -> None:
        service = BarcodeService({"default_type": "code39", "default_format": "svg"})
        ok, failed = service.batch([{"data": "ABC"}, {"data": ""}])
        assert ok.success and not failed.success
        assert (ok.type, ok.format) == ("code39", "svg")
        assert (failed.type, failed.format) == ("code39", "svg")
        assert isinstance(ok.result, str)

    def test_non_mapping_item(self, service: BarcodeService) -> None:
        results = service.batch(["ABC"])
        assert not results[0].success
        assert "mapping" in (results[0].error or "")

    def test_parallel_keeps_order(self, service: BarcodeService) -> None:
        items: List[Dict[str, Any]] = [
            {"data": f"ITEM{i}", "type": "code128", "format": "svg"} for i in range(8)
        ]
        items.insert(3, {"data": ""})
        results = service.batch(items, parallel=True)
        assert [r.index for r in results] == list(range(9))
        assert [r.data for r in results][:3] == ["ITEM0", "ITEM1", "ITEM2"]
        assert not results[3].success
        assert sum(r.success for r in results) == 8

    @pytest.mark.parametrize("items", [None, "abc", {"data": "x"}])
    def test_items_must_be_list(self, service: BarcodeService, items: Any) -> None:
        with pytest.raises(InvalidInputError, match="Items must be a list"):
            service.batch(items)

    def test_batch_logs_summary(self, service: BarcodeService) -> None:
        with patch("barcodeforge.services.barcode_service.logger") as mock_logger:
            service.batch([{"data": ""}])
        mock_logger.warning.assert_called_once()
        mock_logger.info.assert_called_once()

    def test_batch_async(self, service: BarcodeService) -> None:
        results = asyncio.run(service.batch_async([{"data": "ABC", "format": "html"}]))
        assert results[0].success

    def test_to_dict(self, service: BarcodeService) -> None:
        out = service.batch([{"data": ""}])[0].to_dict()
        assert out == {
            "index": 0,
            "success": False,
            "data": "",
            "type": "code128",
            "format": "png",
            "error": "Data must be a non-empty string",
        }


class TestQueries:
    def test_validate_passthrough(self, service: BarcodeService) -> None:
        assert service.validate("1234567890128", "ean13").valid
        assert not service.validate("1234567890120", "ean13").valid

    def test_lists(self, service: BarcodeService) -> None:
        assert len(service.get_barcode_types()) == 45
        assert service.get_render_formats() == ["png", "svg", "html", "pdf", "jpg", "jpeg"]
        assert len(service.get_watermark_positions()) == 9

    def test_all_errors_share_base(self) -> None:
        assert issubclass(UnsupportedTypeError, BarcodeError)
        assert issubclass(RenderError, BarcodeError)
