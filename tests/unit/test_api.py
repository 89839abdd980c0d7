from typing import Iterator
from unittest.mock import patch

import pytest

from barcodeforge import api
from barcodeforge.builders import QrCodeBuilder
from barcodeforge.services import BarcodeService


@pytest.fixture(autouse=True)
def reset_service() -> Iterator[None]:
    api.set_service(None)
    yield
    api.set_service(None)


class TestDefaultService:
    def test_created_lazily_from_config(self) -> None:
        config = {"default_type": "code39", "qr_defaults": {"size": 120}}
        with patch("barcodeforge.load_config", return_value=config) as load:
            service = api.get_service()
            assert api.get_service() is service
        load.assert_called_once()
        assert service.default_type == "code39"

    def test_set_service(self) -> None:
        custom = BarcodeService()
        api.set_service(custom)
        assert api.get_service() is custom

    def test_qr_defaults_applied_and_overridden(self) -> None:
        config = {"qr_defaults": {"size": 120, "margin": 4}}
        with patch("barcodeforge.load_config", return_value=config):
            builder = api.qr_code("hello", margin=8)
        assert isinstance(builder, QrCodeBuilder)
        assert builder.config.data == "hello"
        assert builder.config.size == 120
        assert builder.config.margin == 8


class TestFacade:
    @pytest.fixture(autouse=True)
    def plain_service(self) -> None:
        api.set_service(BarcodeService())

    def test_outputs(self) -> None:
        assert api.png("1234567890").startswith(b"\x89PNG")
        assert "<svg" in api.svg("1234567890")
        assert api.html("1234567890").startswith("<div")
        assert api.pdf("1234567890").startswith(b"%PDF-")

    def test_validate_and_batch(self) -> None:
        assert api.validate("1234567890128", "ean13").valid
        results = api.batch([{"data": "A"}, {"data": ""}])
        assert [r.success for r in results] == [True, False]

    def test_catalogues(self) -> None:
        assert "qrcode" in api.get_barcode_types()
        assert "pdf" in api.get_render_formats()
        assert api.get_watermark_positions()[0] == "top-left"
        assert api.get_barcode_type_info("qrcode")["category"] == "MATRIX_2D"
        assert api.get_render_format_info("svg")["mime_type"] == "image/svg+xml"
