from typing import Any, Dict
from unittest.mock import patch

import pytest
from PIL import ImageFont

from barcodeforge.barcodegen.symbols import LINEAR, MATRIX, Symbol
from barcodeforge.exceptions import InvalidInputError, RenderError
from barcodeforge.renderers.base import (
    MAX_IMAGE_HEIGHT,
    MAX_IMAGE_WIDTH,
    BaseRenderer,
    compute_layout,
    load_font,
)
from barcodeforge.model.options import DEFAULT_RENDER_OPTIONS, merge_options


class _EchoRenderer(BaseRenderer):
    backend = "echo"
    extra_defaults = {"extra": "x"}

    def _render(self, data: str, barcode_type: str, opts: Dict[str, Any]) -> str:
        if data == "explode":
            raise ValueError("kaboom")
        return f"{data}:{opts['width']}:{opts['extra']}"


class TestBaseRenderer:
    def test_defaults_include_extras(self) -> None:
        defaults = _EchoRenderer().get_default_options()
        assert defaults["extra"] == "x"
        assert defaults["height"] == 100

    def test_set_default_options(self) -> None:
        renderer = _EchoRenderer()
        renderer.set_default_options({"width": 5})
        assert renderer.render("A", "code128") == "A:5:x"
        # caller still wins
        assert renderer.render("A", "code128", {"width": 1}) == "A:1:x"

    def test_defaults_are_per_instance(self) -> None:
        first, second = _EchoRenderer(), _EchoRenderer()
        first.set_default_options({"width": 9})
        assert second.get_default_options()["width"] == 2

    def test_internal_failure_wrapped(self) -> None:
        with pytest.raises(RenderError) as exc_info:
            _EchoRenderer().render("explode", "code128")
        assert str(exc_info.value) == "ECHO rendering failed: kaboom"
        assert exc_info.value.backend == "echo"
        assert exc_info.value.context == {"type": "code128"}
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_try_symbol_returns_none_and_warns(self) -> None:
        renderer = _EchoRenderer()
        with patch("barcodeforge.renderers.base.logger") as mock_logger:
            assert renderer.try_symbol("A" * 5000, "qrcode", {}) is None
        mock_logger.warning.assert_called_once()


class TestComputeLayout:
    def test_linear_bottom_text(self) -> None:
        symbol = Symbol(LINEAR, ((True, False, True),), "x", "pybarcode")
        opts = merge_options(DEFAULT_RENDER_OPTIONS, None)
        layout = compute_layout(symbol, opts, text_width=4, text_height=15)
        assert layout.symbol_width == 6
        assert layout.width == 10 + 6 + 10
        assert layout.height == 10 + 100 + 2 + 15 + 10
        assert layout.y == 10
        assert layout.text_y == 10 + 100 + 2

    def test_text_on_top(self) -> None:
        symbol = Symbol(LINEAR, ((True,),), "x", "pybarcode")
        opts = merge_options(DEFAULT_RENDER_OPTIONS, {"textPosition": "top"})
        layout = compute_layout(symbol, opts, text_width=0, text_height=20)
        assert layout.text_y == 10
        assert layout.y == 10 + 2 + 20

    def test_matrix_uses_module_size(self) -> None:
        symbol = Symbol(MATRIX, ((True, False), (False, True)), "x", "qrcode")
        opts = merge_options(
            DEFAULT_RENDER_OPTIONS, {"moduleSize": 4, "displayValue": False, "margin": 0}
        )
        layout = compute_layout(symbol, opts)
        assert (layout.width, layout.height) == (8, 8)

    def test_wide_text_centres_symbol(self) -> None:
        symbol = Symbol(LINEAR, ((True,),), "x", "pybarcode")
        opts = merge_options(DEFAULT_RENDER_OPTIONS, {"margin": 0})
        layout = compute_layout(symbol, opts, text_width=20, text_height=10)
        assert layout.width == 20
        assert layout.x == (20 - 2) // 2
        assert layout.text_x("left", 20) == 0
        assert layout.text_x("right", 10) == 10

    def test_surface_at_limit_allowed(self) -> None:
        symbol = Symbol(LINEAR, ((True,),), "x", "pybarcode")
        opts = merge_options(
            DEFAULT_RENDER_OPTIONS,
            {"margin": 0, "displayValue": False, "height": MAX_IMAGE_HEIGHT},
        )
        assert compute_layout(symbol, opts).height == MAX_IMAGE_HEIGHT

    @pytest.mark.parametrize(
        "overrides",
        [
            {"height": MAX_IMAGE_HEIGHT + 1},
            {"width": MAX_IMAGE_WIDTH},
            {"marginLeft": MAX_IMAGE_WIDTH},
        ],
    )
    def test_oversized_surface_rejected(self, overrides: Dict[str, Any]) -> None:
        symbol = Symbol(LINEAR, ((True, False),), "x", "pybarcode")
        opts = merge_options(DEFAULT_RENDER_OPTIONS, overrides)
        with pytest.raises(InvalidInputError, match="exceeds maximum"):
            compute_layout(symbol, opts)


def test_load_font_falls_back_to_default() -> None:
    with patch("barcodeforge.renderers.base.logger") as mock_logger:
        font = load_font("/path/to/nowhere.ttf", 12)
    assert isinstance(font, (ImageFont.ImageFont, ImageFont.FreeTypeFont))
    mock_logger.warning.assert_called_once()
