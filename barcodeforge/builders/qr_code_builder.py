"""
RU: Построитель QR-кодов с логотипом, водяным знаком и подписью
EN: Fluent QR code builder with logo, watermark and label composition

Provides:
- QrCodeConfig: immutable configuration snapshot
- QrCodeBuilder: fluent setters, each returning the builder
- QrCodeResult: lazy composition plus bytes / string / data URI / file output

Composition order is fixed (base symbol, logo, watermark, label); each
layer paints over the previous one. Logo and watermark failures are logged
and skipped, only a failure of the base symbol raises CompositionError.

Example:
    >>> uri = (
    ...     QrCodeBuilder.create()
    ...     .data("https://example.com")
    ...     .size(400)
    ...     .error_correction_level("H")
    ...     .label("Scan me")
    ...     .get_data_uri()
    ... )
"""

from __future__ import annotations

import asyncio
import base64
import logging
import os
from dataclasses import dataclass, fields, replace
from functools import partial
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, Final, Mapping, Optional, Sequence, Tuple, Union

from PIL import Image, ImageDraw

from barcodeforge.barcodegen.matrix2d_generator import Matrix2DCodeGenerator
from barcodeforge.exceptions import (
    BarcodeError,
    CompositionError,
    InvalidInputError,
    StorageError,
)
from barcodeforge.model import render_formats
from barcodeforge.model.enums import (
    DEFAULT_ERROR_CORRECTION,
    DEFAULT_WATERMARK_POSITION,
    ErrorCorrectionLevel,
    WatermarkPosition,
)
from barcodeforge.renderers.base import MAX_IMAGE_WIDTH, load_font

logger = logging.getLogger(__name__)

__all__ = [
    "QrCodeConfig",
    "QrCodeBuilder",
    "QrCodeResult",
    "OUTPUT_FORMATS",
    "watermark_anchor",
]

RGB = Tuple[int, int, int]
StrPath = Union[str, "os.PathLike[str]"]

# output format -> Pillow encoder; svg wraps a PNG raster
OUTPUT_FORMATS: Final[Mapping[str, str]] = {
    "png": "PNG",
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "webp": "WEBP",
    "bmp": "BMP",
    "gif": "GIF",
    "svg": "PNG",
}

LOGO_BACKING_INSET: Final[int] = 5
WATERMARK_INSET: Final[int] = 10
LABEL_BOTTOM_OFFSET: Final[int] = 10
QR_BOX_SIZE: Final[int] = 10

# camelCase spellings accepted by QrCodeBuilder.create
_CREATE_ALIASES: Final[Mapping[str, str]] = {
    "errorCorrectionLevel": "error_correction_level",
    "foregroundColor": "foreground_color",
    "backgroundColor": "background_color",
    "logoPath": "logo_path",
    "logoSize": "logo_size",
    "labelFont": "label_font",
    "labelFontSize": "label_font_size",
    "watermarkPosition": "watermark_position",
    "format": "output_format",
    "outputFormat": "output_format",
}


@dataclass(frozen=True)
class QrCodeConfig:
    """Immutable QR composition settings."""

    data: str = ""
    size: int = 300
    margin: int = 10
    error_correction_level: str = DEFAULT_ERROR_CORRECTION.value
    foreground_color: RGB = (0, 0, 0)
    background_color: RGB = (255, 255, 255)
    logo_path: Optional[str] = None
    logo_size: float = 60  # percent of size
    label: Optional[str] = None
    label_font: Optional[str] = None
    label_font_size: int = 16
    watermark: Optional[str] = None
    watermark_position: str = DEFAULT_WATERMARK_POSITION.value
    output_format: str = "png"

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def watermark_anchor(
    position: str, canvas_size: int, item_size: int
) -> Tuple[int, int]:
    """
    Top-left corner for an item of ``item_size`` at one of the nine anchors.

    Unknown positions resolve to ``center``. With ``item_size == 0`` the
    result is the anchor point itself (used for text).
    """
    s, w, inset = canvas_size, item_size, WATERMARK_INSET
    mid = (s - w) // 2
    far = s - w - inset
    anchors: Dict[str, Tuple[int, int]] = {
        WatermarkPosition.TOP_LEFT.value: (inset, inset),
        WatermarkPosition.TOP_RIGHT.value: (far, inset),
        WatermarkPosition.BOTTOM_LEFT.value: (inset, far),
        WatermarkPosition.BOTTOM_RIGHT.value: (far, far),
        WatermarkPosition.CENTER.value: (mid, mid),
        WatermarkPosition.TOP_CENTER.value: (mid, inset),
        WatermarkPosition.BOTTOM_CENTER.value: (mid, far),
        WatermarkPosition.LEFT_CENTER.value: (inset, mid),
        WatermarkPosition.RIGHT_CENTER.value: (far, mid),
    }
    return anchors.get(position, anchors[WatermarkPosition.CENTER.value])


def _is_image_path(watermark: str) -> bool:
    has_separator = "/" in watermark or os.sep in watermark
    return has_separator and "." in watermark


def _to_rgb(value: Any, name: str) -> RGB:
    if isinstance(value, Sequence) and not isinstance(value, str) and len(value) == 3:
        try:
            rgb = tuple(int(c) for c in value)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"{name} must contain integers") from e
        if all(0 <= c <= 255 for c in rgb):
            return rgb  # type: ignore[return-value]
    raise InvalidInputError(f"{name} must be an (r, g, b) triple of 0-255 values")


class QrCodeResult:
    """
    Composition result bound to one configuration snapshot.

    The image is composed on the first request and cached; every accessor
    returns output derived from the same bytes.
    """

    def __init__(self, config: QrCodeConfig) -> None:
        self.config = config
        self._cache: Optional[bytes] = None

    # --- composition

    def generate(self) -> bytes:
        """
        Compose and serialize the QR code.

        Raises:
            CompositionError: the base symbol could not be produced.
        """
        if self._cache is None:
            image = self.compose()
            self._cache = self._serialize(image)
            logger.info(
                "QR code generated: %dpx %s, %d bytes",
                self.config.size,
                self.config.output_format,
                len(self._cache),
            )
        return self._cache

    def compose(self) -> Image.Image:
        cfg = self.config
        if not cfg.data:
            raise InvalidInputError("QR code data must be a non-empty string")
        inner = cfg.size - 2 * cfg.margin
        if inner <= 0:
            raise CompositionError(
                f"Margin {cfg.margin} leaves no room for the code at size {cfg.size}"
            )

        surface = Image.new("RGB", (cfg.size, cfg.size), cfg.background_color)

        try:
            generator = Matrix2DCodeGenerator(
                "qrcode",
                "qrcode",
                cfg.data,
                {"errorCorrectionLevel": cfg.error_correction_level},
            )
            qr_img = generator.render_qr_image(
                fill_color=cfg.foreground_color,
                back_color=cfg.background_color,
                box_size=QR_BOX_SIZE,
            )
            qr_img = qr_img.resize((inner, inner), resample=Image.Resampling.NEAREST)
        except (BarcodeError, ValueError, OSError) as e:
            logger.error("QR base symbol failed: %s", e)
            raise CompositionError(f"QR code generation failed: {e}") from e
        surface.paste(qr_img, (cfg.margin, cfg.margin))

        draw = ImageDraw.Draw(surface)
        if cfg.logo_path:
            self._add_logo(surface, draw)
        if cfg.watermark:
            self._add_watermark(surface, draw)
        if cfg.label:
            self._draw_centered_text(
                draw, cfg.label, cfg.size // 2, cfg.size - LABEL_BOTTOM_OFFSET
            )
        return surface

    def _add_logo(self, surface: Image.Image, draw: ImageDraw.ImageDraw) -> None:
        cfg = self.config
        try:
            with Image.open(str(cfg.logo_path)) as src:
                logo = src.convert("RGBA")
            edge = max(1, int(round(cfg.size * float(cfg.logo_size) / 100)))
            logo = logo.resize((edge, edge), resample=Image.Resampling.LANCZOS)
            pos = (cfg.size - edge) // 2
            draw.rectangle(
                (
                    pos - LOGO_BACKING_INSET,
                    pos - LOGO_BACKING_INSET,
                    pos + edge + LOGO_BACKING_INSET - 1,
                    pos + edge + LOGO_BACKING_INSET - 1,
                ),
                fill=cfg.background_color,
            )
            surface.paste(logo, (pos, pos), logo)
        except (OSError, ValueError) as e:
            logger.warning("Failed to add logo (%r): %s", cfg.logo_path, e)

    def _add_watermark(self, surface: Image.Image, draw: ImageDraw.ImageDraw) -> None:
        cfg = self.config
        watermark = str(cfg.watermark)
        try:
            if _is_image_path(watermark):
                edge = max(1, cfg.size // 4)
                with Image.open(watermark) as src:
                    mark = src.convert("RGBA")
                mark = mark.resize((edge, edge), resample=Image.Resampling.LANCZOS)
                x, y = watermark_anchor(cfg.watermark_position, cfg.size, edge)
                surface.paste(mark, (x, y), mark)
            else:
                x, y = watermark_anchor(cfg.watermark_position, cfg.size, 0)
                self._draw_centered_text(draw, watermark, x, y)
        except (OSError, ValueError) as e:
            logger.warning("Failed to add watermark (%r): %s", watermark, e)

    def _draw_centered_text(
        self, draw: ImageDraw.ImageDraw, text: str, x: int, baseline: int
    ) -> None:
        # Horizontally centred on x, glyph bottoms resting on baseline
        cfg = self.config
        font = load_font(cfg.label_font, cfg.label_font_size)
        left, _, right, bottom = draw.textbbox((0, 0), text, font=font)
        origin = (x - (left + right) // 2, baseline - bottom)
        draw.text(origin, text, font=font, fill=cfg.foreground_color)

    def _serialize(self, image: Image.Image) -> bytes:
        fmt = self.config.output_format
        buf = BytesIO()
        image.save(buf, format=OUTPUT_FORMATS[fmt])
        if fmt != "svg":
            return buf.getvalue()
        b64 = base64.b64encode(buf.getvalue()).decode("ascii")
        size = self.config.size
        svg = (
            f'<svg width="{size}" height="{size}" xmlns="http://www.w3.org/2000/svg">'
            f'<image href="data:image/png;base64,{b64}" height="{size}" width="{size}"/>'
            f"</svg>"
        )
        return svg.encode("utf-8")

    # --- output accessors

    def get_bytes(self) -> bytes:
        return self.generate()

    def get_string(self) -> str:
        """SVG markup for ``svg`` output, base64 text for raster formats."""
        data = self.generate()
        if self.config.output_format == "svg":
            return data.decode("utf-8")
        return base64.b64encode(data).decode("ascii")

    @property
    def mime_type(self) -> str:
        fmt = self.config.output_format
        if render_formats.is_valid(fmt):
            return render_formats.mime_type_for(fmt)
        return f"image/{fmt}"

    def get_data_uri(self) -> str:
        b64 = base64.b64encode(self.generate()).decode("ascii")
        return f"data:{self.mime_type};base64,{b64}"

    def save_to_file(self, path: StrPath) -> Path:
        """
        Write the generated bytes to ``path``.

        Raises:
            StorageError: the file could not be written.
        """
        data = self.generate()
        target = Path(path)
        try:
            target.write_bytes(data)
        except OSError as e:
            logger.error("Failed to write QR code to %s: %s", target, e)
            raise StorageError(f"Failed to save QR code to {target}: {e}") from e
        logger.debug("QR code saved to %s (%d bytes)", target, len(data))
        return target

    async def generate_async(self) -> bytes:
        """Async wrapper for generate (for thread pools)."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.generate)

    async def save_to_file_async(self, path: StrPath) -> Path:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(self.save_to_file, path))


class QrCodeBuilder:
    """
    Fluent QR code configuration.

    Each setter validates its value, replaces the frozen configuration and
    returns the builder. ``build()`` hands a snapshot to a QrCodeResult, so
    later setter calls never affect an existing result.
    """

    def __init__(self, config: Optional[QrCodeConfig] = None) -> None:
        self._config = config or QrCodeConfig()

    @classmethod
    def create(cls, **options: Any) -> "QrCodeBuilder":
        """Builder preloaded with options (snake_case or camelCase keys)."""
        builder = cls()
        known = {f.name for f in fields(QrCodeConfig)}
        for key, value in options.items():
            name = _CREATE_ALIASES.get(key, key)
            if name not in known:
                raise InvalidInputError(f"Unknown QR code option: {key}")
            if name == "label_font_size":
                builder._update(label_font_size=int(value))
            elif name == "watermark_position":
                builder._update(watermark_position=str(value))
            elif name == "watermark":
                builder.watermark(value, builder.config.watermark_position)
            elif name == "label_font":
                builder.label_font(value, builder.config.label_font_size)
            else:
                setter = "format" if name == "output_format" else name
                getattr(builder, setter)(value)
        return builder

    @property
    def config(self) -> QrCodeConfig:
        return self._config

    def _update(self, **changes: Any) -> "QrCodeBuilder":
        self._config = replace(self._config, **changes)
        return self

    # --- fluent setters

    def data(self, data: str) -> "QrCodeBuilder":
        if not isinstance(data, str) or not data:
            raise InvalidInputError("QR code data must be a non-empty string")
        return self._update(data=data)

    def size(self, size: int) -> "QrCodeBuilder":
        if not isinstance(size, int) or size <= 0:
            raise InvalidInputError(f"Size must be a positive integer, got {size!r}")
        if size > MAX_IMAGE_WIDTH:
            raise InvalidInputError(
                f"Size {size} exceeds maximum {MAX_IMAGE_WIDTH}px"
            )
        return self._update(size=size)

    def margin(self, margin: int) -> "QrCodeBuilder":
        if not isinstance(margin, int) or margin < 0:
            raise InvalidInputError(
                f"Margin must be a non-negative integer, got {margin!r}"
            )
        return self._update(margin=margin)

    def error_correction_level(self, level: str) -> "QrCodeBuilder":
        try:
            value = ErrorCorrectionLevel(str(level).upper()).value
        except ValueError as e:
            raise InvalidInputError(
                f"Invalid error correction level: {level}. Use one of L, M, Q, H"
            ) from e
        return self._update(error_correction_level=value)

    def foreground_color(self, color: Sequence[int]) -> "QrCodeBuilder":
        return self._update(foreground_color=_to_rgb(color, "foreground_color"))

    def background_color(self, color: Sequence[int]) -> "QrCodeBuilder":
        return self._update(background_color=_to_rgb(color, "background_color"))

    def logo_path(self, logo_path: Optional[StrPath]) -> "QrCodeBuilder":
        return self._update(logo_path=str(logo_path) if logo_path else None)

    def logo_size(self, logo_size: float) -> "QrCodeBuilder":
        if not 0 < float(logo_size) <= 100:
            raise InvalidInputError(
                f"Logo size must be a percentage in (0, 100], got {logo_size!r}"
            )
        return self._update(logo_size=logo_size)

    def label(self, label: Optional[str]) -> "QrCodeBuilder":
        return self._update(label=label or None)

    def label_font(
        self, font_path: Optional[str], font_size: int = 16
    ) -> "QrCodeBuilder":
        return self._update(label_font=font_path, label_font_size=int(font_size))

    def watermark(
        self,
        watermark: Optional[str],
        position: str = DEFAULT_WATERMARK_POSITION.value,
    ) -> "QrCodeBuilder":
        return self._update(watermark=watermark or None, watermark_position=position)

    def format(self, output_format: str) -> "QrCodeBuilder":
        fmt = str(output_format).lower()
        if fmt not in OUTPUT_FORMATS:
            raise InvalidInputError(
                f"Invalid QR output format: {output_format}. "
                f"Supported formats: {', '.join(OUTPUT_FORMATS)}"
            )
        return self._update(output_format=fmt)

    # --- terminal operations

    def build(self) -> QrCodeResult:
        return QrCodeResult(self._config)

    def generate(self) -> bytes:
        return self.build().generate()

    def save_to_file(self, path: StrPath) -> Path:
        return self.build().save_to_file(path)

    def get_data_uri(self) -> str:
        return self.build().get_data_uri()

    def get_string(self) -> str:
        return self.build().get_string()
