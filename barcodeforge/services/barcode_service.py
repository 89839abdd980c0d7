"""
services/barcode_service.py

(Краткое RU: Основной сервис генерации штрихкодов: проверка, выбор рендерера, пакетная обработка.)

EN: Barcode generation service. Checks the request, runs the Validator, then
dispatches to the renderer registered for the output format. Validation
always happens before any rendering.

Example:
    >>> service = BarcodeService()
    >>> png = service.png("1234567890", "code128")
    >>> results = service.batch([
    ...     {"data": "1234567890", "type": "code128", "format": "png"},
    ...     {"data": "", "type": "code128", "format": "png"},
    ... ])
    >>> [r.success for r in results]
    [True, False]
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Dict, Final, List, Mapping, Optional, Sequence, Type

from barcodeforge.barcodegen.symbols import SymbolGenerator
from barcodeforge.exceptions import (
    BarcodeError,
    ChecksumError,
    CharsetError,
    InvalidInputError,
    LengthError,
    UnsupportedFormatError,
    UnsupportedTypeError,
    ValidationError,
)
from barcodeforge.model import barcode_types, render_formats
from barcodeforge.model.batch import BatchItem, BatchResult
from barcodeforge.model.enums import DEFAULT_BARCODE_TYPE, WatermarkPosition
from barcodeforge.renderers import (
    BaseRenderer,
    HtmlRenderer,
    PdfRenderer,
    PngRenderer,
    SvgRenderer,
)
from barcodeforge.renderers.base import Artifact
from barcodeforge.validators.validator import (
    ERROR_CHARSET,
    ERROR_CHECKSUM,
    ERROR_INVALID_INPUT,
    ERROR_LENGTH,
    ERROR_UNKNOWN_TYPE,
    ValidationResult,
    Validator,
)

logger = logging.getLogger(__name__)

__all__ = ["BarcodeService"]

_VALIDATION_ERRORS: Final[Mapping[str, Type[BarcodeError]]] = {
    ERROR_INVALID_INPUT: InvalidInputError,
    ERROR_UNKNOWN_TYPE: UnsupportedTypeError,
    ERROR_LENGTH: LengthError,
    ERROR_CHARSET: CharsetError,
    ERROR_CHECKSUM: ChecksumError,
}


class BarcodeService:
    """
    Barcode generation facade over the validator and the renderer set.

    Args:
        config: Optional configuration mapping (see ``barcodeforge.load_config``).
            ``render_defaults`` is applied to every renderer, ``default_type``
            and ``default_format`` fill omitted arguments.
    """

    def __init__(self, config: Optional[Mapping[str, Any]] = None) -> None:
        config = dict(config or {})
        self.default_type: str = (
            config.get("default_type") or DEFAULT_BARCODE_TYPE.value
        )
        self.default_format: str = config.get("default_format") or render_formats.PNG
        self.validator = Validator()

        symbols = SymbolGenerator()
        self.renderers: Dict[str, BaseRenderer] = {
            render_formats.PNG: PngRenderer("png", symbols),
            render_formats.JPG: PngRenderer("jpg", symbols),
            render_formats.JPEG: PngRenderer("jpeg", symbols),
            render_formats.SVG: SvgRenderer(symbols),
            render_formats.HTML: HtmlRenderer(symbols),
            render_formats.PDF: PdfRenderer(symbols),
        }
        render_defaults = config.get("render_defaults") or {}
        if render_defaults:
            for renderer in self.renderers.values():
                renderer.set_default_options(render_defaults)
        logger.debug("BarcodeService ready with formats: %s", sorted(self.renderers))

    # ------------------------------------------------------------------
    # generation
    # ------------------------------------------------------------------

    def generate(
        self,
        data: Any,
        barcode_type: Optional[str] = None,
        output_format: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Artifact:
        """
        Validate and render one barcode.

        Returns:
            bytes for png/jpg/jpeg/pdf, str for svg/html.

        Raises:
            InvalidInputError: data is empty or not a string.
            UnsupportedTypeError: type is not registered.
            UnsupportedFormatError: format is not registered.
            ValidationError: data rejected for the type (typed subclass).
            RenderError: the backend failed.
        """
        barcode_type = barcode_type or self.default_type
        output_format = output_format or self.default_format

        if not isinstance(data, str) or not data:
            raise InvalidInputError("Data must be a non-empty string")

        if not barcode_types.is_valid(barcode_type):
            raise UnsupportedTypeError(
                f"Invalid barcode type: {barcode_type}. "
                f"Supported types: {', '.join(barcode_types.list_all())}",
                context={"type": barcode_type},
            )

        if not render_formats.is_valid(output_format):
            raise UnsupportedFormatError(
                f"Invalid format: {output_format}. "
                f"Supported formats: {', '.join(render_formats.list_all())}",
                context={"format": output_format},
            )

        validation = self.validator.validate(data, barcode_type)
        if not validation.valid:
            raise self._validation_error(barcode_type, validation)

        renderer = self.get_renderer(output_format)
        return renderer.render(data, barcode_type, options)

    def png(
        self,
        data: Any,
        barcode_type: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> bytes:
        result = self.generate(data, barcode_type, render_formats.PNG, options)
        return result if isinstance(result, bytes) else result.encode("utf-8")

    def svg(
        self,
        data: Any,
        barcode_type: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> str:
        return str(self.generate(data, barcode_type, render_formats.SVG, options))

    def html(
        self,
        data: Any,
        barcode_type: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> str:
        return str(self.generate(data, barcode_type, render_formats.HTML, options))

    def pdf(
        self,
        data: Any,
        barcode_type: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> bytes:
        result = self.generate(data, barcode_type, render_formats.PDF, options)
        return result if isinstance(result, bytes) else result.encode("utf-8")

    # ------------------------------------------------------------------
    # batch
    # ------------------------------------------------------------------

    def batch(self, items: Sequence[Any], parallel: bool = False) -> List[BatchResult]:
        """
        Generate every item independently; failures are reported per item.

        Args:
            items: List of mappings ``{data, type?, format?, options?}`` or BatchItem.
            parallel: Run items in a thread pool (order is still preserved).

        Raises:
            InvalidInputError: ``items`` is not a list or tuple.
        """
        if not isinstance(items, (list, tuple)):
            raise InvalidInputError("Items must be a list")

        def gen(indexed: Any) -> BatchResult:
            index, raw = indexed
            return self._generate_item(index, raw)

        if parallel:
            with ThreadPoolExecutor() as pool:
                results = list(pool.map(gen, enumerate(items)))
        else:
            results = [gen(pair) for pair in enumerate(items)]

        failed = sum(1 for r in results if not r.success)
        logger.info(
            "Batch barcode generation complete: %d items, %d failed",
            len(results),
            failed,
        )
        return results

    async def batch_async(
        self, items: Sequence[Any], parallel: bool = False
    ) -> List[BatchResult]:
        """Async wrapper for batch (runs in the default executor)."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(self.batch, items, parallel))

    def _generate_item(self, index: int, raw: Any) -> BatchResult:
        raw_map: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
        try:
            item = BatchItem.from_value(raw, self.default_type, self.default_format)
            result = self.generate(item.data, item.type, item.format, item.options)
            return BatchResult(
                index=index,
                success=True,
                data=item.data,
                type=item.type,
                format=item.format,
                result=result,
            )
        except (BarcodeError, TypeError, ValueError) as e:
            logger.warning("Batch item %d failed: %s", index, e)
            if isinstance(raw, BatchItem):
                raw_map = {"data": raw.data, "type": raw.type, "format": raw.format}
            return BatchResult(
                index=index,
                success=False,
                data=raw_map.get("data"),
                type=raw_map.get("type") or self.default_type,
                format=raw_map.get("format") or self.default_format,
                error=str(e),
            )

    # ------------------------------------------------------------------
    # pass-through queries
    # ------------------------------------------------------------------

    def validate(self, data: Any, barcode_type: str) -> ValidationResult:
        return self.validator.validate(data, barcode_type)

    def get_barcode_types(self) -> List[str]:
        return barcode_types.list_all()

    def get_render_formats(self) -> List[str]:
        return render_formats.list_all()

    def get_watermark_positions(self) -> List[str]:
        return WatermarkPosition.values()

    def get_renderer(self, output_format: str) -> BaseRenderer:
        renderer = self.renderers.get(output_format)
        if renderer is None:
            raise UnsupportedFormatError(
                f"No renderer available for format: {output_format}",
                context={"format": output_format},
            )
        return renderer

    @staticmethod
    def _validation_error(
        barcode_type: str, validation: ValidationResult
    ) -> BarcodeError:
        error_cls = _VALIDATION_ERRORS.get(validation.error_code or "", ValidationError)
        return error_cls(
            f"Invalid data for {barcode_type}: {validation.error}",
            context={"type": barcode_type, "code": validation.error_code},
        )
