from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Set

import barcode as pybarcode
from barcode.errors import BarcodeError as PyBarcodeError
from barcode.errors import BarcodeNotFoundError

from barcodeforge.exceptions import SymbolGenerationError

logger = logging.getLogger(__name__)

__all__ = ["LinearCodeGenerator"]


class LinearCodeGenerator:
    """
    1D symbol source backed by python-barcode.

    Args:
        name: python-barcode symbology name (``code128``, ``ean13``, ...)
        data: Payload string
        options: Extra constructor options for the python-barcode class

    Example:
        >>> gen = LinearCodeGenerator("ean13", "1234567890128")
        >>> gen.modules()[:3]
        [True, False, True]
    """

    _pybarcode_support: Set[str] = {
        "code128",
        "code39",
        "ean13",
        "ean8",
        "upca",
        "itf",
        "codabar",
    }

    def __init__(
        self,
        name: str,
        data: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if name not in self._pybarcode_support:
            raise SymbolGenerationError(
                f"Symbology {name!r} not supported by python-barcode",
                backend="python-barcode",
            )
        self.name = name
        self.data = self._prepare_payload(name, data)
        self.options: Dict[str, Any] = dict(options) if options else {}

    @staticmethod
    def _prepare_payload(name: str, data: str) -> str:
        # Codabar needs explicit start/stop characters
        if name == "codabar" and not (data[:1] in "ABCD" and data[-1:] in "ABCD"):
            return f"A{data}B"
        return data

    def _instance(self) -> Any:
        try:
            bclass = pybarcode.get_barcode_class(self.name)
            return bclass(self.data, **self.options)
        except BarcodeNotFoundError as e:
            raise SymbolGenerationError(
                f"Barcode class not found: {self.name}", backend="python-barcode"
            ) from e
        except (PyBarcodeError, ValueError, TypeError, KeyError) as e:
            # Code 39 with checksum raises KeyError for unmapped characters
            logger.debug("python-barcode rejected %s payload: %s", self.name, e)
            raise SymbolGenerationError(
                f"{self.name} generation failed: {e}", backend="python-barcode"
            ) from e

    def modules(self) -> List[bool]:
        """Bar/space pattern, one bool per module (True is a dark bar)."""
        inst = self._instance()
        try:
            lines = inst.build()
        except (PyBarcodeError, ValueError, KeyError) as e:
            raise SymbolGenerationError(
                f"{self.name} generation failed: {e}", backend="python-barcode"
            ) from e
        # Guard bars may add a second line; the first one holds the full pattern
        pattern = lines[0] if lines else ""
        return [ch == "1" for ch in pattern]

    def text(self) -> str:
        """Human readable text including any computed check digit."""
        inst = self._instance()
        return str(inst.get_fullcode())

    @classmethod
    def supported_names(cls) -> Set[str]:
        return set(cls._pybarcode_support)
