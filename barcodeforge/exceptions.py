"""
Centralized exceptions for barcodeforge.

Every error raised by the package derives from BarcodeError, so callers can
catch a single type at the CLI/server boundary.

Hierarchy:
    BarcodeError (base)
    ├── ValidationError
    │   ├── InvalidInputError
    │   ├── LengthError
    │   ├── CharsetError
    │   └── ChecksumError
    ├── UnsupportedTypeError
    ├── UnsupportedFormatError
    ├── SymbolGenerationError
    ├── RenderError
    ├── CompositionError
    └── StorageError

Example:
    >>> from barcodeforge.exceptions import BarcodeError
    >>> try:
    ...     service.generate("", "code128", "png")
    ... except BarcodeError as e:
    ...     logger.error("Generation failed: %s", e)
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__: list[str] = [
    "BarcodeError",
    "ValidationError",
    "InvalidInputError",
    "LengthError",
    "CharsetError",
    "ChecksumError",
    "UnsupportedTypeError",
    "UnknownTypeError",
    "UnsupportedFormatError",
    "SymbolGenerationError",
    "RenderError",
    "CompositionError",
    "StorageError",
]


# ==============================================================================
# BASE EXCEPTION
# ==============================================================================


class BarcodeError(Exception):
    """
    Base exception for all barcode generation errors.

    Attributes:
        message: Human readable error message
        backend: Renderer/backend that raised the error (optional)
        context: Additional debugging context (optional)

    Example:
        >>> raise BarcodeError(
        ...     "Operation failed",
        ...     backend="png",
        ...     context={"type": "code128"},
        ... )
    """

    def __init__(
        self,
        message: str,
        *,
        backend: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.backend = backend
        self.context = context or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"backend={self.backend!r}, "
            f"context={self.context!r})"
        )


# ==============================================================================
# VALIDATION ERRORS
# ==============================================================================


class ValidationError(BarcodeError):
    """Data was rejected before any rendering was attempted."""


class InvalidInputError(ValidationError):
    """Data is empty or not a string (or a builder value is malformed)."""


class LengthError(ValidationError):
    """Data length is outside the symbology bounds."""


class CharsetError(ValidationError):
    """Data contains characters the symbology cannot encode."""


class ChecksumError(ValidationError):
    """Supplied EAN/UPC check digit does not match the computed one."""


# ==============================================================================
# REGISTRY ERRORS
# ==============================================================================


class UnsupportedTypeError(BarcodeError):
    """Barcode type identifier is not registered."""


UnknownTypeError = UnsupportedTypeError


class UnsupportedFormatError(BarcodeError):
    """Output format identifier is not registered."""


# ==============================================================================
# RENDERING ERRORS
# ==============================================================================


class SymbolGenerationError(BarcodeError):
    """External symbol generator rejected the payload or is unavailable."""


class RenderError(BarcodeError):
    """
    Renderer-internal failure (symbol generation or drawing).

    The message is prefixed with the backend name so failures can be traced
    to the responsible renderer.

    Example:
        >>> str(RenderError.wrap("pdf", ValueError("bad color")))
        'PDF rendering failed: bad color'
    """

    @classmethod
    def wrap(
        cls, backend: str, error: BaseException, **context: Any
    ) -> "RenderError":
        return cls(
            f"{backend.upper()} rendering failed: {error}",
            backend=backend,
            context=context,
        )


class CompositionError(BarcodeError):
    """Base QR symbol could not be composed (logo/watermark never raise this)."""


class StorageError(BarcodeError):
    """Writing or reading an artifact on disk failed."""
