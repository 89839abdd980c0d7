"""
model

Реестры и записи данных: типы штрихкодов, форматы вывода, опции рендеринга,
элементы пакетной обработки.
"""

from barcodeforge.model.batch import BatchItem, BatchResult
from barcodeforge.model.options import (
    DEFAULT_RENDER_OPTIONS,
    RenderOptions,
    merge_options,
    normalize_options,
)

__all__ = [
    "BatchItem",
    "BatchResult",
    "DEFAULT_RENDER_OPTIONS",
    "RenderOptions",
    "merge_options",
    "normalize_options",
]
