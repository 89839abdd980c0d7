from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from barcodeforge.model.enums import DEFAULT_BARCODE_TYPE

DEFAULT_FORMAT = "png"


@dataclass
class BatchItem:
    """One independent generation request inside a batch."""

    data: Any
    type: str = DEFAULT_BARCODE_TYPE.value
    format: str = DEFAULT_FORMAT
    options: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_value(
        cls,
        value: Union["BatchItem", Mapping[str, Any]],
        default_type: str = DEFAULT_BARCODE_TYPE.value,
        default_format: str = DEFAULT_FORMAT,
    ) -> "BatchItem":
        """Item from a mapping; omitted type and format take the given defaults."""
        if isinstance(value, BatchItem):
            return value
        if not isinstance(value, Mapping):
            raise TypeError(f"Batch item must be a mapping, got {type(value).__name__}")
        return cls(
            data=value.get("data"),
            type=value.get("type") or default_type,
            format=value.get("format") or default_format,
            options=dict(value.get("options") or {}),
        )


@dataclass(frozen=True)
class BatchResult:
    """Outcome of one batch item; ``index`` is its position in the input."""

    index: int
    success: bool
    data: Any
    type: str
    format: str
    result: Optional[Union[bytes, str]] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "index": self.index,
            "success": self.success,
            "data": self.data,
            "type": self.type,
            "format": self.format,
        }
        if self.success:
            out["result"] = self.result
        else:
            out["error"] = self.error
        return out
