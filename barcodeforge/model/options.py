from __future__ import annotations

from typing import Any, Dict, Final, Mapping, Optional, TypedDict

__all__ = [
    "RenderOptions",
    "DEFAULT_RENDER_OPTIONS",
    "OPTION_ALIASES",
    "normalize_options",
    "merge_options",
]


class RenderOptions(TypedDict, total=False):
    """
    Typed render options shared by all renderers.

    Keys follow the public option contract (camelCase). Every field is
    optional; unknown keys are carried through untouched.

    Example:
        >>> options: RenderOptions = {"width": 3, "height": 150, "displayValue": False}
        >>> service.png("1234567890", "code128", options)
    """

    width: int  # Module/bar width in px
    height: int  # Bar height in px
    displayValue: bool  # Draw human readable text
    fontSize: int
    textAlign: str  # left | center | right
    textPosition: str  # top | bottom
    textMargin: int  # Gap between symbol and text
    background: str
    lineColor: str
    margin: int
    marginTop: int
    marginBottom: int
    marginLeft: int
    marginRight: int
    moduleSize: int  # Cell edge for 2D symbols


DEFAULT_RENDER_OPTIONS: Final[Mapping[str, Any]] = {
    "width": 2,
    "height": 100,
    "displayValue": True,
    "fontSize": 20,
    "textAlign": "center",
    "textPosition": "bottom",
    "textMargin": 2,
    "background": "#ffffff",
    "lineColor": "#000000",
    "margin": 10,
    "marginTop": 10,
    "marginBottom": 10,
    "marginLeft": 10,
    "marginRight": 10,
    "moduleSize": 6,
}

# snake_case spellings accepted from Python callers and the CLI
OPTION_ALIASES: Final[Mapping[str, str]] = {
    "display_value": "displayValue",
    "font_size": "fontSize",
    "text_align": "textAlign",
    "text_position": "textPosition",
    "text_margin": "textMargin",
    "line_color": "lineColor",
    "foreground": "lineColor",
    "margin_top": "marginTop",
    "margin_bottom": "marginBottom",
    "margin_left": "marginLeft",
    "margin_right": "marginRight",
    "module_size": "moduleSize",
    "class_name": "className",
    "page_width": "pageWidth",
    "page_height": "pageHeight",
    "unique_id": "uniqueId",
}


def normalize_options(options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Copy options, renaming known snake_case aliases to contract keys."""
    if not options:
        return {}
    result: Dict[str, Any] = {}
    for key, value in options.items():
        result[OPTION_ALIASES.get(key, key)] = value
    return result


def merge_options(
    defaults: Mapping[str, Any], options: Optional[Mapping[str, Any]]
) -> Dict[str, Any]:
    """
    Merge caller options over defaults; the caller always wins.

    A bare ``margin`` given by the caller also becomes the default for the
    four side margins unless those are given explicitly.
    """
    overrides = normalize_options(options)
    merged: Dict[str, Any] = dict(defaults)
    if "margin" in overrides:
        for side in ("marginTop", "marginBottom", "marginLeft", "marginRight"):
            merged[side] = overrides["margin"]
    merged.update(overrides)
    return merged
