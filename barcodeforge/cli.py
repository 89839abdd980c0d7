"""
cli.py

(Краткое RU: Командная строка: генерация штрихкодов и QR-кодов, пакетная обработка, справочники.)

EN: ``barcodeforge`` console script. Binary output without ``--output`` is
printed as base64; every BarcodeError becomes a message on stderr and exit
code 1.
"""

from __future__ import annotations

import base64
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import typer
from PIL import ImageColor

from barcodeforge import api
from barcodeforge.exceptions import BarcodeError
from barcodeforge.model import barcode_types, render_formats

logger = logging.getLogger(__name__)

app = typer.Typer(help="Generate barcodes and QR codes from the command line.")


def _fail(message: str) -> None:
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _emit(result: Union[bytes, str], output: Optional[Path], what: str) -> None:
    if output is None:
        if isinstance(result, bytes):
            typer.echo(base64.b64encode(result).decode("ascii"))
        else:
            typer.echo(result)
        return
    try:
        if isinstance(result, bytes):
            output.write_bytes(result)
        else:
            output.write_text(result, encoding="utf-8")
    except OSError as e:
        _fail(f"Cannot write {output}: {e}")
    typer.echo(f"{what} saved to {output}")


def _rgb(value: str) -> tuple:
    try:
        return ImageColor.getrgb(value)[:3]
    except ValueError as e:
        raise typer.BadParameter(f"Invalid color: {value}") from e


@app.command("barcode")
def barcode_cmd(
    data: str = typer.Option(..., "--data", "-d", help="Data to encode"),
    barcode_type: str = typer.Option("code128", "--type", "-t", help="Barcode type"),
    output_format: str = typer.Option(
        "png", "--format", "-f", help="Output format (png, svg, html, pdf, jpg)"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file"),
    width: int = typer.Option(2, "--width", "-w", help="Bar width"),
    height: int = typer.Option(100, "--height", "-h", help="Bar height"),
    text: bool = typer.Option(True, "--text/--no-text", help="Show text below the bars"),
    foreground: str = typer.Option("#000000", "--foreground", help="Bar color"),
    background: str = typer.Option("#ffffff", "--background", help="Background color"),
) -> None:
    """Generate a barcode."""
    options: Dict[str, Any] = {
        "width": width,
        "height": height,
        "displayValue": text,
        "lineColor": foreground,
        "background": background,
    }
    try:
        result = api.get_service().generate(data, barcode_type, output_format, options)
    except BarcodeError as e:
        _fail(str(e))
    _emit(result, output, "Barcode")


@app.command("qr")
def qr_cmd(
    data: str = typer.Option(..., "--data", "-d", help="Data to encode"),
    size: int = typer.Option(300, "--size", "-s", help="Image edge in pixels"),
    output_format: str = typer.Option(
        "png", "--format", "-f", help="Output format (png, jpg, svg, ...)"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file"),
    margin: int = typer.Option(10, "--margin", "-m", help="Quiet zone in pixels"),
    level: str = typer.Option(
        "M", "--error-correction", "-e", help="Error correction level (L, M, Q, H)"
    ),
    foreground: str = typer.Option("#000000", "--foreground", help="Module color"),
    background: str = typer.Option("#ffffff", "--background", help="Background color"),
    logo: Optional[Path] = typer.Option(None, "--logo", help="Logo image path"),
    logo_size: float = typer.Option(60, "--logo-size", help="Logo size, percent"),
    label: Optional[str] = typer.Option(None, "--label", help="Label text"),
    watermark: Optional[str] = typer.Option(None, "--watermark", help="Watermark text or image"),
    watermark_position: str = typer.Option(
        "center", "--watermark-position", help="Watermark anchor"
    ),
) -> None:
    """Generate a QR code with optional logo, watermark and label."""
    options: Dict[str, Any] = {
        "size": size,
        "margin": margin,
        "error_correction_level": level,
        "foreground_color": _rgb(foreground),
        "background_color": _rgb(background),
        "format": output_format,
    }
    if logo is not None:
        options["logo_path"] = logo
        options["logo_size"] = logo_size
    if label:
        options["label"] = label
    if watermark:
        options["watermark_position"] = watermark_position
        options["watermark"] = watermark
    try:
        result = api.qr_code(data, **options).generate()
    except BarcodeError as e:
        _fail(str(e))
    _emit(result, output, "QR code")


@app.command("batch")
def batch_cmd(
    input_file: Path = typer.Argument(..., help="JSON file with a list of items"),
    output_dir: Path = typer.Option(Path("output"), "--output-dir", "-o", help="Output directory"),
    parallel: bool = typer.Option(False, "--parallel", help="Render items in a thread pool"),
) -> None:
    """Generate every item of a JSON list into OUTPUT_DIR."""
    try:
        items = json.loads(input_file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        _fail(f"Cannot read {input_file}: {e}")
    if not isinstance(items, list):
        _fail("Input file must contain an array of barcode configurations")

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        _fail(f"Cannot create {output_dir}: {e}")
    try:
        results = api.batch(items, parallel=parallel)
    except BarcodeError as e:
        _fail(str(e))

    errors = 0
    for item in results:
        if not item.success:
            errors += 1
            typer.secho(f"Error in item {item.index}: {item.error}", fg=typer.colors.RED, err=True)
            continue
        ext = render_formats.extension_for(item.format) or f".{item.format}"
        path = output_dir / f"barcode_{item.index}{ext}"
        try:
            if isinstance(item.result, bytes):
                path.write_bytes(item.result)
            else:
                path.write_text(str(item.result), encoding="utf-8")
        except OSError as e:
            _fail(f"Cannot write {path}: {e}")
    typer.echo(
        f"Batch generation completed: {len(results) - errors} successful, {errors} errors"
    )


@app.command("validate")
def validate_cmd(
    data: str = typer.Option(..., "--data", "-d", help="Data to validate"),
    barcode_type: str = typer.Option(..., "--type", "-t", help="Barcode type"),
) -> None:
    """Check data against a barcode type; exit code 1 when invalid."""
    result = api.validate(data, barcode_type)
    if not result.valid:
        _fail(f"Data is invalid: {result.error}")
    typer.secho("Data is valid", fg=typer.colors.GREEN)
    typer.echo(f"  Type: {result.type}")
    typer.echo(f"  Length: {result.length}")
    typer.echo(f"  Charset: {result.charset}")


@app.command("types")
def types_cmd(
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Only this category"),
) -> None:
    """List supported barcode types."""
    if category:
        names: List[str] = barcode_types.list_by_category(category)
        if not names:
            _fail(
                f"Unknown category: {category}. "
                f"Categories: {', '.join(barcode_types.get_categories())}"
            )
    else:
        names = barcode_types.list_all()
    typer.echo("Supported barcode types:")
    for name in names:
        typer.echo(f"  - {name}: {barcode_types.description_for(name)}")


@app.command("formats")
def formats_cmd() -> None:
    """List supported output formats."""
    typer.echo("Supported output formats:")
    for fmt in render_formats.list_all():
        typer.echo(f"  - {fmt} ({render_formats.mime_type_for(fmt)})")


if __name__ == "__main__":
    app()
