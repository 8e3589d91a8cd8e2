"""Command line interface for Pagetext."""

import logging
import sys
from pathlib import Path

import click

from .config import get_config
from .output import format_output
from .pdf import load_pdf


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """Pagetext - reading-order text extraction from PDF pages."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("pdf_path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "-o", "--output",
    type=click.Path(path_type=Path),
    help="Output file path (default: stdout)"
)
@click.option(
    "--format", "-f",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text)"
)
@click.option(
    "--sort", "-s",
    type=click.Choice(["none", "asc", "desc"], case_sensitive=False),
    default=None,
    help="Sort fragments by coordinates (default: from config, none)"
)
@click.option(
    "--columns", "-c",
    type=int,
    default=None,
    help="Number of columns to split each page into"
)
@click.option(
    "--divider", "-d",
    default=None,
    help="String inserted at column breaks"
)
@click.option(
    "--fuzzy",
    type=float,
    default=None,
    help="Vertical tolerance in points for same-line detection"
)
@click.option(
    "--page", "-p",
    type=int,
    default=None,
    help="Extract a single page (0-indexed)"
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to YAML config file"
)
def text(
    pdf_path: Path,
    output: Path | None,
    format: str,
    sort: str | None,
    columns: int | None,
    divider: str | None,
    fuzzy: float | None,
    page: int | None,
    config_path: Path | None,
):
    """
    Extract reading-order text from a PDF.

    PDF_PATH is the path to the input PDF file.
    """
    try:
        text_config = get_config(config_path).text
        sort = sort if sort is not None else text_config.sort
        columns = columns if columns is not None else text_config.columns
        divider = divider if divider is not None else text_config.column_divider
        fuzzy = fuzzy if fuzzy is not None else text_config.fuzziness

        with load_pdf(pdf_path) as pdf:
            doc = pdf.to_text(
                sort, columns, divider, fuzzy,
                page_numbers=[page] if page is not None else None,
            )

        format_output(doc, output or sys.stdout, format=format)
        if output:
            click.echo(f"Extracted {len(doc.pages)} pages to {output}", err=True)

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.argument("pdf_path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "-o", "--output",
    type=click.Path(path_type=Path),
    required=True,
    help="Output image path"
)
@click.option(
    "--page", "-p",
    type=int,
    default=0,
    help="Page to render (0-indexed, default: 0)"
)
@click.option(
    "--format", "-f",
    type=click.Choice(["png", "jpeg"]),
    default=None,
    help="Image format (default: from output extension, else png)"
)
@click.option(
    "--quality", "-q",
    type=click.FloatRange(0.0, 1.0),
    default=None,
    help="JPEG quality 0.0-1.0 (default: from config, 0.8)"
)
@click.option(
    "--dpi",
    type=int,
    default=None,
    help="DPI for rendering (default: from config, 72)"
)
def image(pdf_path: Path, output: Path, page: int, format: str | None, quality: float | None, dpi: int | None):
    """
    Render a PDF page to a PNG or JPEG image.

    PDF_PATH is the path to the input PDF file.
    """
    if format is None:
        format = "jpeg" if output.suffix.lower() in (".jpg", ".jpeg") else "png"

    try:
        render_config = get_config().render
        with load_pdf(pdf_path, dpi=dpi or render_config.dpi) as pdf:
            page_data = pdf.page(page)
            if format == "png":
                data = page_data.to_png()
            else:
                data = page_data.to_jpeg(quality if quality is not None else render_config.jpeg_quality)

        output.write_bytes(data)
        click.echo(f"Wrote page {page} to {output} ({len(data)} bytes)", err=True)

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.argument("pdf_path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--page", "-p",
    type=int,
    default=0,
    help="Page to recognize (0-indexed, default: 0)"
)
@click.option(
    "--lang", "-l",
    "langs",
    multiple=True,
    help="Tesseract language code, repeatable (default: from config, eng)"
)
def ocr(pdf_path: Path, page: int, langs: tuple[str, ...]):
    """
    Recognize the text of a rendered PDF page with Tesseract.

    PDF_PATH is the path to the input PDF file.
    """
    try:
        config = get_config()
        with load_pdf(pdf_path, dpi=config.render.dpi) as pdf:
            result = pdf.page(page).ocr(list(langs) or config.ocr.langs, config=config.ocr.tesseract_config)
        click.echo(result)

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
def check():
    """Check OCR engine availability."""
    from .ocr.tesseract import is_tesseract_available, get_tesseract_version

    click.echo("OCR Engine Status:")
    click.echo("-" * 40)

    if is_tesseract_available():
        version = get_tesseract_version()
        click.echo(f"Tesseract: OK (version {version})")
    else:
        click.echo("Tesseract: NOT FOUND")
        click.echo("  Install with: sudo apt-get install tesseract-ocr tesseract-ocr-eng")


@main.command()
@click.option(
    "--host",
    default="127.0.0.1",
    help="Host to bind to (default: 127.0.0.1)"
)
@click.option(
    "--port",
    default=8000,
    type=int,
    help="Port to bind to (default: 8000)"
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload for development"
)
def serve(host: str, port: int, reload: bool):
    """Start the FastAPI REST server."""
    import uvicorn

    click.echo(f"Starting Pagetext API server at http://{host}:{port}")
    click.echo("API docs available at /docs")

    uvicorn.run(
        "pagetext.api:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    main()
