"""FastAPI REST API for Pagetext."""

import asyncio
import logging
import tempfile
import uuid
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel, Field

from .config import get_config
from .models import DocumentText
from .pdf import load_pdf

logger = logging.getLogger(__name__)

# Thread pool for CPU-bound PDF work
_executor = ThreadPoolExecutor(max_workers=2)


app = FastAPI(
    title="Pagetext API",
    description="Reading-order text extraction from PDF pages",
    version="0.1.0",
)


class PageResponse(BaseModel):
    """Reconstructed text of a single page."""

    page_number: int
    width: float = Field(description="Page width (points)")
    height: float = Field(description="Page height (points)")
    text: str


class TextResponse(BaseModel):
    """Complete text extraction result."""

    filename: str
    pages: list[PageResponse]


class OCRResponse(BaseModel):
    """OCR result for a single page."""

    filename: str
    page_number: int
    langs: list[str]
    text: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    tesseract_available: bool


def document_to_response(doc: DocumentText) -> TextResponse:
    """Convert internal DocumentText model to API response."""
    return TextResponse(
        filename=doc.filename,
        pages=[
            PageResponse(
                page_number=p.page_number,
                width=p.width,
                height=p.height,
                text=p.text,
            )
            for p in doc.pages
        ],
    )


async def _save_upload(file: UploadFile) -> Path:
    """Validate and store an uploaded PDF in a temp location."""
    if not file.filename or not file.filename.lower().endswith(".pdf"):
        raise HTTPException(status_code=400, detail="File must be a PDF")

    temp_dir = Path(tempfile.gettempdir()) / "pagetext"
    temp_dir.mkdir(exist_ok=True)
    temp_path = temp_dir / f"{uuid.uuid4().hex}.pdf"
    temp_path.write_bytes(await file.read())
    return temp_path


async def _run(func, *args):
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(_executor, func, *args)


def _extract_text(
    pdf_path: Path,
    page: Optional[int],
    sort: str,
    columns: int,
    column_divider: Optional[str],
    fuzziness: float,
) -> DocumentText:
    with load_pdf(pdf_path) as pdf:
        return pdf.to_text(
            sort, columns, column_divider, fuzziness,
            page_numbers=[page] if page is not None else None,
        )


def _render_image(pdf_path: Path, page: int, dpi: int, format: str, quality: float) -> bytes:
    with load_pdf(pdf_path, dpi=dpi) as pdf:
        page_data = pdf.page(page)
        if format == "png":
            return page_data.to_png()
        return page_data.to_jpeg(quality)


def _ocr_page(pdf_path: Path, page: int, dpi: int, langs: list[str], config: str) -> str:
    with load_pdf(pdf_path, dpi=dpi) as pdf:
        return pdf.page(page).ocr(langs, config=config)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Check API health and OCR engine availability."""
    from .ocr.tesseract import is_tesseract_available

    return HealthResponse(
        status="ok",
        tesseract_available=is_tesseract_available(),
    )


@app.post("/text", response_model=TextResponse)
async def extract_text(
    file: UploadFile = File(..., description="PDF file to process"),
    page: Optional[int] = Query(None, ge=0, description="Single page to extract (0-indexed)"),
    sort: Optional[str] = Query(None, pattern="^(none|asc|desc)$", description="Sort direction (default: from config)"),
    columns: Optional[int] = Query(None, ge=1, description="Number of columns (default: from config)"),
    column_divider: Optional[str] = Query(None, description="String inserted at column breaks (default: from config)"),
    fuzziness: Optional[float] = Query(None, ge=0.0, description="Vertical same-line tolerance in points (default: from config)"),
):
    """
    Extract reading-order text from a PDF.

    Upload a PDF file and receive the reconstructed text of every page,
    or of a single page when `page` is given. Omitted options fall back
    to the `text` section of the configuration.
    """
    text_config = get_config().text
    sort = sort or text_config.sort
    columns = columns or text_config.columns
    column_divider = column_divider if column_divider is not None else text_config.column_divider
    fuzziness = fuzziness if fuzziness is not None else text_config.fuzziness
    temp_path = await _save_upload(file)

    try:
        doc = await _run(_extract_text, temp_path, page, sort, columns, column_divider, fuzziness)
        doc.filename = file.filename
        return document_to_response(doc)

    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception("Text extraction failed")
        raise HTTPException(status_code=500, detail=f"Extraction failed: {e}")
    finally:
        if temp_path.exists():
            temp_path.unlink()


@app.post("/image")
async def render_image(
    file: UploadFile = File(..., description="PDF file to render"),
    page: int = Query(0, ge=0, description="Page to render (0-indexed)"),
    format: str = Query("png", pattern="^(png|jpeg)$", description="Image format"),
    quality: Optional[float] = Query(None, ge=0.0, le=1.0, description="JPEG quality 0.0-1.0 (default: from config)"),
    dpi: Optional[int] = Query(None, ge=36, le=600, description="DPI for rendering (default: from config)"),
):
    """Render a PDF page to a PNG or JPEG image."""
    render_config = get_config().render
    quality = quality if quality is not None else render_config.jpeg_quality
    dpi = dpi or render_config.dpi
    temp_path = await _save_upload(file)

    try:
        data = await _run(_render_image, temp_path, page, dpi, format, quality)
        return Response(content=data, media_type=f"image/{format}")

    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception("Rendering failed")
        raise HTTPException(status_code=500, detail=f"Rendering failed: {e}")
    finally:
        if temp_path.exists():
            temp_path.unlink()


@app.post("/ocr", response_model=OCRResponse)
async def ocr_page(
    file: UploadFile = File(..., description="PDF file to recognize"),
    page: int = Query(0, ge=0, description="Page to recognize (0-indexed)"),
    langs: Optional[list[str]] = Query(None, description="Tesseract language codes"),
):
    """Recognize the text of a rendered PDF page with Tesseract."""
    config = get_config()
    langs = langs or config.ocr.langs
    temp_path = await _save_upload(file)

    try:
        text = await _run(
            _ocr_page, temp_path, page, config.render.dpi, langs, config.ocr.tesseract_config
        )
        return OCRResponse(filename=file.filename, page_number=page, langs=langs, text=text)

    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.exception("OCR failed")
        raise HTTPException(status_code=500, detail=f"OCR failed: {e}")
    finally:
        if temp_path.exists():
            temp_path.unlink()


@app.get("/")
async def root():
    """API root - returns basic info."""
    return {
        "name": "Pagetext API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
