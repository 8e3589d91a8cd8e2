"""PDF loading, text fragment retrieval and page rendering using PyMuPDF."""

import io
import logging
from pathlib import Path
from typing import Iterator, Optional

import numpy as np
import pymupdf
from PIL import Image

from .models import DocumentText, PageText, SortMode, TextFragment, ReconstructionConfig
from .reconstruct import reconstruct

logger = logging.getLogger(__name__)


def spans_to_fragments(text_dict: dict, page_height: float) -> list[TextFragment]:
    """
    Convert a PyMuPDF text dict into positioned text fragments.

    PyMuPDF reports span origins (baseline start) with the origin at the
    top-left of the page. Fragments use PDF user space instead:

        0,h         w,h
          -----------
          |         |
          |   pdf   |
          |         |
          -----------
        0,0         w,0

    Args:
        text_dict: Output of page.get_text("dict")
        page_height: Page height in points

    Returns:
        One fragment per span, in content stream order
    """
    fragments = []

    for block in text_dict.get("blocks", []):
        if block.get("type", 0) != 0:  # Image block
            continue
        for line in block.get("lines", []):
            cos, sin = line.get("dir", (1.0, 0.0))
            for span in line.get("spans", []):
                size = span.get("size", 0.0)
                ox, oy = span["origin"]
                fragments.append(TextFragment(
                    content=span.get("text", ""),
                    transform=(size * cos, size * sin, -size * sin, size * cos, ox, page_height - oy),
                ))

    return fragments


class PageData:
    """Text, image and OCR access for a single PDF page."""

    def __init__(self, document: "PDFDocument", page_num: int):
        self.document = document
        self.page_num = page_num
        self._page: Optional[pymupdf.Page] = None

    @property
    def page(self) -> pymupdf.Page:
        if self._page is None:
            self._page = self.document.load_page(self.page_num)
        return self._page

    def get_fragments(self) -> list[TextFragment]:
        """Retrieve the raw text fragments of this page."""
        text_dict = self.page.get_text("dict", sort=False)
        return spans_to_fragments(text_dict, self.page.rect.height)

    def to_text(
        self,
        sort: bool | str | SortMode | None = False,
        columns: Optional[int] = None,
        column_divider: Optional[str] = None,
        fuzzy: Optional[float] = None,
    ) -> str:
        """
        Get the text of the page.

        Args:
            sort: Sort the text by coordinates; True means ascending
            columns: Number of columns to split the page into (default: none)
            column_divider: String inserted at column breaks (default: none)
            fuzzy: Vertical tolerance for same-line detection (default: exact)

        Returns:
            The reconstructed text, or an empty string if the page content
            could not be read
        """
        config = ReconstructionConfig.from_options(sort, columns, column_divider, fuzzy)
        return self.reconstruct(config)

    def reconstruct(self, config: ReconstructionConfig) -> str:
        """Reconstruct the page text with an already normalized config."""
        try:
            fragments = self.get_fragments()
        except Exception as e:
            logger.warning(f"Could not read text of page {self.page_num}: {e}")
            return ""

        logger.debug(f"Page {self.page_num}: {len(fragments)} fragments")
        return reconstruct(fragments, config)

    def page_to_image(self) -> np.ndarray:
        """
        Render the page to a numpy array (RGB image).

        Returns:
            numpy array of shape (height, width, 3) with RGB values
        """
        zoom = self.document.dpi / 72.0  # PDF standard is 72 DPI
        mat = pymupdf.Matrix(zoom, zoom)
        pix = self.page.get_pixmap(matrix=mat, colorspace=pymupdf.csRGB, alpha=False)

        img = np.frombuffer(pix.samples, dtype=np.uint8).reshape(
            pix.height, pix.width, 3
        )
        return img.copy()

    def _encode(self, format: str, **params) -> bytes:
        buf = io.BytesIO()
        Image.fromarray(self.page_to_image()).save(buf, format=format, **params)
        return buf.getvalue()

    def to_jpeg(self, quality: float = 0.8) -> bytes:
        """
        Convert the page to a JPEG image.

        Args:
            quality: Image quality between 0.0 and 1.0

        Returns:
            JPEG encoded bytes
        """
        if not 0.0 <= quality <= 1.0:
            raise ValueError(f"JPEG quality must be between 0.0 and 1.0, got {quality}")
        return self._encode("JPEG", quality=max(1, round(quality * 100)))

    def to_png(self) -> bytes:
        """Convert the page to a PNG image."""
        return self._encode("PNG")

    def ocr(self, langs: list[str], config: str = "--psm 3 --oem 3") -> str:
        """
        Recognize the text from the rendered image of this page.

        Args:
            langs: Tesseract language codes used for recognition
            config: Tesseract configuration string

        Returns:
            The recognized text

        Raises:
            RuntimeError: If Tesseract is not installed
        """
        from .ocr.tesseract import is_tesseract_available, ocr_images

        if not is_tesseract_available():
            raise RuntimeError("Tesseract is not installed (install tesseract-ocr)")
        return ocr_images([self.to_jpeg()], langs, config=config)[0]

    def close(self) -> bool:
        """Release the loaded page. Returns True if a page was released."""
        released = self._page is not None
        self._page = None
        return released


class PDFDocument:
    """Handles PDF loading and per-page access."""

    def __init__(self, path: str | Path, dpi: int = 72):
        """
        Initialize PDF document.

        Args:
            path: Path to PDF file
            dpi: Resolution for rendering pages to images (default 72)
        """
        self.path = Path(path)
        self.dpi = dpi
        self._doc = pymupdf.open(str(self.path))

    def __len__(self) -> int:
        return len(self._doc)

    def __enter__(self) -> "PDFDocument":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        """Close the PDF document."""
        if self._doc:
            self._doc.close()

    def load_page(self, page_num: int) -> pymupdf.Page:
        return self._doc[page_num]

    def get_page_size(self, page_num: int) -> tuple[float, float]:
        """
        Get page dimensions in PDF points.

        Returns:
            Tuple of (width, height) in points
        """
        rect = self._doc[page_num].rect
        return rect.width, rect.height

    def page(self, page_num: int) -> PageData:
        """
        Get a single page.

        Raises:
            IndexError: If page_num is out of range
        """
        if not 0 <= page_num < len(self):
            raise IndexError(f"Page {page_num} out of range (document has {len(self)} pages)")
        return PageData(self, page_num)

    def pages(self) -> Iterator[PageData]:
        """Iterate over all pages."""
        for i in range(len(self)):
            yield PageData(self, i)

    def to_text(
        self,
        sort: bool | str | SortMode | None = False,
        columns: Optional[int] = None,
        column_divider: Optional[str] = None,
        fuzzy: Optional[float] = None,
        page_numbers: Optional[list[int]] = None,
    ) -> DocumentText:
        """
        Reconstruct the text of every page; see PageData.to_text.

        Args:
            page_numbers: Restrict extraction to these pages (0-indexed)

        Raises:
            IndexError: If a requested page is out of range
        """
        config = ReconstructionConfig.from_options(sort, columns, column_divider, fuzzy)
        result = DocumentText(filename=self.path.name)

        if page_numbers is None:
            pages = list(self.pages())
        else:
            pages = [self.page(n) for n in page_numbers]

        for page in pages:
            width, height = self.get_page_size(page.page_num)
            result.pages.append(PageText(
                page_number=page.page_num,
                text=page.reconstruct(config),
                width=width,
                height=height,
            ))
            page.close()

        return result


def load_pdf(path: str | Path, dpi: int = 72) -> PDFDocument:
    """
    Load a PDF document.

    Args:
        path: Path to PDF file
        dpi: Resolution for rendering (default 72)

    Returns:
        PDFDocument instance
    """
    return PDFDocument(path, dpi)
