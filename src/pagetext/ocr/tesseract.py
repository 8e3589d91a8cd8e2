"""Tesseract OCR wrapper for page-level text recognition."""

import io
import logging
from typing import Optional

import pytesseract
from PIL import Image

logger = logging.getLogger(__name__)


def ocr_images(
    images: list[bytes],
    langs: list[str],
    config: str = "--psm 3 --oem 3",
) -> list[str]:
    """
    Recognize text in encoded page images using Tesseract OCR.

    Args:
        images: Encoded images (JPEG, PNG or any format Pillow can open)
        langs: Tesseract language codes, e.g. ["eng", "deu"]
        config: Tesseract configuration string

    Returns:
        One recognized string per image, in input order
    """
    lang = "+".join(langs) if langs else "eng"
    results = []

    for i, data in enumerate(images):
        with Image.open(io.BytesIO(data)) as image:
            text = pytesseract.image_to_string(image, lang=lang, config=config)
        logger.debug(f"OCR image {i}: {len(text)} characters ({lang})")
        results.append(text)

    return results


def is_tesseract_available() -> bool:
    """Check if Tesseract is installed and accessible."""
    try:
        pytesseract.get_tesseract_version()
        return True
    except pytesseract.TesseractNotFoundError:
        return False


def get_tesseract_version() -> Optional[str]:
    """Get Tesseract version string, or None if not available."""
    try:
        return str(pytesseract.get_tesseract_version())
    except pytesseract.TesseractNotFoundError:
        return None
