"""Shared fixtures: small PDFs generated with PyMuPDF."""

import pymupdf
import pytest

from pagetext import config as config_module


@pytest.fixture(autouse=True)
def reset_global_config(monkeypatch):
    """Keep a config loaded by one test from leaking into the next."""
    monkeypatch.setattr(config_module, "_config", None)


@pytest.fixture
def two_column_pdf(tmp_path):
    """
    Single letter-size page with two columns of two lines each.

    Text is written in scrambled order so the content stream order differs
    from the reading order:

        Left top        Right top
        Left bottom     Right bottom
    """
    path = tmp_path / "two_column.pdf"
    doc = pymupdf.open()
    page = doc.new_page(width=612, height=792)

    for text, x, y in [
        ("Right bottom", 350, 150),
        ("Left top", 50, 100),
        ("Left bottom", 50, 150),
        ("Right top", 350, 100),
    ]:
        page.insert_text(pymupdf.Point(x, y), text, fontsize=12, fontname="helv")

    doc.save(str(path))
    doc.close()
    return path


@pytest.fixture
def two_page_pdf(tmp_path):
    """Two pages with one line of text each."""
    path = tmp_path / "two_page.pdf"
    doc = pymupdf.open()
    for text in ["First page", "Second page"]:
        page = doc.new_page(width=612, height=792)
        page.insert_text(pymupdf.Point(72, 72), text, fontsize=12, fontname="helv")
    doc.save(str(path))
    doc.close()
    return path
