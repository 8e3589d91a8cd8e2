"""Tests for text and JSON output writers."""

import io
import json

import pytest

from pagetext.models import DocumentText, PageText
from pagetext.output import format_output, write_json, write_text


@pytest.fixture
def document():
    return DocumentText(
        filename="sample.pdf",
        pages=[
            PageText(page_number=0, text="Title\nBody", width=612, height=792),
            PageText(page_number=1, text="Über", width=612, height=792),
        ],
    )


class TestWriters:

    def test_write_text_stream(self, document):
        buf = io.StringIO()
        write_text(document, buf)
        assert buf.getvalue() == "Title\nBody\fÜber\n"

    def test_write_text_path(self, document, tmp_path):
        path = tmp_path / "out.txt"
        write_text(document, path)
        assert path.read_text(encoding="utf-8") == "Title\nBody\fÜber\n"

    def test_write_json(self, document, tmp_path):
        path = tmp_path / "out.json"
        write_json(document, path)
        data = json.loads(path.read_text(encoding="utf-8"))

        assert data["filename"] == "sample.pdf"
        assert [p["page_number"] for p in data["pages"]] == [0, 1]
        assert data["pages"][1]["text"] == "Über"
        assert data["pages"][0]["width"] == 612

    def test_format_output_dispatch(self, document):
        buf = io.StringIO()
        format_output(document, buf, format="json")
        assert json.loads(buf.getvalue())["pages"][0]["text"] == "Title\nBody"

    def test_format_output_unknown(self, document):
        with pytest.raises(ValueError, match="Unknown format"):
            format_output(document, io.StringIO(), format="csv")
