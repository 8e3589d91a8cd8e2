"""Tests for the command line interface."""

import json

import pytest
from click.testing import CliRunner

from pagetext.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def broken_config(monkeypatch):
    def fail(config_path=None):
        raise ValueError("bad yaml")

    monkeypatch.setattr("pagetext.cli.get_config", fail)


class TestTextCommand:

    def test_sorted_columns(self, runner, two_column_pdf):
        result = runner.invoke(
            main, ["text", str(two_column_pdf), "--sort", "asc", "--columns", "2", "--divider", "|"]
        )

        assert result.exit_code == 0, result.output
        assert result.output == "Left top\nLeft bottom\n|\nRight top\nRight bottom\n"

    def test_json_output_file(self, runner, two_page_pdf, tmp_path):
        out = tmp_path / "out.json"
        result = runner.invoke(main, ["text", str(two_page_pdf), "-f", "json", "-o", str(out), "-p", "1"])

        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["filename"] == "two_page.pdf"
        assert [p["text"] for p in data["pages"]] == ["Second page"]

    def test_page_out_of_range(self, runner, two_page_pdf):
        result = runner.invoke(main, ["text", str(two_page_pdf), "--page", "9"])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_config_file_defaults(self, runner, two_column_pdf, tmp_path):
        config = tmp_path / "pagetext.yaml"
        config.write_text("text:\n  sort: asc\n  columns: 2\n  column_divider: '||'\n")

        result = runner.invoke(main, ["text", str(two_column_pdf), "--config", str(config)])

        assert result.exit_code == 0, result.output
        assert "\n||\n" in result.output


class TestImageCommand:

    def test_png_from_extension(self, runner, two_page_pdf, tmp_path):
        out = tmp_path / "page.png"
        result = runner.invoke(main, ["image", str(two_page_pdf), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert out.read_bytes().startswith(b"\x89PNG")

    def test_jpeg_from_extension(self, runner, two_page_pdf, tmp_path):
        out = tmp_path / "page.jpg"
        result = runner.invoke(main, ["image", str(two_page_pdf), "-o", str(out), "-q", "0.5", "-p", "1"])

        assert result.exit_code == 0, result.output
        assert out.read_bytes().startswith(b"\xff\xd8")

    def test_missing_page(self, runner, two_page_pdf, tmp_path):
        out = tmp_path / "page.png"
        result = runner.invoke(main, ["image", str(two_page_pdf), "-o", str(out), "-p", "3"])

        assert result.exit_code == 1
        assert not out.exists()

    def test_config_error_reported(self, runner, two_page_pdf, tmp_path, broken_config):
        out = tmp_path / "page.png"
        result = runner.invoke(main, ["image", str(two_page_pdf), "-o", str(out)])

        assert result.exit_code == 1
        assert "Error: bad yaml" in result.output
        assert not out.exists()


class TestOCRCommand:

    def test_missing_tesseract(self, runner, two_page_pdf, monkeypatch):
        monkeypatch.setattr("pagetext.ocr.tesseract.is_tesseract_available", lambda: False)
        result = runner.invoke(main, ["ocr", str(two_page_pdf)])

        assert result.exit_code == 1
        assert "Tesseract is not installed" in result.output

    def test_config_error_reported(self, runner, two_page_pdf, broken_config):
        result = runner.invoke(main, ["ocr", str(two_page_pdf)])

        assert result.exit_code == 1
        assert "Error: bad yaml" in result.output

    def test_check(self, runner, monkeypatch):
        monkeypatch.setattr("pagetext.ocr.tesseract.is_tesseract_available", lambda: False)
        result = runner.invoke(main, ["check"])

        assert result.exit_code == 0
        assert "Tesseract: NOT FOUND" in result.output
