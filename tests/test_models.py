"""Tests for data models and option normalization."""

import pytest

from pagetext.models import (
    DocumentText,
    PageText,
    ReconstructionConfig,
    SortMode,
    TextFragment,
    parse_sort_mode,
)


class TestTextFragment:

    def test_offsets_from_transform(self):
        f = TextFragment("abc", (12, 0, 0, 12, 72.5, 700.25))
        assert f.offset_x == 72.5
        assert f.offset_y == 700.25

    def test_frozen(self):
        f = TextFragment("abc", (1, 0, 0, 1, 0, 0))
        with pytest.raises(AttributeError):
            f.content = "xyz"


class TestParseSortMode:

    def test_booleans(self):
        assert parse_sort_mode(True) == SortMode.ASC
        assert parse_sort_mode(False) == SortMode.NONE
        assert parse_sort_mode(None) == SortMode.NONE

    def test_strings(self):
        assert parse_sort_mode("asc") == SortMode.ASC
        assert parse_sort_mode("DESC") == SortMode.DESC
        assert parse_sort_mode(" none ") == SortMode.NONE

    def test_enum_passthrough(self):
        assert parse_sort_mode(SortMode.DESC) is SortMode.DESC

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid sort option"):
            parse_sort_mode("sideways")
        with pytest.raises(ValueError):
            parse_sort_mode(3)


class TestReconstructionConfig:

    def test_defaults(self):
        config = ReconstructionConfig()
        assert config.sort_mode == SortMode.NONE
        assert config.column_count == 1
        assert config.column_divider is None
        assert config.fuzziness == 0.0

    def test_from_options_defaults(self):
        assert ReconstructionConfig.from_options() == ReconstructionConfig()

    def test_from_options_normalizes(self):
        config = ReconstructionConfig.from_options(True, 3, " | ", 1.5)
        assert config == ReconstructionConfig(SortMode.ASC, 3, " | ", 1.5)

    def test_columns_below_one(self):
        assert ReconstructionConfig.from_options(True, 0).column_count == 1
        assert ReconstructionConfig.from_options(True, -4).column_count == 1
        assert ReconstructionConfig.from_options(True, None).column_count == 1


class TestDocumentText:

    def test_text_joins_pages_with_form_feed(self):
        doc = DocumentText("a.pdf", [PageText(0, "one"), PageText(1, "two")])
        assert doc.text == "one\ftwo"

    def test_empty_document(self):
        assert DocumentText("a.pdf").text == ""
