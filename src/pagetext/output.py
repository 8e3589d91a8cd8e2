"""Output formatters for text extraction results."""

import json
from pathlib import Path
from typing import TextIO

from .models import DocumentText


def write_text(document: DocumentText, output: str | Path | TextIO) -> None:
    """Write page texts separated by form feeds, ending with a newline."""

    def write_to_file(f: TextIO) -> None:
        f.write(document.text)
        f.write("\n")

    if isinstance(output, (str, Path)):
        with open(output, "w", encoding="utf-8") as f:
            write_to_file(f)
    else:
        write_to_file(output)


def document_to_dict(document: DocumentText) -> dict:
    return {
        "filename": document.filename,
        "pages": [
            {
                "page_number": page.page_number,
                "width": page.width,
                "height": page.height,
                "text": page.text,
            }
            for page in document.pages
        ],
    }


def write_json(document: DocumentText, output: str | Path | TextIO, indent: int = 2) -> None:
    """
    Write page texts to JSON format.

    JSON structure:
    {
        "filename": "...",
        "pages": [
            {
                "page_number": 0,
                "width": 612.0,
                "height": 792.0,
                "text": "..."
            }
        ]
    }
    """
    data = document_to_dict(document)

    if isinstance(output, (str, Path)):
        with open(output, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)
    else:
        json.dump(data, output, indent=indent, ensure_ascii=False)


def format_output(document: DocumentText, output: str | Path | TextIO, format: str = "text") -> None:
    """
    Write document in specified format.

    Args:
        document: Document to write
        output: Output path or file object
        format: Output format ("text" or "json")
    """
    if format == "text":
        write_text(document, output)
    elif format == "json":
        write_json(document, output)
    else:
        raise ValueError(f"Unknown format: {format}")
