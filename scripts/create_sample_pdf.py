#!/usr/bin/env python3
"""Create a two-column sample PDF with jittered baselines for trying out extraction options."""

import pymupdf


def create_sample_pdf(output_path: str = "data/input/two_column.pdf"):
    """
    Create a letter-size page with two columns of short lines.

    Every other word of the first line is written 1pt off the baseline, the
    way some PDF producers place runs. Compare:

        pagetext text data/input/two_column.pdf --sort asc --columns 2 --divider "|"
        pagetext text data/input/two_column.pdf --sort asc --columns 2 --fuzzy 1.5
    """
    doc = pymupdf.open()
    page = doc.new_page(width=612, height=792)

    columns = {
        50: ["The quick brown fox", "jumps over", "the lazy dog."],
        330: ["Pack my box with", "five dozen", "liquor jugs."],
    }

    for x, lines in columns.items():
        for i, line in enumerate(lines):
            y = 100 + i * 20
            if i == 0:
                # Place word by word with baseline jitter
                cursor = x
                for j, word in enumerate(line.split()):
                    page.insert_text(
                        pymupdf.Point(cursor, y + (j % 2)),
                        word,
                        fontsize=12,
                        fontname="helv",
                    )
                    cursor += pymupdf.get_text_length(word + " ", fontname="helv", fontsize=12)
            else:
                page.insert_text(pymupdf.Point(x, y), line, fontsize=12, fontname="helv")

    doc.save(output_path)
    doc.close()
    print(f"Created: {output_path}")


if __name__ == "__main__":
    create_sample_pdf()
