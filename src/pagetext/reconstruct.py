"""
Reading-order text reconstruction from positioned text fragments.

A PDF page exposes its text as an unordered set of fragments, each with a
string and an affine placement. This module turns them into linear text.

Algorithm Overview:
1. Compute column breaks at equal fractions of the largest x offset
2. Inject a divider fragment just left of every break (optional)
3. Sort fragments by column, then y (top of page first for ASC), then x,
   treating y values within the fuzziness window as equal
4. Walk the sorted fragments, starting a new line whenever y changes by more
   than the fuzziness window

The comparator is not transitive when fuzziness > 0: two fragments can each be
within tolerance of a third but not of each other. The sort still terminates
and the result is an accepted approximation of reading order.
"""

import logging
from functools import cmp_to_key
from typing import Callable, Optional, Sequence

from .models import ReconstructionConfig, SortMode, TextFragment

logger = logging.getLogger(__name__)

Comparator = Callable[[TextFragment, TextFragment], int]


def compute_column_breaks(fragments: Sequence[TextFragment], column_count: int) -> list[float]:
    """
    Compute the x positions separating columns.

    Args:
        fragments: Real (non-divider) fragments of the page
        column_count: Number of columns

    Returns:
        Increasing list of column_count - 1 boundaries, empty for a single column
    """
    if column_count <= 1 or not fragments:
        return []
    max_x = max(f.offset_x for f in fragments)
    return [c * max_x / column_count for c in range(1, column_count)]


def divider_fragments(breaks: Sequence[float], divider: str) -> list[TextFragment]:
    """Create one divider fragment one unit left of each column break, at y = 0."""
    return [TextFragment(divider, (0, 0, 0, 1, b - 1, 0)) for b in breaks]


def augment_fragments(
    fragments: Sequence[TextFragment],
    breaks: Sequence[float],
    divider: Optional[str],
) -> list[TextFragment]:
    """Return a new list of the real fragments followed by any divider fragments."""
    augmented = list(fragments)
    if divider is not None:
        augmented.extend(divider_fragments(breaks, divider))
    return augmented


def column_index(offset_x: float, breaks: Sequence[float]) -> int:
    """
    Index of the column containing offset_x.

    This is the index of the first break strictly greater than offset_x.
    Fragments right of every break belong to the last column (len(breaks)).
    """
    for i, b in enumerate(breaks):
        if b > offset_x:
            return i
    return len(breaks)


def _is_fuzzy(y1: float, y2: float, fuzziness: float) -> bool:
    return fuzziness > 0 and abs(y1 - y2) <= fuzziness


def make_comparator(breaks: Sequence[float], sort_mode: SortMode, fuzziness: float = 0.0) -> Comparator:
    """
    Build a cmp-style comparator for the given direction.

    ASC orders columns left to right, lines top to bottom (descending y, since
    PDF y grows upward) and fragments left to right within a line. DESC flips
    each of the three comparisons on its own. Y values within fuzziness of
    each other are never reordered by y.
    """
    descending = sort_mode == SortMode.DESC

    def compare(f1: TextFragment, f2: TextFragment) -> int:
        # Column
        c1 = column_index(f1.offset_x, breaks)
        c2 = column_index(f2.offset_x, breaks)
        if c1 != c2:
            return (c2 - c1) if descending else (c1 - c2)

        # Line
        y1, y2 = f1.offset_y, f2.offset_y
        if not _is_fuzzy(y1, y2, fuzziness):
            if y1 < y2:
                return -1 if descending else 1
            if y1 > y2:
                return 1 if descending else -1

        # Position within the line
        x1, x2 = f1.offset_x, f2.offset_x
        if x1 < x2:
            return 1 if descending else -1
        if x1 > x2:
            return -1 if descending else 1
        return 0

    return compare


def order_fragments(
    fragments: Sequence[TextFragment],
    breaks: Sequence[float],
    config: ReconstructionConfig,
) -> list[TextFragment]:
    """Sort fragments into reading order; NONE keeps the input order."""
    if config.sort_mode == SortMode.NONE:
        return list(fragments)
    compare = make_comparator(breaks, config.sort_mode, config.fuzziness)
    return sorted(fragments, key=cmp_to_key(compare))


def assemble_lines(fragments: Sequence[TextFragment], fuzziness: float = 0.0) -> str:
    """
    Join ordered fragments into text, inserting line breaks between lines.

    A fragment continues the current line when its y equals the previous
    fragment's y or lies within fuzziness of it. Fuzzy (unequal) matches are
    padded with a space on both sides since nearly aligned runs usually lack
    one. The reference y follows every fragment, so a long fuzzy run can drift.
    """
    parts: list[str] = []
    last_line_y: Optional[float] = None

    for fragment in fragments:
        y = fragment.offset_y
        is_fuzzy = last_line_y is not None and _is_fuzzy(last_line_y, y, fuzziness)

        if last_line_y is None or last_line_y == y or is_fuzzy:
            if is_fuzzy and last_line_y != y:
                parts.append(" " + fragment.content + " ")
            else:
                parts.append(fragment.content)
        else:
            parts.append("\n" + fragment.content)

        last_line_y = y

    return "".join(parts)


def reconstruct(fragments: Sequence[TextFragment], config: ReconstructionConfig) -> str:
    """
    Reconstruct reading-order text from positioned fragments.

    Args:
        fragments: Fragments of one page, in content stream order
        config: Sorting, column and fuzziness settings

    Returns:
        The reconstructed text, empty string for no fragments
    """
    if not fragments:
        return ""

    breaks: list[float] = []
    working = list(fragments)

    if config.sort_mode != SortMode.NONE:
        # Breaks come from the real fragments only; dividers must not move them
        breaks = compute_column_breaks(fragments, config.column_count)
        working = augment_fragments(fragments, breaks, config.column_divider)
        if breaks:
            logger.debug(f"Column breaks at {breaks} for {len(fragments)} fragments")

    ordered = order_fragments(working, breaks, config)
    return assemble_lines(ordered, config.fuzziness)


def extract_text(
    fragments: Sequence[TextFragment],
    sort_mode: bool | str | SortMode | None = SortMode.NONE,
    column_count: Optional[int] = 1,
    column_divider: Optional[str] = None,
    fuzziness: Optional[float] = 0.0,
) -> str:
    """Convenience wrapper around reconstruct() taking loosely typed options."""
    config = ReconstructionConfig.from_options(
        sort=sort_mode,
        columns=column_count,
        column_divider=column_divider,
        fuzzy=fuzziness,
    )
    return reconstruct(fragments, config)
