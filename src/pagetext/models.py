"""Data models for Pagetext."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class SortMode(Enum):
    """Reading-order direction used when sorting fragments."""
    NONE = "none"
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class TextFragment:
    """
    One positioned run of text from a page's content stream.

    The transform is [scale_x, shear_x, shear_y, scale_y, offset_x, offset_y]
    in PDF user space (origin bottom-left, y grows upward).
    """

    content: str
    transform: tuple[float, float, float, float, float, float]

    @property
    def offset_x(self) -> float:
        return self.transform[4]

    @property
    def offset_y(self) -> float:
        return self.transform[5]


@dataclass(frozen=True)
class ReconstructionConfig:
    """Parameters for one text reconstruction."""

    sort_mode: SortMode = SortMode.NONE
    column_count: int = 1
    column_divider: Optional[str] = None
    fuzziness: float = 0.0

    @classmethod
    def from_options(
        cls,
        sort: bool | str | SortMode | None = False,
        columns: Optional[int] = None,
        column_divider: Optional[str] = None,
        fuzzy: Optional[float] = None,
    ) -> "ReconstructionConfig":
        """
        Build a config from loosely typed caller options.

        Args:
            sort: True for ascending, False/None for no sorting, or a SortMode
                or its name ("asc", "desc", "none")
            columns: Number of columns, None or < 1 means a single column
            column_divider: String emitted at each column break
            fuzzy: Vertical tolerance for same-line detection

        Returns:
            Normalized ReconstructionConfig

        Raises:
            ValueError: If sort is not a recognized value
        """
        return cls(
            sort_mode=parse_sort_mode(sort),
            column_count=columns if columns is not None and columns >= 1 else 1,
            column_divider=column_divider,
            fuzziness=fuzzy if fuzzy is not None else 0.0,
        )


def parse_sort_mode(sort: bool | str | SortMode | None) -> SortMode:
    """Normalize a boolean, string or SortMode to a SortMode."""
    if isinstance(sort, SortMode):
        return sort
    if sort is None or sort is False:
        return SortMode.NONE
    if sort is True:
        return SortMode.ASC
    if isinstance(sort, str):
        try:
            return SortMode(sort.strip().lower())
        except ValueError:
            pass
    raise ValueError(f"Invalid sort option: {sort!r} (expected asc, desc or none)")


@dataclass
class PageText:
    """Reconstructed text of a single page."""

    page_number: int
    text: str
    width: float = 0.0  # Page width in points
    height: float = 0.0  # Page height in points


@dataclass
class DocumentText:
    """Reconstructed text of a whole document."""

    filename: str
    pages: list[PageText] = field(default_factory=list)

    @property
    def text(self) -> str:
        """All page texts joined with form feeds."""
        return "\f".join(page.text for page in self.pages)
