"""
Data models for the text layout core.

Coordinates follow PDF user space: points, origin at the bottom-left
corner of the page, y growing upwards.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from .errors import ConfigurationError
from .font_metrics import FontMetrics

# Page-break marker embedded in the source text (ASCII form feed)
FORM_FEED = "\f"

DEFAULT_MARGIN: float = 40.0
LINE_HEIGHT_FACTOR: float = 1.05


@dataclass(frozen=True)
class LayoutConfig:
    """
    Immutable page geometry and type size for one layout run.

    Attributes:
        font_size:          Point size of the single document font.
        page_width:         Portrait page width in points.
        page_height:        Portrait page height in points.
        margin:             Margin applied on every side, in points.
        landscape:          Rotate the page (swap width and height).
        line_height_factor: Multiplier on the font bounding-box height.
    """

    font_size: float
    page_width: float
    page_height: float
    margin: float = DEFAULT_MARGIN
    landscape: bool = False
    line_height_factor: float = LINE_HEIGHT_FACTOR

    def __post_init__(self):
        if self.font_size <= 0:
            raise ConfigurationError(f"Font size must be positive, got {self.font_size}")
        if self.page_width <= 0 or self.page_height <= 0:
            raise ConfigurationError(
                f"Page size must be positive, got {self.page_width}x{self.page_height}"
            )
        if self.margin < 0:
            raise ConfigurationError(f"Margin must not be negative, got {self.margin}")
        if self.usable_width <= 0 or self.usable_height <= 0:
            raise ConfigurationError(
                f"Margin {self.margin} leaves no drawable area on a "
                f"{self.effective_width:.0f}x{self.effective_height:.0f} page"
            )

    @property
    def effective_width(self) -> float:
        """Page width after applying the orientation."""
        return self.page_height if self.landscape else self.page_width

    @property
    def effective_height(self) -> float:
        """Page height after applying the orientation."""
        return self.page_width if self.landscape else self.page_height

    @property
    def usable_width(self) -> float:
        return self.effective_width - 2 * self.margin

    @property
    def usable_height(self) -> float:
        return self.effective_height - 2 * self.margin

    def line_advance(self, font: FontMetrics) -> float:
        """Baseline-to-baseline distance for *font* at this size."""
        return font.line_advance(self.font_size) * self.line_height_factor


@dataclass(frozen=True)
class Fragment:
    """
    One drawable line of wrapped text.

    ``words`` may contain empty tokens when the source line had runs of
    consecutive spaces.  ``forces_page_break`` is set only when the
    fragment ended exactly at a form feed.
    """

    words: Tuple[str, ...]
    forces_page_break: bool = False

    @property
    def text(self) -> str:
        """The string handed to the renderer (every word followed by a space)."""
        return "".join(word + " " for word in self.words)

    def __repr__(self) -> str:
        flag = ", FF" if self.forces_page_break else ""
        return f"Fragment({self.text!r}{flag})"


@dataclass(frozen=True)
class PlacedFragment:
    """A fragment positioned on a page (baseline origin)."""

    fragment: Fragment
    x: float
    y: float

    @property
    def text(self) -> str:
        return self.fragment.text


@dataclass(frozen=True)
class Page:
    """
    A finished page: geometry plus its fragments in drawing order.

    Pages are immutable once the paginator hands them out.
    """

    number: int
    width: float
    height: float
    placements: Tuple[PlacedFragment, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.placements

    @property
    def lines(self) -> List[str]:
        """Drawn text of every fragment on this page."""
        return [p.text for p in self.placements]

    def __len__(self) -> int:
        return len(self.placements)

    def __repr__(self) -> str:
        return (
            f"Page(number={self.number}, "
            f"size={self.width:.0f}x{self.height:.0f}, "
            f"fragments={len(self.placements)})"
        )


@dataclass
class Document:
    """Ordered sequence of pages produced by one layout run."""

    pages: List[Page] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def fragment_count(self) -> int:
        return sum(len(page) for page in self.pages)

    @property
    def lines(self) -> List[str]:
        """Drawn text of every fragment in the document, in order."""
        return [line for page in self.pages for line in page.lines]

    def __iter__(self) -> Iterator[Page]:
        return iter(self.pages)

    def __len__(self) -> int:
        return len(self.pages)

    def __getitem__(self, index: int) -> Page:
        return self.pages[index]
