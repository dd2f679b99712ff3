"""
Abstract font-metrics capability consumed by the layout core.

The core never loads or parses fonts itself; the conversion layer
provides a concrete implementation backed by PyMuPDF.
"""

from abc import ABC, abstractmethod


class FontMetrics(ABC):
    """
    Horizontal and vertical measurements for a single font.

    Implementations must be deterministic for a fixed ``(text, font_size)``
    and free of side effects, so the line breaker may query the same
    string repeatedly.
    """

    @abstractmethod
    def width(self, text: str, font_size: float) -> float:
        """
        Horizontal advance of *text* set at *font_size*.

        Returned in points, the same unit system as the page geometry.
        """

    @abstractmethod
    def line_advance(self, font_size: float) -> float:
        """
        Height of the font bounding box at *font_size*.

        The layout configuration scales this by its line-height factor to
        obtain the baseline-to-baseline distance.
        """

    @property
    def name(self) -> str:
        """Human-readable font identifier."""
        return type(self).__name__
