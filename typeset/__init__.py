"""
Plain-text layout core.
Greedy word wrap and pagination only; no font loading, no PDF output.
"""

from .engine import LayoutEngine, read_lines
from .errors import ConfigurationError, LayoutError, LayoutInvariantError
from .font_metrics import FontMetrics
from .line_breaker import break_line, split_words
from .models import (
    FORM_FEED,
    Document,
    Fragment,
    LayoutConfig,
    Page,
    PlacedFragment,
)
from .paginator import Paginator, iter_pages, paginate

__all__ = [
    "LayoutEngine",
    "LayoutConfig",
    "FontMetrics",
    "Fragment",
    "PlacedFragment",
    "Page",
    "Document",
    "Paginator",
    "FORM_FEED",
    "break_line",
    "split_words",
    "paginate",
    "iter_pages",
    "read_lines",
    "LayoutError",
    "ConfigurationError",
    "LayoutInvariantError",
]
