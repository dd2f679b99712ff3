"""
Named page sizes accepted by the converter.
"""

from typing import Tuple

import fitz

# Closed vocabulary; anything else is rejected
PAGE_SIZES: Tuple[str, ...] = (
    "Letter",
    "Legal",
    "A0",
    "A1",
    "A2",
    "A3",
    "A4",
    "A5",
    "A6",
)

_BY_KEY = {name.lower(): name for name in PAGE_SIZES}


def canonical_page_size(name: str) -> str:
    """
    Return the canonical spelling of a page-size name.

    Raises:
        ValueError: If *name* is not one of :data:`PAGE_SIZES`.
    """
    try:
        return _BY_KEY[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown page size '{name}'. Choose from: {', '.join(PAGE_SIZES)}"
        ) from None


def resolve_page_size(name: str) -> Tuple[float, float]:
    """
    Resolve a case-insensitive page-size name to portrait ``(width, height)``.

    Dimensions are in PDF points (1/72 inch) as reported by
    :func:`fitz.paper_size`.

    Raises:
        ValueError: If *name* is not one of :data:`PAGE_SIZES`.
    """
    key = canonical_page_size(name).lower()
    width, height = fitz.paper_size(key)
    return float(width), float(height)
