"""
Font resolution and PyMuPDF-backed font metrics.

Fonts are either one of the 14 standard PDF fonts (no embedding needed)
or a TrueType file that is embedded into the output.
"""

import functools
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

import fitz

from typeset import FontMetrics

logger = logging.getLogger(__name__)

DEFAULT_FONT = "Helvetica"

# Reference name for an embedded TrueType font inside each page
EMBEDDED_FONT_NAME = "F0"

# Standard PDF base-font name -> PyMuPDF Base-14 code
STANDARD_FONTS: Dict[str, str] = {
    "Times-Roman": "tiro",
    "Times-Bold": "tibo",
    "Times-Italic": "tiit",
    "Times-BoldItalic": "tibi",
    "Helvetica": "helv",
    "Helvetica-Bold": "hebo",
    "Helvetica-Oblique": "heit",
    "Helvetica-BoldOblique": "hebi",
    "Courier": "cour",
    "Courier-Bold": "cobo",
    "Courier-Oblique": "coit",
    "Courier-BoldOblique": "cobi",
    "Symbol": "symb",
    "ZapfDingbats": "zadb",
}


@dataclass
class LoadedFont:
    """
    A font ready for measuring and drawing.

    Attributes:
        font:     PyMuPDF font object used for metrics.
        name:     Display name (base-font name or TTF file stem).
        fontname: Name passed to :meth:`fitz.Page.insert_text`.
        fontfile: TrueType file to embed, ``None`` for standard fonts.
    """

    font: fitz.Font
    name: str
    fontname: str
    fontfile: Optional[str] = None

    @property
    def is_embedded(self) -> bool:
        return self.fontfile is not None


def load_font(
    standard_font: Optional[str] = None,
    ttf_path: Optional[Union[str, Path]] = None,
) -> LoadedFont:
    """
    Resolve the document font.

    Args:
        standard_font: One of :data:`STANDARD_FONTS`. Unknown names fall
                       back to Helvetica with a warning.
        ttf_path:      TrueType font file to embed.

    Returns:
        :class:`LoadedFont` (Helvetica when neither argument is given).

    Raises:
        ValueError:        If both arguments are given.
        FileNotFoundError: If *ttf_path* does not exist.
        RuntimeError:      If PyMuPDF cannot read the font file.
    """
    if standard_font and ttf_path:
        raise ValueError("Specify either a standard font or a TTF file, not both")

    if ttf_path:
        path = Path(ttf_path)
        if not path.is_file():
            raise FileNotFoundError(f"Font file not found: {path}")
        try:
            font = fitz.Font(fontfile=str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to load font '{path}': {e}") from e
        logger.debug("Loaded TrueType font %s (%s)", path, font.name)
        return LoadedFont(
            font=font,
            name=path.stem,
            fontname=EMBEDDED_FONT_NAME,
            fontfile=str(path),
        )

    name = DEFAULT_FONT
    if standard_font:
        if standard_font in STANDARD_FONTS:
            name = standard_font
        else:
            logger.warning(
                "Unknown standard font '%s', using %s", standard_font, DEFAULT_FONT
            )

    code = STANDARD_FONTS[name]
    return LoadedFont(font=fitz.Font(fontname=code), name=name, fontname=code)


class FitzFontMetrics(FontMetrics):
    """
    :class:`FontMetrics` backed by :class:`fitz.Font`.

    Widths are memoised per ``(text, size)``; the line breaker measures the
    same growing prefixes repeatedly.
    """

    def __init__(self, loaded: LoadedFont, cache_size: int = 4096):
        self.loaded = loaded
        self._font = loaded.font
        self._cached_width = functools.lru_cache(maxsize=cache_size)(self._measure)

    @property
    def name(self) -> str:
        return self.loaded.name

    def width(self, text: str, font_size: float) -> float:
        return self._cached_width(text, font_size)

    def line_advance(self, font_size: float) -> float:
        # Recent PyMuPDF returns a bare mupdf rect here, without ``height``
        bbox = self._font.bbox
        height = bbox.y1 - bbox.y0
        if height <= 0:
            # Some fonts ship an empty bbox; fall back to the vertical metrics
            height = self._font.ascender - self._font.descender
        return height * font_size

    def _measure(self, text: str, font_size: float) -> float:
        return self._font.text_length(text, fontsize=font_size)

    def cache_info(self):
        """Width cache statistics (see :func:`functools.lru_cache`)."""
        return self._cached_width.cache_info()

    def __repr__(self) -> str:
        return f"FitzFontMetrics('{self.name}')"
