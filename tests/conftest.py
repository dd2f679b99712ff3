import sysconfig
from pathlib import Path

import fitz
import pytest

from typeset import FontMetrics, LayoutConfig

FONT_DIRS = [
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path.home() / ".fonts",
    Path.home() / ".local" / "share" / "fonts",
    Path("/Library/Fonts"),
    Path("C:/Windows/Fonts"),
    Path(sysconfig.get_paths()["purelib"]),
]


def _covers_latin1(font: fitz.Font) -> bool:
    return all(font.has_glyph(ord(c)) for c in "aé")


def _find_truetype_font():
    for root in FONT_DIRS:
        if not root.is_dir():
            continue
        for path in sorted(root.rglob("*.ttf")):
            try:
                if _covers_latin1(fitz.Font(fontfile=str(path))):
                    return path
            except Exception:
                continue
    return None


class FixedAdvanceMetrics(FontMetrics):
    """Every character advances ``char_width * font_size``; easy to reason about."""

    def __init__(self, char_width: float = 1.0, height_ratio: float = 1.0):
        self.char_width = char_width
        self.height_ratio = height_ratio
        self.calls = []

    def width(self, text: str, font_size: float) -> float:
        self.calls.append(text)
        return len(text) * self.char_width * font_size

    def line_advance(self, font_size: float) -> float:
        return self.height_ratio * font_size


@pytest.fixture
def mono():
    """Metrics where width == number of characters at font size 1."""
    return FixedAdvanceMetrics()


@pytest.fixture(scope="session")
def ttf_path(tmp_path_factory):
    """A TrueType font with Latin-1 coverage, from the system or PyMuPDF's CJK fallback."""
    path = _find_truetype_font()
    if path is not None:
        return path

    try:
        fallback = fitz.Font("cjk")
    except Exception:
        fallback = None
    if fallback is None or not _covers_latin1(fallback):
        pytest.skip("No TrueType font with Latin-1 coverage available")

    path = tmp_path_factory.mktemp("fonts") / "fallback.ttf"
    path.write_bytes(fallback.buffer)
    return path


@pytest.fixture
def small_page():
    """200x100 pt page, 10 pt margin; with a 10 pt advance it holds 10 lines."""
    return LayoutConfig(
        font_size=10,
        page_width=200,
        page_height=100,
        margin=10,
        line_height_factor=1.0,
    )
