"""
Text-to-PDF conversion.

Page-size and font resolution, PyMuPDF rendering backend, and the
pipeline that drives the layout core.
"""

from .fonts import STANDARD_FONTS, FitzFontMetrics, LoadedFont, load_font
from .page_sizes import PAGE_SIZES, resolve_page_size
from .pdf_writer import PDFWriter
from .pipeline import ConversionConfig, ConversionResult, TextToPDFConverter

__all__ = [
    "ConversionConfig",
    "ConversionResult",
    "TextToPDFConverter",
    "PDFWriter",
    "FitzFontMetrics",
    "LoadedFont",
    "load_font",
    "STANDARD_FONTS",
    "PAGE_SIZES",
    "resolve_page_size",
]
