"""
PDF rendering backend for laid-out pages.

Turns :class:`typeset.Page` records into PDF pages with PyMuPDF and can
render the result back to PIL images for previews.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import fitz
from PIL import Image

from typeset import Page

from .fonts import LoadedFont

logger = logging.getLogger(__name__)


class PDFWriter:
    """
    Stateful writer that keeps one ``fitz.Document`` open while pages are
    appended, so pages can be written as soon as the layout completes them.

    The layout core uses PDF user space (origin bottom-left); PyMuPDF
    places text with a top-left origin, so baselines are flipped here.
    """

    def __init__(self, font: LoadedFont, font_size: float):
        self.font = font
        self.font_size = font_size
        self.doc: Optional[fitz.Document] = fitz.open()

    # -- writing ------------------------------------------------------------

    def add_page(self, page: Page) -> fitz.Page:
        """Append *page* and draw every placed fragment on it."""
        doc = self._require_doc()
        pdf_page = doc.new_page(width=page.width, height=page.height)

        for placement in page.placements:
            text = placement.text
            if not text.strip():
                continue
            pdf_page.insert_text(
                fitz.Point(placement.x, page.height - placement.y),
                text,
                fontsize=self.font_size,
                fontname=self.font.fontname,
                fontfile=self.font.fontfile,
            )

        logger.debug("Wrote page %d (%d fragments)", page.number, len(page))
        return pdf_page

    def save(self, output_path: Union[str, Path]) -> None:
        """Write the document to *output_path*."""
        doc = self._require_doc()
        doc.save(str(output_path), garbage=3, deflate=True)
        logger.debug("Saved %d pages to %s", doc.page_count, output_path)

    def tobytes(self) -> bytes:
        """Return the serialised PDF."""
        return self._require_doc().tobytes(garbage=3, deflate=True)

    # -- inspection ---------------------------------------------------------

    @property
    def page_count(self) -> int:
        return self.doc.page_count if self.doc else 0

    def page_text(self, page_index: int) -> str:
        """Extract the plain text of *page_index* from the written PDF."""
        return self._require_doc().load_page(page_index).get_text()

    def render_page(self, page_index: int, scale: float = 1.5) -> Image.Image:
        """Render *page_index* to a PIL RGB image."""
        page = self._require_doc().load_page(page_index)
        mat = fitz.Matrix(scale, scale)
        pix = page.get_pixmap(matrix=mat, alpha=False)
        return Image.frombytes("RGB", [pix.width, pix.height], pix.samples)

    # -- lifecycle ----------------------------------------------------------

    def _require_doc(self) -> fitz.Document:
        if self.doc is None:
            raise RuntimeError("PDF writer is closed")
        return self.doc

    def close(self):
        if self.doc:
            self.doc.close()
            self.doc = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def __repr__(self):
        return f"PDFWriter(font='{self.font.name}', pages={self.page_count})"
