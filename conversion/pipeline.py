"""
Conversion pipeline orchestrator: text file -> layout -> PDF.

Coordinates the full conversion workflow:

1. **Configuration**: resolve the page size, orientation, and font into
   a :class:`~typeset.LayoutConfig` and a PyMuPDF-backed font.
2. **Layout**: stream the text through the line breaker and paginator.
3. **Rendering**: draw each page into a PDF as soon as it is complete,
   optionally saving PNG previews.
4. **Export**: save the PDF.

Usage::

    from conversion.pipeline import ConversionConfig, TextToPDFConverter

    config = ConversionConfig(page_size="A4", font_size=11)
    converter = TextToPDFConverter(config)
    result = converter.convert("notes.txt", "notes.pdf")
    print(result.summary())
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

from tqdm import tqdm

from typeset import Document, LayoutConfig, LayoutEngine
from typeset.models import DEFAULT_MARGIN

from .fonts import FitzFontMetrics, LoadedFont, load_font
from .page_sizes import resolve_page_size
from .pdf_writer import PDFWriter

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE: float = 10


# ------------------------------------------------------------------
# Configuration
# ------------------------------------------------------------------


@dataclass
class ConversionConfig:
    """
    All tuneable parameters for the conversion pipeline.

    Attributes:
        font_size:     Point size of the document font.
        page_size:     One of :data:`conversion.page_sizes.PAGE_SIZES`.
        landscape:     Rotate pages to landscape orientation.
        standard_font: Standard PDF font name (``None`` for Helvetica).
        ttf_path:      TrueType font to embed instead of a standard font.
        margin:        Margin on every side, in points.
        encoding:      Encoding of the input text file.
        preview_dir:   Save a PNG of every page here (``None`` to skip).
        preview_scale: Resolution multiplier for previews.
        disable_tqdm:  Suppress progress bars.
    """

    font_size: float = DEFAULT_FONT_SIZE
    page_size: str = "Letter"
    landscape: bool = False
    standard_font: Optional[str] = None
    ttf_path: Optional[str] = None
    margin: float = DEFAULT_MARGIN
    encoding: str = "utf-8"

    preview_dir: Optional[str] = None
    preview_scale: float = 1.0

    disable_tqdm: bool = False

    def layout_config(self) -> LayoutConfig:
        """Resolve the page geometry into a :class:`LayoutConfig`."""
        width, height = resolve_page_size(self.page_size)
        return LayoutConfig(
            font_size=self.font_size,
            page_width=width,
            page_height=height,
            margin=self.margin,
            landscape=self.landscape,
        )


# ------------------------------------------------------------------
# Result
# ------------------------------------------------------------------


@dataclass
class ConversionResult:
    """Summary returned after a conversion completes."""

    output_path: str = ""
    input_lines: int = 0
    pages: int = 0
    fragments: int = 0
    forced_breaks: int = 0
    empty_input: bool = False
    file_size_kb: float = 0.0
    elapsed_seconds: float = 0.0

    def summary(self) -> str:
        """Format a human-readable summary of the conversion run."""
        return (
            f"{'=' * 60}\n"
            f"CONVERSION COMPLETE\n"
            f"{'=' * 60}\n"
            f"  Output:       {self.output_path}\n"
            f"  Input lines:  {self.input_lines}"
            f"{' (empty input)' if self.empty_input else ''}\n"
            f"  Pages:        {self.pages}\n"
            f"  Lines drawn:  {self.fragments}\n"
            f"  Page breaks:  {self.forced_breaks} forced\n"
            f"  File size:    {self.file_size_kb:.1f} KB\n"
            f"  Wall time:    {self.elapsed_seconds:.2f}s\n"
            f"{'=' * 60}"
        )


# ------------------------------------------------------------------
# Pipeline
# ------------------------------------------------------------------


class TextToPDFConverter:
    """
    End-to-end plain-text to PDF converter.

    The font is loaded lazily on first use and reused across conversions.
    """

    def __init__(self, config: Optional[ConversionConfig] = None):
        self.config = config or ConversionConfig()
        self.layout_config = self.config.layout_config()
        self._font: Optional[LoadedFont] = None
        self._metrics: Optional[FitzFontMetrics] = None

    # ------------------------------------------------------------------
    # Lazy component initialisation
    # ------------------------------------------------------------------

    def _ensure_font(self) -> FitzFontMetrics:
        if self._metrics is None:
            self._font = load_font(self.config.standard_font, self.config.ttf_path)
            self._metrics = FitzFontMetrics(self._font)
            logger.debug("Font ready: %s", self._metrics)
        return self._metrics

    def engine(self) -> LayoutEngine:
        """Create a layout engine for the configured page and font."""
        return LayoutEngine(self.layout_config, self._ensure_font())

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def layout(self, text: Iterable[str]) -> Document:
        """Lay out *text* without producing a PDF."""
        return self.engine().layout(text)

    def create_pdf_from_text(
        self,
        text: Iterable[str],
        result: Optional[ConversionResult] = None,
    ) -> PDFWriter:
        """
        Lay out *text* and draw it into a new PDF.

        Pages are written one at a time as the layout completes them.  If
        reading *text* fails, the partially built PDF is closed and the
        error re-raised.

        Args:
            text:   Iterable of text lines, e.g. an open text file.
            result: Optional result object to fill with layout metrics.

        Returns:
            An open :class:`PDFWriter`; the caller saves and closes it.
        """
        cfg = self.config
        engine = self.engine()
        writer = PDFWriter(self._font, cfg.font_size)

        try:
            pbar = tqdm(
                engine.iter_pages(text),
                desc="Laying out",
                unit="page",
                disable=cfg.disable_tqdm,
            )
            for page in pbar:
                writer.add_page(page)
                if result is not None:
                    result.fragments += len(page)
                    result.forced_breaks += sum(
                        1 for p in page.placements if p.fragment.forces_page_break
                    )
                if cfg.preview_dir:
                    self._save_preview(writer, page.number)
        except Exception:
            writer.close()
            raise

        if result is not None:
            result.pages = writer.page_count
            result.input_lines = engine.lines_read
            result.empty_input = engine.text_is_empty
        return writer

    def convert(
        self,
        input_path: Union[str, Path],
        output_path: Union[str, Path],
    ) -> ConversionResult:
        """
        Convert a text file to a PDF file.

        Args:
            input_path:  Text file to read.
            output_path: Destination PDF.

        Returns:
            :class:`ConversionResult` with layout and output metrics.

        Raises:
            OSError: If the input cannot be read or the output written.
        """
        t0 = time.perf_counter()
        cfg = self.config
        result = ConversionResult(output_path=str(output_path))

        logger.info("Converting %s", input_path)
        with open(input_path, "r", encoding=cfg.encoding, newline="") as f:
            writer = self.create_pdf_from_text(f, result)

        with writer:
            writer.save(output_path)

        result.file_size_kb = Path(output_path).stat().st_size / 1024
        result.elapsed_seconds = time.perf_counter() - t0
        logger.info(
            "Wrote %d pages (%d lines) to %s",
            result.pages,
            result.fragments,
            output_path,
        )
        logger.debug("\n%s", result.summary())
        return result

    # ------------------------------------------------------------------
    # Previews
    # ------------------------------------------------------------------

    def _save_preview(self, writer: PDFWriter, page_number: int) -> None:
        out_dir = Path(self.config.preview_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        img = writer.render_page(page_number - 1, scale=self.config.preview_scale)
        out_path = out_dir / f"page_{page_number:04d}.png"
        img.save(str(out_path))
        logger.debug("Saved preview %s", out_path)
