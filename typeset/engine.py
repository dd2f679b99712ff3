"""
Layout orchestrator: text stream -> line breaker -> paginator -> pages.
"""

import io
import logging
import re
from typing import Iterable, Iterator

from .font_metrics import FontMetrics
from .line_breaker import break_line
from .models import Document, LayoutConfig, Page
from .paginator import Paginator

logger = logging.getLogger(__name__)

# Same terminators as a buffered line reader; form feed is not one of them
_LINE_TERMINATOR = re.compile(r"\r\n|\r|\n")


def read_lines(stream: Iterable[str]) -> Iterator[str]:
    """
    Yield the lines of *stream* without their terminators.

    ``\\r\\n``, ``\\r`` and ``\\n`` all end a line.  Unlike
    :meth:`str.splitlines`, form feeds stay inside the line so they can act
    as page-break markers.

    Chunks may end anywhere: text after the last terminator is carried
    over to the next chunk, and a trailing ``\\r`` is held back until the
    next chunk shows whether a ``\\n`` follows it.
    """
    pending = ""
    for chunk in stream:
        pending += chunk
        held_cr = pending.endswith("\r")
        if held_cr:
            pending = pending[:-1]
        parts = _LINE_TERMINATOR.split(pending)
        pending = parts.pop()
        yield from parts
        if held_cr:
            pending += "\r"

    if pending:
        # Unterminated last line, or one ended by a lone "\r"
        yield pending[:-1] if pending.endswith("\r") else pending


class LayoutEngine:
    """
    Lays out a plain-text stream into pages.

    One engine can run any number of layouts; each run owns its own
    paginator, so no state leaks between documents.

    Usage::

        engine = LayoutEngine(config, font)
        with open("notes.txt", encoding="utf-8") as f:
            document = engine.layout(f)
    """

    def __init__(self, config: LayoutConfig, font: FontMetrics):
        self.config = config
        self.font = font
        self.line_advance = config.line_advance(font)
        self.text_is_empty = True
        self.lines_read = 0

    def iter_pages(self, stream: Iterable[str]) -> Iterator[Page]:
        """
        Yield finished pages while reading *stream*.

        Errors raised by the stream propagate unchanged and end the run.
        """
        cfg = self.config
        paginator = Paginator(cfg, self.line_advance)
        self.text_is_empty = True
        self.lines_read = 0

        logger.debug(
            "Layout: %.0fx%.0f pt page, margin %.0f, %s %.1fpt, advance %.2f",
            cfg.effective_width,
            cfg.effective_height,
            cfg.margin,
            self.font.name,
            cfg.font_size,
            self.line_advance,
        )

        for line in read_lines(stream):
            self.text_is_empty = False
            self.lines_read += 1
            for fragment in break_line(
                line, cfg.usable_width, self.font, cfg.font_size
            ):
                yield from paginator.add(fragment)

        if self.text_is_empty:
            logger.debug("Input text is empty")
        yield from paginator.finish()

    def layout(self, stream: Iterable[str]) -> Document:
        """Lay out *stream* completely and return the :class:`Document`."""
        return Document(pages=list(self.iter_pages(stream)))

    def layout_text(self, text: str) -> Document:
        """Convenience wrapper for in-memory text."""
        return self.layout(io.StringIO(text, newline=""))

    def __repr__(self) -> str:
        return (
            f"LayoutEngine(font={self.font.name}, size={self.config.font_size}, "
            f"page={self.config.effective_width:.0f}x{self.config.effective_height:.0f})"
        )
