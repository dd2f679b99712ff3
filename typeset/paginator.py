"""
Vertical placement of fragments onto pages.

The paginator owns a single vertical cursor and the currently open page.
Pages are handed out as soon as they are closed, so a streaming backend
never needs more than one page in memory.
"""

import logging
from typing import Iterable, Iterator, List, Optional

from .errors import LayoutInvariantError
from .models import Document, Fragment, LayoutConfig, Page, PlacedFragment

logger = logging.getLogger(__name__)

# Cursor value before any page exists; always below the margin
_NO_PAGE = -1.0


class _OpenPage:
    """Mutable page under construction, owned by the paginator."""

    def __init__(self, number: int, width: float, height: float):
        self.number = number
        self.width = width
        self.height = height
        self.placements: List[PlacedFragment] = []

    def freeze(self) -> Page:
        return Page(
            number=self.number,
            width=self.width,
            height=self.height,
            placements=tuple(self.placements),
        )


class Paginator:
    """
    Places fragments top to bottom, opening pages as needed.

    A new page is opened when the cursor has dropped below the bottom
    margin, and unconditionally after a fragment that forces a page break.

    Usage::

        paginator = Paginator(config, config.line_advance(font))
        for fragment in fragments:
            for page in paginator.add(fragment):
                backend.write(page)
        for page in paginator.finish():
            backend.write(page)
    """

    def __init__(self, config: LayoutConfig, line_advance: float):
        if line_advance <= 0:
            raise ValueError(f"Line advance must be positive, got {line_advance}")
        self.config = config
        self.line_advance = line_advance
        self.y = _NO_PAGE
        self.pages_emitted = 0
        self.fragments_drawn = 0
        self._current: Optional[_OpenPage] = None
        self._finished = False

    @property
    def top(self) -> float:
        """Cursor value right after a page is opened."""
        return self.config.effective_height - self.config.margin + self.line_advance

    def add(self, fragment: Fragment) -> List[Page]:
        """
        Draw *fragment* and return the pages it caused to be completed.

        Usually empty; holds one page when the fragment crossed the bottom
        margin or when the previous page was closed by a page break.
        """
        if self._finished:
            raise LayoutInvariantError("Paginator already finished")

        completed: List[Page] = []
        if self.y < self.config.margin:
            self._start_page(completed)

        self._draw(fragment)

        if fragment.forces_page_break:
            logger.debug("Forced page break after page %d", self._current.number)
            self._start_page(completed)
        return completed

    def finish(self) -> List[Page]:
        """
        Close the open page.

        When nothing was ever drawn a single empty page is produced, so a
        finished layout always holds at least one page.
        """
        if self._finished:
            return []
        self._finished = True

        if self._current is None:
            logger.debug("No text drawn, emitting an empty page")
            self._open_page()
        completed = [self._close_page()]
        logger.debug(
            "Pagination finished: %d pages, %d fragments",
            self.pages_emitted,
            self.fragments_drawn,
        )
        return completed

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _start_page(self, completed: List[Page]) -> None:
        if self._current is not None:
            completed.append(self._close_page())
        self._open_page()

    def _open_page(self) -> None:
        self._current = _OpenPage(
            number=self.pages_emitted + 1,
            width=self.config.effective_width,
            height=self.config.effective_height,
        )
        self.y = self.top

    def _close_page(self) -> Page:
        page = self._current.freeze()
        self._current = None
        self.pages_emitted += 1
        return page

    def _draw(self, fragment: Fragment) -> None:
        if self._current is None:
            raise LayoutInvariantError("No open page to draw on")
        self.y -= self.line_advance
        self._current.placements.append(
            PlacedFragment(fragment=fragment, x=self.config.margin, y=self.y)
        )
        self.fragments_drawn += 1


def iter_pages(
    fragments: Iterable[Fragment],
    config: LayoutConfig,
    line_advance: float,
) -> Iterator[Page]:
    """Yield pages as they are completed while consuming *fragments*."""
    paginator = Paginator(config, line_advance)
    for fragment in fragments:
        yield from paginator.add(fragment)
    yield from paginator.finish()


def paginate(
    fragments: Iterable[Fragment],
    config: LayoutConfig,
    line_advance: float,
) -> Document:
    """Place all *fragments* and return the finished :class:`Document`."""
    return Document(pages=list(iter_pages(fragments, config, line_advance)))
