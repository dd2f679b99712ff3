"""
Greedy word wrap for a single logical line of text.

Lines are split on single ASCII spaces and grown word by word until the
next word would no longer fit.  A form feed inside a word ends the current
fragment immediately and marks it as forcing a page break; the remainder
of that word starts the next fragment.
"""

import logging
from typing import Iterator, List

from .font_metrics import FontMetrics
from .models import FORM_FEED, Fragment

logger = logging.getLogger(__name__)


def split_words(line: str) -> List[str]:
    """
    Tokenise *line* on single spaces.

    Interior empty tokens (from consecutive spaces) are kept, trailing
    empty tokens are dropped.  An empty line yields one empty token, a
    line made only of spaces yields none.

    >>> split_words("a  b ")
    ['a', '', 'b']
    """
    words = line.split(" ")
    if not line:
        return words
    while words and not words[-1]:
        words.pop()
    return words


def break_line(
    line: str,
    max_width: float,
    font: FontMetrics,
    font_size: float,
) -> Iterator[Fragment]:
    """
    Lazily wrap *line* into fragments no wider than *max_width*.

    A single word wider than *max_width* is emitted on its own, overflowing
    the budget.  The width projection measures the pending fragment text
    (which already ends in a space) plus a space and the next word.

    Args:
        line:      One source line, terminators already stripped.
        max_width: Usable width in points.
        font:      Metrics used to measure candidate lines.
        font_size: Point size passed to *font*.

    Yields:
        :class:`Fragment` objects in source order.
    """
    words = split_words(line)
    index = 0

    while index < len(words):
        accepted: List[str] = []
        forced = False
        text = ""

        while True:
            head, marker, tail = words[index].partition(FORM_FEED)
            if marker:
                forced = True
                if head:
                    accepted.append(head)
                    text += head + " "
                if tail:
                    words[index] = tail
                else:
                    index += 1
                break

            accepted.append(head)
            text += head + " "
            index += 1

            if index >= len(words):
                break
            # Only the part before a marker is ever drawn on this line
            next_word = words[index].partition(FORM_FEED)[0]
            projected = font.width(text + " " + next_word, font_size)
            if projected >= max_width:
                break

        fragment = Fragment(tuple(accepted), forces_page_break=forced)
        logger.debug("Fragment %r", fragment)
        yield fragment
