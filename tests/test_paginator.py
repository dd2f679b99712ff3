"""
Tests for vertical placement and page breaking in typeset.paginator.

``small_page`` is 200x100 pt with a 10 pt margin; with a 10 pt line
advance the first baseline sits at y=90 and a page holds ten lines
(y=90 down to y=0) before the cursor drops below the margin.
"""

import pytest

from typeset import (
    Fragment,
    LayoutConfig,
    LayoutInvariantError,
    Paginator,
    iter_pages,
    paginate,
)

ADVANCE = 10.0


def lines(n, prefix="line"):
    return [Fragment((f"{prefix}{i}",)) for i in range(n)]


class TestCursor:
    def test_first_fragment_opens_page_at_top(self, small_page):
        document = paginate(lines(1), small_page, ADVANCE)

        (page,) = document.pages
        (placement,) = page.placements
        assert placement.x == 10
        assert placement.y == 90

    def test_cursor_decreases_by_line_advance(self, small_page):
        (page,) = paginate(lines(10), small_page, ADVANCE).pages
        ys = [p.y for p in page.placements]
        assert ys == [90, 80, 70, 60, 50, 40, 30, 20, 10, 0]

    def test_cursor_exhaustion_opens_new_page(self, small_page):
        document = paginate(lines(25), small_page, ADVANCE)

        assert [len(p) for p in document.pages] == [10, 10, 5]
        for page in document.pages:
            assert page.placements[0].y == 90

    def test_page_numbers_are_sequential(self, small_page):
        document = paginate(lines(25), small_page, ADVANCE)
        assert [p.number for p in document.pages] == [1, 2, 3]

    def test_text_is_preserved_in_order(self, small_page):
        document = paginate(lines(12), small_page, ADVANCE)
        assert document.lines == [f"line{i} " for i in range(12)]


class TestForcedBreaks:
    def test_forced_break_starts_new_page_with_room_left(self, small_page):
        fragments = [
            Fragment(("a",)),
            Fragment(("b",), forces_page_break=True),
            Fragment(("c",)),
        ]
        document = paginate(fragments, small_page, ADVANCE)

        assert [p.lines for p in document.pages] == [["a ", "b "], ["c "]]
        assert document.pages[1].placements[0].y == 90

    def test_trailing_forced_break_leaves_blank_page(self, small_page):
        document = paginate(
            [Fragment(("end",), forces_page_break=True)], small_page, ADVANCE
        )
        assert document.page_count == 2
        assert document.pages[1].is_empty

    def test_forced_break_on_full_page_does_not_double_break(self, small_page):
        fragments = lines(9) + [Fragment(("last",), forces_page_break=True)]
        fragments.append(Fragment(("next",)))
        document = paginate(fragments, small_page, ADVANCE)

        assert [len(p) for p in document.pages] == [10, 1]
        assert document.pages[1].lines == ["next "]


class TestEmptyAndGeometry:
    def test_no_fragments_yields_one_empty_page(self, small_page):
        document = paginate([], small_page, ADVANCE)

        assert document.page_count == 1
        assert document.pages[0].is_empty
        assert document.fragment_count == 0

    def test_landscape_swaps_page_geometry(self):
        config = LayoutConfig(
            font_size=10, page_width=100, page_height=200, margin=10, landscape=True
        )
        (page,) = paginate(lines(1), config, ADVANCE).pages

        assert (page.width, page.height) == (200, 100)
        assert page.placements[0].y == 90

    def test_iter_pages_yields_pages_as_they_complete(self, small_page):
        pages = iter_pages(iter(lines(25)), small_page, ADVANCE)
        first = next(pages)
        assert first.number == 1
        assert len(first) == 10

    def test_pages_are_immutable(self, small_page):
        (page,) = paginate(lines(2), small_page, ADVANCE).pages
        assert isinstance(page.placements, tuple)
        with pytest.raises(AttributeError):
            page.number = 5


class TestInvariants:
    def test_drawing_without_open_page_fails_loudly(self, small_page):
        paginator = Paginator(small_page, ADVANCE)
        with pytest.raises(LayoutInvariantError):
            paginator._draw(Fragment(("x",)))

    def test_add_after_finish_fails(self, small_page):
        paginator = Paginator(small_page, ADVANCE)
        paginator.finish()
        with pytest.raises(LayoutInvariantError):
            paginator.add(Fragment(("x",)))

    def test_finish_is_idempotent(self, small_page):
        paginator = Paginator(small_page, ADVANCE)
        assert len(paginator.finish()) == 1
        assert paginator.finish() == []

    def test_non_positive_line_advance_rejected(self, small_page):
        with pytest.raises(ValueError):
            Paginator(small_page, 0)
