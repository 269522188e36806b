"""Tests for the viewport scroll state."""

import random

import pytest

from mdviewer.viewer_viewport import Viewport


def assert_clamped(viewport):
    """Check the offset invariant."""
    assert 0 <= viewport.offset <= max(0, viewport.total_lines - viewport.height)


class TestScrolling:
    """Test navigation operations."""

    def test_starts_at_top(self):
        """Test the initial offset."""
        viewport = Viewport(100, 10)
        assert viewport.offset == 0
        assert viewport.visible_range() == (0, 10)

    def test_line_scrolling(self):
        """Test scrolling by single lines."""
        viewport = Viewport(100, 10)
        viewport.scroll_by(1)
        viewport.scroll_by(1)
        viewport.scroll_by(-1)
        assert viewport.offset == 1

    def test_cannot_scroll_above_top(self):
        """Test clamping at the top."""
        viewport = Viewport(100, 10)
        viewport.scroll_by(-5)
        assert viewport.offset == 0

    def test_cannot_scroll_past_bottom(self):
        """Test clamping at the bottom."""
        viewport = Viewport(100, 10)
        viewport.scroll_by(500)
        assert viewport.offset == 90
        assert viewport.visible_range() == (90, 100)

    def test_paging(self):
        """Test page down and page up."""
        viewport = Viewport(100, 10)
        viewport.page_down()
        viewport.page_down()
        assert viewport.offset == 20
        viewport.page_up()
        assert viewport.offset == 10

    def test_paging_with_zero_height_moves_one_line(self):
        """Test that paging still moves in a zero height viewport."""
        viewport = Viewport(5, 0)
        viewport.page_down()
        assert viewport.offset == 1

    def test_top_and_bottom(self):
        """Test jumping to either end."""
        viewport = Viewport(100, 10)
        viewport.scroll_to_bottom()
        assert viewport.offset == 90
        viewport.scroll_to_top()
        assert viewport.offset == 0

    def test_short_document_never_scrolls(self):
        """Test a document shorter than the viewport."""
        viewport = Viewport(3, 10)
        viewport.page_down()
        viewport.scroll_to_bottom()
        assert viewport.offset == 0
        assert viewport.visible_range() == (0, 3)


class TestBounds:
    """Test reacting to document and size changes."""

    def test_offset_kept_when_still_valid(self):
        """Test that a longer document keeps the position."""
        viewport = Viewport(100, 10)
        viewport.scroll_to(40)
        viewport.update_bounds(200, 10)
        assert viewport.offset == 40

    def test_offset_clamped_when_document_shrinks(self):
        """Test that a shorter document pulls the offset back."""
        viewport = Viewport(100, 10)
        viewport.scroll_to_bottom()
        viewport.update_bounds(30, 10)
        assert viewport.offset == 20

    def test_offset_clamped_when_viewport_grows(self):
        """Test that a taller viewport pulls the offset back."""
        viewport = Viewport(100, 10)
        viewport.scroll_to_bottom()
        viewport.update_bounds(100, 50)
        assert viewport.offset == 50
        assert viewport.height == 50

    def test_negative_values_are_treated_as_zero(self):
        """Test degenerate bounds."""
        viewport = Viewport(-5, -2)
        assert viewport.total_lines == 0
        assert viewport.height == 0
        assert viewport.max_offset() == 0

    @pytest.mark.parametrize("seed", range(5))
    def test_random_operations_keep_offset_clamped(self, seed):
        """Test the offset invariant over random operation sequences."""
        rng = random.Random(seed)
        viewport = Viewport(rng.randint(0, 50), rng.randint(0, 20))
        operations = [
            lambda: viewport.scroll_by(rng.randint(-30, 30)),
            viewport.page_down,
            viewport.page_up,
            viewport.scroll_to_top,
            viewport.scroll_to_bottom,
            lambda: viewport.update_bounds(rng.randint(0, 60), rng.randint(0, 25)),
        ]
        for _ in range(200):
            rng.choice(operations)()
            assert_clamped(viewport)
