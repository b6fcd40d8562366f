from __future__ import annotations

import unittest

from macos_maid.gui_geometry import (
    centered_window_position,
    is_scrolled_to_bottom,
    resolve_min_window_size,
    scroll_edges_from_view,
)


class ScrollDetectionTestCase(unittest.TestCase):
    def test_marker_below_tolerance_is_not_bottom(self) -> None:
        self.assertFalse(is_scrolled_to_bottom(marker_bottom_edge=500, viewport_bottom_edge=400))

    def test_marker_within_tolerance_is_bottom(self) -> None:
        self.assertTrue(is_scrolled_to_bottom(marker_bottom_edge=405, viewport_bottom_edge=400))

    def test_tolerance_boundary_is_inclusive(self) -> None:
        self.assertTrue(is_scrolled_to_bottom(marker_bottom_edge=410, viewport_bottom_edge=400))
        self.assertFalse(is_scrolled_to_bottom(marker_bottom_edge=410.01, viewport_bottom_edge=400))

    def test_short_content_is_bottom_without_scrolling(self) -> None:
        self.assertTrue(is_scrolled_to_bottom(marker_bottom_edge=300, viewport_bottom_edge=400))

    def test_custom_tolerance(self) -> None:
        self.assertFalse(is_scrolled_to_bottom(marker_bottom_edge=405, viewport_bottom_edge=400, tolerance=0))
        self.assertTrue(is_scrolled_to_bottom(marker_bottom_edge=440, viewport_bottom_edge=400, tolerance=40))

    def test_repeated_calls_are_stable(self) -> None:
        results = {is_scrolled_to_bottom(marker_bottom_edge=409.9, viewport_bottom_edge=400) for _ in range(1000)}
        self.assertEqual(results, {True})


class ScrollEdgesTestCase(unittest.TestCase):
    def test_top_of_long_content(self) -> None:
        marker, viewport = scroll_edges_from_view(first=0.0, last=0.25, content_height=2000)
        self.assertEqual((marker, viewport), (2000.0, 500.0))

    def test_scrolled_to_end(self) -> None:
        marker, viewport = scroll_edges_from_view(first=0.75, last=1.0, content_height=2000)
        self.assertEqual((marker, viewport), (500.0, 500.0))
        self.assertTrue(is_scrolled_to_bottom(marker_bottom_edge=marker, viewport_bottom_edge=viewport))

    def test_viewport_top_offset_is_shared(self) -> None:
        marker, viewport = scroll_edges_from_view(first=0.5, last=0.75, content_height=1000, viewport_top=100)
        self.assertEqual((marker, viewport), (600.0, 350.0))

    def test_fractions_are_clamped(self) -> None:
        marker, viewport = scroll_edges_from_view(first=-0.1, last=1.2, content_height=400)
        self.assertEqual((marker, viewport), (400.0, 400.0))

    def test_empty_content_is_at_viewport_top(self) -> None:
        marker, viewport = scroll_edges_from_view(first=0.0, last=1.0, content_height=0)
        self.assertEqual((marker, viewport), (0.0, 0.0))
        self.assertTrue(is_scrolled_to_bottom(marker_bottom_edge=marker, viewport_bottom_edge=viewport))


class WindowGeometryTestCase(unittest.TestCase):
    def test_centered_window_position(self) -> None:
        self.assertEqual(centered_window_position(screen_w=1440, screen_h=900, win_w=1000, win_h=700), (220, 100))

    def test_centered_window_position_never_negative(self) -> None:
        self.assertEqual(centered_window_position(screen_w=700, screen_h=500, win_w=800, win_h=600), (0, 0))

    def test_resolve_min_window_size_keeps_base_on_large_screen(self) -> None:
        self.assertEqual(
            resolve_min_window_size(base_min_w=800, base_min_h=600, screen_w=2000, screen_h=1200),
            (800, 600),
        )

    def test_resolve_min_window_size_clamps_to_screen_ratio_limit(self) -> None:
        self.assertEqual(
            resolve_min_window_size(base_min_w=800, base_min_h=600, screen_w=700, screen_h=500),
            (686, 490),
        )

    def test_resolve_min_window_size_ignores_unknown_screen(self) -> None:
        self.assertEqual(
            resolve_min_window_size(base_min_w=800, base_min_h=600, screen_w=0, screen_h=0),
            (800, 600),
        )


if __name__ == "__main__":
    unittest.main()
