from __future__ import annotations

DEFAULT_SCROLL_TOLERANCE = 10.0


def is_scrolled_to_bottom(
    *,
    marker_bottom_edge: float,
    viewport_bottom_edge: float,
    tolerance: float = DEFAULT_SCROLL_TOLERANCE,
) -> bool:
    return marker_bottom_edge <= viewport_bottom_edge + tolerance


def scroll_edges_from_view(
    *,
    first: float,
    last: float,
    content_height: float,
    viewport_top: float = 0.0,
) -> tuple[float, float]:
    """Map a visible fraction pair (as returned by ``yview()``) to edges.

    Returns ``(marker_bottom_edge, viewport_bottom_edge)`` in the viewport's
    coordinate space. The end marker sits right after the last line of content.
    """
    if content_height <= 0:
        return (viewport_top, viewport_top)
    first = min(max(first, 0.0), 1.0)
    last = min(max(last, first), 1.0)
    content_top = viewport_top - first * content_height
    marker_bottom = content_top + content_height
    viewport_bottom = viewport_top + (last - first) * content_height
    return (marker_bottom, viewport_bottom)


def centered_window_position(
    *,
    screen_w: int,
    screen_h: int,
    win_w: int,
    win_h: int,
) -> tuple[int, int]:
    return (max((screen_w - win_w) // 2, 0), max((screen_h - win_h) // 2, 0))


def resolve_min_window_size(
    *,
    base_min_w: int,
    base_min_h: int,
    screen_w: int,
    screen_h: int,
    screen_limit_ratio: float = 0.98,
) -> tuple[int, int]:
    if screen_w <= 0 or screen_h <= 0:
        return (base_min_w, base_min_h)
    max_w = max(1, int(screen_w * screen_limit_ratio))
    max_h = max(1, int(screen_h * screen_limit_ratio))
    return (min(base_min_w, max_w), min(base_min_h, max_h))
