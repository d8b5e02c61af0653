from __future__ import annotations

import numpy as np

from three_body.app.viz_utils import (
    CursorTracker,
    NEUTRAL_GRAY,
    compute_bounds,
    resolve_color,
    screen_to_world,
    sphere_transform,
)


def test_compute_bounds_empty() -> None:
    center, radius = compute_bounds(np.zeros((0, 3), dtype=np.float32))
    assert np.allclose(center, np.zeros(3))
    assert radius == 0.0


def test_compute_bounds_many() -> None:
    points = np.array(
        [
            [-1.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
            [0.0, 2.0, 0.0],
        ],
        dtype=np.float32,
    )
    center, radius = compute_bounds(points)
    assert np.allclose(center, [0.0, 1.0, 0.0])
    assert np.isclose(radius, np.sqrt(2.0))


def test_sphere_transform_scales_then_translates() -> None:
    mat = sphere_transform(np.array([1.0, 2.0, 3.0]), 0.5)
    # Row-vector convention: p' = p @ M
    p = np.array([2.0, 0.0, 0.0, 1.0], dtype=np.float32) @ mat
    assert np.allclose(p[:3], [2.0, 2.0, 3.0])


def test_resolve_color_fallbacks() -> None:
    assert resolve_color(None) == NEUTRAL_GRAY
    assert resolve_color(None, None) == NEUTRAL_GRAY
    assert resolve_color(None, (1, 0, 0, 1)) == (1.0, 0.0, 0.0, 1.0)
    assert resolve_color((0, 1, 0, 0.4), (1, 0, 0, 1)) == (0.0, 1.0, 0.0, 0.4)


def test_screen_to_world_center_and_corners() -> None:
    args = ((200.0, 100.0), (0.0, 0.0), (40.0, 20.0))
    assert np.allclose(screen_to_world((100.0, 50.0), *args), [0.0, 0.0])
    assert np.allclose(screen_to_world((0.0, 0.0), *args), [-20.0, 10.0])
    assert np.allclose(screen_to_world((200.0, 100.0), *args), [20.0, -10.0])


def test_screen_to_world_outside_viewport() -> None:
    args = ((200.0, 100.0), (5.0, 5.0), (40.0, 20.0))
    assert screen_to_world((-1.0, 50.0), *args) is None
    assert screen_to_world((100.0, 101.0), *args) is None
    assert screen_to_world((10.0, 10.0), (0.0, 0.0), (0.0, 0.0), (1.0, 1.0)) is None


def test_cursor_tracker_follows_pointer() -> None:
    cursor = CursorTracker()
    args = ((200.0, 100.0), (0.0, 0.0), (40.0, 20.0))
    assert cursor.world(*args) is None

    cursor.move(100.0, 50.0)
    assert np.allclose(cursor.world(*args), [0.0, 0.0])


def test_cursor_tracker_forgets_pointer_after_leave() -> None:
    cursor = CursorTracker()
    args = ((200.0, 100.0), (0.0, 0.0), (40.0, 20.0))
    cursor.move(199.0, 1.0)
    assert cursor.world(*args) is not None

    cursor.leave()

    assert cursor.pixel is None
    assert cursor.world(*args) is None
