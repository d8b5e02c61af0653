"""Pure helpers for viewport math."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np


NEUTRAL_GRAY = (0.6, 0.6, 0.6, 1.0)


def compute_bounds(points: np.ndarray) -> tuple[np.ndarray, float]:
    if points.size == 0:
        return np.zeros(3, dtype=np.float32), 0.0
    pts = np.asarray(points, dtype=np.float32)
    mins = np.min(pts, axis=0)
    maxs = np.max(pts, axis=0)
    center = (mins + maxs) * 0.5
    radius = float(np.max(np.linalg.norm(pts - center, axis=1)))
    return center, radius


def sphere_transform(pos: np.ndarray, radius: float) -> np.ndarray:
    """Row-vector 4x4 matrix scaling a unit sphere by ``radius`` then moving it to ``pos``."""
    t = np.asarray(pos, dtype=np.float32)
    if t.shape != (3,):
        raise ValueError("pos must have shape (3,)")
    mat = np.eye(4, dtype=np.float32)
    mat[0, 0] = mat[1, 1] = mat[2, 2] = float(radius)
    mat[3, :3] = t
    return mat


def resolve_color(
    *candidates: Sequence[float] | None,
) -> tuple[float, float, float, float]:
    for color in candidates:
        if color is not None:
            r, g, b, a = (float(c) for c in color)
            return (r, g, b, a)
    return NEUTRAL_GRAY


def screen_to_world(
    screen_pos: Sequence[float],
    viewport_size: Sequence[float],
    view_center: Sequence[float],
    view_size: Sequence[float],
) -> np.ndarray | None:
    """Unproject a pixel position through an orthographic 2D view.

    Pixel y grows downwards, world y upwards. Returns ``None`` when the
    pointer lies outside the viewport.
    """
    sx, sy = (float(v) for v in screen_pos[:2])
    width, height = (float(v) for v in viewport_size[:2])
    if width <= 0.0 or height <= 0.0:
        return None
    if not (0.0 <= sx <= width and 0.0 <= sy <= height):
        return None
    cx, cy = (float(v) for v in view_center[:2])
    vw, vh = (float(v) for v in view_size[:2])
    x = cx + (sx / width - 0.5) * vw
    y = cy - (sy / height - 0.5) * vh
    return np.array([x, y], dtype=np.float32)


@dataclass(slots=True)
class CursorTracker:
    """Last pointer pixel over the canvas, cleared when the pointer leaves."""

    pixel: tuple[float, float] | None = None

    def move(self, x: float, y: float) -> None:
        self.pixel = (float(x), float(y))

    def leave(self) -> None:
        self.pixel = None

    def world(
        self,
        viewport_size: Sequence[float],
        view_center: Sequence[float],
        view_size: Sequence[float],
    ) -> np.ndarray | None:
        if self.pixel is None:
            return None
        return screen_to_world(self.pixel, viewport_size, view_center, view_size)
