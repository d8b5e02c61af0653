"""Bounded per-body position history for drawing trails."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field

import numpy as np

from .state.bodies import Color


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Trail:
    """FIFO history of float32 positions, never longer than ``capacity``.

    ``decay`` comes from the body's config and is stored but not read.
    """

    capacity: int
    points: deque[np.ndarray] = field(default_factory=deque)
    color: Color | None = None
    decay: float = 1.0

    def __post_init__(self) -> None:
        self.capacity = int(self.capacity)
        if self.capacity < 0:
            raise ValueError("capacity must be >= 0")
        self.points = deque(self.points, maxlen=self.capacity)

    def push(self, position: np.ndarray) -> None:
        self.points.append(np.asarray(position, dtype=np.float32).reshape(3).copy())

    def as_array(self) -> np.ndarray:
        if not self.points:
            return np.zeros((0, 3), dtype=np.float32)
        return np.stack(self.points).astype(np.float32, copy=False)


class TrailStore:
    """Trails keyed by trail id, looked up through a body -> trail reference.

    Trails are created lazily on the first ``record`` for a body and are
    never destroyed.
    """

    def __init__(self) -> None:
        self._trails: dict[int, Trail] = {}
        self._refs: dict[int, int] = {}
        self._next_id = 0

    def __len__(self) -> int:
        return len(self._trails)

    def __contains__(self, handle: object) -> bool:
        return self.get(handle) is not None  # type: ignore[arg-type]

    def get(self, handle: int) -> Trail | None:
        trail_id = self._refs.get(handle)
        if trail_id is None:
            return None
        return self._trails.get(trail_id)

    def record(
        self,
        handle: int,
        position: np.ndarray,
        *,
        capacity: int,
        color: Color | None = None,
        decay: float = 1.0,
    ) -> Trail:
        trail = self.get(handle)
        if trail is None:
            return self._create(handle, position, capacity, color, decay)
        trail.push(position)
        return trail

    def snapshot(self, handle: int) -> np.ndarray:
        trail = self.get(handle)
        if trail is None:
            return np.zeros((0, 3), dtype=np.float32)
        return trail.as_array()

    def _create(
        self,
        handle: int,
        position: np.ndarray,
        capacity: int,
        color: Color | None,
        decay: float,
    ) -> Trail:
        stale = self._refs.pop(handle, None)
        if stale is not None:
            logger.debug("trail %d for body %d vanished, recreating", stale, handle)
        trail = Trail(capacity=capacity, color=color, decay=decay)
        trail.push(position)
        trail_id = self._next_id
        self._next_id += 1
        self._trails[trail_id] = trail
        self._refs[handle] = trail_id
        logger.debug("created trail %d for body %d", trail_id, handle)
        return trail
