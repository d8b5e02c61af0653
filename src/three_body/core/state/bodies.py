"""Body store and the immutable configs bodies are spawned from."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator

import numpy as np
from numpy.typing import NDArray


ArrayF = NDArray[np.float64]
Color = tuple[float, float, float, float]
SpawnListener = Callable[[int, "BodyConfig"], None]

logger = logging.getLogger(__name__)

DEFAULT_TICK_RATE = 64.0


@dataclass(frozen=True, slots=True)
class BodyConfig:
    """Description of a single body to spawn.

    ``trail_decay`` is carried through to the trail but nothing reads it.
    """

    radius: float = 1.0
    mass: float = 1.0
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    velocity: tuple[float, float, float] = (0.0, 0.0, 0.0)
    color: Color | None = None
    trail_color: Color | None = None
    trail_length: int = 100
    trail_decay: float = 1.0

    def validate(self) -> None:
        if not np.isfinite(self.mass) or self.mass <= 0.0:
            raise ValueError("mass must be > 0")
        if not np.isfinite(self.radius) or self.radius <= 0.0:
            raise ValueError("radius must be > 0")
        for name in ("position", "velocity"):
            vec = np.asarray(getattr(self, name), dtype=np.float64)
            if vec.shape != (3,):
                raise ValueError(f"{name} must have 3 values")
            if not np.all(np.isfinite(vec)):
                raise ValueError(f"{name} must be finite")
        for name in ("color", "trail_color"):
            value = getattr(self, name)
            if value is not None and len(value) != 4:
                raise ValueError(f"{name} must have 4 values")
        if int(self.trail_length) != self.trail_length or self.trail_length < 0:
            raise ValueError("trail_length must be an integer >= 0")
        if self.trail_decay < 0.0:
            raise ValueError("trail_decay must be >= 0")


@dataclass(frozen=True, slots=True)
class Config:
    initial_bodies: tuple[BodyConfig, ...] = ()
    timestep: float = 1.0
    tick_rate: float = DEFAULT_TICK_RATE

    def validate(self) -> None:
        if not np.isfinite(self.timestep) or self.timestep <= 0.0:
            raise ValueError("timestep must be > 0")
        if not np.isfinite(self.tick_rate) or self.tick_rate <= 0.0:
            raise ValueError("tick_rate must be > 0")
        for body in self.initial_bodies:
            body.validate()


@dataclass(slots=True)
class BodyView:
    """One body of a BodyStore.

    ``pos``, ``vel`` and ``acc`` are row views, so writes reach the store.
    ``mass`` and ``radius`` are copies.
    """

    pos: ArrayF
    vel: ArrayF
    acc: ArrayF
    mass: float
    radius: float


@dataclass(slots=True)
class BodyStore:
    """Arena of bodies addressed by stable integer handles.

    Handles are row indices. Bodies are never removed, so a handle stays
    valid for the lifetime of the store even when the arrays reallocate.
    """

    pos: ArrayF = field(default_factory=lambda: np.zeros((0, 3), dtype=np.float64))
    vel: ArrayF = field(default_factory=lambda: np.zeros((0, 3), dtype=np.float64))
    acc: ArrayF = field(default_factory=lambda: np.zeros((0, 3), dtype=np.float64))
    mass: ArrayF = field(default_factory=lambda: np.zeros(0, dtype=np.float64))
    radius: ArrayF = field(default_factory=lambda: np.zeros(0, dtype=np.float64))
    configs: list[BodyConfig] = field(default_factory=list)
    _listeners: list[SpawnListener] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.configs)

    def subscribe(self, listener: SpawnListener) -> None:
        self._listeners.append(listener)

    def spawn(self, config: BodyConfig) -> int:
        config.validate()
        handle = len(self.configs)
        self.pos = np.concatenate(
            [self.pos, np.asarray(config.position, dtype=np.float64)[None, :]]
        )
        self.vel = np.concatenate(
            [self.vel, np.asarray(config.velocity, dtype=np.float64)[None, :]]
        )
        self.acc = np.concatenate([self.acc, np.zeros((1, 3), dtype=np.float64)])
        self.mass = np.append(self.mass, float(config.mass))
        self.radius = np.append(self.radius, float(config.radius))
        self.configs.append(config)
        logger.debug(
            "spawned body %d mass=%g at %s", handle, config.mass, config.position
        )
        for listener in self._listeners:
            listener(handle, config)
        return handle

    def handles(self) -> range:
        return range(len(self.configs))

    def get(self, handle: int) -> BodyView:
        self._check(handle)
        return BodyView(
            pos=self.pos[handle],
            vel=self.vel[handle],
            acc=self.acc[handle],
            mass=float(self.mass[handle]),
            radius=float(self.radius[handle]),
        )

    def config(self, handle: int) -> BodyConfig:
        self._check(handle)
        return self.configs[handle]

    def iterate(self) -> Iterator[tuple[int, BodyView]]:
        for handle in self.handles():
            yield handle, self.get(handle)

    def _check(self, handle: int) -> None:
        if handle < 0 or handle >= len(self.configs):
            raise IndexError("body handle out of range")
