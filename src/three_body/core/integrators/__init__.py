"""Integrator interfaces and implementations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..state.bodies import BodyStore


class Integrator(Protocol):
    def step(self, bodies: BodyStore, dt: float) -> None:
        """Advance bodies by one step, consuming accumulated acceleration."""


@dataclass(slots=True)
class SymplecticEuler:
    """Semi-implicit Euler: velocity from the old acceleration, then position
    from the new velocity. Acceleration is cleared once consumed."""

    def step(self, bodies: BodyStore, dt: float) -> None:
        if len(bodies) == 0:
            return
        bodies.vel += bodies.acc * dt
        bodies.pos += bodies.vel * dt
        bodies.acc[...] = 0.0


def scaled_dt(real_dt: float, timestep: float) -> float:
    return float(real_dt) * float(timestep)
