"""Simulation context, fixed-rate clock, and headless run loop."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

import numpy as np

from .forces.base import Model
from .forces.nbody_gravity import PairwiseGravity
from .integrators import Integrator, SymplecticEuler, scaled_dt
from .state.bodies import BodyStore, Config
from .states import SimulationState, TrailState
from .trails import TrailStore


logger = logging.getLogger(__name__)


class FixedClock:
    """Turns variable real frame times into a whole number of fixed ticks.

    Leftover time carries over to the next frame. More than ``max_ticks``
    ticks in one frame are dropped rather than caught up.
    """

    def __init__(self, tick_rate: float, max_ticks: int = 8) -> None:
        if tick_rate <= 0.0:
            raise ValueError("tick_rate must be > 0")
        if max_ticks < 1:
            raise ValueError("max_ticks must be >= 1")
        self.tick_rate = float(tick_rate)
        self.max_ticks = int(max_ticks)
        self._accumulated = 0.0

    @property
    def tick_seconds(self) -> float:
        return 1.0 / self.tick_rate

    def advance(self, real_dt: float) -> int:
        if real_dt < 0.0:
            raise ValueError("real_dt must be >= 0")
        self._accumulated += real_dt
        ticks = int(self._accumulated * self.tick_rate)
        self._accumulated -= ticks * self.tick_seconds
        if ticks > self.max_ticks:
            logger.debug("dropping %d physics ticks", ticks - self.max_ticks)
            ticks = self.max_ticks
        return ticks

    def reset(self) -> None:
        self._accumulated = 0.0


@dataclass(slots=True)
class SimulationContext:
    """Everything a tick needs, built once and passed explicitly."""

    config: Config
    bodies: BodyStore = field(default_factory=BodyStore)
    trails: TrailStore = field(default_factory=TrailStore)
    model: Model = field(default_factory=PairwiseGravity)
    integrator: Integrator = field(default_factory=SymplecticEuler)
    clock: FixedClock | None = None
    simulation_state: SimulationState = SimulationState.STOPPED
    trail_state: TrailState = TrailState.SHOW
    ticks: int = 0
    sim_time: float = 0.0

    def __post_init__(self) -> None:
        self.config.validate()
        if self.clock is None:
            self.clock = FixedClock(self.config.tick_rate)


def physics_tick(context: SimulationContext, real_dt: float) -> None:
    """Accumulate every pair's force, then integrate all bodies."""
    dt = scaled_dt(real_dt, context.config.timestep)
    context.model.accumulate(context.bodies)
    context.integrator.step(context.bodies, dt)
    context.ticks += 1
    context.sim_time += dt


@dataclass(slots=True)
class RunResult:
    context: SimulationContext
    time: np.ndarray | None = None
    positions: np.ndarray | None = None
    velocities: np.ndarray | None = None


def run(
    context: SimulationContext,
    steps: int,
    real_dt: float | None = None,
    sample_every: int | None = None,
    callback: Callable[[int, SimulationContext], None] | None = None,
) -> RunResult:
    """Advance ``steps`` physics ticks without any presentation loop.

    Ticks run regardless of ``simulation_state``; ``real_dt`` defaults to
    one tick of the context's clock.
    """
    if sample_every is not None and sample_every <= 0:
        raise ValueError("sample_every must be > 0")
    if real_dt is None:
        assert context.clock is not None
        real_dt = context.clock.tick_seconds

    times: list[float] = []
    pos: list[np.ndarray] = []
    vel: list[np.ndarray] = []

    def sample() -> None:
        times.append(context.sim_time)
        pos.append(context.bodies.pos.copy())
        vel.append(context.bodies.vel.copy())

    if sample_every is not None:
        sample()

    for step in range(1, steps + 1):
        physics_tick(context, real_dt)
        if callback is not None:
            callback(step, context)
        if sample_every is not None and step % sample_every == 0:
            sample()

    if sample_every is None:
        return RunResult(context=context)

    return RunResult(
        context=context,
        time=np.asarray(times, dtype=np.float64),
        positions=np.asarray(pos, dtype=np.float64),
        velocities=np.asarray(vel, dtype=np.float64),
    )
