"""Headless simulation controller for the desktop app."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

import numpy as np

from ..core.diagnostics import linear_momentum, total_energy
from ..core.forces.nbody_gravity import PairwiseGravity
from ..core.run import SimulationContext, physics_tick
from ..core.state.bodies import BodyConfig, Config
from ..core.states import SimulationState, TrailState


logger = logging.getLogger(__name__)

TOGGLE_RUN_KEY = "space"
TOGGLE_TRAIL_KEY = "t"

CLICK_BODY_COLOR = (1.0, 1.0, 1.0, 1.0)
CLICK_TRAIL_COLOR = (1.0, 1.0, 1.0, 0.4)


def click_body_config(x: float, y: float) -> BodyConfig:
    """Small body spawned under the pointer on the z = 0 plane."""
    return BodyConfig(
        radius=0.2,
        mass=0.2,
        position=(float(x), float(y), 0.0),
        velocity=(0.0, 0.0, 0.0),
        color=CLICK_BODY_COLOR,
        trail_color=CLICK_TRAIL_COLOR,
        trail_length=20,
    )


@dataclass(slots=True)
class FrameResult:
    ticks: int = 0
    trails_changed: list[int] = field(default_factory=list)


class SimulationController:
    def __init__(
        self,
        config: Config | None = None,
        on_spawn: Callable[[int, BodyConfig], None] | None = None,
    ) -> None:
        self.context = SimulationContext(config=config or Config())
        if on_spawn is not None:
            self.context.bodies.subscribe(on_spawn)
        self.spawn_initial_bodies()

    @property
    def config(self) -> Config:
        return self.context.config

    @property
    def simulation_state(self) -> SimulationState:
        return self.context.simulation_state

    @property
    def trail_state(self) -> TrailState:
        return self.context.trail_state

    @property
    def running(self) -> bool:
        return self.context.simulation_state is SimulationState.RUNNING

    @property
    def trails_visible(self) -> bool:
        return self.context.trail_state is TrailState.SHOW

    def spawn(self, config: BodyConfig) -> int:
        return self.context.bodies.spawn(config)

    def spawn_initial_bodies(self) -> list[int]:
        return [self.spawn(body) for body in self.config.initial_bodies]

    def spawn_at_cursor(self, cursor: Sequence[float] | np.ndarray | None) -> int | None:
        if cursor is None:
            logger.debug("pointer outside viewport, spawn dropped")
            return None
        x, y = (float(v) for v in np.asarray(cursor, dtype=np.float64)[:2])
        return self.spawn(click_body_config(x, y))

    def toggle_simulation(self) -> SimulationState:
        ctx = self.context
        ctx.simulation_state = ctx.simulation_state.toggled()
        logger.info("simulation %s", ctx.simulation_state.value)
        return ctx.simulation_state

    def toggle_trails(self) -> TrailState:
        ctx = self.context
        ctx.trail_state = ctx.trail_state.toggled()
        logger.info("trails %s", ctx.trail_state.value)
        return ctx.trail_state

    def handle_key(self, key: str) -> bool:
        key = key.lower()
        if key == TOGGLE_RUN_KEY:
            self.toggle_simulation()
            return True
        if key == TOGGLE_TRAIL_KEY:
            self.toggle_trails()
            return True
        return False

    def physics_tick(self, real_dt: float) -> bool:
        if not self.running:
            return False
        physics_tick(self.context, real_dt)
        return True

    def record_trails(self) -> list[int]:
        if not (self.running and self.trails_visible):
            return []
        bodies = self.context.bodies
        changed: list[int] = []
        for handle, body in bodies.iterate():
            cfg = bodies.config(handle)
            self.context.trails.record(
                handle,
                body.pos,
                capacity=cfg.trail_length,
                color=cfg.trail_color or cfg.color,
                decay=cfg.trail_decay,
            )
            changed.append(handle)
        return changed

    def frame(self, real_dt: float) -> FrameResult:
        """One presentation frame: due physics ticks, then trail recording."""
        clock = self.context.clock
        assert clock is not None
        result = FrameResult()
        if not self.running:
            # elapsed time while stopped is never simulated
            clock.reset()
            return result
        due = clock.advance(real_dt)
        for _ in range(due):
            self.physics_tick(clock.tick_seconds)
            result.ticks += 1
        result.trails_changed = self.record_trails()
        return result

    def render_bodies(self) -> tuple[np.ndarray, np.ndarray]:
        bodies = self.context.bodies
        return bodies.pos.copy(), bodies.radius.copy()

    def trail_snapshot(self, handle: int) -> np.ndarray:
        return self.context.trails.snapshot(handle)

    def diagnostics(self) -> dict[str, float | int]:
        ctx = self.context
        info: dict[str, float | int] = {
            "ticks": ctx.ticks,
            "time": ctx.sim_time,
            "bodies": len(ctx.bodies),
        }
        if isinstance(ctx.model, PairwiseGravity):
            info["energy"] = total_energy(ctx.bodies, ctx.model.G)
        info["momentum"] = float(np.linalg.norm(linear_momentum(ctx.bodies)))
        return info
