from __future__ import annotations

import logging

import numpy as np
import pytest

from three_body.app.sim_controller import SimulationController, click_body_config
from three_body.core.state import BodyConfig, Config
from three_body.core.states import SimulationState, TrailState


def _two_body_config(**kwargs: float) -> Config:
    return Config(
        initial_bodies=(
            BodyConfig(position=(0.0, 0.0, 0.0), trail_length=3),
            BodyConfig(position=(10.0, 0.0, 0.0), trail_length=3),
        ),
        **kwargs,
    )


def test_initial_states() -> None:
    controller = SimulationController(_two_body_config())
    assert controller.simulation_state is SimulationState.STOPPED
    assert controller.trail_state is TrailState.SHOW
    assert len(controller.context.bodies) == 2


def test_toggling_twice_restores_state() -> None:
    controller = SimulationController()
    assert controller.toggle_simulation() is SimulationState.RUNNING
    assert controller.toggle_simulation() is SimulationState.STOPPED
    assert controller.toggle_trails() is TrailState.HIDE
    assert controller.toggle_trails() is TrailState.SHOW


def test_state_transitions_are_pure() -> None:
    assert SimulationState.STOPPED.toggled() is SimulationState.RUNNING
    assert SimulationState.RUNNING.toggled() is SimulationState.STOPPED
    assert TrailState.SHOW.toggled() is TrailState.HIDE
    assert TrailState.HIDE.toggled() is TrailState.SHOW


def test_handle_key_routes_toggles() -> None:
    controller = SimulationController()
    assert controller.handle_key("Space")
    assert controller.running
    assert controller.handle_key("t")
    assert not controller.trails_visible
    assert not controller.handle_key("x")
    assert controller.running
    assert not controller.trails_visible


def test_stopped_frame_does_nothing() -> None:
    controller = SimulationController(_two_body_config(tick_rate=4.0))
    before = controller.context.bodies.pos.copy()

    result = controller.frame(1.0)

    assert result.ticks == 0
    assert result.trails_changed == []
    assert np.array_equal(controller.context.bodies.pos, before)
    assert len(controller.context.trails) == 0


def test_stopped_frames_discard_partial_tick() -> None:
    controller = SimulationController(_two_body_config(tick_rate=4.0))
    controller.toggle_simulation()
    assert controller.frame(0.125).ticks == 0

    controller.toggle_simulation()
    controller.frame(0.125)
    controller.toggle_simulation()

    assert controller.frame(0.125).ticks == 0
    assert controller.frame(0.125).ticks == 1


def test_long_stopped_frame_drops_no_ticks(caplog: pytest.LogCaptureFixture) -> None:
    controller = SimulationController(_two_body_config(tick_rate=4.0))
    caplog.set_level(logging.DEBUG, logger="three_body.core.run")

    controller.frame(10.0)

    assert not any("dropping" in record.getMessage() for record in caplog.records)


def test_two_body_tick_through_controller() -> None:
    controller = SimulationController(_two_body_config(timestep=1.0, tick_rate=1.0))
    controller.toggle_simulation()

    result = controller.frame(1.0)

    assert result.ticks == 1
    pos, radius = controller.render_bodies()
    assert np.allclose(pos[0], [1.1334e-12, 0.0, 0.0], rtol=1e-12, atol=0.0)
    assert np.allclose(radius, [1.0, 1.0])
    assert controller.diagnostics()["ticks"] == 1


def test_timestep_scales_each_tick() -> None:
    config = Config(
        initial_bodies=(BodyConfig(velocity=(1.0, 0.0, 0.0)),),
        timestep=100.0,
        tick_rate=4.0,
    )
    controller = SimulationController(config)
    controller.toggle_simulation()
    result = controller.frame(0.5)

    assert result.ticks == 2
    assert np.allclose(controller.context.bodies.pos[0], [50.0, 0.0, 0.0])
    assert np.isclose(controller.context.sim_time, 50.0)


def test_trails_record_after_physics_when_running_and_shown() -> None:
    controller = SimulationController(_two_body_config(tick_rate=4.0))
    controller.toggle_simulation()

    result = controller.frame(0.25)
    assert result.trails_changed == [0, 1]
    assert controller.trail_snapshot(0).shape == (1, 3)
    assert np.allclose(
        controller.trail_snapshot(1)[0],
        controller.context.bodies.pos[1].astype(np.float32),
    )

    for _ in range(5):
        controller.frame(0.25)
    assert controller.trail_snapshot(0).shape == (3, 3)


def test_hidden_trails_do_not_record() -> None:
    controller = SimulationController(_two_body_config(tick_rate=4.0))
    controller.toggle_simulation()
    controller.frame(0.25)
    controller.toggle_trails()

    result = controller.frame(0.25)
    assert result.ticks == 1
    assert result.trails_changed == []
    assert controller.trail_snapshot(0).shape == (1, 3)

    controller.toggle_trails()
    controller.frame(0.25)
    assert controller.trail_snapshot(0).shape == (2, 3)


def test_stopped_record_leaves_trail_unchanged() -> None:
    controller = SimulationController(_two_body_config(tick_rate=4.0))
    controller.toggle_simulation()
    controller.frame(0.25)
    controller.toggle_simulation()
    before = controller.trail_snapshot(0).copy()

    assert controller.record_trails() == []
    assert not controller.physics_tick(0.25)
    assert np.array_equal(controller.trail_snapshot(0), before)


def test_click_spawn_builds_small_body() -> None:
    controller = SimulationController()
    handle = controller.spawn_at_cursor(np.array([1.5, -2.0], dtype=np.float32))

    assert handle == 0
    cfg = controller.context.bodies.config(handle)
    assert cfg == click_body_config(1.5, -2.0)
    assert cfg.radius == 0.2
    assert cfg.mass == 0.2
    assert cfg.trail_length == 20
    assert cfg.color is not None and cfg.trail_color is not None
    assert np.array_equal(controller.context.bodies.pos[handle], [1.5, -2.0, 0.0])
    assert np.array_equal(controller.context.bodies.vel[handle], [0.0, 0.0, 0.0])


def test_click_outside_viewport_is_dropped() -> None:
    controller = SimulationController(_two_body_config())
    assert controller.spawn_at_cursor(None) is None
    assert len(controller.context.bodies) == 2


def test_spawn_while_stopped_does_not_move() -> None:
    controller = SimulationController(_two_body_config(tick_rate=4.0))
    handle = controller.spawn_at_cursor((0.0, 5.0))
    controller.frame(1.0)
    assert np.array_equal(controller.context.bodies.pos[handle], [0.0, 5.0, 0.0])

    controller.toggle_simulation()
    controller.frame(0.25)
    assert not np.array_equal(controller.context.bodies.pos[handle], [0.0, 5.0, 0.0])


def test_spawn_listener_sees_initial_and_clicked_bodies() -> None:
    seen: list[int] = []
    controller = SimulationController(
        _two_body_config(), on_spawn=lambda handle, cfg: seen.append(handle)
    )
    controller.spawn_at_cursor((1.0, 1.0))
    assert seen == [0, 1, 2]


def test_empty_controller_frames_are_noops() -> None:
    controller = SimulationController(Config(tick_rate=4.0))
    controller.toggle_simulation()
    result = controller.frame(0.5)
    assert result.ticks == 2
    assert result.trails_changed == []
    info = controller.diagnostics()
    assert info["bodies"] == 0
    assert info["energy"] == 0.0
    assert info["momentum"] == 0.0
