"""Run a config JSON without a window and report invariants."""

from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np

from three_body.core.diagnostics import (
    kinetic_energy,
    linear_momentum,
    total_energy,
    total_mass,
)
from three_body.core.forces import G
from three_body.core.run import SimulationContext, run
from three_body.io import default_config, load_config


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("config", type=Path, nargs="?", default=None)
    parser.add_argument("--steps", type=int, default=64 * 60)
    parser.add_argument("--sample-every", type=int, default=None)
    parser.add_argument("--out", type=Path, default=None)
    args = parser.parse_args()

    config = load_config(args.config) if args.config is not None else default_config()
    context = SimulationContext(config=config)
    for body in config.initial_bodies:
        context.bodies.spawn(body)

    e0 = total_energy(context.bodies, G)
    result = run(context, args.steps, sample_every=args.sample_every)
    bodies = result.context.bodies

    print("ticks:", context.ticks)
    print("sim time [days]:", context.sim_time / 86_400.0)
    print("total mass:", total_mass(bodies))
    print("momentum:", linear_momentum(bodies))
    print("KE:", kinetic_energy(bodies))
    print("dE:", total_energy(bodies, G) - e0)

    if args.out is not None and result.time is not None:
        np.savez_compressed(
            args.out,
            time=result.time,
            positions=result.positions,
            velocities=result.velocities,
        )
        print("saved samples to:", args.out)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
