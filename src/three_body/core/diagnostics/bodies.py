"""Body store diagnostics."""

from __future__ import annotations

import numpy as np

from ..state.bodies import BodyStore


def total_mass(bodies: BodyStore) -> float:
    if len(bodies) == 0:
        return 0.0
    return float(np.sum(bodies.mass))


def center_of_mass(bodies: BodyStore) -> np.ndarray:
    if len(bodies) == 0:
        raise ValueError("cannot compute center of mass for empty body store")
    m = bodies.mass
    return np.sum(bodies.pos * m[:, np.newaxis], axis=0) / np.sum(m)


def linear_momentum(bodies: BodyStore) -> np.ndarray:
    if len(bodies) == 0:
        return np.zeros(3, dtype=np.float64)
    return np.sum(bodies.vel * bodies.mass[:, np.newaxis], axis=0)


def kinetic_energy(bodies: BodyStore) -> float:
    if len(bodies) == 0:
        return 0.0
    v2 = np.sum(bodies.vel**2, axis=1)
    return float(0.5 * np.sum(bodies.mass * v2))


def potential_energy(bodies: BodyStore, G: float) -> float:
    """Potential of the engine's force law, ``G m_i m_j ln r_ij`` per pair.

    Acceleration falls off as 1/r, so the potential is logarithmic.
    Coincident pairs are skipped, matching the force accumulator.
    """
    n = len(bodies)
    if n < 2:
        return 0.0
    iu = np.triu_indices(n, k=1)
    delta = bodies.pos[iu[1]] - bodies.pos[iu[0]]
    dist = np.sqrt(np.sum(delta * delta, axis=-1))
    keep = dist > 0.0
    mprod = bodies.mass[iu[0]] * bodies.mass[iu[1]]
    return float(G * np.sum(mprod[keep] * np.log(dist[keep])))


def total_energy(bodies: BodyStore, G: float) -> float:
    return kinetic_energy(bodies) + potential_energy(bodies, G)
