"""Exact pairwise gravity between all bodies."""

from __future__ import annotations

import numpy as np

from ..state.bodies import BodyStore


# Tuned for the simulation's distance/mass/time units, not SI.
G = 1.1334e-11


class PairwiseGravity:
    """Accumulates mutual attraction over every unordered pair.

    Each pair is visited once and its contribution is applied to both
    bodies with opposite signs. Coincident pairs contribute nothing.
    """

    def __init__(self, G: float = G) -> None:
        self.G = float(G)

    def accumulate(self, bodies: BodyStore) -> None:
        n = len(bodies)
        if n < 2:
            return
        i, j, fpum = _pair_terms(bodies.pos, self.G)
        if i.size == 0:
            return
        np.add.at(bodies.acc, i, fpum * bodies.mass[j, np.newaxis])
        np.subtract.at(bodies.acc, j, fpum * bodies.mass[i, np.newaxis])


def pair_forces(
    pos: np.ndarray, G: float = G
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return ``(i, j, force_per_unit_mass)`` for every non-coincident pair i < j."""
    pos = np.asarray(pos, dtype=np.float64)
    if pos.ndim != 2 or pos.shape[1] != 3:
        raise ValueError("pos must have shape (N, 3)")
    return _pair_terms(pos, float(G))


def _pair_terms(
    pos: np.ndarray, G: float
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    i, j = np.triu_indices(pos.shape[0], k=1)
    delta = pos[j] - pos[i]
    dist2 = np.sum(delta * delta, axis=-1)
    keep = dist2 != 0.0
    i, j, delta, dist2 = i[keep], j[keep], delta[keep], dist2[keep]
    fpum = delta * (G / dist2)[:, np.newaxis]
    return i, j, fpum
