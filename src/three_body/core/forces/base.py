"""Force/model interfaces."""

from __future__ import annotations

from typing import Protocol

from ..state.bodies import BodyStore


class Model(Protocol):
    def accumulate(self, bodies: BodyStore) -> None:
        """Add this model's accelerations into ``bodies.acc`` (mutating)."""
