"""Forces and model utilities."""

from .base import Model  # noqa: F401
from .nbody_gravity import G, PairwiseGravity, pair_forces  # noqa: F401
