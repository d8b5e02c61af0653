"""Diagnostics namespace."""

from .bodies import (  # noqa: F401
    center_of_mass,
    kinetic_energy,
    linear_momentum,
    potential_energy,
    total_energy,
    total_mass,
)
