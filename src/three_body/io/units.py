"""Time units for expressing the simulation timestep."""

from __future__ import annotations

from typing import Any

import numpy as np


SECONDS_PER_YEAR = 3.1536e7

TIME_UNITS: dict[str, float] = {
    "second": 1.0,
    "minute": 60.0,
    "hour": 3_600.0,
    "day": 86_400.0,
    "month": SECONDS_PER_YEAR / 12.0,
    "year": SECONDS_PER_YEAR,
}


def unit_names() -> list[str]:
    return list(TIME_UNITS.keys())


def seconds_per(unit: str) -> float:
    key = unit.strip().lower()
    if key not in TIME_UNITS and key.endswith("s"):
        key = key[:-1]
    if key not in TIME_UNITS:
        raise ValueError(f"unknown time unit: {unit}")
    return TIME_UNITS[key]


def timestep_from_value(value: Any) -> float:
    """Simulated seconds per real second.

    Accepts a plain number or ``{"value": 2, "unit": "month"}``.
    """
    if isinstance(value, dict):
        if "value" not in value or "unit" not in value:
            raise ValueError("timestep object must have value and unit")
        seconds = float(value["value"]) * seconds_per(str(value["unit"]))
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = float(value)
    else:
        raise ValueError("timestep must be a number or a {value, unit} object")
    if not np.isfinite(seconds) or seconds <= 0.0:
        raise ValueError("timestep must be > 0")
    return seconds
