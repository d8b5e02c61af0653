"""Config file I/O and the built-in three-body setup."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import numpy as np

from ..core.state.bodies import DEFAULT_TICK_RATE, BodyConfig, Config
from .units import timestep_from_value


logger = logging.getLogger(__name__)

ConfigDefinition = dict[str, Any]

_BODY_DEFAULTS = BodyConfig()


def load_config(path: str | Path) -> Config:
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    config = config_from_definition(data)
    logger.info(
        "loaded %d bodies from %s (timestep %g)",
        len(config.initial_bodies),
        path,
        config.timestep,
    )
    return config


def save_config(path: str | Path, defn: ConfigDefinition | Config) -> None:
    if isinstance(defn, Config):
        defn = config_to_definition(defn)
    Path(path).write_text(
        json.dumps(defn, indent=2, sort_keys=True),
        encoding="utf-8",
    )


def config_from_definition(defn: ConfigDefinition) -> Config:
    _validate_config_v1(defn)
    sim = defn["simulation"]
    bodies = tuple(_body_from_entry(entry) for entry in defn.get("bodies", []))
    config = Config(
        initial_bodies=bodies,
        timestep=timestep_from_value(sim["timestep"]),
        tick_rate=float(sim.get("tick_rate", DEFAULT_TICK_RATE)),
    )
    config.validate()
    return config


def config_to_definition(config: Config) -> ConfigDefinition:
    return {
        "schema_version": 1,
        "simulation": {
            "timestep": config.timestep,
            "tick_rate": config.tick_rate,
        },
        "bodies": [_body_to_entry(body) for body in config.initial_bodies],
    }


def default_definition() -> ConfigDefinition:
    """Three equal masses at rest on a 30-40-50 triangle, centred on the origin."""
    corners = center_coordinates(
        np.array([[0.0, 0.0, 0.0], [30.0, 0.0, 0.0], [0.0, 40.0, 0.0]])
    )
    colors = [
        ([1.0, 0.384, 0.153, 1.0], [1.0, 0.38, 0.143, 0.4]),
        ([0.153, 1.0, 0.384, 1.0], [0.143, 1.0, 0.38, 0.4]),
        ([0.384, 0.153, 1.0, 1.0], [0.38, 0.143, 1.0, 0.4]),
    ]
    bodies = []
    for corner, (color, trail_color) in zip(corners, colors):
        bodies.append(
            {
                "radius": 1.0,
                "mass": 1.0,
                "position": corner.tolist(),
                "velocity": [0.0, 0.0, 0.0],
                "color": color,
                "trail_color": trail_color,
                "trail_length": 300,
            }
        )
    return {
        "schema_version": 1,
        "metadata": {
            "name": "3 Body Problem",
            "description": "Three equal masses released from rest.",
        },
        "simulation": {
            "timestep": {"value": 2, "unit": "month"},
            "tick_rate": 64.0,
        },
        "bodies": bodies,
    }


def default_config() -> Config:
    return config_from_definition(default_definition())


def center_coordinates(points: np.ndarray) -> np.ndarray:
    points = np.asarray(points, dtype=np.float64)
    if points.size == 0:
        return points.reshape(0, 3)
    return points - np.mean(points, axis=0)


def _body_from_entry(entry: dict[str, Any]) -> BodyConfig:
    return BodyConfig(
        radius=float(entry.get("radius", _BODY_DEFAULTS.radius)),
        mass=float(entry.get("mass", _BODY_DEFAULTS.mass)),
        position=_vec3(entry.get("position", _BODY_DEFAULTS.position)),
        velocity=_vec3(entry.get("velocity", _BODY_DEFAULTS.velocity)),
        color=_color(entry.get("color")),
        trail_color=_color(entry.get("trail_color")),
        trail_length=int(entry.get("trail_length", _BODY_DEFAULTS.trail_length)),
        trail_decay=float(entry.get("trail_decay", _BODY_DEFAULTS.trail_decay)),
    )


def _body_to_entry(body: BodyConfig) -> dict[str, Any]:
    return {
        "radius": body.radius,
        "mass": body.mass,
        "position": list(body.position),
        "velocity": list(body.velocity),
        "color": list(body.color) if body.color is not None else None,
        "trail_color": list(body.trail_color) if body.trail_color is not None else None,
        "trail_length": body.trail_length,
        "trail_decay": body.trail_decay,
    }


def _vec3(value: Any) -> tuple[float, float, float]:
    x, y, z = (float(v) for v in value)
    return (x, y, z)


def _color(value: Any) -> tuple[float, float, float, float] | None:
    if value is None:
        return None
    r, g, b, a = (float(v) for v in value)
    return (r, g, b, a)


def _require(obj: dict[str, Any], key: str, ctx: str) -> Any:
    if key not in obj:
        raise ValueError(f"missing required field: {ctx}.{key}")
    return obj[key]


def _validate_number(value: Any, ctx: str, positive: bool = False) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{ctx} must be a number")
    if not np.isfinite(value):
        raise ValueError(f"{ctx} must be finite")
    if positive and value <= 0:
        raise ValueError(f"{ctx} must be > 0")


def _validate_vector(value: Any, size: int, ctx: str) -> None:
    if not isinstance(value, (list, tuple)) or len(value) != size:
        raise ValueError(f"{ctx} must have {size} values")
    for idx, v in enumerate(value):
        _validate_number(v, f"{ctx}[{idx}]")


def _validate_config_v1(data: Any) -> None:
    if not isinstance(data, dict):
        raise ValueError("config must be a JSON object")
    if data.get("schema_version") != 1:
        raise ValueError("schema_version must be 1")

    sim = _require(data, "simulation", "config")
    if not isinstance(sim, dict):
        raise ValueError("simulation must be an object")
    timestep = _require(sim, "timestep", "simulation")
    try:
        timestep_from_value(timestep)
    except ValueError as exc:
        raise ValueError(f"simulation.timestep invalid: {exc}") from exc
    if "tick_rate" in sim:
        _validate_number(sim["tick_rate"], "simulation.tick_rate", positive=True)

    bodies = data.get("bodies", [])
    if not isinstance(bodies, list):
        raise ValueError("bodies must be a list")
    for idx, entry in enumerate(bodies):
        ctx = f"bodies[{idx}]"
        if not isinstance(entry, dict):
            raise ValueError(f"{ctx} must be an object")
        for key in ("radius", "mass"):
            if key in entry:
                _validate_number(entry[key], f"{ctx}.{key}", positive=True)
        for key in ("position", "velocity"):
            if key in entry:
                _validate_vector(entry[key], 3, f"{ctx}.{key}")
        for key in ("color", "trail_color"):
            if entry.get(key) is not None:
                _validate_vector(entry[key], 4, f"{ctx}.{key}")
        if "trail_length" in entry:
            length = entry["trail_length"]
            if isinstance(length, bool) or not isinstance(length, int) or length < 0:
                raise ValueError(f"{ctx}.trail_length must be an integer >= 0")
        if "trail_decay" in entry:
            _validate_number(entry["trail_decay"], f"{ctx}.trail_decay")
            if entry["trail_decay"] < 0:
                raise ValueError(f"{ctx}.trail_decay must be >= 0")
