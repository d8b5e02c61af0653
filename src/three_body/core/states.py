"""Run and trail visibility state machines."""

from __future__ import annotations

from enum import Enum


class SimulationState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"

    def toggled(self) -> "SimulationState":
        if self is SimulationState.RUNNING:
            return SimulationState.STOPPED
        return SimulationState.RUNNING


class TrailState(Enum):
    SHOW = "show"
    HIDE = "hide"

    def toggled(self) -> "TrailState":
        if self is TrailState.SHOW:
            return TrailState.HIDE
        return TrailState.SHOW
