"""Main window: owns the controller and drives the presentation loop."""

from __future__ import annotations

from PySide6 import QtCore, QtWidgets

from ..core.state.bodies import BodyConfig, Config
from .sim_controller import SimulationController
from .viewport import ViewportWidget


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, config: Config) -> None:
        super().__init__()
        self.resize(1280, 720)
        self.setWindowTitle("3 Body Problem")

        self._viewport = ViewportWidget(self)
        self._viewport.clicked.connect(self._on_clicked)
        self._viewport.key_pressed.connect(self._on_key)
        self.setCentralWidget(self._viewport)
        self._viewport.focus_canvas()

        self._controller = SimulationController(config, on_spawn=self._on_body_spawned)
        pos, radius = self._controller.render_bodies()
        self._viewport.set_bodies(pos, radius)
        self._viewport.frame_all(pos)

        self._elapsed = QtCore.QElapsedTimer()
        self._elapsed.start()
        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(16)
        self._timer.timeout.connect(self._on_tick)
        self._timer.start()

        self._update_status()

    @property
    def controller(self) -> SimulationController:
        return self._controller

    def _on_key(self, key: str) -> None:
        if self._controller.handle_key(key):
            self._after_toggle()

    def _after_toggle(self) -> None:
        self._viewport.set_trails_visible(self._controller.trails_visible)
        self._update_status()

    def _on_clicked(self) -> None:
        if self._controller.spawn_at_cursor(self._viewport.cursor_world()) is not None:
            self._update_status()

    def _on_body_spawned(self, handle: int, config: BodyConfig) -> None:
        self._viewport.add_body(handle, config)

    def _on_tick(self) -> None:
        real_dt = self._elapsed.restart() / 1000.0
        result = self._controller.frame(real_dt)
        if result.ticks:
            pos, radius = self._controller.render_bodies()
            self._viewport.set_bodies(pos, radius)
        for handle in result.trails_changed:
            self._viewport.set_trail(handle, self._controller.trail_snapshot(handle))
        if result.ticks:
            self._update_status()

    def _update_status(self) -> None:
        info = self._controller.diagnostics()
        run = self._controller.simulation_state.value
        trails = self._controller.trail_state.value
        days = float(info["time"]) / 86_400.0
        self.statusBar().showMessage(
            f"{run} | trails {trails} | bodies {info['bodies']} | t = {days:.1f} d"
            " | space: run/stop  t: trails  click: spawn"
        )
