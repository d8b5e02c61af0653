"""2D orthographic viewport backed by VisPy."""

from __future__ import annotations

import numpy as np
from PySide6 import QtCore, QtWidgets
from vispy import app, scene

from ..core.state.bodies import BodyConfig
from .viz_utils import CursorTracker, compute_bounds, resolve_color, sphere_transform

app.use_app("pyside6")


class ViewportWidget(QtWidgets.QWidget):
    """Draws one sphere per body and one line strip per trail.

    ``clicked`` fires on a left press; read the point with ``cursor_world``.
    """

    clicked = QtCore.Signal()
    key_pressed = QtCore.Signal(str)

    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)

        self._canvas = scene.SceneCanvas(
            keys=None,
            bgcolor="black",
            size=(1280, 720),
        )
        self._view = self._canvas.central_widget.add_view()
        self._view.camera = scene.PanZoomCamera(rect=(-51.2, -28.8, 102.4, 57.6))
        self._view.camera.interactive = False

        self._spheres: dict[int, scene.visuals.Sphere] = {}
        self._trail_visuals: dict[int, scene.visuals.Line] = {}
        self._trail_colors: dict[int, tuple[float, float, float, float]] = {}
        self._trails_visible = True
        self._cursor = CursorTracker()

        self._canvas.events.mouse_press.connect(self._on_mouse_press)
        self._canvas.events.mouse_move.connect(self._on_mouse_move)
        self._canvas.events.key_press.connect(self._on_key_press)
        self._canvas.events.resize.connect(self._on_resize)
        # vispy has no leave event
        self._canvas.native.installEventFilter(self)

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._canvas.native)

    def focus_canvas(self) -> None:
        self._canvas.native.setFocus()

    def add_body(self, handle: int, config: BodyConfig) -> None:
        sphere = scene.visuals.Sphere(
            radius=1.0,
            method="ico",
            subdivisions=3,
            color=resolve_color(config.color),
            parent=self._view.scene,
        )
        sphere.transform = scene.transforms.MatrixTransform()
        sphere.transform.matrix = sphere_transform(
            np.asarray(config.position, dtype=np.float32), config.radius
        )
        self._spheres[handle] = sphere
        self._trail_colors[handle] = resolve_color(config.trail_color, config.color)

    def set_bodies(self, pos: np.ndarray, radius: np.ndarray) -> None:
        pos = np.asarray(pos, dtype=np.float32)
        for handle, sphere in self._spheres.items():
            if handle >= pos.shape[0]:
                sphere.visible = False
                continue
            sphere.visible = True
            sphere.transform.matrix = sphere_transform(pos[handle], float(radius[handle]))

    def set_trail(self, handle: int, points: np.ndarray) -> None:
        points = np.asarray(points, dtype=np.float32)
        visual = self._trail_visuals.get(handle)
        if visual is None:
            visual = scene.visuals.Line(
                color=self._trail_colors.get(handle, resolve_color(None)),
                width=1.5,
                parent=self._view.scene,
            )
            visual.set_gl_state("translucent", depth_test=False)
            self._trail_visuals[handle] = visual
        if points.shape[0] < 2:
            visual.visible = False
            return
        visual.set_data(pos=points)
        visual.visible = self._trails_visible

    def set_trails_visible(self, visible: bool) -> None:
        self._trails_visible = visible
        for visual in self._trail_visuals.values():
            visual.visible = visible

    def frame_all(self, pos: np.ndarray) -> None:
        center, radius = compute_bounds(np.asarray(pos, dtype=np.float32))
        half_h = max(radius * 1.5, 10.0)
        width, height = self._canvas.size
        half_w = half_h * width / max(height, 1)
        self._view.camera.rect = (
            float(center[0]) - half_w,
            float(center[1]) - half_h,
            2.0 * half_w,
            2.0 * half_h,
        )

    def cursor_world(self) -> np.ndarray | None:
        """World point under the pointer, or ``None`` when it is off the view."""
        rect = self._view.camera.rect
        return self._cursor.world(
            self._canvas.size,
            (rect.center[0], rect.center[1]),
            (rect.width, rect.height),
        )

    def eventFilter(self, watched: QtCore.QObject, event: QtCore.QEvent) -> bool:
        if watched is self._canvas.native and event.type() == QtCore.QEvent.Type.Leave:
            self._cursor.leave()
        return super().eventFilter(watched, event)

    def _on_mouse_press(self, event: object) -> None:
        if getattr(event, "button", None) != 1:
            return
        pos = event.pos
        self._cursor.move(pos[0], pos[1])
        self.clicked.emit()

    def _on_mouse_move(self, event: object) -> None:
        pos = event.pos
        self._cursor.move(pos[0], pos[1])

    def _on_key_press(self, event: object) -> None:
        key = getattr(event, "key", None)
        if key is None:
            return
        self.key_pressed.emit(str(key.name).lower())

    def _on_resize(self, event: object) -> None:
        width, height = event.size
        if width <= 0 or height <= 0:
            return
        rect = self._view.camera.rect
        half_h = rect.height * 0.5
        half_w = half_h * width / height
        cx, cy = rect.center
        self._view.camera.rect = (cx - half_w, cy - half_h, 2.0 * half_w, 2.0 * half_h)
