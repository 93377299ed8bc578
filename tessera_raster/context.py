from __future__ import annotations

from dataclasses import dataclass, replace
import math

import numpy as np
from PIL import Image, ImageDraw

from tessera_raster.canvas import RGBA, blend_coverage, fill_rect
from tessera_raster.draw_lines import draw_polyline
from tessera_raster.draw_text import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PX, draw_text, text_size


ClipBox = tuple[int, int, int, int]


@dataclass(frozen=True)
class GraphicsState:
    transform: np.ndarray
    clip: ClipBox | None = None
    fill_color: RGBA = (0, 0, 0, 255)
    line_color: RGBA = (0, 0, 0, 255)
    line_width: float = 1.0
    font_family: str = DEFAULT_FONT_FAMILY
    font_size_px: float = DEFAULT_FONT_SIZE_PX


def _identity() -> np.ndarray:
    return np.eye(3, dtype=np.float64)


class RasterContext:
    """Stateful drawing context over an RGBA numpy canvas.

    Coordinates passed to drawing calls are user space; they go through the
    current affine transform to reach device pixels, where (0, 0) is the
    top-left corner and y grows downward. The clip region is kept as a device
    pixel box; clipping to a rotated rectangle clips to its bounding box.
    """

    def __init__(self, canvas: np.ndarray) -> None:
        if canvas.dtype != np.uint8 or canvas.ndim != 3 or canvas.shape[2] != 4:
            raise ValueError("canvas must be a uint8 array of shape (H, W, 4)")
        self.canvas = canvas
        self._state = GraphicsState(transform=_identity())
        self._stack: list[GraphicsState] = []
        self._current_point: tuple[float, float] | None = None
        self._path: list[tuple[float, float]] = []

    @property
    def width(self) -> int:
        return int(self.canvas.shape[1])

    @property
    def height(self) -> int:
        return int(self.canvas.shape[0])

    @property
    def state(self) -> GraphicsState:
        return self._state

    @property
    def depth(self) -> int:
        return len(self._stack)

    def save(self) -> None:
        self._stack.append(self._state)

    def restore(self) -> None:
        if not self._stack:
            raise RuntimeError("restore() without matching save()")
        self._state = self._stack.pop()

    # Transform

    def translate(self, dx: float, dy: float) -> None:
        m = _identity()
        m[0, 2] = dx
        m[1, 2] = dy
        self._state = replace(self._state, transform=self._state.transform @ m)

    def rotate(self, radians: float) -> None:
        c = math.cos(radians)
        s = math.sin(radians)
        m = _identity()
        m[0, 0] = c
        m[0, 1] = -s
        m[1, 0] = s
        m[1, 1] = c
        self._state = replace(self._state, transform=self._state.transform @ m)

    def user_to_device(self, x: float, y: float) -> tuple[float, float]:
        t = self._state.transform
        return (
            float(t[0, 0] * x + t[0, 1] * y + t[0, 2]),
            float(t[1, 0] * x + t[1, 1] * y + t[1, 2]),
        )

    # Clip and styles

    def clip_rect(self, x0: float, y0: float, x1: float, y1: float) -> None:
        corners = [self.user_to_device(x, y) for x, y in ((x0, y0), (x1, y0), (x0, y1), (x1, y1))]
        xs = [p[0] for p in corners]
        ys = [p[1] for p in corners]
        # Pixels whose centres fall inside the box.
        box = (
            int(math.ceil(min(xs) - 0.5)),
            int(math.ceil(min(ys) - 0.5)),
            int(math.ceil(max(xs) - 0.5)),
            int(math.ceil(max(ys) - 0.5)),
        )
        current = self._state.clip
        if current is not None:
            box = (max(box[0], current[0]), max(box[1], current[1]), min(box[2], current[2]), min(box[3], current[3]))
        self._state = replace(self._state, clip=box)

    def reset_clip(self) -> None:
        self._state = replace(self._state, clip=None)

    def set_fill_color(self, color: RGBA) -> None:
        self._state = replace(self._state, fill_color=tuple(int(c) for c in color))

    def set_line(self, color: RGBA, width: float = 1.0) -> None:
        self._state = replace(self._state, line_color=tuple(int(c) for c in color), line_width=float(width))

    def set_font(self, family: str, size_px: float) -> None:
        self._state = replace(self._state, font_family=family, font_size_px=float(size_px))

    # Drawing

    def paint(self) -> None:
        """Fill the whole clip region (or the whole canvas) with the fill colour."""

        view, _, _ = self._target()
        fill_rect(view, 0, 0, view.shape[1], view.shape[0], self._state.fill_color)

    def fill_rect(self, x0: float, y0: float, x1: float, y1: float) -> None:
        corners = [self.user_to_device(x, y) for x, y in ((x0, y0), (x1, y0), (x1, y1), (x0, y1))]
        self._fill_polygon(corners, self._state.fill_color)

    def move_to(self, x: float, y: float) -> None:
        self._current_point = self.user_to_device(x, y)
        self._path = [self._current_point]

    def line_to(self, x: float, y: float) -> None:
        if self._current_point is None:
            self.move_to(x, y)
            return
        self._current_point = self.user_to_device(x, y)
        self._path.append(self._current_point)

    def new_path(self) -> None:
        self._current_point = None
        self._path = []

    def stroke(self) -> None:
        view, ox, oy = self._target()
        points = [(int(math.floor(x)) - ox, int(math.floor(y)) - oy) for x, y in self._path]
        width = max(1, int(round(self._state.line_width)))
        draw_polyline(view, points, self._state.line_color, width=width)
        self.new_path()

    def show_text(self, text: str) -> None:
        """Draw `text` with its baseline origin at the current point."""

        if self._current_point is None:
            raise RuntimeError("show_text() requires a current point; call move_to() first")
        view, ox, oy = self._target()
        cx, cy = self._current_point
        matrix = np.empty((2, 3), dtype=np.float64)
        matrix[:, :2] = self._state.transform[:2, :2]
        matrix[0, 2] = cx - ox
        matrix[1, 2] = cy - oy
        draw_text(
            view,
            text,
            self._state.fill_color,
            matrix,
            font_family=self._state.font_family,
            font_size_px=self._state.font_size_px,
        )

    def text_size(self, text: str) -> tuple[float, float]:
        w, h = text_size(text, font_family=self._state.font_family, font_size_px=self._state.font_size_px)
        return (float(w), float(h))

    def _target(self) -> tuple[np.ndarray, int, int]:
        clip = self._state.clip
        if clip is None:
            return self.canvas, 0, 0
        x0 = min(max(0, clip[0]), self.width)
        y0 = min(max(0, clip[1]), self.height)
        x1 = min(max(x0, clip[2]), self.width)
        y1 = min(max(y0, clip[3]), self.height)
        return self.canvas[y0:y1, x0:x1], x0, y0

    def _fill_polygon(self, points: list[tuple[float, float]], color: RGBA) -> None:
        view, ox, oy = self._target()
        if view.shape[0] == 0 or view.shape[1] == 0:
            return
        mask = Image.new("L", (view.shape[1], view.shape[0]), 0)
        ImageDraw.Draw(mask).polygon([(x - ox, y - oy) for x, y in points], fill=255)
        blend_coverage(view, np.asarray(mask, dtype=np.float32) / 255.0, color)
