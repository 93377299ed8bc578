from __future__ import annotations

from dataclasses import dataclass
import math

from tessera_chart.backend import DrawingBackend, HTextAnchor, VTextAnchor, saved_state, set_font_style, text_size
from tessera_chart.geometry import Rect, RectSize
from tessera_chart.styles import FontStyle


@dataclass(frozen=True)
class Label:
    """A single line of text, anchored inside its rectangle and optionally rotated.

    `rotation` is in degrees, clockwise on screen. Anchors position the rotated
    text's bounding box, so a "left" label touches the left edge whatever its angle.
    """

    font_style: FontStyle
    h_anchor: HTextAnchor
    v_anchor: VTextAnchor
    rotation: float
    text: str

    @property
    def _abs_cos_sin(self) -> tuple[float, float]:
        rad = math.radians(self.rotation)
        return abs(math.cos(rad)), abs(math.sin(rad))

    def rotated_size(self, size: RectSize) -> RectSize:
        w, h = size
        acr, asr = self._abs_cos_sin
        return (w * acr + h * asr, w * asr + h * acr)

    def minsize(self, ctx: DrawingBackend) -> RectSize:
        with saved_state(ctx):
            set_font_style(ctx, self.font_style)
            size = text_size(ctx, self.text)
        return self.rotated_size(size)

    def pivot(self, size: RectSize, rect: Rect) -> tuple[float, float]:
        """Centre of the rotated text box for unrotated text `size` placed in `rect`."""

        rw, rh = self.rotated_size(size)
        x1, y1, x2, y2 = rect.p1.x, rect.p1.y, rect.p2.x, rect.p2.y
        if self.h_anchor == "left":
            x = x1 + rw / 2
        elif self.h_anchor == "centre":
            x = (x1 + x2) / 2
        elif self.h_anchor == "right":
            x = x2 - rw / 2
        else:
            raise ValueError(f"unknown horizontal anchor: {self.h_anchor}")
        if self.v_anchor == "top":
            y = y1 + rh / 2
        elif self.v_anchor == "centre":
            y = (y1 + y2) / 2
        elif self.v_anchor == "bottom":
            y = y2 - rh / 2
        else:
            raise ValueError(f"unknown vertical anchor: {self.v_anchor}")
        return x, y

    def render(self, ctx: DrawingBackend, rect: Rect) -> None:
        with saved_state(ctx):
            set_font_style(ctx, self.font_style)
            w, h = text_size(ctx, self.text)
            x, y = self.pivot((w, h), rect)
            ctx.translate(x, y)
            ctx.rotate(math.radians(self.rotation))
            ctx.move_to(-w / 2, h / 2)
            ctx.show_text(self.text)

    def to_renderable(self) -> "Label":
        return self


def label(fs: FontStyle, hta: HTextAnchor, vta: VTextAnchor, text: str) -> Label:
    return rlabel(fs, hta, vta, 0.0, text)


def rlabel(fs: FontStyle, hta: HTextAnchor, vta: VTextAnchor, rotation: float, text: str) -> Label:
    return Label(font_style=fs, h_anchor=hta, v_anchor=vta, rotation=float(rotation), text=text)
