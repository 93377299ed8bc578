from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from tessera_chart.backend import DrawingBackend, saved_state, set_clip_region, set_fill_style, set_line_style, stroke_lines
from tessera_chart.geometry import Point, Rect
from tessera_chart.styles import FillStyle, LineStyle


@runtime_checkable
class Plot(Protocol):
    """Anything a legend can show a sample of.

    Chart plots live outside this package; the legend only needs each one to
    draw its swatch into a rectangle of the legend's choosing.
    """

    def render_legend(self, ctx: DrawingBackend, rect: Rect) -> None:
        ...


@dataclass(frozen=True)
class LineSwatch:
    line_style: LineStyle

    def render_legend(self, ctx: DrawingBackend, rect: Rect) -> None:
        y = (rect.p1.y + rect.p2.y) / 2
        with saved_state(ctx):
            set_line_style(ctx, self.line_style)
            stroke_lines(ctx, [Point(rect.p1.x, y), Point(rect.p2.x, y)])


@dataclass(frozen=True)
class PointSwatch:
    fill_style: FillStyle
    radius: float = 3.0

    def render_legend(self, ctx: DrawingBackend, rect: Rect) -> None:
        cx = (rect.p1.x + rect.p2.x) / 2
        cy = (rect.p1.y + rect.p2.y) / 2
        with saved_state(ctx):
            set_fill_style(ctx, self.fill_style)
            ctx.fill_rect(cx - self.radius, cy - self.radius, cx + self.radius, cy + self.radius)


@dataclass(frozen=True)
class FillSwatch:
    fill_style: FillStyle

    def render_legend(self, ctx: DrawingBackend, rect: Rect) -> None:
        with saved_state(ctx):
            set_clip_region(ctx, rect.p1, rect.p2)
            set_fill_style(ctx, self.fill_style)
            ctx.paint()
