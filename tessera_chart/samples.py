from __future__ import annotations

from dataclasses import dataclass

from tessera_chart.backend import DrawingBackend, saved_state, stroke_lines
from tessera_chart.geometry import Point, Rect, RectSize
from tessera_chart.label import rlabel
from tessera_chart.legend import Legend, legend
from tessera_chart.plot import FillSwatch, LineSwatch, PointSwatch
from tessera_chart.renderable import Renderable, add_margins, empty_renderable, fill_background, grid, vertical
from tessera_chart.styles import DEFAULT_LEGEND_STYLE, LegendStyle, font_style, solid_fill_style, solid_line


@dataclass(frozen=True)
class CrossHairs:
    """Draws the rectangle's centre lines under its child."""

    child: Renderable

    def minsize(self, ctx: DrawingBackend) -> RectSize:
        return self.child.minsize(ctx)

    def render(self, ctx: DrawingBackend, rect: Rect) -> None:
        x1, y1, x2, y2 = rect.p1.x, rect.p1.y, rect.p2.x, rect.p2.y
        xa = (x1 + x2) / 2
        ya = (y1 + y2) / 2
        with saved_state(ctx):
            stroke_lines(ctx, [Point(x1, ya), Point(x2, ya)])
            stroke_lines(ctx, [Point(xa, y1), Point(xa, y2)])
        self.child.render(ctx, rect)


def label_sheet(rotation: float = 0.0, text: str = "Labels") -> Renderable:
    """3x3 grid showing `text` at every horizontal/vertical anchor combination."""

    white = solid_fill_style(1, 1, 1)
    blue = solid_fill_style(0.8, 0.8, 1)
    fs = font_style("sans", 30, weight="bold")
    rows = [
        [
            add_margins((20, 20, 20, 20), fill_background(blue, CrossHairs(rlabel(fs, h, v, rotation, text))))
            for h in ("left", "centre", "right")
        ]
        for v in ("top", "centre", "bottom")
    ]
    return fill_background(white, grid([1, 1, 1], [1, 1, 1], rows))


def legend_sample(style: LegendStyle = DEFAULT_LEGEND_STYLE) -> Legend:
    return legend(
        [
            ("price", LineSwatch(solid_line(2, 0.1, 0.3, 0.9))),
            ("price", PointSwatch(solid_fill_style(0.1, 0.3, 0.9))),
            ("volume", FillSwatch(solid_fill_style(0.6, 0.8, 0.6))),
            ("trend", LineSwatch(solid_line(1, 0.9, 0.2, 0.2))),
        ],
        style=style,
    )


def legend_sheet(style: LegendStyle = DEFAULT_LEGEND_STYLE) -> Renderable:
    """Legend padded and placed at the bottom of a white page."""

    body = vertical([(1.0, empty_renderable), (0.0, add_margins((10, 10, 10, 10), legend_sample(style)))])
    return fill_background(solid_fill_style(1, 1, 1), body)
