from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, TypeVar

from tessera_chart.backend import DrawingBackend, draw_text, saved_state, set_font_style, text_size
from tessera_chart.geometry import Point, Rect, RectSize, Vector, mkrect, pvadd
from tessera_chart.plot import Plot
from tessera_chart.styles import DEFAULT_LEGEND_STYLE, LegendStyle


T = TypeVar("T")


def group_by_label(entries: Sequence[tuple[str, T]]) -> list[tuple[str, list[T]]]:
    """Collect values sharing a label, keeping labels in first-occurrence order."""

    groups: dict[str, list[T]] = {}
    for label, value in entries:
        groups.setdefault(label, []).append(value)
    return list(groups.items())


def legend_spacer(ctx: DrawingBackend) -> float:
    """Gap between a swatch and its label: the width of one "X" in the current font."""

    gap, _ = text_size(ctx, "X")
    return gap


@dataclass(frozen=True)
class Legend:
    """Single-row legend; labels shared by several plots get one swatch slot each plot."""

    style: LegendStyle = DEFAULT_LEGEND_STYLE
    entries: tuple[tuple[str, Plot], ...] = field(default_factory=tuple)

    def groups(self) -> list[tuple[str, list[Plot]]]:
        return group_by_label(self.entries)

    def minsize(self, ctx: DrawingBackend) -> RectSize:
        labels = [label for label, _ in self.groups()]
        if not labels:
            return (0.0, 0.0)
        with saved_state(ctx):
            set_font_style(ctx, self.style.label_style)
            lsizes = [text_size(ctx, label) for label in labels]
            lgap = legend_spacer(ctx)
        n = float(len(lsizes))
        lm = self.style.margin
        pw = self.style.plot_size
        w = sum(lw + lgap for lw, _ in lsizes) + pw * (n + 1) + lm * (n - 1)
        h = max(lh for _, lh in lsizes)
        return (w, h)

    def render(self, ctx: DrawingBackend, rect: Rect) -> None:
        lm = self.style.margin
        lps = self.style.plot_size
        with saved_state(ctx):
            set_font_style(ctx, self.style.label_style)
            lgap = legend_spacer(ctx)
            cursor = rect.p1
            for label, plots in self.groups():
                w, _ = text_size(ctx, label)
                swatch_end = pvadd(cursor, Vector(lps, 0.0))
                swatch_rect = mkrect(cursor, rect.p1, swatch_end, rect.p2)
                for plot in plots:
                    plot.render_legend(ctx, swatch_rect)
                label_at = Point(swatch_end.x + lgap, rect.p1.y)
                draw_text(ctx, "left", "top", label_at, label)
                cursor = pvadd(label_at, Vector(w + lm, 0.0))

    def to_renderable(self) -> "Legend":
        return self


def legend(entries: Sequence[tuple[str, Plot]], style: LegendStyle = DEFAULT_LEGEND_STYLE) -> Legend:
    return Legend(style=style, entries=tuple(entries))
