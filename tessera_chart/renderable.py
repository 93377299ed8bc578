from __future__ import annotations

from dataclasses import dataclass
from itertools import accumulate
from typing import Protocol, Sequence, runtime_checkable

from tessera_chart.backend import DrawingBackend, saved_state, set_clip_region, set_fill_style
from tessera_chart.errors import LayoutError
from tessera_chart.geometry import Point, Rect, RectSize, Vector, pvadd, pvsub
from tessera_chart.styles import FillStyle


@runtime_checkable
class Renderable(Protocol):
    """A graphic element that can report a minimum size and draw itself into a rect."""

    def minsize(self, ctx: DrawingBackend) -> RectSize:
        ...

    def render(self, ctx: DrawingBackend, rect: Rect) -> None:
        ...


@runtime_checkable
class ToRenderable(Protocol):
    def to_renderable(self) -> Renderable:
        ...


def as_renderable(value: Renderable | ToRenderable) -> Renderable:
    if isinstance(value, ToRenderable):
        return value.to_renderable()
    if isinstance(value, Renderable):
        return value
    raise TypeError(f"{type(value).__name__} is not renderable")


@dataclass(frozen=True)
class EmptyRenderable:
    def minsize(self, ctx: DrawingBackend) -> RectSize:
        return (0.0, 0.0)

    def render(self, ctx: DrawingBackend, rect: Rect) -> None:
        return None


empty_renderable = EmptyRenderable()


@dataclass(frozen=True)
class Margins:
    top: float
    bottom: float
    left: float
    right: float
    child: Renderable

    def minsize(self, ctx: DrawingBackend) -> RectSize:
        w, h = self.child.minsize(ctx)
        return (w + self.left + self.right, h + self.top + self.bottom)

    def render(self, ctx: DrawingBackend, rect: Rect) -> None:
        inner = Rect(
            pvadd(rect.p1, Vector(self.left, self.top)),
            pvsub(rect.p2, Vector(self.right, self.bottom)),
        )
        self.child.render(ctx, inner)


def add_margins(margins: tuple[float, float, float, float], child: Renderable | ToRenderable) -> Margins:
    """Wrap `child` in `(top, bottom, left, right)` margins."""

    t, b, l, r = margins
    return Margins(top=t, bottom=b, left=l, right=r, child=as_renderable(child))


@dataclass(frozen=True)
class Background:
    fill_style: FillStyle
    child: Renderable

    def minsize(self, ctx: DrawingBackend) -> RectSize:
        return self.child.minsize(ctx)

    def render(self, ctx: DrawingBackend, rect: Rect) -> None:
        with saved_state(ctx):
            set_clip_region(ctx, rect.p1, rect.p2)
            set_fill_style(ctx, self.fill_style)
            ctx.paint()
        self.child.render(ctx, rect)


def fill_background(fill_style: FillStyle, child: Renderable | ToRenderable) -> Background:
    return Background(fill_style=fill_style, child=as_renderable(child))


def allocate(extra: float, weights: Sequence[float], base: Sequence[float]) -> list[float]:
    """Add `extra` to `base`, split in proportion to `weights`.

    Entries of `base` past the end of `weights` get nothing; surplus weights
    still count toward the total. A zero weight total hands out nothing.
    """

    total = float(sum(weights))
    if total == 0.0:
        return [float(v) for v in base]
    extras = [extra * w / total for w in weights]
    return [float(v) + (extras[i] if i < len(extras) else 0.0) for i, v in enumerate(base)]


@dataclass(frozen=True)
class Grid:
    """Rectangular arrangement of elements with weighted stretching per column and row."""

    col_weights: tuple[float, ...]
    row_weights: tuple[float, ...]
    cells: tuple[tuple[Renderable, ...], ...]

    def __post_init__(self) -> None:
        if self.cells:
            ncols = len(self.cells[0])
            for i, row in enumerate(self.cells):
                if len(row) != ncols:
                    raise LayoutError(f"grid row {i} has {len(row)} cells, expected {ncols}")

    def _sizes(self, ctx: DrawingBackend) -> list[list[RectSize]]:
        return [[cell.minsize(ctx) for cell in row] for row in self.cells]

    @staticmethod
    def _column_widths(sizes: list[list[RectSize]]) -> list[float]:
        if not sizes:
            return []
        return [max(row[c][0] for row in sizes) for c in range(len(sizes[0]))]

    @staticmethod
    def _row_heights(sizes: list[list[RectSize]]) -> list[float]:
        return [max((h for _, h in row), default=0.0) for row in sizes]

    def minsize(self, ctx: DrawingBackend) -> RectSize:
        sizes = self._sizes(ctx)
        return (float(sum(self._column_widths(sizes))), float(sum(self._row_heights(sizes))))

    def boundaries(self, ctx: DrawingBackend, rect: Rect) -> tuple[list[float], list[float]]:
        """Column x boundaries and row y boundaries for `rect`, N+1 per axis."""

        sizes = self._sizes(ctx)
        widths = self._column_widths(sizes)
        heights = self._row_heights(sizes)
        widths = allocate(rect.width - sum(widths), self.col_weights, widths)
        heights = allocate(rect.height - sum(heights), self.row_weights, heights)
        xs = list(accumulate(widths, initial=rect.p1.x))
        ys = list(accumulate(heights, initial=rect.p1.y))
        return xs, ys

    def render(self, ctx: DrawingBackend, rect: Rect) -> None:
        xs, ys = self.boundaries(ctx, rect)
        for row, y0, y1 in zip(self.cells, ys, ys[1:]):
            for cell, x0, x1 in zip(row, xs, xs[1:]):
                cell.render(ctx, Rect(Point(x0, y0), Point(x1, y1)))


def grid(
    col_weights: Sequence[float],
    row_weights: Sequence[float],
    cells: Sequence[Sequence[Renderable | ToRenderable]],
) -> Grid:
    return Grid(
        col_weights=tuple(float(w) for w in col_weights),
        row_weights=tuple(float(w) for w in row_weights),
        cells=tuple(tuple(as_renderable(c) for c in row) for row in cells),
    )


def vertical(weighted: Sequence[tuple[float, Renderable | ToRenderable]]) -> Grid:
    """Stack elements top to bottom; each weight stretches its own row."""

    return grid([1.0], [w for w, _ in weighted], [[r] for _, r in weighted])


def horizontal(weighted: Sequence[tuple[float, Renderable | ToRenderable]]) -> Grid:
    """Lay elements out left to right; each weight stretches its own column."""

    return grid([w for w, _ in weighted], [1.0], [[r for _, r in weighted]])
