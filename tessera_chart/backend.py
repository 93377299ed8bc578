from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Literal, Protocol, Sequence

from tessera_chart.geometry import Point, RectSize
from tessera_chart.styles import Color, FillStyle, FontStyle, LineStyle


HTextAnchor = Literal["left", "centre", "right"]
VTextAnchor = Literal["top", "centre", "bottom"]


class DrawingBackend(Protocol):
    """Drawing primitives the layout engine needs from a backend.

    Device space has its origin at the top-left with y growing downward.
    `save`/`restore` push and pop clip, styles and transform together.
    """

    def save(self) -> None:
        ...

    def restore(self) -> None:
        ...

    def clip_rect(self, x0: float, y0: float, x1: float, y1: float) -> None:
        ...

    def reset_clip(self) -> None:
        ...

    def set_fill_color(self, color: Color) -> None:
        ...

    def set_line(self, color: Color, width: float = 1.0) -> None:
        ...

    def set_font(self, family: str, size_px: float) -> None:
        ...

    def paint(self) -> None:
        ...

    def fill_rect(self, x0: float, y0: float, x1: float, y1: float) -> None:
        ...

    def translate(self, dx: float, dy: float) -> None:
        ...

    def rotate(self, radians: float) -> None:
        ...

    def move_to(self, x: float, y: float) -> None:
        ...

    def line_to(self, x: float, y: float) -> None:
        ...

    def stroke(self) -> None:
        ...

    def show_text(self, text: str) -> None:
        ...

    def text_size(self, text: str) -> tuple[float, float]:
        ...


@contextmanager
def saved_state(ctx: DrawingBackend) -> Iterator[DrawingBackend]:
    """Save backend state on entry and restore it on every exit path."""

    ctx.save()
    try:
        yield ctx
    finally:
        ctx.restore()


def set_clip_region(ctx: DrawingBackend, p1: Point, p2: Point) -> None:
    ctx.clip_rect(p1.x, p1.y, p2.x, p2.y)


def set_fill_style(ctx: DrawingBackend, style: FillStyle) -> None:
    ctx.set_fill_color(style.color)


def set_line_style(ctx: DrawingBackend, style: LineStyle) -> None:
    ctx.set_line(style.color, style.width)


def set_font_style(ctx: DrawingBackend, style: FontStyle) -> None:
    # Text is painted with the fill colour, so the font colour travels with it.
    ctx.set_font(style.face_name, style.size_px)
    ctx.set_fill_color(style.color)


def text_size(ctx: DrawingBackend, text: str) -> RectSize:
    w, h = ctx.text_size(text)
    return (float(w), float(h))


def stroke_lines(ctx: DrawingBackend, points: Sequence[Point]) -> None:
    if not points:
        return
    first, rest = points[0], points[1:]
    ctx.move_to(first.x, first.y)
    for p in rest:
        ctx.line_to(p.x, p.y)
    ctx.stroke()


def draw_text(ctx: DrawingBackend, hta: HTextAnchor, vta: VTextAnchor, p: Point, text: str) -> None:
    """Draw unrotated `text` so that the anchored corner/edge of its box lands on `p`."""

    w, h = text_size(ctx, text)
    ctx.move_to(_xadj(hta, p.x, w), _yadj(vta, p.y, h))
    ctx.show_text(text)


def _xadj(hta: HTextAnchor, x: float, w: float) -> float:
    if hta == "left":
        return x
    if hta == "centre":
        return x - w / 2
    if hta == "right":
        return x - w
    raise ValueError(f"unknown horizontal anchor: {hta}")


def _yadj(vta: VTextAnchor, y: float, h: float) -> float:
    # show_text draws from the baseline, so the top anchor moves down by the text height.
    if vta == "top":
        return y + h
    if vta == "centre":
        return y + h / 2
    if vta == "bottom":
        return y
    raise ValueError(f"unknown vertical anchor: {vta}")
