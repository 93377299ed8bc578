from __future__ import annotations

from dataclasses import dataclass


RectSize = tuple[float, float]


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Vector:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Region between a top-left and a bottom-right corner.

    Nothing enforces `p1 <= p2`; layouts squeezed below their minimum size can
    hand out inverted rectangles and consumers are expected to cope.
    """

    p1: Point
    p2: Point

    @property
    def width(self) -> float:
        return self.p2.x - self.p1.x

    @property
    def height(self) -> float:
        return self.p2.y - self.p1.y


def pvadd(p: Point, v: Vector) -> Point:
    return Point(p.x + v.x, p.y + v.y)


def pvsub(p: Point, v: Vector) -> Point:
    return Point(p.x - v.x, p.y - v.y)


def mkrect(p1: Point, p2: Point, p3: Point, p4: Point) -> Rect:
    """Rect from the x of `p1`, y of `p2`, x of `p3` and y of `p4`."""

    return Rect(Point(p1.x, p2.y), Point(p3.x, p4.y))


def rect_from_size(width: float, height: float) -> Rect:
    return Rect(Point(0.0, 0.0), Point(float(width), float(height)))
