# libs/domain/geometry.py
"""Region geometry: clamp two raw points into a frame rectangle, then validate.

Every rectangle drawn, cropped or handed to a tracker goes through
``is_valid`` first. ``normalize`` is bound-correct by construction but may
still produce an empty rectangle.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


def _half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class Size:
    width: int
    height: int


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_origin(cls, origin: Point, size: Size) -> Rect:
        return cls(origin.x, origin.y, size.width, size.height)

    @classmethod
    def from_float(cls, x: float, y: float, w: float, h: float) -> Rect:
        """Round half up to whole pixels (10.5 -> 11)."""
        return cls(_half_up(x), _half_up(y), _half_up(w), _half_up(h))

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def as_tuple(self) -> tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height


def normalize(p1: Point, p2: Point, frame_w: int, frame_h: int) -> Rect:
    """Top-left/extent rectangle spanned by ``p1`` and ``p2``, clamped to the frame."""
    x = max(0, min(p1.x, p2.x))
    y = max(0, min(p1.y, p2.y))
    width = min(abs(p2.x - p1.x), frame_w - x)
    height = min(abs(p2.y - p1.y), frame_h - y)
    return Rect(x, y, width, height)


def is_valid(rect: Rect, frame_w: int, frame_h: int) -> bool:
    return (
        rect.width > 0
        and rect.height > 0
        and rect.x >= 0
        and rect.y >= 0
        and rect.right <= frame_w
        and rect.bottom <= frame_h
    )
