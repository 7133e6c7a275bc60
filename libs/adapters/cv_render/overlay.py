from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import cv2
from domain.geometry import Rect
from domain.tracking.session import OverlayPlan
from ports.vision import Frame, OverlayRendererPort

Color = tuple[int, int, int]  # BGR


@dataclass(frozen=True)
class RectStyle:
    color: Color
    thickness: int = 4


PENDING_STYLE = RectStyle(color=(255, 255, 255))
ACTIVE_STYLE = RectStyle(color=(0, 0, 255))


def _draw(image: Any, rect: Rect, style: RectStyle) -> None:
    cv2.rectangle(
        image,
        (rect.x, rect.y),
        (rect.right - 1, rect.bottom - 1),
        style.color,
        style.thickness,
    )


class OpenCVOverlayRenderer(OverlayRendererPort):
    """Burns an ``OverlayPlan`` into a copy of the frame.

    The preview crop is cut from the untouched source frame, so outlines drawn
    this iteration never leak into the magnified preview.
    """

    def __init__(
        self, pending: RectStyle = PENDING_STYLE, active: RectStyle = ACTIVE_STYLE
    ) -> None:
        self.pending = pending
        self.active = active

    def render(self, frame: Frame, plan: OverlayPlan) -> Any:
        canvas = frame.image.copy()
        if plan.pending is not None:
            _draw(canvas, plan.pending, self.pending)
        if plan.tracked is not None:
            _draw(canvas, plan.tracked, self.active)
        if plan.preview_src is not None and plan.preview_dst is not None:
            src, dst = plan.preview_src, plan.preview_dst
            crop = frame.image[src.y : src.bottom, src.x : src.right]
            if crop.size:
                canvas[dst.y : dst.bottom, dst.x : dst.right] = cv2.resize(
                    crop, (dst.width, dst.height)
                )
        return canvas
