# libs/domain/tracking/session.py
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Final

from domain.geometry import Rect, is_valid, normalize
from ports.vision import Frame, TrackerPort

from .model import (
    Drawing,
    Episode,
    Idle,
    InteractionContext,
    PendingInit,
    StateName,
    Tracking,
    TrackingDegraded,
)

LOG: Final = logging.getLogger("tracker.session")

TrackerFactory = Callable[[], TrackerPort]


@dataclass
class OverlayPlan:
    """What to burn into one frame. Every rect here already passed ``is_valid``."""

    state: StateName = "IDLE"
    pending: Rect | None = None
    tracked: Rect | None = None
    preview_src: Rect | None = None
    preview_dst: Rect | None = None


class TrackingSession:
    """Per-frame draw-preview / (re)initialize / update cycle.

    Pure domain service: it owns the tracker for the current episode and
    decides what to draw, but never touches pixels itself.
    """

    def __init__(
        self,
        ctx: InteractionContext,
        tracker_factory: TrackerFactory,
        preview: Rect | None = None,
        max_lost_frames: int = 0,
    ) -> None:
        self.ctx: Final = ctx
        self._factory: Final = tracker_factory
        self._preview = preview
        self._max_lost = max(0, int(max_lost_frames))
        self._tracker: TrackerPort | None = None
        self._episodes = 0

    @property
    def episode(self) -> Episode | None:
        state = self.ctx.state
        if isinstance(state, (Tracking, TrackingDegraded)):
            return state.episode
        return None

    def step(self, frame: Frame) -> OverlayPlan:
        """Run one pipeline iteration; the step order is part of the contract."""
        plan = OverlayPlan()
        w, h = frame.width, frame.height

        state = self.ctx.state
        if isinstance(state, Drawing):
            pending = normalize(state.start, state.current, w, h)
            if is_valid(pending, w, h):
                plan.pending = pending

        state = self.ctx.state
        if isinstance(state, PendingInit):
            self._initialize(frame, state.rect)

        if self.ctx.is_tracking:
            self._advance(frame, plan)

        plan.state = self.ctx.state.name
        return plan

    def _initialize(self, frame: Frame, roi: Rect) -> None:
        # PendingInit is consumed here whatever the outcome; no automatic retry.
        if not is_valid(roi, frame.width, frame.height):
            LOG.info("Invalid ROI for tracking initialization: %s", roi.as_tuple())
            self.ctx.state = Idle()
            return
        try:
            tracker = self._factory()
        except RuntimeError as ex:
            LOG.warning("Tracker construction failed: %s", ex)
            self.ctx.state = Idle()
            return
        if not tracker.initialize(frame, roi):
            LOG.info("Tracker initialization failed for ROI %s", roi.as_tuple())
            self.ctx.state = Idle()
            return

        self._tracker = tracker
        self._episodes += 1
        LOG.info("Episode %d started with ROI %s", self._episodes, roi.as_tuple())
        self.ctx.state = Tracking(episode=Episode(episode_id=self._episodes, roi=roi))

    def _advance(self, frame: Frame, plan: OverlayPlan) -> None:
        episode = self.episode
        assert episode is not None and self._tracker is not None
        ok, rect = self._tracker.advance(frame)
        episode.frames += 1

        if not ok or rect is None or not is_valid(rect, frame.width, frame.height):
            episode.lost_streak += 1
            LOG.debug(
                "Episode %d lost on frame %d (streak=%d)",
                episode.episode_id,
                frame.index,
                episode.lost_streak,
            )
            if self._max_lost and episode.lost_streak >= self._max_lost:
                LOG.info(
                    "Episode %d ended after %d lost frames",
                    episode.episode_id,
                    episode.lost_streak,
                )
                self.ctx.state = Idle()
            else:
                self.ctx.state = TrackingDegraded(episode=episode)
            return

        episode.last_rect = rect
        episode.lost_streak = 0
        self.ctx.state = Tracking(episode=episode)
        plan.tracked = rect

        dst = self._preview
        if dst is None:
            return
        if is_valid(dst, frame.width, frame.height):
            plan.preview_src = rect
            plan.preview_dst = dst
        else:
            LOG.debug("Preview destination %s outside frame", dst.as_tuple())
