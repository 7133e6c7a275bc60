from __future__ import annotations

import logging
from typing import Final

from adapters.cv_capture.opencv import OpenCVCapture
from adapters.cv_output.window import HeadlessDisplay, OpenCVWindow
from adapters.cv_output.writer import NullSink, OpenCVVideoWriter
from adapters.cv_render.overlay import OpenCVOverlayRenderer
from adapters.cv_tracker.opencv import opencv_tracker_factory
from adapters.time import FakeClockPort
from domain.geometry import Rect
from domain.tracking import InteractionContext, OverlayPlan, PointerHandler, TrackingSession
from domain.tracking.session import TrackerFactory
from ports.ipc import TelemetryPubPort
from ports.time import ClockPort
from ports.vision import Frame, FrameSinkPort, FrameSourcePort, OverlayRendererPort, WindowPort
from shared.contracts.v1.telemetry import TrackTelemetry

from apps.tracker.settings import TrackerSettings

LOG: Final = logging.getLogger("tracker")

SCREEN_PREFIX: Final = "screen:"


def build_source(settings: TrackerSettings) -> FrameSourcePort:
    src = settings.source.strip()
    if src.startswith(SCREEN_PREFIX):
        from adapters.dx_capture.mss import MSSCapture

        monitor = src[len(SCREEN_PREFIX) :] or "1"
        if not monitor.isdigit():
            raise RuntimeError(f"Bad screen source: {settings.source!r}")
        return MSSCapture(monitor=int(monitor), output_size=settings.frame_size)
    return OpenCVCapture(src, output_size=settings.frame_size)


def build_sink(settings: TrackerSettings, fps: float) -> FrameSinkPort:
    if not settings.output:
        return NullSink()
    rate = fps if fps > 0 else settings.fallback_fps
    return OpenCVVideoWriter(settings.output, settings.fourcc, rate, settings.frame_size)


def build_display(settings: TrackerSettings) -> WindowPort:
    if settings.display:
        return OpenCVWindow(settings.window_name)
    return HeadlessDisplay()


def build_ipc(settings: TrackerSettings) -> TelemetryPubPort:
    if settings.ipc_impl == "zmq":
        from adapters.ipc_zmq import ZmqTelemetryPubPort

        return ZmqTelemetryPubPort.bind_pub(settings.telem_bind)

    from adapters.ipc_inproc import InprocTelemetryPubPort

    return InprocTelemetryPubPort.create()


class TrackerApp:
    """Frame loop: read -> step session -> render -> write/present -> pump events."""

    def __init__(
        self,
        settings: TrackerSettings,
        source: FrameSourcePort,
        sink: FrameSinkPort,
        display: WindowPort,
        tracker_factory: TrackerFactory,
        telemetry: TelemetryPubPort,
        renderer: OverlayRendererPort | None = None,
        clock: ClockPort | None = None,
    ) -> None:
        self.settings = settings
        self.source = source
        self.sink = sink
        self.display = display
        self.telemetry = telemetry
        self.renderer = renderer or OpenCVOverlayRenderer()
        self.clock = clock or FakeClockPort()

        self.ctx = InteractionContext(settings.frame_width, settings.frame_height)
        self.pointer = PointerHandler(self.ctx)
        self.session = TrackingSession(
            self.ctx,
            tracker_factory,
            preview=Rect(
                settings.preview_x,
                settings.preview_y,
                settings.preview_width,
                settings.preview_height,
            ),
            max_lost_frames=settings.max_lost_frames,
        )
        display.subscribe(self.pointer.handle)

        self.frames = 0
        self._period = 1.0 / max(0.1, settings.telem_hz)
        self._next_pub = 0.0
        self._last_state: str | None = None
        self._frame_times: list[float] = []

    def process_frame(self, frame: Frame) -> object:
        plan = self.session.step(frame)
        image = self.renderer.render(frame, plan)
        self._publish(frame, plan)
        return image

    def run_once(self) -> bool:
        """One iteration; False once the stream ended or quit was requested."""
        frame = self.source.read()
        if frame is None:
            LOG.info("End of stream after %d frames", self.frames)
            return False
        self.frames += 1
        image = self.process_frame(frame)
        self.sink.write(image)
        self.display.present(image)
        if self.display.poll_quit(self.settings.wait_ms):
            LOG.info("Quit requested")
            return False
        return True

    def run(self) -> int:
        try:
            while self.run_once():
                pass
        except KeyboardInterrupt:
            LOG.info("Interrupted; shutting down.")
        finally:
            self.close()
        return self.frames

    def close(self) -> None:
        for name, closer in (
            ("source", self.source.close),
            ("sink", self.sink.close),
            ("display", self.display.close),
            ("telemetry", self.telemetry.close),
        ):
            try:
                closer()
            except Exception as ex:
                LOG.warning("Failed to close %s: %r", name, ex)

    def _fps(self, now: float) -> float:
        self._frame_times.append(now)
        self._frame_times = [t for t in self._frame_times if now - t <= 1.0]
        return float(len(self._frame_times))

    def _publish(self, frame: Frame, plan: OverlayPlan) -> None:
        now = self.clock.now()
        fps = self._fps(now)
        changed = plan.state != self._last_state
        if not changed and now < self._next_pub:
            return
        episode = self.session.episode
        record = TrackTelemetry(
            state=plan.state,
            frame_index=frame.index,
            episode_id=episode.episode_id if episode else None,
            roi=plan.tracked.as_tuple() if plan.tracked else None,
            lost_streak=episode.lost_streak if episode else 0,
            ts=now,
            fps=fps,
        )
        self.telemetry.publish("track", record.model_dump())
        self._last_state = plan.state
        self._next_pub = now + self._period


def build_app(settings: TrackerSettings) -> TrackerApp:
    """Open every collaborator; raises RuntimeError before any frame is read."""
    tracker_factory = opencv_tracker_factory(settings.tracker_algorithm)
    source = build_source(settings)
    source.open()
    opened: list = [source]
    try:
        sink = build_sink(settings, source.fps())
        opened.append(sink)
        display = build_display(settings)
        opened.append(display)
        telemetry = build_ipc(settings)
    except Exception:
        for res in reversed(opened):
            res.close()
        raise
    return TrackerApp(settings, source, sink, display, tracker_factory, telemetry)
