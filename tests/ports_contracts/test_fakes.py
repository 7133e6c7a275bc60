from __future__ import annotations

from adapters.cv_capture import FakeFrameSource
from adapters.cv_output import FakeFrameSink, ScriptedDisplay
from adapters.cv_tracker import FollowingTrackerPort, ScriptedTrackerPort, TrackerFactoryRecorder
from adapters.ipc_inproc import InprocTelemetryPubPort
from adapters.time import FakeClockPort, ManualClockPort
from domain.geometry import Rect
from ports.input import PointerEvent
from ports.vision import Frame


def test_frame_source_fake_yields_fresh_frames_then_end():
    src = FakeFrameSource(count=2, size=(64, 48))
    src.open()
    a = src.read()
    b = src.read()
    assert a is not None and b is not None
    assert a.size() == (64, 48)
    assert (a.index, b.index) == (1, 2)
    assert a.image is not b.image
    assert src.read() is None
    src.close()
    assert src.opened and src.closed


def test_scripted_display_delivers_events_after_frame():
    seen: list[PointerEvent] = []
    disp = ScriptedDisplay(script={1: [PointerEvent("press", 1, 2)]}, quit_after=2)
    disp.subscribe(seen.append)
    disp.present("img1")
    assert disp.poll_quit(20) is False
    assert seen == [PointerEvent("press", 1, 2)]
    disp.present("img2")
    assert disp.poll_quit(20) is True


def test_sink_fake_records():
    sink = FakeFrameSink()
    sink.write("x")
    sink.close()
    assert sink.images == ["x"] and sink.closed


def test_scripted_tracker_repeats_last_step():
    f = FakeFrameSource(count=1).read()
    assert f is not None
    t = ScriptedTrackerPort(steps=[(True, Rect(1, 1, 2, 2)), (False, None)])
    assert t.initialize(f, Rect(0, 0, 5, 5)) is True
    assert t.advance(f) == (True, Rect(1, 1, 2, 2))
    assert t.advance(f) == (False, None)
    assert t.advance(f) == (False, None)
    assert ScriptedTrackerPort().advance(f) == (False, None)


def test_following_tracker_moves_box():
    f = Frame(image=None, index=1)
    t = FollowingTrackerPort(dx=3, dy=-1)
    assert t.advance(f) == (False, None)
    t.initialize(f, Rect(10, 10, 4, 4))
    assert t.advance(f) == (True, Rect(13, 9, 4, 4))


def test_tracker_factory_hands_out_new_instances():
    factory = TrackerFactoryRecorder()
    assert factory() is not factory()
    assert len(factory.created) == 2


def test_inproc_pub_records_by_topic():
    pub = InprocTelemetryPubPort(maxlen=2)
    pub.publish("track", {"state": "IDLE"})
    pub.publish("other", {"n": 1})
    pub.publish("track", {"state": "TRACKING"})
    assert pub.topic("track") == [{"state": "TRACKING"}]
    pub.close()


def test_time_fakes():
    clk = FakeClockPort()
    t1 = clk.now()
    assert clk.now() >= t1

    manual = ManualClockPort(start=5.0)
    manual.advance(0.5)
    assert manual.now() == 5.5
