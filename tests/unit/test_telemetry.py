import pytest
from pydantic import ValidationError
from shared.contracts.v1.ipc_wire import SCHEMA_V1, TelemetryEnvelope
from shared.contracts.v1.telemetry import TrackTelemetry


def test_api_defaults_to_v1():
    t = TrackTelemetry(state="IDLE", frame_index=1, ts=123.0)
    assert t.api == "v1"
    assert t.roi is None and t.episode_id is None


def test_telemetry_carries_roi_as_list_in_json():
    t = TrackTelemetry(state="TRACKING", frame_index=4, episode_id=2, roi=(1, 2, 3, 4), ts=1.0)
    assert t.model_dump(mode="json")["roi"] == [1, 2, 3, 4]


def test_fps_is_optional():
    t = TrackTelemetry(state="DEGRADED", frame_index=1, ts=1.0, fps=27.5)
    assert t.fps == pytest.approx(27.5, rel=1e-6)


def test_state_literal_is_enforced():
    with pytest.raises(ValidationError):
        TrackTelemetry(state="RUN", frame_index=1, ts=1.0)  # type: ignore[arg-type]


def test_envelope_schema_version():
    env = TelemetryEnvelope(msg_id="x", topic="track", data={"state": "IDLE"})
    assert env.schema_version == SCHEMA_V1
    assert env.ts.tzinfo is not None
