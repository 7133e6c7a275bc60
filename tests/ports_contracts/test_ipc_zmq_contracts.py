from __future__ import annotations

import json
import socket
import time
from contextlib import closing

import pytest

try:
    import zmq
except Exception:
    pytest.skip("pyzmq not installed", allow_module_level=True)

from adapters.ipc_zmq import ZmqTelemetryPubPort

pytestmark = pytest.mark.contract


def _free_port() -> int:
    with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind(("127.0.0.1", 0))
        return int(s.getsockname()[1])  # explicit int()


def test_zmq_telemetry_receive():
    ep = f"tcp://127.0.0.1:{_free_port()}"
    pub = ZmqTelemetryPubPort.bind_pub(ep)

    sub = zmq.Context.instance().socket(zmq.SUB)
    sub.setsockopt(zmq.LINGER, 0)
    sub.setsockopt(zmq.SUBSCRIBE, b"")
    sub.connect(ep)
    try:
        # classic slow-joiner: keep publishing until the SUB sees something
        end = time.time() + 1.0
        got = None
        while time.time() < end and got is None:
            pub.publish("track", {"state": "TRACKING", "roi": [1, 2, 3, 4]})
            if sub.poll(timeout=50):
                got = sub.recv_multipart()

        assert got is not None, "Did not receive telemetry within timeout"
        topic, data = got
        env = json.loads(data.decode("utf-8"))
        assert topic == b"track"
        assert env["schema_version"] == 1
        assert env["topic"] == "track"
        assert env["data"]["roi"] == [1, 2, 3, 4]
    finally:
        sub.close(0)
        pub.close()


def test_zmq_bind_conflict_is_runtime_error():
    ep = f"tcp://127.0.0.1:{_free_port()}"
    first = ZmqTelemetryPubPort.bind_pub(ep)
    try:
        with pytest.raises(RuntimeError):
            ZmqTelemetryPubPort.bind_pub(ep)
    finally:
        first.close()
