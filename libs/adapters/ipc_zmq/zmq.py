import json
import uuid
from collections.abc import Mapping
from typing import Any

import zmq
from ports.ipc import TelemetryPubPort
from shared.contracts.v1.ipc_wire import TelemetryEnvelope

# --------- Common helpers ---------


def _new_ctx() -> zmq.Context:
    # Using the global instance avoids thread-happy leaks and is cheap.
    return zmq.Context.instance()


def _set_common(sock: zmq.Socket, rcv_ms: int = 500, snd_ms: int = 500) -> None:
    sock.setsockopt(zmq.LINGER, 0)
    sock.setsockopt(zmq.RCVTIMEO, rcv_ms)
    sock.setsockopt(zmq.SNDTIMEO, snd_ms)


# --------- Telemetry (PUB) ---------


class ZmqTelemetryPubPort(TelemetryPubPort):
    """Publishes ``[topic, TelemetryEnvelope json]`` multipart messages."""

    def __init__(self, addr: str) -> None:
        self._ctx = _new_ctx()
        self._pub = self._ctx.socket(zmq.PUB)
        _set_common(self._pub)
        try:
            self._pub.bind(addr)
        except zmq.ZMQError as ex:
            self._pub.close(0)
            raise RuntimeError(f"Failed to bind telemetry PUB on {addr}: {ex}") from ex

    @classmethod
    def bind_pub(cls, addr: str) -> "ZmqTelemetryPubPort":
        return cls(addr)

    def publish(self, topic: str, payload: Mapping[str, Any]) -> None:
        env = TelemetryEnvelope(msg_id=str(uuid.uuid4()), topic=topic, data=dict(payload))
        try:
            self._pub.send_multipart(
                [
                    topic.encode("utf-8"),
                    json.dumps(env.model_dump(mode="json")).encode("utf-8"),
                ],
                flags=zmq.NOBLOCK,
            )
        except zmq.error.Again:
            # no subscriber buffer room; telemetry is best effort
            pass

    def close(self) -> None:
        self._pub.close(0)
