from .zmq import ZmqTelemetryPubPort

__all__ = ["ZmqTelemetryPubPort"]
