from sinkswitch.device.base import SinkBackend
from sinkswitch.device.models import Sink
from sinkswitch.device.pulseaudio import PactlSinkBackend

__all__ = [
    "Sink",
    "SinkBackend",
    "PactlSinkBackend",
]
