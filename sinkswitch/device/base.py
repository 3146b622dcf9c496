import abc

from sinkswitch.device.models import Sink


class SinkBackend(abc.ABC):
    """Abstract base class for sink control."""

    @abc.abstractmethod
    def list_sinks(self) -> list[Sink]:
        """List all sinks with their volume and default flag."""
        ...

    @abc.abstractmethod
    def get_volume(self, sink_id: str) -> int:
        """Get the volume percentage of a sink."""
        ...

    @abc.abstractmethod
    def set_volume(self, sink_id: str, percent: int) -> None:
        """Set the volume percentage of a sink."""
        ...

    @abc.abstractmethod
    def set_default_sink(self, sink_id: str) -> None:
        """Make a sink the default and move the playing streams to it."""
        ...
