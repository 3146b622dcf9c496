import logging
import subprocess

from sinkswitch.device.base import SinkBackend
from sinkswitch.device.models import Sink
from sinkswitch.errors import BackendUnavailable, ParseError

logger = logging.getLogger(__name__)


def _lines(output: str) -> list[str]:
    return [line for line in output.strip().split("\n") if line.strip()]


def parse_sink_lines(output: str) -> list[tuple[str, str]]:
    """Parse `pactl list short sinks` output into (id, name) pairs."""
    pairs = []
    for line in _lines(output):
        parts = line.split()
        if len(parts) < 2:
            logger.debug(f"Skipping malformed sink line: {line}")
            continue
        pairs.append((parts[0], parts[1]))
    return pairs


def parse_volume(output: str) -> int:
    """Parse the percentage out of `pactl get-sink-volume` output.

    The first line looks like
    ``Volume: front-left: 27525 /  42% / -22.50 dB,   front-right: ...``
    and the second ``/``-separated segment holds the percentage.
    """
    lines = output.split("\n")
    parts = lines[0].split("/")
    if len(parts) < 2:
        raise ParseError(f"No volume found in {lines[0]!r}")
    token = parts[1].strip()
    if token.endswith("%"):
        token = token[:-1]
    try:
        return int(token)
    except ValueError as e:
        raise ParseError(f"Invalid volume {parts[1].strip()!r}") from e


def parse_sink_input_ids(output: str) -> list[str]:
    """Parse `pactl list short sink-inputs` output into stream ids."""
    return [line.split()[0] for line in _lines(output)]


class PactlSinkBackend(SinkBackend):
    """PulseAudio/PipeWire implementation of SinkBackend using pactl subprocess calls."""

    def __init__(self, pactl: str = "pactl") -> None:
        """Initialize PactlSinkBackend.

        Args:
            pactl: The pactl binary to invoke. Defaults to "pactl" looked up on PATH.
        """
        self.pactl = pactl

    def list_sinks(self) -> list[Sink]:
        """List all sinks, marking the default one and querying each volume."""
        logger.debug("Listing sinks")
        output = self._run("list", "short", "sinks")
        default_name = self.get_default_sink()
        sinks = []
        default_seen = False
        for sink_id, name in parse_sink_lines(output):
            is_default = not default_seen and name == default_name
            default_seen = default_seen or is_default
            try:
                volume = self.get_volume(sink_id)
            except (BackendUnavailable, ParseError) as e:
                logger.warning(f"Could not read volume of sink {sink_id} ({name}), showing 0: {e}")
                volume = 0
            sinks.append(Sink(id=sink_id, name=name, volume=volume, is_default=is_default))
        logger.debug(f"Listed {len(sinks)} sinks (default: {default_name})")
        return sinks

    def get_default_sink(self) -> str:
        """Get the name of the default sink."""
        name = self._run("get-default-sink").strip()
        if not name:
            raise BackendUnavailable("default sink not found")
        return name

    def get_volume(self, sink_id: str) -> int:
        """Get the volume percentage of a sink."""
        volume = parse_volume(self._run("get-sink-volume", sink_id))
        logger.debug(f"Sink {sink_id} volume: {volume}%")
        return volume

    def set_volume(self, sink_id: str, percent: int) -> None:
        """Set the volume percentage of a sink."""
        self._run("set-sink-volume", sink_id, f"{percent}%")
        logger.info(f"Set volume of sink {sink_id} to {percent}%")

    def list_sink_inputs(self) -> list[str]:
        """List the ids of the streams currently playing."""
        return parse_sink_input_ids(self._run("list", "short", "sink-inputs"))

    def set_default_sink(self, sink_id: str) -> None:
        """Make a sink the default and move every playing stream to it.

        Streams are moved one at a time; if a move fails the streams already
        moved stay on the new sink.
        """
        self._run("set-default-sink", sink_id)
        stream_ids = self.list_sink_inputs()
        for stream_id in stream_ids:
            self._run("move-sink-input", stream_id, sink_id)
        logger.info(f"Default sink is now {sink_id}, moved {len(stream_ids)} streams")

    def _run(self, *args: str) -> str:
        """Run pactl and return its standard output."""
        cmd = [self.pactl, *args]
        logger.debug(f"Running command: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=True,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise BackendUnavailable(f"{' '.join(cmd)} failed with status {e.returncode}: {stderr}") from e
        except OSError as e:
            raise BackendUnavailable(f"{' '.join(cmd)} could not be run: {e}") from e
        return result.stdout
