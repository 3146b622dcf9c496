import dataclasses

MIN_VOLUME = 0
MAX_VOLUME = 100


def clamp_volume(volume: int) -> int:
    """Clamp a volume percentage into [MIN_VOLUME, MAX_VOLUME]."""
    return max(MIN_VOLUME, min(MAX_VOLUME, volume))


@dataclasses.dataclass
class Sink:
    """Dataclass for audio output devices (mirrors PulseAudio sinks)."""

    id: str
    """Backend identifier, stable for the device's lifetime in the current session."""

    name: str
    """Backend name, used for display and for the default sink comparison."""

    volume: int = 0
    """Volume percentage, 0-100."""

    is_default: bool = False
    """Whether this sink is the system's current default output."""

    def __post_init__(self) -> None:
        self.volume = clamp_volume(self.volume)
