import dataclasses
import enum

from sinkswitch.device.models import Sink

HEADER = (
    "Select an audio output device (Arrow keys or j/k: navigate, Arrow keys or h/l: adjust volume, "
    "number: select, Enter: change, q: quit):"
)
BAR_WIDTH = 20
FIRST_SINK_ROW = 2
PREFIX_WIDTH = 5


class Style(enum.Enum):
    """How a span of text is coloured."""

    NORMAL = "normal"
    HEADER = "header"
    DEFAULT = "default"
    """Row of the default sink."""

    SELECTED = "selected"
    """Selected row that is not the default sink."""


@dataclasses.dataclass(frozen=True)
class Span:
    """Text drawn at a screen position."""

    row: int
    col: int
    text: str
    style: Style = Style.NORMAL


def visualize_volume(volume: int) -> str:
    """Render a volume percentage as a fixed-width bar, e.g. ``Volume : [#####     ...] 25%``."""
    filled = volume * BAR_WIDTH // 100
    return f"Volume : [{'#' * filled}{' ' * (BAR_WIDTH - filled)}] {volume}%"


def name_field(index: int, sink: Sink) -> str:
    return f"{index} {sink.name}"


def name_width(sinks: list[Sink]) -> int:
    """Width of the widest name field."""
    return max((len(name_field(idx, sink)) for idx, sink in enumerate(sinks)), default=0)


def row_prefix(selected: bool, default: bool) -> str:
    return ("-> " if selected else "   ") + ("* " if default else "  ")


def row_style(selected: bool, default: bool) -> Style:
    if default:
        return Style.DEFAULT
    if selected:
        return Style.SELECTED
    return Style.NORMAL


def bar_column(width: int) -> int:
    """Column of the volume bar, which follows the padded name field directly."""
    return width + PREFIX_WIDTH


def render(sinks: list[Sink], selected: int, width: int) -> list[Span]:
    """Lay out the header and one row per sink."""
    spans = [Span(0, 0, HEADER, Style.HEADER)]
    for idx, sink in enumerate(sinks):
        row = idx + FIRST_SINK_ROW
        is_selected = idx == selected
        line = row_prefix(is_selected, sink.is_default) + name_field(idx, sink).ljust(width)
        spans.append(Span(row, 0, line, row_style(is_selected, sink.is_default)))
        spans.append(Span(row, bar_column(width), visualize_volume(sink.volume)))
    return spans
