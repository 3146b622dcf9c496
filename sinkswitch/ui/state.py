import dataclasses

from sinkswitch.device.models import Sink
from sinkswitch.ui.render import name_width


@dataclasses.dataclass
class ViewState:
    """Sinks on screen and the selected row.

    The sink list is only ever replaced wholesale by `replace`; edits made
    through `current` are display feedback until the next refresh.
    """

    sinks: list[Sink]
    selected: int = 0

    @property
    def current(self) -> Sink | None:
        """The selected sink, or None when the list is empty."""
        if not self.sinks:
            return None
        return self.sinks[self.selected]

    @property
    def name_width(self) -> int:
        return name_width(self.sinks)

    def move_down(self) -> None:
        self.selected = max(0, min(self.selected + 1, len(self.sinks) - 1))

    def move_up(self) -> None:
        self.selected = max(self.selected - 1, 0)

    def jump(self, index: int) -> None:
        """Select row `index` directly; out of range indices are ignored."""
        if 0 <= index < len(self.sinks):
            self.selected = index

    def mark_default(self, sink_id: str) -> None:
        for sink in self.sinks:
            sink.is_default = sink.id == sink_id

    def replace(self, sinks: list[Sink]) -> None:
        """Replace the sink list, clamping the selection if the list shrank."""
        self.sinks = sinks
        if self.selected >= len(sinks):
            self.selected = max(len(sinks) - 1, 0)
