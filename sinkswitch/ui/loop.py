import logging

from sinkswitch.device.base import SinkBackend
from sinkswitch.device.models import clamp_volume
from sinkswitch.errors import InputError, NoSinksFound, SinkSwitchError
from sinkswitch.ui.keys import ErrorEvent, Event, Key
from sinkswitch.ui.render import render
from sinkswitch.ui.state import ViewState
from sinkswitch.ui.terminal import Terminal

logger = logging.getLogger(__name__)


class EventLoop:
    """Reacts to one input event at a time: act, re-fetch every sink, redraw.

    The sink list is re-fetched after every handled event, so anything the
    backend rejected or adjusted shows up on the next frame. Failed volume
    and default changes are logged and otherwise ignored; a failed re-fetch
    ends the loop by raising.
    """

    def __init__(
        self,
        backend: SinkBackend,
        terminal: Terminal,
        state: ViewState,
        volume_step: int = 5,
    ) -> None:
        self.backend = backend
        self.terminal = terminal
        self.state = state
        self.volume_step = volume_step

    def run(self) -> None:
        """Draw, then handle events until the user quits."""
        self.draw()
        while self.handle(self.terminal.read_event()):
            self.draw()
        logger.debug("Event loop finished")

    def handle(self, event: Event) -> bool:
        """Handle one event; return False when the loop should stop."""
        if isinstance(event, ErrorEvent):
            raise InputError(str(event.error)) from event.error
        key = event.key
        logger.debug(f"Handling {event}")
        if key is Key.QUIT:
            return False
        if key is Key.DOWN:
            self.state.move_down()
        elif key is Key.UP:
            self.state.move_up()
        elif key is Key.LEFT:
            self.change_volume(-self.volume_step)
        elif key is Key.RIGHT:
            self.change_volume(self.volume_step)
        elif key is Key.DIGIT and event.digit is not None:
            self.state.jump(event.digit)
        elif key is Key.ENTER:
            self.make_default()
        self.refresh()
        return True

    def change_volume(self, delta: int) -> None:
        sink = self.state.current
        if sink is None:
            return
        volume = clamp_volume(sink.volume + delta)
        if volume == sink.volume:
            return
        try:
            self.backend.set_volume(sink.id, volume)
        except SinkSwitchError as e:
            logger.warning(f"Ignoring failed volume change of sink {sink.id}: {e}")
            return
        sink.volume = volume

    def make_default(self) -> None:
        sink = self.state.current
        if sink is None:
            return
        try:
            self.backend.set_default_sink(sink.id)
        except SinkSwitchError as e:
            logger.warning(f"Ignoring failed switch to sink {sink.id}: {e}")
            return
        self.state.mark_default(sink.id)

    def refresh(self) -> None:
        self.state.replace(self.backend.list_sinks())

    def draw(self) -> None:
        self.terminal.draw(render(self.state.sinks, self.state.selected, self.state.name_width))


def run(backend: SinkBackend, terminal: Terminal, volume_step: int = 5) -> None:
    """Fetch the sinks and run the event loop on an open terminal."""
    sinks = backend.list_sinks()
    if not sinks:
        raise NoSinksFound("No audio output devices found.")
    EventLoop(backend, terminal, ViewState(sinks), volume_step=volume_step).run()
