from sinkswitch.ui.loop import EventLoop, run
from sinkswitch.ui.state import ViewState
from sinkswitch.ui.terminal import CursesTerminal, Terminal

__all__ = [
    "CursesTerminal",
    "EventLoop",
    "Terminal",
    "ViewState",
    "run",
]
