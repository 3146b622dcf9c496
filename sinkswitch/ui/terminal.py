import abc
import curses
import locale
import logging
import os

from sinkswitch.errors import TerminalError
from sinkswitch.ui.keys import ErrorEvent, Event, Key, KeyEvent, translate
from sinkswitch.ui.render import Span, Style

logger = logging.getLogger(__name__)

_COLOR_PAIRS = {
    Style.HEADER: (1, curses.COLOR_YELLOW),
    Style.DEFAULT: (2, curses.COLOR_BLUE),
    Style.SELECTED: (3, curses.COLOR_GREEN),
}


class Terminal(abc.ABC):
    """Abstract base class for the display the event loop draws on."""

    @abc.abstractmethod
    def draw(self, spans: list[Span]) -> None:
        """Replace the screen contents with the given spans."""
        ...

    @abc.abstractmethod
    def read_event(self) -> Event:
        """Block until the next input event."""
        ...


class CursesTerminal(Terminal):
    """Terminal backed by curses, restored on exit whatever the exit path.

    Use as a context manager::

        with CursesTerminal() as terminal:
            terminal.draw(spans)
    """

    def __init__(self) -> None:
        self.screen: "curses.window | None" = None
        self._attrs: dict[Style, int] = {}

    def __enter__(self) -> "CursesTerminal":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def open(self) -> None:
        logger.debug("Initializing curses")
        try:
            locale.setlocale(locale.LC_ALL, "")
        except locale.Error as e:
            logger.warning(f"Locale from the environment is unusable, staying on the C locale: {e}")
        # Esc should quit without curses waiting a second for an escape sequence.
        os.environ.setdefault("ESCDELAY", "25")
        try:
            self.screen = curses.initscr()
            curses.noecho()
            curses.cbreak()
            self.screen.keypad(True)
            self._init_colors()
            try:
                curses.curs_set(0)
            except curses.error:
                logger.debug("Terminal cannot hide the cursor")
        except curses.error as e:
            self.close()
            raise TerminalError(str(e)) from e

    def close(self) -> None:
        if self.screen is None:
            return
        logger.debug("Restoring terminal")
        try:
            self.screen.keypad(False)
            curses.nocbreak()
            curses.echo()
        finally:
            curses.endwin()
            self.screen = None

    def _init_colors(self) -> None:
        self._attrs = {style: curses.A_NORMAL for style in Style}
        if not curses.has_colors():
            self._attrs[Style.HEADER] = curses.A_BOLD
            self._attrs[Style.SELECTED] = curses.A_REVERSE
            return
        curses.start_color()
        curses.use_default_colors()
        for style, (pair, color) in _COLOR_PAIRS.items():
            curses.init_pair(pair, color, -1)
            self._attrs[style] = curses.color_pair(pair)

    def _window(self) -> "curses.window":
        if self.screen is None:
            raise TerminalError("terminal is not open")
        return self.screen

    def draw(self, spans: list[Span]) -> None:
        screen = self._window()
        screen.erase()
        height, width = screen.getmaxyx()
        for span in spans:
            if span.row >= height or span.col >= width:
                continue
            text = span.text[: width - span.col]
            try:
                screen.addstr(span.row, span.col, text, self._attrs.get(span.style, curses.A_NORMAL))
            except curses.error:
                # Writing the bottom-right cell moves the cursor off screen and reports an error.
                logger.debug(f"addstr clipped at row {span.row}, col {span.col}")
        screen.refresh()

    def read_event(self) -> Event:
        screen = self._window()
        try:
            raw = screen.get_wch()
        except KeyboardInterrupt:
            return KeyEvent(Key.QUIT)
        except curses.error as e:
            return ErrorEvent(e)
        return translate(raw)
