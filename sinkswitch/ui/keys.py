import curses
import dataclasses
import enum
import typing


class Key(enum.Enum):
    """Abstract keys the event loop understands."""

    QUIT = "quit"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    DIGIT = "digit"
    OTHER = "other"


@dataclasses.dataclass(frozen=True)
class KeyEvent:
    """A key press, already translated from the terminal's raw key code."""

    key: Key
    digit: int | None = None
    """Set for Key.DIGIT only."""


@dataclasses.dataclass(frozen=True)
class ErrorEvent:
    """Reading input from the terminal failed."""

    error: Exception


Event = typing.Union[KeyEvent, ErrorEvent]

ESCAPE = "\x1b"
CTRL_C = "\x03"

_CHAR_KEYS = {
    ESCAPE: Key.QUIT,
    CTRL_C: Key.QUIT,
    "q": Key.QUIT,
    "j": Key.DOWN,
    "k": Key.UP,
    "h": Key.LEFT,
    "l": Key.RIGHT,
    "\n": Key.ENTER,
    "\r": Key.ENTER,
}

_CODE_KEYS = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_ENTER: Key.ENTER,
}


def translate(raw: str | int) -> KeyEvent:
    """Translate a curses get_wch() result into a KeyEvent.

    Letters are matched case-insensitively; anything unknown is Key.OTHER.
    """
    if isinstance(raw, int):
        return KeyEvent(_CODE_KEYS.get(raw, Key.OTHER))
    if len(raw) == 1 and "0" <= raw <= "9":
        return KeyEvent(Key.DIGIT, digit=int(raw))
    return KeyEvent(_CHAR_KEYS.get(raw.lower(), Key.OTHER))
