class SinkSwitchError(Exception):
    """Base class for sinkswitch errors."""


class BackendUnavailable(SinkSwitchError):
    """The audio control tool failed to run or exited with a non-zero status."""


class ParseError(SinkSwitchError):
    """The audio control tool printed something we could not understand."""


class NoSinksFound(SinkSwitchError):
    """The sound server reported no output devices."""


class TerminalError(SinkSwitchError):
    """The terminal could not be set up for drawing."""


class InputError(SinkSwitchError):
    """Reading a key from the terminal failed."""
