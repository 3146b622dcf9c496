import logging
import os

import click

from sinkswitch.device.pulseaudio import PactlSinkBackend
from sinkswitch.errors import InputError, NoSinksFound, SinkSwitchError, TerminalError
from sinkswitch.ui.loop import run
from sinkswitch.ui.terminal import CursesTerminal

# curses owns the screen, so logs only go to a file when asked for.
if os.environ.get("SINKSWITCH_LOG"):
    logging.basicConfig(
        filename=os.environ["SINKSWITCH_LOG"],
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
else:
    logging.getLogger().addHandler(logging.NullHandler())

logger = logging.getLogger(__name__)


@click.command()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Sinkswitch - Pick the default audio output and adjust sink volumes.

    Set SINKSWITCH_LOG to a file path to write a debug log.
    """
    backend = PactlSinkBackend()
    try:
        with CursesTerminal() as terminal:
            run(backend, terminal)
    except TerminalError as e:
        message = f"Failed to initialize terminal: {e}"
    except NoSinksFound as e:
        message = str(e)
    except InputError as e:
        message = f"Terminal input error: {e}"
    except SinkSwitchError as e:
        message = f"Error fetching sinks: {e}"
    else:
        return
    logger.error(message)
    click.echo(message)
    ctx.exit(1)


if __name__ == "__main__":
    cli()
