# mypy: disable-error-code=no-untyped-def

import pathlib
import subprocess
import typing

import pytest

from sinkswitch.device.models import Sink
from sinkswitch.device.pulseaudio import (
    PactlSinkBackend,
    parse_sink_input_ids,
    parse_sink_lines,
    parse_volume,
)
from sinkswitch.errors import BackendUnavailable, ParseError

SINKS_OUTPUT = (
    "47\talsa_output.pci-0000_00_1f.3.analog-stereo\tPipeWire\ts32le 2ch 48000Hz\tSUSPENDED\n"
    "52\tbluez_output.00_1B_66_AA_BB_CC.1\tPipeWire\ts16le 2ch 48000Hz\tRUNNING\n"
)
DEFAULT_OUTPUT = "bluez_output.00_1B_66_AA_BB_CC.1\n"
SINK_INPUTS_OUTPUT = (
    "112\t52\t111\tPipeWire\tfloat32le 2ch 48000Hz\n"
    "130\t52\t129\tPipeWire\ts16le 2ch 44100Hz\n"
)


def volume_output(percent: int) -> str:
    return (
        f"Volume: front-left: 27525 /  {percent}% / -22.50 dB,   front-right: 27525 /  {percent}% / -22.50 dB\n"
        "        balance 0.00\n"
    )


FAIL = object()


class FakePactl:
    """Stands in for subprocess.run, answering pactl command lines from a table."""

    def __init__(self, responses: dict[tuple[str, ...], typing.Any]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, cmd, capture_output, text, check, encoding=None, errors=None):
        args = tuple(cmd[1:])
        self.calls.append(args)
        out = self.responses.get(args, "")
        if out is FAIL:
            raise subprocess.CalledProcessError(1, cmd, output="", stderr="Failure: No such entity\n")
        return subprocess.CompletedProcess(cmd, 0, stdout=out, stderr="")


@pytest.fixture
def responses() -> dict[tuple[str, ...], typing.Any]:
    return {
        ("list", "short", "sinks"): SINKS_OUTPUT,
        ("get-default-sink",): DEFAULT_OUTPUT,
        ("get-sink-volume", "47"): volume_output(42),
        ("get-sink-volume", "52"): volume_output(80),
        ("list", "short", "sink-inputs"): SINK_INPUTS_OUTPUT,
    }


@pytest.fixture
def pactl(monkeypatch: pytest.MonkeyPatch, responses) -> FakePactl:
    fake = FakePactl(responses)
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture
def backend() -> PactlSinkBackend:
    return PactlSinkBackend()


def test_parse_volume() -> None:
    assert parse_volume(volume_output(42)) == 42
    assert parse_volume("Volume: mono: 65536 / 100% / 0.00 dB\n") == 100


@pytest.mark.parametrize(
    "output",
    [
        "42% /",
        "Volume: front-left: 27525 / loud / -22.50 dB",
        "no volume here",
        "",
    ],
)
def test_parse_volume_malformed(output: str) -> None:
    with pytest.raises(ParseError):
        parse_volume(output)


def test_parse_sink_lines_skips_malformed() -> None:
    output = "47\talsa_output.analog\tPipeWire\n\n   \nlonely\n52 bluez_output.x\n"
    assert parse_sink_lines(output) == [("47", "alsa_output.analog"), ("52", "bluez_output.x")]


def test_parse_sink_input_ids() -> None:
    assert parse_sink_input_ids(SINK_INPUTS_OUTPUT) == ["112", "130"]
    assert parse_sink_input_ids("\n") == []


def test_list_sinks(pactl: FakePactl, backend: PactlSinkBackend) -> None:
    sinks = backend.list_sinks()
    assert sinks == [
        Sink(id="47", name="alsa_output.pci-0000_00_1f.3.analog-stereo", volume=42, is_default=False),
        Sink(id="52", name="bluez_output.00_1B_66_AA_BB_CC.1", volume=80, is_default=True),
    ]


def test_list_sinks_degrades_bad_volume_to_zero(pactl: FakePactl, responses, backend: PactlSinkBackend) -> None:
    responses[("get-sink-volume", "47")] = "42% /"
    responses[("get-sink-volume", "52")] = FAIL
    sinks = backend.list_sinks()
    assert [s.id for s in sinks] == ["47", "52"]
    assert [s.volume for s in sinks] == [0, 0]


def test_list_sinks_clamps_boosted_volume(pactl: FakePactl, responses, backend: PactlSinkBackend) -> None:
    responses[("get-sink-volume", "47")] = volume_output(153)
    assert backend.list_sinks()[0].volume == 100


def test_list_sinks_marks_first_default_only(pactl: FakePactl, responses, backend: PactlSinkBackend) -> None:
    responses[("list", "short", "sinks")] = "1\tsame\n2\tsame\n"
    responses[("get-default-sink",)] = "same\n"
    assert [s.is_default for s in backend.list_sinks()] == [True, False]


def test_list_sinks_without_matching_default(pactl: FakePactl, responses, backend: PactlSinkBackend) -> None:
    responses[("get-default-sink",)] = "auto_null\n"
    assert not any(s.is_default for s in backend.list_sinks())


@pytest.mark.parametrize(
    "failing",
    [("list", "short", "sinks"), ("get-default-sink",)],
)
def test_list_sinks_fails_when_query_fails(pactl: FakePactl, responses, backend: PactlSinkBackend, failing) -> None:
    responses[failing] = FAIL
    with pytest.raises(BackendUnavailable):
        backend.list_sinks()


def test_empty_default_sink_is_unavailable(pactl: FakePactl, responses, backend: PactlSinkBackend) -> None:
    responses[("get-default-sink",)] = "\n"
    with pytest.raises(BackendUnavailable, match="default sink not found"):
        backend.get_default_sink()


def test_set_volume(pactl: FakePactl, backend: PactlSinkBackend) -> None:
    backend.set_volume("47", 25)
    assert pactl.calls == [("set-sink-volume", "47", "25%")]


def test_set_volume_failure(pactl: FakePactl, responses, backend: PactlSinkBackend) -> None:
    responses[("set-sink-volume", "47", "25%")] = FAIL
    with pytest.raises(BackendUnavailable, match="No such entity"):
        backend.set_volume("47", 25)


def test_set_default_sink_moves_streams(pactl: FakePactl, backend: PactlSinkBackend) -> None:
    backend.set_default_sink("47")
    assert pactl.calls == [
        ("set-default-sink", "47"),
        ("list", "short", "sink-inputs"),
        ("move-sink-input", "112", "47"),
        ("move-sink-input", "130", "47"),
    ]


def test_set_default_sink_failure_skips_moves(pactl: FakePactl, responses, backend: PactlSinkBackend) -> None:
    responses[("set-default-sink", "47")] = FAIL
    with pytest.raises(BackendUnavailable):
        backend.set_default_sink("47")
    assert pactl.calls == [("set-default-sink", "47")]


def test_set_default_sink_stream_listing_failure(pactl: FakePactl, responses, backend: PactlSinkBackend) -> None:
    responses[("list", "short", "sink-inputs")] = FAIL
    with pytest.raises(BackendUnavailable):
        backend.set_default_sink("47")


def test_set_default_sink_move_failure_keeps_earlier_moves(
    pactl: FakePactl, responses, backend: PactlSinkBackend
) -> None:
    responses[("move-sink-input", "130", "47")] = FAIL
    with pytest.raises(BackendUnavailable):
        backend.set_default_sink("47")
    assert ("move-sink-input", "112", "47") in pactl.calls


def test_undecodable_output_is_replaced(tmp_path: pathlib.Path) -> None:
    script = tmp_path / "pactl"
    script.write_text("#!/bin/sh\nprintf 'caf\\351-speakers\\n'\n")
    script.chmod(0o755)
    backend = PactlSinkBackend(pactl=str(script))
    assert backend.get_default_sink() == "caf\ufffd-speakers"


def test_missing_binary_is_unavailable() -> None:
    backend = PactlSinkBackend(pactl="/nonexistent/sinkswitch-pactl")
    with pytest.raises(BackendUnavailable, match="could not be run"):
        backend.list_sinks()


@pytest.mark.gui
def test_list_sinks_real_server() -> None:
    sinks = PactlSinkBackend().list_sinks()
    assert len(sinks) > 0
    assert len({s.id for s in sinks}) == len(sinks)
    assert sum(s.is_default for s in sinks) <= 1
    for sink in sinks:
        assert sink.name
        assert 0 <= sink.volume <= 100
