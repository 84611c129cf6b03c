import io
import json

from rich.console import Console

from batteryinfo.config import COMPLETE_SEQUENCE, FIELD_ALPHABET, OutputFormat, RunConfiguration
from batteryinfo.record import BatteryRecord, Tristate
from batteryinfo.render import (
    FIELDS,
    JsonRenderer,
    TextRenderer,
    build_renderer,
    emit_record,
)


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=200), buffer


RECORD = BatteryRecord(
    charge=76.0,
    voltage=12.5,
    name="BAT0",
    present=Tristate.TRUE,
    online=Tristate.FALSE,
)


def test_every_selector_has_a_field():
    assert set(FIELDS) == set(FIELD_ALPHABET)
    assert sorted(COMPLETE_SEQUENCE) == sorted(FIELD_ALPHABET)


def test_text_layout():
    console, buffer = _console()
    renderer = TextRenderer(console)
    renderer.begin_batch()
    emit_record(renderer, 0, RECORD, "ncvmpog")
    renderer.end_batch()

    assert buffer.getvalue().splitlines() == [
        "battery:                      0",
        "name:                         BAT0",
        "charge:                       76.00%",
        "voltage:                      12.50",
        "model:                        ?",
        "present:                      yes",
        "online:                       no",
        "charging_enabled:             ?",
    ]


def test_text_digits_flags():
    console, buffer = _console()
    renderer = TextRenderer(console, digits=True)
    emit_record(renderer, 3, RECORD, "po")
    assert buffer.getvalue().splitlines()[1:] == [
        "present:                      1",
        "online:                       0",
    ]


def test_json_output():
    console, buffer = _console()
    renderer = JsonRenderer(console)
    renderer.begin_batch()
    emit_record(renderer, 0, RECORD, "nctpog")
    emit_record(renderer, 1, BatteryRecord(max_charge=80.123), "t")
    renderer.end_batch()

    document = json.loads(buffer.getvalue())
    assert document == {
        "batteries": [
            {
                "battery": 0,
                "name": "BAT0",
                "charge": 76.0,
                "max_charge": None,
                "present": True,
                "online": False,
                "charging_enabled": None,
            },
            {"battery": 1, "max_charge": 80.12},
        ]
    }


def test_json_digits_flags():
    console, buffer = _console()
    renderer = JsonRenderer(console, digits=True)
    renderer.begin_batch()
    emit_record(renderer, 0, RECORD, "pog")
    renderer.end_batch()

    (battery,) = json.loads(buffer.getvalue())["batteries"]
    assert battery == {"battery": 0, "present": 1, "online": 0, "charging_enabled": None}


def test_empty_json_batch():
    console, buffer = _console()
    renderer = JsonRenderer(console)
    renderer.begin_batch()
    renderer.end_batch()
    assert json.loads(buffer.getvalue()) == {"batteries": []}


def test_build_renderer_follows_output_format():
    console, _ = _console()
    assert isinstance(build_renderer(RunConfiguration(), console), TextRenderer)
    json_config = RunConfiguration(output_format=OutputFormat.JSON, digits=True)
    renderer = build_renderer(json_config, console)
    assert isinstance(renderer, JsonRenderer)
    assert renderer.digits
