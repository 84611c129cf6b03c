"""Output of battery records as aligned text or JSON."""

from __future__ import annotations

import json
from typing import Any, Optional, Protocol

from rich.console import Console

from .config import OutputFormat, RunConfiguration
from .record import BatteryRecord, Tristate

UNAVAILABLE_TEXT = "?"
NAME_COLUMN_WIDTH = 30

STRING, NUMBER, PERCENTAGE, FLAG = "string", "number", "percentage", "flag"

# selector character -> (record attribute / output name, kind)
FIELDS: dict[str, tuple[str, str]] = {
    "n": ("name", STRING),
    "c": ("charge", PERCENTAGE),
    "t": ("max_charge", PERCENTAGE),
    "v": ("voltage", NUMBER),
    "C": ("current", NUMBER),
    "T": ("temperature", NUMBER),
    "D": ("etd", NUMBER),
    "d": ("driver", STRING),
    "m": ("model", STRING),
    "M": ("manufacturer", STRING),
    "e": ("technology", STRING),
    "s": ("status", STRING),
    "h": ("health", STRING),
    "S": ("serial_number", STRING),
    "H": ("charge_type", STRING),
    "r": ("charge_rate", STRING),
    "p": ("present", FLAG),
    "o": ("online", FLAG),
    "g": ("charging_enabled", FLAG),
}


class Renderer(Protocol):
    def begin_batch(self) -> None: ...

    def begin_record(self, index: int) -> None: ...

    def emit_string(self, name: str, value: Optional[str]) -> None: ...

    def emit_number(self, name: str, value: Optional[float]) -> None: ...

    def emit_percentage(self, name: str, value: Optional[float]) -> None: ...

    def emit_flag(self, name: str, value: Tristate) -> None: ...

    def end_record(self) -> None: ...

    def end_batch(self) -> None: ...


def _write(console: Console, text: str) -> None:
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


class TextRenderer:
    """One ``name: value`` line per field, values aligned on one column."""

    def __init__(self, console: Console, *, digits: bool = False) -> None:
        self.console = console
        self.digits = digits

    def _line(self, name: str, value: str) -> None:
        _write(self.console, f"{name + ':':<{NAME_COLUMN_WIDTH}}{value}")

    def begin_batch(self) -> None:
        pass

    def begin_record(self, index: int) -> None:
        self._line("battery", str(index))

    def emit_string(self, name: str, value: Optional[str]) -> None:
        self._line(name, value if value is not None else UNAVAILABLE_TEXT)

    def emit_number(self, name: str, value: Optional[float]) -> None:
        self._line(name, f"{value:.2f}" if value is not None else UNAVAILABLE_TEXT)

    def emit_percentage(self, name: str, value: Optional[float]) -> None:
        self._line(name, f"{value:.2f}%" if value is not None else UNAVAILABLE_TEXT)

    def emit_flag(self, name: str, value: Tristate) -> None:
        if value is Tristate.UNKNOWN:
            text = UNAVAILABLE_TEXT
        elif self.digits:
            text = str(value.value)
        else:
            text = "yes" if value is Tristate.TRUE else "no"
        self._line(name, text)

    def end_record(self) -> None:
        pass

    def end_batch(self) -> None:
        pass


class JsonRenderer:
    """Collects records and writes ``{"batteries": [...]}`` at the end."""

    def __init__(self, console: Console, *, digits: bool = False) -> None:
        self.console = console
        self.digits = digits
        self.batteries: list[dict[str, Any]] = []
        self._current: Optional[dict[str, Any]] = None

    def begin_batch(self) -> None:
        self.batteries = []

    def begin_record(self, index: int) -> None:
        self._current = {"battery": index}

    def _set(self, name: str, value: Any) -> None:
        if self._current is None:
            raise RuntimeError("emit called outside of a record")
        self._current[name] = value

    def emit_string(self, name: str, value: Optional[str]) -> None:
        self._set(name, value)

    def emit_number(self, name: str, value: Optional[float]) -> None:
        self._set(name, round(value, 2) if value is not None else None)

    def emit_percentage(self, name: str, value: Optional[float]) -> None:
        # no % sign in JSON
        self.emit_number(name, value)

    def emit_flag(self, name: str, value: Tristate) -> None:
        if value is Tristate.UNKNOWN:
            self._set(name, None)
        elif self.digits:
            self._set(name, value.value)
        else:
            self._set(name, value is Tristate.TRUE)

    def end_record(self) -> None:
        if self._current is not None:
            self.batteries.append(self._current)
        self._current = None

    def end_batch(self) -> None:
        _write(self.console, json.dumps({"batteries": self.batteries}, indent=4))


def build_renderer(config: RunConfiguration, console: Console) -> Renderer:
    if config.output_format is OutputFormat.JSON:
        return JsonRenderer(console, digits=config.digits)
    return TextRenderer(console, digits=config.digits)


def emit_record(
    renderer: Renderer, index: int, record: BatteryRecord, sequence: str
) -> None:
    """Send ``record`` to ``renderer`` in the order given by ``sequence``."""
    renderer.begin_record(index)
    for char in sequence:
        entry = FIELDS.get(char)
        if entry is None:
            continue
        name, kind = entry
        value = getattr(record, name)
        if kind == STRING:
            renderer.emit_string(name, value)
        elif kind == NUMBER:
            renderer.emit_number(name, value)
        elif kind == PERCENTAGE:
            renderer.emit_percentage(name, value)
        else:
            renderer.emit_flag(name, value)
    renderer.end_record()
