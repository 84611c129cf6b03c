from __future__ import annotations

import logging
from dataclasses import dataclass, fields as dataclass_fields
from typing import Iterable, Optional, Sequence

from .convert import parse_int
from .uevent import POWER_SUPPLY_KEYS, UeventKey, parse_line, strip_line

log = logging.getLogger(__name__)


@dataclass
class RawFields:
    """Values read from one battery's uevent files, before any derivation.

    None means the value was never read (or failed to parse).
    """

    capacity: Optional[int] = None
    charge_now: Optional[int] = None
    charge_full: Optional[int] = None
    charge_full_design: Optional[int] = None
    voltage_now: Optional[int] = None
    current_now: Optional[int] = None
    temperature: Optional[int] = None
    present: Optional[int] = None
    online: Optional[int] = None
    charging_enabled: Optional[int] = None

    name: Optional[str] = None
    model: Optional[str] = None
    manufacturer: Optional[str] = None
    technology: Optional[str] = None
    status: Optional[str] = None
    health: Optional[str] = None
    serial_number: Optional[str] = None
    charge_type: Optional[str] = None
    charge_rate: Optional[str] = None
    driver: Optional[str] = None

    def populated(self) -> frozenset[str]:
        return frozenset(
            field.name
            for field in dataclass_fields(self)
            if getattr(self, field.name) is not None
        )


class FieldAccumulator:
    def __init__(self, fields: Optional[RawFields] = None) -> None:
        self.fields = fields if fields is not None else RawFields()
        self.populated: set[str] = set(self.fields.populated())

    def feed(self, key: UeventKey, raw: str) -> bool:
        """Store one recognized value; returns False when it was rejected."""
        if key.numeric:
            value = parse_int(raw)
            if value is None:
                # A malformed repeat invalidates an earlier good value.
                log.debug("Non-numeric value for %s: %r", key.token, raw)
                setattr(self.fields, key.slot, None)
                self.populated.discard(key.slot)
                return False
            setattr(self.fields, key.slot, value)
        else:
            setattr(self.fields, key.slot, raw)
        self.populated.add(key.slot)
        return True

    def feed_line(
        self, line: str, keys: Sequence[UeventKey] = POWER_SUPPLY_KEYS
    ) -> bool:
        match = parse_line(strip_line(line), keys)
        if match is None:
            return False
        key, raw = match
        return self.feed(key, raw)

    def feed_lines(
        self, lines: Iterable[str], keys: Sequence[UeventKey] = POWER_SUPPLY_KEYS
    ) -> int:
        stored = 0
        for line in lines:
            if self.feed_line(line, keys):
                stored += 1
        return stored
