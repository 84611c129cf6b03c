from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from .config import RunConfiguration
from .convert import percent, scaled
from .fields import RawFields

MICROVOLTS_PER_VOLT = 1_000_000.0
# Matches what the reference driver emits; not derived from the sysfs ABI.
CURRENT_DIVISOR = 100_000.0
TEMPERATURE_DIVISOR = 10.0
ETD_SCALE = 10.0
CHARGE_CAP = 100.0


class Tristate(enum.Enum):
    FALSE = 0
    TRUE = 1
    UNKNOWN = -1

    @classmethod
    def from_raw(cls, raw: Optional[int]) -> "Tristate":
        if raw == 1:
            return cls.TRUE
        if raw == 0:
            return cls.FALSE
        return cls.UNKNOWN


@dataclass(frozen=True)
class BatteryRecord:
    charge: Optional[float] = None
    max_charge: Optional[float] = None
    voltage: Optional[float] = None
    current: Optional[float] = None
    temperature: Optional[float] = None
    etd: Optional[float] = None

    name: Optional[str] = None
    model: Optional[str] = None
    manufacturer: Optional[str] = None
    technology: Optional[str] = None
    driver: Optional[str] = None
    status: Optional[str] = None
    health: Optional[str] = None
    serial_number: Optional[str] = None
    charge_type: Optional[str] = None
    charge_rate: Optional[str] = None

    present: Tristate = Tristate.UNKNOWN
    online: Tristate = Tristate.UNKNOWN
    charging_enabled: Tristate = Tristate.UNKNOWN


def _charge(fields: RawFields, *, clamp: bool) -> Optional[float]:
    if fields.capacity is not None and 0 <= fields.capacity <= 100:
        charge: Optional[float] = float(fields.capacity)
    else:
        charge = percent(fields.charge_now, fields.charge_full)
    if charge is not None and clamp and charge > CHARGE_CAP:
        # Worn batteries can report charge_now above charge_full.
        charge = CHARGE_CAP
    return charge


def _etd(fields: RawFields) -> Optional[float]:
    """Hours until empty, assuming the present drain stays constant."""
    if fields.charge_full is None or fields.charge_now is None:
        return None
    if not fields.current_now:
        return None
    return ((fields.charge_full - fields.charge_now) / fields.current_now) * ETD_SCALE


def synthesize(
    fields: RawFields, config: Optional[RunConfiguration] = None
) -> BatteryRecord:
    """Derive a normalized record from the raw values of one battery."""
    config = config or RunConfiguration()
    return BatteryRecord(
        charge=_charge(fields, clamp=config.clamp_charge),
        max_charge=percent(fields.charge_full, fields.charge_full_design),
        voltage=scaled(fields.voltage_now, MICROVOLTS_PER_VOLT),
        current=scaled(fields.current_now, CURRENT_DIVISOR),
        temperature=scaled(fields.temperature, TEMPERATURE_DIVISOR),
        etd=_etd(fields),
        name=fields.name,
        model=fields.model,
        manufacturer=fields.manufacturer,
        technology=fields.technology,
        driver=fields.driver,
        status=fields.status,
        health=fields.health,
        serial_number=fields.serial_number,
        charge_type=fields.charge_type,
        charge_rate=fields.charge_rate,
        present=Tristate.from_raw(fields.present),
        online=Tristate.from_raw(fields.online),
        charging_enabled=Tristate.from_raw(fields.charging_enabled),
    )
