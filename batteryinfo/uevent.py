"""Recognition of ``KEY=value`` lines from power-supply uevent files.

A battery exposes two of these files: ``<device>/uevent`` carries the
``POWER_SUPPLY_*`` attributes and ``<device>/device/uevent`` names the driver.
Each table below lists the keys we understand from one of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

SEPARATOR = "="


@dataclass(frozen=True)
class UeventKey:
    token: str
    slot: str
    numeric: bool = False


def _by_specificity(keys: Iterable[UeventKey]) -> tuple[UeventKey, ...]:
    # CHARGE_FULL_DESIGN must be tried before CHARGE_FULL, and so on.
    return tuple(sorted(keys, key=lambda key: len(key.token), reverse=True))


POWER_SUPPLY_KEYS = _by_specificity(
    [
        UeventKey("POWER_SUPPLY_CAPACITY", "capacity", numeric=True),
        UeventKey("POWER_SUPPLY_CHARGE_NOW", "charge_now", numeric=True),
        UeventKey("POWER_SUPPLY_CHARGE_FULL", "charge_full", numeric=True),
        UeventKey(
            "POWER_SUPPLY_CHARGE_FULL_DESIGN", "charge_full_design", numeric=True
        ),
        UeventKey("POWER_SUPPLY_VOLTAGE_NOW", "voltage_now", numeric=True),
        UeventKey("POWER_SUPPLY_CURRENT_NOW", "current_now", numeric=True),
        UeventKey("POWER_SUPPLY_TEMP", "temperature", numeric=True),
        UeventKey("POWER_SUPPLY_PRESENT", "present", numeric=True),
        UeventKey("POWER_SUPPLY_ONLINE", "online", numeric=True),
        UeventKey("POWER_SUPPLY_CHARGING_ENABLED", "charging_enabled", numeric=True),
        UeventKey("POWER_SUPPLY_NAME", "name"),
        UeventKey("POWER_SUPPLY_MODEL_NAME", "model"),
        UeventKey("POWER_SUPPLY_MANUFACTURER", "manufacturer"),
        UeventKey("POWER_SUPPLY_TECHNOLOGY", "technology"),
        UeventKey("POWER_SUPPLY_STATUS", "status"),
        UeventKey("POWER_SUPPLY_HEALTH", "health"),
        UeventKey("POWER_SUPPLY_SERIAL_NUMBER", "serial_number"),
        UeventKey("POWER_SUPPLY_CHARGE_TYPE", "charge_type"),
        UeventKey("POWER_SUPPLY_CHARGE_RATE", "charge_rate"),
    ]
)

DEVICE_KEYS = _by_specificity([UeventKey("DRIVER", "driver")])


def strip_line(line: str) -> str:
    return line.rstrip()


def parse_line(
    line: str, keys: Sequence[UeventKey] = POWER_SUPPLY_KEYS
) -> Optional[tuple[UeventKey, str]]:
    """Match ``line`` against ``keys`` and split off its raw value.

    ``keys`` must be ordered most-specific first. A key only matches when the
    separator follows its token directly, so ``POWER_SUPPLY_CAPACITY_LEVEL``
    is not taken for ``POWER_SUPPLY_CAPACITY``. Returns None for anything
    unrecognized.
    """
    for key in keys:
        if not line.startswith(key.token):
            continue
        remainder = line[len(key.token) :]
        if not remainder.startswith(SEPARATOR):
            continue
        return key, remainder[len(SEPARATOR) :]
    return None
