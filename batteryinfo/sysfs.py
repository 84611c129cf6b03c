from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Optional, Sequence

from .config import DEFAULT_SYSFS_ROOT
from .fields import FieldAccumulator, RawFields
from .uevent import DEVICE_KEYS, POWER_SUPPLY_KEYS, UeventKey

log = logging.getLogger(__name__)

BATTERY_TYPE = b"Battery"
# sysfs attributes end with a newline; that terminator is not part of the value.
_BATTERY_TYPE_CONTENTS = (BATTERY_TYPE, BATTERY_TYPE + b"\n")


def list_device_names(sysfs_root: Path = DEFAULT_SYSFS_ROOT) -> list[str]:
    """Names of the entries under ``sysfs_root``, hidden ones excluded.

    Raises OSError when the directory itself cannot be listed.
    """
    return sorted(
        entry.name for entry in sysfs_root.iterdir() if not entry.name.startswith(".")
    )


def is_battery(path: Path) -> bool:
    type_file = path / "type"
    try:
        contents = type_file.read_bytes()
    except OSError as exc:
        log.debug("Skipping %s: %s", path.name, exc)
        return False
    return contents in _BATTERY_TYPE_CONTENTS


def find_battery_paths(
    sysfs_root: Path = DEFAULT_SYSFS_ROOT, name: Optional[str] = None
) -> Iterator[Path]:
    for entry in list_device_names(sysfs_root):
        if name is not None and entry != name:
            continue
        candidate = sysfs_root / entry
        if not is_battery(candidate):
            continue
        yield candidate
        if name is not None:
            return


def _read_uevent(
    path: Path, accumulator: FieldAccumulator, keys: Sequence[UeventKey]
) -> bool:
    try:
        handle = path.open(encoding="utf-8", errors="replace")
    except OSError as exc:
        log.debug("Cannot open %s: %s", path, exc)
        return False
    with handle:
        try:
            accumulator.feed_lines(handle, keys)
        except OSError as exc:
            # Whatever was read before the failure is kept.
            log.debug("Error reading %s: %s", path, exc)
    return True


def read_device(path: Path) -> Optional[RawFields]:
    """Read ``uevent`` and ``device/uevent`` of one battery into RawFields.

    Returns None when neither file could be opened.
    """
    accumulator = FieldAccumulator()
    primary = _read_uevent(path / "uevent", accumulator, POWER_SUPPLY_KEYS)
    secondary = _read_uevent(path / "device" / "uevent", accumulator, DEVICE_KEYS)
    if not (primary or secondary):
        log.debug("No readable uevent for %s", path.name)
        return None
    return accumulator.fields
