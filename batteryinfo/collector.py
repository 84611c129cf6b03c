from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .config import RunConfiguration
from .record import BatteryRecord, synthesize
from .render import Renderer, emit_record
from .sysfs import find_battery_paths, read_device

log = logging.getLogger(__name__)


def read_records(
    battery_paths: Iterable[Path], config: RunConfiguration
) -> Iterator[tuple[int, BatteryRecord]]:
    """Yield ``(index, record)`` for every readable battery.

    The index counts battery directories, so an unreadable battery still
    consumes one.
    """
    for index, path in enumerate(battery_paths):
        fields = read_device(path)
        if fields is None:
            continue
        log.debug("Read %s: %s", path.name, ", ".join(sorted(fields.populated())))
        yield index, synthesize(fields, config)


def report(
    config: RunConfiguration,
    renderer: Renderer,
    sysfs_root: Optional[Path] = None,
) -> int:
    """Render every battery; returns how many records were emitted.

    Raises OSError, before anything is rendered, when the root cannot be
    listed.
    """
    battery_paths = list(
        find_battery_paths(sysfs_root or config.sysfs_root, name=config.name)
    )
    if not battery_paths:
        log.debug("No batteries found in %s", sysfs_root or config.sysfs_root)

    emitted = 0
    renderer.begin_batch()
    for index, record in read_records(battery_paths, config):
        emit_record(renderer, index, record, config.field_sequence)
        emitted += 1
    renderer.end_batch()
    return emitted
