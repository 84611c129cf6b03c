from __future__ import annotations

import logging
import re
from typing import Optional

log = logging.getLogger(__name__)

# strtol-compatible: optional leading blanks and sign, then decimal digits only.
_INT_PATTERN = re.compile(r"[ \t\n\r\f\v]*[+-]?[0-9]+")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def parse_int(raw: str) -> Optional[int]:
    """Parse a base-10 integer the way the kernel's values are written.

    Returns None for empty input, trailing garbage, or values that do not fit
    a signed 64-bit integer.
    """
    if not _INT_PATTERN.fullmatch(raw):
        return None
    value = int(raw)
    if value < INT64_MIN or value > INT64_MAX:
        log.debug("Integer out of range: %s", raw)
        return None
    return value


def percent(numerator: Optional[int], denominator: Optional[int]) -> Optional[float]:
    if numerator is None or denominator in (None, 0):
        return None
    return (numerator / denominator) * 100.0


def scaled(raw_value: Optional[int], divisor: float) -> Optional[float]:
    if raw_value is None:
        return None
    return raw_value / divisor
