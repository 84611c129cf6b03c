from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_SYSFS_ROOT = Path("/sys/class/power_supply")
SYSFS_ROOT_ENV = "BATTERYINFO_SYSFS_ROOT"

FIELD_ALPHABET = "nctvCTDdmMeshSHrpog"
DEFAULT_SEQUENCE = "ncvCmMedsp"
COMPLETE_SEQUENCE = "nctvCTdmMeshSHrpogD"


class OutputFormat(enum.Enum):
    TEXT = "text"
    JSON = "json"


class InvalidFieldSelector(ValueError):
    def __init__(self, char: str) -> None:
        super().__init__(f"unrecognised character -- '{char}'")
        self.char = char


def validate_sequence(sequence: str) -> str:
    for char in sequence:
        if char not in FIELD_ALPHABET:
            raise InvalidFieldSelector(char)
    return sequence


def resolve_sysfs_root(root: Optional[Path | os.PathLike | str]) -> Path:
    if isinstance(root, (str, os.PathLike)):
        return Path(root)
    env = os.environ.get(SYSFS_ROOT_ENV)
    if env:
        return Path(env).expanduser()
    return DEFAULT_SYSFS_ROOT


@dataclass(frozen=True)
class RunConfiguration:
    output_format: OutputFormat = OutputFormat.TEXT
    sequence: str = DEFAULT_SEQUENCE
    output_all: bool = False
    digits: bool = False
    name: Optional[str] = None
    disable_charge_cap: bool = False
    sysfs_root: Path = DEFAULT_SYSFS_ROOT

    @property
    def field_sequence(self) -> str:
        """The sequence actually rendered; ``output_all`` overrides the user's."""
        return COMPLETE_SEQUENCE if self.output_all else self.sequence

    @property
    def clamp_charge(self) -> bool:
        return not self.disable_charge_cap
