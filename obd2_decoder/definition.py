"""
PID Definition

One record per (mode, pid): expected response width, bounds, unit and the
formula turning the raw payload into a value.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from .errors import InvalidLengthError

logger = logging.getLogger(__name__)


class PIDCategory(Enum):
    """PID categories for organization."""
    ENGINE = "engine"
    FUEL = "fuel"
    AIR = "air"
    TEMPERATURE = "temperature"
    SPEED = "speed"
    OXYGEN = "oxygen"
    EMISSIONS = "emissions"
    CATALYST = "catalyst"
    EVAP = "evap"
    FREEZE_FRAME = "freeze_frame"
    VEHICLE_INFO = "vehicle_info"


@dataclass(frozen=True)
class ResultSize:
    """Expected response width in bytes, exact or an inclusive range."""
    low: int
    high: int

    @classmethod
    def exact(cls, size: int) -> 'ResultSize':
        return cls(size, size)

    @classmethod
    def between(cls, low: int, high: int) -> 'ResultSize':
        if low > high:
            raise ValueError(f"Invalid result size range {low}..{high}")
        return cls(low, high)

    @property
    def is_exact(self) -> bool:
        return self.low == self.high

    @property
    def max_bytes(self) -> int:
        return self.high

    def accepts(self, size: int) -> bool:
        return self.low <= size <= self.high

    def __str__(self) -> str:
        if self.is_exact:
            return str(self.low)
        return f"{self.low}..{self.high}"


@dataclass(frozen=True)
class PIDDefinition:
    """Definition for an OBD-II PID."""
    mode: int
    pid: int
    name: str
    description: str
    result_size: ResultSize
    formula: Callable[[int], Any]
    category: PIDCategory
    unit: Optional[str] = None
    min_value: Any = None
    max_value: Any = None

    # Optional: alternate names for this PID
    aliases: Tuple[str, ...] = field(default_factory=tuple)

    def mode_number(self) -> int:
        return self.mode

    def pid_number(self) -> int:
        return self.pid

    def interpret(self, raw: int) -> Any:
        """
        Decode the raw unsigned integer of the response.

        Args:
            raw: Payload as a big-endian unsigned integer

        Returns:
            Decoded value
        """
        if raw < 0:
            raise ValueError(f"Raw value must be unsigned, got {raw}")
        width = max(1, (raw.bit_length() + 7) // 8)
        if width > self.result_size.max_bytes:
            raise InvalidLengthError(self.result_size, width)
        return self.formula(raw)

    def decode(self, data: bytes) -> Any:
        """Decode raw response bytes (data bytes only, no mode/PID echo)."""
        if not self.result_size.accepts(len(data)):
            raise InvalidLengthError(self.result_size, len(data))
        value = self.interpret(int.from_bytes(data, "big"))
        logger.debug(f"{self.name} ({self.mode:02X} {self.pid:02X}) {bytes(data).hex().upper()} -> {value!r}")
        return value

    def to_dict(self) -> Dict[str, Any]:
        """Convert metadata to a dictionary for JSON serialization."""
        return {
            'mode': self.mode,
            'pid': self.pid,
            'name': self.name,
            'description': self.description,
            'result_size': str(self.result_size),
            'unit': self.unit,
            'min': self.min_value,
            'max': self.max_value,
            'category': self.category.value,
            'aliases': list(self.aliases),
        }

    def __str__(self) -> str:
        return f"PID(mode=0x{self.mode:02X}, pid=0x{self.pid:02X}, result_size={self.result_size})"
