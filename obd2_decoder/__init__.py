"""
OBD-II Decoder - PID registry and decode formulas

Turns the raw data bytes of an OBD-II response (as read through an
ELM327/OBDLink adapter) into typed physical values.

    from obd2_decoder import REGISTRY

    REGISTRY.decode(0x01, 0x0C, bytes([0x1A, 0xF8]))  # 1726.0 rpm
"""

__version__ = "1.0.0"

from .definition import PIDCategory, PIDDefinition, ResultSize
from .errors import DuplicatePIDError, InvalidLengthError, OBDDecodeError, PIDNotFoundError
from .pids import REGISTRY, decode_pid, lookup
from .registry import PIDRegistry
