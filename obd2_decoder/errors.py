"""
Exceptions raised by the PID registry and decoders.
"""

from typing import Optional


class OBDDecodeError(Exception):
    """Base class for all decoder errors."""


class PIDNotFoundError(OBDDecodeError, LookupError):
    """No definition is registered for the requested PID."""

    def __init__(self, mode: Optional[int], pid: Optional[int] = None, name: Optional[str] = None):
        self.mode = mode
        self.pid = pid
        self.name = name
        if name is not None:
            message = f"Unknown PID name {name!r}"
            if mode is not None:
                message += f" in mode {mode:02X}"
        else:
            message = f"Unknown PID {pid:02X} in mode {mode:02X}"
        super().__init__(message)


class InvalidLengthError(OBDDecodeError, ValueError):
    """Raw payload width disagrees with the declared result size."""

    def __init__(self, expected, actual: int, what: str = "bytes"):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} {what}, got {actual}")


class DuplicatePIDError(OBDDecodeError):
    """A (mode, pid) pair or name was registered twice."""
