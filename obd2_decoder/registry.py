"""
PID Registry

Resolves a (mode, pid) pair, or a name/alias, to its PIDDefinition.
"""

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from .decoders import decode_available_pids
from .definition import PIDCategory, PIDDefinition
from .errors import DuplicatePIDError, PIDNotFoundError

logger = logging.getLogger(__name__)


class PIDRegistry:
    """Registry for accessing PID definitions."""

    def __init__(self):
        self._definitions: Dict[Tuple[int, int], PIDDefinition] = {}
        self._names: Dict[Tuple[int, str], int] = {}  # (mode, NAME) -> pid

    def register(self, defn: PIDDefinition) -> PIDDefinition:
        """
        Add a definition.

        Raises:
            DuplicatePIDError: (mode, pid), name or alias already taken
        """
        key = (defn.mode, defn.pid)
        if key in self._definitions:
            raise DuplicatePIDError(
                f"PID {defn.pid:02X} already registered in mode {defn.mode:02X} "
                f"as {self._definitions[key].name}"
            )
        names = [defn.name.upper()] + [alias.upper() for alias in defn.aliases]
        for name in names:
            if (defn.mode, name) in self._names:
                raise DuplicatePIDError(f"Name {name} already used in mode {defn.mode:02X}")

        self._definitions[key] = defn
        for name in names:
            self._names[(defn.mode, name)] = defn.pid
        return defn

    def lookup(self, mode: int, pid: int) -> PIDDefinition:
        """
        Get the definition for a (mode, pid) pair.

        Raises:
            PIDNotFoundError: nothing registered for the pair
        """
        defn = self._definitions.get((mode, pid))
        if defn is None:
            logger.debug(f"No PID {pid:02X} registered for mode {mode:02X}")
            raise PIDNotFoundError(mode, pid)
        return defn

    def get(self, mode: int, pid: int) -> Optional[PIDDefinition]:
        """Like lookup() but returns None for unknown PIDs."""
        return self._definitions.get((mode, pid))

    def find(self, name: str, mode: int = 0x01) -> PIDDefinition:
        """
        Get a definition by name or alias (case-insensitive).

        Raises:
            PIDNotFoundError: unknown name
        """
        defn = self.get_by_name(name, mode)
        if defn is None:
            raise PIDNotFoundError(mode, name=name)
        return defn

    def get_by_name(self, name: str, mode: int = 0x01) -> Optional[PIDDefinition]:
        """Like find() but returns None for unknown names."""
        pid = self._names.get((mode, name.strip().upper()))
        if pid is None:
            return None
        return self._definitions[(mode, pid)]

    def all(self, mode: int) -> List[PIDDefinition]:
        """All definitions of a mode, in ascending PID order."""
        return sorted(
            (d for (m, _), d in self._definitions.items() if m == mode),
            key=lambda d: d.pid,
        )

    def by_category(self, category: PIDCategory, mode: int = 0x01) -> List[PIDDefinition]:
        return [d for d in self.all(mode) if d.category == category]

    def modes(self) -> List[int]:
        return sorted({mode for mode, _ in self._definitions})

    def names(self, mode: int = 0x01) -> List[str]:
        return [d.name for d in self.all(mode)]

    def decode(self, mode: int, pid: int, data: bytes) -> Any:
        """
        Decode raw data using the registered definition.

        Args:
            mode: OBD-II mode (service) number
            pid: PID number
            data: Response data bytes, without the mode/PID echo

        Returns:
            Decoded value
        """
        return self.lookup(mode, pid).decode(data)

    def decode_available(self, responses: Mapping[int, int]) -> List[int]:
        """
        Combine supported-PIDs bitmaps into one ascending list.

        Args:
            responses: Query PID (0x00, 0x20, ...) -> 32-bit bitmap

        Returns:
            Supported PID numbers
        """
        supported = set()
        for base_pid, bitmap in responses.items():
            if base_pid % 0x20:
                raise ValueError(f"PID {base_pid:02X} is not a supported-PIDs query")
            supported.update(decode_available_pids(bitmap, base_pid // 0x20))
        return sorted(supported)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, key: Tuple[int, int]) -> bool:
        return key in self._definitions

    def __iter__(self) -> Iterator[PIDDefinition]:
        return iter(sorted(self._definitions.values(), key=lambda d: (d.mode, d.pid)))
