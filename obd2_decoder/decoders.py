"""
OBD-II Decode Functions

Pure formulas turning the raw unsigned integer of a PID response into an
engineering value. Multi-byte payloads are big-endian: for a 2-byte
response A is the high byte and B the low byte, for a 4-byte response
the bytes are A, B, C, D from most to least significant.

Reference: SAE J1979 / ISO 15031-5
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


class FuelSystem(Enum):
    """Fuel system status (PID 03)."""
    MOTOR_OFF = "Motor off"
    OPEN_LOOP_INSUFFICIENT_TEMPERATURE = "Open loop due to insufficient engine temperature"
    CLOSED_LOOP_OXYGEN_FEEDBACK = "Closed loop, using oxygen sensor feedback"
    OPEN_LOOP_LOAD_OR_DECEL_FUEL_CUT = "Open loop due to engine load or fuel cut from deceleration"
    OPEN_LOOP_SYSTEM_FAILURE = "Open loop due to system failure"
    CLOSED_LOOP_FAULT_FEEDBACK = "Closed loop, fault in feedback system"
    UNKNOWN = "Unknown"


class SecondaryAirStatus(Enum):
    """Commanded secondary air status (PID 12)."""
    UPSTREAM = "Upstream"
    DOWNSTREAM = "Downstream of catalytic converter"
    FROM_OUTSIDE_ATMOSPHERE_OR_OFF = "From the outside atmosphere or off"
    PUMP_COMMANDED_FOR_DIAGNOSTICS = "Pump commanded on for diagnostics"
    UNKNOWN = "Unknown"


class ObdStandard(Enum):
    """OBD standards this vehicle conforms to (PID 1C)."""
    OBD2_CARB = "OBD-II as defined by the CARB"
    OBD_EPA = "OBD as defined by the EPA"
    OBD1_AND_OBD2 = "OBD and OBD-II"
    OBD1 = "OBD-I"
    NOT_OBD_COMPLIANT = "Not OBD compliant"
    EOBD = "EOBD (Europe)"
    EOBD_AND_OBD2 = "EOBD and OBD-II"
    EOBD_AND_OBD = "EOBD and OBD"
    EOBD_OBD_AND_OBD2 = "EOBD, OBD and OBD II"
    JOBD = "JOBD (Japan)"
    JOBD_AND_OBD2 = "JOBD and OBD II"
    JOBD_AND_EOBD = "JOBD and EOBD"
    JOBD_EOBD_AND_OBD2 = "JOBD, EOBD, and OBD II"
    EMD = "Engine Manufacturer Diagnostics (EMD)"
    EMD_PLUS = "Engine Manufacturer Diagnostics Enhanced (EMD+)"
    HD_OBD_C = "Heavy Duty On-Board Diagnostics (Child/Partial) (HD OBD-C)"
    HD_OBD = "Heavy Duty On-Board Diagnostics (HD OBD)"
    WWH_OBD = "World Wide Harmonized OBD (WWH OBD)"
    HD_EOBD1 = "Heavy Duty Euro OBD Stage I without NOx control (HD EOBD-I)"
    HD_EOBD1_N = "Heavy Duty Euro OBD Stage I with NOx control (HD EOBD-I N)"
    HD_EOBD2 = "Heavy Duty Euro OBD Stage II without NOx control (HD EOBD-II)"
    HD_EOBD2_N = "Heavy Duty Euro OBD Stage II with NOx control (HD EOBD-II N)"
    OBD_BR1 = "Brazil OBD Phase 1 (OBDBr-1)"
    OBD_BR2 = "Brazil OBD Phase 2 (OBDBr-2)"
    KOBD = "Korean OBD (KOBD)"
    IOBD1 = "India OBD I (IOBD I)"
    IOBD2 = "India OBD II (IOBD II)"
    HD_EOBD6 = "Heavy Duty Euro OBD Stage VI (HD EOBD-IV)"
    RESERVED = "Reserved"
    NOT_AVAILABLE_FOR_ASSIGNMENT = "Not available for assignment (SAE J1939 special meaning)"
    UNKNOWN = "Unknown"


class BinaryState(Enum):
    """On/off flag carried by the top bit of a byte."""
    ON = "on"
    OFF = "off"
    UNKNOWN = "unknown"


_FUEL_SYSTEMS: Dict[int, FuelSystem] = {
    0x00: FuelSystem.MOTOR_OFF,
    0x01: FuelSystem.OPEN_LOOP_INSUFFICIENT_TEMPERATURE,
    0x02: FuelSystem.CLOSED_LOOP_OXYGEN_FEEDBACK,
    0x04: FuelSystem.OPEN_LOOP_LOAD_OR_DECEL_FUEL_CUT,
    0x08: FuelSystem.OPEN_LOOP_SYSTEM_FAILURE,
    0x10: FuelSystem.CLOSED_LOOP_FAULT_FEEDBACK,
}

_AIR_STATUSES: Dict[int, SecondaryAirStatus] = {
    0x01: SecondaryAirStatus.UPSTREAM,
    0x02: SecondaryAirStatus.DOWNSTREAM,
    0x04: SecondaryAirStatus.FROM_OUTSIDE_ATMOSPHERE_OR_OFF,
    0x08: SecondaryAirStatus.PUMP_COMMANDED_FOR_DIAGNOSTICS,
}

_OBD_STANDARDS: Dict[int, ObdStandard] = {
    1: ObdStandard.OBD2_CARB,
    2: ObdStandard.OBD_EPA,
    3: ObdStandard.OBD1_AND_OBD2,
    4: ObdStandard.OBD1,
    5: ObdStandard.NOT_OBD_COMPLIANT,
    6: ObdStandard.EOBD,
    7: ObdStandard.EOBD_AND_OBD2,
    8: ObdStandard.EOBD_AND_OBD,
    9: ObdStandard.EOBD_OBD_AND_OBD2,
    10: ObdStandard.JOBD,
    11: ObdStandard.JOBD_AND_OBD2,
    12: ObdStandard.JOBD_AND_EOBD,
    13: ObdStandard.JOBD_EOBD_AND_OBD2,
    17: ObdStandard.EMD,
    18: ObdStandard.EMD_PLUS,
    19: ObdStandard.HD_OBD_C,
    20: ObdStandard.HD_OBD,
    21: ObdStandard.WWH_OBD,
    23: ObdStandard.HD_EOBD1,
    24: ObdStandard.HD_EOBD1_N,
    25: ObdStandard.HD_EOBD2,
    26: ObdStandard.HD_EOBD2_N,
    28: ObdStandard.OBD_BR1,
    29: ObdStandard.OBD_BR2,
    30: ObdStandard.KOBD,
    31: ObdStandard.IOBD1,
    32: ObdStandard.IOBD2,
    33: ObdStandard.HD_EOBD6,
}

# First nibble of a DTC -> letter and first digit (SAE J2012)
_DTC_PREFIXES = {
    0: 'P0', 1: 'P1', 2: 'P2', 3: 'P3',
    4: 'C0', 5: 'C1', 6: 'C2', 7: 'C3',
    8: 'B0', 9: 'B1', 10: 'B2', 11: 'B3',
    12: 'U0', 13: 'U1', 14: 'U2', 15: 'U3',
}


@dataclass(frozen=True)
class MonitorStatus:
    """Monitor status since DTCs cleared (PID 01)."""
    mil: BinaryState
    dtc_count: int
    ignition: str  # "spark" or "compression"
    raw: int


def _word(value: int) -> Tuple[int, int]:
    """Split a 16-bit value into (A, B), A being the high byte."""
    return (value >> 8) & 0xFF, value & 0xFF


def _dword(value: int) -> Tuple[int, int, int, int]:
    """Split a 32-bit value into (A, B, C, D), A being the high byte."""
    return (value >> 24) & 0xFF, (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


# -----------------------------------------------------------------------------
# Single byte formulas
# -----------------------------------------------------------------------------

def decode_raw(value: int) -> int:
    """Value used as-is (speed, MAP, barometric pressure, counters)."""
    return value


def decode_celsius(value: int) -> int:
    """Temperature with a -40 offset: -40..215 °C."""
    return value - 40


def decode_percent(value: int) -> float:
    """Byte scaled to 0..100 %."""
    return value / 2.55


def decode_fuel_trim(value: int) -> float:
    """Fuel trim: -100 (too rich) .. 99.2 (too lean) %."""
    return value / 1.28 - 100


def decode_egr_error(value: int) -> float:
    """EGR error, same scaling as fuel trims."""
    return value / 1.28 - 100


def decode_timing_advance(value: int) -> float:
    """Timing advance in degrees before TDC."""
    return value / 2 - 64


def decode_fuel_pressure(value: int) -> int:
    """Fuel pressure (gauge), 3 kPa per count."""
    return value * 3


def decode_air_status(value: int) -> SecondaryAirStatus:
    """Commanded secondary air status, one bit per state."""
    status = _AIR_STATUSES.get(value, SecondaryAirStatus.UNKNOWN)
    if status is SecondaryAirStatus.UNKNOWN:
        logger.debug(f"Unknown secondary air status 0x{value:02X}")
    return status


def decode_obd_standard(value: int) -> ObdStandard:
    """
    Decode the OBD standard byte.

    Unassigned codes are not errors: 14-16, 22, 27 and 34-250 decode to
    RESERVED, 251-255 to NOT_AVAILABLE_FOR_ASSIGNMENT and 0 to UNKNOWN.
    """
    standard = _OBD_STANDARDS.get(value)
    if standard is not None:
        return standard
    if value == 0:
        return ObdStandard.UNKNOWN
    if 251 <= value <= 255:
        return ObdStandard.NOT_AVAILABLE_FOR_ASSIGNMENT
    if 14 <= value <= 250:
        return ObdStandard.RESERVED
    logger.debug(f"OBD standard byte out of range: {value}")
    return ObdStandard.UNKNOWN


def decode_auxiliary_input_status(value: int) -> BinaryState:
    """Power take off (PTO) status from the top bit."""
    return {0: BinaryState.OFF, 1: BinaryState.ON}.get(value >> 7, BinaryState.UNKNOWN)


def decode_o2_sensors_present(value: int) -> List[str]:
    """
    Oxygen sensors present in 2 banks (PID 13).

    Bits 0-3 are bank 1 sensors 1-4, bits 4-7 bank 2 sensors 1-4.
    """
    return [f"B{1 + bit // 4}S{1 + bit % 4}" for bit in range(8) if value & (1 << bit)]


def decode_o2_sensors_present_4_banks(value: int) -> List[str]:
    """
    Oxygen sensors present in 4 banks (PID 1D).

    Each pair of bits is one bank, sensors 1-2.
    """
    return [f"B{1 + bit // 2}S{1 + bit % 2}" for bit in range(8) if value & (1 << bit)]


# -----------------------------------------------------------------------------
# Two byte formulas
# -----------------------------------------------------------------------------

def decode_uint16(value: int) -> int:
    """256*A + B."""
    a, b = _word(value)
    return 256 * a + b


def decode_seconds(value: int) -> int:
    """Run time in seconds."""
    return decode_uint16(value)


def decode_km(value: int) -> int:
    """Distance in km."""
    return decode_uint16(value)


def decode_rpm(value: int) -> float:
    """Engine speed: (256*A + B) / 4 rpm."""
    a, b = _word(value)
    return (256 * a + b) / 4


def decode_maf(value: int) -> float:
    """Mass air flow: (256*A + B) / 100 g/s."""
    a, b = _word(value)
    return (256 * a + b) / 100


def decode_fuel_rail_pressure(value: int) -> float:
    """Fuel rail pressure relative to manifold vacuum, kPa."""
    a, b = _word(value)
    return 0.079 * (256 * a + b)


def decode_fuel_rail_gauge_pressure(value: int) -> int:
    """Fuel rail gauge pressure (diesel or gasoline direct injection), kPa."""
    a, b = _word(value)
    return 10 * (256 * a + b)


def decode_fuel_system(value: int) -> Tuple[FuelSystem, FuelSystem]:
    """
    Fuel system status: (system 1 from A, system 2 from B).

    A is the high byte of the big-endian value, as J1979 orders it.
    """
    a, b = _word(value)
    systems = (
        _FUEL_SYSTEMS.get(a, FuelSystem.UNKNOWN),
        _FUEL_SYSTEMS.get(b, FuelSystem.UNKNOWN),
    )
    if FuelSystem.UNKNOWN in systems:
        logger.debug(f"Unknown fuel system status 0x{value:04X}")
    return systems


def decode_oxygen_sensor(value: int) -> Tuple[float, float]:
    """
    Narrow-band oxygen sensor: (voltage, short term fuel trim).

    A/200 volts. B is the trim, 0xFF meaning the sensor is not used
    in trim calculation, reported as 0.
    """
    a, b = _word(value)
    trim = 100 * b / 128 - 100 if b != 0xFF else 0.0
    return a / 200, trim


def decode_evap_vapor_pressure(value: int) -> float:
    """Evap system vapor pressure, signed two's complement / 4, Pa."""
    if value & 0x8000:
        value -= 0x10000
    return value / 4


def decode_catalyst_temperature(value: int) -> float:
    """Catalyst temperature: (256*A + B) / 10 - 40 °C."""
    a, b = _word(value)
    return (256 * a + b) / 10 - 40


def decode_dtc(value: int) -> Optional[str]:
    """
    Decode a 2-byte DTC (e.g. 0x0133 -> "P0133").

    Returns None for 0x0000, which means no DTC.
    """
    if value == 0:
        return None
    hex_code = f"{value:04X}"
    return f"{_DTC_PREFIXES[int(hex_code[0], 16)]}{hex_code[1:]}"


# -----------------------------------------------------------------------------
# Four byte formulas
# -----------------------------------------------------------------------------

def decode_available_pids(value: int, block_base: int) -> List[int]:
    """
    Unpack a supported-PIDs bitmap.

    Bit 31 (MSB) flags PID block_base*32 + 1, bit 0 flags
    block_base*32 + 32. The list is in ascending PID order.

    Args:
        value: 32-bit bitmap
        block_base: 0 for PID 00, 1 for PID 20, 2 for PID 40, ...

    Returns:
        Supported PID numbers
    """
    available = []
    for offset in range(32):
        if value & (1 << (31 - offset)):
            available.append(offset + 1 + 32 * block_base)
    return available


def decode_monitor_status(value: int) -> MonitorStatus:
    """MIL state, stored DTC count and ignition type from PID 01."""
    a, b, _, _ = _dword(value)
    return MonitorStatus(
        mil=decode_auxiliary_input_status(a),
        dtc_count=a & 0x7F,
        ignition="compression" if b & 0x08 else "spark",
        raw=value,
    )


def decode_oxygen_sensor_lambda(value: int) -> Tuple[float, float]:
    """Wide-band oxygen sensor: (equivalence ratio, voltage)."""
    a, b, c, d = _dword(value)
    return (2 / 65536) * (256 * a + b), (8 / 65536) * (256 * c + d)


def decode_oxygen_sensor_current(value: int) -> Tuple[float, float]:
    """Wide-band oxygen sensor: (equivalence ratio, current in mA)."""
    a, b, c, d = _dword(value)
    return (2 / 65536) * (256 * a + b), (256 * c + d) / 256 - 128
