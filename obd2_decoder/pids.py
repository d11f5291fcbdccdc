"""
OBD-II PID Definitions

Standard PIDs from Mode 01 (current data) with their decode formulas, and
the Mode 02 (freeze frame) mirror of the same table.

Reference: SAE J1979 / ISO 15031-5
"""

import logging
from dataclasses import replace
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

from .decoders import (
    decode_air_status,
    decode_auxiliary_input_status,
    decode_available_pids,
    decode_catalyst_temperature,
    decode_celsius,
    decode_dtc,
    decode_egr_error,
    decode_evap_vapor_pressure,
    decode_fuel_pressure,
    decode_fuel_rail_gauge_pressure,
    decode_fuel_rail_pressure,
    decode_fuel_system,
    decode_fuel_trim,
    decode_km,
    decode_maf,
    decode_monitor_status,
    decode_o2_sensors_present,
    decode_o2_sensors_present_4_banks,
    decode_obd_standard,
    decode_oxygen_sensor,
    decode_oxygen_sensor_current,
    decode_oxygen_sensor_lambda,
    decode_percent,
    decode_raw,
    decode_rpm,
    decode_seconds,
    decode_timing_advance,
)
from .definition import PIDCategory, PIDDefinition, ResultSize
from .registry import PIDRegistry

logger = logging.getLogger(__name__)

MODE_CURRENT_DATA = 0x01
MODE_FREEZE_FRAME = 0x02

# Default registry, filled below at import time
REGISTRY = PIDRegistry()


def register_pid(
    pid: int,
    name: str,
    description: str,
    num_bytes: Union[int, Tuple[int, int]],
    formula: Callable[[int], Any],
    category: PIDCategory,
    unit: Optional[str] = None,
    min_val: Any = None,
    max_val: Any = None,
    aliases: Optional[Sequence[str]] = None,
    mode: int = MODE_CURRENT_DATA,
) -> PIDDefinition:
    """Register a PID definition in the default registry."""
    if isinstance(num_bytes, tuple):
        result_size = ResultSize.between(*num_bytes)
    else:
        result_size = ResultSize.exact(num_bytes)
    defn = PIDDefinition(
        mode=mode,
        pid=pid,
        name=name,
        description=description,
        result_size=result_size,
        formula=formula,
        category=category,
        unit=unit,
        min_value=min_val,
        max_value=max_val,
        aliases=tuple(aliases or ()),
    )
    return REGISTRY.register(defn)


# -----------------------------------------------------------------------------
# Supported PIDs bitmaps (0x00, 0x20, 0x40)
# -----------------------------------------------------------------------------

register_pid(
    pid=0x00,
    name="PIDS_SUPPORTED_01_20",
    description="PIDs Supported [01-20] (bitmap)",
    num_bytes=4,
    formula=lambda v: decode_available_pids(v, 0),
    category=PIDCategory.VEHICLE_INFO,
    aliases=["PIDS_A"]
)

register_pid(
    pid=0x20,
    name="PIDS_SUPPORTED_21_40",
    description="PIDs Supported [21-40] (bitmap)",
    num_bytes=4,
    formula=lambda v: decode_available_pids(v, 1),
    category=PIDCategory.VEHICLE_INFO,
    aliases=["PIDS_B"]
)

register_pid(
    pid=0x40,
    name="PIDS_SUPPORTED_41_60",
    description="PIDs Supported [41-60] (bitmap)",
    num_bytes=4,
    formula=lambda v: decode_available_pids(v, 2),
    category=PIDCategory.VEHICLE_INFO,
    aliases=["PIDS_C"]
)

# -----------------------------------------------------------------------------
# Status PIDs
# -----------------------------------------------------------------------------

register_pid(
    pid=0x01,
    name="MONITOR_STATUS",
    description="Monitor Status Since DTCs Cleared (MIL, DTC count, readiness)",
    num_bytes=4,
    formula=decode_monitor_status,
    category=PIDCategory.ENGINE,
    aliases=["MIL_STATUS", "DTC_STATUS"]
)

register_pid(
    pid=0x02,
    name="FREEZE_DTC",
    description="DTC That Caused Freeze Frame",
    num_bytes=2,
    formula=decode_dtc,
    category=PIDCategory.FREEZE_FRAME
)

register_pid(
    pid=0x1C,
    name="OBD_STANDARD",
    description="OBD Standards This Vehicle Conforms To",
    num_bytes=1,
    formula=decode_obd_standard,
    category=PIDCategory.VEHICLE_INFO,
    aliases=["OBD_COMPLIANCE"]
)

register_pid(
    pid=0x1E,
    name="AUX_INPUT_STATUS",
    description="Auxiliary Input Status (Power Take Off)",
    num_bytes=1,
    formula=decode_auxiliary_input_status,
    category=PIDCategory.ENGINE,
    aliases=["PTO_STATUS"]
)

# -----------------------------------------------------------------------------
# Engine PIDs
# -----------------------------------------------------------------------------

register_pid(
    pid=0x04,
    name="LOAD",
    description="Calculated Engine Load",
    num_bytes=1,
    unit="%",
    min_val=0.0,
    max_val=100.0,
    formula=decode_percent,
    category=PIDCategory.ENGINE,
    aliases=["ENGINE_LOAD", "CALC_LOAD"]
)

register_pid(
    pid=0x0C,
    name="RPM",
    description="Engine RPM",
    num_bytes=2,
    unit="rpm",
    min_val=0.0,
    max_val=16383.75,
    formula=decode_rpm,
    category=PIDCategory.ENGINE,
    aliases=["ENGINE_RPM", "ENGINE_SPEED"]
)

register_pid(
    pid=0x0E,
    name="TIMING_ADV",
    description="Timing Advance",
    num_bytes=1,
    unit="degrees BTDC",
    min_val=-64.0,
    max_val=63.5,
    formula=decode_timing_advance,
    category=PIDCategory.ENGINE,
    aliases=["TIMING_ADVANCE", "SPARK_ADV"]
)

register_pid(
    pid=0x11,
    name="THROTTLE_POS",
    description="Throttle Position",
    num_bytes=1,
    unit="%",
    min_val=0.0,
    max_val=100.0,
    formula=decode_percent,
    category=PIDCategory.ENGINE,
    aliases=["TPS", "THROTTLE"]
)

register_pid(
    pid=0x1F,
    name="RUN_TIME",
    description="Run Time Since Engine Start",
    num_bytes=2,
    unit="seconds",
    min_val=0,
    max_val=65535,
    formula=decode_seconds,
    category=PIDCategory.ENGINE,
    aliases=["ENGINE_RUN_TIME"]
)

register_pid(
    pid=0x21,
    name="DIST_MIL_ON",
    description="Distance Traveled With MIL On",
    num_bytes=2,
    unit="km",
    min_val=0,
    max_val=65535,
    formula=decode_km,
    category=PIDCategory.ENGINE,
    aliases=["DISTANCE_W_MIL"]
)

register_pid(
    pid=0x31,
    name="DIST_CLR",
    description="Distance Since DTCs Cleared",
    num_bytes=2,
    unit="km",
    min_val=0,
    max_val=65535,
    formula=decode_km,
    category=PIDCategory.ENGINE,
    aliases=["DISTANCE_SINCE_DTC_CLEAR"]
)

# -----------------------------------------------------------------------------
# Temperature PIDs
# -----------------------------------------------------------------------------

register_pid(
    pid=0x05,
    name="COOLANT_TEMP",
    description="Engine Coolant Temperature",
    num_bytes=1,
    unit="°C",
    min_val=-40,
    max_val=215,
    formula=decode_celsius,
    category=PIDCategory.TEMPERATURE,
    aliases=["ECT", "COOLANT"]
)

register_pid(
    pid=0x0F,
    name="IAT",
    description="Intake Air Temperature",
    num_bytes=1,
    unit="°C",
    min_val=-40,
    max_val=215,
    formula=decode_celsius,
    category=PIDCategory.TEMPERATURE,
    aliases=["INTAKE_TEMP", "INTAKE_AIR_TEMP"]
)

# -----------------------------------------------------------------------------
# Fuel System PIDs
# -----------------------------------------------------------------------------

register_pid(
    pid=0x03,
    name="FUEL_STATUS",
    description="Fuel System Status",
    num_bytes=2,
    formula=decode_fuel_system,
    category=PIDCategory.FUEL,
    aliases=["FUEL_SYSTEM_STATUS"]
)

register_pid(
    pid=0x06,
    name="STFT_B1",
    description="Short Term Fuel Trim - Bank 1",
    num_bytes=1,
    unit="%",
    min_val=-100.0,
    max_val=99.21875,
    formula=decode_fuel_trim,
    category=PIDCategory.FUEL,
    aliases=["STFT1", "SHORT_FUEL_TRIM_1"]
)

register_pid(
    pid=0x07,
    name="LTFT_B1",
    description="Long Term Fuel Trim - Bank 1",
    num_bytes=1,
    unit="%",
    min_val=-100.0,
    max_val=99.21875,
    formula=decode_fuel_trim,
    category=PIDCategory.FUEL,
    aliases=["LTFT1", "LONG_FUEL_TRIM_1"]
)

register_pid(
    pid=0x08,
    name="STFT_B2",
    description="Short Term Fuel Trim - Bank 2",
    num_bytes=1,
    unit="%",
    min_val=-100.0,
    max_val=99.21875,
    formula=decode_fuel_trim,
    category=PIDCategory.FUEL,
    aliases=["STFT2", "SHORT_FUEL_TRIM_2"]
)

register_pid(
    pid=0x09,
    name="LTFT_B2",
    description="Long Term Fuel Trim - Bank 2",
    num_bytes=1,
    unit="%",
    min_val=-100.0,
    max_val=99.21875,
    formula=decode_fuel_trim,
    category=PIDCategory.FUEL,
    aliases=["LTFT2", "LONG_FUEL_TRIM_2"]
)

register_pid(
    pid=0x0A,
    name="FUEL_PRESSURE",
    description="Fuel Pressure (gauge)",
    num_bytes=1,
    unit="kPa",
    min_val=0,
    max_val=765,
    formula=decode_fuel_pressure,
    category=PIDCategory.FUEL,
    aliases=["FP"]
)

register_pid(
    pid=0x22,
    name="FUEL_RAIL_PRESSURE_VAC",
    description="Fuel Rail Pressure (relative to manifold vacuum)",
    num_bytes=2,
    unit="kPa",
    min_val=0.0,
    max_val=5177.265,
    formula=decode_fuel_rail_pressure,
    category=PIDCategory.FUEL,
    aliases=["FRP_VAC"]
)

register_pid(
    pid=0x23,
    name="FUEL_RAIL_PRESSURE",
    description="Fuel Rail Gauge Pressure (diesel, or gasoline direct injection)",
    num_bytes=2,
    unit="kPa",
    min_val=0,
    max_val=655350,
    formula=decode_fuel_rail_gauge_pressure,
    category=PIDCategory.FUEL,
    aliases=["FRP", "FUEL_RAIL_GAUGE"]
)

register_pid(
    pid=0x2F,
    name="FUEL_LEVEL",
    description="Fuel Tank Level Input",
    num_bytes=1,
    unit="%",
    min_val=0.0,
    max_val=100.0,
    formula=decode_percent,
    category=PIDCategory.FUEL,
    aliases=["FUEL_TANK_LEVEL"]
)

# -----------------------------------------------------------------------------
# Air Flow PIDs
# -----------------------------------------------------------------------------

register_pid(
    pid=0x0B,
    name="MAP",
    description="Intake Manifold Absolute Pressure",
    num_bytes=1,
    unit="kPa",
    min_val=0,
    max_val=255,
    formula=decode_raw,
    category=PIDCategory.AIR,
    aliases=["INTAKE_PRESSURE", "MANIFOLD_PRESSURE"]
)

register_pid(
    pid=0x10,
    name="MAF",
    description="Mass Air Flow Rate",
    num_bytes=2,
    unit="g/s",
    min_val=0.0,
    max_val=655.35,
    formula=decode_maf,
    category=PIDCategory.AIR,
    aliases=["MAF_RATE", "AIR_FLOW"]
)

register_pid(
    pid=0x33,
    name="BARO",
    description="Absolute Barometric Pressure",
    num_bytes=1,
    unit="kPa",
    min_val=0,
    max_val=255,
    formula=decode_raw,
    category=PIDCategory.AIR,
    aliases=["BAROMETRIC_PRESSURE"]
)

# -----------------------------------------------------------------------------
# Speed PIDs
# -----------------------------------------------------------------------------

register_pid(
    pid=0x0D,
    name="SPEED",
    description="Vehicle Speed",
    num_bytes=1,
    unit="km/h",
    min_val=0,
    max_val=255,
    formula=decode_raw,
    category=PIDCategory.SPEED,
    aliases=["VSS", "VEHICLE_SPEED"]
)

# -----------------------------------------------------------------------------
# Oxygen Sensor PIDs
# -----------------------------------------------------------------------------

register_pid(
    pid=0x13,
    name="O2_SENSORS",
    description="Oxygen Sensors Present (2 banks)",
    num_bytes=1,
    formula=decode_o2_sensors_present,
    category=PIDCategory.OXYGEN,
    aliases=["O2_SENSORS_PRESENT"]
)

register_pid(
    pid=0x1D,
    name="O2_SENSORS_ALT",
    description="Oxygen Sensors Present (4 banks)",
    num_bytes=1,
    formula=decode_o2_sensors_present_4_banks,
    category=PIDCategory.OXYGEN,
    aliases=["O2_SENSORS_PRESENT_4_BANKS"]
)

# Narrow-band sensors: A = voltage, B = short term fuel trim
register_pid(
    pid=0x14,
    name="O2_B1S1",
    description="O2 Sensor Voltage & Short Term Fuel Trim - Bank 1, Sensor 1",
    num_bytes=2,
    unit="V, %",
    min_val=(0.0, -100.0),
    max_val=(1.275, 99.2),
    formula=decode_oxygen_sensor,
    category=PIDCategory.OXYGEN,
    aliases=["O2_11"]
)

register_pid(
    pid=0x15,
    name="O2_B1S2",
    description="O2 Sensor Voltage & Short Term Fuel Trim - Bank 1, Sensor 2",
    num_bytes=2,
    unit="V, %",
    min_val=(0.0, -100.0),
    max_val=(1.275, 99.2),
    formula=decode_oxygen_sensor,
    category=PIDCategory.OXYGEN,
    aliases=["O2_12"]
)

register_pid(
    pid=0x16,
    name="O2_B1S3",
    description="O2 Sensor Voltage & Short Term Fuel Trim - Bank 1, Sensor 3",
    num_bytes=2,
    unit="V, %",
    min_val=(0.0, -100.0),
    max_val=(1.275, 99.2),
    formula=decode_oxygen_sensor,
    category=PIDCategory.OXYGEN,
    aliases=["O2_13"]
)

register_pid(
    pid=0x17,
    name="O2_B1S4",
    description="O2 Sensor Voltage & Short Term Fuel Trim - Bank 1, Sensor 4",
    num_bytes=2,
    unit="V, %",
    min_val=(0.0, -100.0),
    max_val=(1.275, 99.2),
    formula=decode_oxygen_sensor,
    category=PIDCategory.OXYGEN,
    aliases=["O2_14"]
)

register_pid(
    pid=0x18,
    name="O2_B2S1",
    description="O2 Sensor Voltage & Short Term Fuel Trim - Bank 2, Sensor 1",
    num_bytes=2,
    unit="V, %",
    min_val=(0.0, -100.0),
    max_val=(1.275, 99.2),
    formula=decode_oxygen_sensor,
    category=PIDCategory.OXYGEN,
    aliases=["O2_21"]
)

register_pid(
    pid=0x19,
    name="O2_B2S2",
    description="O2 Sensor Voltage & Short Term Fuel Trim - Bank 2, Sensor 2",
    num_bytes=2,
    unit="V, %",
    min_val=(0.0, -100.0),
    max_val=(1.275, 99.2),
    formula=decode_oxygen_sensor,
    category=PIDCategory.OXYGEN,
    aliases=["O2_22"]
)

register_pid(
    pid=0x1A,
    name="O2_B2S3",
    description="O2 Sensor Voltage & Short Term Fuel Trim - Bank 2, Sensor 3",
    num_bytes=2,
    unit="V, %",
    min_val=(0.0, -100.0),
    max_val=(1.275, 99.2),
    formula=decode_oxygen_sensor,
    category=PIDCategory.OXYGEN,
    aliases=["O2_23"]
)

register_pid(
    pid=0x1B,
    name="O2_B2S4",
    description="O2 Sensor Voltage & Short Term Fuel Trim - Bank 2, Sensor 4",
    num_bytes=2,
    unit="V, %",
    min_val=(0.0, -100.0),
    max_val=(1.275, 99.2),
    formula=decode_oxygen_sensor,
    category=PIDCategory.OXYGEN,
    aliases=["O2_24"]
)

# Wide-band sensors: AB = equivalence ratio (lambda), CD = voltage
register_pid(
    pid=0x24,
    name="O2_S1_WR_VOLTAGE",
    description="O2 Sensor 1 - Air-Fuel Equivalence Ratio & Voltage",
    num_bytes=4,
    unit="ratio, V",
    min_val=(0.0, 0.0),
    max_val=(2.0, 8.0),
    formula=decode_oxygen_sensor_lambda,
    category=PIDCategory.OXYGEN,
    aliases=["AFR_S1", "LAMBDA_S1"]
)

register_pid(
    pid=0x25,
    name="O2_S2_WR_VOLTAGE",
    description="O2 Sensor 2 - Air-Fuel Equivalence Ratio & Voltage",
    num_bytes=4,
    unit="ratio, V",
    min_val=(0.0, 0.0),
    max_val=(2.0, 8.0),
    formula=decode_oxygen_sensor_lambda,
    category=PIDCategory.OXYGEN,
    aliases=["AFR_S2", "LAMBDA_S2"]
)

register_pid(
    pid=0x26,
    name="O2_S3_WR_VOLTAGE",
    description="O2 Sensor 3 - Air-Fuel Equivalence Ratio & Voltage",
    num_bytes=4,
    unit="ratio, V",
    min_val=(0.0, 0.0),
    max_val=(2.0, 8.0),
    formula=decode_oxygen_sensor_lambda,
    category=PIDCategory.OXYGEN,
    aliases=["AFR_S3", "LAMBDA_S3"]
)

register_pid(
    pid=0x27,
    name="O2_S4_WR_VOLTAGE",
    description="O2 Sensor 4 - Air-Fuel Equivalence Ratio & Voltage",
    num_bytes=4,
    unit="ratio, V",
    min_val=(0.0, 0.0),
    max_val=(2.0, 8.0),
    formula=decode_oxygen_sensor_lambda,
    category=PIDCategory.OXYGEN,
    aliases=["AFR_S4", "LAMBDA_S4"]
)

register_pid(
    pid=0x28,
    name="O2_S5_WR_VOLTAGE",
    description="O2 Sensor 5 - Air-Fuel Equivalence Ratio & Voltage",
    num_bytes=4,
    unit="ratio, V",
    min_val=(0.0, 0.0),
    max_val=(2.0, 8.0),
    formula=decode_oxygen_sensor_lambda,
    category=PIDCategory.OXYGEN,
    aliases=["AFR_S5", "LAMBDA_S5"]
)

register_pid(
    pid=0x29,
    name="O2_S6_WR_VOLTAGE",
    description="O2 Sensor 6 - Air-Fuel Equivalence Ratio & Voltage",
    num_bytes=4,
    unit="ratio, V",
    min_val=(0.0, 0.0),
    max_val=(2.0, 8.0),
    formula=decode_oxygen_sensor_lambda,
    category=PIDCategory.OXYGEN,
    aliases=["AFR_S6", "LAMBDA_S6"]
)

register_pid(
    pid=0x2A,
    name="O2_S7_WR_VOLTAGE",
    description="O2 Sensor 7 - Air-Fuel Equivalence Ratio & Voltage",
    num_bytes=4,
    unit="ratio, V",
    min_val=(0.0, 0.0),
    max_val=(2.0, 8.0),
    formula=decode_oxygen_sensor_lambda,
    category=PIDCategory.OXYGEN,
    aliases=["AFR_S7", "LAMBDA_S7"]
)

register_pid(
    pid=0x2B,
    name="O2_S8_WR_VOLTAGE",
    description="O2 Sensor 8 - Air-Fuel Equivalence Ratio & Voltage",
    num_bytes=4,
    unit="ratio, V",
    min_val=(0.0, 0.0),
    max_val=(2.0, 8.0),
    formula=decode_oxygen_sensor_lambda,
    category=PIDCategory.OXYGEN,
    aliases=["AFR_S8", "LAMBDA_S8"]
)

# Wide-band sensors: AB = equivalence ratio (lambda), CD = current
for _sensor, _pid in enumerate(range(0x34, 0x3C), start=1):
    register_pid(
        pid=_pid,
        name=f"O2_S{_sensor}_WR_CURRENT",
        description=f"O2 Sensor {_sensor} - Air-Fuel Equivalence Ratio & Current",
        num_bytes=4,
        unit="ratio, mA",
        min_val=(0.0, -128.0),
        max_val=(2.0, 128.0),
        formula=decode_oxygen_sensor_current,
        category=PIDCategory.OXYGEN,
    )

# -----------------------------------------------------------------------------
# Catalyst PIDs
# -----------------------------------------------------------------------------

register_pid(
    pid=0x3C,
    name="CAT_TEMP_B1S1",
    description="Catalyst Temperature - Bank 1, Sensor 1",
    num_bytes=2,
    unit="°C",
    min_val=-40.0,
    max_val=6513.5,
    formula=decode_catalyst_temperature,
    category=PIDCategory.CATALYST
)

register_pid(
    pid=0x3D,
    name="CAT_TEMP_B2S1",
    description="Catalyst Temperature - Bank 2, Sensor 1",
    num_bytes=2,
    unit="°C",
    min_val=-40.0,
    max_val=6513.5,
    formula=decode_catalyst_temperature,
    category=PIDCategory.CATALYST
)

register_pid(
    pid=0x3E,
    name="CAT_TEMP_B1S2",
    description="Catalyst Temperature - Bank 1, Sensor 2",
    num_bytes=2,
    unit="°C",
    min_val=-40.0,
    max_val=6513.5,
    formula=decode_catalyst_temperature,
    category=PIDCategory.CATALYST
)

register_pid(
    pid=0x3F,
    name="CAT_TEMP_B2S2",
    description="Catalyst Temperature - Bank 2, Sensor 2",
    num_bytes=2,
    unit="°C",
    min_val=-40.0,
    max_val=6513.5,
    formula=decode_catalyst_temperature,
    category=PIDCategory.CATALYST
)

# -----------------------------------------------------------------------------
# EVAP System PIDs
# -----------------------------------------------------------------------------

register_pid(
    pid=0x2E,
    name="EVAP_PURGE",
    description="Commanded Evaporative Purge",
    num_bytes=1,
    unit="%",
    min_val=0.0,
    max_val=100.0,
    formula=decode_percent,
    category=PIDCategory.EVAP,
    aliases=["EVAP_PCT"]
)

register_pid(
    pid=0x32,
    name="EVAP_VAPOR_PRESSURE",
    description="Evap System Vapor Pressure",
    num_bytes=2,
    unit="Pa",
    min_val=-8192.0,
    max_val=8191.75,
    formula=decode_evap_vapor_pressure,
    category=PIDCategory.EVAP,
    aliases=["EVAP_VP"]
)

# -----------------------------------------------------------------------------
# EGR / Emissions PIDs
# -----------------------------------------------------------------------------

register_pid(
    pid=0x12,
    name="AIR_STATUS",
    description="Commanded Secondary Air Status",
    num_bytes=1,
    formula=decode_air_status,
    category=PIDCategory.EMISSIONS,
    aliases=["SECONDARY_AIR"]
)

register_pid(
    pid=0x2C,
    name="CMD_EGR",
    description="Commanded EGR",
    num_bytes=1,
    unit="%",
    min_val=0.0,
    max_val=100.0,
    formula=decode_percent,
    category=PIDCategory.EMISSIONS,
    aliases=["EGR", "COMMANDED_EGR"]
)

register_pid(
    pid=0x2D,
    name="EGR_ERROR",
    description="EGR Error",
    num_bytes=1,
    unit="%",
    min_val=-100.0,
    max_val=99.21875,
    formula=decode_egr_error,
    category=PIDCategory.EMISSIONS
)

register_pid(
    pid=0x30,
    name="WARMUPS_CLR",
    description="Warm-ups Since Codes Cleared",
    num_bytes=1,
    unit="count",
    min_val=0,
    max_val=255,
    formula=decode_raw,
    category=PIDCategory.EMISSIONS,
    aliases=["WARMUPS_SINCE_CLEAR"]
)

# -----------------------------------------------------------------------------
# Mode 02: freeze frame data uses the Mode 01 table
# -----------------------------------------------------------------------------

for _defn in REGISTRY.all(MODE_CURRENT_DATA):
    REGISTRY.register(replace(_defn, mode=MODE_FREEZE_FRAME))

logger.debug(f"PID registry loaded: {len(REGISTRY)} definitions in modes {REGISTRY.modes()}")

# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------


def lookup(mode: int, pid: int) -> PIDDefinition:
    """Resolve (mode, pid) in the default registry; raises PIDNotFoundError."""
    return REGISTRY.lookup(mode, pid)


def get_pid_by_name(name: str, mode: int = MODE_CURRENT_DATA) -> Optional[int]:
    """
    Get PID number by name or alias.

    Args:
        name: PID name or alias (case-insensitive)
        mode: OBD-II mode

    Returns:
        PID number or None if not found
    """
    defn = REGISTRY.get_by_name(name, mode)
    return defn.pid if defn else None


def decode_pid(mode: int, pid: int, data: bytes) -> Any:
    """
    Decode raw PID data to value.

    Args:
        mode: OBD-II mode
        pid: PID number
        data: Raw response data bytes

    Returns:
        Decoded value

    Raises:
        PIDNotFoundError: PID not registered
        InvalidLengthError: data width differs from the PID's result size
    """
    return REGISTRY.decode(mode, pid, data)


def get_pid_info(pid: int, mode: int = MODE_CURRENT_DATA) -> Optional[PIDDefinition]:
    """Get PID definition by number."""
    return REGISTRY.get(mode, pid)


def get_pid_unit(pid: int, mode: int = MODE_CURRENT_DATA) -> str:
    """Get unit string for a PID."""
    defn = REGISTRY.get(mode, pid)
    return (defn.unit or "") if defn else ""


def list_pids(mode: int = MODE_CURRENT_DATA) -> List[PIDDefinition]:
    return REGISTRY.all(mode)


def list_pids_by_category(category: PIDCategory, mode: int = MODE_CURRENT_DATA) -> List[PIDDefinition]:
    """Get all PIDs in a category."""
    return REGISTRY.by_category(category, mode)


# Common PID groups
FUEL_TRIM_PIDS = [0x06, 0x07, 0x08, 0x09]  # STFT/LTFT Bank 1 & 2
OXYGEN_PIDS = [0x14, 0x15, 0x18, 0x19, 0x24, 0x25]  # O2 sensors
TEMPERATURE_PIDS = [0x05, 0x0F, 0x3C, 0x3D]  # Coolant, IAT, catalyst
ENGINE_PIDS = [0x04, 0x0C, 0x0E, 0x11]  # Load, RPM, Timing, Throttle
AIR_PIDS = [0x0B, 0x10, 0x33]  # MAP, MAF, Baro
SUPPORTED_PIDS_QUERIES = [0x00, 0x20, 0x40]
