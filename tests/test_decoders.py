import pytest

from obd2_decoder.decoders import (
    BinaryState,
    FuelSystem,
    ObdStandard,
    SecondaryAirStatus,
    decode_air_status,
    decode_auxiliary_input_status,
    decode_available_pids,
    decode_catalyst_temperature,
    decode_celsius,
    decode_dtc,
    decode_evap_vapor_pressure,
    decode_fuel_pressure,
    decode_fuel_rail_gauge_pressure,
    decode_fuel_rail_pressure,
    decode_fuel_system,
    decode_fuel_trim,
    decode_maf,
    decode_monitor_status,
    decode_o2_sensors_present,
    decode_o2_sensors_present_4_banks,
    decode_obd_standard,
    decode_oxygen_sensor,
    decode_oxygen_sensor_current,
    decode_oxygen_sensor_lambda,
    decode_percent,
    decode_rpm,
    decode_seconds,
    decode_timing_advance,
)


def test_celsius_all_bytes():
    for b in range(256):
        assert decode_celsius(b) == b - 40
    assert decode_celsius(0) == -40
    assert decode_celsius(255) == 215


def test_percent_all_bytes():
    for b in range(256):
        assert decode_percent(b) == pytest.approx(b / 2.55)
    assert decode_percent(0) == 0.0
    assert decode_percent(255) == pytest.approx(100.0)


def test_timing_advance_all_bytes():
    for b in range(256):
        assert decode_timing_advance(b) == b / 2 - 64
    assert decode_timing_advance(0) == -64.0
    assert decode_timing_advance(255) == 63.5


def test_fuel_trim():
    assert decode_fuel_trim(0) == -100.0
    assert decode_fuel_trim(128) == 0.0
    assert decode_fuel_trim(255) == pytest.approx(99.2, abs=0.05)


def test_fuel_pressure():
    assert decode_fuel_pressure(0) == 0
    assert decode_fuel_pressure(255) == 765


def test_rpm_is_big_endian():
    assert decode_rpm(0x1AF8) == 1726.0
    assert decode_rpm(0xFFFF) == 16383.75
    assert decode_rpm(0x0004) == 1.0


def test_maf():
    assert decode_maf(0x01F4) == 5.0
    assert decode_maf(0xFFFF) == pytest.approx(655.35)


def test_fuel_rail_pressures():
    assert decode_fuel_rail_pressure(0xFFFF) == pytest.approx(5177.265)
    assert decode_fuel_rail_gauge_pressure(0xFFFF) == 655350
    assert decode_fuel_rail_gauge_pressure(0x0102) == 2580


def test_seconds():
    assert decode_seconds(0x0102) == 258


def test_oxygen_sensor():
    assert decode_oxygen_sensor(0x5A80) == (0.45, 0.0)
    assert decode_oxygen_sensor(0x0000) == (0.0, -100.0)
    # B = 0xFF: sensor not used for trim
    assert decode_oxygen_sensor(0xFFFF) == (1.275, 0.0)


def test_oxygen_sensor_lambda():
    assert decode_oxygen_sensor_lambda(0x80000000) == (1.0, 0.0)
    ratio, voltage = decode_oxygen_sensor_lambda(0xFFFFFFFF)
    assert ratio == pytest.approx(2.0, abs=1e-4)
    assert voltage == pytest.approx(8.0, abs=1e-3)


def test_oxygen_sensor_current():
    assert decode_oxygen_sensor_current(0x80008000) == (1.0, 0.0)
    assert decode_oxygen_sensor_current(0x00000000) == (0.0, -128.0)


def test_available_pids_example():
    assert decode_available_pids(0xBE1FA813, 0) == [
        1, 3, 4, 5, 6, 7, 12, 13, 14, 15, 16, 17, 19, 21, 28, 31, 32
    ]


def test_available_pids_block_base():
    assert decode_available_pids(0x80000001, 1) == [0x21, 0x40]
    assert decode_available_pids(0, 2) == []
    assert decode_available_pids(0xFFFFFFFF, 0) == list(range(1, 33))


@pytest.mark.parametrize("value, expected", [
    (0x0200, (FuelSystem.CLOSED_LOOP_OXYGEN_FEEDBACK, FuelSystem.MOTOR_OFF)),
    (0x0104, (FuelSystem.OPEN_LOOP_INSUFFICIENT_TEMPERATURE, FuelSystem.OPEN_LOOP_LOAD_OR_DECEL_FUEL_CUT)),
    (0x0810, (FuelSystem.OPEN_LOOP_SYSTEM_FAILURE, FuelSystem.CLOSED_LOOP_FAULT_FEEDBACK)),
    (0x0300, (FuelSystem.UNKNOWN, FuelSystem.MOTOR_OFF)),
])
def test_fuel_system(value, expected):
    assert decode_fuel_system(value) == expected


def test_air_status():
    assert decode_air_status(0x01) == SecondaryAirStatus.UPSTREAM
    assert decode_air_status(0x02) == SecondaryAirStatus.DOWNSTREAM
    assert decode_air_status(0x04) == SecondaryAirStatus.FROM_OUTSIDE_ATMOSPHERE_OR_OFF
    assert decode_air_status(0x08) == SecondaryAirStatus.PUMP_COMMANDED_FOR_DIAGNOSTICS
    assert decode_air_status(0x03) == SecondaryAirStatus.UNKNOWN
    assert decode_air_status(0x00) == SecondaryAirStatus.UNKNOWN


@pytest.mark.parametrize("value, expected", [
    (1, ObdStandard.OBD2_CARB),
    (13, ObdStandard.JOBD_EOBD_AND_OBD2),
    (17, ObdStandard.EMD),
    (33, ObdStandard.HD_EOBD6),
    (0, ObdStandard.UNKNOWN),
    (14, ObdStandard.RESERVED),
    (16, ObdStandard.RESERVED),
    (22, ObdStandard.RESERVED),
    (27, ObdStandard.RESERVED),
    (34, ObdStandard.RESERVED),
    (250, ObdStandard.RESERVED),
    (251, ObdStandard.NOT_AVAILABLE_FOR_ASSIGNMENT),
    (255, ObdStandard.NOT_AVAILABLE_FOR_ASSIGNMENT),
])
def test_obd_standard(value, expected):
    assert decode_obd_standard(value) == expected


def test_obd_standard_named_table():
    named = {decode_obd_standard(b) for b in range(1, 34)}
    named -= {ObdStandard.RESERVED}
    assert len(named) == 28


def test_auxiliary_input_status():
    assert decode_auxiliary_input_status(0x80) == BinaryState.ON
    assert decode_auxiliary_input_status(0xFF) == BinaryState.ON
    assert decode_auxiliary_input_status(0x7F) == BinaryState.OFF


def test_o2_sensors_present():
    assert decode_o2_sensors_present(0x03) == ["B1S1", "B1S2"]
    assert decode_o2_sensors_present(0x11) == ["B1S1", "B2S1"]
    assert decode_o2_sensors_present(0x00) == []
    assert decode_o2_sensors_present_4_banks(0x05) == ["B1S1", "B2S1"]
    assert decode_o2_sensors_present_4_banks(0x80) == ["B4S2"]


def test_evap_vapor_pressure_is_signed():
    assert decode_evap_vapor_pressure(0x0004) == 1.0
    assert decode_evap_vapor_pressure(0xFFFC) == -1.0
    assert decode_evap_vapor_pressure(0x8000) == -8192.0
    assert decode_evap_vapor_pressure(0x7FFF) == 8191.75


def test_catalyst_temperature():
    assert decode_catalyst_temperature(0x0190) == 0.0
    assert decode_catalyst_temperature(0x0000) == -40.0


def test_dtc():
    assert decode_dtc(0x0133) == "P0133"
    assert decode_dtc(0x4100) == "C0100"
    assert decode_dtc(0x9234) == "B1234"
    assert decode_dtc(0xC123) == "U0123"
    assert decode_dtc(0x0000) is None


def test_monitor_status():
    status = decode_monitor_status(0x83076504)
    assert status.mil == BinaryState.ON
    assert status.dtc_count == 3
    assert status.ignition == "spark"
    assert status.raw == 0x83076504

    status = decode_monitor_status(0x00080000)
    assert status.mil == BinaryState.OFF
    assert status.dtc_count == 0
    assert status.ignition == "compression"


def test_decoders_are_deterministic():
    for value in (0x00, 0x7F, 0xFF):
        assert decode_percent(value) == decode_percent(value)
        assert decode_obd_standard(value) is decode_obd_standard(value)
    assert decode_available_pids(0xBE1FA813, 0) == decode_available_pids(0xBE1FA813, 0)
