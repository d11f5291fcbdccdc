import pytest

from obd2_decoder.decoders import decode_celsius, decode_percent
from obd2_decoder.definition import PIDCategory, PIDDefinition, ResultSize
from obd2_decoder.errors import DuplicatePIDError, InvalidLengthError, PIDNotFoundError
from obd2_decoder.registry import PIDRegistry


def make_pid(pid=0x05, name="COOLANT_TEMP", mode=0x01, aliases=(), size=ResultSize.exact(1), formula=decode_celsius):
    return PIDDefinition(
        mode=mode,
        pid=pid,
        name=name,
        description="test pid",
        result_size=size,
        formula=formula,
        category=PIDCategory.TEMPERATURE,
        unit="°C",
        min_value=-40,
        max_value=215,
        aliases=tuple(aliases),
    )


def test_result_size():
    assert ResultSize.exact(2).accepts(2)
    assert not ResultSize.exact(2).accepts(1)
    assert ResultSize.exact(2).is_exact
    assert str(ResultSize.exact(2)) == "2"

    size = ResultSize.between(1, 4)
    assert not size.is_exact
    assert size.accepts(1) and size.accepts(4)
    assert not size.accepts(5)
    assert size.max_bytes == 4
    assert str(size) == "1..4"

    with pytest.raises(ValueError):
        ResultSize.between(4, 1)


def test_register_and_lookup():
    registry = PIDRegistry()
    defn = registry.register(make_pid(aliases=["ECT"]))

    assert registry.lookup(0x01, 0x05) is defn
    assert registry.get(0x01, 0x05) is defn
    assert registry.get(0x01, 0x06) is None
    assert (0x01, 0x05) in registry
    assert len(registry) == 1
    assert registry.find("ect") is defn
    assert registry.find(" coolant_temp ") is defn


def test_lookup_unknown_raises():
    registry = PIDRegistry()
    registry.register(make_pid())

    with pytest.raises(PIDNotFoundError) as excinfo:
        registry.lookup(0x01, 0xFF)
    assert excinfo.value.mode == 0x01
    assert excinfo.value.pid == 0xFF

    # Same PID, other mode
    with pytest.raises(LookupError):
        registry.lookup(0x02, 0x05)

    with pytest.raises(PIDNotFoundError):
        registry.find("NOPE")


def test_duplicate_pid_rejected():
    registry = PIDRegistry()
    registry.register(make_pid())
    with pytest.raises(DuplicatePIDError):
        registry.register(make_pid(name="OTHER"))


def test_duplicate_name_rejected():
    registry = PIDRegistry()
    registry.register(make_pid(aliases=["ECT"]))
    with pytest.raises(DuplicatePIDError):
        registry.register(make_pid(pid=0x0F, name="IAT", aliases=["ect"]))


def test_same_pid_in_two_modes():
    registry = PIDRegistry()
    registry.register(make_pid(mode=0x01))
    registry.register(make_pid(mode=0x02))
    assert registry.modes() == [0x01, 0x02]
    assert registry.lookup(0x02, 0x05).mode == 0x02


def test_all_is_sorted_by_pid():
    registry = PIDRegistry()
    registry.register(make_pid(pid=0x11, name="C"))
    registry.register(make_pid(pid=0x04, name="A"))
    registry.register(make_pid(pid=0x05, name="B"))
    assert [d.pid for d in registry.all(0x01)] == [0x04, 0x05, 0x11]
    assert registry.names() == ["A", "B", "C"]
    assert registry.all(0x02) == []


def test_decode_validates_length():
    registry = PIDRegistry()
    registry.register(make_pid())

    assert registry.decode(0x01, 0x05, bytes([0x7B])) == 83
    with pytest.raises(InvalidLengthError) as excinfo:
        registry.decode(0x01, 0x05, bytes([0x7B, 0x00]))
    assert excinfo.value.actual == 2
    with pytest.raises(InvalidLengthError):
        registry.decode(0x01, 0x05, b"")


def test_decode_range_size():
    registry = PIDRegistry()
    registry.register(make_pid(size=ResultSize.between(1, 2), formula=lambda v: v))

    assert registry.decode(0x01, 0x05, b"\x01") == 1
    assert registry.decode(0x01, 0x05, b"\x01\x00") == 256
    with pytest.raises(InvalidLengthError):
        registry.decode(0x01, 0x05, b"\x01\x00\x00")


def test_interpret_rejects_wider_value():
    defn = make_pid(formula=decode_percent)
    assert defn.interpret(0xFF) == pytest.approx(100.0)
    with pytest.raises(InvalidLengthError):
        defn.interpret(0x100)
    with pytest.raises(ValueError):
        defn.interpret(-1)


def test_decode_available():
    registry = PIDRegistry()
    pids = registry.decode_available({0x00: 0xBE1FA813, 0x20: 0x80000001})
    assert pids == [1, 3, 4, 5, 6, 7, 12, 13, 14, 15, 16, 17, 19, 21, 28, 31, 32, 0x21, 0x40]

    with pytest.raises(ValueError):
        registry.decode_available({0x10: 0})


def test_definition_str_and_dict():
    defn = make_pid(aliases=["ECT"])
    assert str(defn) == "PID(mode=0x01, pid=0x05, result_size=1)"
    assert defn.mode_number() == 0x01
    assert defn.pid_number() == 0x05
    assert defn.to_dict() == {
        'mode': 0x01,
        'pid': 0x05,
        'name': "COOLANT_TEMP",
        'description': "test pid",
        'result_size': "1",
        'unit': "°C",
        'min': -40,
        'max': 215,
        'category': "temperature",
        'aliases': ["ECT"],
    }
