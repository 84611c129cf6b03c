import math

import pytest

from batteryinfo.config import RunConfiguration
from batteryinfo.fields import RawFields
from batteryinfo.record import BatteryRecord, Tristate, synthesize

NO_CAP = RunConfiguration(disable_charge_cap=True)


def test_capacity_voltage_present_scenario():
    record = synthesize(RawFields(capacity=76, voltage_now=12500000, present=1))
    assert record.charge == 76.0
    assert record.voltage == 12.5
    assert record.present is Tristate.TRUE
    assert record.max_charge is None
    assert record.etd is None
    assert record.online is Tristate.UNKNOWN


def test_derived_charge_and_max_charge():
    record = synthesize(
        RawFields(charge_now=3000, charge_full=4000, charge_full_design=5000)
    )
    assert record.charge == pytest.approx(75.0)
    assert record.max_charge == pytest.approx(80.0)


def test_derived_charge_is_clamped_unless_disabled():
    fields = RawFields(charge_now=4500, charge_full=4000)
    assert synthesize(fields).charge == 100.0
    assert synthesize(fields, NO_CAP).charge == pytest.approx(112.5)


def test_capacity_wins_over_charge_ratio():
    for capacity in (0, 1, 50, 99, 100):
        record = synthesize(
            RawFields(capacity=capacity, charge_now=1, charge_full=4), NO_CAP
        )
        assert record.charge == float(capacity)


def test_out_of_range_capacity_falls_back_to_ratio():
    record = synthesize(RawFields(capacity=140, charge_now=1000, charge_full=4000))
    assert record.charge == pytest.approx(25.0)

    assert synthesize(RawFields(capacity=-3)).charge is None


def test_zero_charge_full_leaves_charge_unavailable():
    record = synthesize(RawFields(charge_now=10, charge_full=0, charge_full_design=0))
    assert record.charge is None
    assert record.max_charge is None


def test_max_charge_is_not_clamped():
    record = synthesize(RawFields(charge_full=5500, charge_full_design=5000))
    assert record.max_charge == pytest.approx(110.0)


def test_unit_conversions():
    record = synthesize(
        RawFields(voltage_now=11400000, current_now=150000, temperature=305)
    )
    assert record.voltage == pytest.approx(11.4)
    assert record.current == pytest.approx(1.5)
    assert record.temperature == pytest.approx(30.5)


def test_etd_uses_constant_drain():
    record = synthesize(RawFields(charge_full=4000, charge_now=3000, current_now=500))
    assert record.etd == pytest.approx(20.0)


def test_etd_unavailable_for_zero_current():
    record = synthesize(RawFields(charge_full=4000, charge_now=3000, current_now=0))
    assert record.etd is None
    assert record.current == 0.0


def test_etd_needs_all_three_values():
    assert synthesize(RawFields(charge_full=4000, current_now=500)).etd is None
    assert synthesize(RawFields(charge_now=4000, current_now=500)).etd is None
    assert synthesize(RawFields(charge_full=4000, charge_now=3000)).etd is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        (0, Tristate.FALSE),
        (1, Tristate.TRUE),
        (2, Tristate.UNKNOWN),
        (-1, Tristate.UNKNOWN),
        (None, Tristate.UNKNOWN),
    ],
)
def test_flags_are_three_state(raw, expected):
    record = synthesize(RawFields(present=raw, online=raw, charging_enabled=raw))
    assert record.present is expected
    assert record.online is expected
    assert record.charging_enabled is expected


def test_strings_copy_through():
    record = synthesize(RawFields(name="BAT0", driver="acpi", health="Good"))
    assert record.name == "BAT0"
    assert record.driver == "acpi"
    assert record.health == "Good"
    assert record.model is None
    assert record.serial_number is None


def test_synthesis_is_deterministic():
    fields = RawFields(
        charge_now=3333, charge_full=7777, charge_full_design=9999, current_now=123
    )
    first = synthesize(fields)
    second = synthesize(fields)
    assert first == second
    assert not math.isnan(first.etd)


def test_empty_fields_give_all_unavailable():
    assert synthesize(RawFields()) == BatteryRecord()
