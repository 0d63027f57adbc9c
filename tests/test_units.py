import numpy as np
import pytest

from cfcflux import (
    Q_,
    Concentration,
    MixingRatio,
    Pressure,
    Salinity,
    Temperature,
    UnitMismatchError,
    WindSpeed,
)
from cfcflux.units import check_for_quantity, check_fraction


@pytest.mark.parametrize(
    "cls, value, expected",
    [
        (Temperature, "2.5 degC", 2.5),
        (Temperature, Q_(-1.8, "degC"), -1.8),
        (Salinity, "34 g/kg", 34.0),
        (WindSpeed, "10 m/s", 10.0),
        (Pressure, "1 atm", 1.0),
        (MixingRatio, "250 ppt", 250.0),
        (MixingRatio, "250 pmol/mol", 250.0),
        (Concentration, "1e-9 mol/m**3", 1e-9),
    ],
)
def test_wrappers_accept_their_unit(cls, value, expected):
    assert cls(value).magnitude == pytest.approx(expected, rel=1e-12)


def test_bare_numbers_use_class_unit():
    assert Temperature(2).magnitude == 2
    assert Salinity(34.0).units == Q_("1 g/kg").units
    a = Concentration(np.array([1e-9, 2e-9]))
    assert a.magnitude.shape == (2,)


@pytest.mark.parametrize(
    "cls, value",
    [
        (Temperature, "275 K"),
        (Temperature, Q_(275, "K")),
        (Salinity, "0.034 kg/kg"),
        (Salinity, "34"),
        (WindSpeed, "36 km/hr"),
        (Pressure, "101325 Pa"),
        (MixingRatio, "0.25 ppb"),
        (Concentration, "1e-12 mol/L"),
        (Concentration, [1e-9]),
    ],
)
def test_no_silent_conversion(cls, value):
    with pytest.raises(UnitMismatchError):
        cls(value)


def test_check_rejects_bare_numbers():
    with pytest.raises(UnitMismatchError):
        Temperature.check(2.0, "T")
    with pytest.raises(UnitMismatchError):
        Temperature.check(np.array([2.0]), "T")


def test_check_rejects_other_wrappers():
    with pytest.raises(UnitMismatchError):
        Temperature.check(Salinity(34), "T")
    with pytest.raises(UnitMismatchError):
        Salinity(Temperature(2))


def test_check_returns_magnitude():
    assert Temperature.check(Temperature(3.0), "T") == 3.0
    assert MixingRatio.check("100 pmol/mol", "x") == pytest.approx(100.0)


def test_fraction():
    assert check_fraction(0.5) == 0.5
    assert check_fraction(Q_(0.25, "dimensionless")) == 0.25
    # fractions are not clamped
    assert check_fraction(1.5) == 1.5
    with pytest.raises(UnitMismatchError):
        check_fraction(Q_(0.5, "m"))
    with pytest.raises(UnitMismatchError):
        check_fraction(Temperature(0.5))
    with pytest.raises(UnitMismatchError):
        check_fraction("0.5")


def test_check_for_quantity():
    assert check_for_quantity("50 cm", "m").to("m").magnitude == pytest.approx(0.5)
    assert check_for_quantity(5, "m").magnitude == 5
    q = Q_(2, "km")
    assert check_for_quantity(q, "m") is q
    with pytest.raises(UnitMismatchError):
        check_for_quantity("5 s", "m")
    with pytest.raises(ValueError):
        check_for_quantity([5], "m")
