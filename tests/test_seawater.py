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
    UnsupportedCompoundError,
    WindSpeed,
    calculate_solubility,
    gasatmconc,
    gassat,
    piston_velocity,
    schmidt_number,
)

compounds = ["CFC-11", "CFC-12"]


@pytest.fixture
def seawater():
    return Temperature(2.0), Salinity(34.0), Pressure(1.0)


@pytest.mark.parametrize("compound", compounds)
def test_solubility_positive_and_decreasing(compound):
    T = Temperature(np.linspace(-2, 40, 85))
    F = calculate_solubility(T, Salinity(34), compound)
    assert np.all(F.magnitude > 0)
    assert np.all(np.diff(F.magnitude) < 0), "solubility must decrease with warming"


def test_solubility_units_and_magnitude():
    F = calculate_solubility(Temperature(0), Salinity(34), "CFC-11")
    assert F.is_compatible_with("mol/(m**3 atm)")
    # Warner & Weiss (1985): about 0.0275 mol/(L atm) at 0 degC
    assert F.to("mol/(L atm)").magnitude == pytest.approx(0.0275, rel=0.01)


def test_solubility_accepts_strings():
    a = calculate_solubility("10 degC", "35 g/kg")
    b = calculate_solubility(Temperature(10), Salinity(35))
    assert a.magnitude == pytest.approx(b.magnitude, rel=1e-14)


@pytest.mark.parametrize(
    "compound, expected",
    [("CFC-11", 1179.0), ("CFC-12", 1188.0)],
)
def test_schmidt_number_at_20C(compound, expected):
    t = 1e-3
    sc = schmidt_number(Temperature(20), compound)
    assert abs(expected) * (1 - t) <= abs(sc) <= abs(expected) * (1 + t)


@pytest.mark.parametrize("compound", compounds)
@pytest.mark.parametrize("T", [-2.0, 0.0, 10.0, 30.0])
@pytest.mark.parametrize("u", [0.5, 10.0, 25.0])
def test_no_exchange_under_full_ice_cover(compound, T, u):
    k = piston_velocity(Temperature(T), WindSpeed(u), 1.0, compound)
    assert k.magnitude == 0.0


def test_piston_velocity():
    k = piston_velocity(Temperature(20), WindSpeed(10), 0.0, "CFC-11")
    sc = schmidt_number(Temperature(20), "CFC-11")
    expected = 6.97e-7 * (sc / 660) ** -0.5 * 100
    assert k.to("m/s").magnitude == pytest.approx(expected, rel=1e-12)
    # half the ice, half the transfer velocity
    k2 = piston_velocity(Temperature(20), WindSpeed(10), 0.5, "CFC-11")
    assert k2.magnitude == pytest.approx(0.5 * k.magnitude, rel=1e-12)


def test_piston_velocity_does_not_clamp_ice():
    k = piston_velocity(Temperature(0), WindSpeed(10), -0.5, "CFC-12")
    k0 = piston_velocity(Temperature(0), WindSpeed(10), 0.0, "CFC-12")
    assert k.magnitude == pytest.approx(1.5 * k0.magnitude, rel=1e-12)


def test_gassat(seawater):
    T, S, P = seawater
    c = gassat(T, S, P, MixingRatio(250), "CFC-11")
    F = calculate_solubility(T, S, "CFC-11").magnitude
    assert isinstance(c, Concentration)
    assert c.magnitude == pytest.approx(F * 250e-12, rel=1e-12)
    # saturation scales with surface pressure
    c2 = gassat(T, S, Pressure(0.9), MixingRatio(250), "CFC-11")
    assert c2.magnitude == pytest.approx(0.9 * c.magnitude, rel=1e-12)


@pytest.mark.parametrize("compound", compounds)
@pytest.mark.parametrize("x", [0.0, 1e-3, 250.0, 540.0])
@pytest.mark.parametrize("T, S, P", [(-1.8, 34.0, 1.0), (15.0, 36.5, 0.95), (28.0, 30.0, 1.02)])
def test_gasatmconc_inverts_gassat(compound, x, T, S, P):
    args = (Temperature(T), Salinity(S), Pressure(P))
    c = gassat(*args, MixingRatio(x), compound)
    xr = gasatmconc(*args, c, compound)
    assert isinstance(xr, MixingRatio)
    assert xr.magnitude == pytest.approx(x, rel=1e-12, abs=1e-15)


def test_gasatmconc_accepts_pmol_per_mol(seawater):
    T, S, P = seawater
    a = gassat(T, S, P, "250 pmol/mol")
    b = gassat(T, S, P, "250 ppt")
    assert a.magnitude == pytest.approx(b.magnitude, rel=1e-12)


@pytest.mark.parametrize("compound", ["CFC-13", "SF6", "cfc11", None, 11])
def test_unsupported_compound(compound, seawater):
    T, S, P = seawater
    with pytest.raises(UnsupportedCompoundError):
        calculate_solubility(T, S, compound)
    with pytest.raises(UnsupportedCompoundError):
        schmidt_number(T, compound)
    with pytest.raises(UnsupportedCompoundError):
        gassat(T, S, P, MixingRatio(100), compound)


@pytest.mark.parametrize(
    "call",
    [
        lambda: calculate_solubility(273.15, Salinity(34)),
        lambda: calculate_solubility(Q_(275, "K"), Salinity(34)),
        lambda: calculate_solubility(Temperature(2), "0.034 kg/kg"),
        lambda: schmidt_number(Salinity(2)),
        lambda: piston_velocity(Temperature(2), "36 km/hr", 0.5),
        lambda: gassat(Temperature(2), Salinity(34), "1013 hPa", MixingRatio(250)),
        lambda: gassat(Temperature(2), Salinity(34), Pressure(1), 250),
        lambda: gassat(Temperature(2), Salinity(34), Pressure(1), Q_(250e-12, "dimensionless")),
        lambda: gasatmconc(Temperature(2), Salinity(34), Pressure(1), "1e-12 mol/L"),
    ],
)
def test_unit_mismatch(call):
    with pytest.raises(UnitMismatchError):
        call()
