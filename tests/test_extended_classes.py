import numpy as np
import pytest

from cfcflux import (
    AtmosphericHistory,
    ExternalData,
    ExternalDataError,
    InputError,
    KeywordError,
    MissingKeywordError,
    ScenarioForcingData,
)
from cfcflux.species_definitions import (
    CoefficientTableError,
    read_coefficient_table,
    schmidt_coefficients,
    solubility_coefficients,
    Compound,
)

years = np.array([1940.0, 1950.0, 1970.0, 1990.0, 2000.0, 2010.0, 2020.0])
cfc11 = np.array([0.0, 0.0, 60.0, 260.0, 265.0, 245.0, 225.0])


@pytest.fixture
def history():
    return AtmosphericHistory(name="CFC11", x=years, y=cfc11)


@pytest.fixture
def csv_history(tmp_path):
    fn = tmp_path / "cfc11.csv"
    fn.write_text(
        "Time [yr],CFC11 [ppt]\n"
        + "\n".join(f"{x},{y}" for x, y in zip(years, cfc11))
        + "\n"
    )
    return fn


def test_interpolation(history):
    assert history(0) == 0.0
    assert history(30) == pytest.approx(160.0)
    assert history.at_year(1995) == pytest.approx(262.5)
    a = history(np.array([20.0, 40.0]))
    assert a.shape == (2,)
    assert a[1] == pytest.approx(260.0)


def test_history_is_frozen_after_2010(history):
    assert history(60) == pytest.approx(245.0)
    assert history(65) == history(60)
    assert history(70) == history(60)
    assert history(500) == history(60)


def test_freeze_year_can_be_changed():
    h = AtmosphericHistory(name="CFC11", x=years, y=cfc11, freeze_year=2020)
    assert h(65) == pytest.approx(235.0)


def test_values_are_held_outside_the_data():
    d = ExternalData(name="d", x=years, y=cfc11, y_unit="ppt")
    assert d(-100) == 0.0
    assert d(200) == 225.0


def test_read_csv(csv_history, history):
    h = AtmosphericHistory(name="CFC11", filename=str(csv_history))
    assert np.allclose(h.x, history.x)
    assert np.allclose(h.y, history.y)
    assert h(30) == pytest.approx(160.0)
    assert h(70) == pytest.approx(245.0)


def test_csv_units_are_converted(tmp_path):
    fn = tmp_path / "t.csv"
    fn.write_text("Time [yr],SST [K]\n1950,273.15\n2020,275.25\n")
    d = ExternalData(name="sst", filename=fn, y_unit="degC")
    assert d.y[0] == pytest.approx(0.0, abs=1e-9)
    assert d(35) == pytest.approx(1.05)


@pytest.mark.parametrize(
    "text",
    [
        "Time,CFC11\n1950,0\n2000,100\n",
        "Time [m],CFC11 [ppt]\n1950,0\n2000,100\n",
        "Time [yr],CFC11 [m]\n1950,0\n2000,100\n",
        "Time [yr],CFC11 [ppt],other [ppt]\n1950,0,0\n2000,100,0\n",
        "Time [yr],CFC11 [ppt]\n2000,0\n1950,100\n",
        "Time [yr],CFC11 [ppt]\n1950,-1\n2000,100\n",
    ],
)
def test_bad_csv(tmp_path, text):
    fn = tmp_path / "bad.csv"
    fn.write_text(text)
    with pytest.raises(ExternalDataError):
        AtmosphericHistory(name="bad", filename=fn)


def test_missing_file(tmp_path):
    with pytest.raises(ExternalDataError):
        ExternalData(name="d", filename=str(tmp_path / "nothere.csv"))


def test_keywords():
    with pytest.raises(MissingKeywordError):
        ExternalData(name="d")
    with pytest.raises(KeywordError):
        ExternalData(name="d", x=years, y=cfc11, colour="red")
    with pytest.raises(InputError):
        ExternalData(name="d", x=years, y=cfc11, scale="2")
    with pytest.raises(ExternalDataError):
        ExternalData(name="d", x=years)
    with pytest.raises(ExternalDataError):
        ExternalData(name="d", x=years, y=cfc11[:-1])


def test_scale():
    d = ExternalData(name="ice", x=years, y=cfc11, scale=0.01)
    assert d.at_year(1990) == pytest.approx(2.6)


def test_scenario_forcing_data():
    x = np.array([1950.0, 2020.0])
    fd = ScenarioForcingData(
        name="CM4X",
        temperature=ExternalData(name="T", x=x, y=[0.0, 1.4], y_unit="degC"),
        control_temperature=ExternalData(name="Tc", x=x, y=[0.0, 0.0], y_unit="degC"),
        sea_ice=ExternalData(name="f", x=x, y=[0.6, 0.3]),
        control_sea_ice=ExternalData(name="fc", x=x, y=[0.6, 0.6]),
    )
    assert fd.southern_ocean_temperature(35, "warming") == pytest.approx(0.7)
    assert fd.southern_ocean_temperature(35, "melt") == 0.0
    assert fd.sea_ice_fraction(35, "melt") == pytest.approx(0.45)
    assert fd.sea_ice_fraction(35, "warming") == pytest.approx(0.6)
    T, f = fd.forcing("warming_melt")
    assert T(70) == pytest.approx(1.4)
    assert f(70) == pytest.approx(0.3)

    with pytest.raises(MissingKeywordError):
        ScenarioForcingData(name="x", temperature=fd.temperature)


def test_coefficient_tables():
    sol = solubility_coefficients()
    sc = schmidt_coefficients()
    assert sol[Compound.CFC11].shape == (7,)
    assert sc[Compound.CFC12].shape == (5,)
    assert sol[Compound.CFC11][0] == -229.9261
    with pytest.raises(ValueError):
        sol[Compound.CFC11][0] = 0.0


@pytest.mark.parametrize(
    "text",
    [
        "Coefficients,CFC11,CFC12\nA,1,2\nB,1,2\nC,1,2\nD,1,2\n",
        "Coefficients,CFC11\nA,1\nB,1\nC,1\nD,1\nE,1\n",
        "Coefficients,CFC11,CFC12\nA,1,2\nB,1,2\nX,1,2\nD,1,2\nE,1,2\n",
    ],
)
def test_bad_coefficient_table(tmp_path, text):
    fn = tmp_path / "SchmidtNumber.csv"
    fn.write_text("# comment\n" + text)
    with pytest.raises(CoefficientTableError):
        read_coefficient_table("SchmidtNumber", ("A", "B", "C", "D", "E"), fqfn=fn)


def test_info_and_repr(history, capsys):
    history.info()
    out = capsys.readouterr().out
    assert out.startswith("CFC11 (AtmosphericHistory)")
    assert "y_unit = ppt" in out
    assert repr(history).startswith("AtmosphericHistory(")
