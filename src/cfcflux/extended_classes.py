"""cfcflux: CFC air-sea gas exchange and ocean uptake scenarios.

Copyright (C), 2020 Ulrich G. Wortmann

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or (at
your option) any later version.

This program is distributed in the hope that it will be useful, but
WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""

from __future__ import annotations

import logging
import os

import numpy as np
import numpy.typing as npt
import pandas as pd

from .cfcflux_base import cfcBase
from .experiments import EPOCH, Scenario
from .initialize_unit_registry import Q_

# declare numpy types
NDArrayFloat = npt.NDArray[np.float64]


class ExternalDataError(Exception):
    """Custom Error Class."""

    def __init__(self, message):
        """Initialize Error Instance."""
        message = f"\n\n{message}\n"
        super().__init__(message)


class ExternalData(cfcBase):
    """Instances of this class hold external X/Y data.

    and serve them as a function of model time. Example::

           ExternalData(name     = "Name",
                        filename = "filename",  # or x = ..., y = ...
                        y_unit   = "ppt",
                        scale    = scaling factor, optional
                        epoch    = 1950, optional
                       )

    The data can be given as numpy arrays (x in calendar years, y in
    y_unit) or as a CSV file, where the first column contains the
    X-values, and the second column contains the Y-values. The units
    must be given in the header between square brackets, e.g.::

        Time [yr], CFC-11 [ppt]
        1940, 0.0
        1941, 0.01

    Time values are mapped into years, data values into y_unit.

    Calling an instance with model time t (years since epoch) returns
    the linearly interpolated value at t + epoch. Outside the data
    range the first or last value is held constant.

    Data:
      - name.x
      - name.y
      - name.df = dataframe as read from csv file
    """

    def __init__(self, **kwargs) -> None:
        """Initialize Class."""
        # dict of all known keywords and their type
        self.defaults: dict[str, list[any, tuple]] = {
            "name": ["None", (str)],
            "filename": ["None", (str, os.PathLike)],
            "x": ["None", (list, tuple, np.ndarray)],
            "y": ["None", (list, tuple, np.ndarray)],
            "y_unit": ["dimensionless", (str)],
            "scale": [1, (int, float)],
            "epoch": [EPOCH, (int, float)],
        }

        # provide a list of absolutely required keywords
        self.lrk: list = ["name", ["filename", "x"]]
        self.__initialize_keyword_variables__(kwargs)

        if self.filename != "None":
            self.x, self.y = self.__read_csv__(self.filename)
        elif isinstance(self.y, str):
            raise ExternalDataError(f"{self.name}: x requires y values")
        else:
            self.x = np.asarray(self.x, dtype=float)
            self.y = np.asarray(self.y, dtype=float)

        self.__check_data__()
        self.y = self.y * self.scale
        logging.debug(
            f"{self.name}: {len(self.x)} values, "
            f"{self.x[0]} to {self.x[-1]}, y in {self.y_unit}"
        )

    def __read_csv__(self, fn) -> tuple[NDArrayFloat, NDArrayFloat]:
        """Read x/y data from a csv file and map it into yr and y_unit."""
        if not os.path.exists(fn):  # check if the file is actually there
            raise ExternalDataError(f"Cannot find file {fn}")

        self.df: pd.DataFrame = pd.read_csv(fn)  # read file

        if len(self.df.columns) != 2:
            raise ExternalDataError(f"{fn} must have exactly 2 columns")

        # get unit information from each header
        try:
            xh = self.df.columns[0].split("[")[1].split("]")[0]
            yh = self.df.columns[1].split("[")[1].split("]")[0]
        except IndexError as err:
            raise ExternalDataError(
                f"{fn}: column headers must state units in square brackets"
            ) from err

        # create the associated quantities
        self.xq = Q_(1, xh)
        self.yq = Q_(1, yh)
        if not self.xq.is_compatible_with("yr"):
            raise ExternalDataError(f"{fn}: {xh} is not a time unit")
        if not self.yq.is_compatible_with(self.y_unit):
            raise ExternalDataError(
                f"{fn}: {yh} cannot be converted into {self.y_unit}"
            )

        x = Q_(self.df.iloc[:, 0].to_numpy(dtype=float), xh).to("yr").magnitude
        y = Q_(self.df.iloc[:, 1].to_numpy(dtype=float), yh).to(self.y_unit).magnitude
        return x.astype(float), y.astype(float)

    def __check_data__(self) -> None:
        if self.x.ndim != 1 or self.x.shape != self.y.shape:
            raise ExternalDataError(
                f"{self.name}: x and y must be 1-D arrays of equal length"
            )
        if len(self.x) < 2:
            raise ExternalDataError(f"{self.name}: need at least 2 data points")
        if np.any(np.diff(self.x) <= 0):
            raise ExternalDataError(f"{self.name}: x values must increase")
        if np.any(~np.isfinite(self.y)):
            raise ExternalDataError(f"{self.name}: y values must be finite")

    def at_year(self, year: float | NDArrayFloat) -> float | NDArrayFloat:
        """Return the value at a calendar year."""
        rv = np.interp(year, self.x, self.y)
        return float(rv) if np.ndim(rv) == 0 else rv

    def __call__(self, t: float | NDArrayFloat) -> float | NDArrayFloat:
        return self.at_year(np.asarray(t) + self.epoch)


class AtmosphericHistory(ExternalData):
    """Atmospheric CFC mixing ratio in ppt.

    Example::

        AtmosphericHistory(name="CFC11_SH", filename="cfc11_sh.csv")

    The value at freeze_year (default 2010) is used for all later
    times, i.e., the atmosphere is assumed to stay flat after 2010.
    """

    def __init__(self, **kwargs) -> None:
        freeze_year = kwargs.pop("freeze_year", 2010.0)
        if not isinstance(freeze_year, int | float) or isinstance(freeze_year, bool):
            raise ExternalDataError("freeze_year must be a number")
        self.freeze_year: float = float(freeze_year)

        kwargs.setdefault("y_unit", "ppt")
        super().__init__(**kwargs)

        if self.y_unit != "ppt":
            raise ExternalDataError(
                f"{self.name}: atmospheric histories are given in ppt"
            )
        if np.any(self.y < 0):
            raise ExternalDataError(f"{self.name}: negative mixing ratios")

    def at_year(self, year: float | NDArrayFloat) -> float | NDArrayFloat:
        return super().at_year(np.minimum(year, self.freeze_year))


class ScenarioForcingData(cfcBase):
    """Data-forced temperature and sea-ice fraction.

    Bundles four time series, typically taken from a forced and a
    control run of a climate model::

        ScenarioForcingData(
            name="CM4X",
            temperature=ExternalData(...),          # forced run, degC
            control_temperature=ExternalData(...),  # control run, degC
            sea_ice=ExternalData(...),              # forced run
            control_sea_ice=ExternalData(...),      # control run
        )

    Warming scenarios use the forced temperature, melt scenarios the
    forced sea ice. All other combinations use the control series.
    """

    def __init__(self, **kwargs) -> None:
        self.defaults: dict[str, list[any, tuple]] = {
            "name": ["None", (str)],
            "temperature": ["None", (ExternalData)],
            "control_temperature": ["None", (ExternalData)],
            "sea_ice": ["None", (ExternalData)],
            "control_sea_ice": ["None", (ExternalData)],
        }
        self.lrk: list = [
            "name",
            "temperature",
            "control_temperature",
            "sea_ice",
            "control_sea_ice",
        ]
        self.__initialize_keyword_variables__(kwargs)

    def southern_ocean_temperature(self, t: float, scenario: Scenario | str) -> float:
        """Temperature in degC at model time t."""
        if Scenario.from_name(scenario).warming:
            return self.temperature(t)
        return self.control_temperature(t)

    def sea_ice_fraction(self, t: float, scenario: Scenario | str) -> float:
        """Sea-ice fraction at model time t."""
        if Scenario.from_name(scenario).melt:
            return self.sea_ice(t)
        return self.control_sea_ice(t)

    def forcing(self, scenario: Scenario | str) -> tuple:
        """Return the (temperature, sea_ice_fraction) callables of a scenario."""
        scenario = Scenario.from_name(scenario)
        return (
            lambda t: self.southern_ocean_temperature(t, scenario),
            lambda t: self.sea_ice_fraction(t, scenario),
        )
