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

import functools
import logging
import os
import warnings
from collections.abc import Callable, Iterable
from time import process_time

import numpy as np
import numpy.typing as npt

from .cfcflux_base import cfcBase
from .experiments import (
    Scenario,
    anthropogenic_source,
    sea_ice_fraction,
    southern_ocean_temperature,
)
from .extended_classes import ScenarioForcingData
from .initialize_unit_registry import Q_
from .ode_backend import (
    METHODS,
    NonNegativityGuard,
    ScenarioParams,
    SolverError,
    Trajectory,
    cfc_coupled,
    cfc_ocean,
    integrate,
    make_scenario_params,
)
from .species_definitions import Compound
from .units import Pressure, Salinity, WindSpeed

# declare numpy types
NDArrayFloat = npt.NDArray[np.float64]

__all__ = ["ModelError", "SolverError", "ScenarioModel", "run_scenario", "run_scenarios"]

MODEL_TYPES = {"forced": cfc_ocean, "coupled": cfc_coupled}


class ModelError(Exception):
    """Custom Error Class for Model-related errors."""

    def __init__(self, message):
        """Initialize Error Instance with formatted message."""
        message = f"\n\n{message}\n"
        super().__init__(message)


class ScenarioModel(cfcBase):
    r"""Integrate the CFC uptake of the Southern Ocean surface layer.

    Two model types are available:

    - "forced": the ocean takes up CFC from a prescribed atmosphere,
      e.g., an AtmosphericHistory instance.
    - "coupled": ocean and atmosphere are two coupled reservoirs, and
      the atmosphere is fed by an anthropogenic source.

    Example::

            M = ScenarioModel(
                scenario="warming_melt",    # or a Scenario member
                model_type="coupled",       # "forced" or "coupled"
                start="0 yr",               # years since 1950
                stop="70 yr",
                compound="CFC-11",
                salinity="34 g/kg",
                pressure="1 atm",
                wind_speed="10 m/s",
                mixed_layer_depth="5 m",
            )
            trajectory = M.run()

    Optional keywords:

    - temperature, sea_ice_fraction: callables of model time that
      replace the idealized forcing of the scenario
    - forcing_data: a ScenarioForcingData instance that provides the
      temperature and sea-ice forcing of the scenario
    - temperature_amplitude, sea_ice_amplitude: amplitude of the
      seasonal cycle of the idealized forcing, defaults to 0
    - atmosphere: callable returning the mixing ratio in ppt,
      required by the forced model
    - source: callable returning the atmospheric source in ppt/yr,
      defaults to anthropogenic_source (coupled model only)
    - rtol, atol: solver tolerances, default to 1e-16. rtol is raised
      to the smallest value scipy supports (about 2.2e-14)
    - method: "RK45" (default), "RK23" or "DOP853"
    - max_step: largest step, e.g., "0.1 yr"
    - log_file: write a log of the run to this file

    The initial state is zero. Negative concentrations are reset to
    zero after every solver step.
    """

    def __init__(self, **kwargs) -> None:
        """Initialize a model instance."""
        # dict of all known keywords and their type
        self.defaults: dict[str, list[any, tuple]] = {
            "name": ["None", (str)],
            "scenario": ["None", (str, Scenario)],
            "model_type": ["forced", (str)],
            "start": ["0 yr", (str, Q_)],
            "stop": ["70 yr", (str, Q_)],
            "compound": ["CFC-11", (str, Compound)],
            "salinity": ["34 g/kg", (str, Q_, Salinity)],
            "pressure": ["1 atm", (str, Q_, Pressure)],
            "wind_speed": ["10 m/s", (str, Q_, WindSpeed)],
            "mixed_layer_depth": ["5 m", (str, Q_)],
            "temperature": ["None", (Callable)],
            "sea_ice_fraction": ["None", (Callable)],
            "forcing_data": ["None", (ScenarioForcingData)],
            "temperature_amplitude": [0.0, (int, float)],
            "sea_ice_amplitude": [0.0, (int, float)],
            "atmosphere": ["None", (Callable)],
            "source": ["None", (Callable)],
            "rtol": [1e-16, (float)],
            "atol": [1e-16, (float)],
            "method": ["RK45", (str)],
            "max_step": ["None", (str, Q_)],
            "log_file": ["None", (str, os.PathLike)],
        }

        # provide a list of absolutely required keywords
        self.lrk: list[str] = ["scenario"]
        self.__initialize_keyword_variables__(kwargs)

        if self.log_file != "None":
            self._setup_logging()

        self.scenario = Scenario.from_name(self.scenario)
        self.compound = Compound.from_name(self.compound)
        if self.name == "None":
            self.name = f"{self.scenario.label}_{self.model_type}"

        self._check_configuration()
        self.t0: float = self.ensure_q(self.start).to("yr").magnitude
        self.t1: float = self.ensure_q(self.stop).to("yr").magnitude
        if self.t1 <= self.t0:
            raise ModelError(f"stop ({self.stop}) must be later than start ({self.start})")

        if self.max_step == "None":
            self.max_step_yr = np.inf
        else:
            self.max_step_yr = self.ensure_q(self.max_step).to("yr").magnitude

        self.params: ScenarioParams = self._build_params()
        logging.info(f"{self.name}: {self.__repr__()}")

    def _setup_logging(self):
        """Configure model logging."""
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)

        logging.basicConfig(
            filename=os.fspath(self.log_file), filemode="w", level=logging.INFO
        )

    def _check_configuration(self) -> None:
        """Raise ModelError for inconsistent keyword combinations."""
        if self.model_type not in MODEL_TYPES:
            raise ModelError(
                f"model_type must be one of {list(MODEL_TYPES)}, not {self.model_type}"
            )
        if self.method not in METHODS:
            raise ModelError(f"method must be one of {list(METHODS)}, not {self.method}")
        if self.model_type == "forced" and self.atmosphere == "None":
            raise ModelError("The forced model requires an atmosphere, e.g., AtmosphericHistory")
        if self.model_type == "forced" and self.source != "None":
            warnings.warn(
                f"\n\n{self.name}: the forced model ignores the source keyword\n",
                stacklevel=3,
            )
        if self.forcing_data != "None" and (
            self.temperature != "None" or self.sea_ice_fraction != "None"
        ):
            raise ModelError("Use either forcing_data or temperature/sea_ice_fraction")
        if self.temperature != "None" or self.sea_ice_fraction != "None":
            warnings.warn(
                f"\n\n{self.name}: user supplied forcing replaces the "
                f"{self.scenario.label} forcing\n",
                stacklevel=3,
            )

    def _build_params(self) -> ScenarioParams:
        """Select the forcing of the scenario and bundle all parameters."""
        if self.forcing_data != "None":
            temperature, ice = self.forcing_data.forcing(self.scenario)
        else:
            temperature = functools.partial(
                southern_ocean_temperature,
                scenario=self.scenario,
                seasonal_amplitude=self.temperature_amplitude,
            )
            ice = functools.partial(
                sea_ice_fraction,
                scenario=self.scenario,
                seasonal_amplitude=self.sea_ice_amplitude,
            )
        if self.temperature != "None":
            temperature = self.temperature
        if self.sea_ice_fraction != "None":
            ice = self.sea_ice_fraction

        if self.model_type == "coupled":
            source = anthropogenic_source if self.source == "None" else self.source
            atmosphere = None
        else:
            source = None
            atmosphere = self.atmosphere

        return make_scenario_params(
            temperature,
            ice,
            salinity=self.salinity,
            pressure=self.pressure,
            wind_speed=self.wind_speed,
            compound=self.compound,
            mixed_layer_depth=self.mixed_layer_depth,
            atmosphere=atmosphere,
            source=source,
        )

    def run(self) -> Trajectory:
        """Integrate the model from start to stop.

        Returns
        -------
        Trajectory
            dense solution of the run

        Raises
        ------
        SolverError
            If the solver fails to find a solution.
        """
        cpu_start = process_time()
        n = 2 if self.model_type == "coupled" else 1
        guard = NonNegativityGuard()

        sol, t, y, nfev = integrate(
            MODEL_TYPES[self.model_type],
            (self.t0, self.t1),
            np.zeros(n),
            self.params,
            method=self.method,
            rtol=self.rtol,
            atol=self.atol,
            max_step=self.max_step_yr,
            guard=guard,
        )

        self.trajectory = Trajectory(
            sol,
            t,
            y,
            self.params,
            self.model_type,
            nfev=nfev,
            corrections=guard.corrections,
            scenario=self.scenario,
        )

        cpu_duration = process_time() - cpu_start
        logging.info(
            f"{self.name}: {len(t) - 1} steps, nfev = {nfev}, "
            f"guard corrections = {guard.corrections}, "
            f"{cpu_duration:.2f} CPU seconds"
        )
        return self.trajectory


def run_scenario(
    scenario: Scenario | str, model_type: str = "forced", **kwargs
) -> Trajectory:
    """Configure and run a single ScenarioModel.

    See ScenarioModel for the keywords.
    """
    return ScenarioModel(scenario=scenario, model_type=model_type, **kwargs).run()


def run_scenarios(
    scenarios: Iterable[Scenario | str] = tuple(Scenario), **kwargs
) -> dict[Scenario, Trajectory]:
    """Run several scenarios with otherwise identical keywords.

    Each run is independent of the others.

    Returns
    -------
    dict[Scenario, Trajectory]
    """
    if "name" in kwargs:
        raise ModelError("run_scenarios names each run after its scenario")

    scenarios = [Scenario.from_name(s) for s in scenarios]
    return {s: run_scenario(s, **kwargs) for s in scenarios}
