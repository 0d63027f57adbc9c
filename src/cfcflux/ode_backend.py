"""
cfcflux: CFC air-sea gas exchange and ocean uptake scenarios Copyright
(C), 2020 Ulrich G.  Wortmann

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
import typing as tp
from collections.abc import Callable

import numpy as np
import numpy.typing as npt
from scipy.integrate import DOP853, RK23, RK45, OdeSolution

from .initialize_unit_registry import Q_
from .solver import flux_kernel, mixing_ratio_kernel, saturation_kernel
from .species_definitions import (
    Compound,
    schmidt_coefficients,
    solubility_coefficients,
)
from .units import (
    Pressure,
    Salinity,
    UnitMismatchError,
    WindSpeed,
    check_for_quantity,
)

NDArrayFloat = npt.NDArray[np.float64]

# explicit Runge-Kutta steppers that support the step guard
METHODS = {"RK23": RK23, "RK45": RK45, "DOP853": DOP853}

# scipy raises smaller relative tolerances to this value
RTOL_FLOOR: float = 100 * np.finfo(float).eps


class ScenarioParams(tp.NamedTuple):
    """Everything the right-hand sides need, in solver units.

    Forcing functions take model time (years since 1950). Constants are
    plain floats in g/kg, atm, m/s and m. flux_to_rate converts
    mol/(m**2 s) into mol/(m**3 yr) for the surface layer.
    """

    temperature: Callable[[float], float]
    sea_ice_fraction: Callable[[float], float]
    salinity: float
    pressure: float
    wind_speed: float
    compound: Compound
    mixed_layer_depth: float
    flux_to_rate: float
    c_sol: NDArrayFloat
    c_sc: NDArrayFloat
    atmosphere: Callable[[float], float] | None = None
    source: Callable[[float], float] | None = None


def make_scenario_params(
    temperature: Callable[[float], float],
    sea_ice_fraction: Callable[[float], float],
    salinity="34 g/kg",
    pressure="1 atm",
    wind_speed="10 m/s",
    compound: Compound | str = "CFC-11",
    mixed_layer_depth="5 m",
    atmosphere: Callable[[float], float] | None = None,
    source: Callable[[float], float] | None = None,
) -> ScenarioParams:
    """Check units and bundle the parameters of one scenario run.

    Parameters
    ----------
    temperature : Callable
        t -> temperature in degC
    sea_ice_fraction : Callable
        t -> ice fraction
    salinity : Salinity | str | Quantity
    pressure : Pressure | str | Quantity
    wind_speed : WindSpeed | str | Quantity
    compound : Compound | str
    mixed_layer_depth : str | Quantity
        depth of the surface layer, any length unit
    atmosphere : Callable, optional
        t -> atmospheric mixing ratio in ppt, used by cfc_ocean
    source : Callable, optional
        t -> anthropogenic source in ppt/yr, used by cfc_coupled

    Returns
    -------
    ScenarioParams

    Raises
    ------
    UnitMismatchError
        if a constant has the wrong unit
    ValueError
        if a forcing is not callable or the depth is not positive
    """
    for name, fn in (
        ("temperature", temperature),
        ("sea_ice_fraction", sea_ice_fraction),
        ("atmosphere", atmosphere),
        ("source", source),
    ):
        if fn is not None and not callable(fn):
            raise ValueError(f"{name} must be callable, not {type(fn).__name__}")

    c = Compound.from_name(compound)
    if isinstance(mixed_layer_depth, int | float):
        raise UnitMismatchError(f"mixed_layer_depth = {mixed_layer_depth} has no unit")
    dz = check_for_quantity(mixed_layer_depth, "m")
    if dz.magnitude <= 0:
        raise ValueError(f"mixed_layer_depth must be positive, got {dz}")

    # mol/(m**2 s) over the layer depth, per year
    flux_to_rate = (Q_(1.0, "mol/(m**2 s)") / dz).to("mol/(m**3 yr)").magnitude

    return ScenarioParams(
        temperature=temperature,
        sea_ice_fraction=sea_ice_fraction,
        salinity=float(Salinity.check(salinity, "salinity")),
        pressure=float(Pressure.check(pressure, "pressure")),
        wind_speed=float(WindSpeed.check(wind_speed, "wind_speed")),
        compound=c,
        mixed_layer_depth=float(dz.to("m").magnitude),
        flux_to_rate=float(flux_to_rate),
        c_sol=solubility_coefficients()[c],
        c_sc=schmidt_coefficients()[c],
        atmosphere=atmosphere,
        source=source,
    )


def cfc_ocean(t: float, y: NDArrayFloat, p: ScenarioParams) -> NDArrayFloat:
    """Ocean surface layer forced by a prescribed atmosphere.

    y = [ocean] in mol/m**3, returns d ocean/dt in mol/(m**3 yr).
    """
    flux = flux_kernel(
        p.temperature(t),
        p.salinity,
        p.pressure,
        p.wind_speed,
        p.sea_ice_fraction(t),
        p.atmosphere(t),
        y[0],
        p.c_sol,
        p.c_sc,
    )
    return np.array([flux * p.flux_to_rate])


def cfc_coupled(t: float, y: NDArrayFloat, p: ScenarioParams) -> NDArrayFloat:
    """Ocean surface layer coupled to a well mixed atmosphere.

    y = [ocean, atmosphere] in mol/m**3. The atmosphere is carried as
    the concentration a surface layer would have in equilibrium with
    it, so both reservoirs refer to the volume of the surface layer.
    The source (ppt/yr) is added as its saturation equivalent.
    """
    ocean, atm = y
    temperature = p.temperature(t)
    x = mixing_ratio_kernel(temperature, p.salinity, p.pressure, atm, p.c_sol)
    rate = p.flux_to_rate * flux_kernel(
        temperature,
        p.salinity,
        p.pressure,
        p.wind_speed,
        p.sea_ice_fraction(t),
        x,
        ocean,
        p.c_sol,
        p.c_sc,
    )
    source = saturation_kernel(
        temperature, p.salinity, p.pressure, p.source(t), p.c_sol
    )
    return np.array([rate, source - rate])


class NonNegativityGuard:
    """Reset negative state components of a stepper to zero.

    Called after every accepted step. The cached derivative of the
    stepper is recomputed from the corrected state, so the next step
    starts from a consistent point.
    """

    def __init__(self) -> None:
        self.corrections: int = 0

    def __call__(self, solver) -> bool:
        if np.all(solver.y >= 0.0):
            return False

        logging.debug(f"guard: t = {solver.t}, y = {solver.y}")
        solver.y = np.maximum(solver.y, 0.0)
        solver.f = solver.fun(solver.t, solver.y)
        self.corrections += 1
        return True


class SolverError(Exception):
    """Custom Error Class."""

    def __init__(self, message):
        """Initialize Error Instance."""
        message = f"\n\n{message}\n"
        super().__init__(message)


def clip_rtol(rtol: float) -> float:
    """Return rtol, raised to the smallest value scipy accepts."""
    if rtol < RTOL_FLOOR:
        logging.info(f"rtol = {rtol:.2e} raised to {RTOL_FLOOR:.2e}")
        return RTOL_FLOOR
    return rtol


def integrate(
    rhs: Callable,
    t_span: tuple[float, float],
    y0: NDArrayFloat,
    p: ScenarioParams,
    method: str = "RK45",
    rtol: float = 1e-16,
    atol: float = 1e-16,
    max_step: float = np.inf,
    guard: NonNegativityGuard | None = None,
) -> tuple[OdeSolution, NDArrayFloat, NDArrayFloat, int]:
    """Integrate rhs(t, y, p) and apply the guard after every step.

    Returns
    -------
    tuple
        dense solution, stepped times, stepped states (n_states x n_steps),
        number of rhs evaluations

    Raises
    ------
    SolverError
        if the stepper fails
    ValueError
        if method is not one of METHODS
    """
    if method not in METHODS:
        raise ValueError(f"method must be one of {list(METHODS)}, not {method}")

    if guard is None:
        guard = NonNegativityGuard()

    t0, t1 = t_span
    solver = METHODS[method](
        lambda t, y: rhs(t, y, p),
        t0,
        np.asarray(y0, dtype=float),
        t1,
        max_step=max_step,
        rtol=clip_rtol(rtol),
        atol=atol,
    )

    ts = [t0]
    ys = [solver.y.copy()]
    interpolants = []
    while solver.status == "running":
        message = solver.step()
        if solver.status == "failed":
            raise SolverError(f"{method} failed at t = {solver.t}: {message}")

        # DOP853 builds its interpolant from solver.y, so do this first
        interpolants.append(solver.dense_output())
        guard(solver)
        ts.append(solver.t)
        ys.append(solver.y.copy())

    ts = np.array(ts)
    return OdeSolution(ts, interpolants), ts, np.array(ys).T, solver.nfev


class Trajectory:
    """Result of one scenario run.

    Calling the instance returns the state at any time within the
    integration span, interpolated by the stepper's dense output and
    clipped at zero. The stepped values are available as t and y.

    Example::

        tr = run_scenario("control", model_type="coupled")
        tr(70)             # [ocean, atmosphere] in mol/m**3
        tr.ocean([10, 20]) # ocean concentration only
    """

    def __init__(
        self,
        sol: OdeSolution,
        t: NDArrayFloat,
        y: NDArrayFloat,
        p: ScenarioParams,
        model_type: str,
        nfev: int = 0,
        corrections: int = 0,
        scenario=None,
    ) -> None:
        self.sol = sol
        self.t = t
        self.y = y
        self.p = p
        self.model_type = model_type
        self.nfev = nfev
        self.corrections = corrections
        self.scenario = scenario

    def __repr__(self) -> str:
        return (
            f"Trajectory({self.scenario}, {self.model_type}, "
            f"t = [{self.t[0]}, {self.t[-1]}], steps = {len(self.t) - 1})"
        )

    def __check_span__(self, t: NDArrayFloat) -> None:
        if np.any(t < self.t[0]) or np.any(t > self.t[-1]):
            raise ValueError(
                f"t must be within [{self.t[0]}, {self.t[-1]}], got {t}"
            )

    def __call__(self, t: float | NDArrayFloat) -> NDArrayFloat:
        """State at time(s) t, shape (n_states,) or (n_states, len(t))."""
        t = np.asarray(t, dtype=float)
        self.__check_span__(t)
        return np.maximum(self.sol(t), 0.0)

    def ocean(self, t: float | NDArrayFloat) -> float | NDArrayFloat:
        """Ocean surface layer concentration in mol/m**3."""
        return self(t)[0]

    def atmosphere(self, t: float | NDArrayFloat) -> float | NDArrayFloat:
        """Atmosphere as saturation equivalent concentration in mol/m**3.

        For the forced model this is the saturation concentration of the
        prescribed atmosphere.
        """
        if self.model_type == "coupled":
            return self(t)[1]

        t = np.asarray(t, dtype=float)
        self.__check_span__(t)
        p = self.p
        rv = np.array(
            [
                saturation_kernel(
                    p.temperature(ti), p.salinity, p.pressure, p.atmosphere(ti), p.c_sol
                )
                for ti in np.atleast_1d(t)
            ]
        )
        return float(rv[0]) if t.ndim == 0 else rv

    def mixing_ratio(self, t: float | NDArrayFloat) -> float | NDArrayFloat:
        """Atmospheric mixing ratio in ppt."""
        t = np.asarray(t, dtype=float)
        p = self.p
        if self.model_type != "coupled":
            self.__check_span__(t)
            rv = np.array([p.atmosphere(ti) for ti in np.atleast_1d(t)])
        else:
            atm = np.atleast_1d(self.atmosphere(t))
            rv = np.array(
                [
                    mixing_ratio_kernel(
                        p.temperature(ti), p.salinity, p.pressure, a, p.c_sol
                    )
                    for ti, a in zip(np.atleast_1d(t), atm)
                ]
            )
        return float(rv[0]) if t.ndim == 0 else rv
