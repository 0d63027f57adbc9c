"""cfcflux: CFC air-sea gas exchange and ocean uptake scenarios.

Copyright (C), 2020 Ulrich G.  Wortmann

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

import typing as tp

import numpy as np
import numpy.typing as npt
import pandas as pd

from .experiments import EPOCH
from .initialize_unit_registry import Q_

if tp.TYPE_CHECKING:
    from .experiments import Scenario
    from .ode_backend import Trajectory

# declare numpy types
NDArrayFloat = npt.NDArray[np.float64]

SEAWATER_DENSITY = "1024 kg/m**3"


def concentration_to_pmol_per_kg(
    c: float | NDArrayFloat, density=SEAWATER_DENSITY
) -> float | NDArrayFloat:
    """Convert concentrations from mol/m**3 to pmol/kg.

    Parameters
    ----------
    c : float | NDArrayFloat
        concentration in mol/m**3
    density : str | Quantity
        seawater density, defaults to 1024 kg/m**3

    Returns
    -------
    float | NDArrayFloat
        concentration in pmol/kg
    """
    rho = Q_(density) if isinstance(density, str) else density
    if not rho.is_compatible_with("kg/m**3"):
        raise ValueError(f"density must be a density, got {rho}")
    return (Q_(c, "mol/m**3") / rho).to("pmol/kg").magnitude


def sample_trajectories(
    trajectories: dict[Scenario, Trajectory],
    times: NDArrayFloat | None = None,
    samples: int = 71,
    pmol_per_kg: bool = False,
) -> pd.DataFrame:
    """Sample the dense output of several runs on a common time axis.

    Parameters
    ----------
    trajectories : dict[Scenario, Trajectory]
        as returned by run_scenarios
    times : NDArrayFloat, optional
        model times (years since 1950). Defaults to samples equally
        spaced times spanning the shortest run.
    samples : int
        number of times if times is not given
    pmol_per_kg : bool
        report ocean concentrations in pmol/kg instead of mol/m**3

    Returns
    -------
    pd.DataFrame
        indexed by calendar year, with the columns
        "<scenario> ocean [unit]", "<scenario> atmosphere [mol/m**3]"
        and "<scenario> xCFC [ppt]" for every run.
    """
    if not trajectories:
        raise ValueError("Nothing to sample")

    if times is None:
        t0 = max(tr.t[0] for tr in trajectories.values())
        t1 = min(tr.t[-1] for tr in trajectories.values())
        times = np.linspace(t0, t1, samples)
    times = np.asarray(times, dtype=float)

    ocean_unit = "pmol/kg" if pmol_per_kg else "mol/m**3"
    data = {}
    for scenario, tr in trajectories.items():
        ocean = tr.ocean(times)
        if pmol_per_kg:
            ocean = concentration_to_pmol_per_kg(ocean)
        data[f"{scenario} ocean [{ocean_unit}]"] = ocean
        data[f"{scenario} atmosphere [mol/m**3]"] = tr.atmosphere(times)
        data[f"{scenario} xCFC [ppt]"] = tr.mixing_ratio(times)

    df = pd.DataFrame(data, index=pd.Index(times + EPOCH, name="Year"))
    return df
