"""
     cfcflux: CFC air-sea gas exchange and ocean uptake scenarios
     Copyright (C), 2020 Ulrich G. Wortmann

     This program is free software: you can redistribute it and/or modify
     it under the terms of the GNU General Public License as published by
     the Free Software Foundation, either version 3 of the License, or
     (at your option) any later version.

     This program is distributed in the hope that it will be useful,
     but WITHOUT ANY WARRANTY; without even the implied warranty of
     MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
     GNU General Public License for more details.

     You should have received a copy of the GNU General Public License
     along with this program.  If not, see <https://www.gnu.org/licenses/>.

Compiled kernels of the gas exchange equations. All arguments are plain
floats (or numpy arrays) in the canonical units of cfcflux.units:
degC, g/kg, m/s, atm, ppt and mol/m**3. Unit checking happens in
seawater.py and processes.py; the ODE right-hand sides call these
kernels directly.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt
from numba import njit

from .initialize_unit_registry import Q_

# declare numpy types
NDArrayFloat = npt.NDArray[np.float64]

T0: float = 273.15  # 0 degC in K
SC_REF: float = 660.0  # Schmidt number of CO2 in seawater at 20 degC
PISTON_A: float = 6.97e-7  # s/m, 0.251 cm/hr per (m/s)**2
P0: float = 1.0  # reference pressure in atm

# exact conversion factors, derived once with pint
MOL_PER_L_TO_M3: float = Q_("1 mol/L").to("mol/m**3").magnitude
PPT_TO_ATM: float = Q_("1 ppt").to("dimensionless").magnitude


@njit(fastmath=True)
def solubility_kernel(t, s, c):
    """Warner & Weiss (1985) solubility in mol/(m**3 atm).

    :param t: temperature in degC
    :param s: salinity in g/kg
    :param c: coefficients a1, a2, a3, a4, b1, b2, b3
    """
    tk = (t + T0) / 100.0
    ln_f = (
        c[0]
        + c[1] / tk
        + c[2] * np.log(tk)
        + c[3] * tk**2
        + s * (c[4] + c[5] * tk + c[6] * tk**2)
    )
    return np.exp(ln_f) * MOL_PER_L_TO_M3


@njit(fastmath=True)
def schmidt_kernel(t, c):
    """Schmidt number, t in degC, c = A..E"""
    return c[0] + t * (c[1] + t * (c[2] + t * (c[3] + t * c[4])))


@njit(fastmath=True)
def piston_kernel(t, u, f, c):
    """Gas transfer velocity in m/s.

    :param t: temperature in degC
    :param u: wind speed in m/s
    :param f: ice fraction, not clamped
    :param c: Schmidt number coefficients
    """
    sc = schmidt_kernel(t, c)
    return PISTON_A * (sc / SC_REF) ** -0.5 * u**2 * (1.0 - f)


@njit(fastmath=True)
def saturation_kernel(t, s, p, x, c):
    """Saturation concentration in mol/m**3 for x in ppt and p in atm"""
    return p * solubility_kernel(t, s, c) * x * PPT_TO_ATM / P0


@njit(fastmath=True)
def mixing_ratio_kernel(t, s, p, xsat, c):
    """Inverse of saturation_kernel, returns ppt"""
    return xsat * P0 / (p * solubility_kernel(t, s, c)) / PPT_TO_ATM


@njit(fastmath=True)
def flux_kernel(t, s, p, u, f, x, cocn, c_sol, c_sc):
    """Net air-sea flux in mol/(m**2 s), positive into the ocean."""
    k = piston_kernel(t, u, f, c_sc)
    return k * (saturation_kernel(t, s, p, x, c_sol) - cocn)
