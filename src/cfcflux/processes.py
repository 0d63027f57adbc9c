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

from .initialize_unit_registry import Q_
from .solver import flux_kernel
from .species_definitions import (
    Compound,
    schmidt_coefficients,
    solubility_coefficients,
)
from .units import (
    Concentration,
    MixingRatio,
    Pressure,
    Salinity,
    Temperature,
    WindSpeed,
    check_fraction,
)


def air_sea_gas_flux(
    T,
    S,
    P_sfc,
    u,
    f,
    x,
    CFCocn,
    compound: Compound | str = "CFC-11",
) -> Q_:
    """Calculate the air-sea gas flux of a CFC.

    flux = k_w (CFC_sat - CFCocn)

    Parameters
    ----------
    T : Temperature | str | Quantity
        temperature in degC
    S : Salinity | str | Quantity
        salinity in g/kg
    P_sfc : Pressure | str | Quantity
        surface pressure in atm
    u : WindSpeed | str | Quantity
        wind speed in m/s
    f : float
        sea-ice fraction
    x : MixingRatio | str | Quantity
        atmospheric mixing ratio in ppt
    CFCocn : Concentration | str | Quantity
        dissolved concentration in the surface ocean in mol/m**3
    compound : Compound | str
        "CFC-11" or "CFC-12"

    Returns
    -------
    Quantity
        flux in mol/(m**2 s), positive values are into the ocean

    Raises
    ------
    UnitMismatchError
        if any argument does not carry the expected unit
    UnsupportedCompoundError
        if compound is not CFC-11 or CFC-12
    """
    c = Compound.from_name(compound)
    rv = flux_kernel(
        Temperature.check(T, "T"),
        Salinity.check(S, "S"),
        Pressure.check(P_sfc, "P_sfc"),
        WindSpeed.check(u, "u"),
        check_fraction(f, "f"),
        MixingRatio.check(x, "x"),
        Concentration.check(CFCocn, "CFCocn"),
        solubility_coefficients()[c],
        schmidt_coefficients()[c],
    )
    return Q_(rv, "mol/(m**2 s)")
