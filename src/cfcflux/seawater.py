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

Solubility, Schmidt number, piston velocity and saturation state of
CFC-11 and CFC-12 in seawater following the OMIP protocol (Orr et al.
2017, GMD 10, 2169-2199).

All functions check the unit of every argument before computing, and
return pint quantities or cfcflux.units wrappers.
"""

from __future__ import annotations

from .initialize_unit_registry import Q_
from .solver import (
    mixing_ratio_kernel,
    piston_kernel,
    saturation_kernel,
    schmidt_kernel,
    solubility_kernel,
)
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


def calculate_solubility(T, S, compound: Compound | str = "CFC-11") -> Q_:
    """Calculate the CFC solubility function F.

    Warner & Weiss (1985), Deep-Sea Research 32, 1485-1497:

    ln F = a1 + a2 (100/T) + a3 ln(T/100) + a4 (T/100)^2
           + S [b1 + b2 (T/100) + b3 (T/100)^2]

    with T in Kelvin. F is converted from mol/(L atm) to
    mol/(m**3 atm).

    Parameters
    ----------
    T : Temperature | str | Quantity
        temperature in degC, scalar or array
    S : Salinity | str | Quantity
        salinity in g/kg, scalar or array
    compound : Compound | str
        "CFC-11" or "CFC-12"

    Returns
    -------
    Quantity
        solubility in mol/(m**3 atm)

    Raises
    ------
    UnitMismatchError
        if T or S do not carry the expected unit
    UnsupportedCompoundError
        if compound is not CFC-11 or CFC-12

    Examples
    --------
    >>> calculate_solubility(Temperature(0), Salinity(34), "CFC-11")
    <Quantity(..., 'mole / meter ** 3 / standard_atmosphere')>
    """
    c = Compound.from_name(compound)
    t = Temperature.check(T, "T")
    s = Salinity.check(S, "S")
    return Q_(solubility_kernel(t, s, solubility_coefficients()[c]), "mol/(m**3 atm)")


def schmidt_number(T, compound: Compound | str = "CFC-11"):
    """Return the dimensionless Schmidt number of compound in seawater.

    Sc = A + B T + C T^2 + D T^3 + E T^4 with T in degC. The
    coefficients reproduce Sc(20 degC) = 1179 (CFC-11) and 1188 (CFC-12).
    """
    c = Compound.from_name(compound)
    t = Temperature.check(T, "T")
    return schmidt_kernel(t, schmidt_coefficients()[c])


def piston_velocity(T, u, f, compound: Compound | str = "CFC-11") -> Q_:
    """Calculate the gas transfer (piston) velocity.

    k_w = a (Sc/660)^(-1/2) u^2 (1 - f), a = 6.97e-7 s/m

    Parameters
    ----------
    T : Temperature | str | Quantity
        temperature in degC
    u : WindSpeed | str | Quantity
        wind speed in m/s
    f : float
        sea-ice fraction. Values outside [0, 1] are used as given.
    compound : Compound | str
        "CFC-11" or "CFC-12"

    Returns
    -------
    Quantity
        piston velocity in m/s
    """
    c = Compound.from_name(compound)
    t = Temperature.check(T, "T")
    w = WindSpeed.check(u, "u")
    fi = check_fraction(f, "f")
    return Q_(piston_kernel(t, w, fi, schmidt_coefficients()[c]), "m/s")


def gassat(T, S, P_sfc, x, compound: Compound | str = "CFC-11") -> Concentration:
    """Calculate the saturation concentration of a CFC in seawater.

    CFC_sat = P_sfc F p / P0, where p is the mixing ratio x expressed
    as a partial pressure (1 ppt = 1e-12 atm) and P0 = 1 atm.

    Parameters
    ----------
    T : Temperature | str | Quantity
        temperature in degC
    S : Salinity | str | Quantity
        salinity in g/kg
    P_sfc : Pressure | str | Quantity
        surface pressure in atm
    x : MixingRatio | str | Quantity
        atmospheric mixing ratio in ppt
    compound : Compound | str
        "CFC-11" or "CFC-12"

    Returns
    -------
    Concentration
        saturation concentration in mol/m**3
    """
    c = Compound.from_name(compound)
    t = Temperature.check(T, "T")
    s = Salinity.check(S, "S")
    p = Pressure.check(P_sfc, "P_sfc")
    xa = MixingRatio.check(x, "x")
    return Concentration(saturation_kernel(t, s, p, xa, solubility_coefficients()[c]))


def gasatmconc(T, S, P_sfc, Xsat, compound: Compound | str = "CFC-11") -> MixingRatio:
    """Convert a dissolved concentration into the mixing ratio it is saturated with.

    This is the inverse of gassat: p = Xsat P0 / (P_sfc F), converted
    from atm to ppt.

    Returns
    -------
    MixingRatio
        mixing ratio in ppt
    """
    c = Compound.from_name(compound)
    t = Temperature.check(T, "T")
    s = Salinity.check(S, "S")
    p = Pressure.check(P_sfc, "P_sfc")
    xs = Concentration.check(Xsat, "Xsat")
    return MixingRatio(mixing_ratio_kernel(t, s, p, xs, solubility_coefficients()[c]))
