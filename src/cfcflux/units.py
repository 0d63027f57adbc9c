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

Typed wrappers for the physical quantities used by the flux
calculations. Each wrapper declares exactly one unit (plus optional
spellings of the same unit, e.g., ppt and pmol/mol). Values are never
converted silently: a quantity carrying any other unit raises
UnitMismatchError.
"""

from __future__ import annotations

import re

import numpy as np
import numpy.typing as npt

from .initialize_unit_registry import Q_, ureg

# declare numpy types
NDArrayFloat = npt.NDArray[np.float64]

NUMBER_UNIT = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*(.*?)\s*$")


class UnitMismatchError(Exception):
    """Raised when a value does not carry the unit a function requires.

    Parameters
    ----------
    message : str
        Explanation of the error

    Examples
    --------
    >>> raise UnitMismatchError("T must be given in degC, not kelvin")
    """

    def __init__(self, message):
        message = f"\n\n{message}\n"
        super().__init__(message)


class PhysicalQuantity:
    """Base class of all unit-carrying wrappers.

    Subclasses set ``unit`` (the canonical unit) and may list
    alternative spellings of that unit in ``aliases``. A wrapper can be
    created from

    - a bare number or numpy array, which is interpreted in ``unit``
    - a string like "34 g/kg"
    - a pint Quantity
    - another wrapper of the same class

    Examples
    --------
    >>> Temperature(2.0)
    Temperature(2.0 degree_Celsius)
    >>> Salinity("34 g/kg").magnitude
    34.0
    >>> Temperature("275 K")
    UnitMismatchError: Temperature requires degC, got kelvin
    """

    unit: str = ""
    aliases: tuple[str, ...] = ()

    def __init__(self, value) -> None:
        if isinstance(value, PhysicalQuantity):
            if not isinstance(value, self.__class__):
                raise UnitMismatchError(
                    f"{self.__class__.__name__} cannot be created from "
                    f"{value.__class__.__name__}"
                )
            self.q = value.q
        elif isinstance(value, int | float | np.ndarray) and not isinstance(
            value, bool
        ):
            self.q = Q_(value, self.unit)
        else:
            self.q = self._validate_unit(self._to_quantity(value))

    @classmethod
    def _to_quantity(cls, value) -> Q_:
        """Convert strings into quantities, pass quantities through."""
        if isinstance(value, str):
            # split number and unit, so that offset units like degC parse
            m = NUMBER_UNIT.match(value)
            if m is None or not m.group(2):
                raise UnitMismatchError(
                    f"'{value}' has no unit, {cls.__name__} requires {cls.unit}"
                )
            try:
                value = Q_(float(m.group(1)), m.group(2))
            except Exception as err:
                raise UnitMismatchError(
                    f"Cannot parse '{value}' as {cls.__name__}: {err}"
                ) from err
        elif not isinstance(value, Q_):
            raise UnitMismatchError(
                f"{cls.__name__} requires a number, string or Quantity, "
                f"not {type(value).__name__}"
            )

        return value

    @classmethod
    def _validate_unit(cls, q: Q_) -> Q_:
        """Return q in the canonical unit, or raise UnitMismatchError."""
        accepted = (cls.unit, *cls.aliases)
        for u in accepted:
            if q.units == ureg.Unit(u):
                # aliases are spellings of the same unit, so this is exact
                return q if u == cls.unit else q.to(cls.unit)

        raise UnitMismatchError(
            f"{cls.__name__} requires {' or '.join(accepted)}, got {q.units}"
        )

    @classmethod
    def check(cls, value, name: str = "value") -> float | NDArrayFloat:
        """Validate an argument of a public function.

        Unlike the constructor, a bare number is rejected: functions
        only accept values that state their unit.

        Parameters
        ----------
        value : PhysicalQuantity | str | Quantity
            the argument to check
        name : str
            argument name used in error messages

        Returns
        -------
        float | NDArrayFloat
            magnitude in the canonical unit

        Raises
        ------
        UnitMismatchError
            if value has no unit or the wrong unit
        """
        if isinstance(value, PhysicalQuantity):
            if not isinstance(value, cls):
                raise UnitMismatchError(
                    f"'{name}' must be a {cls.__name__}, "
                    f"got {value.__class__.__name__}"
                )
            return value.magnitude

        if isinstance(value, int | float | np.ndarray):
            raise UnitMismatchError(
                f"'{name}' = {value} has no unit, expected {cls.unit}"
            )

        try:
            return cls(value).magnitude
        except UnitMismatchError as err:
            raise UnitMismatchError(f"'{name}': {err.args[0].strip()}") from err

    @property
    def magnitude(self) -> float | NDArrayFloat:
        """Numeric value in the canonical unit."""
        return self.q.magnitude

    @property
    def units(self):
        return self.q.units

    def __float__(self) -> float:
        return float(self.q.magnitude)

    def __eq__(self, other) -> bool:
        if not isinstance(other, self.__class__):
            return NotImplemented
        return bool(np.all(self.magnitude == other.magnitude))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.q.magnitude} {self.q.units})"


class Temperature(PhysicalQuantity):
    """Temperature in degC."""

    unit = "degC"


class Salinity(PhysicalQuantity):
    """Salinity in g/kg."""

    unit = "g/kg"


class WindSpeed(PhysicalQuantity):
    """Wind speed at 10 m in m/s."""

    unit = "m/s"


class Pressure(PhysicalQuantity):
    """Surface pressure in atm."""

    unit = "atm"


class MixingRatio(PhysicalQuantity):
    """Dry air mole fraction in ppt (pmol/mol)."""

    unit = "ppt"
    aliases = ("pmol/mol",)


class Concentration(PhysicalQuantity):
    """Dissolved concentration in mol/m**3."""

    unit = "mol/m**3"


def check_fraction(f, name: str = "f") -> float | NDArrayFloat:
    """Return the magnitude of a dimensionless fraction.

    Sea-ice fractions are plain numbers. A dimensionless pint quantity
    is accepted, any other unit raises UnitMismatchError. The value is
    not clamped.
    """
    if isinstance(f, PhysicalQuantity):
        raise UnitMismatchError(
            f"'{name}' must be dimensionless, got {f.__class__.__name__}"
        )
    if isinstance(f, Q_):
        if not f.dimensionless:
            raise UnitMismatchError(f"'{name}' must be dimensionless, got {f.units}")
        return f.to("dimensionless").magnitude
    if isinstance(f, int | float | np.ndarray) and not isinstance(f, bool):
        return f

    raise UnitMismatchError(f"'{name}' must be a number, not {type(f).__name__}")


def check_for_quantity(quantity, unit: str) -> Q_:
    """Return quantity as a pint Quantity that can be expressed in unit.

    Strings such as "5 m" are parsed, bare numbers are taken to be in
    unit, Quantities are passed through unchanged. Unlike the wrappers
    above, any compatible unit is accepted, e.g., "50 cm" for "m".

    Raises
    ------
    UnitMismatchError
        if the quantity cannot be expressed in unit
    ValueError
        if quantity is neither a number, a string nor a Quantity
    """
    if isinstance(quantity, str):
        q = Q_(quantity)
    elif isinstance(quantity, int | float) and not isinstance(quantity, bool):
        q = Q_(quantity, unit)
    elif isinstance(quantity, Q_):
        q = quantity
    else:
        raise ValueError(f"{quantity!r} must be a number, string or Quantity")

    if not q.is_compatible_with(unit):
        raise UnitMismatchError(f"{q} cannot be expressed in {unit}")

    return q
