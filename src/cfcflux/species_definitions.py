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

Compound definitions and the coefficient tables that go with them.
The tables are shipped as csv files in cfcflux/data and are read once
per process.
"""

from __future__ import annotations

import enum
import functools
import logging

import numpy as np
import numpy.typing as npt
import pandas as pd

# declare numpy types
NDArrayFloat = npt.NDArray[np.float64]

# file name, expected row labels
SOLUBILITY_TABLE = ("SolubilityCoefficients", ("a1", "a2", "a3", "a4", "b1", "b2", "b3"))
SCHMIDT_TABLE = ("SchmidtNumber", ("A", "B", "C", "D", "E"))


class UnsupportedCompoundError(Exception):
    """Raised for any compound other than CFC-11 and CFC-12.

    Examples
    --------
    >>> raise UnsupportedCompoundError("SF6 is not supported")
    """

    def __init__(self, message):
        message = f"\n\n{message}\n"
        super().__init__(message)


class CoefficientTableError(Exception):
    """Raised when a coefficient table is malformed."""

    def __init__(self, message):
        message = f"\n\n{message}\n"
        super().__init__(message)


class Compound(enum.Enum):
    """The supported chlorofluorocarbons.

    The value is the conventional name, ``column`` is the name of
    the coefficient column in the data tables.
    """

    CFC11 = "CFC-11"
    CFC12 = "CFC-12"

    @property
    def column(self) -> str:
        return self.name

    @classmethod
    def from_name(cls, compound: Compound | str) -> Compound:
        """Return the Compound for a member or its name, e.g., "CFC-11".

        Raises
        ------
        UnsupportedCompoundError
            if compound is anything else
        """
        if isinstance(compound, cls):
            return compound
        if isinstance(compound, str):
            for c in cls:
                if c.value == compound:
                    return c

        raise UnsupportedCompoundError(
            f"Compound {compound!r} is not supported, "
            f"use one of {[c.value for c in cls]}"
        )


def read_coefficient_table(fn: str, labels: tuple[str, ...], fqfn=None) -> pd.DataFrame:
    """Read a coefficient table and check its layout.

    Parameters
    ----------
    fn : str
        table name without extension, e.g., "SchmidtNumber"
    labels : tuple[str, ...]
        expected row labels in order
    fqfn : str | pathlib.Path, optional
        read from this file instead of the packaged data

    Returns
    -------
    pd.DataFrame
        indexed by coefficient label, one column per compound

    Raises
    ------
    CoefficientTableError
        if rows or compound columns are missing
    """
    from importlib import resources as impresources
    import pathlib as pl

    if fqfn is None:
        fqfn = impresources.files("cfcflux") / "data" / f"{fn}.csv"
    fqfn = pl.Path(fqfn)

    if not fqfn.exists():
        raise FileNotFoundError(f"Cannot find file {fqfn}")

    df = pd.read_csv(fqfn, comment="#", index_col=0, float_precision="high")

    if len(df) != len(labels):
        raise CoefficientTableError(
            f"{fqfn.name} must have {len(labels)} rows, found {len(df)}"
        )
    if tuple(df.index) != labels:
        raise CoefficientTableError(
            f"{fqfn.name} rows must be {labels}, found {tuple(df.index)}"
        )
    for c in Compound:
        if c.column not in df.columns:
            raise CoefficientTableError(
                f"{fqfn.name} has no column for {c.value} ({c.column})"
            )

    logging.debug(f"read {fqfn.name} with columns {list(df.columns)}")
    return df


def _freeze(df: pd.DataFrame) -> dict[Compound, NDArrayFloat]:
    """Return one read-only coefficient array per compound."""
    d = {}
    for c in Compound:
        a = df[c.column].to_numpy(dtype=np.float64, copy=True)
        a.flags.writeable = False
        d[c] = a
    return d


@functools.cache
def solubility_coefficients() -> dict[Compound, NDArrayFloat]:
    """Warner & Weiss (1985) a1..a4, b1..b3 keyed by Compound."""
    return _freeze(read_coefficient_table(*SOLUBILITY_TABLE))


@functools.cache
def schmidt_coefficients() -> dict[Compound, NDArrayFloat]:
    """Schmidt number polynomial coefficients A..E keyed by Compound."""
    return _freeze(read_coefficient_table(*SCHMIDT_TABLE))
