"""cfcflux: CFC air-sea gas exchange and ocean uptake scenarios.

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

Keyword handling shared by all configurable cfcflux classes.

A class declares its keywords, their defaults and their allowed types
in ``self.defaults``, and the keywords that must be given in
``self.lrk``, e.g.::

    self.defaults = {
        "name": ["None", (str)],
        "salinity": ["34 g/kg", (str, Q_)],
    }
    self.lrk = ["name", ["filename", "x"]]  # name, and filename or x
    self.__initialize_keyword_variables__(kwargs)

Every keyword becomes an instance attribute. Unset optional keywords
hold their default, the string "None" marks "not given".
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

# declare numpy types
NDArrayFloat = npt.NDArray[np.float64]

# keywords that must be strictly positive numbers
POSITIVE_KEYWORDS = ("rtol", "atol")


class KeywordError(Exception):
    """Raised for keywords a class does not know."""

    def __init__(self, message):
        message = f"\n\n{message}\n"
        super().__init__(message)


class MissingKeywordError(Exception):
    """Raised when a mandatory keyword is absent.

    Examples
    --------
    >>> raise MissingKeywordError("'scenario' is a mandatory keyword")
    """

    def __init__(self, message):
        message = f"\n\n{message}\n"
        super().__init__(message)


class InputError(Exception):
    """Raised for keyword values of the wrong type or out of range."""

    def __init__(self, message):
        message = f"\n\n{message}\n"
        super().__init__(message)


def _is_unset(value) -> bool:
    return value is None or (isinstance(value, str) and value == "None")


class InputParsing:
    """Parse the keyword arguments of a configurable class.

    Not meant to be instantiated, derived classes call
    __initialize_keyword_variables__ from their own __init__.
    """

    def __init__(self):
        raise NotImplementedError("InputParsing has no instance!")

    def __initialize_keyword_variables__(self, kwargs: dict) -> None:
        """Check the mandatory keywords, then register defaults and values."""
        self.__check_mandatory_keywords__(self.lrk, kwargs)

        for key, (default, _) in self.defaults.items():
            setattr(self, key, default)

        self.kwargs: dict = kwargs
        for key, value in kwargs.items():
            self.__set_keyword__(key, value)

    def __check_mandatory_keywords__(self, lrk: list, kwargs: dict) -> None:
        """Raise MissingKeywordError unless every entry of lrk is given.

        A list inside lrk names alternatives, exactly one of them must
        be given. Giving more than one raises InputError.
        """
        for key in lrk:
            if isinstance(key, list):
                given = [k for k in key if k in kwargs and not _is_unset(kwargs[k])]
                if not given:
                    raise MissingKeywordError(f"One of {key} must be given")
                if len(given) > 1:
                    raise InputError(f"Only one of {key} can be given, got {given}")
            elif key not in kwargs or _is_unset(kwargs[key]):
                raise MissingKeywordError(f"'{key}' is a mandatory keyword")

    def __set_keyword__(self, key: str, value) -> None:
        """Type check a single keyword and store it as attribute."""
        if key not in self.defaults:
            raise KeywordError(
                f"'{key}' is not a valid keyword for {self.__class__.__name__}, "
                f"use one of {list(self.defaults)}"
            )
        if value is None:
            return

        types = self.defaults[key][1]
        if not isinstance(value, types):
            names = (
                ", ".join(t.__name__ for t in types)
                if isinstance(types, tuple)
                else types.__name__
            )
            raise InputError(
                f"'{key}' must be of type {names}, not {type(value).__name__}"
            )

        if key == "name" and not value.strip():
            raise InputError("name cannot be empty")
        if key in POSITIVE_KEYWORDS and value <= 0:
            raise InputError(f"'{key}' must be positive, got {value}")

        setattr(self, key, value)


class cfcBase(InputParsing):
    """Base class of the configurable cfcflux objects."""

    def __init__(self) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        """Show the keywords the instance was created with."""
        from cfcflux import Q_

        m = f"{self.__class__.__name__}(\n"
        for k, v in self.kwargs.items():
            if isinstance(v, str | Q_):
                m = f"{m}    {k} = '{v}',\n"
            elif isinstance(v, list | tuple | np.ndarray):
                m = f"{m}    {k} = {np.asarray(v)[:3]}...,\n"
            elif callable(v) and hasattr(v, "__name__"):
                m = f"{m}    {k} = {v.__name__},\n"
            else:
                m = f"{m}    {k} = {v},\n"

        return f"{m})"

    def info(self) -> None:
        """Print name, class and keyword values."""
        print(f"{self.name} ({self.__class__.__name__})")
        for k in self.defaults:
            if k != "name":
                print(f"  {k} = {getattr(self, k)}")

    def ensure_q(self, arg):
        """Return arg as a pint Quantity.

        Strings like "70 yr" are parsed, Quantities are passed
        through. Bare numbers have no unit and raise InputError.

        Examples
        --------
        >>> self.ensure_q("70 yr")
        <Quantity(70, 'year')>
        """
        from cfcflux import Q_

        if isinstance(arg, Q_):
            return arg
        if isinstance(arg, str) and arg.strip():
            try:
                return Q_(arg)
            except Exception as err:
                raise InputError(f"Cannot read '{arg}' as a quantity: {err}") from err

        raise InputError(
            f"{arg!r} is not a quantity, use a string with units, e.g., '{arg} yr'"
        )
