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

     Idealized Southern Ocean climate scenarios. Time t is given in years
     since EPOCH, i.e., the calendar year is t + 1950.
"""

from __future__ import annotations

import enum
import math

EPOCH: float = 1950.0

BASE_TEMPERATURE: float = 0.0  # degC
WARMING_RATE: float = 0.03  # degC/yr
BASE_ICE: float = 0.5
MELT_RATE: float = 0.004  # 1/yr


class ScenarioError(Exception):
    """Raised for unknown scenario names."""

    def __init__(self, message):
        message = f"\n\n{message}\n"
        super().__init__(message)


class Scenario(enum.Enum):
    """Climate scenarios.

    Every member declares its label and whether the warming and the
    melt forcing are active. The forcing functions only query these
    two axes, so a new member has to state both.
    """

    CONTROL = ("control", False, False)
    WARMING = ("warming", True, False)
    MELT = ("melt", False, True)
    WARMING_MELT = ("warming_melt", True, True)

    def __init__(self, label: str, warming: bool, melt: bool) -> None:
        self.label = label
        self.warming = warming
        self.melt = melt

    def __str__(self) -> str:
        return self.label

    @classmethod
    def from_name(cls, scenario: Scenario | str) -> Scenario:
        """Return the member for a label like "warming_melt".

        Raises
        ------
        ScenarioError
            if the label is unknown
        """
        if isinstance(scenario, cls):
            return scenario
        if isinstance(scenario, str):
            for s in cls:
                if s.label == scenario.strip().lower():
                    return s

        raise ScenarioError(
            f"Unknown scenario {scenario!r}, use one of {[s.label for s in cls]}"
        )


def _seasonal(t: float, amplitude: float) -> float:
    return amplitude * math.sin(2.0 * math.pi * (t % 1.0))


def southern_ocean_temperature(
    t: float, scenario: Scenario | str, seasonal_amplitude: float = 0.0
) -> float:
    """Southern Ocean surface temperature in degC.

    0 degC baseline. Warming scenarios add 0.03 degC/yr since 1950.
    The seasonal cycle is off unless seasonal_amplitude is given.
    """
    scenario = Scenario.from_name(scenario)
    temperature = BASE_TEMPERATURE + _seasonal(t, seasonal_amplitude)
    if scenario.warming:
        temperature += WARMING_RATE * (t + EPOCH - 1950.0)

    return temperature


def sea_ice_fraction(
    t: float, scenario: Scenario | str, seasonal_amplitude: float = 0.0
) -> float:
    """Southern Ocean sea-ice fraction.

    Starts at 0.5; melt scenarios lose 0.004/yr since 1950. The result
    is clamped to [0, 1].
    """
    scenario = Scenario.from_name(scenario)
    ice = BASE_ICE + _seasonal(t, seasonal_amplitude)
    if scenario.melt:
        ice -= MELT_RATE * (t + EPOCH - 1950.0)

    return min(max(ice, 0.0), 1.0)


def anthropogenic_source(t: float) -> float:
    """Anthropogenic CFC source in ppt/yr.

    - before 1995: 10 (1 - exp(-0.1 (year - 1950)))
    - 1995 to 2010: 15 exp(-0.1 (year - 1995))
    - from 2010 on: 0

    Each phase is continuous. At 1995 and 2010 the source switches to
    the next phase, and takes the value of the new phase at the switch.
    """
    year = t + EPOCH
    if year < 1995.0:
        return 10.0 * (1.0 - math.exp(-0.1 * (year - 1950.0)))
    elif year < 2010.0:
        return 15.0 * math.exp(-0.1 * (year - 1995.0))
    else:
        return 0.0
