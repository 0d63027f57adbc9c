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


from .initialize_unit_registry import Q_ as Q_, ureg as ureg
from .version import get_version as get_version
from .units import (
    Concentration as Concentration,
    MixingRatio as MixingRatio,
    Pressure as Pressure,
    Salinity as Salinity,
    Temperature as Temperature,
    UnitMismatchError as UnitMismatchError,
    WindSpeed as WindSpeed,
    check_for_quantity as check_for_quantity,
)
from .species_definitions import (
    CoefficientTableError as CoefficientTableError,
    Compound as Compound,
    UnsupportedCompoundError as UnsupportedCompoundError,
)
from .seawater import (
    calculate_solubility as calculate_solubility,
    gasatmconc as gasatmconc,
    gassat as gassat,
    piston_velocity as piston_velocity,
    schmidt_number as schmidt_number,
)
from .processes import air_sea_gas_flux as air_sea_gas_flux
from .experiments import (
    EPOCH as EPOCH,
    Scenario as Scenario,
    ScenarioError as ScenarioError,
    anthropogenic_source as anthropogenic_source,
    sea_ice_fraction as sea_ice_fraction,
    southern_ocean_temperature as southern_ocean_temperature,
)
from .extended_classes import (
    AtmosphericHistory as AtmosphericHistory,
    ExternalData as ExternalData,
    ExternalDataError as ExternalDataError,
    ScenarioForcingData as ScenarioForcingData,
)
from .ode_backend import (
    NonNegativityGuard as NonNegativityGuard,
    ScenarioParams as ScenarioParams,
    SolverError as SolverError,
    Trajectory as Trajectory,
    cfc_coupled as cfc_coupled,
    cfc_ocean as cfc_ocean,
    make_scenario_params as make_scenario_params,
)
from .model import (
    ModelError as ModelError,
    ScenarioModel as ScenarioModel,
    run_scenario as run_scenario,
    run_scenarios as run_scenarios,
)
from .post_processing import (
    concentration_to_pmol_per_kg as concentration_to_pmol_per_kg,
    sample_trajectories as sample_trajectories,
)
from .cfcflux_base import (
    InputError as InputError,
    KeywordError as KeywordError,
    MissingKeywordError as MissingKeywordError,
    cfcBase as cfcBase,
)
import numpy as np
np.seterr(invalid="ignore")
