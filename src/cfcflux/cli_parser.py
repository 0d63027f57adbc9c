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

CLI entry point for the scenario models.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .experiments import Scenario
from .species_definitions import Compound
from .version import get_version


def cli_parser(argv: list[str] | None = None) -> argparse.Namespace:
    """
    CLI parser for the CFC uptake scenarios.

    Basic usage looks like this:

        python -m cfcflux --model coupled

    which runs all four scenarios with the coupled ocean/atmosphere
    model over 1950 to 2020 and writes the sampled results as CSV to
    stdout. Useful options:

    --scenario, -s  :  run only this scenario, can be repeated
    --atmosphere    :  CSV file with the atmospheric history, required
                       by the forced model. Header like "Time [yr], CFC11 [ppt]"
    --depth         :  depth of the surface layer, e.g., "5 m"
    --output, -o    :  write the results to this file instead of stdout
    """
    parser = argparse.ArgumentParser(
        prog="cfcflux",
        description="CFC uptake of the Southern Ocean surface layer",
    )
    parser.add_argument("-m", "--model", choices=["forced", "coupled"], default="coupled")
    parser.add_argument(
        "-s",
        "--scenario",
        action="append",
        choices=[s.label for s in Scenario],
        help="scenario to run, defaults to all",
    )
    parser.add_argument("--start", default="0 yr", help="years since 1950")
    parser.add_argument("--stop", default="70 yr", help="years since 1950")
    parser.add_argument(
        "-c", "--compound", choices=[c.value for c in Compound], default="CFC-11"
    )
    parser.add_argument("--salinity", default="34 g/kg")
    parser.add_argument("--wind-speed", default="10 m/s")
    parser.add_argument("--pressure", default="1 atm")
    parser.add_argument("--depth", default="5 m", help="surface layer depth")
    parser.add_argument("--atmosphere", default=None, help="CSV atmospheric history")
    parser.add_argument("-n", "--samples", type=int, default=71)
    parser.add_argument("-o", "--output", default=None)
    parser.add_argument("--log-file", default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")

    args = parser.parse_args(argv)

    if args.model == "forced" and args.atmosphere is None:
        parser.error("the forced model requires --atmosphere")
    if args.samples < 2:
        parser.error("--samples must be at least 2")
    if args.scenario is None:
        args.scenario = [s.label for s in Scenario]

    return args


def main(argv: list[str] | None = None) -> int:
    """Run the scenarios selected on the command line."""
    from .extended_classes import AtmosphericHistory
    from .model import run_scenarios
    from .post_processing import sample_trajectories

    args = cli_parser(argv)

    if args.verbose and args.log_file is None:
        logging.basicConfig(level=logging.INFO)

    kwargs = dict(
        model_type=args.model,
        start=args.start,
        stop=args.stop,
        compound=args.compound,
        salinity=args.salinity,
        wind_speed=args.wind_speed,
        pressure=args.pressure,
        mixed_layer_depth=args.depth,
    )
    if args.log_file is not None:
        kwargs["log_file"] = args.log_file
    if args.atmosphere is not None and args.model == "forced":
        kwargs["atmosphere"] = AtmosphericHistory(
            name="atmosphere", filename=args.atmosphere
        )

    trajectories = run_scenarios(args.scenario, **kwargs)
    df = sample_trajectories(trajectories, samples=args.samples)

    if args.output is None:
        df.to_csv(sys.stdout)
    else:
        df.to_csv(args.output)
        logging.info(f"results written to {args.output}")

    return 0
