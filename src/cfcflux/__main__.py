"""Run the scenario models from the command line, see cli_parser."""

import sys

from cfcflux.cli_parser import main

if __name__ == "__main__":
    sys.exit(main())
