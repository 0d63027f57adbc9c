"""Installed version of cfcflux.

Kept out of __init__ so that the command line parser can report the
version without importing the model code.
"""
from importlib import metadata


def get_version() -> str:
    """Return the installed version, "0+unknown" in a bare source tree."""
    try:
        return metadata.version("cfcflux")
    except metadata.PackageNotFoundError:
        return "0+unknown"
