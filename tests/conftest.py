##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
This module contains pytest fixtures to be used throughout the entire test suite.
"""
import os
from glob import glob

import pytest

from tests.fixture_types import FixtureStr


# pylint: disable=redefined-outer-name


#######################################
# Loading in Module Specific Fixtures #
#######################################

TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
fixture_glob = os.path.join(TESTS_DIR, "fixtures", "**", "*.py")
pytest_plugins = [
    "tests." + os.path.relpath(fixture_file, TESTS_DIR).replace(os.sep, ".")[: -len(".py")]
    for fixture_file in glob(fixture_glob, recursive=True)
    if not fixture_file.endswith("__init__.py")
]


#######################################
######### Fixture Definitions #########
#######################################


@pytest.fixture
def db_path(tmp_path) -> FixtureStr:
    """
    Path to a SQLite database file that only lives for the current test.

    Args:
        tmp_path: The built-in temporary path fixture.

    Returns:
        The database path as a string.
    """
    return str(tmp_path / "persistable.db")
