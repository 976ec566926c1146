##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
Tests for the `backend_config.py` module.
"""

import os

import pytest
from pytest_mock import MockerFixture

from persistable.backends.sqlite.sqlite_backend import SQLiteBackend
from persistable.config import backend_config
from persistable.config.backend_config import create_backend, get_backend_name, get_connection_string
from persistable.exceptions import BackendNotSupportedError


@pytest.mark.parametrize(
    "path, expected",
    [
        (":memory:", ":memory:"),
        ("/var/lib/app.db", "/var/lib/app.db"),
        ("~/data/app.db", os.path.join(os.path.expanduser("~"), "data", "app.db")),
    ],
)
def test_get_connection_string(path: str, expected: str):
    """
    Test that absolute, home-relative and in-memory paths are resolved.

    Args:
        path: The configured path.
        expected: The expected connection string.
    """
    assert get_connection_string({"backend": {"name": "sqlite", "path": path}}) == expected


def test_relative_path_resolves_against_home(mocker: MockerFixture):
    """
    Test that relative paths live in the Persistable home directory.

    Args:
        mocker: PyTest mocker fixture.
    """
    mocker.patch.object(backend_config, "PERSISTABLE_HOME", "/home/user/.persistable")

    assert get_connection_string({"backend": {"path": "app.db"}}) == os.path.join("/home/user/.persistable", "app.db")


def test_defaults_are_loaded_when_no_config_given(mocker: MockerFixture):
    """
    Test that the configuration is loaded with defaults when none is passed.

    Args:
        mocker: PyTest mocker fixture.
    """
    mock_get_config = mocker.patch.object(
        backend_config, "get_config", return_value={"backend": {"name": "SQLite", "path": ":memory:"}}
    )

    assert get_backend_name() == "sqlite"
    assert get_connection_string() == ":memory:"
    mock_get_config.assert_called_with(use_defaults=True)


def test_create_backend(db_path: str):
    """
    Test that the configured backend is created with its connection string.

    Args:
        db_path: The path to a temporary database file.
    """
    backend = create_backend({"backend": {"name": "sqlite", "path": db_path}})

    assert isinstance(backend, SQLiteBackend)
    assert backend.get_connection_string() == db_path


def test_create_unsupported_backend():
    """
    Test that an unknown backend name is rejected.
    """
    with pytest.raises(BackendNotSupportedError):
        create_backend({"backend": {"name": "oracle", "path": ":memory:"}})
