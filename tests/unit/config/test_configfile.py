##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
Tests for the `configfile.py` module.
"""

import importlib
import os

import pytest
import yaml
from pytest_mock import MockerFixture

from persistable.config import configfile
from persistable.config.configfile import find_config_file, get_config, get_default_config, load_config, load_defaults
from persistable.exceptions import ConfigurationError
from tests.fixture_types import FixtureModification, FixtureStr


@pytest.fixture
def isolated_config_paths(mocker: MockerFixture, monkeypatch: pytest.MonkeyPatch, tmp_path) -> FixtureStr:
    """
    Point the config lookup at an empty temporary home directory and working directory.

    Args:
        mocker: PyTest mocker fixture.
        monkeypatch: The built-in monkeypatch fixture.
        tmp_path: The built-in temporary path fixture.

    Returns:
        The temporary home directory.
    """
    home = tmp_path / "home"
    cwd = tmp_path / "cwd"
    home.mkdir()
    cwd.mkdir()
    mocker.patch.object(configfile, "PERSISTABLE_HOME", str(home))
    mocker.patch.object(configfile, "CONFIG_PATH_FILE", str(home / "config_path.txt"))
    monkeypatch.chdir(cwd)
    return str(home)


@pytest.fixture
def app_yaml(tmp_path) -> FixtureStr:
    """
    Write an `app.yaml` file in its own directory.

    Args:
        tmp_path: The built-in temporary path fixture.

    Returns:
        The directory holding the `app.yaml` file.
    """
    config_dir = tmp_path / "config_dir"
    config_dir.mkdir()
    with open(config_dir / "app.yaml", "w") as app_file:
        yaml.dump({"backend": {"path": "custom.db"}}, app_file)
    return str(config_dir)


def test_load_config_missing_file(tmp_path):
    """
    Test that loading a file that does not exist returns None.

    Args:
        tmp_path: The built-in temporary path fixture.
    """
    assert load_config(str(tmp_path / "nope.yaml")) is None


def test_load_config_empty_file(tmp_path):
    """
    Test that an empty YAML file loads as an empty dictionary.

    Args:
        tmp_path: The built-in temporary path fixture.
    """
    empty = tmp_path / "app.yaml"
    empty.write_text("")

    assert load_config(str(empty)) == {}


def test_find_config_file_in_given_directory(app_yaml: FixtureStr, tmp_path):
    """
    Test that an explicit directory is the only place searched.

    Args:
        app_yaml: The directory holding an `app.yaml` file.
        tmp_path: The built-in temporary path fixture.
    """
    assert find_config_file(app_yaml) == os.path.join(app_yaml, "app.yaml")
    assert find_config_file(str(tmp_path)) is None


def test_find_config_file_search_order(isolated_config_paths: FixtureStr, app_yaml: FixtureStr):
    """
    Test that the working directory wins over the recorded path, which wins over the home directory.

    Args:
        isolated_config_paths: The temporary home directory.
        app_yaml: The directory holding an `app.yaml` file.
    """
    home_app = os.path.join(isolated_config_paths, "app.yaml")
    assert find_config_file() is None

    with open(home_app, "w") as app_file:
        app_file.write("backend: {}\n")
    assert find_config_file() == home_app

    recorded = os.path.join(app_yaml, "app.yaml")
    with open(os.path.join(isolated_config_paths, "config_path.txt"), "w") as path_file:
        path_file.write(recorded + "\n")
    assert find_config_file() == recorded

    local_app = os.path.join(os.getcwd(), "app.yaml")
    with open(local_app, "w") as app_file:
        app_file.write("backend: {}\n")
    assert find_config_file() == local_app


def test_load_defaults_fills_missing_values():
    """
    Test that defaults never override configured values.
    """
    config = {"backend": {"path": "custom.db"}}

    load_defaults(config)

    assert config == {"backend": {"name": "sqlite", "path": "custom.db"}}


def test_load_defaults_handles_empty_section():
    """
    Test that a section left empty in YAML (None) is replaced by its defaults.
    """
    config = {"backend": None}

    load_defaults(config)

    assert config == get_default_config()


def test_get_config_from_file(app_yaml: FixtureStr):
    """
    Test that the configuration file is read and completed with defaults.

    Args:
        app_yaml: The directory holding an `app.yaml` file.
    """
    assert get_config(app_yaml) == {"backend": {"name": "sqlite", "path": "custom.db"}}


def test_get_config_without_file(isolated_config_paths: FixtureModification):
    """
    Test that a missing configuration raises unless defaults are allowed.

    Args:
        isolated_config_paths: Points the lookup at empty directories.
    """
    with pytest.raises(ConfigurationError, match="Cannot find a Persistable config file"):
        get_config()

    assert get_config(use_defaults=True) == get_default_config()


def test_persistable_home_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """
    Test that the `PERSISTABLE_HOME` environment variable moves the config home.

    Args:
        monkeypatch: The built-in monkeypatch fixture.
        tmp_path: The built-in temporary path fixture.
    """
    monkeypatch.setenv("PERSISTABLE_HOME", str(tmp_path))
    try:
        importlib.reload(configfile)
        assert configfile.PERSISTABLE_HOME == str(tmp_path)
        assert configfile.CONFIG_PATH_FILE == os.path.join(str(tmp_path), "config_path.txt")
    finally:
        monkeypatch.delenv("PERSISTABLE_HOME")
        importlib.reload(configfile)
