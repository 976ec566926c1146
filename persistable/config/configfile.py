##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
This module locates and loads the Persistable configuration file (`app.yaml`).

A configuration looks like:

    backend:
      name: sqlite
      path: persistable.db

Sections that are left out are filled in from `get_default_config()`.
"""

import logging
import os
from typing import Dict, Optional

from persistable.exceptions import ConfigurationError
from persistable.utils import load_yaml


LOG = logging.getLogger(__name__)

APP_FILENAME: str = "app.yaml"
# Overridden by the PERSISTABLE_HOME environment variable
PERSISTABLE_HOME: str = os.environ.get("PERSISTABLE_HOME", os.path.join(os.path.expanduser("~"), ".persistable"))
# Holds the path of an app.yaml that lives outside PERSISTABLE_HOME
CONFIG_PATH_FILE: str = os.path.join(PERSISTABLE_HOME, "config_path.txt")


def load_config(filepath: str) -> Optional[Dict]:
    """
    Reads a Persistable YAML configuration file and returns its contents as a dictionary.

    Args:
        filepath: The path to the YAML configuration file.

    Returns:
        A dictionary containing the contents of the YAML file or None if file doesn't exist.
    """
    if not os.path.isfile(filepath):
        LOG.info(f"No app config file at {filepath}")
        return None
    LOG.info(f"Reading app config from file {filepath}")
    return load_yaml(filepath) or {}


def find_config_file(path: str = None) -> Optional[str]:
    """
    Locate the application configuration file (`app.yaml`).

    If no directory is provided, the lookup order is:
      1. `app.yaml` in the current working directory.
      2. The file recorded in `CONFIG_PATH_FILE`, if it exists.
      3. `app.yaml` in the `PERSISTABLE_HOME` directory.

    Args:
        path: A specific directory to look for `app.yaml`.

    Returns:
        The full path to the `app.yaml` file if found, otherwise `None`.
    """
    if path is not None:
        app_path = os.path.join(path, APP_FILENAME)
        return app_path if os.path.exists(app_path) else None

    local_app = os.path.join(os.getcwd(), APP_FILENAME)
    if os.path.isfile(local_app):
        return local_app

    if os.path.isfile(CONFIG_PATH_FILE):
        with open(CONFIG_PATH_FILE, "r") as f:
            config_path = f.read().strip()
        if os.path.isfile(config_path):
            return config_path

    path_app = os.path.join(PERSISTABLE_HOME, APP_FILENAME)
    if os.path.isfile(path_app):
        return path_app

    return None


def get_default_config() -> Dict:
    """
    Creates a minimal default configuration.

    Returns:
        A configuration dictionary with essential default values.
    """
    return {
        "backend": {
            "name": "sqlite",
            "path": "persistable.db",
        },
    }


def load_defaults(config: Dict):
    """
    Fill in every setting missing from `config` with its default value.

    Args:
        config: The configuration to complete. Modified in place.
    """
    for section, defaults in get_default_config().items():
        current = config.setdefault(section, {})
        if current is None:
            current = config[section] = {}
        for key, value in defaults.items():
            current.setdefault(key, value)


def get_config(path: Optional[str] = None, use_defaults: bool = False) -> Dict:
    """
    Loads the configuration file and returns its contents with defaults applied.

    Args:
        path: The directory to search for the configuration file. If `None`,
            default search paths are used.
        use_defaults: If True, fall back to the default configuration when
            no file can be found.

    Returns:
        A dictionary containing all the configuration data.

    Raises:
        (exceptions.ConfigurationError): If no configuration file can be found
            and `use_defaults` is False.
    """
    filepath = find_config_file(path)
    if filepath is None:
        if not use_defaults:
            raise ConfigurationError(
                f"Cannot find a Persistable config file! Create '{os.path.join(PERSISTABLE_HOME, APP_FILENAME)}'."
            )
        LOG.info("Using default configuration")
        config = {}
    else:
        config = load_config(filepath)

    load_defaults(config)
    return config
