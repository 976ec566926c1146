##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
This module turns the `backend` section of the configuration into the
connection details and instance of a [`Backend`][backends.backend.Backend].
"""

import logging
import os
from typing import Dict

from persistable.backends.backend import Backend
from persistable.backends.sqlite.sqlite_connection import MEMORY_DATABASE
from persistable.config.configfile import PERSISTABLE_HOME, get_config


LOG = logging.getLogger(__name__)


def get_backend_name(config: Dict = None) -> str:
    """
    Get the name of the configured backend.

    Args:
        config: The configuration to read. Loaded with defaults if omitted.

    Returns:
        The lowercase backend name.
    """
    if config is None:
        config = get_config(use_defaults=True)
    return str(config["backend"]["name"]).lower()


def get_connection_string(config: Dict = None) -> str:
    """
    Get the connection string (for SQLite, the database path) of the configured backend.

    Relative paths are resolved against `PERSISTABLE_HOME` and `~` is expanded.

    Args:
        config: The configuration to read. Loaded with defaults if omitted.

    Returns:
        The connection string.
    """
    if config is None:
        config = get_config(use_defaults=True)

    path = str(config["backend"]["path"])
    if path == MEMORY_DATABASE:
        return path

    path = os.path.expanduser(path)
    if not os.path.isabs(path):
        path = os.path.join(PERSISTABLE_HOME, path)
    return path


def create_backend(config: Dict = None) -> Backend:
    """
    Create the backend described by the configuration.

    Args:
        config: The configuration to read. Loaded with defaults if omitted.

    Returns:
        A [`Backend`][backends.backend.Backend] instance.

    Raises:
        (exceptions.BackendNotSupportedError): If the configured backend is unknown.
    """
    from persistable.backends.backend_factory import backend_factory  # pylint: disable=import-outside-toplevel

    if config is None:
        config = get_config(use_defaults=True)

    backend_name = get_backend_name(config)
    LOG.debug(f"Creating '{backend_name}' backend from configuration.")
    return backend_factory.create(backend_name, {"db_path": get_connection_string(config)})
