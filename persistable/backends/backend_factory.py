##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
Selection of the storage backend named in the configuration.

`backend_factory` maps the `backend.name` value of `app.yaml` to a
[`Backend`][backends.backend.Backend] class and builds it with the
connection settings from the same section.
"""

import logging
from typing import Dict, List, Type

from persistable.backends.backend import Backend
from persistable.backends.sqlite.sqlite_backend import SQLiteBackend
from persistable.exceptions import BackendNotSupportedError


LOG = logging.getLogger(__name__)


class BackendFactory:
    """
    Registry of the backends entities can be persisted with.

    Attributes:
        _backends (Dict[str, Type[Backend]]): Maps lowercase backend names to backend classes.

    Methods:
        register:
            Make a `Backend` subclass available under one or more names.

        list_available:
            List the registered backend names.

        create:
            Instantiate the backend registered under a name.
    """

    def __init__(self):
        self._backends: Dict[str, Type[Backend]] = {}
        self.register("sqlite", SQLiteBackend, aliases=["sqlite3"])

    def register(self, name: str, backend_class: Type[Backend], aliases: List[str] = None):
        """
        Make a backend class available under `name` and its aliases.

        Args:
            name: The name used in the `backend.name` configuration value.
            backend_class: A subclass of `Backend`.
            aliases: Other names resolving to the same class.

        Raises:
            TypeError: If `backend_class` does not subclass `Backend`.
        """
        if not isinstance(backend_class, type) or not issubclass(backend_class, Backend):
            raise TypeError(f"{backend_class} must inherit from Backend")

        for backend_name in [name] + list(aliases or []):
            self._backends[backend_name.lower()] = backend_class
        LOG.debug(f"Registered backend '{name}' ({backend_class.__name__}).")

    def list_available(self) -> List[str]:
        """Get the registered backend names, aliases included."""
        return sorted(self._backends)

    def create(self, name: str, config: Dict = None) -> Backend:
        """
        Instantiate the backend registered under `name`.

        Args:
            name: The backend name or alias, case-insensitive.
            config: Keyword arguments passed to the backend constructor.

        Returns:
            The backend instance.

        Raises:
            (exceptions.BackendNotSupportedError): If no backend is registered under `name`.
        """
        backend_class = self._backends.get(name.lower())
        if backend_class is None:
            raise BackendNotSupportedError(
                f"Backend '{name}' is not supported. Available backends: {', '.join(self.list_available())}"
            )
        return backend_class(**(config or {}))


backend_factory = BackendFactory()
