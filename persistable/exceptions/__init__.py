##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
Module of all Persistable-specific exception types.
"""

# Pylint complains that these exceptions are no different from Exception
# but we don't care, we just need new names for exceptions here
# pylint: disable=W0235

__all__ = (
    "PersistableError",
    "BackendQueryError",
    "MissingKeyError",
    "BackendNotSupportedError",
    "ConfigurationError",
)


class PersistableError(Exception):
    """
    Base class for every error raised by Persistable.
    """


class BackendQueryError(PersistableError):
    """
    Exception to signal that a backend failed to execute a query
    (malformed statement, constraint violation, lost connection).
    """


class MissingKeyError(PersistableError, KeyError):
    """
    Exception to signal that a primary-key field has no value in the
    payload computed for an update or delete.

    Attributes:
        field: The primary-key field that is missing.
        table: The table the entity persists to.
    """

    def __init__(self, field: str, table: str):
        self.field = field
        self.table = table
        super().__init__(f"Field {field} does not exist within {table}")

    def __str__(self) -> str:
        # KeyError would otherwise wrap the message in quotes
        return self.args[0]


class BackendNotSupportedError(PersistableError):
    """
    Exception to signal that the provided backend is not supported.
    """


class ConfigurationError(PersistableError):
    """
    Exception to signal that no usable configuration could be found.
    """
