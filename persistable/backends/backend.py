##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
Abstract base class for the storage backends entities persist through.

This module defines `Backend`, the contract an [`Entity`][entities.entity.Entity]
relies on: reading one record with a parameterized query, and inserting,
updating and deleting rows of a table. Backends own connections, transactions
and retries; entities never manage any of those.

Usage:
    This base class is not meant to be instantiated directly. Instead, it should be
    subclassed by driver-specific implementations such as `SQLiteBackend`.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Sequence, Union


Parameters = Union[Sequence[Any], Mapping[str, Any]]


class Backend(ABC):
    """
    Abstract base class for a storage backend.

    Every operation is synchronous and blocks until the store responds.
    Failures must be raised as [`BackendQueryError`][exceptions.BackendQueryError].

    Attributes:
        backend_name (str): The name of the backend (e.g., "sqlite").

    Methods:
        get_name:
            Retrieve the name of the backend.

        get_version:
            Query the backend for the current version.

        get_record:
            Run a query expected to return a single row.

        insert:
            Insert one row into a table.

        update:
            Update the rows of a table matching a WHERE clause.

        delete:
            Delete the rows of a table matching a WHERE clause.
    """

    def __init__(self, backend_name: str):
        """
        Initialize the `Backend` instance.

        Args:
            backend_name: The name of the backend (e.g., "sqlite").
        """
        self.backend_name: str = backend_name

    def get_name(self) -> str:
        """
        Get the name of the backend.

        Returns:
            The name of the backend (e.g. sqlite).
        """
        return self.backend_name

    @abstractmethod
    def get_version(self) -> str:
        """
        Query the backend for the current version.

        Returns:
            A string representing the current version of the backend.
        """
        raise NotImplementedError("Subclasses of `Backend` must implement a `get_version` method.")

    @abstractmethod
    def get_record(self, query: str, parameters: Parameters) -> Dict[str, Any]:
        """
        Run a parameterized query expected to return a single row.

        Args:
            query: The query to run.
            parameters: Positional or named values bound to the query.

        Returns:
            The row as a mapping of column names to values, or an empty
                dictionary if no row matched.
        """
        raise NotImplementedError("Subclasses of `Backend` must implement a `get_record` method.")

    @abstractmethod
    def insert(self, table: str, fields: Dict[str, Any]) -> int:
        """
        Insert one row into a table.

        Args:
            table: The table to insert into.
            fields: A mapping of column names to scalar values.

        Returns:
            The identity generated for the row, or 0 if there is none.
        """
        raise NotImplementedError("Subclasses of `Backend` must implement an `insert` method.")

    @abstractmethod
    def update(self, table: str, fields: Dict[str, Any], where: str, where_values: Sequence[Any]) -> int:
        """
        Update the rows of a table that match a WHERE clause.

        Args:
            table: The table to update.
            fields: A mapping of column names to the new scalar values.
            where: A clause using `?` placeholders (e.g. `id = ?`).
            where_values: The values bound to the placeholders, in order.

        Returns:
            The number of affected rows.
        """
        raise NotImplementedError("Subclasses of `Backend` must implement an `update` method.")

    @abstractmethod
    def delete(self, table: str, where: str, where_values: Sequence[Any]) -> int:
        """
        Delete the rows of a table that match a WHERE clause.

        Args:
            table: The table to delete from.
            where: A clause using `?` placeholders (e.g. `id = ?`).
            where_values: The values bound to the placeholders, in order.

        Returns:
            The number of deleted rows.
        """
        raise NotImplementedError("Subclasses of `Backend` must implement a `delete` method.")
