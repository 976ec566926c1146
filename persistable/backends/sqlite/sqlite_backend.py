##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
SQLite backend implementation for Persistable.

This module defines the `SQLiteBackend` class, a concrete implementation of the
[`Backend`][backends.backend.Backend] contract using SQLite as the underlying
storage system. Each operation opens its own connection, runs one
parameterized statement and closes the connection again.
"""

import logging
import sqlite3
from typing import Any, Dict, Mapping, NamedTuple, Optional, Sequence, Union

from persistable.backends.backend import Backend
from persistable.backends.sqlite.sqlite_connection import SQLiteConnection
from persistable.exceptions import BackendQueryError


LOG = logging.getLogger(__name__)


class StatementResult(NamedTuple):
    """The outcome of a single statement, captured before its connection closes."""

    lastrowid: Optional[int]
    rowcount: int
    row: Optional[sqlite3.Row]


class SQLiteBackend(Backend):
    """
    A SQLite-based implementation of the `Backend` contract.

    Any `sqlite3.Error` raised while running a statement is re-raised as a
    [`BackendQueryError`][exceptions.BackendQueryError].

    Attributes:
        backend_name (str): The name of the backend ("sqlite").
        db_path (str): The path to the database file, or `:memory:`.

    Methods:
        get_version:
            Query SQLite for the current version.

        get_connection_string:
            Retrieve the database path used to connect to SQLite.

        execute_script:
            Run a script of SQL statements, typically DDL.

        get_record:
            Run a query expected to return a single row.

        insert:
            Insert one row into a table.

        update:
            Update the rows of a table matching a WHERE clause.

        delete:
            Delete the rows of a table matching a WHERE clause.
    """

    def __init__(self, db_path: str = None):
        """
        Initialize the `SQLiteBackend` instance.

        Every operation opens a new connection, so a `:memory:` database
        only lives for the duration of a single statement.

        Args:
            db_path: The path to the database file. When omitted the
                connection string is read from the configuration.
        """
        super().__init__("sqlite")
        if db_path is None:
            from persistable.config.backend_config import get_connection_string  # pylint: disable=import-outside-toplevel

            db_path = get_connection_string()
        self.db_path: str = db_path

    def _execute(self, statement: str, parameters: Union[Sequence[Any], Mapping[str, Any]] = ()) -> StatementResult:
        """
        Run one statement on a fresh connection.

        Only the first row of a result set is kept.

        Args:
            statement: The SQL statement to run.
            parameters: The values bound to the statement's placeholders.

        Returns:
            The statement's `lastrowid`, `rowcount` and first row (or None).

        Raises:
            (exceptions.BackendQueryError): If SQLite fails to run the statement.
        """
        LOG.debug(f"SQLite query: {statement}")
        LOG.debug(f"SQLite params: {parameters}")
        try:
            with SQLiteConnection(self.db_path) as conn:
                cursor = conn.execute(statement, parameters)
                row = cursor.fetchone()
                return StatementResult(cursor.lastrowid, cursor.rowcount, row)
        except sqlite3.Error as exc:
            raise BackendQueryError(f"SQLite failed to run '{statement}': {exc}") from exc

    def get_version(self) -> str:
        """
        Query SQLite for the current version.

        Returns:
            The SQLite version string.
        """
        return self._execute("SELECT sqlite_version()").row[0]

    def get_connection_string(self) -> str:
        """
        Get the database path used to connect to SQLite.

        Returns:
            The database path.
        """
        return self.db_path

    def execute_script(self, script: str):
        """
        Run a script of SQL statements, such as the `CREATE TABLE` statements
        for the entities a caller persists.

        Args:
            script: One or more SQL statements separated by semicolons.

        Raises:
            (exceptions.BackendQueryError): If SQLite fails to run the script.
        """
        try:
            with SQLiteConnection(self.db_path) as conn:
                conn.executescript(script)
        except sqlite3.Error as exc:
            raise BackendQueryError(f"SQLite failed to run script: {exc}") from exc

    def get_record(self, query: str, parameters: Union[Sequence[Any], Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Run a query expected to return a single row.

        Args:
            query: The SELECT statement to run.
            parameters: Positional or named values bound to the query.

        Returns:
            The first row as a dictionary, or an empty dictionary if no row matched.
        """
        row = self._execute(query, parameters).row
        if row is None:
            LOG.debug("SQLite query returned no rows.")
            return {}
        return dict(row)

    def insert(self, table: str, fields: Dict[str, Any]) -> int:
        """
        Insert one row into a table.

        Args:
            table: The table to insert into.
            fields: A mapping of column names to scalar values.

        Returns:
            The rowid of the inserted row.
        """
        if fields:
            columns_str = ", ".join(fields)
            placeholders_str = ", ".join("?" for _ in fields)
            statement = f"INSERT INTO {table} ({columns_str}) VALUES ({placeholders_str})"
        else:
            statement = f"INSERT INTO {table} DEFAULT VALUES"

        result = self._execute(statement, list(fields.values()))
        LOG.debug(f"Successfully inserted a row into {table} with rowid '{result.lastrowid}'.")
        return result.lastrowid or 0

    def update(self, table: str, fields: Dict[str, Any], where: str, where_values: Sequence[Any]) -> int:
        """
        Update the rows of a table that match a WHERE clause.

        Args:
            table: The table to update.
            fields: A mapping of column names to the new scalar values.
            where: A clause using `?` placeholders.
            where_values: The values bound to the placeholders, in order.

        Returns:
            The number of affected rows.
        """
        if not fields:
            LOG.warning(f"Nothing to update in {table} where {where}: no columns were given.")
            return 0

        set_str = ", ".join(f"{column} = ?" for column in fields)
        result = self._execute(
            f"UPDATE {table} SET {set_str} WHERE {where}",
            list(fields.values()) + list(where_values),
        )
        LOG.debug(f"Updated {result.rowcount} row(s) in {table}.")
        return result.rowcount

    def delete(self, table: str, where: str, where_values: Sequence[Any]) -> int:
        """
        Delete the rows of a table that match a WHERE clause.

        Args:
            table: The table to delete from.
            where: A clause using `?` placeholders.
            where_values: The values bound to the placeholders, in order.

        Returns:
            The number of deleted rows.
        """
        result = self._execute(f"DELETE FROM {table} WHERE {where}", list(where_values))

        if result.rowcount == 0:
            LOG.warning(f"No rows were deleted from {table} where {where} {list(where_values)}")
        else:
            LOG.info(f"Successfully deleted {result.rowcount} row(s) from {table}.")
        return result.rowcount
