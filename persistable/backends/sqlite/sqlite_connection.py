##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
SQLite connection context manager for Persistable.

This module defines the `SQLiteConnection` class, which provides a safe and reusable way to
establish and manage SQLite connections using a context manager. It ensures proper configuration
(e.g., enabling WAL mode and foreign key support), handles compatibility with Python versions,
and guarantees cleanup by closing the connection on exit.
"""

import logging
import sqlite3
import sys
from pathlib import Path
from types import TracebackType
from typing import Type


LOG = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"


class SQLiteConnection:
    """
    Context manager for establishing and safely closing a SQLite database connection.

    Connections are created with:
    - Autocommit, since Persistable performs no transaction demarcation
    - WAL mode for file databases
    - Foreign key constraint enforcement
    - Dictionary-style row access via `sqlite3.Row`

    Attributes:
        db_path (str): The path to the database file, or `:memory:`.
        conn (sqlite3.Connection): The active SQLite connection used within the context.

    Methods:
        __enter__:
            Opens and configures the SQLite connection when entering the context.

        __exit__:
            Closes the SQLite connection when exiting the context, handling any exceptions.
    """

    def __init__(self, db_path: str):
        """
        Initialize the SQLiteConnection context manager.

        Args:
            db_path: The path to the database file, or `:memory:`.
        """
        self.db_path: str = db_path
        self.conn: sqlite3.Connection = None

    def __enter__(self) -> sqlite3.Connection:
        """
        Enters the runtime context related to this object and creates a sqlite connection.

        Returns:
            A sqlite connection.
        """
        in_memory = self.db_path == MEMORY_DATABASE
        if not in_memory:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        connection_kwargs = {"check_same_thread": False}
        if sys.version_info < (3, 12):  # Autocommit wasn't added until python 3.12
            connection_kwargs["isolation_level"] = None
        else:
            connection_kwargs["autocommit"] = True

        self.conn = sqlite3.connect(self.db_path, **connection_kwargs)

        if not in_memory:
            self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.execute("PRAGMA foreign_keys=ON")

        # This enables name-based access to columns
        self.conn.row_factory = sqlite3.Row

        return self.conn

    def __exit__(self, exc_type: Type[Exception], exc_value: Exception, traceback: TracebackType):
        """
        Exits the runtime context and performs cleanup.

        This method closes the connection if it's still open.

        Args:
            exc_type: The exception type raised, if any.
            exc_value: The exception instance raised, if any.
            traceback: The traceback object, if an exception was raised.
        """
        if self.conn:
            self.conn.close()
