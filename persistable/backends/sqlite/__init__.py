##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
The `sqlite` package implements the [`Backend`][backends.backend.Backend] contract
on top of the standard `sqlite3` driver.

Modules:
    sqlite_connection.py: Context manager that opens and configures connections.
    sqlite_backend.py: The `SQLiteBackend` class.
"""
