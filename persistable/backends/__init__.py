##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
The `backends` package contains the storage drivers entities persist through.

Modules:
    backend.py: The abstract `Backend` contract every driver implements.
    backend_factory.py: Selects and instantiates backends by name.

Subpackages:
    sqlite: A `Backend` implementation built on the standard `sqlite3` driver.
"""
