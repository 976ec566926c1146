##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
Persistable: declarative entity persistence for relational stores.

This package maps in-memory records to table rows, translating field names,
tracking loaded state and generating insert/update/delete calls.
"""

import logging
import os


__version__ = "0.3.0"
VERSION = __version__
PATH_TO_PROJ = os.path.join(os.path.dirname(__file__), "")

logging.getLogger(__name__).addHandler(logging.NullHandler())
