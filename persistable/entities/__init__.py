##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
The `entities` package contains the `Entity` base class along with the naming
helpers and schema descriptors it is built on.

Modules:
    entity.py: Defines the `Entity` base class that maps records onto table rows.
    naming.py: Case conversion, value filters and composite-key clause assembly.
    schema.py: Per-class field descriptors and the setter registration table.
"""

from persistable.entities.entity import Entity
from persistable.entities.schema import EntitySchema, FieldDescriptor


__all__ = ["Entity", "EntitySchema", "FieldDescriptor"]
