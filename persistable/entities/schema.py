##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
Schema descriptors for entity classes.

Every [`Entity`][entities.entity.Entity] subclass gets an `EntitySchema` when the
class is created. The schema lists the fields the entity persists (with their
storage names and roles) and holds the setter registration table that
[`Entity.assemble`][entities.entity.Entity.assemble] uses to bind incoming
storage columns to fields.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type

from persistable.entities.naming import setter_key, to_field_case, to_storage_case


LOG = logging.getLogger(__name__)

Setter = Callable[[Any, Any], None]

# Class attributes that configure an entity rather than hold its data
RESERVED_ATTRIBUTES = frozenset(("table", "query", "primary_key", "columns", "relations", "backend"))


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Description of one persisted field.

    Attributes:
        name: The in-memory attribute name (field case).
        storage_name: The column name in the store (storage case).
        is_primary_key: Whether the field is part of the primary key.
        is_relation: Whether the field holds nested entities.
    """

    name: str
    storage_name: str
    is_primary_key: bool = False
    is_relation: bool = False


@dataclass
class EntitySchema:
    """
    The fields of an entity class and the setters bound to them.

    Attributes:
        fields: Field descriptors in declaration order.
        setters: Setter registration table keyed by
            [`setter_key`][entities.naming.setter_key].

    Methods:
        from_entity_class:
            (classmethod) Build the schema of an entity class.

        get_setter:
            Look up the setter bound to a storage column.

        get_field:
            Look up a field descriptor by storage name.
    """

    fields: List[FieldDescriptor] = field(default_factory=list)
    setters: Dict[str, Setter] = field(default_factory=dict)

    @staticmethod
    def _collect_annotated_fields(entity_class: Type) -> List[str]:
        """
        Gather the annotated data attributes of an entity class, base classes first.

        Args:
            entity_class: The entity class to inspect.

        Returns:
            The attribute names in declaration order.
        """
        names = []
        for klass in reversed(entity_class.__mro__):
            for name, annotation in inspect.get_annotations(klass).items():
                if name.startswith("_") or name in RESERVED_ATTRIBUTES:
                    continue
                if "ClassVar" in str(annotation):
                    continue
                names.append(name)
        return names

    @staticmethod
    def _make_setter(entity_class: Type, name: str) -> Setter:
        """
        Build the setter for a field.

        An explicit `set_<storage_name>` method on the class wins; otherwise
        the value is assigned to the attribute directly.

        Args:
            entity_class: The entity class that owns the field.
            name: The field name.

        Returns:
            A callable taking `(entity, value)`.
        """
        method = getattr(entity_class, f"set_{to_storage_case(name)}", None)
        if callable(method):
            return method

        def _set(entity: Any, value: Any):
            setattr(entity, name, value)

        _set.__name__ = f"set_{to_storage_case(name)}"
        return _set

    @classmethod
    def from_entity_class(cls, entity_class: Type) -> "EntitySchema":
        """
        Build the schema of an entity class from its declarations.

        Fields come from the primary key, the declared columns, the annotated
        attributes and the relations, in that order. Two names that map to the
        same storage column are treated as one field.

        Args:
            entity_class: The entity class to describe.

        Returns:
            The schema for `entity_class`.
        """
        primary_key = set(entity_class.primary_key)
        relations = set(entity_class.relations or ())
        declared = (
            list(entity_class.primary_key)
            + list(entity_class.columns or ())
            + cls._collect_annotated_fields(entity_class)
            + list(entity_class.relations or ())
        )

        schema = cls()
        seen = set()
        for name in declared:
            storage_name = to_storage_case(name)
            if storage_name in seen:
                continue
            seen.add(storage_name)

            schema.fields.append(
                FieldDescriptor(
                    name=name,
                    storage_name=storage_name,
                    is_primary_key=name in primary_key,
                    is_relation=name in relations,
                )
            )
            schema.setters[setter_key(name)] = cls._make_setter(entity_class, name)

        LOG.debug(f"Registered {len(schema.fields)} fields for {entity_class.__name__}.")
        return schema

    def get_setter(self, storage_name: str) -> Optional[Setter]:
        """
        Look up the setter bound to a storage column.

        Args:
            storage_name: The storage-case column name.

        Returns:
            The setter, or None if no field maps to the column.
        """
        return self.setters.get(to_field_case(storage_name))

    def get_field(self, storage_name: str) -> Optional[FieldDescriptor]:
        """
        Look up a field descriptor by its storage name.

        Args:
            storage_name: The storage-case column name.

        Returns:
            The descriptor, or None if the column is not part of the schema.
        """
        for descriptor in self.fields:
            if descriptor.storage_name == storage_name:
                return descriptor
        return None
