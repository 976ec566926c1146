##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
This module defines the `Entity` base class, which maps an in-memory record onto
a row of a relational store.

Concrete entities declare their table, primary key, known columns and relation
fields as class attributes and annotate their data fields. Everything else
(binding incoming records, serializing back to storage names, and routing saves
to inserts or updates) is handled here from that metadata, without any
per-type persistence code.
"""

import logging
from copy import copy
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Union

from persistable.backends.backend import Backend
from persistable.entities.naming import (
    build_key_clause,
    convert_to_array,
    filter_not_null,
    filter_valuable,
    is_numeric,
    to_field_case,
    to_storage_case,
)
from persistable.entities.schema import EntitySchema


LOG = logging.getLogger(__name__)


class Entity:
    """
    Base class for records persisted to a single table.

    Subclasses configure persistence with class attributes:

        class UserEntity(Entity):
            table = "users"
            query = "SELECT * FROM users WHERE id = ?"
            columns = ("id", "name", "email")

            name: Optional[str] = None
            email: Optional[str] = None

    Attributes:
        table (str): The table this entity persists to.
        query (str): The read template used by `load`, if any.
        primary_key (Sequence[str]): Field names composing the identity.
        columns (List[str]): Field names persisted as flat columns. Always
            contains the primary key. Inferred from the first assembled record
            when the class declares none.
        relations (Sequence[str]): Field names holding nested entities.
        backend (backends.backend.Backend): The backend used for persistence.
        id (int): The default identity field.

    Methods:
        load:
            Read a record with `query` and assemble it.

        assemble:
            Bind a storage record onto this entity.

        to_array:
            Serialize the entity into a storage-case dictionary.

        is_affected:
            Check whether any persisted field holds a value.

        is_loaded:
            Check whether the identity holds a numeric value.

        save:
            Insert or update this entity depending on its state.

        insert:
            Insert this entity and return the generated identity.

        update:
            Update the row identified by this entity's primary key.

        delete:
            Delete the row identified by this entity's primary key.
    """

    table: Optional[str] = None
    query: Optional[str] = None
    primary_key: Sequence[str] = ("id",)
    columns: Sequence[str] = ()
    relations: Sequence[str] = ()

    _schema: ClassVar[EntitySchema]

    id: Optional[int] = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._schema = EntitySchema.from_entity_class(cls)

    def __init__(self, backend: Backend):
        """
        Initialize an empty, unloaded entity.

        Args:
            backend: The backend used to read and write this entity.
        """
        self.backend: Backend = backend
        self.table: Optional[str] = type(self).table
        self.query: Optional[str] = type(self).query
        self.primary_key: List[str] = list(type(self).primary_key)
        self.relations: List[str] = list(type(self).relations or ())

        declared_columns = list(type(self).columns or ())
        self._columns_initialized: bool = bool(declared_columns)
        self.columns: List[str] = list(dict.fromkeys(self.primary_key + declared_columns))
        self._loaded: bool = False

        # Mutable class defaults must not be shared between instances
        for descriptor in self._schema.fields:
            setattr(self, descriptor.name, copy(getattr(type(self), descriptor.name, None)))

    def __repr__(self) -> str:
        """
        Provide a string representation of the entity.

        Returns:
            A string naming the class, table and column values.
        """
        values = ", ".join(f"{key}={value!r}" for key, value in self.to_array(only_columns=True).items())
        return f"{type(self).__name__}(table={self.table}, loaded={self._loaded}, {values})"

    @property
    def identity(self) -> Any:
        """The value of the first primary-key field."""
        return getattr(self, self.primary_key[0], None)

    @identity.setter
    def identity(self, value: Any):
        setter = self._schema.get_setter(to_storage_case(self.primary_key[0]))
        setter(self, value)

    def get_table(self) -> Optional[str]:
        """Get the table this entity persists to."""
        return self.table

    def set_table(self, table: str) -> "Entity":
        """
        Set the table this entity persists to.

        Args:
            table: The table name.

        Returns:
            This entity.
        """
        self.table = table
        return self

    def get_query(self) -> Optional[str]:
        """Get the read template used by `load`."""
        return self.query

    def set_query(self, query: str) -> "Entity":
        """
        Set the read template used by `load`.

        Args:
            query: A parameterized SELECT statement returning one row.

        Returns:
            This entity.
        """
        self.query = query
        return self

    def get_id(self) -> Optional[int]:
        """Get the `id` field."""
        return self.id

    def set_id(self, value: Any) -> "Entity":
        """
        Set the `id` field, converting it to an integer.

        Args:
            value: The new identifier.

        Returns:
            This entity.
        """
        self.id = int(value)
        return self

    def load(self, parameters: Union[Sequence[Any], Mapping[str, Any]] = None) -> "Entity":
        """
        Read a single record with this entity's query and assemble it.

        Nothing happens when no query is configured.

        Args:
            parameters: Positional or named parameters bound to the query.

        Returns:
            This entity.

        Raises:
            (exceptions.BackendQueryError): If the backend fails to run the query.
        """
        if not self.query:
            return self

        LOG.debug(f"Loading {type(self).__name__} from '{self.table}' with parameters {parameters}.")
        record = self.backend.get_record(self.query, parameters or ())
        return self.assemble(dict(record or {}))

    def assemble(self, record: Mapping[str, Any]) -> "Entity":
        """
        Bind a storage-case record onto this entity and mark it loaded.

        Keys that map to no field and null values are skipped, so values
        from a previous partial load are kept.

        Args:
            record: A mapping of storage column names to values.

        Returns:
            This entity.
        """
        self._loaded = True

        if not self._columns_initialized:
            self.columns = list(dict.fromkeys(self.primary_key + list(record.keys())))
            self._columns_initialized = True
            LOG.debug(f"Inferred columns for '{self.table}': {self.columns}")

        for key, value in record.items():
            setter = self._schema.get_setter(key)
            if setter is None:
                self._unmapped_field_hook(key, value)
                continue
            if value is None:
                continue
            setter(self, value)

        return self

    def _unmapped_field_hook(self, key: str, value: Any):
        """
        Hook called for every record key that maps to no field during `assemble`.
        Subclasses can override to enforce a stricter schema.

        Args:
            key: The storage column name.
            value: The value that was dropped.
        """
        LOG.debug(f"Dropping column '{key}' of '{self.table}': no field {to_field_case(key)} on {type(self).__name__}.")

    def _get_variables(self, include_relations: bool = True) -> Dict[str, Any]:
        """
        Collect the persisted fields of this entity.

        Args:
            include_relations: Whether relation fields are part of the result.

        Returns:
            A mapping of storage names to current field values.
        """
        selected = {to_storage_case(name) for name in self.primary_key + self.columns}
        relations = {to_storage_case(name) for name in self.relations}
        if include_relations:
            selected |= relations
        else:
            # A relation also listed in columns still never counts as a column
            selected -= relations

        return {
            descriptor.storage_name: getattr(self, descriptor.name, None)
            for descriptor in self._schema.fields
            if descriptor.storage_name in selected
        }

    def to_array(self, only_columns: bool = False) -> Dict[str, Any]:
        """
        Serialize this entity into a storage-case dictionary.

        Fields that hold None are left out. Collections are expanded one level
        into the `to_array()` output of the entities they hold, and left out
        when they hold no entity.

        Args:
            only_columns: If True, relation fields are left out.

        Returns:
            A dictionary of storage column names to values.
        """
        result = {}
        for storage_name, value in self._get_variables(include_relations=not only_columns).items():
            if value is None:
                continue
            if isinstance(value, (list, tuple, dict)):
                expanded = convert_to_array(value)
                if expanded:
                    result[storage_name] = expanded
            elif isinstance(value, Entity):
                result[storage_name] = value.to_array()
            else:
                result[storage_name] = value
        return result

    def is_affected(self) -> bool:
        """
        Check whether any primary-key or column field holds a value.

        Returns:
            True if at least one of those fields is not None.
        """
        return any(filter_not_null(value) for value in self._get_variables(include_relations=False).values())

    def is_loaded(self) -> bool:
        """
        Check whether the identity holds a numeric value.

        This is independent of whether the entity went through `assemble`.

        Returns:
            True if the identity is numeric.
        """
        return is_numeric(self.identity)

    def _get_payload(self) -> Dict[str, Any]:
        """Get the flat scalar columns that can be written to the table."""
        return {key: value for key, value in self.to_array(only_columns=True).items() if filter_valuable(value)}

    def save(self) -> "Entity":
        """
        Insert this entity if it is new, otherwise update it.

        An entity is new when it has no identity or was never loaded. A
        generated identity is only adopted when none was set beforehand.

        Returns:
            This entity.
        """
        if not self.identity or not self._loaded:
            new_id = self.insert()
            if self.identity is None and new_id:
                self.identity = new_id
            self._loaded = True
            return self

        self.update()
        return self

    def insert(self) -> int:
        """
        Insert this entity's columns into its table.

        Returns:
            The identity generated by the backend, or 0 if there is none.

        Raises:
            (exceptions.BackendQueryError): If the backend rejects the insert.
        """
        payload = self._get_payload()
        LOG.debug(f"Inserting into '{self.table}': {payload}")
        return int(self.backend.insert(self.table, payload) or 0)

    def _split_primary_key(self) -> Dict[str, Any]:
        """
        Build the payload and separate the primary-key values from it.

        Returns:
            A dictionary with the remaining `fields`, the `where` clause and
            the ordered `where_values`.

        Raises:
            (exceptions.MissingKeyError): If a primary-key field has no value.
        """
        fields = self._get_payload()
        where_values = []
        where = build_key_clause(self.primary_key, self.table, fields, [], where_values)
        return {"fields": fields, "where": where, "where_values": where_values}

    def update(self) -> int:
        """
        Update the row identified by this entity's primary key.

        Returns:
            The number of affected rows.

        Raises:
            (exceptions.MissingKeyError): If a primary-key field has no value.
            (exceptions.BackendQueryError): If the backend rejects the update.
        """
        split = self._split_primary_key()
        LOG.debug(f"Updating '{self.table}' where {split['where']} {split['where_values']}: {split['fields']}")
        return int(self.backend.update(self.table, split["fields"], split["where"], split["where_values"]) or 0)

    def delete(self) -> int:
        """
        Delete the row identified by this entity's primary key.

        The entity is no longer considered loaded once the backend call
        returns, whether or not a row was removed.

        Returns:
            The number of deleted rows.

        Raises:
            (exceptions.MissingKeyError): If a primary-key field has no value.
            (exceptions.BackendQueryError): If the backend rejects the delete.
        """
        split = self._split_primary_key()
        LOG.debug(f"Deleting from '{self.table}' where {split['where']} {split['where_values']}.")
        deleted = self.backend.delete(self.table, split["where"], split["where_values"])
        self._loaded = False
        return int(deleted or 0)


Entity._schema = EntitySchema.from_entity_class(Entity)
