##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
Naming and filtering helpers used by [`Entity`][entities.entity.Entity].

Entities keep their in-memory fields in field case (`tenantId`, `UserName`)
while the store uses storage case (`tenant_id`, `user_name`). The functions in
this module translate between the two conventions, decide which values are
worth persisting, and assemble composite-key WHERE clauses. None of them hold
state or perform I/O.
"""

import re
from numbers import Number
from typing import Any, Dict, List, Mapping, Sequence, Union

from persistable.exceptions import MissingKeyError


# A titlecase word that does not already follow an underscore: "parseHTTP|Request"
_TITLE_WORD = re.compile(r"([^_])([A-Z][a-z]+)")
# A capital following a lowercase letter or digit: "tenant|Id"
_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
# A signed decimal literal with optional fraction and exponent
_NUMERIC_STRING = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


def to_storage_case(name: str) -> str:
    """
    Convert a field-case identifier into storage case.

    A run of capitals followed by a titlecase word is split before the
    titlecase word, so `parseHTTPRequest` becomes `parse_http_request`.
    Names already in storage case are returned unchanged.

    Args:
        name: The field-case identifier.

    Returns:
        The lowercase, underscore-delimited storage name.
    """
    name = _TITLE_WORD.sub(r"\1_\2", name)
    name = _LOWER_UPPER.sub(r"\1_\2", name)
    return name.lower()


def to_field_case(name: str) -> str:
    """
    Convert a storage-case identifier into field case.

    Every underscore-delimited segment is capitalized, so `user_name`
    becomes `UserName`.

    Args:
        name: The storage-case identifier.

    Returns:
        The field-case identifier.
    """
    return "".join(segment[:1].upper() + segment[1:] for segment in name.split("_") if segment)


def setter_key(field_name: str) -> str:
    """
    Get the key a field's setter is registered under.

    `tenantId`, `TenantId` and `tenant_id` all share the key `TenantId`.

    Args:
        field_name: A field name in either convention.

    Returns:
        The normalized setter key.
    """
    return to_field_case(to_storage_case(field_name))


def filter_not_null(value: Any) -> bool:
    """Return True if `value` is not None."""
    return value is not None


def is_numeric(value: Any) -> bool:
    """
    Check whether a value is a number or a string holding a number.

    Booleans are not considered numeric. Strings must hold a decimal
    literal, so "inf", "nan" and "1_000" are rejected.

    Args:
        value: The value to check.

    Returns:
        True if the value is numeric, False otherwise.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, Number):
        return True
    if isinstance(value, str):
        return _NUMERIC_STRING.match(value) is not None
    return False


def filter_valuable(value: Any) -> bool:
    """
    Check whether a value can be written to a column as-is.

    Only numbers, booleans and strings qualify; None, collections and nested
    entities do not.

    Args:
        value: The value to check.

    Returns:
        True if the value is a flat scalar, False otherwise.
    """
    return isinstance(value, (Number, str))


def build_key_clause(
    primary_key: Sequence[str],
    table: str,
    fields: Dict[str, Any],
    where: List[str],
    where_values: List[Any],
) -> str:
    """
    Split the primary-key values out of a storage-case payload.

    For every key (in declaration order) an equality fragment is appended to
    `where` and its value to `where_values`. The key is then removed from
    `fields` so that only the non-key columns remain.

    Args:
        primary_key: The primary-key field names.
        table: The table the payload belongs to, used in error messages.
        fields: The storage-case payload. Modified in place.
        where: Accumulator for the clause fragments.
        where_values: Accumulator for the bound values.

    Returns:
        The fragments joined with `AND`.

    Raises:
        (exceptions.MissingKeyError): If a key has no value in `fields`.
    """
    for key in primary_key:
        column = to_storage_case(key)
        if fields.get(column) is None:
            raise MissingKeyError(key, table)

        where.append(f"{column} = ?")
        where_values.append(fields.pop(column))

    return " AND ".join(where)


def convert_to_array(entities: Union[Sequence[Any], Mapping[str, Any]]) -> Union[List[Dict], Dict[str, Dict]]:
    """
    Expand the entities held in a collection into their `to_array()` output.

    Only one level is expanded. Members that are not entities are dropped.

    Args:
        entities: A list/tuple or a mapping whose values may be entities.

    Returns:
        A list for sequences, or a dict with storage-case keys for mappings.
    """
    from persistable.entities.entity import Entity  # pylint: disable=import-outside-toplevel

    if isinstance(entities, Mapping):
        return {
            to_storage_case(str(key)): value.to_array()
            for key, value in entities.items()
            if isinstance(value, Entity)
        }

    return [value.to_array() for value in entities if isinstance(value, Entity)]
