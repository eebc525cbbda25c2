"""SQL and query-related constants.

This module contains the statement kinds produced by the query builders and
the parameter name shared between the builders and the executors.

These constants are in Layer 0 as they represent core SQL concepts
that can be used by any layer without creating circular dependencies.
"""

from enum import Enum


ID_PARAMETER = "Id"
"""Parameter name bound to the primary key in every by-id statement (``@Id``)."""

PARAMETER_PREFIX = "@"


class QueryType(str, Enum):
    """SQL statement kinds a query builder can produce.

    Every kind targets exactly one table and, where a row is addressed,
    exactly one row through the ``@Id`` parameter.

    Categories:
    - Read: SELECT_ALL, SELECT_BY_ID
    - Write: INSERT, UPDATE, DELETE
    """

    # Data Query
    SELECT_ALL = "SELECT_ALL"
    SELECT_BY_ID = "SELECT_BY_ID"

    # Data Manipulation (DML)
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
