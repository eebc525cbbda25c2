"""Database dialect and naming constants.

This module defines type-safe enumerations used to select a query builder
and a name adapter, either explicitly or from settings.
"""

from enum import Enum


class SqlDialect(str, Enum):
    """SQL dialect a query builder generates.

    The dialects differ only in how an INSERT hands back the generated key.

    Values:
        POSTGRESQL: PostgreSQL 8.2+
            - ``INSERT ... VALUES (...) RETURNING id``
            - Driven through SQLAlchemy's ``postgresql+psycopg2`` driver

        SQLSERVER: Microsoft SQL Server / Azure SQL
            - ``INSERT ... OUTPUT INSERTED.id VALUES (...)``
            - Driven through SQLAlchemy's ``mssql+pyodbc`` driver
    """

    POSTGRESQL = "postgresql"
    SQLSERVER = "sqlserver"


class NamingStrategy(str, Enum):
    """Strategy for mapping logical names to table and column names.

    Values:
        ANNOTATION: Explicit overrides on the entity shape, otherwise the
            logical name unchanged (``NewsArticle`` -> ``NewsArticle``).

        SNAKE_CASE: Explicit overrides on the entity shape, otherwise the
            logical name converted to snake_case (``NewsArticle`` -> ``news_article``).
    """

    ANNOTATION = "annotation"
    SNAKE_CASE = "snake_case"
