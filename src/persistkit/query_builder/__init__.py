"""Query builder module for CRUD SQL generation.

This module provides query builders that turn an entity shape into the five
statements a repository needs. Query builders are responsible for
translating an entity's fields into SQL but do NOT execute queries - that's
handled by executors.

Architecture:
    The query builder module is organized by dialect:
    - postgresql/: RETURNING clause for generated keys
    - sqlserver/: OUTPUT INSERTED clause for generated keys
    - base.py: Abstract base class holding the shared statement shapes

Design Principles:
    1. **SQL Generation Only**: Builders only generate SQL strings
    2. **Dialect-Specific**: Each dialect owns only its generated-key syntax
    3. **Naming Elsewhere**: Table/column names come from a NameAdapter
    4. **Security First**: Resolved names are validated as identifiers
    5. **Immutable**: Names are resolved once; builders are safe to share

Statements (PostgreSQL, snake_case naming, entity ``Article``):
    SELECT * FROM article
    SELECT * FROM article WHERE id = @Id
    INSERT INTO article (title, content) VALUES (@Title, @Content) RETURNING id
    UPDATE article SET title = @Title, content = @Content WHERE id = @Id
    DELETE FROM article WHERE id = @Id

Example:
    >>> from persistkit.query_builder import get_query_builder
    >>> from persistkit.types import EntityShape
    >>>
    >>> shape = EntityShape.define("Article", ["Id", "Title", "Content", "CreatedAt"])
    >>> builder = get_query_builder(shape)
    >>> builder.build_insert(["Title", "Content", "CreatedAt"])
    'INSERT INTO article (title, content, created_at) VALUES (@Title, @Content, @CreatedAt) RETURNING id'
"""

# Re-export key classes for convenience
from persistkit.query_builder.base import BaseQueryBuilder
from persistkit.query_builder.factory import (
    QueryBuilderFactory,
    get_query_builder,
)
from persistkit.query_builder.postgresql.builder import PostgreSQLQueryBuilder
from persistkit.query_builder.sqlserver.builder import SqlServerQueryBuilder

__all__ = [
    "BaseQueryBuilder",
    "QueryBuilderFactory",
    "get_query_builder",
    "PostgreSQLQueryBuilder",
    "SqlServerQueryBuilder",
]
