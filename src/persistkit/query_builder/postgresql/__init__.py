"""PostgreSQL query builder implementation.

Example:
    from persistkit.naming import SnakeCaseNameAdapter
    from persistkit.query_builder.postgresql import PostgreSQLQueryBuilder
    from persistkit.types import EntityShape

    shape = EntityShape.define("Article", ["Id", "Title", "CreatedAt"])
    builder = PostgreSQLQueryBuilder(SnakeCaseNameAdapter(), shape)

    builder.build_insert(shape.field_names)
    # INSERT INTO article (title, created_at) VALUES (@Title, @CreatedAt) RETURNING id
"""

from persistkit.query_builder.postgresql.builder import PostgreSQLQueryBuilder

__all__ = [
    "PostgreSQLQueryBuilder"
]
