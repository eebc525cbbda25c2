"""SQL Server query builder implementation."""

from persistkit.query_builder.sqlserver.builder import SqlServerQueryBuilder

__all__ = [
    "SqlServerQueryBuilder"
]
