"""Query Builder Factory.

This module provides a factory for creating dialect-specific query builders
with automatic configuration from environment settings.

The factory pattern keeps dialect selection and name-adapter selection in
one place, so repositories only ever see a BaseQueryBuilder.
"""

from typing import Dict, Optional, Type, Union

from persistkit.constants.database import SqlDialect
from persistkit.naming.base import NameAdapter
from persistkit.naming.factory import get_name_adapter
from persistkit.query_builder.base import BaseQueryBuilder
from persistkit.query_builder.postgresql.builder import PostgreSQLQueryBuilder
from persistkit.query_builder.sqlserver.builder import SqlServerQueryBuilder
from persistkit.types.entity import EntityShape


_BUILDERS: Dict[SqlDialect, Type[BaseQueryBuilder]] = {
    SqlDialect.POSTGRESQL: PostgreSQLQueryBuilder,
    SqlDialect.SQLSERVER: SqlServerQueryBuilder,
}


class QueryBuilderFactory:
    """Factory for creating dialect-specific query builders.

    Any argument left out is taken from settings: the dialect from
    ``DATABASE_DIALECT`` and the name adapter from ``NAMING_STRATEGY``.

    Example:
        >>> shape = EntityShape.define("Article", ["Title", "Content"])
        >>> builder = QueryBuilderFactory.create(shape)  # configured dialect
        >>> pg = QueryBuilderFactory.create_postgresql_builder(shape)
        >>> mssql = QueryBuilderFactory.create_sqlserver_builder(shape)
    """

    @staticmethod
    def create_postgresql_builder(
        shape: EntityShape,
        name_adapter: Optional[NameAdapter] = None,
    ) -> PostgreSQLQueryBuilder:
        """Create a PostgreSQL query builder.

        Args:
            shape: Entity shape to build statements for
            name_adapter: Adapter to bind; defaults to the configured strategy

        Returns:
            PostgreSQLQueryBuilder instance
        """
        return PostgreSQLQueryBuilder(name_adapter or get_name_adapter(), shape)

    @staticmethod
    def create_sqlserver_builder(
        shape: EntityShape,
        name_adapter: Optional[NameAdapter] = None,
    ) -> SqlServerQueryBuilder:
        """Create a SQL Server query builder.

        Args:
            shape: Entity shape to build statements for
            name_adapter: Adapter to bind; defaults to the configured strategy

        Returns:
            SqlServerQueryBuilder instance
        """
        return SqlServerQueryBuilder(name_adapter or get_name_adapter(), shape)

    @staticmethod
    def create(
        shape: EntityShape,
        name_adapter: Optional[NameAdapter] = None,
        dialect: Optional[Union[SqlDialect, str]] = None,
    ) -> BaseQueryBuilder:
        """Create the query builder for a dialect.

        Args:
            shape: Entity shape to build statements for
            name_adapter: Adapter to bind; defaults to the configured strategy
            dialect: SQL dialect; defaults to the configured dialect

        Returns:
            Dialect-specific query builder

        Raises:
            ValueError: If the dialect is not supported
        """
        if dialect is None:
            from persistkit.settings import get_settings

            dialect = get_settings().database.dialect

        try:
            dialect = SqlDialect(dialect)
        except ValueError:
            raise ValueError(
                f"Unsupported SQL dialect: {dialect}. "
                f"Supported dialects: {', '.join(d.value for d in SqlDialect)}"
            ) from None

        return _BUILDERS[dialect](name_adapter or get_name_adapter(), shape)


def get_query_builder(
    shape: EntityShape,
    name_adapter: Optional[NameAdapter] = None,
) -> BaseQueryBuilder:
    """Get a query builder for the configured dialect.

    Example:
        >>> builder = get_query_builder(EntityShape.define("Article", ["Title"]))
        >>> builder.build_select_all()
        'SELECT * FROM article'
    """
    return QueryBuilderFactory.create(shape, name_adapter)
