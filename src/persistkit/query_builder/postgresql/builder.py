"""PostgreSQL query builder implementation."""

from persistkit.query_builder.base import BaseQueryBuilder


class PostgreSQLQueryBuilder(BaseQueryBuilder):
    """Query builder for PostgreSQL.

    Uses the RETURNING clause (PostgreSQL 8.2+) so an INSERT hands back the
    generated primary key as a single scalar:

        INSERT INTO article (title, content) VALUES (@Title, @Content) RETURNING id
    """

    def _build_insert(self, column_list: str, parameter_list: str) -> str:
        """Build INSERT ... RETURNING statement."""
        return (
            f"INSERT INTO {self.table_name} ({column_list}) "
            f"VALUES ({parameter_list}) RETURNING {self.id_column}"
        )
