"""SQL Server query builder implementation."""

from persistkit.query_builder.base import BaseQueryBuilder


class SqlServerQueryBuilder(BaseQueryBuilder):
    """Query builder for Microsoft SQL Server and Azure SQL.

    T-SQL has no RETURNING clause; the generated key comes back through an
    OUTPUT clause placed between the column list and VALUES:

        INSERT INTO Article (Title) OUTPUT INSERTED.Id VALUES (@Title)

    SELECT, UPDATE and DELETE statements are identical to the base shapes.
    """

    def _build_insert(self, column_list: str, parameter_list: str) -> str:
        """Build INSERT ... OUTPUT INSERTED statement."""
        return (
            f"INSERT INTO {self.table_name} ({column_list}) "
            f"OUTPUT INSERTED.{self.id_column} VALUES ({parameter_list})"
        )
