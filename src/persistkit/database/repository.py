from typing import Any, Dict, Generic, List, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel

from persistkit.common.exceptions import ErrorCode, execution_error
from persistkit.constants.sql import ID_PARAMETER
from persistkit.database.executor import SqlAlchemyExecutor
from persistkit.logging import get_logger, operation_context
from persistkit.protocols import ConnectionFactory, SqlExecutor
from persistkit.query_builder.base import BaseQueryBuilder

logger = get_logger(__name__)

TEntity = TypeVar("TEntity", bound=BaseModel)
TKey = TypeVar("TKey")


def _resolve_attribute(entity_type: Type[BaseModel], field_name: str) -> Tuple[str, str]:
    """Find the model attribute for a logical field name.

    Returns:
        (attribute name, key accepted by ``model_validate``)
    """
    model_fields = entity_type.model_fields
    if field_name in model_fields:
        return field_name, model_fields[field_name].alias or field_name
    for attribute, info in model_fields.items():
        if info.alias == field_name:
            return attribute, field_name
    raise ValueError(f"{entity_type.__name__} has no attribute for field '{field_name}'")


class CrudRepository(Generic[TEntity, TKey]):
    """Generic create/read/update/delete repository for one entity type.

    Composes a query builder (the SQL), a connection factory (where to run
    it) and an executor (how to run it). Every statement is built once at
    construction; each operation opens its own connection.

    Entities are pydantic models whose attributes, or attribute aliases,
    are the logical field names of the builder's entity shape. Rows are
    mapped back through the builder's column map, so renamed and
    snake_cased columns land on the right attribute.

    Example:
        >>> shape = EntityShape.define("Article", ["title", "content"], identity="id")
        >>> builder = QueryBuilderFactory.create_postgresql_builder(shape)
        >>> articles = CrudRepository(SqlAlchemyConnectionFactory(), builder, Article)
        >>> article = articles.add(Article(title="Hello", content="..."))
        >>> articles.get_by_id(article.id)
    """

    def __init__(
        self,
        connection_factory: ConnectionFactory,
        query_builder: BaseQueryBuilder,
        entity_type: Type[TEntity],
        executor: Optional[SqlExecutor] = None,
    ):
        if connection_factory is None:
            raise ValueError("connection_factory cannot be None")
        if query_builder is None:
            raise ValueError("query_builder cannot be None")
        if entity_type is None or not (isinstance(entity_type, type) and issubclass(entity_type, BaseModel)):
            raise ValueError("entity_type must be a pydantic model class")

        self.connection_factory = connection_factory
        self.query_builder = query_builder
        self.entity_type = entity_type
        self.executor: SqlExecutor = executor if executor is not None else SqlAlchemyExecutor()

        shape = query_builder.shape
        self._entity_name = shape.name
        self._fields = query_builder.field_names
        self._identity, _ = _resolve_attribute(entity_type, shape.identity_field.name)

        # logical name -> (attribute, validation key)
        self._attributes: Dict[str, Tuple[str, str]] = {
            name: _resolve_attribute(entity_type, name) for name in query_builder.column_map
        }
        self._columns: Dict[str, str] = {}
        for field_name, column in query_builder.column_map.items():
            self._columns[column] = field_name
            self._columns.setdefault(column.lower(), field_name)

        self._select_all_sql = query_builder.build_select_all()
        self._select_by_id_sql = query_builder.build_select_by_id()
        self._delete_sql = query_builder.build_delete()
        self._insert_sql = query_builder.build_insert(self._fields) if self._fields else None
        self._update_sql = query_builder.build_update(self._fields) if self._fields else None

    def get_all(self) -> List[TEntity]:
        """Load every row of the table."""
        with operation_context(self._entity_name, "get_all"):
            with self.connection_factory.connect() as conn:
                rows = self.executor.query(conn, self._select_all_sql)
            logger.debug("Loaded %d %s rows", len(rows), self._entity_name)
            return [self._materialize(row) for row in rows]

    def get_by_id(self, id: TKey) -> Optional[TEntity]:
        """Load one entity by primary key, or None if no row matches."""
        with operation_context(self._entity_name, "get_by_id"):
            with self.connection_factory.connect() as conn:
                row = self.executor.query_single_or_default(conn, self._select_by_id_sql, {ID_PARAMETER: id})
            return self._materialize(row) if row is not None else None

    def add(self, entity: TEntity) -> TEntity:
        """Insert the entity and set its identity from the generated key.

        Raises:
            ValueError: If entity is None or the shape has no insertable fields
            PersistKitError: GENERATED_KEY_MISSING if the database returned no key
        """
        if entity is None:
            raise ValueError("entity cannot be None")
        if self._insert_sql is None:
            raise ValueError(f"{self._entity_name} has no fields to insert")

        with operation_context(self._entity_name, "add"):
            with self.connection_factory.connect() as conn:
                new_id = self.executor.execute_scalar(conn, self._insert_sql, self._parameters(entity))

            if new_id is None:
                raise execution_error(
                    f"Insert into {self.query_builder.table_name} did not return a generated key",
                    operation="add",
                    query=self._insert_sql,
                    error_code=ErrorCode.GENERATED_KEY_MISSING,
                )

            setattr(entity, self._identity, new_id)
            logger.debug("Inserted %s with id %s", self._entity_name, new_id)
            return entity

    def update(self, entity: TEntity) -> bool:
        """Overwrite every non-identity column of the entity's row.

        Returns:
            True if a row was updated, False if no row has the entity's id
        """
        if entity is None:
            raise ValueError("entity cannot be None")
        if self._update_sql is None:
            raise ValueError(f"{self._entity_name} has no fields to update")

        params = self._parameters(entity)
        params[ID_PARAMETER] = getattr(entity, self._identity)
        with operation_context(self._entity_name, "update"):
            with self.connection_factory.connect() as conn:
                affected = self.executor.execute(conn, self._update_sql, params)
        return affected > 0

    def delete(self, id: TKey) -> bool:
        """Delete by primary key; False if no row matched."""
        with operation_context(self._entity_name, "delete"):
            with self.connection_factory.connect() as conn:
                affected = self.executor.execute(conn, self._delete_sql, {ID_PARAMETER: id})
        return affected > 0

    def _parameters(self, entity: TEntity) -> Dict[str, Any]:
        return {name: getattr(entity, self._attributes[name][0]) for name in self._fields}

    def _materialize(self, row: Mapping[str, Any]) -> TEntity:
        data: Dict[str, Any] = {}
        for column, value in row.items():
            field_name = self._columns.get(column) or self._columns.get(column.lower())
            if field_name is not None:
                data[self._attributes[field_name][1]] = value
        return self.entity_type.model_validate(data)
