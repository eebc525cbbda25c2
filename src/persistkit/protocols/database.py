"""Database protocol definitions.

These protocols describe the collaborators a repository is composed of:
something that hands out connections, something that runs SQL on them,
and the repository contract itself. Implementations only need matching
method signatures, no inheritance.
"""

from typing import (
    Any,
    ContextManager,
    List,
    Mapping,
    Optional,
    Protocol,
    TypeVar,
    runtime_checkable,
)

from sqlalchemy.engine import Connection


TEntity = TypeVar("TEntity")
TKey = TypeVar("TKey")

Row = Mapping[str, Any]
Parameters = Optional[Mapping[str, Any]]


@runtime_checkable
class ConnectionFactory(Protocol):
    """Protocol for components that open database connections.

    Each call to ``connect()`` yields a ready connection for one logical
    operation and closes it when the block exits.
    """

    def connect(self) -> ContextManager[Connection]:
        """Open a connection.

        Returns:
            Context manager yielding an open SQLAlchemy ``Connection``

        Raises:
            PersistKitError: If the connection cannot be established
        """
        ...


@runtime_checkable
class SqlExecutor(Protocol):
    """Protocol for running SQL text against an open connection.

    SQL uses ``@Name`` placeholders; parameter keys are the placeholder
    names without the prefix and are case-sensitive.
    """

    def query(self, connection: Connection, sql: str, params: Parameters = None) -> List[Row]:
        """Run a statement and return every row as a column-name mapping."""
        ...

    def query_single_or_default(
        self, connection: Connection, sql: str, params: Parameters = None
    ) -> Optional[Row]:
        """Run a statement expected to return at most one row.

        Returns:
            The row, or None when nothing matched

        Raises:
            PersistKitError: If more than one row is returned
        """
        ...

    def execute(self, connection: Connection, sql: str, params: Parameters = None) -> int:
        """Run a write statement and return the affected row count."""
        ...

    def execute_scalar(self, connection: Connection, sql: str, params: Parameters = None) -> Any:
        """Run a statement and return the first column of the first row, or None."""
        ...


@runtime_checkable
class Repository(Protocol[TEntity, TKey]):
    """Protocol for generic CRUD repositories keyed by a single primary key."""

    def get_all(self) -> List[TEntity]:
        ...

    def get_by_id(self, id: TKey) -> Optional[TEntity]:
        ...

    def add(self, entity: TEntity) -> TEntity:
        """Insert the entity and set its identity from the generated key."""
        ...

    def update(self, entity: TEntity) -> bool:
        """Update every non-identity column; True if a row was affected."""
        ...

    def delete(self, id: TKey) -> bool:
        """Delete by primary key; True if a row was affected."""
        ...
