
from persistkit.__version__ import __version__

from persistkit.constants import NamingStrategy, QueryType, SqlDialect
from persistkit.types import EntityShape, FieldDescriptor, PersistBaseModel

from persistkit.naming import (
    AnnotationNameAdapter,
    NameAdapter,
    SnakeCaseNameAdapter,
    get_name_adapter,
    to_snake_case,
)
from persistkit.query_builder import (
    BaseQueryBuilder,
    PostgreSQLQueryBuilder,
    QueryBuilderFactory,
    SqlServerQueryBuilder,
    get_query_builder,
)
from persistkit.database import (
    CrudRepository,
    SqlAlchemyConnectionFactory,
    SqlAlchemyExecutor,
)

from persistkit.common.exceptions import ErrorCode, PersistKitError


__all__ = [
    "__version__",

    "EntityShape",
    "FieldDescriptor",
    "PersistBaseModel",
    "QueryType",
    "SqlDialect",
    "NamingStrategy",

    # Naming
    "NameAdapter",
    "AnnotationNameAdapter",
    "SnakeCaseNameAdapter",
    "get_name_adapter",
    "to_snake_case",

    # Query builders
    "BaseQueryBuilder",
    "PostgreSQLQueryBuilder",
    "SqlServerQueryBuilder",
    "QueryBuilderFactory",
    "get_query_builder",

    # Database
    "CrudRepository",
    "SqlAlchemyConnectionFactory",
    "SqlAlchemyExecutor",

    # Exceptions (public API)
    "PersistKitError",
    "ErrorCode",
]
