import re
import time
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection, CursorResult

from persistkit.common.exceptions import execution_error, query_execution_error
from persistkit.constants.sql import PARAMETER_PREFIX
from persistkit.logging import get_logger
from persistkit.protocols import Parameters, Row
from persistkit.utils.decorators import traced

logger = get_logger(__name__)

_PLACEHOLDER = re.compile(
    r"(?<![\w" + re.escape(PARAMETER_PREFIX) + r"])" + re.escape(PARAMETER_PREFIX) + r"([A-Za-z_][A-Za-z0-9_]*)"
)
_MAX_STATEMENT_ATTRIBUTE = 4096


def to_bind_parameters(sql: str) -> str:
    """Rewrite ``@Name`` placeholders into SQLAlchemy ``:Name`` binds.

    ``@@IDENTITY`` style server variables and e-mail-like literals are
    left alone because a placeholder must not follow a word character
    or another ``@``.
    """
    return _PLACEHOLDER.sub(r":\1", sql)


class SqlAlchemyExecutor:
    """Run builder-produced SQL on a SQLAlchemy connection.

    Statements are passed through :func:`to_bind_parameters` and executed
    with ``text()``. Write statements (``execute``, ``execute_scalar``)
    are committed on the same connection. Every call is logged with its
    duration and wrapped in an OpenTelemetry span; driver failures are
    raised as ``QUERY_EXECUTION_ERROR`` with the original exception as
    the cause.
    """

    def _span_attributes(self, connection: Connection, sql: str, *, operation: str) -> Dict[str, Any]:
        """Build OpenTelemetry span attributes for SQL operations."""
        dialect = getattr(connection, "dialect", None)
        sanitized = (sql or "").strip()
        if len(sanitized) > _MAX_STATEMENT_ATTRIBUTE:
            sanitized = f"{sanitized[:_MAX_STATEMENT_ATTRIBUTE - 3]}..."

        attributes: Dict[str, Any] = {
            "db.system": str(getattr(dialect, "name", "sql")),
            "db.operation": operation,
        }
        if sanitized:
            attributes["db.statement"] = sanitized
            attributes["db.statement.length"] = len(sanitized)
        return attributes

    def _run(
        self,
        connection: Connection,
        sql: str,
        params: Parameters,
        *,
        operation: str,
        consume: Callable[[CursorResult], Any],
        commit: bool,
    ) -> Any:
        start_time = time.time()
        bound = dict(params or {})
        payload = {"db.operation": operation, "db.parameters": sorted(bound)}

        try:
            result = connection.execute(text(to_bind_parameters(sql)), bound)
            value = consume(result)
            if commit:
                connection.commit()
        except Exception as exc:
            duration = time.time() - start_time
            logger.debug(
                "SQL statement failed",
                extra={**payload, "duration.seconds": f"{duration:.6f}", "error": str(exc)},
            )
            raise query_execution_error(sql, exc)

        duration = time.time() - start_time
        logger.debug(
            "SQL statement executed",
            extra={**payload, "duration.seconds": f"{duration:.6f}"},
        )
        return value

    @traced(
        span_name="persistkit.sql.query",
        attribute_getter=lambda self, connection, sql, params=None: self._span_attributes(
            connection, sql, operation="query"
        ),
    )
    def query(self, connection: Connection, sql: str, params: Parameters = None) -> List[Row]:
        """Run a statement and return every row as a column-name mapping."""
        return self._run(
            connection,
            sql,
            params,
            operation="query",
            consume=lambda result: [dict(row) for row in result.mappings()],
            commit=False,
        )

    @traced(
        span_name="persistkit.sql.query_single",
        attribute_getter=lambda self, connection, sql, params=None: self._span_attributes(
            connection, sql, operation="query_single_or_default"
        ),
    )
    def query_single_or_default(
        self, connection: Connection, sql: str, params: Parameters = None
    ) -> Optional[Row]:
        """Run a statement expected to match at most one row.

        Returns:
            The row as a mapping, or None when nothing matched

        Raises:
            PersistKitError: If the statement fails or returns more than one row
        """
        rows = self._run(
            connection,
            sql,
            params,
            operation="query_single_or_default",
            consume=lambda result: [dict(row) for row in result.mappings().all()],
            commit=False,
        )
        if len(rows) > 1:
            raise execution_error(
                "Query returned more than one row",
                operation="query_single_or_default",
                query=sql,
            )
        return rows[0] if rows else None

    @traced(
        span_name="persistkit.sql.execute",
        attribute_getter=lambda self, connection, sql, params=None: self._span_attributes(
            connection, sql, operation="execute"
        ),
    )
    def execute(self, connection: Connection, sql: str, params: Parameters = None) -> int:
        """Run a write statement and return the number of affected rows."""
        return self._run(
            connection,
            sql,
            params,
            operation="execute",
            consume=lambda result: result.rowcount,
            commit=True,
        )

    @traced(
        span_name="persistkit.sql.execute_scalar",
        attribute_getter=lambda self, connection, sql, params=None: self._span_attributes(
            connection, sql, operation="execute_scalar"
        ),
    )
    def execute_scalar(self, connection: Connection, sql: str, params: Parameters = None) -> Any:
        """Run a statement and return the first column of the first row.

        Used for INSERT statements that hand back the generated key.
        """
        return self._run(
            connection,
            sql,
            params,
            operation="execute_scalar",
            consume=lambda result: result.scalar(),
            commit=True,
        )
