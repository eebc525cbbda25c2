"""Recording doubles for testing repositories without a database.

``RecordingExecutor`` implements the SqlExecutor protocol by remembering
every statement it is asked to run and answering from results queued by
the test. ``StubConnectionFactory`` implements the ConnectionFactory
protocol and hands out a placeholder connection.
"""

from collections import defaultdict, deque
from contextlib import contextmanager
from typing import Any, Deque, Dict, Iterator, List, NamedTuple, Optional

from persistkit.protocols import Parameters, Row


class RecordedCall(NamedTuple):
    """One call made against a RecordingExecutor."""

    method: str
    sql: str
    params: Dict[str, Any]


class RecordingExecutor:
    """SqlExecutor test double.

    Results are queued per method and consumed in order. When nothing is
    queued the executor answers the way an empty table would: no rows,
    no single row, zero affected rows, no scalar.

    Example:
        >>> executor = RecordingExecutor()
        >>> executor.queue_result("execute_scalar", 42)
        >>> repository = CrudRepository(StubConnectionFactory(), builder, Article, executor)
        >>> repository.add(article).id
        42
        >>> executor.last_call.sql
        'INSERT INTO article (title) VALUES (@Title) RETURNING id'
    """

    _DEFAULTS = {
        "query": list,
        "query_single_or_default": lambda: None,
        "execute": lambda: 0,
        "execute_scalar": lambda: None,
    }

    def __init__(self):
        self.calls: List[RecordedCall] = []
        self._results: Dict[str, Deque[Any]] = defaultdict(deque)

    def queue_result(self, method: str, result: Any) -> None:
        """Queue the value the next call to ``method`` returns."""
        if method not in self._DEFAULTS:
            raise ValueError(f"Unknown executor method: {method}")
        self._results[method].append(result)

    def _record(self, method: str, sql: str, params: Parameters) -> Any:
        self.calls.append(RecordedCall(method, sql, dict(params or {})))
        if self._results[method]:
            return self._results[method].popleft()
        return self._DEFAULTS[method]()

    def query(self, connection: Any, sql: str, params: Parameters = None) -> List[Row]:
        return self._record("query", sql, params)

    def query_single_or_default(self, connection: Any, sql: str, params: Parameters = None) -> Optional[Row]:
        return self._record("query_single_or_default", sql, params)

    def execute(self, connection: Any, sql: str, params: Parameters = None) -> int:
        return self._record("execute", sql, params)

    def execute_scalar(self, connection: Any, sql: str, params: Parameters = None) -> Any:
        return self._record("execute_scalar", sql, params)

    @property
    def last_call(self) -> Optional[RecordedCall]:
        return self.calls[-1] if self.calls else None

    def reset(self) -> None:
        """Forget recorded calls and queued results."""
        self.calls.clear()
        self._results.clear()


class StubConnectionFactory:
    """ConnectionFactory test double yielding a placeholder connection."""

    def __init__(self, connection: Optional[Any] = None):
        self.connection = connection if connection is not None else object()
        self.connect_count = 0

    @contextmanager
    def connect(self) -> Iterator[Any]:
        self.connect_count += 1
        yield self.connection
