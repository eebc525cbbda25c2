"""Database access for persistkit.

Connection factory, SQL executor and generic repository over SQLAlchemy,
plus recording doubles for tests that should not touch a database.
"""

from persistkit.database.connection import SqlAlchemyConnectionFactory
from persistkit.database.executor import SqlAlchemyExecutor, to_bind_parameters
from persistkit.database.mock import RecordedCall, RecordingExecutor, StubConnectionFactory
from persistkit.database.repository import CrudRepository

__all__ = [
    "SqlAlchemyConnectionFactory",
    "SqlAlchemyExecutor",
    "to_bind_parameters",
    "CrudRepository",
    "RecordingExecutor",
    "RecordedCall",
    "StubConnectionFactory",
]
