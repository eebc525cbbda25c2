"""Unit tests for the SQLAlchemy executor against in-memory SQLite."""

import logging

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from persistkit.common.exceptions import ErrorCode, PersistKitError
from persistkit.database import SqlAlchemyExecutor, to_bind_parameters
from persistkit.naming import SnakeCaseNameAdapter
from persistkit.query_builder import PostgreSQLQueryBuilder
from persistkit.types import EntityShape


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    with engine.begin() as conn:
        conn.execute(text(
            "CREATE TABLE article ("
            "id INTEGER PRIMARY KEY AUTOINCREMENT, "
            "title TEXT NOT NULL, "
            "content TEXT, "
            "view_count INTEGER)"
        ))
    yield engine
    engine.dispose()


@pytest.fixture
def builder():
    shape = EntityShape.define("Article", ["Title", "Content", "ViewCount"])
    return PostgreSQLQueryBuilder(SnakeCaseNameAdapter(), shape)


@pytest.fixture
def executor():
    return SqlAlchemyExecutor()


def _insert(engine, executor, builder, title):
    with engine.connect() as conn:
        return executor.execute_scalar(
            conn,
            builder.build_insert(builder.field_names),
            {"Title": title, "Content": "body", "ViewCount": 0},
        )


class TestToBindParameters:

    def test_rewrites_placeholders(self):
        sql = "UPDATE article SET title = @Title WHERE id = @Id"
        assert to_bind_parameters(sql) == "UPDATE article SET title = :Title WHERE id = :Id"

    def test_leaves_server_variables_alone(self):
        assert to_bind_parameters("SELECT @@IDENTITY") == "SELECT @@IDENTITY"

    def test_leaves_embedded_at_signs_alone(self):
        assert to_bind_parameters("SELECT 'ops@example' AS a") == "SELECT 'ops@example' AS a"


class TestSqlAlchemyExecutor:

    def test_execute_scalar_returns_generated_key_and_commits(self, engine, executor, builder):
        first = _insert(engine, executor, builder, "First")
        second = _insert(engine, executor, builder, "Second")

        assert (first, second) == (1, 2)
        with engine.connect() as conn:
            assert conn.execute(text("SELECT COUNT(*) FROM article")).scalar() == 2

    def test_query_returns_mappings(self, engine, executor, builder):
        _insert(engine, executor, builder, "First")

        with engine.connect() as conn:
            rows = executor.query(conn, builder.build_select_all())

        assert rows == [{"id": 1, "title": "First", "content": "body", "view_count": 0}]

    def test_query_single_or_default(self, engine, executor, builder):
        new_id = _insert(engine, executor, builder, "First")

        with engine.connect() as conn:
            row = executor.query_single_or_default(conn, builder.build_select_by_id(), {"Id": new_id})
            missing = executor.query_single_or_default(conn, builder.build_select_by_id(), {"Id": 99})

        assert row["title"] == "First"
        assert missing is None

    def test_query_single_or_default_rejects_many_rows(self, engine, executor, builder):
        _insert(engine, executor, builder, "First")
        _insert(engine, executor, builder, "Second")

        with engine.connect() as conn:
            with pytest.raises(PersistKitError) as exc_info:
                executor.query_single_or_default(conn, builder.build_select_all())

        assert exc_info.value.error_code is ErrorCode.EXECUTION_ERROR

    def test_execute_returns_affected_rows(self, engine, executor, builder):
        new_id = _insert(engine, executor, builder, "First")

        with engine.connect() as conn:
            updated = executor.execute(
                conn,
                builder.build_update(["Title"]),
                {"Title": "Renamed", "Id": new_id},
            )
            missing = executor.execute(conn, builder.build_delete(), {"Id": 99})

        assert updated == 1
        assert missing == 0
        with engine.connect() as conn:
            assert conn.execute(text("SELECT title FROM article")).scalar() == "Renamed"

    def test_driver_errors_are_wrapped(self, engine, executor):
        with engine.connect() as conn:
            with pytest.raises(PersistKitError) as exc_info:
                executor.query(conn, "SELECT * FROM missing_table")

        error = exc_info.value
        assert error.error_code is ErrorCode.QUERY_EXECUTION_ERROR
        assert isinstance(error.cause, SQLAlchemyError)
        assert error.details["query"] == "SELECT * FROM missing_table"

    def test_missing_parameter_is_wrapped(self, engine, executor, builder):
        with engine.connect() as conn:
            with pytest.raises(PersistKitError) as exc_info:
                executor.execute(conn, builder.build_delete(), {})

        assert exc_info.value.error_code is ErrorCode.QUERY_EXECUTION_ERROR

    def test_failure_is_logged_at_error_once(self, engine, executor, caplog):
        with caplog.at_level(logging.DEBUG, logger="persistkit"):
            with engine.connect() as conn:
                with pytest.raises(PersistKitError):
                    executor.query(conn, "SELECT * FROM missing_table")

        errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert [r.name for r in errors] == ["persistkit.common.exceptions"]
        failed = [r for r in caplog.records if r.getMessage() == "SQL statement failed"]
        assert len(failed) == 1
        assert failed[0].levelno == logging.DEBUG
