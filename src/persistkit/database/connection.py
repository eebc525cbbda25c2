from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import ArgumentError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.pool import QueuePool

from persistkit.common.exceptions import ErrorCode, PersistKitError, configuration_error, connection_error
from persistkit.logging import get_logger
from persistkit.settings import DatabaseSettings, get_settings
from persistkit.utils.decorators import retry_with_backoff

logger = get_logger(__name__)


class SqlAlchemyConnectionFactory:
    """Connection factory backed by a pooled SQLAlchemy engine.

    The engine is created lazily from ``DatabaseSettings`` on first use,
    or supplied up front through :meth:`from_engine`. Every call to
    :meth:`connect` checks a connection out of the pool for one logical
    operation and returns it when the block exits.

    Opening a connection is retried with exponential backoff when the
    driver reports an ``OperationalError`` (server unreachable, pool
    exhausted, failover in progress). Nothing else is retried.

    Example:
        >>> factory = SqlAlchemyConnectionFactory()
        >>> with factory.connect() as conn:
        ...     conn.execute(text("SELECT 1"))
    """

    def __init__(self, settings: Optional[DatabaseSettings] = None, engine: Optional[Engine] = None):
        """Initialize the factory.

        Args:
            settings: Database settings. Defaults to ``get_settings().database``.
            engine: Existing engine to use instead of building one from settings.
        """
        self.settings = settings if settings is not None else get_settings().database
        self._engine: Optional[Engine] = engine
        self._open_connection = retry_with_backoff(
            max_retries=self.settings.connect_retries,
            initial_delay=self.settings.retry_delay_seconds,
            exponential_base=2,
            retry_on=(OperationalError,),
        )(self._checkout)

    @classmethod
    def from_engine(cls, engine: Engine, settings: Optional[DatabaseSettings] = None) -> "SqlAlchemyConnectionFactory":
        """Create a factory around an engine the caller already owns."""
        if engine is None:
            raise ValueError("engine cannot be None")
        return cls(settings=settings, engine=engine)

    @property
    def engine(self) -> Engine:
        """Get or create SQLAlchemy engine with lazy initialization."""
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        """Create SQLAlchemy engine with connection pooling.

        Raises:
            PersistKitError: CONFIG_MISSING if no URL is configured, CONFIG_INVALID
                if the URL cannot be parsed or names an unknown driver,
                CONNECTION_ERROR if the engine cannot be created
        """
        url = self.settings.get_url()
        if not url:
            raise configuration_error(
                "Database URL is not configured",
                config_key="DATABASE_URL",
                missing=True,
            )

        try:
            engine = create_engine(
                url,
                poolclass=QueuePool,
                pool_pre_ping=self.settings.pool_pre_ping,
                pool_size=self.settings.pool_size,
                max_overflow=self.settings.max_overflow,
                pool_timeout=self.settings.pool_timeout,
                echo=self.settings.echo,
            )
        except ArgumentError as e:
            raise configuration_error(
                f"Invalid database URL for {self._service}",
                config_key="DATABASE_URL",
                cause=e,
            )
        except Exception as e:
            raise connection_error(
                f"Failed to create {self._service} engine",
                service=self._service,
                cause=e,
            )

        logger.info("Created %s engine", engine.dialect.name)
        return engine

    @property
    def _service(self) -> str:
        if self._engine is not None:
            return self._engine.dialect.name
        return str(getattr(self.settings.dialect, "value", self.settings.dialect))

    def _checkout(self) -> Connection:
        return self.engine.connect()

    @contextmanager
    def connect(self) -> Iterator[Connection]:
        """Get a database connection from the pool.

        Yields:
            Connection: Open SQLAlchemy connection

        Raises:
            PersistKitError: TIMEOUT_ERROR if the pool has no free connection
                within ``pool_timeout``, CONNECTION_ERROR for other failures
        """
        try:
            conn = self._open_connection()
        except PersistKitError:
            raise
        except PoolTimeoutError as e:
            raise connection_error(
                f"Timed out waiting for a {self._service} connection",
                service=self._service,
                error_code=ErrorCode.TIMEOUT_ERROR,
                cause=e,
                is_retryable=True,
            )
        except SQLAlchemyError as e:
            raise connection_error(
                f"Failed to connect to {self._service}",
                service=self._service,
                cause=e,
            )

        try:
            yield conn
        finally:
            conn.close()

    def dispose(self) -> None:
        """Close every pooled connection."""
        if self._engine is not None:
            self._engine.dispose()
            logger.debug("Disposed %s engine", self._engine.dialect.name)
