import logging
import time
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


class Database:
    """
    Cliente del almacén relacional: engine + fábrica de sesiones.

    Se crea una sola vez al arrancar la aplicación y se libera en el
    apagado con dispose().
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine = self._create_engine(url, echo)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        _register_query_logging(self.engine)

    @staticmethod
    def _create_engine(url: str, echo: bool) -> Engine:
        if url.startswith("sqlite"):
            options = {"connect_args": {"check_same_thread": False}}
            if url in ("sqlite://", "sqlite:///:memory:"):
                options["poolclass"] = StaticPool
            engine = create_engine(url, echo=echo, **options)
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
            return engine

        return create_engine(
            url,
            pool_pre_ping=True,
            pool_recycle=300,
            echo=echo
        )

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    def session(self) -> Session:
        return self.SessionLocal()

    def ping(self):
        """Verifica la conexión y devuelve la hora del servidor"""
        with self.engine.connect() as conn:
            return conn.execute(text("SELECT CURRENT_TIMESTAMP")).scalar()

    def dispose(self):
        self.engine.dispose()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _register_query_logging(engine: Engine):
    @event.listens_for(engine, "before_cursor_execute")
    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())

    @event.listens_for(engine, "after_cursor_execute")
    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        duration = time.perf_counter() - conn.info["query_start_time"].pop()
        logger.debug(
            f"Executed query - Time: {duration * 1000:.2f}ms - Rows: {cursor.rowcount} - {statement}"
        )

    @event.listens_for(engine, "handle_error")
    def handle_error(exception_context):
        start_times = exception_context.connection.info.get("query_start_time") if exception_context.connection else None
        if start_times:
            start_times.pop()
        logger.error(
            f"❌ Error executing query: {exception_context.statement} - {exception_context.original_exception}"
        )


# Database dependency
def get_db(request: Request) -> Generator[Session, None, None]:
    """Database dependency for FastAPI"""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
