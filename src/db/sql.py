import time
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

# noinspection PyUnresolvedReferences
from db.model.analytics_event import AnalyticsEventDB  # registers the table  # noqa: F401
from db.model.base import BaseModel
# noinspection PyUnresolvedReferences
from db.model.order import OrderDB  # registers the table  # noqa: F401
# noinspection PyUnresolvedReferences
from db.model.order_item import OrderItemDB  # registers the table  # noqa: F401
from util import log
from util.config import config

engine: Engine
LocalSession: sessionmaker


def initialize_db(db_url: str | None = None, multi_connection_setup: bool = True) -> tuple[Engine, sessionmaker]:
    """
    Connects to the orders database and prepares the session factory.

    Without an explicit URL, the configured Postgres database is used. Tables are created when missing,
    so a fresh (e.g. in-memory) database is usable right away; migrations still own the schema in production.
    """
    global engine, LocalSession
    resolved_url = db_url or config.db_url.get_secret_value()
    engine = __create_db_engine(resolved_url, multi_connection_setup = multi_connection_setup)
    # noinspection PyPep8Naming
    LocalSession = sessionmaker(autocommit = False, autoflush = False, bind = engine)
    BaseModel.metadata.create_all(bind = engine)
    return engine, LocalSession


def dispose_db():
    if "engine" in globals():
        engine.dispose()
        log.d("Database connections released")


def __create_db_engine(
    db_url: str,
    max_retries: int = 7,
    retry_interval_s: int = 5,
    multi_connection_setup: bool = True,
) -> Engine:
    safe_url = make_url(db_url).render_as_string(hide_password = True)
    for attempt in range(1, max_retries + 1):
        try:
            if multi_connection_setup:
                created_engine = create_engine(
                    url = db_url,          # where the DB is at
                    pool_pre_ping = True,  # check connections before using them
                    pool_recycle = 300,    # recycle connections after 5 minutes
                    pool_size = 3,         # start with a modest pool size
                    max_overflow = 10,     # webhook bursts may need more connections
                    pool_timeout = 10,     # wait for a few seconds for available connections
                )
            else:
                created_engine = create_engine(db_url)
            with created_engine.connect():
                log.d("Database connected", url = safe_url)
                return created_engine
        except OperationalError as e:
            log.w(f"Database connection attempt {attempt} failed. Retrying in {retry_interval_s} seconds...", e)
            time.sleep(retry_interval_s)
    raise ConnectionError(f"Failed to connect to the database at {safe_url} after {max_retries} attempts")


# noinspection PyPep8Naming,PyShadowingNames
def get_session() -> Generator[Session, None, None]:
    db = LocalSession()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_detached_session() -> Generator[Session, None, None]:
    """A session outside of the request scope, for work that outlives the request (e.g. background tasks)."""
    session_generator = get_session()
    db = next(session_generator)
    try:
        yield db
    finally:
        session_generator.close()
