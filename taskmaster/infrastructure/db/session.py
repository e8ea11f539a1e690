# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from taskmaster.shared.config import load_config
from taskmaster.shared.errors import InfrastructureError
from taskmaster.shared.logging import logger

_config = load_config()


class Base(DeclarativeBase):
    pass


connect_args: dict[str, object] = {}
engine_kwargs: dict[str, object] = {}
if _config.database.is_sqlite:
    connect_args = {
        "check_same_thread": False,
        "timeout": int(_config.database.pool_timeout),
    }
else:
    engine_kwargs = {
        "pool_size": _config.database.pool_size,
        "max_overflow": _config.database.max_overflow,
        "pool_timeout": _config.database.pool_timeout,
    }

ENGINE: Engine = create_engine(
    _config.database.url,
    echo=False,
    pool_pre_ping=True,
    connect_args=connect_args,
    **engine_kwargs,
)


SessionLocal = scoped_session(
    sessionmaker(bind=ENGINE, autoflush=False, autocommit=False, expire_on_commit=False)
)


@contextmanager
def session_scope(factory: Callable[[], Session] = SessionLocal) -> Iterator[Session]:
    """One transaction: commit when the block exits cleanly, roll back otherwise."""
    session = factory()
    try:
        yield session
        session.commit()
    except OperationalError as exc:
        session.rollback()
        logger.error(f"db.session: database unavailable ({type(exc).__name__})")
        raise InfrastructureError("database_unavailable") from exc
    except Exception as exc:
        session.rollback()
        logger.debug(f"db.session: rolled back ({type(exc).__name__})")
        raise
    finally:
        session.close()


def ping_database() -> None:
    with ENGINE.connect() as connection:
        connection.execute(text("SELECT 1"))


def _log_retry(state: RetryCallState) -> None:
    exc = state.outcome.exception() if state.outcome else None
    logger.warning(
        f"db.connect: attempt={state.attempt_number} failed ({type(exc).__name__}), retrying"
    )


@retry(
    stop=stop_after_attempt(_config.database.connect_retries),
    wait=wait_exponential(multiplier=0.5, max=8.0),
    retry=retry_if_exception_type(OperationalError),
    before_sleep=_log_retry,
    reraise=True,
)
def wait_for_database() -> None:
    ping_database()


def init_db() -> None:
    wait_for_database()
    Base.metadata.create_all(bind=ENGINE)
    logger.info("Database schema ensured")
