from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

SessionFactory = Callable[[], Session]


def create_engine_for_url(database_url: str) -> Engine:
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, future=True, connect_args=connect_args)


def create_sqlalchemy_session_factory(engine: Engine) -> SessionFactory:
    """Create a factory producing SQLAlchemy sessions bound to ``engine``.

    Sessions keep loaded attributes after commit so repositories can convert
    ORM rows to domain models once the transaction is closed.
    """

    SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, class_=Session)

    def _factory() -> Session:
        return SessionLocal()

    return _factory
