from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from mercado.config import settings


def make_engine(dsn: str) -> Engine:
    if dsn.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if dsn in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(dsn, **kwargs)
    return create_engine(dsn, pool_pre_ping=True)


engine = make_engine(settings.database_dsn)


def create_db_and_tables(bind: Engine | None = None) -> None:
    # Import for side effects: table registration on SQLModel.metadata
    from mercado.storage import models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)
