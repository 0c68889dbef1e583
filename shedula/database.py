import asyncio
from contextlib import nullcontext

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from shedula.core import config

MEMORY_DATABASE_URLS = {"sqlite://", "sqlite:///:memory:"}


def is_memory_database(database_url: str) -> bool:
    return database_url in MEMORY_DATABASE_URLS


def build_engine(database_url: str) -> Engine:
    if not database_url.startswith("sqlite"):
        return create_engine(database_url)

    if is_memory_database(database_url):
        # One shared connection, otherwise every pooled connection sees its own empty database.
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_engine(database_url, connect_args={"check_same_thread": False})


engine = build_engine(config.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

# Sessions on the in-memory engine share one DBAPI connection and therefore one
# transaction: a rollback or close in one request would undo another's pending writes.
_memory_session_lock = asyncio.Lock()


def session_guard():
    if is_memory_database(config.DATABASE_URL):
        return _memory_session_lock
    return nullcontext()


async def get_db():
    async with session_guard():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()
