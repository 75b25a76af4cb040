# personsvc/database/core/main.py
from __future__ import annotations

from functools import lru_cache

from sqlalchemy import MetaData, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from personsvc.common.logging import get_logger
from personsvc.common.settings import get_settings

logger = get_logger()

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """
    Process-wide engine built from settings on first use.
    The pool is shared by every request.
    """
    cfg = get_settings()
    kwargs = dict(echo=cfg.db.echo, pool_pre_ping=cfg.db.pool_pre_ping, future=True)
    if not cfg.database_url.startswith("sqlite"):
        kwargs.update(
            pool_size=cfg.db.pool_size,
            max_overflow=cfg.db.max_overflow,
            pool_recycle=cfg.db.pool_recycle,
        )
    return create_engine(cfg.database_url, **kwargs)


@lru_cache(maxsize=1)
def get_sessionmaker() -> sessionmaker[Session]:
    return sessionmaker(bind=get_engine(), expire_on_commit=False, future=True, autoflush=False)


def SessionLocal() -> Session:
    return get_sessionmaker()()


def init_db(engine: Engine | None = None) -> None:
    """Create the tables known to ``Base.metadata`` if they are missing."""
    # make sure the models are registered on the metadata
    import personsvc.database.models  # noqa: F401

    engine = engine or get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("database tables ensured on %s", engine.url.render_as_string(hide_password=True))
