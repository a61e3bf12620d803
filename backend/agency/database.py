import logging
from functools import lru_cache

from sqlalchemy import create_engine, event
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import NullPool

from .config import settings
from .core.errors import StoreUnavailable

logger = logging.getLogger(__name__)

APP_ENV = settings.APP_ENV.lower()  # "dev" | "prod"


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite non applica le FK (e quindi il CASCADE) senza questo pragma."""

    @event.listens_for(engine, "connect")
    def _fk_pragma(dbapi_conn, _record):
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()


def _make_engine(url: str) -> Engine:
    # In sviluppo: nessun pool -> connessione chiusa subito dopo ogni request
    if APP_ENV != "prod":
        engine = create_engine(
            url,
            future=True,
            pool_pre_ping=True,
            poolclass=NullPool,
        )
    else:
        # In produzione: pool minimo e prudente
        engine = create_engine(
            url,
            future=True,
            pool_pre_ping=True,
            pool_size=2,
            max_overflow=2,
            pool_recycle=1800,
        )

    if engine.dialect.name == "sqlite":
        enable_sqlite_foreign_keys(engine)
    return engine


@lru_cache(maxsize=1)
def get_engine() -> Engine | None:
    """Engine creato alla prima richiesta e poi riusato. None se DB_URL manca."""
    if not settings.DB_URL:
        logger.warning("DB_URL non impostato: database non disponibile")
        return None
    engine = _make_engine(settings.DB_URL)
    logger.info("Engine creato (dialect=%s, env=%s)", engine.dialect.name, APP_ENV)
    return engine


SessionLocal = sessionmaker(
    autoflush=False,
    expire_on_commit=False,
    future=True,
)

Base = declarative_base()


def get_db():
    engine = get_engine()
    if engine is None:
        # i servizi decidono: letture vuote, scritture -> StoreUnavailable
        yield None
        return

    db = SessionLocal(bind=engine)
    try:
        yield db
    finally:
        db.close()  # rilascia la connessione


def upsert(db: Session, model, values: dict, conflict_on: list[str], update: dict) -> None:
    """INSERT ... ON CONFLICT DO UPDATE, per PostgreSQL e SQLite."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        insert = postgresql.insert
    elif dialect == "sqlite":
        insert = sqlite.insert
    else:
        raise NotImplementedError(f"upsert non supportato per {dialect}")

    stmt = insert(model).values(**values)
    stmt = stmt.on_conflict_do_update(index_elements=conflict_on, set_=update)
    db.execute(stmt)


def require_store(db: Session | None) -> Session:
    """Per le scritture: senza DB si fallisce in modo esplicito."""
    if db is None:
        logger.warning("Scrittura rifiutata: database non disponibile")
        raise StoreUnavailable()
    return db


def commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
