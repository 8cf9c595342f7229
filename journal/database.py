"""SQLModel database engine and session management."""

import logging
from contextlib import contextmanager

from sqlalchemy import inspect, text
from sqlmodel import SQLModel, create_engine, Session

from journal.config import settings

logger = logging.getLogger(__name__)

# SQLite needs check_same_thread=False; PostgreSQL does not
connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.database_url,
    echo=False,
    connect_args=connect_args,
)


def _run_migrations(bind=None):
    """Run lightweight schema migrations the metadata cannot express."""
    bind = bind or engine
    inspector = inspect(bind)

    tables = inspector.get_table_names()

    if "trade" in tables:
        columns = [c["name"] for c in inspector.get_columns("trade")]
        if "investment_sized" not in columns:
            with bind.connect() as conn:
                conn.execute(text(
                    "ALTER TABLE trade ADD COLUMN investment_sized BOOLEAN NOT NULL DEFAULT FALSE"
                ))
                conn.commit()
            logger.info("Migration: added investment_sized column to trade")

    if "exchange_wallet" not in tables:
        return

    # Exchange names are unique regardless of case. Expression indexes are not
    # reflected on every dialect, so rely on IF NOT EXISTS instead of inspecting.
    with bind.connect() as conn:
        conn.execute(text(
            "CREATE UNIQUE INDEX IF NOT EXISTS ix_exchange_wallet_exchange_name_lower "
            "ON exchange_wallet (lower(exchange_name))"
        ))
        conn.commit()


def create_db_and_tables(bind=None):
    """Create all tables. Called on startup."""
    import journal.models  # noqa: F401  populate metadata

    bind = bind or engine
    SQLModel.metadata.create_all(bind)
    _run_migrations(bind)


def get_session() -> Session:
    """Dependency that yields a database session."""
    with Session(engine) as session:
        yield session


@contextmanager
def transaction(session: Session):
    """Commit the session when the block succeeds, roll back when it raises."""
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
