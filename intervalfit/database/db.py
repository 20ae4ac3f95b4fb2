"""Database connection and session management."""

import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session as OrmSession

from ..settings import APP_SUPPORT_DIR
from .models import Base

logger = logging.getLogger(__name__)

# ── paths ────────────────────────────────────────────────────────────────────

DB_PATH = APP_SUPPORT_DIR / "intervalfit.db"

# ── engine & session factory (created lazily) ─────────────────────────────

_engine = None
_SessionFactory = None


def _get_engine():
    global _engine
    if _engine is None:
        DB_PATH.parent.mkdir(parents=True, exist_ok=True)
        _engine = create_engine(
            f"sqlite:///{DB_PATH}",
            echo=False,
        )
    return _engine


def _get_session_factory():
    global _SessionFactory
    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=_get_engine(), expire_on_commit=False)
    return _SessionFactory


# ── public API ────────────────────────────────────────────────────────────


def configure_engine(url: str) -> None:
    """Override the database connection URL.  Used by tests to point at
    an in-memory SQLite database instead of the real one on disk."""
    global _engine, _SessionFactory
    _SessionFactory = None
    _engine = create_engine(
        url,
        echo=False,
    )


def init_db() -> None:
    """Create all tables."""
    engine = _get_engine()
    Base.metadata.create_all(engine)
    logger.debug("Database ready at %s", engine.url)


@contextmanager
def get_session():
    """Yield a SQLAlchemy session; commit on success, rollback on error."""
    factory = _get_session_factory()
    session: OrmSession = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
