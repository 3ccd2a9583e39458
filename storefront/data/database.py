# storefront/data/database.py
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from storefront.domain.errors import ConflictError, StoreError
from storefront.utils.settings import DATABASE_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def build_engine(url: str = DATABASE_URL, **kwargs):
    # sqlite needs check_same_thread off, FastAPI runs sync routes in a threadpool
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True, **kwargs)


engine = build_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_guard(db: Session, action: str, conflict: str | None = None):
    """
    Translates SQLAlchemy failures into domain errors.
    The session is rolled back before the error propagates.
    """
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"{action}: constraint violated ({e.orig})")
        raise ConflictError(conflict or f"{action}: conflicting data") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{action}: store failure: {e}")
        raise StoreError(f"{action}: store failure") from e
