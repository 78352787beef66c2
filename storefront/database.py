# storefront/database.py
import functools

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, create_engine, Session

from storefront.core.config import get_settings
from storefront.core.errors import GatewayError

settings = get_settings()

# ---------------------------------------------------------
# Supabase Postgres connection (via pooler)
#
# - sslmode=require   : enforce SSL when running in the cloud
# - pool_size=1       : keep only 1 connection to the Supabase pooler
# - max_overflow=0    : do not open extra connections beyond the pool
# - pool_pre_ping=True: validate connections before using them
#
# Supabase Session mode limits the number of clients, so each process
# keeps a single pooled connection. Non-Postgres URLs (a local SQLite
# file for development) get a plain engine.
# ---------------------------------------------------------


def _build_engine(db_url: str):
    if not db_url.startswith("postgres"):
        return create_engine(db_url, echo=False)

    # Append sslmode=require if it is not already present
    if "sslmode=" not in db_url:
        if "?" in db_url:
            db_url = db_url + "&sslmode=require"
        else:
            db_url = db_url + "?sslmode=require"

    return create_engine(
        db_url,
        echo=False,        # set to True if you want to debug SQL queries
        pool_pre_ping=True,
        pool_size=1,
        max_overflow=0,
    )


engine = _build_engine(settings.DATABASE_URL)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session


def gateway_call(fn):
    """
    Repository method decorator.

    Any SQLAlchemy failure rolls the session back and is re-raised as a
    GatewayError carrying the driver message, so services never see
    driver-specific exceptions.
    """

    @functools.wraps(fn)
    def wrapper(self, session: Session, *args, **kwargs):
        try:
            return fn(self, session, *args, **kwargs)
        except SQLAlchemyError as e:
            session.rollback()
            raise GatewayError(str(e)) from e

    return wrapper


def commit(session: Session) -> None:
    """
    Commit the current unit of work; roll back and raise GatewayError on failure.
    """
    try:
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise GatewayError(str(e)) from e
