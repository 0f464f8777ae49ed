import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from contractor_ads.core.logger import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """Create the engine for *database_url*.

    For file-backed SQLite the parent directory is created first. In-memory
    SQLite shares one connection so every session sees the same database.
    """
    url = make_url(database_url)
    kwargs = {}
    if url.get_backend_name() == "sqlite":
        # Endpoints run in FastAPI's threadpool
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        else:
            data_dir = os.path.dirname(os.path.abspath(url.database))
            os.makedirs(data_dir, exist_ok=True)

    try:
        engine = create_engine(url, **kwargs)
    except Exception as e:
        error_msg = f'Failed to initialize database: {str(e)}'
        logger.error(error_msg)
        raise RuntimeError(error_msg) from e

    logger.info(f'Using database: {url.render_as_string(hide_password=True)}')
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)
