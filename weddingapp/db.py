import logging
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


class Store:
    """Process-wide database handle.

    Built once by the top-level process and handed to the app factory.
    ``open`` creates missing tables, ``close`` releases the connection pool.
    """

    def __init__(self, url: str):
        self.url = url
        kwargs = {}
        if url.startswith("sqlite"):
            # FastAPI may run handlers on a different thread than the one that connected
            kwargs["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # in-memory DB lives only as long as its single connection
                kwargs["poolclass"] = StaticPool
        self.engine = create_engine(url, future=True, **kwargs)

        if url.startswith("sqlite"):
            @event.listens_for(self.engine, "connect")
            def set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, future=True)

    def open(self) -> None:
        # models must be imported so their tables are registered on Base
        from . import models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)
        logger.info("store opened: %s", self.engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        self.engine.dispose()
        logger.info("store closed")

    def session(self) -> Iterator[Session]:
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()
