# gatekeeper/database.py

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from gatekeeper.models import Base


class Database:
    """
    One engine and one session factory per application.
    Built once at startup and kept on ``app.state``.
    """

    def __init__(self, url: str):
        connect_args = {}
        if url.startswith("sqlite"):
            connect_args["check_same_thread"] = False

        self.engine = create_engine(url, connect_args=connect_args, pool_pre_ping=True)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def init_db(self):
        Base.metadata.create_all(bind=self.engine)

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request):
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
