# peertutor/db.py

from sqlmodel import SQLModel, create_engine

from .config import settings


def make_engine(database_url: str = settings.database_url):
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False  # required for SQLite + FastAPI
    return create_engine(database_url, echo=settings.sql_echo, connect_args=connect_args)


# Engine = connection to the database
engine = make_engine()


def create_db_and_tables(bind=None) -> None:
    from . import models  # noqa: F401  registers the tables on SQLModel.metadata

    SQLModel.metadata.create_all(bind or engine)
