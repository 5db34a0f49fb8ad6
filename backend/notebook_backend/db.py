from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from notebook_backend.config import config

DB_URL = config.database_url
engine = create_engine(DB_URL, echo=False)


def init_db(bind: Engine | None = None) -> None:
    """Create the task and dependency tables if they are missing."""
    # models must be imported so their tables are registered on the metadata
    from notebook_backend import models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)
