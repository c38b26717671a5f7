"""Engine singleton. Created once at import."""
from __future__ import annotations
from pathlib import Path
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine
from churchdash.config import settings

_connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, echo=False, connect_args=_connect_args)


def init_db(bind: Engine | None = None) -> None:
    """Create all tables on *bind* (default: the singleton). Safe to call repeatedly."""
    import churchdash.models  # noqa: F401   # registers ORM table mappers
    bind = bind or engine
    if bind.dialect.name == "sqlite" and bind.url.database not in (None, "", ":memory:"):
        Path(bind.url.database).parent.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(bind)
