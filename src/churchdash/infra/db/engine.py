"""Re-export the singleton engine from churchdash.db and register WAL pragmas."""
from sqlalchemy import event
from churchdash.db import engine          # singleton; created once at churchdash.db import
import churchdash.models  # noqa: F401   # registers the ORM table mappers


def _set_wal_mode(dbapi_conn, _):
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA journal_mode=WAL")
    cur.execute("PRAGMA synchronous=NORMAL")
    cur.close()


if engine.dialect.name == "sqlite":
    event.listen(engine, "connect", _set_wal_mode)

__all__ = ["engine"]
