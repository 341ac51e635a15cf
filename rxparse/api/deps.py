import sqlite3
from functools import lru_cache

from rxparse.db.db_config import get_sqlite_connection

@lru_cache(maxsize=1)
def _shared_connection() -> sqlite3.Connection:
    return get_sqlite_connection()

def get_db() -> sqlite3.Connection:
    return _shared_connection()
