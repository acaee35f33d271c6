from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_blob(value: Any) -> Optional[bytes]:
    """Normalize MySQL BLOB values across connector implementations.

    mysql-connector can return BLOB columns as:
    - bytes
    - bytearray
    - str (when the column was written through a text protocol)
    """

    if value is None:
        return None

    if isinstance(value, bytes):
        return value

    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)

    if isinstance(value, str):
        return value.encode("latin-1")

    raise TypeError(f"Unsupported MySQL BLOB value type: {type(value)!r}")
