from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Callable, Iterator, Optional, TypeVar

import mysql.connector

from .connection import DatabaseConnection

T = TypeVar("T")

DUPLICATE_KEY_ERRNO = 1062


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[tuple[Any, Any]]:
    """One short-lived connection per unit of work: commit on exit, roll back on error."""

    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
    except Exception:
        conn.rollback()
        raise
    else:
        conn.commit()
    finally:
        cur.close()
        conn.close()


def is_duplicate_key(exc: mysql.connector.Error) -> bool:
    return getattr(exc, "errno", None) == DUPLICATE_KEY_ERRNO


def fetch_one(cur, convert: Callable[[dict], T]) -> Optional[T]:
    row = cur.fetchone()
    return convert(row) if row else None


def fetch_all(cur, convert: Callable[[dict], T]) -> list[T]:
    return [convert(row) for row in cur.fetchall() or ()]


def load_json(value: Any) -> Any:
    """JSON columns arrive as str, bytes or already-decoded objects depending on the driver."""

    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        return json.loads(value)
    return value


def to_time(value: Any) -> Optional[time]:
    # TIME columns come back as timedelta (offset from midnight).
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
        return time(seconds // 3600, seconds % 3600 // 60, seconds % 60)
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("ascii")
    if isinstance(value, str):
        return time.fromisoformat(value.strip())
    raise TypeError(f"Unsupported TIME value: {value!r}")
