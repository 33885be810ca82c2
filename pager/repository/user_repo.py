from __future__ import annotations

from sqlite3 import Connection, Cursor
from typing import Any, Sequence


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            age INTEGER NOT NULL,
            country TEXT NOT NULL,
            degree TEXT,
            status TEXT,
            site TEXT
        )
        """
    )


def insert_user(
    conn: Connection,
    name: str,
    age: int,
    country: str,
    degree: str | None,
    status: str | None,
    site: str | None,
) -> int:
    cur = conn.execute(
        "INSERT INTO users(name, age, country, degree, status, site) VALUES(?,?,?,?,?,?)",
        (name, age, country, degree, status, site),
    )
    return int(cur.lastrowid)


def select(conn: Connection, sql: str, params: Sequence[Any] = ()) -> Cursor:
    """Run a built SELECT and hand back the open cursor; the caller closes it."""
    return conn.execute(sql, list(params))


def count_all(conn: Connection) -> int:
    return int(conn.execute("SELECT COUNT(1) AS c FROM users").fetchone()["c"])
