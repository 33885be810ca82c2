from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from typing import Any, Iterable, List, Optional

from ..db import get_db_path, open_conn
from ..domain.models import User, Filters, OrderBy, PageWindow, RetrieveOptions
from ..domain import query_builder
from ..errors import OpenFailed, CreateFailed, InsertFailed, RetrieveFailed, DecodeFailed
from ..repository import user_repo

logger = logging.getLogger(__name__)


def _opt_text(v: Any) -> Optional[str]:
    if v is None or isinstance(v, str):
        return v
    raise TypeError(f"expected text or NULL, got {type(v).__name__}")


def _req(v: Any, typ: type):
    if type(v) is not typ:
        raise TypeError(f"expected {typ.__name__}, got {type(v).__name__}")
    return v


def decode_row(row: Iterable[Any]) -> User:
    """按列位置解码一行 (id, name, age, country, degree, status, site)。"""
    try:
        uid, name, age, country, degree, status, site = tuple(row)
        return User(
            id=_req(uid, int),
            name=_req(name, str),
            age=_req(age, int),
            country=_req(country, str),
            degree=_opt_text(degree),
            status=_opt_text(status),
            site=_opt_text(site),
        )
    except (TypeError, ValueError) as e:
        raise DecodeFailed() from e


def collect_users(cursor: sqlite3.Cursor) -> List[User]:
    """
    消费游标并转换为 User 列表。
    任意一行解码失败即整体失败（不返回部分结果）；游标在所有路径上都会关闭。
    """
    with closing(cursor):
        return [decode_row(row) for row in cursor]


class UserStore:
    """Record store + pagination facade over a single shared SQLite connection."""

    def __init__(self, conn: sqlite3.Connection, db_path: str):
        self.conn = conn
        self.db_path = db_path
        self._closed = False

    @classmethod
    def create(cls, db_path: str | None = None) -> "UserStore":
        path = db_path or get_db_path()
        try:
            conn = open_conn(path)
        except sqlite3.Error as e:
            logger.error("open db failed path=%s err=%s", path, e)
            raise OpenFailed() from e
        try:
            user_repo.ensure_schema(conn)
        except sqlite3.Error as e:
            conn.close()
            logger.error("create users table failed path=%s err=%s", path, e)
            raise CreateFailed() from e
        logger.info("users table ready path=%s", path)
        return cls(conn, path)

    def insert(self, user: User) -> int:
        try:
            return user_repo.insert_user(
                self.conn, user.name, user.age, user.country,
                user.degree, user.status, user.site,
            )
        except (sqlite3.Error, OverflowError) as e:
            logger.error("insert user failed name=%r err=%s", user.name, e)
            raise InsertFailed() from e

    def _query(self, sql: str, params: List[Any]) -> List[User]:
        logger.debug("query sql=%s params=%s", sql, params)
        try:
            cur = user_repo.select(self.conn, sql, params)
            return collect_users(cur)
        except DecodeFailed as e:
            logger.error("decode user row failed err=%s", e.__cause__)
            raise
        except (sqlite3.Error, OverflowError) as e:
            logger.error("retrieve users failed err=%s", e)
            raise RetrieveFailed() from e

    def retrieve_all(self) -> List[User]:
        return self._query(*query_builder.build_select_all())

    def retrieve(self, options: RetrieveOptions | None = None) -> List[User]:
        # 参数校验错误（InvalidOrderDirection 等）在执行 SQL 前直接抛出
        return self._query(*query_builder.build_retrieve_query(options))

    def paginate(
        self,
        page_size: int,
        page: int,
        order_by: OrderBy | None = None,
        filters: Filters | None = None,
    ) -> List[User]:
        # page/page_size 的合法性由调用方（HTTP 边界）负责
        window = PageWindow(page=page, page_size=page_size)
        sql, params = query_builder.build_page_query(filters, order_by, window)
        return self._query(sql, params)

    def count(self) -> int:
        try:
            return user_repo.count_all(self.conn)
        except sqlite3.Error as e:
            raise RetrieveFailed() from e

    def close(self):
        if not self._closed:
            self.conn.close()
            self._closed = True

    def __enter__(self) -> "UserStore":
        return self

    def __exit__(self, *exc):
        self.close()
