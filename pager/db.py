from __future__ import annotations

# pager/db.py
import sqlite3
import os

from .config import DEFAULTS, read_config_yaml, is_test_env

# DB 路径解析顺序：
# 1) 环境变量 PAGER_DB_PATH（最高优先级）
# 2) config.yaml 的 test_db_path（当检测到测试环境时）
# 3) config.yaml 的 db_path（生产默认）
# 4) 兜底：当前工作目录下的 ./users.db


def get_db_path() -> str:
    env_path = os.environ.get("PAGER_DB_PATH")
    cfg = read_config_yaml()
    cfg_db = cfg.get("db_path")
    cfg_test = cfg.get("test_db_path")

    if env_path:
        return env_path
    if is_test_env() and cfg_test:
        return cfg_test
    if cfg_db:
        return cfg_db
    return DEFAULTS["db_path"]


def open_conn(db_path: str) -> sqlite3.Connection:
    """
    打开一个可被多个请求共享的 SQLite 连接。
    isolation_level=None 即自动提交；并发安全交给 SQLite 自身。
    """
    conn = sqlite3.connect(
        db_path,
        check_same_thread=False,
        isolation_level=None,
    )
    conn.row_factory = sqlite3.Row
    return conn

