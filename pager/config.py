from __future__ import annotations

# pager/config.py
import os
import yaml

# 配置来源优先级：环境变量 > config.yaml > 内置默认值
_PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))

DEFAULTS = {
    "db_path": os.path.join(".", "users.db"),  # 相对当前工作目录
    "port": 8080,
    "log_level": "INFO",
}


def config_path() -> str:
    return os.environ.get("PAGER_CONFIG", os.path.join(_PROJECT_ROOT, "config.yaml"))


def read_config_yaml(path: str | None = None) -> dict:
    cfg_path = path or config_path()
    if not os.path.exists(cfg_path):
        return {}
    with open(cfg_path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"config file must hold a mapping: {cfg_path}")
    out = {}
    for k in ("db_path", "test_db_path", "log_level"):
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    if cfg.get("port") is not None:
        out["port"] = int(cfg["port"])
    return out


def is_test_env() -> bool:
    return (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)


def get_port(cli_port: int | None = None) -> int:
    if cli_port:
        return int(cli_port)
    env_port = os.environ.get("PAGER_PORT")
    if env_port:
        return int(env_port)
    return int(read_config_yaml().get("port", DEFAULTS["port"]))


def get_log_level() -> str:
    level = os.environ.get("PAGER_LOG_LEVEL") or read_config_yaml().get("log_level") or DEFAULTS["log_level"]
    return level.upper()
