import pytest

from pager import config
from pager.db import get_db_path
from pager.services.user_svc import UserStore

import users_admin


def _write_cfg(tmp_path, monkeypatch, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    monkeypatch.setenv("PAGER_CONFIG", str(path))
    return path


def test_db_path_env_wins(tmp_path, monkeypatch):
    _write_cfg(tmp_path, monkeypatch, "db_path: /srv/users.db\n")
    monkeypatch.setenv("PAGER_DB_PATH", "/tmp/env.db")
    assert get_db_path() == "/tmp/env.db"


def test_db_path_prefers_test_path_under_pytest(tmp_path, monkeypatch):
    _write_cfg(tmp_path, monkeypatch, "db_path: /srv/users.db\ntest_db_path: /tmp/test-users.db\n")
    monkeypatch.delenv("PAGER_DB_PATH", raising=False)
    assert get_db_path() == "/tmp/test-users.db"


def test_db_path_default_without_config(monkeypatch):
    monkeypatch.delenv("PAGER_DB_PATH", raising=False)
    assert get_db_path() == config.DEFAULTS["db_path"] == "./users.db"


def test_port_resolution(tmp_path, monkeypatch):
    assert config.get_port() == 8080
    _write_cfg(tmp_path, monkeypatch, "port: 9000\n")
    assert config.get_port() == 9000
    monkeypatch.setenv("PAGER_PORT", "9100")
    assert config.get_port() == 9100
    assert config.get_port(9200) == 9200


def test_log_level(tmp_path, monkeypatch):
    _write_cfg(tmp_path, monkeypatch, "log_level: debug\n")
    assert config.get_log_level() == "DEBUG"


def test_config_must_be_mapping(tmp_path, monkeypatch):
    _write_cfg(tmp_path, monkeypatch, "- just\n- a list\n")
    with pytest.raises(ValueError):
        config.read_config_yaml()


def test_cli_add_and_page(tmp_path, capsys):
    db = str(tmp_path / "cli.db")
    assert users_admin.main(["--db", db, "init"]) == 0
    assert users_admin.main(["--db", db, "add-user", "--name", "Alice", "--age", "30", "--country", "France"]) == 0
    assert users_admin.main(["--db", db, "add-user", "--name", "Bob", "--age", "25", "--country", "Spain"]) == 0
    capsys.readouterr()

    assert users_admin.main(["--db", db, "page", "--page-size", "1", "--page", "1", "--order-by", "age:asc"]) == 0
    out = capsys.readouterr().out
    assert "Bob" in out and "Alice" not in out

    assert users_admin.main(["--db", db, "show"]) == 0
    out = capsys.readouterr().out
    assert "Alice" in out and "Bob" in out

    with UserStore.create(db) as store:
        assert store.count() == 2


def test_cli_page_filters(tmp_path, capsys):
    db = str(tmp_path / "cli.db")
    users_admin.main(["--db", db, "add-user", "--name", "Alice", "--age", "30", "--country", "France"])
    users_admin.main(["--db", db, "add-user", "--name", "Bob", "--age", "25", "--country", "Spain"])
    capsys.readouterr()
    users_admin.main(["--db", db, "page", "--page-size", "5", "--page", "1", "--country", "FRANCE"])
    out = capsys.readouterr().out
    assert "Alice" in out and "Bob" not in out


def test_cli_invalid_direction_exits(tmp_path):
    db = str(tmp_path / "cli.db")
    with pytest.raises(SystemExit):
        users_admin.main(["--db", db, "page", "--page-size", "1", "--page", "1", "--order-by", "age:up"])


def test_cli_rejects_page_zero(tmp_path):
    with pytest.raises(SystemExit):
        users_admin.main(["--db", str(tmp_path / "cli.db"), "page", "--page-size", "1", "--page", "0"])


def test_cli_open_failure_returns_1(tmp_path):
    assert users_admin.main(["--db", str(tmp_path / "nope" / "cli.db"), "show"]) == 1
