import logging

from pager.domain.models import User
from pager.logs import LogContext
from pager.services.table_svc import HEADERS, render_users, users_frame


def test_render_users_table():
    users = [
        User(1, "Alice", 30, "France", "MSc", "active", "alice.example"),
        User(2, "Bob", 25, "Spain"),
    ]
    text = render_users(users)
    lines = text.splitlines()
    assert len(lines) == 3
    for h in HEADERS:
        assert h in lines[0]
    assert "Alice" in lines[1] and "alice.example" in lines[1]
    assert "Bob" in lines[2] and "None" not in lines[2]


def test_render_empty_is_header_only():
    text = render_users([])
    assert text.splitlines() == ["  ".join(HEADERS)]


def test_users_frame_blanks_missing_optionals():
    df = users_frame([User(7, "Dana", 25, "france")])
    assert list(df.columns) == HEADERS
    assert df.iloc[0]["Degree"] == ""
    assert df.iloc[0]["ID"] == 7


def test_log_context_ok(caplog):
    log = LogContext("PAGINATE")
    log.set_payload({"pageSize": 1})
    log.set_entity("user", 3)
    with caplog.at_level(logging.INFO, logger="pager.oplog"):
        rec = log.write("OK")
    assert rec["action"] == "PAGINATE"
    assert rec["entity_id"] == "3"
    assert rec["latency_ms"] >= 0
    assert "action=PAGINATE" in caplog.text
    assert "result=OK" in caplog.text


def test_log_context_error_level(caplog):
    with caplog.at_level(logging.INFO, logger="pager.oplog"):
        LogContext("INSERT_USER").write("ERROR", "boom")
    assert caplog.records[-1].levelno == logging.ERROR
    assert "err_msg=boom" in caplog.text
