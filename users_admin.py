#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
User pager admin (SQLite + FastAPI)

Commands:
  serve               Run the HTTP API (POST /insert, GET /show, POST /paginate, GET /users)
  init                Create the users table if it does not exist
  add-user            Insert one user
  show                Print every user as a table
  page                Print one page of users, with optional filters and ordering

Notes:
- The database path comes from PAGER_DB_PATH, then config.yaml (db_path), then ./users.db.
- --order-by takes column:direction pairs, e.g. --order-by age:asc name:desc.
"""

import argparse
import logging
import sys

from pager.config import get_port
from pager.db import get_db_path
from pager.domain.models import User, Filters, OrderBy
from pager.errors import StoreError, QueryValidationError
from pager.logs import setup_logging
from pager.services.table_svc import render_users
from pager.services.user_svc import UserStore

logger = logging.getLogger("users_admin")


# ---------------- Helpers ----------------

def open_store(args) -> UserStore:
    return UserStore.create(args.db or get_db_path())


def parse_order_by(pairs) -> OrderBy:
    order = OrderBy()
    for pair in pairs or []:
        col, _, direction = pair.partition(":")
        if col not in ("id", "age", "name"):
            raise SystemExit(f"Unsupported order column: {col}")
        setattr(order, col, direction or "asc")
    return order


# ---------------- Commands ----------------

def cmd_serve(args):
    import uvicorn

    port = get_port(args.port)
    logger.info("serving on %s:%d", args.host, port)
    uvicorn.run("pager.api:app", host=args.host, port=port)


def cmd_init(args):
    with open_store(args) as store:
        print(f"users table ready at {store.db_path} ({store.count()} rows)")


def cmd_add_user(args):
    user = User(
        id=None,
        name=args.name,
        age=args.age,
        country=args.country,
        degree=args.degree,
        status=args.status,
        site=args.site,
    )
    with open_store(args) as store:
        new_id = store.insert(user)
    print(f"inserted user id={new_id}")


def cmd_show(args):
    with open_store(args) as store:
        users = store.retrieve_all()
    sys.stdout.write(render_users(users))


def cmd_page(args):
    filters = Filters(
        status=args.status,
        countries=args.country or [],
        age=args.age or 0,
        degree=args.degree,
    )
    order_by = parse_order_by(args.order_by)
    with open_store(args) as store:
        users = store.paginate(args.page_size, args.page, order_by, filters)
    sys.stdout.write(render_users(users))


# ---------------- Entry ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="User pager (SQLite + FastAPI)")
    parser.add_argument("--db", default=None, help="path to the SQLite file")
    sub = parser.add_subparsers()

    p_serve = sub.add_parser("serve", help="run the HTTP API")
    p_serve.add_argument("--port", type=int, default=None, help="Set the port of the server (default 8080)")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.set_defaults(func=cmd_serve)

    p_init = sub.add_parser("init", help="create the users table")
    p_init.set_defaults(func=cmd_init)

    p_add = sub.add_parser("add-user", help="insert a user")
    p_add.add_argument("--name", required=True)
    p_add.add_argument("--age", required=True, type=int)
    p_add.add_argument("--country", required=True)
    p_add.add_argument("--degree", required=False)
    p_add.add_argument("--status", required=False)
    p_add.add_argument("--site", required=False)
    p_add.set_defaults(func=cmd_add_user)

    p_show = sub.add_parser("show", help="print all users")
    p_show.set_defaults(func=cmd_show)

    p_page = sub.add_parser("page", help="print one page of users")
    p_page.add_argument("--page-size", required=True, type=int)
    p_page.add_argument("--page", required=True, type=int)
    p_page.add_argument("--order-by", nargs="*", help="column:direction, e.g. age:asc")
    p_page.add_argument("--status", required=False)
    p_page.add_argument("--country", nargs="*")
    p_page.add_argument("--age", type=int, required=False)
    p_page.add_argument("--degree", required=False)
    p_page.set_defaults(func=cmd_page)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging()
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    if getattr(args, "page_size", 1) < 1 or getattr(args, "page", 1) < 1:
        parser.error("--page-size and --page must be >= 1")
    try:
        args.func(args)
    except QueryValidationError as e:
        parser.error(str(e))
    except StoreError as e:
        logger.error("%s (%r)", e, e.__cause__)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
