"""
FastAPI app entry point aggregating routers under pager/routes.
Keep as `uvicorn pager.api:app`.

The users store is opened once on startup, kept on ``app.state.store``
and handed to handlers through ``Depends(get_store)``.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from .db import get_db_path
from .logs import setup_logging, LogContext
from .routes.base import APP_NAME, APP_VERSION
from .routes.users import envelope
from .services.user_svc import UserStore

logger = logging.getLogger(__name__)

app = FastAPI(title=APP_NAME, version=APP_VERSION)


@app.on_event("startup")
def on_startup():
    setup_logging()
    path = get_db_path()
    try:
        app.state.store = UserStore.create(path)
    except Exception as e:
        LogContext("STARTUP").write("ERROR", f"users_store_create_failed: {e!r} path={path}")
        raise


@app.on_event("shutdown")
def on_shutdown():
    store = getattr(app.state, "store", None)
    if store is not None:
        store.close()
        app.state.store = None


@app.exception_handler(RequestValidationError)
async def invalid_payload(request: Request, exc: RequestValidationError):
    logger.info("rejected payload path=%s errors=%s", request.url.path, exc.errors())
    return envelope(400, "Invalid request payload")


# Include routers
from .routes import base as base_routes
from .routes import users as users_routes

app.include_router(base_routes.router)
app.include_router(users_routes.router)
