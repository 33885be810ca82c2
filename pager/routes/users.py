from __future__ import annotations

import logging
from typing import Optional, List

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from ..domain.models import User, Filters, OrderBy, RetrieveOptions
from ..errors import StoreError, QueryValidationError
from ..logs import LogContext
from ..services.table_svc import render_users
from ..services.user_svc import UserStore

router = APIRouter()
logger = logging.getLogger(__name__)

# SQLite INTEGER is a signed 64-bit value
SQLITE_INT_MAX = 2**63 - 1
SQLITE_INT_MIN = -(2**63)


class UserIn(BaseModel):
    id: Optional[int] = None  # ignored, the store assigns ids
    name: str
    age: int = Field(..., ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)
    country: str
    degree: Optional[str] = None
    status: Optional[str] = None
    site: Optional[str] = None


class OrderByIn(BaseModel):
    id: Optional[str] = None
    age: Optional[str] = None
    name: Optional[str] = None


class FiltersIn(BaseModel):
    status: Optional[str] = None
    countries: List[str] = []
    age: int = Field(0, ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)
    degree: Optional[str] = None


class PaginateRequest(BaseModel):
    page_size: int = Field(0, alias="pageSize", le=SQLITE_INT_MAX)
    page: int = Field(0, le=SQLITE_INT_MAX)
    order_by: Optional[OrderByIn] = Field(None, alias="orderBy")
    filters: Optional[FiltersIn] = None


def get_store(request: Request) -> UserStore:
    return request.app.state.store


def envelope(status_code: int, message: str = "", data: list | None = None) -> JSONResponse:
    body: dict = {"status_code": status_code}
    if message:
        body["message"] = message
    if data:
        body["data"] = data
    return JSONResponse(status_code=status_code, content=body)


def _check_positive(value: int, field: str) -> Optional[str]:
    if not value:
        return f"{field} must be specified"
    if value < 1:
        return f"{field} must be a positive integer"
    return None


@router.post("/insert")
def api_insert(body: UserIn, store: UserStore = Depends(get_store)):
    log = LogContext("INSERT_USER")
    log.set_payload({"name": body.name, "age": body.age, "country": body.country})
    user = User(
        id=None,
        name=body.name,
        age=body.age,
        country=body.country,
        degree=body.degree,
        status=body.status,
        site=body.site,
    )
    try:
        new_id = store.insert(user)
    except StoreError as e:
        log.write("ERROR", repr(e.__cause__ or e))
        return envelope(500, "Failed to insert user")
    log.set_entity("user", new_id)
    log.write("OK")
    return envelope(200, "User inserted successfully")


@router.get("/show")
def api_show(store: UserStore = Depends(get_store)):
    try:
        users = store.retrieve_all()
    except StoreError as e:
        logger.error("show failed: %r", e.__cause__ or e)
        return envelope(500, "Failed to retrieve users")
    return PlainTextResponse(render_users(users))


@router.post("/paginate")
def api_paginate(body: PaginateRequest, store: UserStore = Depends(get_store)):
    for value, field in ((body.page_size, "pageSize"), (body.page, "page")):
        problem = _check_positive(value, field)
        if problem:
            return envelope(400, problem)
    if (body.page - 1) * body.page_size > SQLITE_INT_MAX:
        return envelope(400, "page is out of range")

    log = LogContext("PAGINATE")
    log.set_payload(body.model_dump(by_alias=True, exclude_none=True))
    order_by = OrderBy(**body.order_by.model_dump()) if body.order_by else None
    filters = Filters(**body.filters.model_dump()) if body.filters else None
    try:
        users = store.paginate(body.page_size, body.page, order_by, filters)
    except QueryValidationError as e:
        log.write("REJECTED", str(e))
        return envelope(400, str(e))
    except StoreError as e:
        log.write("ERROR", repr(e.__cause__ or e))
        return envelope(500, "Failed to retrieve users")
    log.write("OK")
    return envelope(200, "Sent data successfully!", [u.to_dict() for u in users])


@router.get("/users")
def api_users(
    status: Optional[List[str]] = Query(None),
    country: Optional[List[str]] = Query(None),
    order_by: Optional[str] = None,
    order: Optional[str] = None,
    limit: int = Query(0, ge=0, le=SQLITE_INT_MAX),
    store: UserStore = Depends(get_store),
):
    opts = RetrieveOptions(
        limit=limit,
        statuses=status or [],
        countries=country or [],
        order_by=order_by,
        order=order,
    )
    try:
        users = store.retrieve(opts)
    except QueryValidationError as e:
        return envelope(400, str(e))
    except StoreError as e:
        logger.error("retrieve failed: %r", e.__cause__ or e)
        return envelope(500, "Failed to retrieve users")
    return envelope(200, "Sent data successfully!", [u.to_dict() for u in users])
