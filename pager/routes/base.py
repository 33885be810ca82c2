from fastapi import APIRouter, Depends

from ..errors import StoreError
from ..services.user_svc import UserStore
from .users import get_store, envelope

APP_NAME = "user-pager-api"
APP_VERSION = "0.1.0"

router = APIRouter()


@router.get("/health")
def health(store: UserStore = Depends(get_store)):
    """Liveness plus a row count, so a dead users store shows up as 503."""
    try:
        users = store.count()
    except StoreError:
        return envelope(503, "users store unavailable")
    return {"status": "ok", "users": users}


@router.get("/version")
def version():
    return {"app": APP_NAME, "version": APP_VERSION}
