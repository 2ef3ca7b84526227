from fastapi import APIRouter, HTTPException

from ..errors import ItineraryError, NotFoundError, ValidationError, ConflictError
from ..logs import LogContext

router = APIRouter()

APP_NAME = "travel-planner-api"
APP_VERSION = "0.1.0"

STATUS_BY_KIND = {
    NotFoundError: 404,
    ValidationError: 400,
    ConflictError: 409,
}


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/version")
def version():
    return {"app": APP_NAME, "version": APP_VERSION}


def to_http(e: ItineraryError, log: LogContext | None = None) -> HTTPException:
    status = next((code for cls, code in STATUS_BY_KIND.items() if isinstance(e, cls)), 500)
    if log is not None:
        log.write("ERROR", str(e))
    return HTTPException(status_code=status, detail={"kind": e.kind, "message": e.message})


def not_found(what: str, ident: int) -> HTTPException:
    return to_http(NotFoundError(f"{what} {ident} not found"))
