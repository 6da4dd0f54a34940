from fastapi import Header, HTTPException, Request
from fastapi.responses import JSONResponse
import logging

from delivery.domain.enums import ErrorKind
from delivery.domain.schemas import CoreOutput

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNAUTHORIZED: 403,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INVALID: 400,
    ErrorKind.INTERNAL: 500,
}


def get_orchestrator(request: Request):
    """The orchestrators live in app.state (set by the composition root)."""
    return request.app.state.orchestrator


def get_catalog(request: Request):
    return request.app.state.catalog


def get_current_actor(request: Request, x_user_id: int | None = Header(default=None)):
    """
    The upstream auth gateway authenticates the caller and forwards its id
    in ``X-User-Id``. The id is trusted as-is.
    """
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    actor = request.app.state.user_repo.get_user(x_user_id)
    if actor is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    return actor


def respond(output: CoreOutput, success_code: int = 200) -> JSONResponse:
    if output.ok:
        status_code = success_code
    else:
        status_code = ERROR_STATUS_CODES[output.error_kind]
        logger.info(f"Request refused ({output.error_kind.value}): {output.error}")
    return JSONResponse(status_code=status_code, content=output.model_dump(mode="json"))
